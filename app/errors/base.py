from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from app.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def error_envelope(detail: str, error: str, **extra: object) -> dict[str, object]:
    """Build the failure envelope shared by every error response."""
    return {"success": False, "message": detail, "error": error, **extra}


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")

        logger.warning(
            "Request failed",
            detail=detail,
            status_code=status_code,
            ip=host(request),
            path=request.url.path,
        )

        # Public attributes of the exception (e.g. resource, field) travel with the body
        extra = {
            k: v
            for k, v in exc.__dict__.items()
            if k not in ("status_code", "detail") and not k.startswith("_")
        }
        content = error_envelope(detail, type(exc).__name__, **extra)

        return ORJSONResponse(content=content, status_code=status_code)

    return handler
