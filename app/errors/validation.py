"""Request validation error handling for FastAPI."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import error_envelope
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


def format_validation_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """
    Flatten FastAPI validation errors into ``{field, message, type}`` items.

    The first ``loc`` element names the request part (body, query, path)
    and is dropped.
    """
    return [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Render request parsing failures with the standard failure envelope.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with status 400 and formatted validation errors.
    """
    errors = format_validation_errors(cast(RequestValidationError, exc))

    logger.warning(
        "Request validation failed",
        ip=host(request),
        path=request.url.path,
        errors=errors,
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content=error_envelope("Validation failed", "BlogValidationError", errors=errors),
    )
