"""
Blog use-case errors.

These are raised by the service layer before (or instead of) any write,
so a request that fails with one of them leaves no partial state behind.
"""

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class BlogValidationError(BaseAppError):
    """Missing or malformed input the caller can fix."""

    def __init__(self, detail: str = "Invalid blog data") -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


class NotFoundError(BaseAppError):
    """A referenced resource does not exist."""

    def __init__(self, resource: str) -> None:
        super().__init__(
            detail=f"{resource.capitalize()} not found",
            status_code=HTTP_404_NOT_FOUND,
        )
        self.resource = resource


class ConflictError(BaseAppError):
    """A unique field already holds the submitted value."""

    def __init__(self, field: str) -> None:
        super().__init__(
            detail=f"{field.capitalize()} already exists",
            status_code=HTTP_409_CONFLICT,
        )
        self.field = field


blog_exception_handler = create_exception_handler(logger)
