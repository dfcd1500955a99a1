from app.errors.base import BaseAppError, create_exception_handler, error_envelope
from app.errors.blog import (
    BlogValidationError,
    ConflictError,
    NotFoundError,
    blog_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    database_exception_handler,
)
from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    StorageError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from app.errors.validation import validation_exception_handler

__all__ = [
    "BaseAppError",
    "BlogValidationError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "ImageTooLargeError",
    "InvalidImageError",
    "NotFoundError",
    "StorageError",
    "UnsupportedImageTypeError",
    "UploadError",
    "blog_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_envelope",
    "upload_exception_handler",
    "validation_exception_handler",
]
