"""Service layer."""

from app.services.blog import BlogService
from app.services.category import CategoryValidator
from app.services.media import MediaService

__all__ = ["BlogService", "CategoryValidator", "MediaService"]
