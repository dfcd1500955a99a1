"""
Storage services package.

This package provides asset stores for blog cover images,
with support for local filesystem and Cloudinary.
"""

from app.configs.settings import settings
from app.services.storage.base import AssetStore
from app.services.storage.cloudinary_storage import CloudinaryStorage
from app.services.storage.local import LocalStorage


def get_storage_service() -> AssetStore:
    """
    Get the configured asset store.

    Returns the appropriate storage implementation based on
    the STORAGE_PROVIDER setting.

    Returns:
        AssetStore: Configured storage service instance
    """
    if settings.STORAGE_PROVIDER == "cloudinary":
        return CloudinaryStorage()
    return LocalStorage()


__all__ = [
    "AssetStore",
    "CloudinaryStorage",
    "LocalStorage",
    "get_storage_service",
]
