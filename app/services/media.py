"""
Cover image upload service.

This module validates uploaded cover images and hands them to the
configured asset store. Removal of stored images is best-effort: the
caller never fails because an asset could not be released.
"""

from io import BytesIO

from PIL import Image

from app.configs.settings import settings
from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    UnsupportedImageTypeError,
    UploadError,
)
from app.monitoring import get_logger
from app.schemas.blog import ImageUpload
from app.services.storage import AssetStore, get_storage_service

logger = get_logger(__name__)


class MediaService:
    """
    Service for managing blog cover images.

    Handles image validation and storage operations.
    """

    def __init__(self, storage: AssetStore | None = None) -> None:
        """
        Initialize the media service.

        Args:
            storage: Optional asset store instance. If not provided,
                    the configured storage service will be used.
        """
        self.storage = storage or get_storage_service()
        self.image_max_size_bytes = settings.MEDIA_IMAGE_MAX_SIZE_MB * 1024 * 1024
        self.image_allowed_types = settings.MEDIA_IMAGE_ALLOWED_TYPES

    def _validate_image_type(self, content_type: str | None) -> str:
        if not content_type or content_type not in self.image_allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.image_allowed_types,
            )
        return content_type

    def _validate_image_size(self, data: bytes) -> None:
        if not data:
            raise InvalidImageError("Uploaded image is empty")

        actual_size = len(data)
        if actual_size > self.image_max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    def _validate_image_content(self, data: bytes) -> None:
        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
        except Exception as e:
            mssg = f"Invalid or corrupted image file: {e!s}"
            raise InvalidImageError(mssg) from e

    async def upload_cover_image(self, upload: ImageUpload) -> str:
        """
        Validate and store a cover image.

        Args:
            upload: Raw image received with the request

        Returns:
            str: URL of the stored image

        Raises:
            UploadError: If validation fails or the asset store errors
        """
        content_type = self._validate_image_type(upload.content_type)
        self._validate_image_size(upload.data)
        self._validate_image_content(upload.data)

        try:
            url = await self.storage.store(upload.data, content_type)
        except UploadError:
            raise
        except Exception as e:
            logger.exception("Asset store upload failed")
            raise UploadError(detail=f"Error uploading image: {e}") from e

        logger.info("Cover image stored", url=url, size=len(upload.data))
        return url

    def is_managed(self, url: str | None) -> bool:
        """Tell whether ``url`` lives in the managed asset store."""
        return bool(url) and self.storage.owns(url)

    async def release(self, url: str | None) -> bool:
        """
        Delete a managed cover image, logging instead of raising on failure.

        External URLs are left alone.

        Args:
            url: Cover image URL

        Returns:
            bool: True if the store reported a deletion
        """
        if not url or not self.is_managed(url):
            return False

        try:
            deleted = await self.storage.delete(url)
        except Exception:
            logger.warning("Failed to release cover image", url=url, exc_info=True)
            return False

        if not deleted:
            logger.info("Cover image already absent from store", url=url)
        return deleted
