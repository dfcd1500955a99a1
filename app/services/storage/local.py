"""
Local filesystem storage implementation.

This module provides a local asset store for development and testing
purposes. Files are stored under the configured uploads directory and
served from ``/uploads``.
"""

from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os

from app.configs.settings import settings
from app.errors.upload import StorageError

URL_PREFIX = "/uploads/blog_images/"

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class LocalStorage:
    """
    Local filesystem storage implementation.

    Stores cover images in ``<UPLOADS_DIR>/blog_images``. Suitable for
    development and testing.
    """

    def __init__(self, uploads_dir: Path | None = None) -> None:
        """Initialize local storage with configured paths."""
        self.uploads_dir = uploads_dir or settings.UPLOADS_DIR
        self.base_path = self.uploads_dir / "blog_images"
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _path_for(self, url: str) -> Path | None:
        name = url.removeprefix(URL_PREFIX)
        # Reject anything that could escape the images directory
        if not name or "/" in name or "\\" in name or name.startswith("."):
            return None
        return self.base_path / name

    async def store(self, data: bytes, content_type: str) -> str:
        """
        Write a cover image to the local filesystem.

        Args:
            data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            str: URL path to the stored image

        Raises:
            StorageError: If the file cannot be written
        """
        file_name = f"{uuid4()}.{EXTENSIONS.get(content_type, 'jpg')}"

        try:
            async with aiofiles.open(self.base_path / file_name, "wb") as f:
                await f.write(data)
        except OSError as e:
            mssg = f"Failed to write image: {e.strerror}"
            raise StorageError(mssg) from e

        return f"{URL_PREFIX}{file_name}"

    async def delete(self, url: str) -> bool:
        """
        Delete a cover image from the local filesystem.

        Args:
            url: URL path returned by ``store``

        Returns:
            bool: True if a file was removed, False otherwise
        """
        file_path = self._path_for(url) if self.owns(url) else None
        if file_path is None or not file_path.exists():
            return False

        await aiofiles.os.remove(file_path)
        return True

    def owns(self, url: str) -> bool:
        """URLs under ``/uploads/blog_images/`` are managed by this store."""
        return url.startswith(URL_PREFIX)
