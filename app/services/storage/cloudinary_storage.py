"""
Cloudinary storage implementation.

This module provides a Cloudinary-based asset store for production
use. Offers automatic image optimization and CDN delivery.
"""

import asyncio
from functools import partial
from pathlib import PurePosixPath
from re import fullmatch
from urllib.parse import urlparse
from uuid import uuid4

import cloudinary
import cloudinary.uploader

from app.configs.settings import settings
from app.errors.upload import StorageError

CLOUDINARY_HOST_SUFFIX = "cloudinary.com"


def public_id_from_url(url: str) -> str | None:
    """
    Derive the Cloudinary public ID from a delivery URL.

    ``https://res.cloudinary.com/<cloud>/image/upload/v123/folder/name.jpg``
    maps to ``folder/name``.

    Args:
        url: Cloudinary delivery URL

    Returns:
        str | None: Public ID, or None if the URL has no upload segment
    """
    parts = urlparse(url).path.split("/")
    if "upload" not in parts:
        return None

    tail = parts[parts.index("upload") + 1 :]
    if tail and fullmatch(r"v\d+", tail[0]):
        tail = tail[1:]
    if not tail:
        return None

    return str(PurePosixPath(*tail).with_suffix(""))


class CloudinaryStorage:
    """
    Cloudinary storage implementation.

    Stores cover images in Cloudinary with automatic quality and
    format selection.
    """

    def __init__(self) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self.folder = settings.CLOUDINARY_FOLDER

    async def store(self, data: bytes, content_type: str) -> str:
        """
        Upload a cover image to Cloudinary.

        Args:
            data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            str: Cloudinary secure URL

        Raises:
            StorageError: If Cloudinary does not return a delivery URL
        """
        # Run blocking Cloudinary upload in thread pool
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None,
            partial(
                cloudinary.uploader.upload,
                data,
                public_id=f"{self.folder}/{uuid4()}",
                overwrite=False,
                resource_type="image",
                transformation=[{"quality": "auto:good", "fetch_format": "auto"}],
            ),
        )

        if not (url := result.get("secure_url")):
            mssg = "Cloudinary upload returned no URL"
            raise StorageError(mssg)
        return url

    async def delete(self, url: str) -> bool:
        """
        Delete a cover image from Cloudinary.

        Args:
            url: Cloudinary URL returned by ``store``

        Returns:
            bool: True if deletion was successful, False otherwise
        """
        public_id = public_id_from_url(url)
        if public_id is None:
            return False

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None,
            partial(cloudinary.uploader.destroy, public_id, resource_type="image"),
        )
        return result.get("result") == "ok"

    def owns(self, url: str) -> bool:
        """Cloudinary-hosted URLs are managed by this store."""
        netloc = urlparse(url).netloc.lower()
        return netloc == CLOUDINARY_HOST_SUFFIX or netloc.endswith(f".{CLOUDINARY_HOST_SUFFIX}")
