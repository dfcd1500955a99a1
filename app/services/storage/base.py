"""
Base storage protocol for cover image assets.

This module defines the interface the blog service needs from an asset
store, allowing different backends (local, cloudinary, ...).
"""

from abc import abstractmethod
from typing import Protocol


class AssetStore(Protocol):
    """
    Protocol defining the interface for asset stores.

    All storage implementations must implement these methods
    to ensure consistent behavior across different backends.
    """

    @abstractmethod
    async def store(self, data: bytes, content_type: str) -> str:
        """
        Store an image and return its public URL.

        Args:
            data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            str: URL of the stored asset
        """
        ...

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """
        Delete an asset previously returned by ``store``.

        Args:
            url: Asset URL

        Returns:
            bool: True if an asset was removed, False if nothing was there
        """
        ...

    @abstractmethod
    def owns(self, url: str) -> bool:
        """
        Tell whether ``url`` points at an asset managed by this store.

        Args:
            url: Asset URL

        Returns:
            bool: True for managed assets, False for external URLs
        """
        ...
