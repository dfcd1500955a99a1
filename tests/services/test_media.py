# tests/services/test_media.py
"""Tests for app/services/media.py module."""

from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    UnsupportedImageTypeError,
    UploadError,
)
from app.schemas import ImageUpload
from app.services.media import MediaService

MANAGED_URL = "https://res.cloudinary.com/demo/image/upload/v1/blog_images/new.jpg"


class TestUploadCoverImage:
    """Tests for MediaService.upload_cover_image."""

    @pytest.mark.asyncio
    async def test_stores_valid_jpeg(self, storage: MagicMock, valid_jpeg_bytes: bytes) -> None:
        service = MediaService(storage=storage)

        url = await service.upload_cover_image(
            ImageUpload(data=valid_jpeg_bytes, content_type="image/jpeg"),
        )

        assert url == MANAGED_URL
        storage.store.assert_awaited_once_with(valid_jpeg_bytes, "image/jpeg")

    @pytest.mark.asyncio
    async def test_stores_valid_png(self, storage: MagicMock, valid_png_bytes: bytes) -> None:
        service = MediaService(storage=storage)
        await service.upload_cover_image(ImageUpload(data=valid_png_bytes, content_type="image/png"))
        storage.store.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unsupported_type(self, storage: MagicMock) -> None:
        service = MediaService(storage=storage)

        with pytest.raises(UnsupportedImageTypeError):
            await service.upload_cover_image(ImageUpload(data=b"GIF89a", content_type="image/gif"))

        storage.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_type(self, storage: MagicMock, valid_jpeg_bytes: bytes) -> None:
        service = MediaService(storage=storage)
        with pytest.raises(UnsupportedImageTypeError):
            await service.upload_cover_image(ImageUpload(data=valid_jpeg_bytes))

    @pytest.mark.asyncio
    async def test_empty_file(self, storage: MagicMock) -> None:
        service = MediaService(storage=storage)
        with pytest.raises(InvalidImageError, match="empty"):
            await service.upload_cover_image(ImageUpload(data=b"", content_type="image/jpeg"))

    @pytest.mark.asyncio
    async def test_too_large(self, storage: MagicMock, valid_jpeg_bytes: bytes) -> None:
        service = MediaService(storage=storage)
        service.image_max_size_bytes = len(valid_jpeg_bytes) - 1

        with pytest.raises(ImageTooLargeError):
            await service.upload_cover_image(
                ImageUpload(data=valid_jpeg_bytes, content_type="image/jpeg"),
            )

    @pytest.mark.asyncio
    async def test_corrupted_content(self, storage: MagicMock) -> None:
        service = MediaService(storage=storage)

        with pytest.raises(InvalidImageError, match="Invalid or corrupted"):
            await service.upload_cover_image(
                ImageUpload(data=b"not a valid image content", content_type="image/jpeg"),
            )

        storage.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_decompression_bomb_is_invalid(
        self,
        storage: MagicMock,
        valid_png_bytes: bytes,
    ) -> None:
        service = MediaService(storage=storage)

        with (
            patch.object(Image, "MAX_IMAGE_PIXELS", 100),
            pytest.raises(InvalidImageError, match="Invalid or corrupted"),
        ):
            await service.upload_cover_image(
                ImageUpload(data=valid_png_bytes, content_type="image/png"),
            )

        storage.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_wrapped(
        self,
        storage: MagicMock,
        valid_jpeg_bytes: bytes,
    ) -> None:
        storage.store.side_effect = ConnectionError("network unreachable")
        service = MediaService(storage=storage)

        with pytest.raises(UploadError, match="network unreachable") as exc_info:
            await service.upload_cover_image(
                ImageUpload(data=valid_jpeg_bytes, content_type="image/jpeg"),
            )

        assert exc_info.value.status_code == 500


class TestRelease:
    """Tests for MediaService.release."""

    @pytest.mark.asyncio
    async def test_deletes_managed(self, storage: MagicMock) -> None:
        assert await MediaService(storage=storage).release(MANAGED_URL) is True
        storage.delete.assert_awaited_once_with(MANAGED_URL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [None, "", "https://images.example.com/cover.jpg"])
    async def test_ignores_unmanaged(self, storage: MagicMock, url: str | None) -> None:
        assert await MediaService(storage=storage).release(url) is False
        storage.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_error_is_logged_not_raised(self, storage: MagicMock) -> None:
        storage.delete.side_effect = RuntimeError("cloudinary down")
        assert await MediaService(storage=storage).release(MANAGED_URL) is False

    @pytest.mark.asyncio
    async def test_already_absent(self, storage: MagicMock) -> None:
        storage.delete.return_value = False
        assert await MediaService(storage=storage).release(MANAGED_URL) is False


def test_is_managed(storage: MagicMock) -> None:
    service = MediaService(storage=storage)
    assert service.is_managed(MANAGED_URL) is True
    assert service.is_managed("https://images.example.com/cover.jpg") is False
    assert service.is_managed(None) is False
