# tests/services/test_storage.py
"""Tests for the asset store implementations."""

from pathlib import Path
from unittest.mock import patch

import pytest

from app.errors.upload import StorageError
from app.services.storage import CloudinaryStorage, LocalStorage, get_storage_service
from app.services.storage.cloudinary_storage import public_id_from_url
from app.services.storage.local import URL_PREFIX


class TestLocalStorage:
    """Tests for LocalStorage."""

    @pytest.fixture
    def local(self, tmp_path: Path) -> LocalStorage:
        return LocalStorage(uploads_dir=tmp_path)

    @pytest.mark.asyncio
    async def test_store_writes_file(self, local: LocalStorage, tmp_path: Path) -> None:
        url = await local.store(b"png-bytes", "image/png")

        assert url.startswith(URL_PREFIX)
        assert url.endswith(".png")
        stored = tmp_path / "blog_images" / url.removeprefix(URL_PREFIX)
        assert stored.read_bytes() == b"png-bytes"

    @pytest.mark.asyncio
    async def test_delete_removes_file(self, local: LocalStorage, tmp_path: Path) -> None:
        url = await local.store(b"jpeg-bytes", "image/jpeg")

        assert await local.delete(url) is True
        assert not (tmp_path / "blog_images" / url.removeprefix(URL_PREFIX)).exists()

    @pytest.mark.asyncio
    async def test_store_write_failure(self, local: LocalStorage, tmp_path: Path) -> None:
        (tmp_path / "blog_images").rmdir()

        with pytest.raises(StorageError, match="Failed to write image"):
            await local.store(b"bytes", "image/jpeg")

    @pytest.mark.asyncio
    async def test_delete_missing_is_false(self, local: LocalStorage) -> None:
        assert await local.delete(f"{URL_PREFIX}gone.jpg") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            f"{URL_PREFIX}../secret.txt",
            f"{URL_PREFIX}nested/a.jpg",
            f"{URL_PREFIX}.hidden",
            "https://images.example.com/cover.jpg",
        ],
    )
    async def test_delete_rejects_foreign_paths(self, local: LocalStorage, url: str) -> None:
        assert await local.delete(url) is False

    def test_owns(self, local: LocalStorage) -> None:
        assert local.owns(f"{URL_PREFIX}a.jpg") is True
        assert local.owns("https://images.example.com/a.jpg") is False


class TestPublicIdFromUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            (
                "https://res.cloudinary.com/demo/image/upload/v1700000000/blog_images/abc.jpg",
                "blog_images/abc",
            ),
            ("https://res.cloudinary.com/demo/image/upload/blog_images/abc.webp", "blog_images/abc"),
            ("https://res.cloudinary.com/demo/image/upload/v12/abc.png", "abc"),
            ("https://res.cloudinary.com/demo/image/fetch/abc.png", None),
            ("https://res.cloudinary.com/demo/image/upload/v12", None),
        ],
    )
    def test_parses(self, url: str, expected: str | None) -> None:
        assert public_id_from_url(url) == expected


class TestCloudinaryStorage:
    """Tests for CloudinaryStorage with the SDK patched out."""

    @pytest.fixture
    def cloud(self) -> CloudinaryStorage:
        with patch("app.services.storage.cloudinary_storage.cloudinary.config"):
            return CloudinaryStorage()

    @pytest.mark.asyncio
    async def test_store_returns_secure_url(self, cloud: CloudinaryStorage) -> None:
        with patch(
            "app.services.storage.cloudinary_storage.cloudinary.uploader.upload",
            return_value={"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/x.jpg"},
        ) as upload:
            url = await cloud.store(b"bytes", "image/jpeg")

        assert url == "https://res.cloudinary.com/demo/image/upload/v1/x.jpg"
        _, kwargs = upload.call_args
        assert kwargs["public_id"].startswith(f"{cloud.folder}/")
        assert kwargs["resource_type"] == "image"

    @pytest.mark.asyncio
    async def test_store_without_url_is_storage_error(self, cloud: CloudinaryStorage) -> None:
        with (
            patch(
                "app.services.storage.cloudinary_storage.cloudinary.uploader.upload",
                return_value={"error": "rejected"},
            ),
            pytest.raises(StorageError),
        ):
            await cloud.store(b"bytes", "image/jpeg")

    @pytest.mark.asyncio
    async def test_delete_destroys_public_id(self, cloud: CloudinaryStorage) -> None:
        with patch(
            "app.services.storage.cloudinary_storage.cloudinary.uploader.destroy",
            return_value={"result": "ok"},
        ) as destroy:
            deleted = await cloud.delete(
                "https://res.cloudinary.com/demo/image/upload/v1/blog_images/abc.jpg",
            )

        assert deleted is True
        destroy.assert_called_once_with("blog_images/abc", resource_type="image")

    @pytest.mark.asyncio
    async def test_delete_not_found(self, cloud: CloudinaryStorage) -> None:
        with patch(
            "app.services.storage.cloudinary_storage.cloudinary.uploader.destroy",
            return_value={"result": "not found"},
        ):
            assert await cloud.delete("https://res.cloudinary.com/d/image/upload/v1/a.jpg") is False

    def test_owns(self, cloud: CloudinaryStorage) -> None:
        assert cloud.owns("https://res.cloudinary.com/demo/image/upload/v1/a.jpg") is True
        assert cloud.owns("https://evilcloudinary.com/a.jpg") is False
        assert cloud.owns("/uploads/blog_images/a.jpg") is False


def test_default_provider_is_local() -> None:
    assert isinstance(get_storage_service(), LocalStorage)
