import base64
from unittest.mock import AsyncMock

import pytest
from conftest import TEST_BUCKET, InMemoryObjectStore

from receipt_total.errors.exceptions import (
    AnalysisInternalError,
    AnalysisValidationError,
    ResourceNotFoundError,
)
from receipt_total.storage.exceptions import ObjectStoreError
from receipt_total.storage.file_materializer import FileMaterializer, parse_locator
from receipt_total.storage.models import StoredFile

MAX_SIZE = 10 * 1024 * 1024


def _store_with(path: str, data: bytes = b"data", size: int | None = None) -> InMemoryObjectStore:
    key = (TEST_BUCKET, path)
    sizes = {key: size} if size is not None else {}
    return InMemoryObjectStore({key: data}, sizes)


class TestParseLocator:
    def test_splits_on_first_slash(self) -> None:
        assert parse_locator("bucket/receipts/2024/r1.jpg") == StoredFile(
            bucket="bucket", path="receipts/2024/r1.jpg"
        )

    def test_strips_gs_prefix(self) -> None:
        assert parse_locator("gs://bucket/r1.png") == StoredFile(bucket="bucket", path="r1.png")

    @pytest.mark.parametrize("locator", ["bucket", "bucket/", "/r1.jpg", ""])
    def test_rejects_malformed_locator(self, locator: str) -> None:
        with pytest.raises(AnalysisValidationError) as exc_info:
            parse_locator(locator)
        assert exc_info.value.code == "INVALID_STORAGE_PATH"


class TestMaterialize:
    @pytest.mark.asyncio
    async def test_returns_base64_part(self, sample_jpeg_bytes: bytes) -> None:
        store = _store_with("receipts/r1.jpg", sample_jpeg_bytes)
        materializer = FileMaterializer(store)

        part = await materializer.materialize(f"{TEST_BUCKET}/receipts/r1.jpg")

        assert part.mime_type == "image/jpeg"
        assert base64.b64decode(part.base64_data) == sample_jpeg_bytes
        assert part.to_bytes() == sample_jpeg_bytes

    @pytest.mark.parametrize(
        ("file_name", "mime_type"),
        [
            ("r.png", "image/png"),
            ("r.jpg", "image/jpeg"),
            ("r.jpeg", "image/jpeg"),
            ("r.JPG", "image/jpeg"),
            ("r.webp", "image/webp"),
            ("r.PDF", "application/pdf"),
        ],
    )
    @pytest.mark.asyncio
    async def test_maps_extension_to_mime_type(self, file_name: str, mime_type: str) -> None:
        store = _store_with(f"receipts/{file_name}")
        materializer = FileMaterializer(store)

        part = await materializer.materialize(f"{TEST_BUCKET}/receipts/{file_name}")

        assert part.mime_type == mime_type

    def test_unmapped_extension_falls_back_to_octet_stream(self) -> None:
        assert FileMaterializer.mime_type_for("bin") == "application/octet-stream"


class TestFileSize:
    @pytest.mark.asyncio
    async def test_exact_limit_is_accepted(self) -> None:
        store = _store_with("receipts/big.jpg", size=MAX_SIZE)
        materializer = FileMaterializer(store)

        part = await materializer.materialize(f"{TEST_BUCKET}/receipts/big.jpg")

        assert part.mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_one_byte_over_limit_is_rejected(self) -> None:
        store = _store_with("receipts/big.jpg", size=MAX_SIZE + 1)
        materializer = FileMaterializer(store)

        with pytest.raises(AnalysisValidationError) as exc_info:
            await materializer.materialize(f"{TEST_BUCKET}/receipts/big.jpg")
        assert exc_info.value.code == "FILE_TOO_LARGE"
        assert exc_info.value.status_code == 400
        assert store.downloads == []

    @pytest.mark.asyncio
    async def test_custom_limit(self) -> None:
        store = _store_with("receipts/r.jpg", data=b"12345")
        materializer = FileMaterializer(store, max_file_size_bytes=4)

        with pytest.raises(AnalysisValidationError, match="maximum size"):
            await materializer.materialize(f"{TEST_BUCKET}/receipts/r.jpg")


class TestFileType:
    @pytest.mark.parametrize("file_name", ["r.gif", "r.txt", "r.JPG.exe", "receipt", "r.heic"])
    @pytest.mark.asyncio
    async def test_rejects_disallowed_extensions(self, file_name: str) -> None:
        store = _store_with(f"receipts/{file_name}")
        materializer = FileMaterializer(store)

        with pytest.raises(AnalysisValidationError) as exc_info:
            await materializer.materialize(f"{TEST_BUCKET}/receipts/{file_name}")
        assert exc_info.value.code == "INVALID_FILE_TYPE"
        assert store.downloads == []


class TestMaterializeFailures:
    @pytest.mark.asyncio
    async def test_missing_object_is_not_found(self) -> None:
        materializer = FileMaterializer(InMemoryObjectStore())

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await materializer.materialize(f"{TEST_BUCKET}/receipts/none.jpg")
        assert exc_info.value.code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_store_failure_becomes_internal_error(self) -> None:
        store = AsyncMock()
        store.exists.return_value = True
        store.get_size.return_value = 10
        store.download.side_effect = ObjectStoreError("connection reset")
        materializer = FileMaterializer(store)

        with pytest.raises(AnalysisInternalError) as exc_info:
            await materializer.materialize(f"{TEST_BUCKET}/receipts/r1.jpg")
        assert exc_info.value.status_code == 500
        assert "connection reset" not in exc_info.value.message
