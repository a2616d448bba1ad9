import base64
from typing import ClassVar

from receipt_total.errors.exceptions import (
    AnalysisInternalError,
    AnalysisValidationError,
    ResourceNotFoundError,
)
from receipt_total.logging.logger import Log
from receipt_total.storage.base import BaseObjectStore
from receipt_total.storage.exceptions import ObjectStoreError
from receipt_total.storage.models import GenerativePart, StoredFile

DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


def parse_locator(locator: str) -> StoredFile:
    """Split ``bucket/path`` (optionally ``gs://bucket/path``) on the first slash.

    Raises:
        AnalysisValidationError: if either part is empty.
    """
    bare = locator.removeprefix("gs://")
    bucket, _, path = bare.partition("/")
    if not bucket or not path:
        raise AnalysisValidationError(
            f"Invalid storage locator: {locator}",
            code="INVALID_STORAGE_PATH",
            field="storagePath",
        )
    return StoredFile(bucket=bucket, path=path)


class FileMaterializer:
    """Checks a stored file and turns its bytes into a GenerativePart."""

    ALLOWED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("jpg", "jpeg", "png", "webp", "pdf")
    MIME_TYPES: ClassVar[dict[str, str]] = {
        "png": "image/png",
        "jpg": "image/jpeg",
        "jpeg": "image/jpeg",
        "webp": "image/webp",
        "pdf": "application/pdf",
    }
    FALLBACK_MIME_TYPE: ClassVar[str] = "application/octet-stream"

    def __init__(
        self,
        store: BaseObjectStore,
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
    ) -> None:
        self._store = store
        self._max_file_size_bytes = max_file_size_bytes

    async def materialize(self, locator: str, request_id: str | None = None) -> GenerativePart:
        """Validate and download a stored file, returning it base64-encoded.

        Type and size are checked before the download.

        Raises:
            AnalysisValidationError: bad locator, disallowed type or oversized file.
            ResourceNotFoundError: if the object does not exist.
            AnalysisInternalError: if the object store fails.
        """
        stored_file = parse_locator(locator)
        self._check_file_type(stored_file)

        try:
            if not await self._store.exists(stored_file):
                raise ResourceNotFoundError("File", stored_file.path)
            size = await self._store.get_size(stored_file)
            self._check_file_size(size)
            raw_bytes = await self._store.download(stored_file)
        except ObjectStoreError as exc:
            Log.error(f"Object store failure for {locator}: {exc}", request_id=request_id)
            raise AnalysisInternalError("Failed to read the stored file") from exc

        Log.info(
            f"Downloaded {len(raw_bytes)} bytes from {stored_file.bucket}/{stored_file.path}",
            request_id=request_id,
        )
        return GenerativePart(
            mime_type=self.mime_type_for(stored_file.extension),
            base64_data=base64.b64encode(raw_bytes).decode("ascii"),
        )

    @classmethod
    def mime_type_for(cls, extension: str) -> str:
        return cls.MIME_TYPES.get(extension.lower(), cls.FALLBACK_MIME_TYPE)

    def _check_file_type(self, stored_file: StoredFile) -> None:
        if stored_file.extension not in self.ALLOWED_EXTENSIONS:
            raise AnalysisValidationError(
                "File type not allowed. Allowed extensions: "
                f"{', '.join(self.ALLOWED_EXTENSIONS)}",
                code="INVALID_FILE_TYPE",
                field="file",
            )

    def _check_file_size(self, size: int) -> None:
        if size > self._max_file_size_bytes:
            max_mb = self._max_file_size_bytes / (1024 * 1024)
            raise AnalysisValidationError(
                f"File exceeds the maximum size of {max_mb:g}MB",
                code="FILE_TOO_LARGE",
                field="file",
            )
