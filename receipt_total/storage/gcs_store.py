import asyncio

from google.api_core import exceptions as google_exceptions
from google.cloud import storage

from receipt_total.storage.base import BaseObjectStore
from receipt_total.storage.exceptions import ObjectStoreError
from receipt_total.storage.models import StoredFile


class GcsObjectStore(BaseObjectStore):
    """Object store backed by Google Cloud Storage.

    The storage client is blocking, so each call runs in a worker thread.
    """

    def __init__(self, client: storage.Client) -> None:
        self._client = client

    async def exists(self, stored_file: StoredFile) -> bool:
        blob = self._blob(stored_file)
        try:
            return await asyncio.to_thread(blob.exists)
        except google_exceptions.GoogleAPIError as exc:
            raise ObjectStoreError(f"Existence check failed for {stored_file.path}: {exc}") from exc

    async def get_size(self, stored_file: StoredFile) -> int:
        blob = self._blob(stored_file)
        try:
            await asyncio.to_thread(blob.reload)
        except google_exceptions.GoogleAPIError as exc:
            raise ObjectStoreError(f"Metadata fetch failed for {stored_file.path}: {exc}") from exc
        if blob.size is None:
            raise ObjectStoreError(f"Object {stored_file.path} has no size metadata")
        return int(blob.size)

    async def download(self, stored_file: StoredFile) -> bytes:
        blob = self._blob(stored_file)
        try:
            return await asyncio.to_thread(blob.download_as_bytes)
        except google_exceptions.GoogleAPIError as exc:
            raise ObjectStoreError(f"Download failed for {stored_file.path}: {exc}") from exc

    def _blob(self, stored_file: StoredFile) -> storage.Blob:
        return self._client.bucket(stored_file.bucket).blob(stored_file.path)
