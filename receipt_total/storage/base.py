from abc import ABC, abstractmethod

from receipt_total.storage.models import StoredFile


class BaseObjectStore(ABC):
    """Contract for read access to the object store.

    Every method raises ObjectStoreError on transport or service failures.
    """

    @abstractmethod
    async def exists(self, stored_file: StoredFile) -> bool:
        """Return True if the object exists."""

    @abstractmethod
    async def get_size(self, stored_file: StoredFile) -> int:
        """Return the object's size in bytes."""

    @abstractmethod
    async def download(self, stored_file: StoredFile) -> bytes:
        """Return the object's full content."""
