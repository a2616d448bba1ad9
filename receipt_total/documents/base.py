from abc import ABC, abstractmethod
from typing import Any


class BaseDocumentStore(ABC):
    """Contract for read access to the document database."""

    @abstractmethod
    async def get(self, document_path: str) -> dict[str, Any] | None:
        """Point-read one record by its hierarchical reference.

        Args:
            document_path: Reference such as ``payments/abc123``.

        Returns:
            The record's fields, or None when it does not exist.

        Raises:
            DocumentStoreError: on any transport or database failure.
        """
