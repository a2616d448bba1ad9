from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from receipt_total.documents.base import BaseDocumentStore
from receipt_total.documents.exceptions import DocumentStoreError, InvalidDocumentPathError


class FirestoreDocumentStore(BaseDocumentStore):
    """Document store backed by the Firestore async client."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    async def get(self, document_path: str) -> dict[str, Any] | None:
        try:
            snapshot = await self._client.document(document_path).get()
        except ValueError as exc:
            raise InvalidDocumentPathError(f"Invalid document reference: {exc}") from exc
        except google_exceptions.GoogleAPIError as exc:
            raise DocumentStoreError(f"Firestore read failed: {exc}") from exc

        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}
