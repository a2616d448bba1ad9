from receipt_total.documents.base import BaseDocumentStore
from receipt_total.documents.exceptions import DocumentStoreError, InvalidDocumentPathError
from receipt_total.errors.exceptions import (
    AnalysisInternalError,
    AnalysisValidationError,
    ResourceNotFoundError,
)
from receipt_total.logging.logger import Log


class RecordResolver:
    """Fetches a document record and extracts the path of its stored file."""

    def __init__(self, store: BaseDocumentStore, path_field: str = "storagePath") -> None:
        self._store = store
        self._path_field = path_field

    async def resolve(self, document_path: str, request_id: str | None = None) -> str:
        """Return the storage path recorded on the document.

        Raises:
            ResourceNotFoundError: if the document does not exist.
            AnalysisValidationError: if the path does not name a document, or the
                storage path field is missing or invalid.
            AnalysisInternalError: if the document store fails.
        """
        try:
            record = await self._store.get(document_path)
        except InvalidDocumentPathError as exc:
            Log.warning(f"Rejected document path {document_path}: {exc}", request_id=request_id)
            raise AnalysisValidationError(
                f'"{document_path}" does not reference a document',
                code="INVALID_PATH_STRUCTURE",
                field="firestorePath",
            ) from exc
        except DocumentStoreError as exc:
            Log.error(f"Document store failure for {document_path}: {exc}", request_id=request_id)
            raise AnalysisInternalError("Failed to read the document record") from exc

        if record is None:
            raise ResourceNotFoundError("Document", document_path)

        if self._path_field not in record:
            raise AnalysisValidationError(
                f'Document does not contain the "{self._path_field}" field',
                code="MISSING_FIELD",
                field=self._path_field,
            )
        storage_path = record[self._path_field]
        if not isinstance(storage_path, str) or not storage_path.strip():
            raise AnalysisValidationError(
                f'Field "{self._path_field}" must be a non-empty string',
                code="INVALID_STORAGE_PATH",
                field=self._path_field,
            )
        Log.info(f"Resolved {document_path} to {storage_path}", request_id=request_id)
        return storage_path
