class DocumentStoreError(Exception):
    """Raised when the document store cannot be reached or rejects a read."""


class InvalidDocumentPathError(DocumentStoreError):
    """Raised when a path does not name a document (e.g. it ends on a collection)."""
