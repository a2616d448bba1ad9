class ObjectStoreError(Exception):
    """Raised when the object store cannot be reached or rejects an operation."""
