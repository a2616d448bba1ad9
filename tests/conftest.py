from collections.abc import Callable
from typing import Any

import pytest

from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.analysis.example_client_adapter import ExampleClientAdapter
from receipt_total.analysis.invoker import AIInvoker
from receipt_total.api.handler import HandlerRequest, TotalAmountHandler
from receipt_total.documents.base import BaseDocumentStore
from receipt_total.documents.record_resolver import RecordResolver
from receipt_total.rate_limit.base import BaseRateLimiter
from receipt_total.rate_limit.memory_limiter import InMemoryRateLimiter
from receipt_total.storage.base import BaseObjectStore
from receipt_total.storage.file_materializer import FileMaterializer
from receipt_total.storage.models import StoredFile

TEST_BUCKET = "test-bucket"


class InMemoryDocumentStore(BaseDocumentStore):
    """Document store over a plain dict keyed by document path."""

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self.records = records if records is not None else {}
        self.reads: list[str] = []

    async def get(self, document_path: str) -> dict[str, Any] | None:
        self.reads.append(document_path)
        return self.records.get(document_path)


class InMemoryObjectStore(BaseObjectStore):
    """Object store over a dict keyed by (bucket, path).

    ``sizes`` overrides the reported size so limits can be tested without
    allocating large payloads.
    """

    def __init__(
        self,
        objects: dict[tuple[str, str], bytes] | None = None,
        sizes: dict[tuple[str, str], int] | None = None,
    ) -> None:
        self.objects = objects if objects is not None else {}
        self.sizes = sizes if sizes is not None else {}
        self.downloads: list[StoredFile] = []

    async def exists(self, stored_file: StoredFile) -> bool:
        return (stored_file.bucket, stored_file.path) in self.objects

    async def get_size(self, stored_file: StoredFile) -> int:
        key = (stored_file.bucket, stored_file.path)
        return self.sizes.get(key, len(self.objects[key]))

    async def download(self, stored_file: StoredFile) -> bytes:
        self.downloads.append(stored_file)
        return self.objects[(stored_file.bucket, stored_file.path)]


@pytest.fixture()
def sample_jpeg_bytes() -> bytes:
    """50KB of bytes starting with a JPEG header."""
    header = b"\xff\xd8\xff\xe0"
    return header + b"\x00" * (50 * 1024 - len(header))


@pytest.fixture()
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(
        {
            "payments/doc1": {"storagePath": "receipts/r1.jpg", "amount": 0},
            "statements/st1": {"storagePath": "statements/s1.png"},
        }
    )


@pytest.fixture()
def object_store(sample_jpeg_bytes: bytes) -> InMemoryObjectStore:
    return InMemoryObjectStore(
        {
            (TEST_BUCKET, "receipts/r1.jpg"): sample_jpeg_bytes,
            (TEST_BUCKET, "statements/s1.png"): b"\x89PNG\r\n\x1a\n",
        }
    )


@pytest.fixture()
def make_handler(
    document_store: InMemoryDocumentStore,
    object_store: InMemoryObjectStore,
) -> Callable[..., TotalAmountHandler]:
    """Build a handler over the in-memory stores; the AI answers ``ai_response``."""

    def _make(
        ai_response: str = "500.00",
        client: BaseVisionClient | None = None,
        rate_limiter: BaseRateLimiter | None = None,
        include_stack_traces: bool = False,
    ) -> TotalAmountHandler:
        return TotalAmountHandler(
            rate_limiter=rate_limiter or InMemoryRateLimiter(),
            record_resolver=RecordResolver(document_store),
            file_materializer=FileMaterializer(object_store),
            invoker=AIInvoker(
                client=client or ExampleClientAdapter(ai_response),
                model="test-model",
                timeout_seconds=5,
            ),
            storage_bucket=TEST_BUCKET,
            include_stack_traces=include_stack_traces,
        )

    return _make


def json_request(
    body: bytes,
    method: str = "POST",
    content_type: str | None = "application/json",
    client_address: str = "10.0.0.1",
) -> HandlerRequest:
    headers = {"content-type": content_type} if content_type is not None else {}
    return HandlerRequest(
        method=method,
        headers=headers,
        body=body,
        client_address=client_address,
    )
