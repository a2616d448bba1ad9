"""Request handler for the total-amount endpoint.

Pipeline: method -> headers -> rate limit -> body -> record -> file ->
prompt -> AI -> normalize. Any stage failure ends the request with a JSON
error body; nothing after the failing stage runs.
"""

import json
import time
import traceback
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from google.cloud import firestore, storage

from receipt_total.analysis.amount_normalizer import normalize_amount
from receipt_total.analysis.factory import VisionClientFactory
from receipt_total.analysis.invoker import AIInvoker
from receipt_total.analysis.prompt_loader import prompt_for
from receipt_total.config.settings import Settings
from receipt_total.credentials.factory import CredentialProviderFactory
from receipt_total.documents.firestore_store import FirestoreDocumentStore
from receipt_total.documents.record_resolver import RecordResolver
from receipt_total.errors.exceptions import AnalysisError, AnalysisValidationError, RateLimitError
from receipt_total.logging.logger import Log
from receipt_total.rate_limit.base import BaseRateLimiter
from receipt_total.rate_limit.memory_limiter import InMemoryRateLimiter
from receipt_total.storage.file_materializer import FileMaterializer
from receipt_total.storage.gcs_store import GcsObjectStore
from receipt_total.validation.request_validator import (
    validate_headers,
    validate_method,
    validate_request,
)

_GENERIC_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class HandlerRequest:
    """Framework-neutral view of an incoming HTTP request."""

    method: str
    headers: Mapping[str, str]
    body: bytes
    client_address: str


@dataclass
class HandlerResponse:
    """Status, headers and JSON payload to send back. ``payload`` None means no body."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    payload: dict[str, Any] | None = None


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class TotalAmountHandler:
    """Extracts the total amount from the file behind a document record."""

    def __init__(
        self,
        *,
        rate_limiter: BaseRateLimiter,
        record_resolver: RecordResolver,
        file_materializer: FileMaterializer,
        invoker: AIInvoker,
        storage_bucket: str,
        endpoint_name: str = "getTotalAmount",
        cors_allow_origin: str = "*",
        include_stack_traces: bool = False,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._record_resolver = record_resolver
        self._file_materializer = file_materializer
        self._invoker = invoker
        self._storage_bucket = storage_bucket
        self._endpoint_name = endpoint_name
        self._cors_allow_origin = cors_allow_origin
        self._include_stack_traces = include_stack_traces

    @property
    def rate_limiter(self) -> BaseRateLimiter:
        return self._rate_limiter

    async def handle(self, request: HandlerRequest) -> HandlerResponse:
        """Run the full pipeline for one request. Never raises."""
        request_id = new_request_id()
        started = time.perf_counter()
        headers = self._cors_headers()

        if request.method.upper() == "OPTIONS":
            return HandlerResponse(status_code=204, headers=headers)

        Log.info(
            f"{request.method} /{self._endpoint_name} from {request.client_address}",
            request_id=request_id,
        )
        try:
            total = await self._process(request, request_id)
        except Exception as exc:
            return self._error_response(exc, request_id, started, headers)

        elapsed_ms = _elapsed_ms(started)
        Log.info(f"Completed in {elapsed_ms}ms: total={total}", request_id=request_id)
        return HandlerResponse(
            status_code=200,
            headers=headers,
            payload={"total": total, "requestId": request_id, "processingTime": elapsed_ms},
        )

    async def _process(self, request: HandlerRequest, request_id: str) -> str:
        validate_method(request.method)
        validate_headers(request.headers)
        self._rate_limiter.check(request.client_address, self._endpoint_name)

        analysis_request = validate_request(_decode_body(request.body), request_id)
        Log.info(
            f"Analyzing {analysis_request.document_path} "
            f"as {analysis_request.submission_type.value}",
            request_id=request_id,
        )

        storage_path = await self._record_resolver.resolve(
            analysis_request.document_path, request_id
        )
        part = await self._file_materializer.materialize(
            f"{self._storage_bucket}/{storage_path}", request_id
        )
        prompt = prompt_for(analysis_request.submission_type)
        raw_text = await self._invoker.invoke(part, prompt, request_id)
        return normalize_amount(raw_text)

    def _cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self._cors_allow_origin,
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def _error_response(
        self,
        exc: Exception,
        request_id: str,
        started: float,
        headers: dict[str, str],
    ) -> HandlerResponse:
        elapsed_ms = _elapsed_ms(started)
        if isinstance(exc, AnalysisError):
            status_code = exc.status_code
            payload: dict[str, Any] = exc.to_payload()
        else:
            status_code = 500
            payload = {"error": _GENERIC_ERROR_MESSAGE, "code": "INTERNAL_ERROR"}

        summary = (
            f"Failed after {elapsed_ms}ms with {status_code} "
            f"{type(exc).__name__} ({payload['code']}): {exc}"
        )
        if status_code >= 500:
            Log.error(summary, request_id=request_id)
        else:
            Log.warning(summary, request_id=request_id)

        if isinstance(exc, RateLimitError):
            headers["Retry-After"] = str(exc.retry_after)
        if self._include_stack_traces:
            payload["stack"] = "".join(traceback.format_exception(exc))
        return HandlerResponse(status_code=status_code, headers=headers, payload=payload)


def _decode_body(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise AnalysisValidationError(
            "Request body must be valid JSON",
            code="INVALID_BODY",
            field="body",
        ) from exc


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def build_handler(settings: Settings) -> TotalAmountHandler:
    """Build a TotalAmountHandler with all required adapters."""
    credential_provider = CredentialProviderFactory.create(settings)
    credentials = credential_provider.get_credentials()

    document_store = FirestoreDocumentStore(
        firestore.AsyncClient(project=settings.gcp_project_id, credentials=credentials)
    )
    object_store = GcsObjectStore(
        storage.Client(project=settings.gcp_project_id, credentials=credentials)
    )
    rate_limiter = InMemoryRateLimiter(
        max_per_minute=settings.rate_limit_per_minute,
        max_per_hour=settings.rate_limit_per_hour,
    )
    return TotalAmountHandler(
        rate_limiter=rate_limiter,
        record_resolver=RecordResolver(document_store, settings.storage_path_field),
        file_materializer=FileMaterializer(object_store, settings.max_file_size_bytes),
        invoker=VisionClientFactory.create(settings, credential_provider),
        storage_bucket=settings.storage_bucket,
        endpoint_name=settings.endpoint_name,
        cors_allow_origin=settings.cors_allow_origin,
        include_stack_traces=not credential_provider.is_production,
    )
