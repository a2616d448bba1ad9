"""Validates the HTTP method, headers and JSON body of an analysis request."""

import re
from collections.abc import Collection, Mapping
from typing import Any

from receipt_total.errors.exceptions import AnalysisValidationError
from receipt_total.logging.logger import Log
from receipt_total.validation.models import AnalysisRequest, SubmissionType

PATH_FIELD = "firestorePath"
TYPE_FIELD = "submissionType"

_PATH_MIN_LENGTH = 3
_PATH_MAX_LENGTH = 500
_PATH_PATTERN = re.compile(r"^[A-Za-z0-9_\-/]+$")
_PATH_REQUIRED_PARTS = 2


def validate_request(body: Any, request_id: str | None = None) -> AnalysisRequest:
    """Validate a decoded JSON body and build an AnalysisRequest.

    Accepts the legacy shape ``{"firestorePath": {"firestorePath": ...,
    "submissionType": ...}}`` sent by older clients.

    Raises:
        AnalysisValidationError: on the first rule the body violates.
    """
    if not isinstance(body, dict):
        raise AnalysisValidationError(
            "Request body must be a JSON object",
            code="INVALID_BODY",
            field="body",
        )

    document_path = body.get(PATH_FIELD)
    submission_type = body.get(TYPE_FIELD)
    if isinstance(document_path, dict) and document_path.get(PATH_FIELD):
        submission_type = document_path.get(TYPE_FIELD)
        document_path = document_path.get(PATH_FIELD)

    return AnalysisRequest(
        document_path=validate_document_path(document_path),
        submission_type=validate_submission_type(submission_type, request_id),
    )


def validate_document_path(path: Any) -> str:
    """Check a document reference of the form ``collection/document[/...]``."""
    _require(path, PATH_FIELD)
    _require_string(path, PATH_FIELD)

    if len(path) < _PATH_MIN_LENGTH:
        raise AnalysisValidationError(
            f'Field "{PATH_FIELD}" must be at least {_PATH_MIN_LENGTH} characters, '
            f"got {len(path)}",
            code="STRING_TOO_SHORT",
            field=PATH_FIELD,
        )
    if len(path) > _PATH_MAX_LENGTH:
        raise AnalysisValidationError(
            f'Field "{PATH_FIELD}" cannot exceed {_PATH_MAX_LENGTH} characters, '
            f"got {len(path)}",
            code="STRING_TOO_LONG",
            field=PATH_FIELD,
        )

    # Must precede the pattern and segment checks.
    if ".." in path or "//" in path:
        raise AnalysisValidationError(
            f'Field "{PATH_FIELD}" contains disallowed sequences',
            code="MALICIOUS_PATH",
            field=PATH_FIELD,
        )

    if not _PATH_PATTERN.match(path):
        raise AnalysisValidationError(
            f'Field "{PATH_FIELD}" has an invalid format. Expected: collection/document',
            code="INVALID_FORMAT",
            field=PATH_FIELD,
        )

    parts = path.split("/")
    if len(parts) < _PATH_REQUIRED_PARTS:
        raise AnalysisValidationError(
            f'Field "{PATH_FIELD}" must look like "collection/document"',
            code="INVALID_PATH_STRUCTURE",
            field=PATH_FIELD,
        )
    if any(not part.strip() for part in parts):
        raise AnalysisValidationError(
            f'Field "{PATH_FIELD}" cannot contain empty segments',
            code="EMPTY_PATH_SEGMENT",
            field=PATH_FIELD,
        )
    return path


def validate_submission_type(value: Any, request_id: str | None = None) -> SubmissionType:
    """Check the submission type, downgrading unknown values to PAYMENT."""
    _require(value, TYPE_FIELD)
    _require_string(value, TYPE_FIELD)
    try:
        return SubmissionType(value)
    except ValueError:
        Log.warning(
            f'Unknown {TYPE_FIELD} "{value}", defaulting to {SubmissionType.PAYMENT.value}',
            request_id=request_id,
        )
        return SubmissionType.PAYMENT


def validate_headers(headers: Mapping[str, str]) -> None:
    """Require a JSON content type. Header names are matched case-insensitively."""
    content_type = ""
    for name, value in headers.items():
        if name.lower() == "content-type":
            content_type = value
            break
    if "application/json" not in content_type.lower():
        raise AnalysisValidationError(
            "Content-Type must be application/json",
            code="INVALID_CONTENT_TYPE",
            field="Content-Type",
        )


def validate_method(method: str, allowed_methods: Collection[str] = ("POST",)) -> None:
    """Reject HTTP methods outside the allowed set."""
    if method.upper() not in allowed_methods:
        raise AnalysisValidationError(
            f"HTTP method not allowed. Allowed methods: {', '.join(allowed_methods)}",
            code="METHOD_NOT_ALLOWED",
            field="method",
        )


def _require(value: Any, field: str) -> None:
    if value is None or value == "":
        raise AnalysisValidationError(
            f'Field "{field}" is required',
            code="REQUIRED_FIELD",
            field=field,
        )


def _require_string(value: Any, field: str) -> None:
    if not isinstance(value, str):
        raise AnalysisValidationError(
            f'Field "{field}" must be a string, got {type(value).__name__}',
            code="INVALID_TYPE",
            field=field,
        )
