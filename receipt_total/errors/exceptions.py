"""Error taxonomy returned to callers of the analysis endpoint.

Each error carries the HTTP status it maps to and a machine-readable code.
Only ``message``, ``code`` and ``field`` are ever exposed to the caller.
"""


class AnalysisError(Exception):
    """Base exception for all errors surfaced by the analysis endpoint."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.field = field

    def to_payload(self) -> dict[str, object]:
        """Render the caller-safe subset of this error."""
        payload: dict[str, object] = {"error": self.message, "code": self.code}
        if self.field is not None:
            payload["field"] = self.field
        return payload


class AnalysisValidationError(AnalysisError):
    """Raised when input, stored data or the AI answer fails validation."""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class AuthenticationError(AnalysisError):
    """Raised when the caller is not authenticated."""

    status_code = 401
    default_code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AuthorizationError(AnalysisError):
    """Raised when the caller lacks permission for the operation."""

    status_code = 403
    default_code = "PERMISSION_DENIED"

    def __init__(self, message: str = "You do not have permission for this operation") -> None:
        super().__init__(message)


class ResourceNotFoundError(AnalysisError):
    """Raised when a document record or stored file does not exist."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", identifier: str | None = None) -> None:
        if identifier:
            message = f'{resource} "{identifier}" not found'
        else:
            message = f"{resource} not found"
        super().__init__(message)


class RateLimitError(AnalysisError):
    """Raised when a client exceeds its request quota."""

    status_code = 429
    default_code = "RATE_LIMIT_EXCEEDED"

    def __init__(
        self,
        message: str = "Too many requests. Try again later.",
        retry_after: int = 60,
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload["retryAfter"] = self.retry_after
        return payload


class AnalysisInternalError(AnalysisError):
    """Raised for infrastructure failures whose details stay server-side."""

    status_code = 500
    default_code = "INTERNAL_ERROR"
