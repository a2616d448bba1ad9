class AIError(Exception):
    """Raised when the vision model call fails."""


class AIResponseError(AIError):
    """Raised when the provider answers but the response has no usable text."""


class AIServiceError(AIError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
