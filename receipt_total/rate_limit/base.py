from abc import ABC, abstractmethod


class BaseRateLimiter(ABC):
    """Contract for all rate limiter implementations."""

    @abstractmethod
    def check(self, client_address: str, endpoint: str) -> None:
        """Record one request for the client and endpoint pair.

        Args:
            client_address: Address identifying the caller.
            endpoint: Name of the endpoint being called.

        Raises:
            RateLimitError: if the request would exceed a configured limit.
        """

    @abstractmethod
    def cleanup(self) -> int:
        """Drop expired state.

        Returns:
            Number of keys removed.
        """
