from abc import ABC, abstractmethod

from receipt_total.storage.models import GenerativePart


class BaseVisionClient(ABC):
    """Contract for provider-specific vision model clients."""

    @abstractmethod
    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        part: GenerativePart,
        prompt: str,
    ) -> str:
        """Send one user turn (inline file + instruction) and return the answer text.

        Raises:
            AIServiceError: on network or provider API failures.
            AIResponseError: if the response carries no text.
        """
