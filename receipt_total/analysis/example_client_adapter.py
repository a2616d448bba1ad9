"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in VisionClientFactory.
"""

from typing import ClassVar

from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.storage.models import GenerativePart


class ExampleClientAdapter(BaseVisionClient):
    """Example adapter that always answers with a fixed amount.

    No network calls. Useful for local development against the real
    document and object stores without spending model quota.
    """

    DEFAULT_RESPONSE: ClassVar[str] = "0.00"

    def __init__(self, response: str | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        part: GenerativePart,
        prompt: str,
    ) -> str:
        _ = model, temperature, part, prompt
        return self._response
