"""Sends a stored file and an extraction prompt to the configured vision model."""

import asyncio

from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.analysis.exceptions import AIResponseError, AIServiceError
from receipt_total.errors.exceptions import AnalysisInternalError
from receipt_total.logging.logger import Log
from receipt_total.storage.models import GenerativePart


class AIInvoker:
    """Calls a vision model once and returns its raw text answer."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        temperature: float = 0.0,
        timeout_seconds: float = 45.0,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._timeout_seconds = timeout_seconds

    @property
    def model(self) -> str:
        return self._model

    async def invoke(
        self,
        part: GenerativePart,
        prompt: str,
        request_id: str | None = None,
    ) -> str:
        """Return the model's answer text.

        Provider details are logged, never returned to the caller.

        Raises:
            AnalysisInternalError: if the call fails, times out or the
                response carries no text.
        """
        Log.info(f"Sending {part.mime_type} to model {self._model}", request_id=request_id)
        try:
            raw_text = await asyncio.wait_for(
                self._client.generate(
                    model=self._model,
                    temperature=self._temperature,
                    part=part,
                    prompt=prompt,
                ),
                timeout=self._timeout_seconds,
            )
        except AIResponseError as exc:
            Log.error(f"Invalid AI response: {exc}", request_id=request_id)
            raise AnalysisInternalError("Invalid AI response") from exc
        except asyncio.TimeoutError as exc:
            Log.error(
                f"AI call timed out after {self._timeout_seconds}s", request_id=request_id
            )
            raise AnalysisInternalError("AI analysis failed, please try again") from exc
        except AIServiceError as exc:
            Log.error(f"AI call failed: {exc}", request_id=request_id)
            raise AnalysisInternalError("AI analysis failed, please try again") from exc

        Log.debug(f"AI raw response: {raw_text!r}", request_id=request_id)
        return raw_text
