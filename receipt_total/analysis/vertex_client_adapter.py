import httpx
from google import genai
from google.auth import exceptions as google_auth_exceptions
from google.auth.credentials import Credentials
from google.genai import errors as genai_errors
from google.genai import types

from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.analysis.exceptions import AIResponseError, AIServiceError
from receipt_total.storage.models import GenerativePart


class VertexClientAdapter(BaseVisionClient):
    """Vision client for Gemini models served by Vertex AI."""

    def __init__(
        self,
        *,
        project: str,
        location: str,
        credentials: Credentials | None = None,
    ) -> None:
        self._client = genai.Client(
            vertexai=True,
            project=project,
            location=location,
            credentials=credentials,
        )

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        part: GenerativePart,
        prompt: str,
    ) -> str:
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=part.to_bytes(), mime_type=part.mime_type),
                    types.Part.from_text(text=prompt),
                ],
            )
        ]
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=types.GenerateContentConfig(temperature=temperature),
            )
        except httpx.HTTPError as exc:
            raise AIServiceError(f"AI provider network error: {exc}") from exc
        except google_auth_exceptions.GoogleAuthError as exc:
            raise AIServiceError(f"AI provider authentication error: {exc}") from exc
        except genai_errors.APIError as exc:
            raise AIServiceError(f"AI provider API error: {exc}") from exc

        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: types.GenerateContentResponse) -> str:
        candidates = response.candidates or []
        if not candidates:
            raise AIResponseError("AI returned no candidates")
        content = candidates[0].content
        if content is None or not content.parts:
            raise AIResponseError("AI candidate has no content parts")
        text = content.parts[0].text
        if text is None:
            raise AIResponseError("AI returned empty response")
        return text
