import httpx
import openai

from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.analysis.exceptions import AIResponseError, AIServiceError
from receipt_total.storage.models import GenerativePart


class OpenAIClientAdapter(BaseVisionClient):
    """Vision client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        part: GenerativePart,
        prompt: str,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            self._file_content(part),
                            {"type": "text", "text": prompt},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.HTTPError) as exc:
            raise AIServiceError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AIServiceError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AIResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AIResponseError("AI returned empty response")
        return content

    @staticmethod
    def _file_content(part: GenerativePart) -> dict[str, object]:
        data_url = f"data:{part.mime_type};base64,{part.base64_data}"
        if part.mime_type == "application/pdf":
            return {
                "type": "file",
                "file": {"filename": "document.pdf", "file_data": data_url},
            }
        return {"type": "image_url", "image_url": {"url": data_url}}
