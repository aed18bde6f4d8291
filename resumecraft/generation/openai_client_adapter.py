import httpx
import openai

from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.exceptions import GenerationFailedError, GenerationNetworkError


class OpenAIClientAdapter(BaseGenerationClient):
    """Generative-text client for OpenAI and OpenAI-compatible chat APIs."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        temperature: float = 0.7,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._temperature = temperature

    def generate_content(self, *, model: str, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=self._temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise GenerationFailedError(f"API Error: {exc.message}") from exc
        except openai.APIError as exc:
            raise GenerationFailedError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise GenerationFailedError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise GenerationFailedError("AI returned empty response")
        return content

    def close(self) -> None:
        self._client.close()
