from typing import Any

import httpx

from resumecraft.generation.client_base import BaseGenerationClient
from resumecraft.generation.exceptions import GenerationFailedError, GenerationNetworkError
from resumecraft.logging.logger import Log

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def build_request_body(prompt: str) -> dict[str, object]:
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_candidate_text(data: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or raise."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise GenerationFailedError("Invalid response format from API") from exc
    if not isinstance(text, str) or not text:
        raise GenerationFailedError("Invalid response format from API")
    return text


class GeminiClientAdapter(BaseGenerationClient):
    """Calls the Generative Language ``generateContent`` endpoint over httpx."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def generate_content(self, *, model: str, prompt: str) -> str:
        try:
            response = self._client.post(
                f"/models/{model}:generateContent",
                params={"key": self._api_key},
                json=build_request_body(prompt),
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise GenerationNetworkError(f"AI provider transport error: {exc}") from exc

        if response.is_error:
            message = self._error_message(response)
            Log.error(f"Gemini API error {response.status_code}: {message}")
            raise GenerationFailedError(f"API Error: {message}")

        try:
            data = response.json()
        except ValueError as exc:
            raise GenerationFailedError("Invalid response format from API") from exc
        return extract_candidate_text(data)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the upstream ``error.message`` over the HTTP reason phrase."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                return str(error["message"])
        return response.reason_phrase or f"HTTP {response.status_code}"
