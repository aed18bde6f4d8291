from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from resumecraft.generation.exceptions import GenerationFailedError, GenerationNetworkError
from resumecraft.generation.openai_client_adapter import OpenAIClientAdapter

OPENAI_PATH = "resumecraft.generation.openai_client_adapter.openai.OpenAI"


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(OPENAI_PATH, return_value=mock_client):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("Tailored")
        adapter = _make_adapter(mock_client)

        assert adapter.generate_content(model="m", prompt="p") == "Tailored"

    def test_sends_prompt_as_user_message(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("ok")
        adapter = _make_adapter(mock_client)

        adapter.generate_content(model="gpt-4o-mini", prompt="Rewrite this")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.7
        assert kwargs["messages"] == [{"role": "user", "content": "Rewrite this"}]

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationFailedError, match="empty response"):
            adapter.generate_content(model="m", prompt="p")

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationFailedError, match="no choices"):
            adapter.generate_content(model="m", prompt="p")

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationNetworkError, match="network error"):
            adapter.generate_content(model="m", prompt="p")

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationNetworkError, match="network error"):
            adapter.generate_content(model="m", prompt="p")

    def test_status_error_carries_provider_message(self) -> None:
        mock_client = MagicMock()
        response = httpx.Response(429, request=httpx.Request("POST", "https://api.test"))
        mock_client.chat.completions.create.side_effect = openai.APIStatusError(
            "Rate limit reached",
            response=response,
            body=None,
        )
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationFailedError, match="API Error: Rate limit reached") as exc_info:
            adapter.generate_content(model="m", prompt="p")
        assert not isinstance(exc_info.value, GenerationNetworkError)

    def test_raises_failed_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationFailedError, match="API error"):
            adapter.generate_content(model="m", prompt="p")

    def test_close_closes_sdk_client(self) -> None:
        mock_client = MagicMock()
        adapter = _make_adapter(mock_client)

        adapter.close()

        mock_client.close.assert_called_once_with()
