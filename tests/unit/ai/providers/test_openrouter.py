from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from orator.ai.providers.base import LLMMessage
from orator.ai.providers.llm.openrouter import OpenRouterProvider


class TestOpenRouterProvider:
    @pytest.fixture
    def provider(self):
        return OpenRouterProvider(
            api_key="test_api_key",
            http_referer="https://example.com",
            x_title="Orator",
        )

    def test_name_property(self, provider):
        assert provider.name == "openrouter"

    def test_resolve_model_defaults(self):
        assert OpenRouterProvider.resolve_model(None) == OpenRouterProvider.DEFAULT_MODEL
        assert OpenRouterProvider.resolve_model("") == OpenRouterProvider.DEFAULT_MODEL
        assert OpenRouterProvider.resolve_model("gpt-4o") == OpenRouterProvider.DEFAULT_MODEL
        assert OpenRouterProvider.resolve_model("openai/gpt-4o") == "openai/gpt-4o"

        assert OpenRouterProvider.DEFAULT_MODEL == "openai/gpt-3.5-turbo"

    @pytest.mark.asyncio
    async def test_generate_success(self, provider):
        mock_http_response = MagicMock()
        mock_http_response.raise_for_status = MagicMock()
        mock_http_response.json.return_value = {
            "id": "cmpl_test",
            "model": "openai/gpt-4o",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": "Hello"},
                    "finish_reason": "stop",
                }
            ],
            "usage": {"prompt_tokens": 3, "completion_tokens": 1},
        }

        with patch("httpx.AsyncClient") as mock_client:
            mock_client_instance = AsyncMock()
            mock_client_instance.post = AsyncMock(return_value=mock_http_response)
            mock_client.return_value = mock_client_instance

            resp = await provider.generate(
                [LLMMessage(role="user", content="Hi")],
                model="openai/gpt-4o",
                temperature=0.1,
                max_tokens=5,
            )

            assert resp.content == "Hello"
            assert resp.model == "openai/gpt-4o"
            assert resp.tokens_in == 3
            assert resp.tokens_out == 1
            assert resp.finish_reason == "stop"

            args, kwargs = mock_client_instance.post.call_args
            assert args[0] == "https://openrouter.ai/api/v1/chat/completions"

            headers = kwargs.get("headers")
            assert headers["Authorization"] == "Bearer test_api_key"
            assert headers["HTTP-Referer"] == "https://example.com"
            assert headers["X-Title"] == "Orator"

            body = kwargs.get("json")
            assert body["model"] == "openai/gpt-4o"
            assert body["temperature"] == 0.1
            assert body["max_tokens"] == 5
            assert body["messages"][0]["role"] == "user"
            assert body["messages"][0]["content"] == "Hi"

    def test_blank_attribution_headers_omitted(self):
        provider = OpenRouterProvider(api_key="test_api_key", http_referer="  ", x_title="")

        headers = provider._get_headers()

        assert "HTTP-Referer" not in headers
        assert "X-Title" not in headers

    @pytest.mark.asyncio
    async def test_http_error_propagates(self, provider):
        mock_http_response = MagicMock()
        mock_http_response.raise_for_status = MagicMock(side_effect=RuntimeError("502 Bad Gateway"))

        with patch("httpx.AsyncClient") as mock_client:
            mock_client_instance = AsyncMock()
            mock_client_instance.post = AsyncMock(return_value=mock_http_response)
            mock_client.return_value = mock_client_instance

            with pytest.raises(RuntimeError, match="502"):
                await provider.generate([LLMMessage(role="user", content="Hi")])
