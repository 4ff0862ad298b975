"""Tests for LLM provider construction from settings."""

from unittest.mock import patch

import pytest

from orator.ai.providers.factory import build_llm_provider
from orator.ai.providers.llm.groq import GroqProvider
from orator.ai.providers.llm.openai import OpenAIProvider
from orator.ai.providers.llm.openrouter import OpenRouterProvider
from orator.ai.providers.llm.stub import StubLLMProvider
from orator.ai.providers.registry import ProviderNotFoundError
from orator.config import Settings


class TestBuildLLMProvider:
    def test_explicit_stub(self):
        provider = build_llm_provider(Settings(llm_provider="stub"))

        assert isinstance(provider, StubLLMProvider)

    def test_missing_api_key_falls_back_to_stub(self):
        settings = Settings(llm_provider="openai", openai_api_key="")

        provider = build_llm_provider(settings)

        assert isinstance(provider, StubLLMProvider)

    def test_openai_uses_base_url_and_timeout(self):
        settings = Settings(
            llm_provider="openai",
            openai_api_key="sk-test",
            openai_base_url="http://localhost:8080/v1",
            provider_timeout_llm_seconds=5,
        )

        provider = build_llm_provider(settings)

        assert isinstance(provider, OpenAIProvider)
        assert provider._base_url == "http://localhost:8080/v1"
        assert provider._timeout == 5.0

    def test_openrouter_attribution(self):
        settings = Settings(
            llm_provider="openrouter",
            openrouter_api_key="or-test",
            openrouter_http_referer="https://orator.example",
            openrouter_x_title="Orator",
        )

        provider = build_llm_provider(settings)

        assert isinstance(provider, OpenRouterProvider)
        headers = provider._get_headers()
        assert headers["HTTP-Referer"] == "https://orator.example"
        assert headers["X-Title"] == "Orator"

    def test_groq(self):
        settings = Settings(llm_provider="groq", groq_api_key="gsk_test")

        with patch("orator.ai.providers.llm.groq.AsyncGroq"):
            provider = build_llm_provider(settings)

        assert isinstance(provider, GroqProvider)

    def test_override_argument_wins(self):
        settings = Settings(llm_provider="openai", openai_api_key="sk-test")

        provider = build_llm_provider(settings, provider="stub")

        assert isinstance(provider, StubLLMProvider)

    def test_unknown_provider(self):
        with pytest.raises(ProviderNotFoundError):
            build_llm_provider(Settings(), provider="watson")

    def test_initialization_error_falls_back_to_stub(self):
        settings = Settings(llm_provider="groq", groq_api_key="gsk_test")

        with patch(
            "orator.ai.providers.llm.groq.AsyncGroq", side_effect=ValueError("bad key format")
        ):
            provider = build_llm_provider(settings)

        assert isinstance(provider, StubLLMProvider)

