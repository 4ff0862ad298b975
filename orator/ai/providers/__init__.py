"""Chat model provider implementations."""

from orator.ai.providers.base import LLMMessage, LLMProvider, LLMResponse, MessageRole
from orator.ai.providers.factory import build_llm_provider
from orator.ai.providers.llm import (
    GroqProvider,
    OpenAIProvider,
    OpenRouterProvider,
    StubLLMProvider,
)

__all__ = [
    "build_llm_provider",
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    "MessageRole",
    "GroqProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "StubLLMProvider",
]
