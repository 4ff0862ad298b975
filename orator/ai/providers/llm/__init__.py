"""LLM provider implementations."""

from orator.ai.providers.llm.groq import GroqProvider
from orator.ai.providers.llm.openai import ChatCompletionsHTTPProvider, OpenAIProvider
from orator.ai.providers.llm.openrouter import OpenRouterProvider
from orator.ai.providers.llm.stub import StubLLMProvider

__all__ = [
    "ChatCompletionsHTTPProvider",
    "GroqProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "StubLLMProvider",
]
