"""Abstract base classes for chat model providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

MessageRole = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class LLMMessage:
    """A message in an LLM conversation."""

    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    tokens_in: int
    tokens_out: int
    finish_reason: str | None = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers (e.g., OpenAI, Groq)."""

    DEFAULT_MODEL: str | None = None

    @classmethod
    def resolve_model(cls, model: str | None) -> str | None:
        """Resolve a model ID for this provider.

        Subclasses can override this to enforce provider-specific model
        families. By default, returns the configured model if set, otherwise
        falls back to DEFAULT_MODEL.
        """

        m = (model or "").strip()
        return m or cls.DEFAULT_MODEL

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""
        pass

    @abstractmethod
    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs,
    ) -> LLMResponse:
        """Generate a complete response.

        Args:
            messages: Conversation history
            model: Model ID (provider-specific)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific options

        Returns:
            LLMResponse with full content and metadata
        """
        pass

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        return None
