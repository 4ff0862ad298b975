"""Groq LLM provider implementation."""

import logging
import time
from typing import Any

from groq import AsyncGroq

from orator.ai.providers.base import LLMMessage, LLMProvider, LLMResponse
from orator.ai.providers.registry import register_llm_provider

logger = logging.getLogger("llm")


@register_llm_provider
class GroqProvider(LLMProvider):
    """Groq LLM provider using Llama models."""

    DEFAULT_MODEL = "llama-3.1-8b-instant"

    @classmethod
    def resolve_model(cls, model: str | None) -> str | None:
        m = (model or "").strip()
        if not m or m.startswith("gpt-"):
            return cls.DEFAULT_MODEL
        return m

    def __init__(self, api_key: str, timeout: float = 60.0):
        """Initialize Groq provider.

        Args:
            api_key: Groq API key
            timeout: Request timeout in seconds
        """
        self._client = AsyncGroq(api_key=api_key, timeout=timeout)

    @property
    def name(self) -> str:
        return "groq"

    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs: Any,
    ) -> LLMResponse:
        model = type(self).resolve_model(model) or self.DEFAULT_MODEL
        start_time = time.time()

        logger.info(
            "Groq generate started",
            extra={
                "service": "llm",
                "provider": self.name,
                "model": model,
                "message_count": len(messages),
            },
        )

        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[m.to_dict() for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "Groq generate failed",
                extra={
                    "service": "llm",
                    "provider": self.name,
                    "model": model,
                    "error": str(e),
                    "duration_ms": duration_ms,
                },
                exc_info=True,
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        choice = response.choices[0] if response.choices else None
        content = (choice.message.content if choice else None) or ""
        tokens_in = response.usage.prompt_tokens if response.usage else 0
        tokens_out = response.usage.completion_tokens if response.usage else 0

        logger.info(
            "Groq generate complete",
            extra={
                "service": "llm",
                "provider": self.name,
                "model": model,
                "tokens_in": tokens_in,
                "tokens_out": tokens_out,
                "duration_ms": duration_ms,
            },
        )

        return LLMResponse(
            content=content,
            model=model,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            finish_reason=choice.finish_reason if choice else None,
        )

    async def aclose(self) -> None:
        await self._client.close()
