"""Chat backend seam between the engine and language-model providers."""
from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from opentelemetry.trace import SpanKind

from orator.ai.providers.base import LLMMessage, LLMProvider
from orator.ai.providers.factory import build_llm_provider
from orator.config import Settings, get_settings
from orator.exceptions import BackendError
from orator.telemetry.metrics import record_llm_request
from orator.telemetry.tracing import create_span

logger = logging.getLogger("backend")


@runtime_checkable
class ChatBackendClient(Protocol):
    """Sends a transcript and returns one reply.

    ``send`` returns None when the backend produced no message and raises
    BackendError on failure. It is the only slow or failing operation the
    engine performs.
    """

    async def send(self, messages: Sequence[LLMMessage]) -> LLMMessage | None:
        ...


class LLMChatBackend:
    """ChatBackendClient backed by a registered LLMProvider.

    Attributes:
        provider: The provider that generates replies
        model: Model ID passed to the provider (None for provider default)
        timeout: Seconds to wait for a reply before failing
    """

    def __init__(
        self,
        provider: LLMProvider,
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        timeout: float | None = 60.0,
    ) -> None:
        self.provider = provider
        self.model = model or None
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        provider: LLMProvider | None = None,
    ) -> LLMChatBackend:
        """Build a backend from settings, resolving the provider if needed."""
        settings = settings or get_settings()
        return cls(
            provider=provider or build_llm_provider(settings),
            model=settings.llm_model_id,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=float(settings.provider_timeout_llm_seconds),
        )

    async def send(self, messages: Sequence[LLMMessage]) -> LLMMessage | None:
        provider_name = self.provider.name
        model_label = self.model or "default"
        start_time = time.perf_counter()

        with create_span(
            "llm.chat",
            attributes={
                "llm.provider": provider_name,
                "llm.model": self.model,
                "llm.message_count": len(messages),
            },
            kind=SpanKind.CLIENT,
        ) as span:
            try:
                async with asyncio.timeout(self.timeout):
                    response = await self.provider.generate(
                        list(messages),
                        model=self.model,
                        temperature=self.temperature,
                        max_tokens=self.max_tokens,
                    )
            except TimeoutError as e:
                record_llm_request(
                    provider=provider_name,
                    model=model_label,
                    status="timeout",
                    duration_seconds=time.perf_counter() - start_time,
                )
                raise BackendError(
                    message=f"Chat backend timed out after {self.timeout}s",
                    provider=provider_name,
                    details={"timeout_seconds": self.timeout},
                ) from e
            except BackendError:
                record_llm_request(
                    provider=provider_name,
                    model=model_label,
                    status="error",
                    duration_seconds=time.perf_counter() - start_time,
                )
                raise
            except Exception as e:
                duration_seconds = time.perf_counter() - start_time
                record_llm_request(
                    provider=provider_name,
                    model=model_label,
                    status="error",
                    duration_seconds=duration_seconds,
                )
                logger.error(
                    "Chat backend request failed",
                    extra={
                        "service": "backend",
                        "provider": provider_name,
                        "error": str(e),
                        "duration_ms": int(duration_seconds * 1000),
                    },
                    exc_info=True,
                )
                raise BackendError.from_exception(e, provider=provider_name) from e

            span.set_attribute("llm.tokens_in", response.tokens_in)
            span.set_attribute("llm.tokens_out", response.tokens_out)
            record_llm_request(
                provider=provider_name,
                model=response.model or model_label,
                status="success" if response.content else "empty",
                duration_seconds=time.perf_counter() - start_time,
                tokens_in=response.tokens_in,
                tokens_out=response.tokens_out,
            )

        if not response.content:
            logger.info(
                "Chat backend returned no message",
                extra={"service": "backend", "provider": provider_name, "model": response.model},
            )
            return None
        return LLMMessage(role="assistant", content=response.content)

    async def aclose(self) -> None:
        await self.provider.aclose()


__all__ = ["ChatBackendClient", "LLMChatBackend"]
