"""Stub provider for testing and offline rehearsal."""

import asyncio
import os
from typing import Any

from orator.ai.providers.base import LLMMessage, LLMProvider, LLMResponse
from orator.ai.providers.registry import register_llm_provider

DEFAULT_STUB_REPLY = (
    "[STUB LLM] Real LLM provider is not configured or its API key is missing. "
    "This is a stubbed response."
)


def _env_str(name: str) -> str | None:
    value = os.environ.get(name)
    if value is None:
        return None
    s = str(value).strip()
    return s if s else None


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@register_llm_provider
class StubLLMProvider(LLMProvider):
    """Stub LLM provider.

    Replies are taken in order from ``replies`` (or the ``||``-separated
    ``STUB_LLM_REPLIES`` env var); once exhausted the default stub text is
    returned. ``STUB_LLM_MODE`` selects ``error`` (raise) or ``empty``
    (blank content) behaviour, ``STUB_LLM_DELAY_MS`` simulates latency.
    """

    def __init__(self, replies: list[str] | None = None, delay_ms: int | None = None):
        if replies is None:
            raw = _env_str("STUB_LLM_REPLIES")
            replies = [r.strip() for r in raw.split("||")] if raw else []
        self._replies = list(replies)
        self._delay_ms = delay_ms if delay_ms is not None else _env_int("STUB_LLM_DELAY_MS", 100)
        self.calls: list[list[LLMMessage]] = []
        self.last_options: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return "stub"

    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs,
    ) -> LLMResponse:
        """Return the next scripted reply."""
        self.calls.append(list(messages))
        self.last_options = {"temperature": temperature, "max_tokens": max_tokens, **kwargs}
        if self._delay_ms > 0:
            await asyncio.sleep(self._delay_ms / 1000)

        mode = (_env_str("STUB_LLM_MODE") or "normal").lower()
        if mode in ("error", "fail"):
            raise RuntimeError(_env_str("STUB_LLM_ERROR_MESSAGE") or "stub_llm_error")

        if mode == "empty":
            content = ""
        elif self._replies:
            content = self._replies.pop(0)
        else:
            content = DEFAULT_STUB_REPLY

        return LLMResponse(
            content=content,
            model=model or "stub-model",
            tokens_in=sum(len(m.content.split()) for m in messages),
            tokens_out=len(content.split()),
            finish_reason="stop",
        )
