"""Factory for creating chat model provider instances.

Providers self-register at import time, so this factory only maps a
provider name to its registered class and the credentials it needs.
"""

import logging

from orator.ai.providers import llm as _llm  # noqa: F401  registers providers
from orator.ai.providers.base import LLMProvider
from orator.ai.providers.llm.stub import StubLLMProvider
from orator.ai.providers.registry import ProviderNotFoundError, _llm_registry
from orator.config import Settings

logger = logging.getLogger("providers")


def _get_provider_class(provider_name: str) -> type[LLMProvider]:
    if provider_name not in _llm_registry:
        registered = ", ".join(sorted(_llm_registry.keys())) or "(none)"
        raise ProviderNotFoundError(
            f"Unknown LLM provider: '{provider_name}'. Registered providers: {registered}"
        )
    return _llm_registry[provider_name]


def _get_api_key_for_provider(settings: Settings, provider: str) -> str | None:
    provider_key_mapping = {
        "openai": settings.openai_api_key,
        "openrouter": settings.openrouter_api_key,
        "groq": settings.groq_api_key,
    }
    return provider_key_mapping.get(provider) or None


def _get_env_var_for_provider(provider: str) -> str:
    return f"{provider.upper()}_API_KEY"


def build_llm_provider(settings: Settings, provider: str | None = None) -> LLMProvider:
    """Instantiate an LLM provider from settings.

    Falls back to the stub provider when the API key is missing or the
    provider fails to initialize.

    Raises:
        ProviderNotFoundError: If provider is not registered
    """
    provider = (provider or settings.llm_provider or "").lower().strip() or "openai"
    provider_class = _get_provider_class(provider)

    if provider == "stub":
        logger.warning(
            "Using stub LLM provider (explicitly requested)",
            extra={"service": "providers", "provider": "stub"},
        )
        return provider_class()

    api_key = _get_api_key_for_provider(settings, provider)
    if api_key is None:
        env_var = _get_env_var_for_provider(provider)
        logger.warning(
            f"Using stub LLM provider - {env_var} not configured",
            extra={
                "service": "providers",
                "provider": "stub",
                "metadata": {"reason": "missing_api_key", "requested_provider": provider},
            },
        )
        return StubLLMProvider()

    timeout = float(settings.provider_timeout_llm_seconds)
    try:
        if provider == "openai":
            instance = provider_class(
                api_key=api_key, base_url=settings.openai_base_url, timeout=timeout
            )
        elif provider == "openrouter":
            instance = provider_class(
                api_key=api_key,
                http_referer=settings.openrouter_http_referer,
                x_title=settings.openrouter_x_title,
                timeout=timeout,
            )
        else:
            instance = provider_class(api_key=api_key, timeout=timeout)
    except Exception as e:
        logger.warning(
            f"Using stub LLM provider - failed to initialize {provider}: {e}",
            extra={
                "service": "providers",
                "provider": "stub",
                "error": str(e),
                "metadata": {"reason": "initialization_error", "requested_provider": provider},
            },
        )
        return StubLLMProvider()

    logger.info(
        "LLM provider initialized",
        extra={"service": "providers", "provider": provider},
    )
    return instance

