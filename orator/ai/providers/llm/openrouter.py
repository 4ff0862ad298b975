from orator.ai.providers.llm.openai import ChatCompletionsHTTPProvider
from orator.ai.providers.registry import register_llm_provider


@register_llm_provider
class OpenRouterProvider(ChatCompletionsHTTPProvider):
    DEFAULT_MODEL = "openai/gpt-3.5-turbo"
    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

    @classmethod
    def resolve_model(cls, model: str | None) -> str | None:
        m = (model or "").strip()
        # OpenRouter model IDs are always vendor-prefixed
        if not m or "/" not in m:
            return cls.DEFAULT_MODEL
        return m

    def __init__(
        self,
        api_key: str,
        http_referer: str | None = None,
        x_title: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout)
        self._http_referer = (http_referer or "").strip() or None
        self._x_title = (x_title or "").strip() or None

    @property
    def name(self) -> str:
        return "openrouter"

    def _get_headers(self) -> dict[str, str]:
        headers = super()._get_headers()
        if self._http_referer:
            headers["HTTP-Referer"] = self._http_referer
        if self._x_title:
            headers["X-Title"] = self._x_title
        return headers
