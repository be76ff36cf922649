import httpx

from portfolio_ai.errors import EmptyResponseError
from portfolio_ai.providers.base import (
    DEFAULT_TIMEOUT,
    MAX_TOKENS,
    ChatMessage,
    ProviderConfig,
    dig,
    normalize_base_url,
    post_json,
)

_DEFAULT_BASE_URL = "https://api.openai.com"
_TEMPERATURE = 0.7


class OpenAIProvider:
    """Adapter for the OpenAI Chat Completions API and compatible relays."""

    name = "OpenAI"

    def __init__(
        self,
        config: ProviderConfig,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.model = config.model
        self.base_url = normalize_base_url(config.base_url or _DEFAULT_BASE_URL)
        self._api_key = config.api_key
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1/chat/completions"

    def build_payload(self, messages: list[ChatMessage]) -> dict:
        # System prompt stays inline; OpenAI understands the "system" role.
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in messages],
            "max_tokens": MAX_TOKENS,
            "temperature": _TEMPERATURE,
        }

    async def chat(self, messages: list[ChatMessage]) -> str:
        data = await post_json(
            self.name,
            self.endpoint,
            self.build_payload(messages),
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
            transport=self._transport,
        )
        content = dig(data, "choices", 0, "message", "content")
        if not isinstance(content, str) or not content:
            raise EmptyResponseError(self.name)
        return content
