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
    split_system,
)

_DEFAULT_BASE_URL = "https://api.anthropic.com"
_API_VERSION = "2023-06-01"


class AnthropicProvider:
    """Adapter for the Anthropic Messages API and compatible relays."""

    name = "Anthropic"

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
        return f"{self.base_url}/v1/messages"

    def build_payload(self, messages: list[ChatMessage]) -> dict:
        system, conversation = split_system(messages)
        body: dict = {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "messages": [m.to_dict() for m in conversation],
        }
        if system is not None:
            body["system"] = system
        return body

    async def chat(self, messages: list[ChatMessage]) -> str:
        data = await post_json(
            self.name,
            self.endpoint,
            self.build_payload(messages),
            headers={"x-api-key": self._api_key, "anthropic-version": _API_VERSION},
            timeout=self._timeout,
            transport=self._transport,
        )
        content = dig(data, "content", 0, "text")
        if not isinstance(content, str) or not content:
            raise EmptyResponseError(self.name)
        return content
