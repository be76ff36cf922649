import httpx

from portfolio_ai.errors import EmptyResponseError
from portfolio_ai.providers.base import (
    DEFAULT_TIMEOUT,
    ChatMessage,
    ProviderConfig,
    dig,
    normalize_base_url,
    post_json,
    split_system,
)

_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"


class GeminiProvider:
    """Adapter for the Gemini ``generateContent`` REST API.

    Gemini has no "system" or "assistant" roles: the system prompt travels in
    ``systemInstruction`` and assistant turns are sent with the "model" role.
    The API key goes in the query string, not in a header.
    """

    name = "Gemini"

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
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def build_payload(self, messages: list[ChatMessage]) -> dict:
        system, conversation = split_system(messages)
        body: dict = {
            "contents": [
                {
                    "role": "model" if m.role == "assistant" else "user",
                    "parts": [{"text": m.content}],
                }
                for m in conversation
            ]
        }
        if system is not None:
            body["systemInstruction"] = {"parts": [{"text": system}]}
        return body

    async def chat(self, messages: list[ChatMessage]) -> str:
        data = await post_json(
            self.name,
            self.endpoint,
            self.build_payload(messages),
            params={"key": self._api_key},
            timeout=self._timeout,
            transport=self._transport,
        )
        content = dig(data, "candidates", 0, "content", "parts", 0, "text")
        if not isinstance(content, str) or not content:
            raise EmptyResponseError(self.name)
        return content
