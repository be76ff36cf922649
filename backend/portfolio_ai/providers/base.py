import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from portfolio_ai.errors import ProviderHttpError, ProviderNetworkError

logger = logging.getLogger(__name__)

_TRAILING_SLASHES = re.compile(r"/+$")
_TRAILING_V1 = re.compile(r"/v1/?$")

DEFAULT_TIMEOUT = 60.0
MAX_TOKENS = 1000


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ProviderConfig:
    provider: str
    model: str
    api_key: str
    base_url: str | None = None  # relays / proxies; None = official host


class ChatProvider(Protocol):
    """Common capability of every AI provider adapter."""

    name: str
    base_url: str
    model: str

    async def chat(self, messages: list[ChatMessage]) -> str:
        """Send the full message list and return the assistant reply text."""
        ...  # pragma: no cover


def normalize_base_url(url: str) -> str:
    """Strip trailing slashes, then one trailing ``/v1`` segment.

    Lets callers pass either a bare host or a host with ``/v1``.
    """
    return _TRAILING_V1.sub("", _TRAILING_SLASHES.sub("", url))


def split_system(messages: list[ChatMessage]) -> tuple[str | None, list[ChatMessage]]:
    """Return the first system message's content and the remaining non-system messages."""
    system = next((m.content for m in messages if m.role == "system"), None)
    return system, [m for m in messages if m.role != "system"]


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None at the first missing step."""
    for key in path:
        if isinstance(key, int):
            if not isinstance(data, list) or not -len(data) <= key < len(data):
                return None
        elif not isinstance(data, dict) or key not in data:
            return None
        data = data[key]
    return data


def _error_body(response: httpx.Response) -> dict | list:
    # A body that is not structured JSON becomes {} so error handling never raises twice.
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict | list) else {}


async def post_json(
    provider: str,
    url: str,
    payload: dict,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Issue one JSON POST and return the decoded body of a 2xx response."""
    request_headers = {"Content-Type": "application/json", **(headers or {})}
    logger.debug("POST %s (%s)", url, provider)
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(url, json=payload, headers=request_headers, params=params)
    except httpx.RequestError as exc:
        raise ProviderNetworkError(str(exc)) from exc

    if not response.is_success:
        raise ProviderHttpError(provider, response.status_code, _error_body(response))

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        # Not JSON at all: no reply text can be extracted from it.
        return {}
