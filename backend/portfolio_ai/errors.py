"""Error taxonomy for the AI chat layer.

Adapters raise these; ``ConversationSession.submit`` is the only place they
are caught and turned into a ``ChatOutcome`` for the terminal UI.
"""

import json


class AIChatError(Exception):
    """Base class. ``code`` is machine-readable and forwarded to the UI."""

    code = "AI_CHAT_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AIChatError):
    """A required provider field (provider, API key, model) is missing."""

    code = "NOT_CONFIGURED"


class UnsupportedProviderError(AIChatError):
    code = "UNSUPPORTED_PROVIDER"

    def __init__(self, provider: str, supported: tuple[str, ...]) -> None:
        super().__init__(f"Unknown provider: {provider}. Supported providers: {', '.join(supported)}")
        self.provider = provider
        self.supported = supported


class RateLimitExceeded(AIChatError):
    """The per-session conversation limit has been reached."""

    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, limit: int, message: str) -> None:
        super().__init__(message)
        self.limit = limit


class ProviderHttpError(AIChatError):
    """Provider answered with a non-2xx status.

    ``body`` is the parsed JSON error body, or ``{}`` when it was not JSON.
    """

    code = "PROVIDER_HTTP_ERROR"

    def __init__(self, provider: str, status_code: int, body: dict | list) -> None:
        super().__init__(f"{provider} API error: {status_code} - {json.dumps(body, ensure_ascii=False)}")
        self.provider = provider
        self.status_code = status_code
        self.body = body


class EmptyResponseError(AIChatError):
    """A 2xx response without any extractable reply text."""

    code = "EMPTY_RESPONSE"

    def __init__(self, provider: str) -> None:
        super().__init__(f"Empty response from {provider} API")
        self.provider = provider


class ProviderNetworkError(AIChatError):
    """The request never completed (DNS, connect, timeout)."""

    code = "NETWORK_ERROR"
