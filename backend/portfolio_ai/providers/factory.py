import httpx

from portfolio_ai.errors import ConfigurationError, UnsupportedProviderError
from portfolio_ai.providers.base import DEFAULT_TIMEOUT, ChatProvider, ProviderConfig

SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")


def create_provider(
    config: ProviderConfig,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatProvider:
    """Instantiate the adapter named by ``config.provider`` (case-insensitive).

    No network I/O happens here; ``base_url`` is passed through as-is and the
    adapter falls back to its official host when it is empty.
    """
    if not config.provider:
        raise ConfigurationError("Provider type is required")
    if not config.api_key:
        raise ConfigurationError("API key is required")
    if not config.model:
        raise ConfigurationError("Model name is required")

    match config.provider.lower():
        case "gemini":
            from portfolio_ai.providers.google import GeminiProvider
            return GeminiProvider(config, timeout=timeout, transport=transport)
        case "openai":
            from portfolio_ai.providers.openai import OpenAIProvider
            return OpenAIProvider(config, timeout=timeout, transport=transport)
        case "anthropic":
            from portfolio_ai.providers.anthropic import AnthropicProvider
            return AnthropicProvider(config, timeout=timeout, transport=transport)
        case _:
            raise UnsupportedProviderError(config.provider, SUPPORTED_PROVIDERS)
