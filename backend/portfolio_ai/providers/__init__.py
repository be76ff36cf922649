from portfolio_ai.providers.base import ChatMessage, ChatProvider, ProviderConfig, normalize_base_url
from portfolio_ai.providers.factory import SUPPORTED_PROVIDERS, create_provider

__all__ = [
    "SUPPORTED_PROVIDERS",
    "ChatMessage",
    "ChatProvider",
    "ProviderConfig",
    "create_provider",
    "normalize_base_url",
]
