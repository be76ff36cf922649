"""Conversation session for the terminal assistant.

One session per page load (one per WebSocket connection). A turn:
  1. Configuration gate: no API key means the integration is off
  2. Rate-limit gate: at most ``ai_max_conversations`` exchanges
  3. Exchange: system prompt + recent history + new message -> provider
  4. On success only: append both messages, trim history, count the turn

Gates run before any mutation, so a rejected or failed turn leaves the
session exactly as it was.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from portfolio_ai.config import Settings, settings
from portfolio_ai.errors import AIChatError, ConfigurationError, ProviderHttpError, RateLimitExceeded
from portfolio_ai.prompt import get_system_prompt
from portfolio_ai.providers import ChatMessage, ChatProvider, ProviderConfig, create_provider

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."
UNAVAILABLE_MESSAGE = "The AI service is unavailable right now. Please try again later."

ProviderFactory = Callable[[ProviderConfig], ChatProvider]


@dataclass(frozen=True)
class ChatOutcome:
    success: bool
    content: str | None = None
    remaining: int | None = None
    error: str | None = None
    error_code: str | None = None


class ConversationSession:
    def __init__(
        self,
        config: Settings = settings,
        *,
        system_prompt: str | None = None,
        provider_factory: ProviderFactory | None = None,
    ) -> None:
        self._settings = config
        self._system_prompt = system_prompt
        self._provider_factory = provider_factory or partial(create_provider, timeout=config.ai_request_timeout)
        self._history: list[ChatMessage] = []
        self._turn_count = 0
        # submit() awaits between its checks and its mutations
        self._lock = asyncio.Lock()

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def limit(self) -> int:
        return self._settings.ai_max_conversations

    @property
    def history_window(self) -> int:
        return self._settings.ai_max_history

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        return tuple(self._history)

    @property
    def turn_count(self) -> int:
        return self._turn_count

    def is_configured(self) -> bool:
        return bool(self._settings.ai_api_key.get_secret_value())

    def remaining_turns(self) -> int:
        return max(0, self.limit - self._turn_count)

    # ── Public interface ──────────────────────────────────────────────────────

    async def submit(self, text: str) -> ChatOutcome:
        """Run one exchange. Never raises: every failure becomes a ChatOutcome."""
        async with self._lock:
            try:
                self._check_gates()
                reply = await self._exchange(text)
            except ProviderHttpError as exc:
                logger.warning("%s request failed with HTTP %s: %s", exc.provider, exc.status_code, exc.body)
                return self._failure(UNAVAILABLE_MESSAGE, exc.code)
            except AIChatError as exc:
                logger.info("AI chat turn rejected (%s): %s", exc.code, exc.message)
                return self._failure(exc.message or NETWORK_ERROR_MESSAGE, exc.code)
            except Exception as exc:
                logger.exception("AI chat error")
                return self._failure(str(exc) or NETWORK_ERROR_MESSAGE, AIChatError.code)

        return ChatOutcome(success=True, content=reply, remaining=self.remaining_turns())

    # ── Internals ─────────────────────────────────────────────────────────────

    def _check_gates(self) -> None:
        if not self.is_configured():
            raise ConfigurationError(
                f"AI chat is not configured. Contact {self._settings.site_owner} for more information."
            )
        if self._turn_count >= self.limit:
            raise RateLimitExceeded(
                self.limit,
                f"You've reached the limit of {self.limit} AI conversations per session. "
                "Refresh the page to start a new session, or use the commands to explore!",
            )

    def _provider_config(self) -> ProviderConfig:
        return ProviderConfig(
            provider=self._settings.ai_provider,
            model=self._settings.ai_model,
            api_key=self._settings.ai_api_key.get_secret_value(),
            base_url=self._settings.ai_base_url or None,
        )

    async def _exchange(self, text: str) -> str:
        provider = self._provider_factory(self._provider_config())

        user_message = ChatMessage(role="user", content=text)
        system_prompt = self._system_prompt
        if system_prompt is None:
            system_prompt = get_system_prompt(self._settings.site_owner, self._settings.ai_context_path)
        messages = [ChatMessage(role="system", content=system_prompt), *self._history, user_message]

        reply = await provider.chat(messages)

        self._history.append(user_message)
        self._history.append(ChatMessage(role="assistant", content=reply))
        # Oldest first; window 0 keeps nothing
        del self._history[: max(0, len(self._history) - self.history_window)]
        self._turn_count += 1

        logger.info(
            "AI chat turn %d/%d via %s (%d messages in history)",
            self._turn_count,
            self.limit,
            self._settings.ai_provider,
            len(self._history),
        )
        return reply

    def _failure(self, error: str, code: str) -> ChatOutcome:
        return ChatOutcome(success=False, error=error, error_code=code, remaining=self.remaining_turns())
