"""REST endpoint describing the AI chat integration.

GET /api/v1/chat/status — whether chat is enabled and its per-session limits

The API key and base URL are never exposed.
"""

from fastapi import APIRouter

from portfolio_ai.config import settings
from portfolio_ai.schemas.chat import ChatStatus

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/status", response_model=ChatStatus)
async def get_chat_status() -> ChatStatus:
    return ChatStatus(
        configured=bool(settings.ai_api_key.get_secret_value()),
        provider=settings.ai_provider,
        model=settings.ai_model,
        limit=settings.ai_max_conversations,
        history_window=settings.ai_max_history,
    )
