"""WebSocket endpoint for the terminal's free-text AI chat.

Endpoint: /ws/chat

Each connection gets its own ConversationSession, so history and the
conversation limit reset whenever the page is reloaded.

Protocol (JSON over WebSocket):

Client → Server:
    {"content": "<user message>"}   (text frames only; binary frames get INVALID_PAYLOAD)

Server → Client:
    {"type": "status", "configured": true, "remaining": 10, "limit": 10}   (on connect)
    {"type": "reply",  "content": "<assistant reply>", "remaining": 9}
    {"type": "error",  "detail": "<message>", "code": "<ERROR_CODE>", "remaining": 9}
"""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from portfolio_ai.chat import ConversationSession
from portfolio_ai.schemas.chat import ChatIn

logger = logging.getLogger(__name__)

router = APIRouter()


def _new_session() -> ConversationSession:
    return ConversationSession()


@router.websocket("/ws/chat")
async def websocket_chat(websocket: WebSocket) -> None:
    await websocket.accept()

    async def send(data: dict) -> None:
        await websocket.send_text(json.dumps(data))

    session = _new_session()
    await send(
        {
            "type": "status",
            "configured": session.is_configured(),
            "remaining": session.remaining_turns(),
            "limit": session.limit,
        }
    )

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            try:
                user_message = ChatIn.model_validate_json(raw).content.strip() if raw is not None else ""
            except ValidationError:
                user_message = ""
            if not user_message:
                await send(
                    {
                        "type": "error",
                        "detail": 'Invalid payload — expected {"content": "..."}',
                        "code": "INVALID_PAYLOAD",
                        "remaining": session.remaining_turns(),
                    }
                )
                continue

            outcome = await session.submit(user_message)
            if outcome.success:
                await send({"type": "reply", "content": outcome.content, "remaining": outcome.remaining})
            else:
                await send(
                    {
                        "type": "error",
                        "detail": outcome.error,
                        "code": outcome.error_code,
                        "remaining": outcome.remaining,
                    }
                )
    except WebSocketDisconnect:
        logger.debug("Chat WebSocket closed after %d turn(s)", session.turn_count)
