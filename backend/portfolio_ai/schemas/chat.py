from pydantic import BaseModel


class ChatStatus(BaseModel):
    configured: bool
    provider: str
    model: str
    limit: int
    history_window: int


class ChatIn(BaseModel):
    content: str
