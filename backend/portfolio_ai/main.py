import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_ai.api import api_router
from portfolio_ai.api.chat_ws import router as chat_ws_router
from portfolio_ai.config import settings

# ── Logging setup ────────────────────────────────────────────────────────────

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
logging.root.addHandler(_handler)
logging.root.setLevel(logging.DEBUG if settings.debug else logging.INFO)
# Quiet down noisy third-party loggers (httpx logs full URLs, including Gemini's ?key=)
for _name in ("httpcore", "httpx"):
    logging.getLogger(_name).setLevel(logging.WARNING)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(chat_ws_router)  # WebSocket: /ws/chat


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
