"""
Shared pytest fixtures.

Nothing here talks to a real AI provider: adapters get an
``httpx.MockTransport`` and sessions get a stub provider factory.
"""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portfolio_ai.config import Settings
from portfolio_ai.main import app
from portfolio_ai.providers import ChatMessage, ProviderConfig

# ── Settings ──────────────────────────────────────────────────────────────────


@pytest.fixture
def make_settings():
    """Build isolated Settings (no .env file) with a configured API key by default."""

    def _make(**overrides) -> Settings:
        values = {"ai_api_key": "test-key", "ai_provider": "openai", "ai_model": "gpt-test"} | overrides
        return Settings(_env_file=None, **values)

    return _make


# ── Fake provider API ─────────────────────────────────────────────────────────


class FakeAPI:
    """Records outgoing requests and answers each with a canned response."""

    def __init__(self, status_code: int = 200, json_body=None, content: bytes | None = None) -> None:
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def fake_api():
    def _make(status_code: int = 200, json_body=None, content: bytes | None = None) -> FakeAPI:
        return FakeAPI(status_code, json_body, content)

    return _make


# ── Stub provider for session tests ───────────────────────────────────────────


class StubProvider:
    name = "Stub"

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[list[ChatMessage]] = []
        self.base_url = "https://stub.invalid"
        self.model = "stub-model"

    async def chat(self, messages: list[ChatMessage]) -> str:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return f"reply {len(self.calls)}"


class StubFactory:
    def __init__(self, provider: StubProvider) -> None:
        self.provider = provider
        self.configs: list[ProviderConfig] = []

    def __call__(self, config: ProviderConfig) -> StubProvider:
        self.configs.append(config)
        return self.provider


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def stub_factory(stub_provider: StubProvider) -> StubFactory:
    return StubFactory(stub_provider)


# ── HTTP test client ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def client() -> AsyncClient:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
