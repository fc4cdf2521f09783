# tests/conftest.py
from typing import Any

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dealflow.config import Settings
from dealflow.entrypoints.fastapi_app import create_app
from dealflow.integrations.base import DeliveryResult
from dealflow.models import Base


class RecordingSink:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def deliver(self, event_type: str, payload: dict[str, Any]) -> DeliveryResult:
        self.events.append((event_type, payload))
        return DeliveryResult(ok=self.ok, error=None if self.ok else "boom")


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, API_KEY=None, WEBHOOK_URL=None, ZAPIER_WEBHOOK_URL=None)


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def bare_engine():
    """In-memory DB with no tables: every write fails."""
    engine = _memory_engine()
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def app(settings, engine, sink):
    return create_app(settings, engine=engine, sink=sink)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
