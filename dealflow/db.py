# dealflow/db.py
from __future__ import annotations

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings
from .models import Base


def build_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(settings.DEALFLOW_DB_URL, echo=False, future=True)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency that yields a session from the app's own session maker
    (set up by create_app; tests swap in an in-memory one).
    """
    maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with maker() as session:
        yield session
