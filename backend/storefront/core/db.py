"""Async database engine and session helpers.

The engine and session factory are built once by ``create_app`` and kept on
``app.state``; nothing in this module holds a live client at import time.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from storefront.core.config import Settings


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine described by the configuration."""

    url = make_url(config.DATABASE_URL)
    if url.get_backend_name() == "sqlite":
        # In-memory SQLite only lives as long as its single connection.
        return create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=config.DEBUG,
        )
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_recycle=config.DB_POOL_RECYCLE,
        echo=config.DEBUG,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async database session."""

    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        yield session
