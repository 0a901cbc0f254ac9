"""Async engine and session factory for the payments database."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings

_POOLER_MARKERS = ("pooler", "pgbouncer")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for a database URL.

    Transaction-mode poolers (PgBouncer, Supavisor) cannot hold asyncpg's
    prepared statements, so the statement cache is turned off for them.
    """
    connect_args: dict[str, Any] = {}
    if url.startswith("postgresql+asyncpg") and any(m in url for m in _POOLER_MARKERS):
        connect_args["statement_cache_size"] = 0

    return create_async_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded rows usable after commit; flushing is explicit."""
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


engine = build_engine(settings.async_database_url, echo=settings.debug)
async_session_factory = build_session_factory(engine)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one request."""
    async with async_session_factory() as session:
        yield session
