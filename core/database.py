"""Async SQLAlchemy database engine and session management.

Provides the async database layer with:
- An engine built lazily from DatabaseConfig (pool sizing for server
  databases, none for SQLite)
- FastAPI dependency injection via get_session()
- Automatic session lifecycle (commit on success, rollback on error)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import DatabaseConfig, HubConfig

# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async engine for ``config``."""
    if config.is_sqlite:
        # One shared connection, or each checkout sees an empty database
        pool = {"poolclass": StaticPool} if config.is_memory else {}
        return create_async_engine(config.url, echo=config.echo, **pool)
    return create_async_engine(
        config.url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        echo=config.echo,
        pool_pre_ping=True,
    )


def init_engine(config: DatabaseConfig | None = None) -> AsyncEngine:
    """Create the process-wide engine and session factory."""
    global _engine, _session_factory

    config = config or HubConfig.from_env().database
    _engine = build_engine(config)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        init_engine()
    return _session_factory


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session with automatic commit/rollback.

    Usage in FastAPI routes::

        @router.get("/rules")
        async def list_rules(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(RoutingRuleRow))
            return result.scalars().all()
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """Context manager variant for non-FastAPI code (scripts, jobs, etc.)."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def init_db() -> None:
    """Create tables from models (dev/test only)."""
    from core.models.base import Base
    import shop_returns.db_models  # noqa: F401

    if _engine is None:
        init_engine()
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the connection pool on shutdown."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
