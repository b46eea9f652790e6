"""Shared fixtures: an in-memory SQLite database per test."""
import pytest_asyncio

from core.database import close_db, get_session_context, init_db, init_engine

from factories import MEMORY_DB


@pytest_asyncio.fixture
async def session():
    init_engine(MEMORY_DB)
    await init_db()
    async with get_session_context() as session:
        yield session
    await close_db()
