"""Pytest configuration and shared fixtures."""

import random
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from acronym_assist.database import create_engine, create_session_factory, init_models
from acronym_assist.schemas import AcronymCreate
from acronym_assist.store import InMemoryAcronymStore, SqlAlchemyAcronymStore


class FakeClock:
    """Monotonic clock advanced by hand (seconds)."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# In-Memory Store Fixtures
# ============================================================================


@pytest.fixture
def store() -> InMemoryAcronymStore:
    """Empty in-memory store declaring every capability."""
    return InMemoryAcronymStore()


@pytest.fixture
async def seeded_store(store: InMemoryAcronymStore) -> InMemoryAcronymStore:
    """In-memory store holding a few common acronyms."""
    for acronym, expansion in [
        ("ML", "machine learning"),
        ("API", "application programming interface"),
        ("DB", "database"),
    ]:
        await store.add_acronym(AcronymCreate(acronym=acronym, expansion=expansion))
    return store


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic fallback suffixes."""
    return random.Random(1234)


# ============================================================================
# SQLAlchemy Fixtures (temporary SQLite file)
# ============================================================================


@pytest.fixture
async def sql_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on a throwaway SQLite file.

    A file (not :memory:) gives every session its own connection, so
    background editor tasks never share a transaction.
    """
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'acronyms.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sql_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(sql_engine)


@pytest.fixture
def sql_store(session_factory: async_sessionmaker[AsyncSession]) -> SqlAlchemyAcronymStore:
    """SQLAlchemy store over the temporary database."""
    return SqlAlchemyAcronymStore(session_factory)
