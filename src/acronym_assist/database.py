"""Async SQLAlchemy engine, session factory and declarative base."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from acronym_assist.config import settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def create_engine(database_url: str | None = None, echo: bool = False) -> AsyncEngine:
    """Create an async engine.

    Args:
        database_url: SQLAlchemy async URL. Defaults to ``settings.database_url``.
        echo: Log every SQL statement (debugging only).

    Returns:
        AsyncEngine bound to the given database.
    """
    return create_async_engine(database_url or settings.database_url, echo=echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory for the store.

    ``expire_on_commit=False`` keeps loaded attributes readable after commit,
    which the store relies on when converting rows to schemas.
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they are registered with Base.metadata
    from acronym_assist import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
