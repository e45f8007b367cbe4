"""Async engine, session factory and the per-request session dependency.

One engine per process. Each request gets its own AsyncSession; mutations
commit through `transaction(db)`, and closing the session rolls back
anything left uncommitted (e.g. the read-only auth lookup).
"""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the ORM models (only users; the rest is raw SQL)."""


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,  # drop dead connections instead of failing the request
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        yield session


async def ping() -> None:
    """Round-trip to the store; raises if it is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
