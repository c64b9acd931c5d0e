"""Database engine and session management."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from wearaware.config.settings import get_settings
from wearaware.db.models import Base

settings = get_settings()

database_url = settings.database_url
if database_url.startswith("sqlite"):
    database_path = Path(make_url(database_url).database or "")
    if database_path.parent:
        database_path.parent.mkdir(parents=True, exist_ok=True)

engine = create_async_engine(database_url, echo=settings.sql_echo, future=True)
AsyncSessionFactory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a managed asynchronous SQLAlchemy session."""

    async with AsyncSessionFactory() as session:
        yield session


async def ping(session: AsyncSession) -> None:
    """Run a trivial query; raises if the database is unreachable."""

    await session.execute(text("SELECT 1"))


async def init_db() -> None:
    """Create database tables if they do not exist."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
