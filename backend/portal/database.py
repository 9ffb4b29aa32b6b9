"""Async database engine and session management for the local cache."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from portal.config import get_settings

settings = get_settings()

engine_kwargs = {"echo": settings.debug}
if settings.database_url.startswith("sqlite"):
    # aiosqlite connections must not be shared between event loops
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(settings.database_url, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency providing a database session per request."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create all tables."""
    from portal.models import cache_entry  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """Drop all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
