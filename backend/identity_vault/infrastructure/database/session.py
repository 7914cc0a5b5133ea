"""SQLAlchemy database session and engine configuration."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from identity_vault.config import get_settings
from identity_vault.infrastructure.database.base import Base


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    return create_async_engine(_get_async_url(database_url), echo=echo, future=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@lru_cache
def get_engine() -> AsyncEngine:
    """Process-wide engine built from settings on first use."""
    settings = get_settings()
    return build_engine(settings.database_url, echo=(settings.app_env == "development"))


@asynccontextmanager
async def get_db_session(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on success and rolls back on error."""
    factory = session_factory or build_session_factory(get_engine())
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_models(engine: AsyncEngine | None = None) -> None:
    """Create any missing tables. Schema migrations are handled outside this package."""
    from identity_vault.infrastructure.database import models  # noqa: F401  (registers tables)

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
