"""SQLAlchemy database session and engine configuration."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from zoo.config import get_settings


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _engine_options(async_url: str, pool_timeout: float) -> dict[str, Any]:
    """Pool options; SQLite pools do not take a checkout timeout."""
    if async_url.startswith("sqlite"):
        return {}
    return {"pool_timeout": pool_timeout, "pool_pre_ping": True}


settings = get_settings()
_async_url = _get_async_url(settings.database_url)

engine = create_async_engine(
    _async_url,
    future=True,
    **_engine_options(_async_url, settings.database_pool_timeout),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — yields an async DB session per request."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
