"""
Database session management.

One async engine per process. PostgreSQL (asyncpg) in deployment; a
``sqlite+aiosqlite`` URL works for local runs, without pool sizing.
"""

from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from edimaak.app.core.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options for the given backend."""
    options: Dict[str, Any] = {"echo": settings.db_echo}
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return options


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    database_url = database_url or settings.database_url
    return create_async_engine(database_url, **engine_options(database_url))


engine = build_engine()

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.

    Uncommitted work is rolled back if the endpoint raises.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
