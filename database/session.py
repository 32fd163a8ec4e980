"""
Async SQLAlchemy engine and session factory for PostgreSQL.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings
from database.models import Base

logger = logging.getLogger(__name__)

ASYNC_PG_DRIVER = "postgresql+asyncpg"
_LIBPQ_SCHEMES = ("postgres", "postgresql")


def resolve_database_url(raw: str) -> Tuple[URL, Optional[str]]:
    """
    Point plain libpq URLs (``postgres://``, ``postgresql://``) at asyncpg.

    Returns the URL and any ``sslmode`` it carried; asyncpg takes the mode
    as a connect argument rather than a query parameter, so it is removed
    from the URL.
    """
    url = make_url(raw)
    if url.drivername in _LIBPQ_SCHEMES:
        url = url.set(drivername=ASYNC_PG_DRIVER)

    sslmode = None
    if url.drivername == ASYNC_PG_DRIVER and "sslmode" in url.query:
        sslmode = url.query["sslmode"]
        if isinstance(sslmode, tuple):
            sslmode = sslmode[-1]
        url = url.difference_update_query(["sslmode"])
    return url, sslmode


def build_connect_args(settings: Settings, url_sslmode: Optional[str] = None) -> Dict[str, Any]:
    """``DB_SSL`` wins over a ``sslmode`` found in the URL."""
    ssl = settings.db_ssl or url_sslmode
    return {"ssl": ssl} if ssl else {}


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled engine described by ``settings``."""
    url, url_sslmode = resolve_database_url(settings.database_url)
    return create_async_engine(
        url,
        echo=settings.db_echo,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        connect_args=build_connect_args(settings, url_sslmode),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables registered on ``Base`` (no-op for existing ones)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def check_connection(engine: AsyncEngine) -> bool:
    """Return True when a trivial query succeeds."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("Database connection check failed")
        return False
