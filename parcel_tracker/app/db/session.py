"""
Database engine configuration.

This module builds the async SQLAlchemy engine that serves as the single
database handle of the process, and manages its lifecycle.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import declarative_base
from parcel_tracker.app.core.config import settings

# Create declarative base for models
Base = declarative_base()


def engine_options(url: URL, echo: Optional[bool] = None) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine; pool sizing only outside SQLite."""
    options = {
        "echo": settings.db_echo if echo is None else echo,
    }

    if url.get_backend_name() != "sqlite":
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow

    return options


def build_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Create an async engine from settings.

    Args:
        database_url: Overrides settings.database_url
        echo: Overrides settings.db_echo

    Returns:
        A new AsyncEngine (no connection is opened until first use)
    """
    url = make_url(database_url or settings.database_url)
    return create_async_engine(url, **engine_options(url, echo))


async def create_schema(engine: AsyncEngine) -> None:
    """Create all registered tables that do not exist yet."""
    # Import models to ensure they are registered with Base
    from parcel_tracker.app.models.parcel import Parcel  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def open_engine(database_url: Optional[str] = None) -> AsyncIterator[AsyncEngine]:
    """
    Open the process-wide database handle.

    Creates the schema on entry and disposes of the connection pool on exit,
    whichever way the block is left.
    """
    engine = build_engine(database_url)
    try:
        await create_schema(engine)
        yield engine
    finally:
        await engine.dispose()
