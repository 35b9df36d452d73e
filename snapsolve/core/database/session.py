"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from snapsolve.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def init_db(db_engine: AsyncEngine | None = None) -> None:
    """
    Initialize the database.

    Creates all tables registered on the SQLModel metadata.

    Args:
        db_engine: Engine to use, the global engine when omitted
    """
    # Register entity tables on the metadata before creating them
    from . import entities  # noqa: F401

    await create_all(db_engine or engine)
