"""
Centralized database layer for SnapSolve.

This package provides a unified location for all database entities and repositories.

Structure:
- entities/: SQLModel table models (projects, search history, usage)
- repositories/: Async data access layer, one module per entity
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session, repo bundle)
"""

from .base import Base
from .utils import (
    SqlRepoBundle,
    build_sql_repos,
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "SqlRepoBundle",
    "build_sql_repos",
    "create_all",
    "create_engine",
    "create_sessionmaker",
]
