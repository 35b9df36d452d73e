"""Tests for engine helpers and schema creation."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect

from snapsolve.core.database.session import init_db
from snapsolve.core.database.utils import create_engine

pytestmark = pytest.mark.asyncio


@pytest.mark.parametrize(
    "url,driver",
    [
        ("sqlite:///./snapsolve.db", "aiosqlite"),
        ("sqlite+pysqlite:///:memory:", "aiosqlite"),
        ("sqlite+aiosqlite:///:memory:", "aiosqlite"),
    ],
)
async def test_create_engine_uses_async_sqlite_driver(url: str, driver: str) -> None:
    engine = create_engine(url)
    try:
        assert engine.url.drivername == f"sqlite+{driver}"
    finally:
        await engine.dispose()


async def test_init_db_creates_tables() -> None:
    engine = create_engine("sqlite:///:memory:")
    try:
        await init_db(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert {"ss_pdf_projects", "ss_search_history", "ss_usage"} <= set(tables)
    finally:
        await engine.dispose()
