"""
Search history entity.

One row per distinct query text. Re-running a query does not add a row.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlmodel import Field

from ..base import Base, timestamp_column, utc_now


class SearchHistoryItem(Base, table=True):
    """A past search and its answer.

    Table: ss_search_history
    """

    __tablename__ = "ss_search_history"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=64)
    query: str = Field(unique=True, index=True)
    result: str = Field(default="")
    timestamp: datetime = Field(default_factory=utc_now, sa_column=timestamp_column(index=True))

    def __repr__(self) -> str:
        return f"SearchHistoryItem(id={self.id}, query={self.query!r})"
