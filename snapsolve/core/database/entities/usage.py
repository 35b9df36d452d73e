"""
Usage entity.

A timestamp and a duration for each solver run. No derived state.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_column, utc_now


class Usage(Base, table=True):
    """Table: ss_usage"""

    __tablename__ = "ss_usage"

    id: Optional[int] = Field(default=None, primary_key=True)
    timestamp: datetime = Field(default_factory=utc_now, sa_column=timestamp_column(index=True))
    duration: float = Field(default=0.0, ge=0, description="Seconds")

    def __repr__(self) -> str:
        return f"Usage(id={self.id}, timestamp={self.timestamp}, duration={self.duration})"
