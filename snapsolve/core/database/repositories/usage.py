"""
Usage repository: append-only solver usage records.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.usage import Usage
from .base import AsyncBaseRepository, AsyncQueryBuilder


class UsageRepository(AsyncBaseRepository[Usage]):
    """Repository for usage records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Usage)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Usage]:
        stmt = select(Usage).order_by(Usage.timestamp.desc())  # type: ignore
        if filters:
            stmt = AsyncQueryBuilder.apply_filters(stmt, Usage, filters)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def append(self, duration: float) -> Usage:
        """Record one solver run lasting ``duration`` seconds."""
        return await self.create(Usage(duration=max(0.0, duration)))

    async def count(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(Usage))
        return int(result.one())

    async def total_duration(self) -> float:
        result = await self.session.exec(select(func.coalesce(func.sum(Usage.duration), 0.0)))
        return float(result.one())
