"""
Search history repository.

Queries are unique: adding a query that already exists leaves the stored
row untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.search_history import SearchHistoryItem
from .base import AsyncBaseRepository, AsyncQueryBuilder

logger = logging.getLogger(__name__)


class SearchHistoryRepository(AsyncBaseRepository[SearchHistoryItem]):
    """Repository for past searches."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SearchHistoryItem)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[SearchHistoryItem]:
        """List history items, newest first."""
        stmt = select(SearchHistoryItem).order_by(SearchHistoryItem.timestamp.desc())  # type: ignore
        if filters:
            stmt = AsyncQueryBuilder.apply_filters(stmt, SearchHistoryItem, filters)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_query(self, query: str) -> Optional[SearchHistoryItem]:
        result = await self.session.exec(select(SearchHistoryItem).where(SearchHistoryItem.query == query))
        return result.first()

    async def add_item(self, query: str, result: str) -> Optional[SearchHistoryItem]:
        """Record a search unless the same query text is already stored.

        Returns:
            The new item, or None when the query was a duplicate or the save failed
        """
        if await self.get_by_query(query) is not None:
            logger.debug("SearchHistoryRepository.add_item: duplicate query skipped")
            return None
        try:
            return await self.create(SearchHistoryItem(query=query, result=result))
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to save search history item: %s", e, exc_info=True)
            return None

    async def delete_item(self, item_id: str) -> bool:
        try:
            return await self.delete(item_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to delete search history item %s: %s", item_id, e, exc_info=True)
            return False

    async def clear_all(self) -> int:
        """Delete every history item and return how many were removed."""
        items = await self.list()
        try:
            for item in items:
                await self.session.delete(item)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to clear search history: %s", e, exc_info=True)
            return 0
        return len(items)
