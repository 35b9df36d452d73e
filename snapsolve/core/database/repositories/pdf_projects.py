"""
PDF project repository.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.pdf_projects import PDFProject
from .base import AsyncBaseRepository, AsyncQueryBuilder

logger = logging.getLogger(__name__)


class PDFProjectRepository(AsyncBaseRepository[PDFProject]):
    """Repository for PDF projects."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PDFProject)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[PDFProject]:
        """List projects, most recently modified first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (title, is_landscape, photos_per_page)
        """
        stmt = select(PDFProject).order_by(PDFProject.modified_date.desc())  # type: ignore
        if filters:
            stmt = AsyncQueryBuilder.apply_filters(stmt, PDFProject, filters)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_recent(self, limit: int = 10) -> List[PDFProject]:
        return await self.list(limit=limit)

    async def save(self, project: PDFProject) -> PDFProject:
        """Persist in-place changes made through the project's mutation methods."""
        logger.debug("PDFProjectRepository.save: %s", project.id)
        return await self.update(project)
