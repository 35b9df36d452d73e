"""
Async repositories, one module per entity.

Modules:
- base: AsyncBaseRepository interface and AsyncQueryBuilder utilities
- pdf_projects: PDF project CRUD
- search_history: Search history with query de-duplication
- usage: Solver usage records
"""

from .base import AsyncBaseRepository, AsyncQueryBuilder
from .pdf_projects import PDFProjectRepository
from .search_history import SearchHistoryRepository
from .usage import UsageRepository

__all__ = [
    "AsyncBaseRepository",
    "AsyncQueryBuilder",
    "PDFProjectRepository",
    "SearchHistoryRepository",
    "UsageRepository",
]
