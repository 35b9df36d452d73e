"""
Database entity models.

Modules:
- pdf_projects: Photo collections exported to PDF
- search_history: Past search queries and their answers
- usage: Solver usage records
"""

from . import pdf_projects, search_history, usage
from .pdf_projects import PDFProject
from .search_history import SearchHistoryItem
from .usage import Usage

__all__ = ["PDFProject", "SearchHistoryItem", "Usage", "pdf_projects", "search_history", "usage"]
