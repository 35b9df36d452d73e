"""PDF export of photo projects."""

from .exporter import Box, PageLayout, export_project_pdf, fit_image, layout_slots

__all__ = ["Box", "PageLayout", "export_project_pdf", "fit_image", "layout_slots"]
