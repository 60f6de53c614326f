"""
Application Queries

Read-only operations that touch no store.

Contains:
    - PreviewCoverageWindowQuery / Handler: square search window for map previews
"""

from src.application.queries.preview_coverage_window import (
    PreviewCoverageWindowQuery,
    PreviewCoverageWindowQueryHandler,
)

__all__ = [
    "PreviewCoverageWindowQuery",
    "PreviewCoverageWindowQueryHandler",
]
