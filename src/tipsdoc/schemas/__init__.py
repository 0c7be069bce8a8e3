"""Shared schemas for tipsdoc."""

from tipsdoc.schemas.document import (
    Category,
    Document,
    Example,
    ResultTable,
    Section,
    TocEntry,
)
from tipsdoc.schemas.report import (
    AnchorReport,
    Issue,
    IssueKind,
    SnippetResult,
    SnippetStatus,
    ValidationReport,
)

__all__ = [
    "AnchorReport",
    "Category",
    "Document",
    "Example",
    "Issue",
    "IssueKind",
    "ResultTable",
    "Section",
    "SnippetResult",
    "SnippetStatus",
    "TocEntry",
    "ValidationReport",
]
