"""Validation report models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from tipsdoc.schemas.document import TocEntry


class IssueKind(str, Enum):
    """Kinds of non-fatal validation findings."""

    DUPLICATE_ANCHOR = "DuplicateAnchor"
    BROKEN_ANCHOR = "BrokenAnchor"
    UNPARSEABLE_SNIPPET = "UnparseableSnippet"


class SnippetStatus(str, Enum):
    """Outcome of a syntax-only snippet check."""

    VALID = "valid"
    UNKNOWN = "unknown"
    INVALID = "invalid"
    SKIPPED = "skipped"


class Issue(BaseModel):
    """A single validation finding."""

    kind: IssueKind
    message: str
    line: int | None = None
    column: int | None = None
    slug: str | None = None


class SnippetResult(BaseModel):
    """Result of checking one example.

    Attributes:
        status: Check outcome.
        section_slug: Slug of the owning section.
        line: Document line of the opening fence.
        error_line: Line within the snippet reported by the parser.
        error_column: Column within the snippet reported by the parser.
        dialect: Dialect that accepted the snippet when the generic grammar did not.
        message: Parser message for invalid snippets.
    """

    status: SnippetStatus
    section_slug: str
    line: int
    error_line: int | None = None
    error_column: int | None = None
    dialect: str | None = None
    message: str | None = None

    @property
    def document_line(self) -> int:
        """Line in the document the parser error points at."""
        if self.error_line is None:
            return self.line
        # error lines are 1-based within the code, which starts after the fence
        return self.line + self.error_line


class AnchorReport(BaseModel):
    """Broken links and duplicate slugs found in a document."""

    broken: list[TocEntry] = Field(default_factory=list)
    duplicates: list[Issue] = Field(default_factory=list)

    @property
    def issues(self) -> list[Issue]:
        broken = [
            Issue(
                kind=IssueKind.BROKEN_ANCHOR,
                message=f"link '{entry.label}' points to missing anchor #{entry.target_slug}",
                line=entry.line,
                slug=entry.target_slug,
            )
            for entry in self.broken
        ]
        return sorted(
            [*self.duplicates, *broken],
            key=lambda issue: (issue.line or 0, issue.kind.value),
        )


class ValidationReport(BaseModel):
    """Accumulated findings for one validation run."""

    path: str | None = None
    sections: int = 0
    examples: int = 0
    issues: list[Issue] = Field(default_factory=list)
    snippets: list[SnippetResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def count(self, kind: IssueKind) -> int:
        return sum(1 for issue in self.issues if issue.kind == kind)

    def snippet_count(self, status: SnippetStatus) -> int:
        return sum(1 for result in self.snippets if result.status == status)
