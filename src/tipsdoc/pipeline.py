"""Load, validate and render a tips document."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tipsdoc.anchors import validate_anchors
from tipsdoc.config import TIPSDOC_SQL_DIALECTS
from tipsdoc.doc_parser import parse_document
from tipsdoc.exceptions import DocumentError
from tipsdoc.html_render import render_site
from tipsdoc.logging_config import get_logger
from tipsdoc.schemas import Document, Issue, IssueKind, SnippetStatus, ValidationReport
from tipsdoc.snippets import check_snippets

logger = get_logger(__name__)


@dataclass
class ValidationOptions:
    """Options for a validation run.

    Attributes:
        check_snippets: If True, syntax check every SQL example.
        dialects: Vendor dialects tried when the generic grammar rejects a snippet.
        include_body_links: If True, also check ``#slug`` links outside the table of contents.
    """

    check_snippets: bool = True
    dialects: list[str] = field(default_factory=lambda: list(TIPSDOC_SQL_DIALECTS))
    include_body_links: bool = False


def load_document(path: Path) -> Document:
    """Read a UTF-8 tips document and parse it.

    Raises:
        DocumentError: If the file is not valid UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError(
            f"not valid UTF-8 (byte 0x{exc.object[exc.start]:02x} at offset {exc.start})"
        ) from exc
    logger.info("Loaded document", extra={"path": str(path), "chars": len(text)})
    return parse_document(text)


def validate_document(
    document: Document,
    options: ValidationOptions | None = None,
    *,
    path: Path | None = None,
) -> ValidationReport:
    """Run every validation over the document and collect the findings."""
    opts = options or ValidationOptions()

    anchor_report = validate_anchors(document, include_body_links=opts.include_body_links)
    issues = list(anchor_report.issues)

    snippets = check_snippets(document, dialects=opts.dialects) if opts.check_snippets else []
    for result in snippets:
        if result.status != SnippetStatus.INVALID:
            continue
        issues.append(
            Issue(
                kind=IssueKind.UNPARSEABLE_SNIPPET,
                message=f"SQL example does not parse: {result.message}",
                line=result.document_line,
                column=result.error_column,
                slug=result.section_slug,
            )
        )

    issues.sort(key=lambda issue: (issue.line or 0, issue.kind.value))
    report = ValidationReport(
        path=str(path) if path else None,
        sections=len(document.sections),
        examples=sum(len(section.examples) for section in document.sections),
        issues=issues,
        snippets=snippets,
    )
    logger.info(
        "Validation finished",
        extra={"issues": len(report.issues), "snippets": len(report.snippets)},
    )
    return report


def build_site(document: Document, out_dir: Path) -> list[Path]:
    """Render the document into ``out_dir``."""
    written = render_site(document, out_dir)
    logger.info("Rendered site", extra={"out_dir": str(out_dir), "files": len(written)})
    return written
