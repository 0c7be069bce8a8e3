"""Validate table of contents links and section anchors."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from tipsdoc.config import TOC_TITLES
from tipsdoc.doc_parser import find_links
from tipsdoc.logging_config import get_logger
from tipsdoc.schemas import AnchorReport, Document, Issue, IssueKind, Section, TocEntry
from tipsdoc.sections import is_toc_title

logger = get_logger(__name__)


def find_duplicate_anchors(sections: Sequence[Section]) -> list[Issue]:
    """Report one DuplicateAnchor per slug shared by two or more sections."""
    by_slug: dict[str, list[Section]] = defaultdict(list)
    for section in sections:
        by_slug[section.slug].append(section)

    issues: list[Issue] = []
    for slug, members in by_slug.items():
        if len(members) < 2:
            continue
        where = ", ".join(f"'{member.title}' (line {member.line})" for member in members)
        issues.append(
            Issue(
                kind=IssueKind.DUPLICATE_ANCHOR,
                message=f"anchor #{slug} is produced by {len(members)} sections: {where}",
                line=members[1].line,
                slug=slug,
            )
        )
    return issues


def find_internal_links(document: Document) -> list[TocEntry]:
    """Collect ``#slug`` links from section prose outside the table of contents."""
    links: list[TocEntry] = []
    for section in document.sections:
        if is_toc_title(section.title, TOC_TITLES):
            continue
        links.extend(find_links(section))
    return links


def validate_anchors(
    document: Document,
    toc: Sequence[TocEntry] | None = None,
    *,
    include_body_links: bool = False,
) -> AnchorReport:
    """Check every link against the document's section slugs.

    All entries are checked; a broken link never stops the scan.

    Args:
        document: Parsed document.
        toc: Entries to check. Defaults to the document's own table of contents.
        include_body_links: Also check ``#slug`` links in section bodies.
    """
    entries = list(document.toc if toc is None else toc)
    if include_body_links:
        entries.extend(find_internal_links(document))

    slugs = {section.slug for section in document.sections}
    broken = [entry for entry in entries if entry.target_slug not in slugs]
    duplicates = find_duplicate_anchors(document.sections)

    for entry in broken:
        logger.info("Broken anchor", extra={"target": entry.target_slug, "line": entry.line})
    return AnchorReport(broken=broken, duplicates=duplicates)
