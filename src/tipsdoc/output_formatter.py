"""Format documents and validation reports as plain text."""

from __future__ import annotations

from tipsdoc.schemas import Document, IssueKind, SnippetStatus, ValidationReport
from tipsdoc.sections import group_by_category


def format_summary(document: Document) -> str:
    """Create a short summary of the document."""
    summary_lines = []
    if document.title:
        summary_lines.append(f"Title: {document.title}")
    summary_lines.append(f"Sections: {len(document.sections)}")
    summary_lines.append(f"Examples: {sum(len(s.examples) for s in document.sections)}")
    summary_lines.append(f"Table of contents entries: {len(document.toc)}")
    for category, members in group_by_category(document.sections).items():
        summary_lines.append(f"  {category.value}: {len(members)}")
    return "\n".join(summary_lines)


def create_sections_tree(document: Document) -> str:
    """Render an indented outline of section titles and anchors."""
    lines = ["Sections:"]
    top_level = min(section.level for section in document.sections)
    for section in document.sections:
        indent = " " * ((section.level - top_level) * 4)
        suffix = f" [{len(section.examples)} examples]" if section.examples else ""
        lines.append(f"{indent}{section.title} (#{section.slug}){suffix}")
    return "\n".join(lines)


def format_report(report: ValidationReport) -> str:
    """Render one line per finding followed by totals."""
    lines: list[str] = []
    prefix = f"{report.path}:" if report.path else "line "
    for issue in report.issues:
        location = f"{prefix}{issue.line}" if issue.line is not None else (report.path or "document")
        if issue.column is not None:
            location += f":{issue.column}"
        lines.append(f"{location}: {issue.kind.value}: {issue.message}")

    for result in report.snippets:
        if result.status == SnippetStatus.UNKNOWN:
            location = f"{prefix}{result.line}"
            lines.append(f"{location}: note: SQL example only parses as {result.dialect}")

    totals = [
        f"{report.sections} sections",
        f"{report.examples} examples",
        f"{report.count(IssueKind.BROKEN_ANCHOR)} broken anchors",
        f"{report.count(IssueKind.DUPLICATE_ANCHOR)} duplicate anchors",
        f"{report.count(IssueKind.UNPARSEABLE_SNIPPET)} unparseable snippets",
    ]
    if report.snippets:
        totals.append(f"{report.snippet_count(SnippetStatus.UNKNOWN)} dialect-specific snippets")
    status = "OK" if report.ok else "FAILED"
    lines.append(f"{status}: " + ", ".join(totals))
    return "\n".join(lines)
