"""Parse a Markdown tips document into sections and code examples."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator
from urllib.parse import unquote

from tipsdoc.config import TIPSDOC_DEFAULT_LANGUAGE, TOC_TITLES
from tipsdoc.exceptions import MalformedDocumentError, UnterminatedCodeBlockError
from tipsdoc.logging_config import get_logger
from tipsdoc.schemas import Category, Document, Example, ResultTable, Section, TocEntry
from tipsdoc.sections import category_for_title, is_toc_title, slugify

logger = get_logger(__name__)

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_TOO_DEEP_HEADING_RE = re.compile(r"^ {0,3}#{7,}[ \t]+\S")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_TABLE_DELIMITER_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(#([^)\s]+)\)")
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+")


@dataclass
class _Fence:
    """A fenced code region, with 0-based line indexes."""

    start: int
    end: int
    info: str
    lines: list[str] = field(default_factory=list)


@dataclass
class _Heading:
    index: int
    level: int
    title: str
    raw: str


def parse_document(text: str) -> Document:
    """Build a Document from raw Markdown text.

    Raises:
        MalformedDocumentError: If a heading has no usable level or title, or
            the document has no headings at all.
        UnterminatedCodeBlockError: If a fenced code block is never closed.
    """
    lines = text.splitlines(keepends=True)
    headings, fences = _scan(lines)
    if not headings:
        raise MalformedDocumentError("document has no section headings", line=1)

    sections: list[Section] = []
    toc: list[TocEntry] = []
    stack: list[tuple[int, Category | None]] = []
    # fences in the preamble belong to no section
    fence_iter = iter([fence for fence in fences if fence.start > headings[0].index])
    pending_fence = next(fence_iter, None)

    for position, heading in enumerate(headings):
        body_start = heading.index + 1
        body_end = headings[position + 1].index if position + 1 < len(headings) else len(lines)
        has_children = position + 1 < len(headings) and headings[position + 1].level > heading.level

        while stack and stack[-1][0] >= heading.level:
            stack.pop()
        category = _resolve_category(heading.title, stack, has_children=has_children)
        stack.append((heading.level, category_for_title(heading.title)))

        section_fences: list[_Fence] = []
        while pending_fence is not None and pending_fence.start < body_end:
            section_fences.append(pending_fence)
            pending_fence = next(fence_iter, None)

        examples = _build_examples(lines, section_fences, body_end)
        section = Section(
            title=heading.title,
            slug=slugify(heading.title),
            level=heading.level,
            line=heading.index + 1,
            category=category,
            body="".join(lines[body_start:body_end]),
            examples=tuple(examples),
            raw_heading=heading.raw,
        )
        sections.append(section)

        if is_toc_title(heading.title, TOC_TITLES) and not toc:
            toc = _extract_links(lines, body_start, body_end, section_fences)

    title = next((h.title for h in headings if h.level == 1), None)
    document = Document(
        title=title,
        preamble="".join(lines[: headings[0].index]),
        sections=tuple(sections),
        toc=tuple(toc),
    )
    logger.debug(
        "Parsed tips document",
        extra={"sections": len(sections), "examples": len(fences), "toc_entries": len(toc)},
    )
    return document


def serialize_document(document: Document) -> str:
    """Write a Document back to Markdown text."""
    parts = [document.preamble]
    for section in document.sections:
        heading = section.raw_heading if section.raw_heading is not None else section.heading + "\n"
        if section.body and not heading.endswith(("\n", "\r")):
            heading += "\n"
        parts.append(heading)
        parts.append(section.body)
    return "".join(parts)


def iter_prose_lines(section: Section) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for body lines outside fenced code."""
    fence: tuple[str, int] | None = None
    for offset, raw in enumerate(section.body.splitlines()):
        line_number = section.line + 1 + offset
        if fence is None:
            match = _FENCE_OPEN_RE.match(raw)
            if match and _is_valid_info(match.group(2), match.group(3)):
                fence = (match.group(2)[0], len(match.group(2)))
                continue
            yield line_number, raw
        elif _closes(raw, fence):
            fence = None


def find_links(section: Section) -> list[TocEntry]:
    """Collect intra-document ``[label](#slug)`` links in a section's prose."""
    entries: list[TocEntry] = []
    for line_number, line in iter_prose_lines(section):
        for match in _LINK_RE.finditer(line):
            entries.append(
                TocEntry(label=match.group(1).strip(), target_slug=unquote(match.group(2)), line=line_number)
            )
    return entries


def _scan(lines: list[str]) -> tuple[list[_Heading], list[_Fence]]:
    headings: list[_Heading] = []
    fences: list[_Fence] = []
    open_fence: _Fence | None = None
    fence_marker: tuple[str, int] = ("`", 3)

    for index, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        if open_fence is not None:
            if _closes(line, fence_marker):
                open_fence.end = index
                fences.append(open_fence)
                open_fence = None
            else:
                open_fence.lines.append(raw)
            continue

        fence_match = _FENCE_OPEN_RE.match(line)
        if fence_match and _is_valid_info(fence_match.group(2), fence_match.group(3)):
            marker = fence_match.group(2)
            fence_marker = (marker[0], len(marker))
            open_fence = _Fence(start=index, end=index, info=fence_match.group(3).strip())
            continue

        if _TOO_DEEP_HEADING_RE.match(line):
            raise MalformedDocumentError(
                f"heading '{line.strip()}' is deeper than level 6", line=index + 1
            )
        heading_match = _HEADING_RE.match(line)
        if heading_match:
            title = _CLOSING_HASHES_RE.sub("", heading_match.group(2) or "").strip()
            if not title:
                raise MalformedDocumentError("heading has no title", line=index + 1)
            headings.append(
                _Heading(index=index, level=len(heading_match.group(1)), title=title, raw=raw)
            )

    if open_fence is not None:
        raise UnterminatedCodeBlockError(
            "fenced code block is never closed", line=open_fence.start + 1
        )
    return headings, fences


def _is_valid_info(marker: str, info: str) -> bool:
    # backtick fences cannot carry backticks in their info string
    return not (marker.startswith("`") and "`" in info)


def _closes(line: str, marker: tuple[str, int]) -> bool:
    match = _FENCE_CLOSE_RE.match(line)
    if not match:
        return False
    closing = match.group(1)
    return closing[0] == marker[0] and len(closing) >= marker[1]


def _resolve_category(
    title: str, stack: list[tuple[int, Category | None]], *, has_children: bool
) -> Category:
    own = category_for_title(title)
    inherited = next((category for _, category in reversed(stack) if category is not None), None)
    if has_children:
        return own or inherited or Category.MISCELLANEOUS
    return inherited or own or Category.MISCELLANEOUS


def _build_examples(lines: list[str], fences: list[_Fence], body_end: int) -> list[Example]:
    examples: list[Example] = []
    for position, fence in enumerate(fences):
        code = "".join(fence.lines)
        if not code.strip():
            logger.debug("Skipping empty code block", extra={"line": fence.start + 1})
            continue
        window_end = fences[position + 1].start if position + 1 < len(fences) else body_end
        language = fence.info.split()[0].lower() if fence.info else TIPSDOC_DEFAULT_LANGUAGE
        examples.append(
            Example(
                language=language,
                code=code,
                line=fence.start + 1,
                expected_output=_find_table(lines, fence.end + 1, window_end),
            )
        )
    return examples


def _find_table(lines: list[str], start: int, end: int) -> ResultTable | None:
    """Return the first pipe table in ``lines[start:end]``."""
    for index in range(start, end - 1):
        header = lines[index].strip()
        if "|" not in header or not is_table_delimiter(lines[index + 1]):
            continue
        columns = split_table_row(header)
        rows: list[list[str]] = []
        for raw in lines[index + 2 : end]:
            row = raw.strip()
            if not row or "|" not in row:
                break
            cells = split_table_row(row)
            cells += [""] * (len(columns) - len(cells))
            rows.append(cells[: len(columns)])
        return ResultTable(columns=tuple(columns), rows=tuple(tuple(row) for row in rows))
    return None


def split_table_row(row: str) -> list[str]:
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _CELL_SPLIT_RE.split(row)]


def _extract_links(
    lines: list[str], start: int, end: int, fences: list[_Fence]
) -> list[TocEntry]:
    fenced = {index for fence in fences for index in range(fence.start, fence.end + 1)}
    entries: list[TocEntry] = []
    for index in range(start, end):
        if index in fenced or not _LIST_ITEM_RE.match(lines[index]):
            continue
        for match in _LINK_RE.finditer(lines[index]):
            entries.append(
                TocEntry(
                    label=match.group(1).strip(),
                    target_slug=unquote(match.group(2)),
                    line=index + 1,
                )
            )
    return entries


def is_table_delimiter(line: str) -> bool:
    """Whether ``line`` is the ``| --- | --- |`` row under a table header."""
    return "-" in line and bool(_TABLE_DELIMITER_RE.match(line))
