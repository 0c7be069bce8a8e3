"""Render a tips Document to static HTML."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from bs4 import BeautifulSoup
from bs4.element import Tag

from tipsdoc.config import TIPSDOC_SITE_TITLE
from tipsdoc.doc_parser import is_table_delimiter, iter_prose_lines, split_table_row
from tipsdoc.exceptions import RenderError
from tipsdoc.schemas import Category, Document, Example, Section
from tipsdoc.sections import group_by_category, slugify

_LIST_ITEM_RE = re.compile(r"^\s*(?:([-*+])|(\d+)[.)])\s+(.*)$")
_INLINE_RE = re.compile(
    r"(?P<code>`+)(?P<code_text>.+?)(?P=code)"
    r"|\[(?P<link_text>[^\]]+)\]\((?P<href>[^)\s]+)\)"
    r"|\*\*(?P<strong>[^*]+)\*\*"
    r"|(?<![\w*])[*_](?P<em>[^*_]+)[*_](?![\w*])"
)

_SKELETON = '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"/></head><body></body></html>'


def category_page_name(category: Category) -> str:
    return f"{slugify(category.value)}.html"


def render_document_html(
    document: Document,
    *,
    sections: Sequence[Section] | None = None,
    title: str | None = None,
) -> str:
    """Render sections of a document as a single HTML page.

    Args:
        document: Parsed document.
        sections: Sections to include. Defaults to all of them.
        title: Page title. Defaults to the document title.
    """
    page_sections = document.sections if sections is None else sections
    page_title = title or document.title or TIPSDOC_SITE_TITLE

    soup = BeautifulSoup(_SKELETON, "lxml")
    title_tag = soup.new_tag("title")
    title_tag.string = page_title
    soup.head.append(title_tag)

    body = soup.body
    body.append(_render_nav(soup, document))
    main = soup.new_tag("main")
    body.append(main)
    for section in page_sections:
        main.append(_render_section(soup, section))
    return str(soup)


def render_site(document: Document, out_dir: Path) -> list[Path]:
    """Write ``index.html``, one page per category and ``document.json``.

    Raises:
        RenderError: If the output directory cannot be created or written.
    """
    if out_dir.exists() and not out_dir.is_dir():
        raise RenderError(f"Output path is not a directory: {out_dir}")

    pages: dict[str, str] = {"index.html": render_document_html(document)}
    for category, members in group_by_category(document.sections).items():
        pages[category_page_name(category)] = render_document_html(
            document,
            sections=members,
            title=f"{document.title or TIPSDOC_SITE_TITLE}: {category.value}",
        )
    pages["document.json"] = document.model_dump_json(indent=2)

    written: list[Path] = []
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for name, content in pages.items():
            path = out_dir / name
            path.write_text(content, encoding="utf-8")
            written.append(path)
    except OSError as exc:
        raise RenderError(f"Failed to write site to {out_dir}: {exc}") from exc
    return written


def _render_nav(soup: BeautifulSoup, document: Document) -> Tag:
    nav = soup.new_tag("nav")
    for category, members in group_by_category(document.sections).items():
        heading = soup.new_tag("h2")
        link = soup.new_tag("a", href=category_page_name(category))
        link.string = category.value
        heading.append(link)
        nav.append(heading)

        items = soup.new_tag("ul")
        for section in members:
            item = soup.new_tag("li")
            anchor = soup.new_tag("a", href=f"index.html#{section.slug}")
            anchor.string = section.title
            item.append(anchor)
            items.append(item)
        nav.append(items)
    return nav


def _render_section(soup: BeautifulSoup, section: Section) -> Tag:
    container = soup.new_tag("section", id=section.slug)
    container["data-category"] = section.category.value
    heading = soup.new_tag(f"h{section.level}")
    _append_inline(soup, heading, section.title)
    container.append(heading)

    prose = dict(iter_prose_lines(section))
    examples = {example.line: example for example in section.examples}
    first = section.line + 1
    pending: list[str] = []
    for line_number in range(first, first + len(section.body.splitlines())):
        if line_number in examples:
            _flush_blocks(soup, container, pending)
            pending = []
            container.append(_render_example(soup, examples[line_number]))
        elif line_number in prose:
            pending.append(prose[line_number])
    _flush_blocks(soup, container, pending)
    return container


def _render_example(soup: BeautifulSoup, example: Example) -> Tag:
    pre = soup.new_tag("pre")
    code = soup.new_tag("code", attrs={"class": f"language-{example.language}"})
    code.string = example.code
    pre.append(code)
    return pre


def _flush_blocks(soup: BeautifulSoup, container: Tag, lines: list[str]) -> None:
    block: list[str] = []
    for line in [*lines, ""]:
        if line.strip():
            block.append(line)
            continue
        if block:
            container.append(_render_block(soup, block))
            block = []


def _render_block(soup: BeautifulSoup, lines: list[str]) -> Tag:
    if len(lines) >= 2 and "|" in lines[0] and is_table_delimiter(lines[1]):
        return _render_table(soup, lines)

    first_item = _LIST_ITEM_RE.match(lines[0])
    if first_item:
        return _render_list(soup, lines, ordered=first_item.group(2) is not None)

    if all(line.lstrip().startswith(">") for line in lines):
        quote = soup.new_tag("blockquote")
        text = " ".join(line.lstrip()[1:].strip() for line in lines)
        _append_inline(soup, quote, text)
        return quote

    paragraph = soup.new_tag("p")
    _append_inline(soup, paragraph, " ".join(line.strip() for line in lines))
    return paragraph


def _render_list(soup: BeautifulSoup, lines: list[str], *, ordered: bool) -> Tag:
    list_tag = soup.new_tag("ol" if ordered else "ul")
    texts: list[str] = []
    for line in lines:
        match = _LIST_ITEM_RE.match(line)
        if match:
            texts.append(match.group(3).strip())
        elif texts:
            texts[-1] += " " + line.strip()
    for text in texts:
        item = soup.new_tag("li")
        _append_inline(soup, item, text)
        list_tag.append(item)
    return list_tag


def _render_table(soup: BeautifulSoup, lines: list[str]) -> Tag:
    table = soup.new_tag("table", attrs={"class": "result-table"})
    header = split_table_row(lines[0].strip())
    thead = soup.new_tag("thead")
    row = soup.new_tag("tr")
    for value in header:
        cell = soup.new_tag("th")
        _append_inline(soup, cell, value)
        row.append(cell)
    thead.append(row)
    table.append(thead)

    tbody = soup.new_tag("tbody")
    for line in lines[2:]:
        values = split_table_row(line.strip())
        values += [""] * (len(header) - len(values))
        row = soup.new_tag("tr")
        for value in values[: len(header)]:
            cell = soup.new_tag("td")
            _append_inline(soup, cell, value)
            row.append(cell)
        tbody.append(row)
    table.append(tbody)
    return table


def _append_inline(soup: BeautifulSoup, parent: Tag, text: str) -> None:
    position = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > position:
            parent.append(text[position : match.start()])
        if match.group("code"):
            tag = soup.new_tag("code")
            tag.string = match.group("code_text").strip()
        elif match.group("link_text"):
            tag = soup.new_tag("a", href=match.group("href"))
            _append_inline(soup, tag, match.group("link_text"))
        elif match.group("strong"):
            tag = soup.new_tag("strong")
            tag.string = match.group("strong")
        else:
            tag = soup.new_tag("em")
            tag.string = match.group("em")
        parent.append(tag)
        position = match.end()
    if position < len(text):
        parent.append(text[position:])
