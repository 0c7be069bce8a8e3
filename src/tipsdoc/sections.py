"""Section titles, anchor slugs and categories."""

from __future__ import annotations

import re
from typing import Iterable

from tipsdoc.schemas import Category, Section

_PUNCTUATION_RE = re.compile(r"[^\w-]", re.UNICODE)
_WHITESPACE_RE = re.compile(r"\s+")

# Keyword -> category, checked in order against normalized heading titles.
_CATEGORY_KEYWORDS: tuple[tuple[str, Category], ...] = (
    ("formatting", Category.FORMATTING),
    ("style", Category.FORMATTING),
    ("readability", Category.FORMATTING),
    ("data wrangling", Category.DATA_WRANGLING),
    ("wrangling", Category.DATA_WRANGLING),
    ("anti-join", Category.DATA_WRANGLING),
    ("joins", Category.DATA_WRANGLING),
    ("performance", Category.PERFORMANCE),
    ("optimi", Category.PERFORMANCE),
    ("common mistakes", Category.COMMON_MISTAKES),
    ("mistakes", Category.COMMON_MISTAKES),
    ("anti-pattern", Category.COMMON_MISTAKES),
    ("pitfalls", Category.COMMON_MISTAKES),
    ("gotchas", Category.COMMON_MISTAKES),
    ("miscellaneous", Category.MISCELLANEOUS),
    ("other tips", Category.MISCELLANEOUS),
)


def slugify(title: str) -> str:
    """Turn a heading title into its anchor slug.

    Lower-cases the title, replaces each run of whitespace with a single
    hyphen, then strips punctuation except hyphens.
    """
    slug = _WHITESPACE_RE.sub("-", title.strip().lower())
    return _PUNCTUATION_RE.sub("", slug)


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison."""
    title = title.strip().lower()
    title = re.sub(r"^[\d.]+\s+", "", title)
    return _WHITESPACE_RE.sub(" ", title)


def category_for_title(title: str) -> Category | None:
    """Return the category a heading names, or None for an ordinary tip title."""
    normalized = normalize_section_title(title)
    for keyword, category in _CATEGORY_KEYWORDS:
        if keyword in normalized:
            return category
    return None


def is_toc_title(title: str, toc_titles: Iterable[str]) -> bool:
    return normalize_section_title(title) in {t.lower() for t in toc_titles}


def group_by_category(sections: Iterable[Section]) -> dict[Category, list[Section]]:
    """Group sections by category, keeping enum order and dropping empty groups."""
    groups: dict[Category, list[Section]] = {category: [] for category in Category}
    for section in sections:
        groups[section.category].append(section)
    return {category: members for category, members in groups.items() if members}
