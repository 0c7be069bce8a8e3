"""Syntax-only checks of SQL examples using sqlglot."""

from __future__ import annotations

from typing import Iterable

import sqlglot
from sqlglot.errors import ErrorLevel, ParseError, SqlglotError, TokenError

from tipsdoc.config import TIPSDOC_SQL_DIALECTS, TIPSDOC_SQL_LANGUAGES
from tipsdoc.logging_config import get_logger
from tipsdoc.schemas import Document, Example, SnippetResult, SnippetStatus

logger = get_logger(__name__)


def check_snippet(
    example: Example,
    *,
    section_slug: str = "",
    dialects: Iterable[str] | None = None,
) -> SnippetResult:
    """Parse an example without executing it.

    The generic grammar is tried first. A snippet it rejects but a vendor
    dialect accepts is ``unknown`` rather than ``invalid``.
    """
    if example.language not in TIPSDOC_SQL_LANGUAGES:
        return SnippetResult(status=SnippetStatus.SKIPPED, section_slug=section_slug, line=example.line)

    generic_error = _try_parse(example.code, None)
    if generic_error is None:
        return SnippetResult(status=SnippetStatus.VALID, section_slug=section_slug, line=example.line)

    for dialect in dialects if dialects is not None else TIPSDOC_SQL_DIALECTS:
        if _try_parse(example.code, dialect) is None:
            logger.debug(
                "Snippet needs a vendor dialect",
                extra={"line": example.line, "dialect": dialect},
            )
            return SnippetResult(
                status=SnippetStatus.UNKNOWN,
                section_slug=section_slug,
                line=example.line,
                dialect=dialect,
            )

    error_line, error_column, message = _describe(generic_error)
    return SnippetResult(
        status=SnippetStatus.INVALID,
        section_slug=section_slug,
        line=example.line,
        error_line=error_line,
        error_column=error_column,
        message=message,
    )


def check_snippets(document: Document, *, dialects: Iterable[str] | None = None) -> list[SnippetResult]:
    """Check every example in the document."""
    dialect_list = list(dialects) if dialects is not None else None
    return [
        check_snippet(example, section_slug=section.slug, dialects=dialect_list)
        for section, example in document.iter_examples()
    ]


def _try_parse(code: str, dialect: str | None) -> SqlglotError | None:
    try:
        statements = sqlglot.parse(code, read=dialect, error_level=ErrorLevel.RAISE)
    except (ParseError, TokenError) as exc:
        return exc
    except ValueError as exc:
        # unknown dialect names surface as ValueError
        logger.warning("Skipping SQL dialect", extra={"dialect": dialect, "error": str(exc)})
        return SqlglotError(str(exc))
    if not any(statement is not None for statement in statements):
        return ParseError("snippet contains no SQL statement")
    return None


def _describe(error: SqlglotError) -> tuple[int | None, int | None, str]:
    if isinstance(error, ParseError) and error.errors:
        first = error.errors[0]
        return first.get("line"), first.get("col"), first.get("description") or str(error)
    return None, None, str(error).splitlines()[0] if str(error) else type(error).__name__
