"""Tests for the SQL snippet syntax checker."""

from __future__ import annotations

from unittest.mock import patch

from sqlglot.errors import ParseError

from tipsdoc.doc_parser import parse_document
from tipsdoc.schemas import Example, SnippetStatus
from tipsdoc.snippets import check_snippet, check_snippets


def _example(code: str, language: str = "sql", line: int = 10) -> Example:
    return Example(language=language, code=code, line=line)


class TestCheckSnippet:
    """Tests for check_snippet function."""

    def test_valid_select(self) -> None:
        result = check_snippet(_example("SELECT a, b\nFROM t\nWHERE a > 1\n"), section_slug="tip")

        assert result.status == SnippetStatus.VALID
        assert result.section_slug == "tip"
        assert result.line == 10
        assert result.error_line is None

    def test_multiple_statements(self) -> None:
        result = check_snippet(_example("SELECT 1;\nSELECT 2;\n"))

        assert result.status == SnippetStatus.VALID

    def test_unbalanced_parenthesis_is_invalid(self) -> None:
        """Invalid snippets carry the parser's line and column."""
        result = check_snippet(_example("SELECT *\nFROM (SELECT 1\n"))

        assert result.status == SnippetStatus.INVALID
        assert isinstance(result.error_line, int)
        assert isinstance(result.error_column, int)
        assert result.message
        assert result.document_line == 10 + result.error_line

    def test_non_sql_language_is_skipped(self) -> None:
        result = check_snippet(_example("print('hello')\n", language="python"))

        assert result.status == SnippetStatus.SKIPPED

    def test_dialect_only_snippet_is_unknown(self) -> None:
        """A snippet only a vendor dialect accepts is flagged, not failed."""

        def fake_parse(code: str, dialect: str | None):
            return None if dialect == "tsql" else ParseError("nope")

        with patch("tipsdoc.snippets._try_parse", side_effect=fake_parse) as mock_parse:
            result = check_snippet(_example("SELECT TOP 5 * FROM t\n"), dialects=["postgres", "tsql"])

        assert result.status == SnippetStatus.UNKNOWN
        assert result.dialect == "tsql"
        assert [call.args[1] for call in mock_parse.call_args_list] == [None, "postgres", "tsql"]

    def test_generic_success_skips_dialects(self) -> None:
        with patch("tipsdoc.snippets._try_parse", return_value=None) as mock_parse:
            result = check_snippet(_example("SELECT 1\n"), dialects=["postgres"])

        assert result.status == SnippetStatus.VALID
        mock_parse.assert_called_once_with("SELECT 1\n", None)

    def test_unknown_dialect_name_does_not_crash(self) -> None:
        result = check_snippet(_example("SELECT *\nFROM (SELECT 1\n"), dialects=["not-a-dialect"])

        assert result.status == SnippetStatus.INVALID

    def test_backtick_identifiers_need_mysql(self) -> None:
        result = check_snippet(_example("SELECT `a` FROM t\n"), dialects=["postgres", "mysql"])

        assert result.status == SnippetStatus.UNKNOWN
        assert result.dialect == "mysql"
        assert result.error_line is None

    def test_top_clause_needs_tsql(self) -> None:
        result = check_snippet(_example("SELECT TOP 5 * FROM t\n"), dialects=["tsql"])

        assert result.status == SnippetStatus.UNKNOWN
        assert result.dialect == "tsql"

    def test_default_dialects_accept_vendor_syntax(self) -> None:
        result = check_snippet(_example("SELECT `a` FROM t\n"))

        assert result.status == SnippetStatus.UNKNOWN
        assert result.dialect is not None

    def test_comment_only_snippet_is_invalid(self) -> None:
        result = check_snippet(_example("-- nothing here\n"), dialects=["postgres"])

        assert result.status == SnippetStatus.INVALID
        assert result.message == "snippet contains no SQL statement"


class TestCheckSnippets:
    """Tests for check_snippets function."""

    def test_checks_every_example(self, sample_text: str) -> None:
        document = parse_document(sample_text)

        results = check_snippets(document, dialects=[])

        assert [result.section_slug for result in results] == [
            "use-a-leading-comma",
            "anti-joins-are-your-friend",
            "be-aware-of-not-in-with-nulls",
        ]
        assert all(result.status == SnippetStatus.VALID for result in results)
