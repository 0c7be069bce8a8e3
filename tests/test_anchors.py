"""Tests for the anchor and link validator."""

from __future__ import annotations

from tipsdoc.anchors import find_duplicate_anchors, find_internal_links, validate_anchors
from tipsdoc.doc_parser import parse_document
from tipsdoc.schemas import IssueKind, TocEntry


class TestDuplicateAnchors:
    """Tests for duplicate slug detection."""

    def test_titles_differing_in_case_collide(self) -> None:
        """'Use a leading comma' and 'use a leading comma' share one anchor."""
        document = parse_document("## Use a leading comma\n\n## use a leading comma\n")

        report = validate_anchors(document)

        assert len(report.duplicates) == 1
        issue = report.duplicates[0]
        assert issue.kind == IssueKind.DUPLICATE_ANCHOR
        assert issue.slug == "use-a-leading-comma"
        assert issue.line == 3

    def test_titles_differing_in_whitespace_collide(self) -> None:
        document = parse_document("## Use a leading comma\n\n## Use  a   leading\tcomma\n")

        report = validate_anchors(document)

        assert [issue.slug for issue in report.duplicates] == ["use-a-leading-comma"]

    def test_three_way_collision_is_one_issue(self) -> None:
        document = parse_document("## Joins\n\n## joins\n\n## JOINS\n")

        issues = find_duplicate_anchors(document.sections)

        assert len(issues) == 1
        assert "3 sections" in issues[0].message
        assert "line 5" in issues[0].message

    def test_unique_titles_report_nothing(self, sample_text: str) -> None:
        document = parse_document(sample_text)

        assert validate_anchors(document).duplicates == []

    def test_duplicates_are_not_renamed(self) -> None:
        document = parse_document("## Tip\n\n## tip\n")

        assert [section.slug for section in document.sections] == ["tip", "tip"]


class TestBrokenAnchors:
    """Tests for broken table of contents links."""

    def test_reports_missing_target(self, sample_text: str) -> None:
        document = parse_document(sample_text)

        report = validate_anchors(document)

        assert [entry.target_slug for entry in report.broken] == ["non-existent-tip"]
        issues = report.issues
        assert len(issues) == 1
        assert issues[0].kind == IssueKind.BROKEN_ANCHOR
        assert issues[0].line == 9

    def test_collects_every_broken_entry(self, sample_text: str) -> None:
        """A broken entry does not stop later entries from being checked."""
        document = parse_document(sample_text)
        toc = [
            TocEntry(label="first", target_slug="missing-one", line=1),
            TocEntry(label="ok", target_slug="use-a-leading-comma", line=2),
            TocEntry(label="second", target_slug="missing-two", line=3),
        ]

        report = validate_anchors(document, toc)

        assert [entry.target_slug for entry in report.broken] == ["missing-one", "missing-two"]

    def test_punctuation_between_spaces_matches_github_anchor(self) -> None:
        """'&' between spaces leaves a double hyphen, as GitHub generates it."""
        text = (
            "# Tips\n\n"
            "## Contents\n\n"
            "- [Window functions](#window-functions--aggregates)\n\n"
            "## Window functions & aggregates\n"
        )
        document = parse_document(text)

        report = validate_anchors(document)

        assert document.sections[2].slug == "window-functions--aggregates"
        assert report.broken == []

    def test_explicit_empty_toc_checks_nothing(self, sample_text: str) -> None:
        document = parse_document(sample_text)

        assert validate_anchors(document, []).broken == []

    def test_body_links_are_opt_in(self, sample_text: str) -> None:
        document = parse_document(sample_text)

        without = validate_anchors(document)
        with_body = validate_anchors(document, include_body_links=True)

        assert [e.target_slug for e in without.broken] == ["non-existent-tip"]
        assert [e.target_slug for e in with_body.broken] == ["non-existent-tip", "nowhere"]

    def test_internal_links_skip_contents_section(self, sample_text: str) -> None:
        document = parse_document(sample_text)

        links = find_internal_links(document)

        assert [link.target_slug for link in links] == ["use-a-leading-comma", "nowhere"]

    def test_issues_are_ordered_by_line(self) -> None:
        text = (
            "# Tips\n\n"
            "## Contents\n\n"
            "- [Gone](#gone)\n\n"
            "## Tip\n\n"
            "## tip\n"
        )
        document = parse_document(text)

        issues = validate_anchors(document).issues

        assert [(issue.kind, issue.line) for issue in issues] == [
            (IssueKind.BROKEN_ANCHOR, 5),
            (IssueKind.DUPLICATE_ANCHOR, 9),
        ]
