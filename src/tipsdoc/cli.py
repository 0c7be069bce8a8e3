"""Command-line interface for tipsdoc."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from tipsdoc.config import TIPSDOC_LOG_LEVEL, TIPSDOC_SQL_DIALECTS
from tipsdoc.exceptions import DocumentError, TipsdocError
from tipsdoc.logging_config import configure_logging, get_logger
from tipsdoc.output_formatter import create_sections_tree, format_report, format_summary
from tipsdoc.pipeline import ValidationOptions, build_site, load_document, validate_document

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tipsdoc",
        description="Validate and render a Markdown collection of SQL tips.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tipsdoc validate README.md
  tipsdoc validate README.md --no-snippets --json
  tipsdoc render README.md --out site
  tipsdoc outline README.md
        """,
    )
    parser.add_argument(
        "--log-level",
        default=TIPSDOC_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Logging level on stderr (default: {TIPSDOC_LOG_LEVEL})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run", required=True)

    validate_parser = subparsers.add_parser("validate", help="Check anchors and SQL examples")
    validate_parser.add_argument("path", type=Path, help="Tips document to check")
    validate_parser.add_argument(
        "--no-snippets",
        action="store_true",
        help="Skip the SQL syntax check of examples",
    )
    validate_parser.add_argument(
        "--dialect",
        action="append",
        dest="dialects",
        help="Vendor dialect to try when the generic grammar fails (repeatable)",
    )
    validate_parser.add_argument(
        "--body-links",
        action="store_true",
        help="Also check #anchor links outside the table of contents",
    )
    validate_parser.add_argument("--json", action="store_true", help="Emit the report as JSON")

    render_parser = subparsers.add_parser("render", help="Render the document as static HTML")
    render_parser.add_argument("path", type=Path, help="Tips document to render")
    render_parser.add_argument("--out", type=Path, required=True, help="Output directory")

    outline_parser = subparsers.add_parser("outline", help="Print a summary and section tree")
    outline_parser.add_argument("path", type=Path, help="Tips document to outline")

    return parser


def run_validate(args: argparse.Namespace) -> int:
    options = ValidationOptions(
        check_snippets=not args.no_snippets,
        dialects=args.dialects or list(TIPSDOC_SQL_DIALECTS),
        include_body_links=args.body_links,
    )
    document = load_document(args.path)
    report = validate_document(document, options, path=args.path)
    if args.json:
        print(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        print(format_report(report))
    return report.exit_code


def run_render(args: argparse.Namespace) -> int:
    document = load_document(args.path)
    written = build_site(document, args.out)
    for path in written:
        print(path)
    return EXIT_OK


def run_outline(args: argparse.Namespace) -> int:
    document = load_document(args.path)
    print(format_summary(document))
    print()
    print(create_sections_tree(document))
    return EXIT_OK


_COMMANDS = {
    "validate": run_validate,
    "render": run_render,
    "outline": run_outline,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return _COMMANDS[args.command](args)
    except DocumentError as exc:
        print(f"{args.path}: error: {exc}", file=sys.stderr)
        return EXIT_FATAL
    except (OSError, TipsdocError) as exc:
        logger.error("Command failed", extra={"command": args.command, "error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
