"""tipsdoc: validate and render Markdown collections of SQL tips."""

from tipsdoc.anchors import validate_anchors
from tipsdoc.doc_parser import parse_document, serialize_document
from tipsdoc.exceptions import (
    DocumentError,
    MalformedDocumentError,
    RenderError,
    TipsdocError,
    UnterminatedCodeBlockError,
)
from tipsdoc.pipeline import ValidationOptions, load_document, validate_document
from tipsdoc.schemas import Document, Example, Section, TocEntry, ValidationReport
from tipsdoc.sections import slugify
from tipsdoc.snippets import check_snippet

__all__ = [
    "Document",
    "DocumentError",
    "Example",
    "MalformedDocumentError",
    "RenderError",
    "Section",
    "TipsdocError",
    "TocEntry",
    "UnterminatedCodeBlockError",
    "ValidationOptions",
    "ValidationReport",
    "check_snippet",
    "load_document",
    "parse_document",
    "serialize_document",
    "slugify",
    "validate_anchors",
    "validate_document",
]
