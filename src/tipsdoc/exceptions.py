"""Custom exceptions for tipsdoc."""


class TipsdocError(Exception):
    """Base exception for tipsdoc operations."""


class DocumentError(TipsdocError):
    """Error that stops a tips document from being modeled."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MalformedDocumentError(DocumentError):
    """A heading cannot be associated with a heading level, or none exist."""


class UnterminatedCodeBlockError(DocumentError):
    """A fenced code region has no closing delimiter."""


class RenderError(TipsdocError):
    """Error while writing the rendered site."""
