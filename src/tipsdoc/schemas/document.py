"""Document model for a tips collection."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Enumeration of tip categories."""

    FORMATTING = "Formatting"
    DATA_WRANGLING = "DataWrangling"
    PERFORMANCE = "Performance"
    COMMON_MISTAKES = "CommonMistakes"
    MISCELLANEOUS = "Miscellaneous"


class ResultTable(BaseModel):
    """Expected output of an example, as shown in a pipe table."""

    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()


class Example(BaseModel):
    """A fenced code example embedded in a section.

    Attributes:
        language: Fence info string, lower-cased.
        code: Code between the fences, verbatim.
        line: 1-based line number of the opening fence.
        expected_output: Pipe table following the example, if any.
    """

    model_config = ConfigDict(frozen=True)

    language: str = "sql"
    code: str
    line: int = Field(..., ge=1)
    expected_output: ResultTable | None = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        """Validate that ``code`` is not empty."""
        if not v.strip():
            raise ValueError("code must not be empty")
        return v


class Section(BaseModel):
    """A section delimited by a heading."""

    model_config = ConfigDict(frozen=True)

    title: str
    slug: str
    level: int = Field(..., ge=1, le=6)
    line: int = Field(..., ge=1)
    category: Category = Category.MISCELLANEOUS
    body: str = ""
    examples: tuple[Example, ...] = ()
    raw_heading: str | None = Field(default=None, exclude=True, repr=False)

    @property
    def heading(self) -> str:
        return f"{'#' * self.level} {self.title}"


class TocEntry(BaseModel):
    """A table of contents link to a section anchor."""

    model_config = ConfigDict(frozen=True)

    label: str
    target_slug: str
    line: int = Field(..., ge=1)


class Document(BaseModel):
    """Parsed tips document.

    Attributes:
        title: Text of the first level-1 heading, if any.
        preamble: Verbatim text before the first heading.
        sections: Sections in document order.
        toc: Entries of the table of contents section.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    preamble: str = ""
    sections: tuple[Section, ...] = Field(..., min_length=1)
    toc: tuple[TocEntry, ...] = ()

    def iter_examples(self):
        """Yield ``(section, example)`` pairs in document order."""
        for section in self.sections:
            for example in section.examples:
                yield section, example
