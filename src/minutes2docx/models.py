# models.py
"""Document model shared by the preview renderer and the export serializer.

Everything here is a frozen dataclass holding tuples, so a parsed Document can
be handed to both renderers (or to several renders after a theme change)
without either one being able to change what the other sees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# region Spans
@dataclass(frozen=True)
class Plain:
    """Unstyled run of text."""

    text: str


@dataclass(frozen=True)
class Bold:
    """Run of text delimited by ** in the minutes."""

    text: str


@dataclass(frozen=True)
class Italic:
    """Run of text delimited by a single * in the minutes."""

    text: str


# Spans never nest: bold-within-italic is not part of the generated vocabulary.
Span = Union[Plain, Bold, Italic]

Cell = tuple[Span, ...]
Row = tuple[Cell, ...]
# endregion


# region Blocks
@dataclass(frozen=True)
class Heading:
    """`#`, `##` or `###` line."""

    level: int
    spans: tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        if self.level not in (1, 2, 3):
            raise ValueError(f"Heading level must be 1, 2 or 3, got {self.level}")


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class ListItem:
    """Bullet line; indent_level is leading whitespace width // LIST_INDENT_UNIT."""

    indent_level: int = 0
    spans: tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        if self.indent_level < 0:
            raise ValueError(
                f"indent_level must be non-negative, got {self.indent_level}"
            )


@dataclass(frozen=True)
class Table:
    """
    Pipe table. Every row in `rows` has exactly len(header) cells; the parser
    drops ragged rows instead of padding them.
    """

    header: Row
    rows: tuple[Row, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.header)


@dataclass(frozen=True)
class Blank:
    """Vertical spacing marker for an empty input line."""


Block = Union[Heading, Paragraph, ListItem, Table, Blank]
# endregion


# region Document
@dataclass(frozen=True)
class Document:
    """Ordered blocks, top to bottom. Produced fresh by every parse() call."""

    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def first_heading_text(self, level: int = 1) -> str | None:
        """Plain text of the first heading at `level`, or None when there is none."""
        for block in self.blocks:
            if isinstance(block, Heading) and block.level == level:
                text = spans_to_text(block.spans).strip()
                if text:
                    return text
        return None


# endregion


# region TitleBlock
@dataclass(frozen=True)
class TitleBlock:
    """Meeting title and display date printed above the minutes by both renderers."""

    title: str
    date: str


# endregion


def spans_to_text(spans: tuple[Span, ...] | list[Span]) -> str:
    """Concatenate span texts, dropping emphasis."""
    return "".join(span.text for span in spans)
