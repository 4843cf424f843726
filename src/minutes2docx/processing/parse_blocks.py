# parse_blocks.py
"""Recover document structure from the flat minutes text, one line at a time.

The parser is a small state machine over an explicit line cursor:

- SCANNING classifies one line at a time (blank, heading, list item, paragraph)
  and peeks at the next line to decide whether a table starts here.
- IN_TABLE greedily consumes pipe rows until a line without a separator shows up.

It never raises: anything it does not recognize becomes a Paragraph.
"""

# region imports
import logging
import re
from enum import Enum

from minutes2docx.internals.constants import (
    LIST_INDENT_UNIT,
    TAB_WIDTH,
    TABLE_COLUMN_SEPARATOR,
    TABLE_SEPARATOR_MIN_DASHES,
    TRANSCRIPT_HEADING_PREFIX,
)
from minutes2docx.models import (
    Blank,
    Block,
    Cell,
    Document,
    Heading,
    ListItem,
    Paragraph,
    Row,
    Table,
)
from minutes2docx.processing.parse_inline import parse_inline

# endregion

log = logging.getLogger("minutes2docx")


# region patterns
# Longest marker wins because the quantifier is greedy and a space must follow.
HEADING_PATTERN = re.compile(r"^(#{1,3}) (.*)$")

LIST_MARKERS = ("- ", "* ")

TRANSCRIPT_HEADING_PATTERN = re.compile(
    rf"^[ \t]*#{{1,3}}[ \t]+\W*{TRANSCRIPT_HEADING_PREFIX}",
    re.IGNORECASE | re.MULTILINE,
)

_SEPARATOR_CHARS = re.compile(r"^[\s|:\-]+$")
_DASH_RUN = re.compile(rf"-{{{TABLE_SEPARATOR_MIN_DASHES},}}")
# endregion


class ParserMode(Enum):
    """Block parser states"""

    SCANNING = "scanning"
    IN_TABLE = "in_table"


# region parse
def parse(raw_text: str) -> Document:
    r"""
    Parse minutes text into a Document.

    Total over all strings: the result never has more blocks than the input
    has lines, because a table consolidates several lines into one block.
    Lines are the "\n"-delimited pieces returned by `split_lines`.
    """
    text = strip_transcript_section(raw_text or "")
    lines = split_lines(text)

    blocks: list[Block] = []
    mode = ParserMode.SCANNING
    cursor = 0

    # Table under construction while in IN_TABLE mode
    table_header: Row = ()
    table_rows: list[Row] = []

    while cursor < len(lines):
        line = lines[cursor]

        if mode is ParserMode.IN_TABLE:
            if is_table_row(line):
                row = split_cells(line)
                if len(row) == len(table_header):
                    table_rows.append(row)
                else:
                    log.warning(
                        f"Dropping malformed table row at line {cursor + 1}: expected {len(table_header)} cells, got {len(row)}."
                    )
                cursor += 1
                continue

            # First non-row line closes the table; re-read it in SCANNING mode.
            blocks.append(Table(header=table_header, rows=tuple(table_rows)))
            mode = ParserMode.SCANNING
            continue

        next_line = lines[cursor + 1] if cursor + 1 < len(lines) else None

        if not line.strip():
            blocks.append(Blank())
            cursor += 1
        elif starts_table(line, next_line):
            table_header = split_cells(line)
            table_rows = []
            mode = ParserMode.IN_TABLE
            # Header plus separator row
            cursor += 2
        else:
            blocks.append(classify_line(line))
            cursor += 1

    if mode is ParserMode.IN_TABLE:
        blocks.append(Table(header=table_header, rows=tuple(table_rows)))

    log.debug(f"Parsed {len(lines)} lines into {len(blocks)} blocks.")
    return Document(blocks=tuple(blocks))


# endregion


# region strip_transcript_section
def strip_transcript_section(raw_text: str) -> str:
    """Cut the text at the first transcript heading ("## Transcription", "# TRANSCRIPT" ...), if any."""
    match = TRANSCRIPT_HEADING_PATTERN.search(raw_text)
    if match is None:
        return raw_text

    log.debug(
        f"Discarding transcript section starting at offset {match.start()} ({len(raw_text) - match.start()} chars)."
    )
    return raw_text[: match.start()]


# endregion


# region split_lines
def split_lines(text: str) -> list[str]:
    r"""
    Split text into lines on "\n" only.

    A trailing "\r" is dropped from each line so CRLF files read the same as LF
    files. Other control characters (form feed, "\u2028" ...) stay inside the line.
    A final newline does not start an extra empty line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# endregion


# region line classification
def classify_line(line: str) -> Block:
    """Classify a single non-blank line outside of a table."""
    stripped = line.strip()

    heading_match = HEADING_PATTERN.match(stripped)
    if heading_match:
        level = len(heading_match.group(1))
        return Heading(
            level=level, spans=tuple(parse_inline(heading_match.group(2).strip()))
        )

    if stripped.startswith(LIST_MARKERS):
        return ListItem(
            indent_level=indent_level_of(line),
            spans=tuple(parse_inline(stripped[2:].strip())),
        )

    return Paragraph(spans=tuple(parse_inline(stripped)))


def indent_level_of(line: str) -> int:
    """Leading whitespace width (tabs expanded) divided by the list indent unit."""
    expanded = line.expandtabs(TAB_WIDTH)
    width = len(expanded) - len(expanded.lstrip())
    return width // LIST_INDENT_UNIT


# endregion


# region table helpers
def is_table_row(line: str) -> bool:
    """A table body row is any non-blank line that contains the column separator."""
    return bool(line.strip()) and TABLE_COLUMN_SEPARATOR in line


def is_separator_row(line: str | None) -> bool:
    """
    True for lines like "| :--- | ---: |".

    Needs the column separator, a run of at least three dashes, and nothing
    besides separators, dashes, colons and whitespace.
    """
    if line is None or TABLE_COLUMN_SEPARATOR not in line:
        return False
    return bool(_DASH_RUN.search(line)) and bool(_SEPARATOR_CHARS.match(line))


def starts_table(line: str, next_line: str | None) -> bool:
    """A header-shaped line only opens a table when the very next line is a separator row."""
    return is_table_row(line) and is_separator_row(next_line)


def split_cells(line: str) -> Row:
    """Split a pipe row into cells: trim, drop one outer separator on each side, split, trim."""
    row = line.strip()
    if row.startswith(TABLE_COLUMN_SEPARATOR):
        row = row[1:]
    if row.endswith(TABLE_COLUMN_SEPARATOR):
        row = row[:-1]

    cells: list[Cell] = [
        tuple(parse_inline(piece.strip()))
        for piece in row.split(TABLE_COLUMN_SEPARATOR)
    ]
    return tuple(cells)


# endregion
