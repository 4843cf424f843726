# parse_inline.py
"""Recover bold/italic spans from a single line of minutes text."""

import re

from minutes2docx.models import Bold, Italic, Plain, Span

# Bold first so "**x**" is never read as two empty italics around "x".
# The italic body refuses "*" so a lone "**" or an unclosed "*" stays literal.
EMPHASIS_PATTERN = re.compile(r"\*\*(?P<bold>.*?)\*\*|\*(?P<italic>[^*]+)\*")


# region parse_inline
def parse_inline(line: str) -> list[Span]:
    """
    Split a line into Plain/Bold/Italic spans.

    Matches are found left to right and never overlap. A delimiter without a
    closing partner on the same line is kept as literal text, and empty
    fragments (e.g. "****") are dropped.

    Example:
        >>> parse_inline("Point **important**")
        [Plain(text='Point '), Bold(text='important')]
    """
    spans: list[Span] = []
    cursor = 0

    for match in EMPHASIS_PATTERN.finditer(line):
        if match.start() > cursor:
            spans.append(Plain(line[cursor : match.start()]))

        if match.group("bold") is not None:
            if match.group("bold"):
                spans.append(Bold(match.group("bold")))
        elif match.group("italic"):
            spans.append(Italic(match.group("italic")))

        cursor = match.end()

    if cursor < len(line):
        spans.append(Plain(line[cursor:]))

    return spans


# endregion
