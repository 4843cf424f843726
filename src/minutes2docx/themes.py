# themes.py
"""Theme registry: the closed set of visual specifications both renderers consult.

The preview renderer and the export serializer never hard-code a color, font
or border: they read the same ThemeSpec fields and call the same helpers
(`header_case_spans`, `heading_color`, `bullet_glyph`), so a theme change can
only ever move both outputs together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence

from minutes2docx.exceptions import UnknownThemeError
from minutes2docx.models import Span

log = logging.getLogger("minutes2docx")


# region Enums
class ThemeId(Enum):
    """Registered theme choices"""

    CORPORATE = "corporate"
    MODERN = "modern"

    @classmethod
    def from_string(cls, value: str) -> "ThemeId":
        """Convert string to ThemeId (case-insensitive, surrounding whitespace ignored)."""
        normalized = str(value).lower().strip()

        for member in cls:
            if member.value == normalized:
                return member

        raise UnknownThemeError(value, [m.value for m in cls])


class HeaderCase(Enum):
    """Text-case transform applied to table header cells."""

    UPPERCASE = "uppercase"
    CAPITALIZE = "capitalize"
    NONE = "none"


class BulletMarker(Enum):
    """Shape of the list item marker."""

    DOT = "dot"
    GLYPH = "glyph"


class BorderStyle(Enum):
    """Table border line style. Values are the CSS names; see `docx_value`."""

    SOLID = "solid"
    DASHED = "dashed"
    DOUBLE = "double"

    @property
    def docx_value(self) -> str:
        """The matching w:val for OOXML border elements."""
        return {"solid": "single", "dashed": "dashed", "double": "double"}[self.value]


# endregion


# region ThemeSpec
@dataclass(frozen=True)
class ThemeSpec:
    """
    Named bundle of visual parameters.

    Colors are 6-digit hex strings without '#', which is what python-docx's
    RGBColor.from_string() and OOXML w:fill/w:color attributes both expect;
    the preview adds the '#' itself.
    """

    id: ThemeId
    body_font: str
    heading_font: str
    heading_color: str
    subheading_color: str
    body_color: str
    header_bg: str
    header_text: str
    border_color: str
    border_style: BorderStyle
    border_weight_pt: float
    header_case: HeaderCase
    bullet_marker: BulletMarker

    @property
    def row_text(self) -> str:
        """Table body cells use the body text color."""
        return self.body_color


# endregion


# region registry
_CORPORATE = ThemeSpec(
    id=ThemeId.CORPORATE,
    body_font="Calibri",
    heading_font="Cambria",
    heading_color="1F3864",
    subheading_color="2E5597",
    body_color="262626",
    header_bg="D9E2F3",
    header_text="1F3864",
    border_color="8EAADB",
    border_style=BorderStyle.SOLID,
    border_weight_pt=0.5,
    header_case=HeaderCase.UPPERCASE,
    bullet_marker=BulletMarker.DOT,
)

_MODERN = ThemeSpec(
    id=ThemeId.MODERN,
    body_font="Arial",
    heading_font="Arial",
    heading_color="0F766E",
    subheading_color="7C3AED",
    body_color="1F2937",
    header_bg="0F766E",
    header_text="FFFFFF",
    border_color="5EEAD4",
    border_style=BorderStyle.SOLID,
    border_weight_pt=1.0,
    header_case=HeaderCase.CAPITALIZE,
    bullet_marker=BulletMarker.GLYPH,
)

THEMES: Mapping[ThemeId, ThemeSpec] = MappingProxyType(
    {
        ThemeId.CORPORATE: _CORPORATE,
        ThemeId.MODERN: _MODERN,
    }
)

DEFAULT_THEME_ID = ThemeId.CORPORATE
# endregion


# region resolve
def resolve(theme_id: ThemeId | str) -> ThemeSpec:
    """
    Look up a registered theme.

    Args:
        theme_id: A ThemeId member, or its string value ("corporate", "modern").

    Raises:
        UnknownThemeError: If the id is not registered. There is no fallback theme.
    """
    if not isinstance(theme_id, ThemeId):
        try:
            theme_id = ThemeId.from_string(theme_id)
        except UnknownThemeError:
            log.error(f"Unknown theme requested: '{theme_id}'")
            raise

    theme = THEMES.get(theme_id)
    if theme is None:
        log.error(f"Theme id {theme_id} has no registered ThemeSpec.")
        raise UnknownThemeError(theme_id.value, [t.value for t in THEMES])
    return theme


# endregion


# region shared helpers
def apply_header_case(text: str, header_case: HeaderCase) -> str:
    """Apply a theme's table header text-case transform to a plain string."""
    return header_case_texts((text,), header_case)[0]


def header_case_spans(spans: Sequence[Span], header_case: HeaderCase) -> tuple[Span, ...]:
    """
    Apply a theme's header text-case transform to one header cell.

    The cell is cased as a whole, so a word split across emphasis spans
    (`**a**ction`) is capitalized once. Span kinds are kept. Both renderers call this.
    """
    texts = header_case_texts([span.text for span in spans], header_case)
    return tuple(replace(span, text=text) for span, text in zip(spans, texts))


def header_case_texts(texts: Sequence[str], header_case: HeaderCase) -> list[str]:
    """Case consecutive pieces of one text as if they were joined."""
    if header_case is HeaderCase.UPPERCASE:
        return [text.upper() for text in texts]
    if header_case is HeaderCase.CAPITALIZE:
        return _capitalize_words(texts)
    return list(texts)


def _capitalize_words(texts: Sequence[str]) -> list[str]:
    # A word starts after whitespace or at the start of the cell; the first
    # letter or digit after that point is uppercased, the rest is left alone.
    # "l'action" -> "L'action", "(suivi)" -> "(Suivi)"
    at_word_start = True
    cased: list[str] = []
    for text in texts:
        chars: list[str] = []
        for ch in text:
            if ch.isspace():
                at_word_start = True
            elif ch.isalnum() and at_word_start:
                ch = ch.upper()
                at_word_start = False
            chars.append(ch)
        cased.append("".join(chars))
    return cased


def heading_color(theme: ThemeSpec, level: int) -> str:
    """Level 1 headings use the heading color; levels 2 and 3 the subheading color."""
    return theme.heading_color if level == 1 else theme.subheading_color


def bullet_glyph(theme: ThemeSpec) -> str:
    """Marker character drawn in front of list items."""
    if theme.bullet_marker is BulletMarker.GLYPH:
        return "▸"
    return "•"


# endregion
