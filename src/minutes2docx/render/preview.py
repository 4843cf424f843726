# preview.py
"""Map a Document plus a ThemeSpec onto a visual node tree for on-screen display.

The tree is plain data (VisualNode) so the UI layer can mount it however it
likes; `to_html()` gives the HTML rendition used by the CLI's preview file.
Sizes come from the same constants as the .docx export, and colors, fonts and
header casing from the same ThemeSpec fields and helpers.
"""

# region imports
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from html import escape
from typing import Iterator

from minutes2docx.internals.constants import (
    BLANK_SPACER_PT,
    BODY_FONT_SIZE_PT,
    HEADING_FONT_SIZES_PT,
    HEADING_SPACING_PT,
    LIST_INDENT_STEP_PT,
    LIST_ITEM_SPACE_AFTER_PT,
    PARAGRAPH_SPACE_AFTER_PT,
    TABLE_CELL_PADDING_PT,
    TABLE_FONT_SIZE_PT,
    TITLE_FONT_SIZE_PT,
)
from minutes2docx.models import (
    Blank,
    Block,
    Bold,
    Document,
    Heading,
    Italic,
    ListItem,
    Paragraph,
    Plain,
    Row,
    Span,
    Table,
    TitleBlock,
)
from minutes2docx.themes import (
    ThemeSpec,
    bullet_glyph,
    header_case_spans,
    heading_color,
)

# endregion

log = logging.getLogger("minutes2docx")

TEXT_TAG = "#text"


# region VisualNode
@dataclass
class VisualNode:
    """
    One node of the preview tree.

    Text nodes use tag "#text" and carry `text`; element nodes carry a style
    dict (CSS property -> value) and children. Equality is structural, so two
    renders of the same Document with the same theme compare equal.
    """

    tag: str
    style: dict[str, str] = field(default_factory=dict)
    children: list[VisualNode] = field(default_factory=list)
    text: str | None = None

    @classmethod
    def text_node(cls, text: str) -> VisualNode:
        return cls(tag=TEXT_TAG, text=text)

    def iter_text(self) -> Iterator[str]:
        """Yield every text node's text, depth first."""
        if self.tag == TEXT_TAG and self.text is not None:
            yield self.text
        for child in self.children:
            yield from child.iter_text()

    def find_all(self, tag: str) -> list[VisualNode]:
        """All descendants (and self) with the given tag, in document order."""
        found = [self] if self.tag == tag else []
        for child in self.children:
            found.extend(child.find_all(tag))
        return found


# endregion


def _pt(value: float) -> str:
    return f"{value:g}pt"


def _hex(color: str) -> str:
    return f"#{color}"


# region render_preview
def render_preview(
    doc: Document, theme: ThemeSpec, title_block: TitleBlock | None = None
) -> VisualNode:
    """
    Build the preview tree for a parsed Document.

    Args:
        doc: Parsed minutes.
        theme: Resolved theme (see themes.resolve()).
        title_block: Optional meeting title and date shown above the minutes.

    Returns:
        Root "article" node whose children follow the Document's block order.
    """
    root = VisualNode(
        tag="article",
        style={
            "font-family": theme.body_font,
            "font-size": _pt(BODY_FONT_SIZE_PT),
            "color": _hex(theme.body_color),
        },
    )

    if title_block is not None:
        root.children.extend(_render_title_block(title_block, theme))

    for block in doc.blocks:
        root.children.append(_render_block(block, theme))

    log.debug(
        f"Rendered preview with {len(root.children)} top-level nodes using theme '{theme.id.value}'."
    )
    return root


# endregion


# region block renderers
def _render_block(block: Block, theme: ThemeSpec) -> VisualNode:
    if isinstance(block, Heading):
        return _render_heading(block, theme)
    if isinstance(block, Paragraph):
        return VisualNode(
            tag="p",
            style={
                "text-align": "justify",
                "color": _hex(theme.body_color),
                "margin": f"0 0 {_pt(PARAGRAPH_SPACE_AFTER_PT)} 0",
            },
            children=_render_spans(block.spans),
        )
    if isinstance(block, ListItem):
        return _render_list_item(block, theme)
    if isinstance(block, Table):
        return _render_table(block, theme)
    if isinstance(block, Blank):
        return VisualNode(tag="div", style={"height": _pt(BLANK_SPACER_PT)})

    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _render_title_block(
    title_block: TitleBlock, theme: ThemeSpec
) -> list[VisualNode]:
    title = VisualNode(
        tag="header",
        style={
            "font-family": theme.heading_font,
            "font-size": _pt(TITLE_FONT_SIZE_PT),
            "color": _hex(theme.heading_color),
            "text-align": "center",
        },
        children=[VisualNode.text_node(title_block.title)],
    )
    date = VisualNode(
        tag="p",
        style={"text-align": "center", "color": _hex(theme.body_color)},
        children=[VisualNode.text_node(f"Date : {title_block.date}")],
    )
    return [title, date]


def _render_heading(block: Heading, theme: ThemeSpec) -> VisualNode:
    before, after = HEADING_SPACING_PT[block.level]
    return VisualNode(
        tag=f"h{block.level}",
        style={
            "font-family": theme.heading_font,
            "font-size": _pt(HEADING_FONT_SIZES_PT[block.level]),
            "color": _hex(heading_color(theme, block.level)),
            "margin": f"{_pt(before)} 0 {_pt(after)} 0",
        },
        children=_render_spans(block.spans),
    )


def _render_list_item(block: ListItem, theme: ThemeSpec) -> VisualNode:
    marker = VisualNode(
        tag="span",
        style={"width": _pt(LIST_INDENT_STEP_PT), "flex-shrink": "0"},
        children=[VisualNode.text_node(bullet_glyph(theme))],
    )
    content = VisualNode(tag="span", children=_render_spans(block.spans))
    return VisualNode(
        tag="div",
        style={
            "display": "flex",
            "margin-left": _pt(block.indent_level * LIST_INDENT_STEP_PT),
            "margin-bottom": _pt(LIST_ITEM_SPACE_AFTER_PT),
            "color": _hex(theme.body_color),
        },
        children=[marker, content],
    )


def _render_table(block: Table, theme: ThemeSpec) -> VisualNode:
    border = f"{_pt(theme.border_weight_pt)} {theme.border_style.value} {_hex(theme.border_color)}"
    cell_style = {"border": border, "padding": _pt(TABLE_CELL_PADDING_PT)}

    head_row = VisualNode(
        tag="tr",
        children=[
            VisualNode(
                tag="th",
                style={
                    **cell_style,
                    "background-color": _hex(theme.header_bg),
                    "color": _hex(theme.header_text),
                },
                children=_render_spans(header_case_spans(cell, theme.header_case)),
            )
            for cell in block.header
        ],
    )

    body_rows = [_render_body_row(row, theme, cell_style) for row in block.rows]

    return VisualNode(
        tag="table",
        style={
            "border-collapse": "collapse",
            "width": "100%",
            "font-size": _pt(TABLE_FONT_SIZE_PT),
        },
        children=[
            VisualNode(tag="thead", children=[head_row]),
            VisualNode(tag="tbody", children=body_rows),
        ],
    )


def _render_body_row(
    row: Row, theme: ThemeSpec, cell_style: dict[str, str]
) -> VisualNode:
    return VisualNode(
        tag="tr",
        children=[
            VisualNode(
                tag="td",
                style={**cell_style, "color": _hex(theme.row_text)},
                children=_render_spans(cell),
            )
            for cell in row
        ],
    )


# endregion


# region spans
def _render_spans(spans: tuple[Span, ...]) -> list[VisualNode]:
    """Inline nodes for a span sequence; they inherit the containing block's color."""
    return [_render_span(span) for span in spans]


def _render_span(span: Span) -> VisualNode:
    if isinstance(span, Bold):
        return VisualNode(
            tag="strong",
            style={"font-weight": "bold"},
            children=[VisualNode.text_node(span.text)],
        )
    if isinstance(span, Italic):
        return VisualNode(
            tag="em",
            style={"font-style": "italic"},
            children=[VisualNode.text_node(span.text)],
        )
    if isinstance(span, Plain):
        return VisualNode.text_node(span.text)

    raise TypeError(f"Unsupported span type: {type(span).__name__}")


# endregion


# region to_html
def to_html(node: VisualNode) -> str:
    """Serialize a preview tree to an HTML fragment (text is escaped)."""
    if node.tag == TEXT_TAG:
        return escape(node.text or "")

    style = "; ".join(f"{key}: {value}" for key, value in node.style.items())
    style_attr = f' style="{escape(style)}"' if style else ""
    inner = "".join(to_html(child) for child in node.children)
    return f"<{node.tag}{style_attr}>{inner}</{node.tag}>"


def to_html_page(node: VisualNode, title: str) -> str:
    """Wrap a preview fragment in a standalone UTF-8 HTML page."""
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8">'
        f"<title>{escape(title)}</title></head>\n"
        f'<body style="max-width: 48rem; margin: 2rem auto">{to_html(node)}</body></html>\n'
    )


# endregion
