# export_docx.py
"""Serialize a Document into .docx bytes with python-docx.

Every block kind maps onto python-docx paragraph/run/table primitives using the
same ThemeSpec fields and helpers as the preview renderer, and the same
per-block-kind sizes from internals.constants. The final pack step runs in a
worker thread so callers on an event loop stay responsive.
"""
# mypy: disable-error-code="import-untyped"

# region imports
import asyncio
import logging
import zipfile
from io import BytesIO
from typing import Optional

import docx
from docx import document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt, RGBColor
from docx.table import Table as Table_docx
from docx.table import _Cell, _Row
from docx.text.paragraph import Paragraph as Paragraph_docx
from docx.text.run import Run as Run_docx

from minutes2docx.exceptions import ExportFailedError
from minutes2docx.internals.constants import (
    BLANK_SPACER_PT,
    BODY_FONT_SIZE_PT,
    HEADING_FONT_SIZES_PT,
    HEADING_SPACING_PT,
    LIST_INDENT_STEP_PT,
    LIST_ITEM_SPACE_AFTER_PT,
    PAGE_MARGIN_CM,
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
    Span,
    Table,
    TitleBlock,
)
from minutes2docx.themes import (
    BulletMarker,
    ThemeSpec,
    bullet_glyph,
    header_case_spans,
    heading_color,
)

# endregion

log = logging.getLogger("minutes2docx")

TABLE_STYLE = "Table Grid"
BULLET_STYLE = "List Bullet"
TITLE_STYLE = "Title"
# Earliest date a zip header can hold
ZIP_MEMBER_TIMESTAMP = (1980, 1, 1, 0, 0, 0)


# region serialize
async def serialize(
    doc: Document, theme: ThemeSpec, title_block: Optional[TitleBlock] = None
) -> bytes:
    """
    Build and pack a .docx for the given Document and theme.

    Each call builds its own python-docx object, so two exports never share an
    encoder instance.

    Raises:
        ExportFailedError: If building or packing fails. No partial bytes are returned.
    """
    try:
        word_doc = build_docx(doc, theme, title_block)
    except Exception as e:
        log.error(f"Could not build the docx model: {e}")
        raise ExportFailedError(f"Export failed while building the document: {e}") from e

    try:
        blob = await asyncio.to_thread(pack_docx, word_doc)
    except Exception as e:
        log.error(f"Could not pack the docx byte stream: {e}")
        raise ExportFailedError(f"Export failed while packing the document: {e}") from e

    log.info(
        f"Packed {len(blob)} bytes for {len(doc)} blocks with theme '{theme.id.value}'."
    )
    return blob


def pack_docx(word_doc: document.Document) -> bytes:
    """
    Save a python-docx Document into memory and return the bytes.

    python-docx stamps every zip member with the current time. The members are
    rewritten with a fixed timestamp, in the same order, so the same Document
    and theme always pack to the same bytes.
    """
    buffer = BytesIO()
    word_doc.save(buffer)
    return _normalize_zip_timestamps(buffer.getvalue())


def _normalize_zip_timestamps(blob: bytes) -> bytes:
    packed = BytesIO()
    with zipfile.ZipFile(BytesIO(blob)) as source, zipfile.ZipFile(
        packed, "w", zipfile.ZIP_DEFLATED
    ) as target:
        for member in source.infolist():
            info = zipfile.ZipInfo(member.filename, date_time=ZIP_MEMBER_TIMESTAMP)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = member.external_attr
            target.writestr(info, source.read(member.filename))
    return packed.getvalue()


# endregion


# region build_docx
def build_docx(
    doc: Document, theme: ThemeSpec, title_block: Optional[TitleBlock] = None
) -> document.Document:
    """Map every block onto a fresh python-docx Document."""
    word_doc = docx.Document()

    _set_page_margins(word_doc)
    _set_base_style(word_doc, theme)

    if title_block is not None:
        word_doc.core_properties.title = title_block.title
        word_doc.core_properties.subject = f"Date : {title_block.date}"
        _add_title_block(word_doc, title_block, theme)

    for block in doc.blocks:
        _add_block(word_doc, block, theme)

    return word_doc


def _add_block(word_doc: document.Document, block: Block, theme: ThemeSpec) -> None:
    if isinstance(block, Heading):
        _add_heading(word_doc, block, theme)
    elif isinstance(block, Paragraph):
        _add_body_paragraph(word_doc, block, theme)
    elif isinstance(block, ListItem):
        _add_list_item(word_doc, block, theme)
    elif isinstance(block, Table):
        _add_table(word_doc, block, theme)
    elif isinstance(block, Blank):
        _add_spacer(word_doc)
    else:
        raise TypeError(f"Unsupported block type: {type(block).__name__}")


# endregion


# region page and base style
def _set_page_margins(word_doc: document.Document) -> None:
    """Uniform margin on all four sides of every section."""
    margin = Cm(PAGE_MARGIN_CM)
    for section in word_doc.sections:
        section.top_margin = margin
        section.bottom_margin = margin
        section.left_margin = margin
        section.right_margin = margin


def _set_base_style(word_doc: document.Document, theme: ThemeSpec) -> None:
    normal = word_doc.styles["Normal"]
    normal.font.name = theme.body_font
    normal.font.size = Pt(BODY_FONT_SIZE_PT)
    normal.font.color.rgb = RGBColor.from_string(theme.body_color)


# endregion


# region block writers
def _add_title_block(
    word_doc: document.Document, title_block: TitleBlock, theme: ThemeSpec
) -> None:
    title_para = word_doc.add_paragraph(style=TITLE_STYLE)
    title_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title_para.paragraph_format.space_after = Pt(5)
    _style_run(
        title_para.add_run(title_block.title),
        font_name=theme.heading_font,
        size_pt=TITLE_FONT_SIZE_PT,
        color=theme.heading_color,
    )

    date_para = word_doc.add_paragraph()
    date_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    date_para.paragraph_format.space_after = Pt(20)
    _style_run(
        date_para.add_run(f"Date : {title_block.date}"),
        font_name=theme.body_font,
        size_pt=BODY_FONT_SIZE_PT,
        color=theme.body_color,
    )


def _add_heading(word_doc: document.Document, block: Heading, theme: ThemeSpec) -> None:
    para = word_doc.add_paragraph(style=f"Heading {block.level}")
    before, after = HEADING_SPACING_PT[block.level]
    para.paragraph_format.space_before = Pt(before)
    para.paragraph_format.space_after = Pt(after)

    _add_spans(
        para,
        block.spans,
        font_name=theme.heading_font,
        size_pt=HEADING_FONT_SIZES_PT[block.level],
        color=heading_color(theme, block.level),
    )


def _add_body_paragraph(
    word_doc: document.Document, block: Paragraph, theme: ThemeSpec
) -> None:
    para = word_doc.add_paragraph()
    para.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
    para.paragraph_format.space_after = Pt(PARAGRAPH_SPACE_AFTER_PT)

    _add_spans(
        para,
        block.spans,
        font_name=theme.body_font,
        size_pt=BODY_FONT_SIZE_PT,
        color=theme.body_color,
    )


def _add_list_item(
    word_doc: document.Document, block: ListItem, theme: ThemeSpec
) -> None:
    """
    Dot-marker themes use Word's own bullet list style; glyph-marker themes
    write the glyph as the first run. Both get the same hanging indent as
    the preview: one step per nesting level.
    """
    if theme.bullet_marker is BulletMarker.DOT:
        para = word_doc.add_paragraph(style=BULLET_STYLE)
    else:
        para = word_doc.add_paragraph()
        _style_run(
            para.add_run(f"{bullet_glyph(theme)}\t"),
            font_name=theme.body_font,
            size_pt=BODY_FONT_SIZE_PT,
            color=theme.body_color,
        )

    fmt = para.paragraph_format
    fmt.left_indent = Pt(LIST_INDENT_STEP_PT * (block.indent_level + 1))
    fmt.first_line_indent = Pt(-LIST_INDENT_STEP_PT)
    fmt.space_after = Pt(LIST_ITEM_SPACE_AFTER_PT)

    _add_spans(
        para,
        block.spans,
        font_name=theme.body_font,
        size_pt=BODY_FONT_SIZE_PT,
        color=theme.body_color,
    )


def _add_spacer(word_doc: document.Document) -> None:
    """Empty paragraph with an exact line height, matching the preview spacer."""
    para = word_doc.add_paragraph()
    fmt = para.paragraph_format
    fmt.line_spacing = Pt(BLANK_SPACER_PT)
    fmt.space_before = Pt(0)
    fmt.space_after = Pt(0)


def _add_table(word_doc: document.Document, block: Table, theme: ThemeSpec) -> None:
    table = word_doc.add_table(rows=1 + len(block.rows), cols=block.column_count)
    table.style = word_doc.styles[TABLE_STYLE]

    _set_table_borders(table, theme)
    _set_table_cell_padding(table, TABLE_CELL_PADDING_PT)

    header_row = table.rows[0]
    _mark_header_row(header_row)
    for cell, spans in zip(header_row.cells, block.header):
        _set_cell_background(cell, theme.header_bg)
        _fill_cell(
            cell,
            header_case_spans(spans, theme.header_case),
            theme,
            color=theme.header_text,
            bold=True,
        )

    for row, row_spans in zip(table.rows[1:], block.rows):
        for cell, spans in zip(row.cells, row_spans):
            _fill_cell(cell, spans, theme, color=theme.row_text)

    # Breathing room after the table; python-docx tables have no spacing of their own.
    _add_spacer(word_doc)


# endregion


# region runs
def _add_spans(
    para: Paragraph_docx,
    spans: tuple[Span, ...],
    font_name: str,
    size_pt: float,
    color: str,
    bold: Optional[bool] = None,
) -> None:
    """One run per span. Bold/italic only ever turn emphasis on; color and font are inherited from the block."""
    for span in spans:
        run = para.add_run(span.text)
        _style_run(run, font_name=font_name, size_pt=size_pt, color=color)

        if isinstance(span, Bold) or bold:
            run.bold = True
        if isinstance(span, Italic):
            run.italic = True


def _style_run(run: Run_docx, font_name: str, size_pt: float, color: str) -> None:
    run.font.name = font_name
    run.font.size = Pt(size_pt)
    run.font.color.rgb = RGBColor.from_string(color)


# endregion


# region table XML helpers
def _fill_cell(
    cell: _Cell,
    spans: tuple[Span, ...],
    theme: ThemeSpec,
    color: str,
    bold: Optional[bool] = None,
) -> None:
    # A fresh cell already holds one empty paragraph
    para = cell.paragraphs[0]
    para.paragraph_format.space_after = Pt(0)
    _add_spans(
        para,
        spans,
        font_name=theme.body_font,
        size_pt=TABLE_FONT_SIZE_PT,
        color=color,
        bold=bold,
    )


def _set_cell_background(cell: _Cell, hex_color: str) -> None:
    """Set cell background color"""
    tcPr = cell._tc.get_or_add_tcPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), hex_color)
    tcPr.append(shd)


def _mark_header_row(row: _Row) -> None:
    """Flag the row as a header that Word repeats at the top of each page."""
    tr_pr = row._tr.get_or_add_trPr()
    if tr_pr.find(qn("w:tblHeader")) is None:
        header = OxmlElement("w:tblHeader")
        header.set(qn("w:val"), "true")
        tr_pr.append(header)


def _set_table_borders(table: Table_docx, theme: ThemeSpec) -> None:
    """Outer and inner borders all use the theme's border style, weight and color."""
    tbl_borders = OxmlElement("w:tblBorders")
    # w:sz is in eighths of a point
    size = str(max(2, round(theme.border_weight_pt * 8)))

    for border_name in ("top", "left", "bottom", "right", "insideH", "insideV"):
        border = OxmlElement(f"w:{border_name}")
        border.set(qn("w:val"), theme.border_style.docx_value)
        border.set(qn("w:sz"), size)
        border.set(qn("w:space"), "0")
        border.set(qn("w:color"), theme.border_color)
        tbl_borders.append(border)

    _insert_tbl_pr_child(table, tbl_borders)


def _set_table_cell_padding(table: Table_docx, padding_pt: float) -> None:
    """Uniform default cell margins for the whole table."""
    cell_mar = OxmlElement("w:tblCellMar")
    twips = str(round(padding_pt * 20))

    for side in ("top", "left", "bottom", "right"):
        margin = OxmlElement(f"w:{side}")
        margin.set(qn("w:w"), twips)
        margin.set(qn("w:type"), "dxa")
        cell_mar.append(margin)

    _insert_tbl_pr_child(table, cell_mar)


def _insert_tbl_pr_child(table: Table_docx, element) -> None:
    """Add a tblPr child, replacing any existing one and keeping w:tblLook last."""
    tbl_pr = table._tbl.tblPr
    existing = tbl_pr.find(element.tag)
    if existing is not None:
        tbl_pr.remove(existing)

    tbl_look = tbl_pr.find(qn("w:tblLook"))
    if tbl_look is not None:
        tbl_look.addprevious(element)
    else:
        tbl_pr.append(element)


# endregion
