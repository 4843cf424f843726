"""Run one minutes conversion: parse once, then preview and export from the same Document."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from minutes2docx import io
from minutes2docx.internals import constants
from minutes2docx.internals.config.define_config import UserConfig
from minutes2docx.internals.run_context import conversion_scope, get_session_id
from minutes2docx.models import Document, TitleBlock
from minutes2docx.processing.parse_blocks import parse
from minutes2docx.render.export_docx import serialize
from minutes2docx.render.preview import VisualNode, render_preview, to_html_page
from minutes2docx.themes import ThemeId, resolve

log = logging.getLogger("minutes2docx")


# region ConversionResult
@dataclass(frozen=True)
class ConversionResult:
    """Everything one conversion produces. Nothing in here is shared with another conversion."""

    document: Document
    title: str
    preview: VisualNode
    docx_bytes: bytes
    filename: str
    conversion_id: str


# endregion


# region convert_minutes
async def convert_minutes(
    raw_text: str,
    title: Optional[str],
    iso_date: str,
    theme_id: ThemeId | str,
    include_title_block: bool = True,
) -> ConversionResult:
    """
    Turn generated minutes text into a preview tree and .docx bytes.

    The theme is resolved before anything else, so an unknown theme produces
    neither a preview nor a byte stream.

    Log lines emitted during the call carry its conversion id (see
    run_context.conversion_scope).

    Raises:
        UnknownThemeError: theme_id is not registered.
        ExportFailedError: packing the .docx failed.
    """
    with conversion_scope() as conversion_id:
        theme = resolve(theme_id)
        log.debug(f"Converting {len(raw_text)} chars of minutes with theme '{theme.id.value}'.")

        document = parse(raw_text)
        io.warn_if_huge(len(document))

        resolved_title = resolve_title(title, document)
        title_block = (
            TitleBlock(title=resolved_title, date=io.display_date(iso_date))
            if include_title_block
            else None
        )

        preview = render_preview(document, theme, title_block)
        docx_bytes = await serialize(document, theme, title_block)

        return ConversionResult(
            document=document,
            title=resolved_title,
            preview=preview,
            docx_bytes=docx_bytes,
            filename=io.build_export_filename(resolved_title, iso_date),
            conversion_id=conversion_id,
        )


# endregion


# region resolve_title
def resolve_title(title: Optional[str], document: Document) -> str:
    """
    Title used for the title block and the file name.

    Provided title first, then the text of the first level-1 heading of the
    minutes, then "Untitled". The whole text is otherwise treated as one
    untitled section; no particular fallback heading is searched for.
    """
    if title and title.strip():
        return title.strip()

    heading_text = document.first_heading_text(level=1)
    if heading_text:
        log.debug(f"No title provided; using first heading '{heading_text}'.")
        return heading_text

    log.info(f"No title provided or found; using '{constants.UNTITLED_TITLE}'.")
    return constants.UNTITLED_TITLE


# endregion


# region run_pipeline
def run_pipeline(cfg: UserConfig) -> Path:
    """Validate the config, convert the minutes file and save the .docx. Returns the saved path."""

    cfg.pre_run_check()

    with conversion_scope() as conversion_id:
        log_pipeline_info(cfg, conversion_id)

        input_path = cfg.get_input_text_file()
        if input_path is None:  # unreachable after pre_run_check()
            raise ValueError("No input minutes file specified.")

        raw_text = io.load_minutes_text(input_path)
        iso_date = cfg.get_date()

        # asyncio.run copies this context, so convert_minutes joins the scope
        result = asyncio.run(
            convert_minutes(
                raw_text,
                title=cfg.title,
                iso_date=iso_date,
                theme_id=cfg.theme,
                include_title_block=cfg.include_title_block,
            )
        )

        output_folder = cfg.get_output_folder()
        output_path = io.save_output(result.docx_bytes, output_folder, result.filename)

        if cfg.write_preview_html:
            html_name = Path(result.filename).with_suffix(".html").name
            io.save_preview_html(
                to_html_page(result.preview, result.title), output_folder, html_name
            )

        log.info(f"=== Pipeline Run Finished: {output_path} ===")
    return output_path


# endregion


# region log_pipeline_info
def log_pipeline_info(cfg: UserConfig, conversion_id: str) -> None:
    """Print this run's conversion ID, session ID, and general config info to the log."""
    log.info("=== Pipeline Run Started ===")
    log.info(f"Conversion ID: {conversion_id}")
    log.info(f"Session ID: {get_session_id()}")
    log.info(f"Input: {cfg.input_text}")
    log.info(f"Theme: {cfg.theme.value}")
    log.info(f"Configuration: {cfg}")


# endregion
