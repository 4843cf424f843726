# io.py
"""File I/O for minutes text input, exported .docx bytes and HTML previews."""

import logging
import os
import re
import tempfile
from datetime import date
from pathlib import Path

from minutes2docx.internals import constants

log = logging.getLogger("minutes2docx")

# Characters Windows, macOS or Linux refuse in file names, plus ASCII control characters.
ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')

TEXT_SUFFIXES = {".txt", ".md", ".markdown"}

MAX_BLOCK_COUNT_WARNING = 10000


# region Path Helpers
def validate_path(user_path: str | Path) -> Path:
    """Ensure filepath exists and is a file."""
    path = Path(user_path)
    if not path.exists():
        log.error(f"File not found: {user_path}")
        raise FileNotFoundError(f"File not found: {user_path}")
    if not path.is_file():
        log.error(f"Path is not a file (might be a directory): {user_path}")
        raise ValueError(f"Path is not a file: {user_path}")
    return path


def validate_text_path(user_path: str | Path) -> Path:
    """Validates the minutes filepath exists and looks like a plain text / markdown file."""
    path = validate_path(user_path)

    if path.suffix.lower() not in TEXT_SUFFIXES:
        log.error(
            f"Wrong file extension: expected one of {sorted(TEXT_SUFFIXES)}, got {path.suffix}"
        )
        raise ValueError(
            f"Expected a text file ({', '.join(sorted(TEXT_SUFFIXES))}), but got: {path.suffix or 'no extension'}"
        )
    return path


# endregion


# region file naming
def _filename_part(text: str) -> str:
    return ILLEGAL_FILENAME_CHARS.sub(constants.FILENAME_SAFE_CHAR, text).strip()


def safe_title(title: str) -> str:
    """Replace characters that are illegal in file names with FILENAME_SAFE_CHAR."""
    return _filename_part(title) or constants.UNTITLED_TITLE


def reformat_iso_date(iso_date: str, separator: str = "-") -> str:
    """
    Reorder an ISO date (YYYY-MM-DD) into day-month-year.

    Anything that is not an ISO date is returned unchanged (after a warning),
    since the date comes from an outside form field we don't control.
    """
    try:
        parsed = date.fromisoformat(iso_date.strip())
    except ValueError:
        log.warning(f"Date '{iso_date}' is not in YYYY-MM-DD format; using it as-is.")
        return iso_date.strip()
    return parsed.strftime(f"%d{separator}%m{separator}%Y")


def display_date(iso_date: str) -> str:
    """Date as printed in the title block, e.g. 05/03/2024."""
    return reformat_iso_date(iso_date, separator="/")


def build_export_filename(
    title: str, iso_date: str, ext: str = constants.OUTPUT_DOCX_EXTENSION
) -> str:
    """
    Build "<safe-title> - <dd-mm-yyyy>.<ext>".

    Only the title falls back to "Untitled"; without a date the name is
    "<safe-title>.<ext>".

    Example:
        >>> build_export_filename("Réunion: Q4 / Budget", "2024-03-05")
        'Réunion_ Q4 _ Budget - 05-03-2024.docx'
    """
    stem = safe_title(title)
    if iso_date.strip():
        stem = f"{stem} - {_filename_part(reformat_iso_date(iso_date))}"
    return f"{stem}.{ext}"


# endregion


# region Disk I/O - Read
def load_minutes_text(input_filepath: Path) -> str:
    """Read the generated minutes text (UTF-8, BOM tolerated)."""
    path = validate_text_path(input_filepath)

    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        log.error(f"Could not decode {str(path)} as UTF-8. Error: {e}")
        raise ValueError(f"Minutes file is not valid UTF-8 text: {e}") from e

    if not text.strip():
        log.warning(
            f"Minutes file {str(path)} is empty; the export will only contain the title block."
        )

    return text


# endregion


# region Disk I/O - Write
def save_output(blob: bytes, folder: Path, filename: str) -> Path:
    """
    Write the exported bytes to `folder / filename`.

    The bytes go to a temp file in the same folder first and are then moved
    into place, so an interrupted write never leaves a truncated .docx behind.
    An existing file with the same name is replaced.
    """
    folder.mkdir(parents=True, exist_ok=True)
    output_filepath = folder / filename

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=folder, prefix=".partial-", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(blob)
        os.replace(tmp_name, output_filepath)
        tmp_name = None
        log.info(f"Successfully saved to {output_filepath}.")
    except PermissionError as e:
        log.error(f"Save failed due to permission error: {e}")
        raise PermissionError(
            "Save failed: File may be open in another program"
        ) from e
    except OSError as e:
        log.error(f"Save failed: {e}")
        raise OSError(f"Save failed (disk space or IO issue): {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)

    return output_filepath


def save_preview_html(html: str, folder: Path, filename: str) -> Path:
    """Write the HTML preview next to the exported document."""
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / filename
    path.write_text(html, encoding="utf-8")
    log.info(f"Wrote HTML preview to {path}")
    return path


def warn_if_huge(block_count: int) -> None:
    """Report if the document we're about to export is excessively large."""
    if block_count > MAX_BLOCK_COUNT_WARNING:
        log.warning(
            f"This is about to export a docx with over {MAX_BLOCK_COUNT_WARNING} blocks ... that seems a bit long!"
        )


# endregion
