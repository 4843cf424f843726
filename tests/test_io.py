"""Test I/O functions"""

# tests/test_io.py
import logging
from pathlib import Path

import pytest

from minutes2docx.io import (
    build_export_filename,
    display_date,
    load_minutes_text,
    reformat_iso_date,
    safe_title,
    save_output,
    save_preview_html,
    validate_path,
    validate_text_path,
    warn_if_huge,
)


# region test validate_path
def test_validate_path_raises_when_path_is_dir(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Ensure we raise when a folder is passed in instead of a file."""

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ValueError, match="file"):
            validate_path(tmp_path)
    assert "Path is not a file" in caplog.text


def test_validate_path_raises_when_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        validate_path(tmp_path / "absent.md")


@pytest.mark.parametrize("name", ["comite.md", "comite.txt", "COMITE.MD", "notes.markdown"])
def test_validate_text_path_accepts_text_suffixes(tmp_path: Path, name: str) -> None:
    path = tmp_path / name
    path.touch()
    assert validate_text_path(path) == path


def test_validate_text_path_rejects_wrong_extension(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify we reject bad extensions and provide helpful error and logging messages."""
    wrong_ext = tmp_path / "compte_rendu.docx"
    wrong_ext.touch()

    with pytest.raises(ValueError, match="Expected a text file"):
        validate_text_path(wrong_ext)

    assert "Wrong file extension" in caplog.text


# endregion


# region test file naming
def test_export_filename_replaces_illegal_chars_and_reorders_date() -> None:
    assert (
        build_export_filename("Réunion: Q4 / Budget", "2024-03-05")
        == "Réunion_ Q4 _ Budget - 05-03-2024.docx"
    )


def test_export_filename_extension_is_configurable() -> None:
    assert build_export_filename("Comité", "2024-12-31", ext="html") == (
        "Comité - 31-12-2024.html"
    )


@pytest.mark.parametrize(
    "title,expected",
    [
        ('a\\b/c:d*e?f"g<h>i|j', "a_b_c_d_e_f_g_h_i_j"),
        ("  Comité  ", "Comité"),
        ("", "Untitled"),
        ("   ", "Untitled"),
        ("tab\tbreak\n", "tab_break_"),
    ],
)
def test_safe_title(title: str, expected: str) -> None:
    assert safe_title(title) == expected


def test_reformat_iso_date() -> None:
    assert reformat_iso_date("2024-03-05") == "05-03-2024"
    assert reformat_iso_date("2024-03-05", separator=".") == "05.03.2024"
    assert display_date("2024-03-05") == "05/03/2024"


def test_reformat_non_iso_date_passes_through_with_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        assert reformat_iso_date(" mardi 5 mars ") == "mardi 5 mars"
    assert "not in YYYY-MM-DD format" in caplog.text


def test_export_filename_with_non_iso_date_is_still_safe() -> None:
    assert build_export_filename("Comité", "05/03/2024") == "Comité - 05_03_2024.docx"


@pytest.mark.parametrize("iso_date", ["", "   "])
def test_export_filename_without_date_has_no_date_part(iso_date: str) -> None:
    assert build_export_filename("T", iso_date) == "T.docx"


def test_export_filename_untitled_applies_to_title_only() -> None:
    assert build_export_filename("///", "") == "___.docx"
    assert build_export_filename("  ", "2024-03-05") == "Untitled - 05-03-2024.docx"


# endregion


# region test load_minutes_text
def test_load_minutes_text_strips_bom(tmp_path: Path) -> None:
    path = tmp_path / "comite.md"
    path.write_bytes("\ufeff# Titre\n".encode("utf-8"))
    assert load_minutes_text(path) == "# Titre\n"


def test_load_minutes_text_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "comite.txt"
    path.write_bytes("Réunion".encode("latin-1"))

    with pytest.raises(ValueError, match="not valid UTF-8"):
        load_minutes_text(path)


def test_load_minutes_text_warns_on_empty_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "vide.md"
    path.write_text("  \n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        load_minutes_text(path)
    assert "is empty" in caplog.text


# endregion


# region test save_output
def test_save_output_writes_bytes(tmp_path: Path) -> None:
    folder = tmp_path / "nested" / "output"
    path = save_output(b"PK\x03\x04data", folder, "Comité - 05-03-2024.docx")

    assert path == folder / "Comité - 05-03-2024.docx"
    assert path.read_bytes() == b"PK\x03\x04data"


def test_save_output_replaces_existing_file_and_leaves_no_temp_files(
    tmp_path: Path,
) -> None:
    save_output(b"old", tmp_path, "a.docx")
    save_output(b"new", tmp_path, "a.docx")

    assert (tmp_path / "a.docx").read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["a.docx"]


def test_save_output_maps_permission_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def deny(*_args, **_kwargs):
        raise PermissionError("locked")

    monkeypatch.setattr("minutes2docx.io.os.replace", deny)

    with pytest.raises(PermissionError, match="open in another program"):
        save_output(b"data", tmp_path, "a.docx")

    assert list(tmp_path.iterdir()) == []


def test_save_preview_html(tmp_path: Path) -> None:
    path = save_preview_html("<p>é</p>", tmp_path, "a.html")
    assert path.read_text(encoding="utf-8") == "<p>é</p>"


# endregion


# region test warn_if_huge
def test_warn_if_huge(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        warn_if_huge(10)
        assert caplog.text == ""
        warn_if_huge(10001)
    assert "seems a bit long" in caplog.text


# endregion
