"""Tests for CLI argument parsing and config building."""

import sys
from pathlib import Path

import pytest

from minutes2docx.cli import build_config_from_args, build_parser, parse_args, run
from minutes2docx.exceptions import UnknownThemeError
from minutes2docx.internals.config.define_config import UserConfig
from minutes2docx.themes import ThemeId


# region TestParseArgs
class TestParseArgs:
    """Test that parse_args stores the values we expect."""

    @pytest.mark.parametrize(
        argnames="arg_dest_name,cli_flag,expected",
        argvalues=[
            ("include_title_block", "--title-block", True),
            ("include_title_block", "--no-title-block", False),
            ("write_preview_html", "--preview-html", True),
            ("write_preview_html", "--no-preview-html", False),
        ],
    )
    def test_cli_boolean_flags_set_correctly_when_provided(
        self,
        monkeypatch: pytest.MonkeyPatch,
        arg_dest_name: str,
        cli_flag: str,
        expected: bool,
    ) -> None:
        """Test that boolean flags set correct True/False values when they are provided explicitly."""
        monkeypatch.setattr(sys, "argv", ["minutes2docx", cli_flag])
        args = parse_args()
        assert getattr(args, arg_dest_name) == expected

    @pytest.mark.parametrize(
        argnames="arg_dest_name",
        argvalues=[
            "input_text",
            "output_folder",
            "title",
            "date",
            "theme",
            "include_title_block",
            "write_preview_html",
        ],
    )
    def test_options_default_to_none_when_not_provided(
        self, monkeypatch: pytest.MonkeyPatch, arg_dest_name: str
    ) -> None:
        """Unprovided options stay None so config file values are not overwritten."""
        monkeypatch.setattr(sys, "argv", ["minutes2docx"])
        args = parse_args()
        assert getattr(args, arg_dest_name) is None

    def test_demo_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["minutes2docx"])
        assert parse_args().demo is False

        monkeypatch.setattr(sys, "argv", ["minutes2docx", "--demo"])
        assert parse_args().demo is True

    def test_conflicting_boolean_flags_exit(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            sys, "argv", ["minutes2docx", "--title-block", "--no-title-block"]
        )
        with pytest.raises(SystemExit):
            parse_args()

    def test_unknown_theme_is_rejected_by_argparse(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["minutes2docx", "--theme", "sepia"])
        with pytest.raises(SystemExit):
            parse_args()

    def test_every_config_field_has_an_argument(self) -> None:
        """build_parser() raises if the CLI and UserConfig drift apart."""
        parser = build_parser()
        dests = {action.dest for action in parser._actions}
        assert {"input_text", "output_folder", "title", "date", "theme"} <= dests


# endregion


# region TestBuildConfigFromArgs
class TestBuildConfigFromArgs:
    """CLI args > config file > defaults."""

    def test_no_args_gives_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["minutes2docx"])
        assert build_config_from_args(parse_args()) == UserConfig()

    def test_cli_values_are_applied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "minutes2docx",
                "--input-text",
                "comite.md",
                "--title",
                "Comité",
                "--date",
                "2024-03-05",
                "--theme",
                "modern",
                "--no-title-block",
                "--preview-html",
            ],
        )
        cfg = build_config_from_args(parse_args())

        assert cfg.input_text == Path("comite.md")
        assert cfg.title == "Comité"
        assert cfg.date == "2024-03-05"
        assert cfg.theme is ThemeId.MODERN
        assert cfg.include_title_block is False
        assert cfg.write_preview_html is True

    def test_cli_overrides_config_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        toml_path = tmp_path / "cfg.toml"
        toml_path.write_text(
            'title = "Depuis le fichier"\ntheme = "modern"\n', encoding="utf-8"
        )
        monkeypatch.setattr(
            sys,
            "argv",
            ["minutes2docx", "--config", str(toml_path), "--theme", "corporate"],
        )

        cfg = build_config_from_args(parse_args())

        assert cfg.title == "Depuis le fichier"
        assert cfg.theme is ThemeId.CORPORATE

    def test_bad_theme_in_config_file_raises(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        toml_path = tmp_path / "cfg.toml"
        toml_path.write_text('theme = "sepia"\n', encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["minutes2docx", "--config", str(toml_path)])

        with pytest.raises(UnknownThemeError):
            build_config_from_args(parse_args())

    def test_bad_date_fails_validation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["minutes2docx", "--date", "05/03/2024"])
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            build_config_from_args(parse_args())

    def test_demo_ignores_other_options(
        self, monkeypatch: pytest.MonkeyPatch, fake_documents_dir: Path
    ) -> None:
        monkeypatch.setattr(
            sys, "argv", ["minutes2docx", "--demo", "--theme", "modern"]
        )
        cfg = build_config_from_args(parse_args())

        assert cfg.theme is ThemeId.CORPORATE
        assert cfg.input_text is not None
        assert cfg.input_text.name == "sample_minutes.md"


# endregion


# region run
def test_run_saves_docx_and_prints_path(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    path_to_sample_minutes: Path,
    temp_output_dir: Path,
) -> None:
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "minutes2docx",
            "--input-text",
            str(path_to_sample_minutes),
            "--output-folder",
            str(temp_output_dir),
            "--date",
            "2024-03-05",
        ],
    )

    run()

    expected = temp_output_dir / "Compte Rendu - 05-03-2024.docx"
    assert expected.is_file()
    assert str(expected) in capsys.readouterr().out


# endregion
