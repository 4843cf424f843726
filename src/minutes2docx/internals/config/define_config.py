# internals/config/define_config.py
"""User configuration dataclass and validation."""

# region imports
from __future__ import annotations

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    # Python 3.10
    import tomli as tomllib  # type: ignore[no-redef]

import datetime
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import tomli_w  # For writing (no stdlib equivalent yet)

from minutes2docx.exceptions import UnknownThemeError
from minutes2docx.internals.paths import UserFolder, resolve_path, user_dir
from minutes2docx.themes import DEFAULT_THEME_ID, ThemeId

# endregion

log = logging.getLogger("minutes2docx")

SAMPLE_MINUTES_FILENAME = "sample_minutes.md"


# region class UserConfig
@dataclass
class UserConfig:
    """All user-configurable settings for minutes2docx."""

    # region class fields

    # region Input/Output
    input_text: Optional[Path] = None  # Generated minutes (.md / .txt)
    output_folder: Optional[Path] = None  # Desired output directory/folder to save in
    # endregion

    # region Meeting details
    title: Optional[str] = None  # Falls back to the first "# " heading, then "Untitled"
    date: Optional[str] = None  # ISO YYYY-MM-DD; today when unset
    # endregion

    # region Rendering options
    theme: ThemeId = DEFAULT_THEME_ID
    include_title_block: bool = True
    write_preview_html: bool = False
    # endregion

    # endregion

    # region post_init
    def __post_init__(self) -> None:
        """Convert string inputs of path and theme fields into Path / ThemeId objects."""
        if self.input_text is not None:
            self.input_text = Path(self.input_text)
        if self.output_folder is not None:
            self.output_folder = Path(self.output_folder)
        if isinstance(self.theme, str):
            self.theme = ThemeId.from_string(self.theme)

    # endregion

    # region class methods (populate a new instance)

    # region with_defaults
    @classmethod
    def with_defaults(cls) -> UserConfig:
        """
        Create a config object in memory pointing at the scaffolded sample minutes, for a quick CLI demo.

        Lets users run `minutes2docx --demo` and see it work immediately.
        """
        cfg = cls()
        cfg.input_text = user_dir(UserFolder.INPUT) / SAMPLE_MINUTES_FILENAME
        cfg.title = "Réunion de démonstration"
        cfg.write_preview_html = True
        return cfg

    # endregion

    # region from_toml
    @classmethod
    def from_toml(cls, path: Path) -> UserConfig:
        """
        Load configuration from a TOML file.

        The TOML file should have flat key-value pairs matching the UserConfig field names.

        Example TOML:
            input_text = "~/Documents/minutes2docx/input/comite.md"
            title = "Comité de pilotage"
            date = "2024-03-05"
            theme = "modern"
            write_preview_html = true

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If TOML is invalid or contains an unknown theme
        """
        if not path.exists():
            error_msg = f"Config file not found: {path}"
            log.error(error_msg)
            raise FileNotFoundError(error_msg)
        if path.is_dir():
            error_msg = f"This is a directory (folder), not a toml file: {path}"
            log.error(error_msg)
            raise ValueError(error_msg)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML syntax in {path}. Check for missing or mismatched quote marks."
            log.error(error_msg)
            raise ValueError(error_msg) from e
        except PermissionError as e:
            error_msg = f"We hit a permission error when trying to access {path}"
            log.error(error_msg)
            raise ValueError(error_msg) from e

        # Only warn; an empty file means "all defaults"
        if not data:
            log.warning(
                f"Config toml file loaded as empty, so no UserConfig fields were set from: {path}."
            )

        valid_fields = {f.name for f in fields(cls)}
        unexpected = set(data.keys()) - valid_fields

        if unexpected:
            log.warning(
                f"Ignoring unexpected fields in TOML config: {', '.join(sorted(unexpected))}. "
                f"Check for typos. Valid fields: {', '.join(sorted(valid_fields))}"
            )
            data = {k: v for k, v in data.items() if k in valid_fields}

        # TOML parses bare dates (date = 2024-03-05) into datetime.date
        if "date" in data and isinstance(data["date"], datetime.date):
            data["date"] = data["date"].isoformat()

        if "theme" in data:
            try:
                data["theme"] = ThemeId.from_string(data["theme"])
            except UnknownThemeError as e:
                log.error(f"Invalid theme in {path}: {e}")
                raise

        return cls(**data)

    # endregion

    # endregion

    # region instance getters/helpers
    def get_input_text_file(self) -> Path | None:
        """Get the minutes text file path, or None if not specified."""
        if self.input_text:
            return resolve_path(self.input_text)
        return None

    def get_output_folder(self) -> Path:
        """Get the output folder, with fallback to default."""
        if self.output_folder:
            return resolve_path(self.output_folder)
        return user_dir(UserFolder.OUTPUT)

    def get_date(self) -> str:
        """Meeting date as ISO string; today when unset."""
        if self.date:
            return self.date
        return datetime.date.today().isoformat()

    # endregion

    # region save_toml
    def save_toml(self, path: Path) -> None:
        """
        Save configuration to a TOML file.

        Args:
            path: Where to save the .toml file
        """
        path = Path(path)

        if path.exists() and path.is_dir():
            error_msg = f"Cannot save config: path is a directory, not a file: {path}."
            log.error(error_msg)
            raise ValueError(error_msg)

        path.parent.mkdir(parents=True, exist_ok=True)

        # TOML can't serialize None
        data = {k: v for k, v in self.config_to_dict().items() if v is not None}

        try:
            log.info(f"Attempting to save to {path}")
            with open(path, "wb") as f:
                tomli_w.dump(data, f)
            log.info(f"Saved toml config file at {path}")
        except PermissionError as e:
            error_msg = f"Permission denied writing to: {path}"
            log.error(error_msg)
            raise PermissionError(error_msg) from e
        except OSError as e:
            error_msg = f"Failed to write config file to {path}"
            log.error(error_msg)
            raise OSError(error_msg) from e

    # endregion

    # region config_to_dict
    def config_to_dict(self) -> dict[str, Any]:
        """Convert config to a TOML-serializable dict. Paths use forward slashes."""
        data: dict[str, Any] = {
            "input_text": self.input_text.as_posix() if self.input_text else None,
            "output_folder": (
                self.output_folder.as_posix() if self.output_folder else None
            ),
            "title": self.title,
            "date": self.date,
            "theme": self.theme.value,
            "include_title_block": self.include_title_block,
            "write_preview_html": self.write_preview_html,
        }
        return data

    # endregion

    # region instance validation methods
    def pre_run_check(self) -> None:
        """Validate everything needed for a conversion: intrinsic values, then the filesystem."""
        self.validate()

        input_path = self.get_input_text_file()
        if input_path is None:
            log.error("No input minutes file specified.")
            raise ValueError(
                "No input minutes file specified. Please set input_text before running the pipeline."
            )
        if not input_path.exists():
            error_msg = f"Input minutes file not found: {input_path}"
            log.error(error_msg)
            raise FileNotFoundError(error_msg)
        if not input_path.is_file():
            error_msg = f"Input minutes path is not a file: {input_path}"
            log.error(error_msg)
            raise ValueError(error_msg)

        output_folder = self.get_output_folder()
        if output_folder.exists() and not output_folder.is_dir():
            error_msg = f"Output path exists but is not a directory: {output_folder}"
            log.error(error_msg)
            raise ValueError(error_msg)

    def validate(self) -> None:
        """
        Validate intrinsic config values (no filesystem access).

        Catches wrong types, non-ISO dates and blank titles.
        """
        if not isinstance(self.theme, ThemeId):  # type: ignore[unreachable]
            log.error("Invalid value in theme; must be enum.")
            raise ValueError(
                f"theme must be a ThemeId enum, got {type(self.theme).__name__}. "
                f"Valid values: {[t.value for t in ThemeId]}"
            )

        for field_name in ("include_title_block", "write_preview_html"):
            val = getattr(self, field_name)
            if not isinstance(val, bool):
                log.error(f"{field_name} must be a boolean, got {type(val).__name__}")
                raise ValueError(
                    f"{field_name} must be a boolean, got {type(val).__name__}"
                )

        if self.date is not None:
            try:
                datetime.date.fromisoformat(str(self.date))
            except ValueError as e:
                error_msg = f"date must be in YYYY-MM-DD format, got '{self.date}'"
                log.error(error_msg)
                raise ValueError(error_msg) from e

        if self.title is not None and not str(self.title).strip():
            log.warning(
                "title is blank; the first heading of the minutes will be used instead."
            )

    # endregion


# endregion
