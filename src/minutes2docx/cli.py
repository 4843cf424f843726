"""CLI Interface Logic (argparse etc)"""

import argparse
import logging
from dataclasses import fields
from pathlib import Path

from minutes2docx.internals.config.define_config import UserConfig
from minutes2docx.orchestrator import run_pipeline
from minutes2docx.themes import ThemeId

log = logging.getLogger("minutes2docx")


def run() -> None:
    """Run CLI interface. Assumes startup.initialize_application() was already called."""
    args = parse_args()

    # CLI args > config file > defaults
    cfg = build_config_from_args(args)

    output_path = run_pipeline(cfg)
    print(f"Saved: {output_path}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Kept separate from parse_args() so tests can inspect it."""
    parser = argparse.ArgumentParser(
        prog="minutes2docx",
        description="Turn generated meeting minutes (markdown-like text) into a themed Word document and HTML preview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # See a demo run with the sample minutes
  minutes2docx --demo

  # Convert a minutes file with the modern theme
  minutes2docx --input-text comite.md --title "Comité de pilotage" --date 2024-03-05 --theme modern

  # Use a config file, overriding one setting
  minutes2docx --config settings.toml --no-title-block
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        dest="demo",
        help="Convert the scaffolded sample minutes with default settings. Ignores other CLI options.",
    )

    # Config file (special - loads other values)
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to TOML configuration file. See ~/Documents/minutes2docx/configs/.",
    )

    # Input/Output
    parser.add_argument(
        "--input-text",
        type=str,
        dest="input_text",
        metavar="PATH",
        help="Generated minutes (.md or .txt file)",
    )
    parser.add_argument(
        "--output-folder",
        type=str,
        dest="output_folder",
        metavar="PATH",
        help="Output folder for the exported document",
    )

    # Meeting details
    parser.add_argument(
        "--title",
        type=str,
        dest="title",
        help="Meeting title (default: first '# ' heading of the minutes)",
    )
    parser.add_argument(
        "--date",
        type=str,
        dest="date",
        metavar="YYYY-MM-DD",
        help="Meeting date (default: today)",
    )

    # Rendering options
    parser.add_argument(
        "--theme",
        type=str,
        dest="theme",
        choices=[t.value for t in ThemeId],
        help="Visual theme (default: corporate)",
    )

    title_block_group = parser.add_mutually_exclusive_group()
    title_block_group.add_argument(
        "--title-block",
        action="store_true",
        dest="include_title_block",
        default=None,
        help="Print the title and date above the minutes (default: enabled)",
    )
    title_block_group.add_argument(
        "--no-title-block",
        action="store_false",
        dest="include_title_block",
        default=None,
        help="Start the document directly with the minutes",
    )

    preview_group = parser.add_mutually_exclusive_group()
    preview_group.add_argument(
        "--preview-html",
        action="store_true",
        dest="write_preview_html",
        default=None,
        help="Also write an HTML preview next to the .docx",
    )
    preview_group.add_argument(
        "--no-preview-html",
        action="store_false",
        dest="write_preview_html",
        default=None,
        help="Do not write an HTML preview (default)",
    )

    _validate_args_match_config(parser)

    return parser


def parse_args() -> argparse.Namespace:
    """Parse command line arguments into a Namespace with all the UserConfig fields as attributes."""
    return build_parser().parse_args()


def build_config_from_args(args: argparse.Namespace) -> UserConfig:
    """
    Build UserConfig from parsed arguments with proper priority.

    Priority order (highest to lowest):
    1. CLI arguments (if explicitly provided)
    2. Config file values (if --config provided)
    3. UserConfig defaults
    """
    if args.demo:
        log.info("Demo requested; populating input fields with sample defaults.")
        return UserConfig.with_defaults()
    elif args.config:
        config_path = Path(args.config)
        log.info(f"Loading config from {config_path}")
        cfg = UserConfig.from_toml(config_path)
    else:
        cfg = UserConfig()

    # argparse leaves unprovided options as None
    if args.input_text is not None:
        cfg.input_text = Path(args.input_text)
    if args.output_folder is not None:
        cfg.output_folder = Path(args.output_folder)
    if args.title is not None:
        cfg.title = args.title
    if args.date is not None:
        cfg.date = args.date
    if args.theme is not None:
        cfg.theme = ThemeId.from_string(args.theme)
    if args.include_title_block is not None:
        cfg.include_title_block = args.include_title_block
    if args.write_preview_html is not None:
        cfg.write_preview_html = args.write_preview_html

    cfg.validate()

    return cfg


def _validate_args_match_config(parser: argparse.ArgumentParser) -> None:
    """
    Ensure all UserConfig fields have corresponding CLI arguments.

    Catches a field added to UserConfig without its CLI argument (or vice versa).

    Raises:
        RuntimeError: If there's a mismatch between config fields and CLI args
    """
    config_fields = {f.name for f in fields(UserConfig)}

    excluded_args = ["help", "config", "demo"]
    arg_names = {
        action.dest for action in parser._actions if action.dest not in excluded_args
    }

    missing_in_args = config_fields - arg_names
    extra_in_args = arg_names - config_fields

    if missing_in_args:
        log.error(
            "UserConfig fields must have corresponding arg added to cli.build_parser() to ensure parity between config files and the CLI."
        )
        raise RuntimeError(
            f"CLI arguments missing for UserConfig fields: {missing_in_args}\n"
            "These config fields need corresponding arguments added to build_parser()"
        )

    if extra_in_args:
        log.error(
            "Unexpected CLI args that do not match UserConfig fields. Either add a UserConfig field, "
            "or add the arg to the excluded_args list in _validate_args_match_config() if it is CLI-only."
        )
        raise RuntimeError(
            f"CLI arguments don't match UserConfig fields: {extra_in_args}\n"
            "Either remove these CLI args or add corresponding fields to UserConfig"
        )


def main() -> None:
    """Console script entry point (`minutes2docx`)."""
    from minutes2docx import startup

    log = startup.initialize_application()
    try:
        run()
    except Exception:
        log.exception("Fatal error in CLI")
        raise


if __name__ == "__main__":
    main()
