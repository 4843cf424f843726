"""Entry point for minutes2docx."""

from __future__ import annotations

import logging

from minutes2docx import startup
from minutes2docx.cli import run as run_cli


def main() -> None:
    """Application entry point.

    Call like:
    ```
    python -m minutes2docx --demo
    python -m minutes2docx --input-text comite.md --theme modern
    ```
    """

    # Set up logging and user folder scaffold.
    log: logging.Logger = startup.initialize_application()

    try:
        run_cli()
    except Exception:
        log.exception("Unhandled exception - program crashed.")  # Logs full traceback
        raise


if __name__ == "__main__":
    main()
