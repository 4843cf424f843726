"""Startup logic needed before anything else happens.

Handles:
- UTF-8 console output (accented minutes text on Windows code-page consoles)
- Logging configuration
- User directory scaffolding (input/output/configs/logs folders, sample minutes)
"""

import io
import logging
import sys

from minutes2docx.internals.logger import setup_logger
from minutes2docx.internals.scaffold import ensure_user_scaffold
from minutes2docx.utils import get_debug_mode


# region initialize_application
def initialize_application() -> logging.Logger:
    """Common startup tasks for every entry point."""

    # Must happen before the logger creates its console handler.
    use_utf8_console()

    log = setup_logger(enable_trace=get_debug_mode())
    log.info("Starting minutes2docx Log.")

    log.debug("Checking for existing minutes2docx user folders and scaffolding if needed.")
    ensure_user_scaffold()

    return log


# endregion


# region use_utf8_console
def use_utf8_console() -> None:
    """Switch stdout/stderr to UTF-8 so é, è, ç print without UnicodeEncodeError."""
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper) and stream.encoding.lower() != "utf-8":
            stream.reconfigure(encoding="utf-8")


# endregion
