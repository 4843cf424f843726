"""The "minutes2docx" logger.

Console (INFO and up) plus ~/Documents/minutes2docx/logs/minutes2docx.log, and
a trace log with file/line info when debug mode is on. Every line ends with the
session id and the id of the conversion that emitted it, e.g.

    2025-01-09 14:23:45 [INFO] Packed 10342 bytes for 18 blocks with theme 'modern'. [run:a1b2c3d4 conversion:9f8e7d6c]
"""

import logging

from minutes2docx.internals.paths import UserFolder, user_dir
from minutes2docx.internals.run_context import get_conversion_id, get_session_id

LOGGER_NAME = "minutes2docx"
LOG_FILENAME = "minutes2docx.log"
TRACE_LOG_FILENAME = "trace_minutes2docx.log"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_IDS = "[run:%(session_id)s conversion:%(conversion_id)s]"
LINE_FORMAT = f"%(asctime)s [%(levelname)s] %(message)s {_IDS}"
TRACE_FORMAT = f"%(filename)s:%(lineno)d %(funcName)s() [%(levelname)s] %(asctime)s - %(message)s {_IDS}"


class RunIdFilter(logging.Filter):
    """Stamp each record with the session id and the current conversion id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = get_session_id()
        record.conversion_id = get_conversion_id()
        return True


def _with_format(handler: logging.Handler, fmt: str, level: int) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    handler.setLevel(level)
    handler.addFilter(RunIdFilter())
    return handler


# region setup_logger
def setup_logger(level: int = logging.DEBUG, enable_trace: bool = False) -> logging.Logger:
    """
    Attach the console and log file handlers to the "minutes2docx" logger.

    A logger that already has handlers is returned untouched, so every entry
    point can call this.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    # python-docx logs through the root logger; keep its lines out of ours
    logger.propagate = False

    log_dir = user_dir(UserFolder.LOGS)
    log_file = log_dir / LOG_FILENAME

    logger.addHandler(_with_format(logging.StreamHandler(), LINE_FORMAT, logging.INFO))
    logger.addHandler(
        _with_format(
            logging.FileHandler(log_file, encoding="utf-8"), LINE_FORMAT, logging.DEBUG
        )
    )
    if enable_trace:
        logger.addHandler(
            _with_format(
                logging.FileHandler(log_dir / TRACE_LOG_FILENAME, encoding="utf-8"),
                TRACE_FORMAT,
                logging.DEBUG,
            )
        )

    logger.info(f"Logger initialized. Writing to {log_file}")
    return logger


# endregion
