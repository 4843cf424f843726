"""Environment switches read at startup."""

import logging
import os

from minutes2docx.internals import constants

log = logging.getLogger("minutes2docx")

DEBUG_ENV_VAR = "MINUTES2DOCX_DEBUG"

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def get_debug_mode() -> bool:
    """
    Whether MINUTES2DOCX_DEBUG asks for the trace log.

    Unset means DEBUG_MODE_DEFAULT. An unrecognized value is logged and also
    falls back to DEBUG_MODE_DEFAULT.
    """
    raw = os.environ.get(DEBUG_ENV_VAR)
    if raw is None:
        return constants.DEBUG_MODE_DEFAULT

    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False

    log.warning(
        f"Ignoring {DEBUG_ENV_VAR}={raw!r}; expected one of {sorted(_TRUE_WORDS | _FALSE_WORDS)}."
    )
    return constants.DEBUG_MODE_DEFAULT
