"""IDs that tie log lines to one program run and to one minutes conversion.

- session id: one per process (one CLI invocation). MINUTES2DOCX_SESSION_ID
  overrides it so CI logs can be matched to a job.
- conversion id: one per conversion, held in a ContextVar. Conversions running
  side by side on one event loop each see their own id, and so does the worker
  thread that packs the .docx (asyncio.to_thread copies the context).
"""

from __future__ import annotations

import contextlib
import contextvars
import functools
import os
import uuid
from typing import Iterator

SESSION_ID_ENV_VAR = "MINUTES2DOCX_SESSION_ID"

# Shown in log lines emitted outside any conversion (startup, CLI parsing).
NO_CONVERSION = "-"

_conversion_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "minutes2docx_conversion_id", default=None
)


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


# region session id
@functools.cache
def get_session_id() -> str:
    """Process-wide id, taken from MINUTES2DOCX_SESSION_ID or generated on first use."""
    return os.environ.get(SESSION_ID_ENV_VAR) or _short_id()


# endregion


# region conversion id
def get_conversion_id() -> str:
    """Id of the conversion running in the current context, or NO_CONVERSION."""
    return _conversion_id.get() or NO_CONVERSION


@contextlib.contextmanager
def conversion_scope() -> Iterator[str]:
    """
    Mark the enclosed code as one conversion and yield its id.

    A scope opened inside another one joins it: `run_pipeline` opens a scope
    and the `convert_minutes` call it makes logs under the same id.

    Example:
        >>> with conversion_scope() as conversion_id:
        ...     log.info("Converting")  # line ends with conversion:<conversion_id>
    """
    current = _conversion_id.get()
    if current is not None:
        yield current
        return

    conversion_id = _short_id()
    token = _conversion_id.set(conversion_id)
    try:
        yield conversion_id
    finally:
        _conversion_id.reset(token)


# endregion
