"""Where minutes2docx keeps user files.

Everything lives under ~/Documents/minutes2docx/ (platformdirs finds the OS
equivalent of ~/Documents), one sub-folder per UserFolder member.
"""

import os
from enum import Enum
from pathlib import Path

from platformdirs import user_documents_dir

APP_DIRNAME = "minutes2docx"


class UserFolder(Enum):
    """Sub-folders of the user base directory"""

    INPUT = "input"  # generated minutes waiting to be converted
    OUTPUT = "output"  # exported .docx and .html previews
    CONFIGS = "configs"  # saved TOML settings
    LOGS = "logs"


# region user_dir
def user_dir(folder: UserFolder | None = None) -> Path:
    """
    Return the user base directory, or one of its sub-folders.

    The directory is created if needed, so callers can write into it straight away.

    Example:
        >>> user_dir(UserFolder.OUTPUT)
        PosixPath('/home/alice/Documents/minutes2docx/output')
    """
    path = Path(user_documents_dir()) / APP_DIRNAME
    if folder is not None:
        path = path / folder.value
    path.mkdir(parents=True, exist_ok=True)
    return path


# endregion


# region resolve_path
def resolve_path(raw: str | Path) -> Path:
    """Expand ~ and ${VARS} in a config or CLI path and make it absolute (relative to the cwd)."""
    return Path(os.path.expandvars(str(raw))).expanduser().resolve()


# endregion
