"""Cross-platform paths and shell helpers for Build Bookmarks.

Every other module imports from here instead of doing its own platform
detection.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

# ---------------------------------------------------------------------------
# Platform detection (runs once at import time)
# ---------------------------------------------------------------------------

IS_WINDOWS = platform.system() == "Windows"

HOME_ENV_VAR = "BUILD_BOOKMARKS_HOME"

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def bookmarks_home() -> Path:
    """Return the config/data directory.

    ``$BUILD_BOOKMARKS_HOME`` when set, otherwise ``~/.build-bookmarks`` on
    every platform.
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".build-bookmarks"


def bookmarks_file(name: str) -> Path:
    """Return ``<home>/<name>`` for a data file."""
    return bookmarks_home() / name


def abbreviate_home(path_str: str) -> str:
    """Replace the user's home directory prefix with ``~``."""
    home = str(Path.home())
    if path_str.startswith(home):
        return "~" + path_str[len(home) :]
    return path_str


# ---------------------------------------------------------------------------
# Shell
# ---------------------------------------------------------------------------


def default_shell() -> str | None:
    """Return the shell executable build commands run under.

    ``None`` on Windows, where ``subprocess`` picks ``cmd.exe`` itself.
    """
    if IS_WINDOWS:
        return None
    return os.environ.get("SHELL") or "/bin/sh"
