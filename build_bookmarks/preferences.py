"""User preferences for Build Bookmarks.

Loads settings from ~/.build-bookmarks/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger
from .platform import bookmarks_file

PREFS_FILENAME = "preferences.yaml"
BOOKMARKS_FILENAME = "bookmarks.sexp"

_DEFAULT_YAML = """\
# Build Bookmarks Preferences
# Delete this file to reset to defaults.

store:
  file: ""                       # bookmarks file (empty = ~/.build-bookmarks/bookmarks.sexp)
  encoding: utf-8                # text encoding used when saving

build:
  shell: ""                      # shell for build commands (empty = $SHELL or /bin/sh)

startup:
  enabled: true                  # load bookmarks when the TUI starts
"""


@dataclass
class StorePreferences:
    """Where and how bookmarks are saved."""

    file: str = ""  # Empty means the default location
    encoding: str = "utf-8"


@dataclass
class BuildPreferences:
    """How build commands are run."""

    shell: str = ""  # Empty means $SHELL or /bin/sh


@dataclass
class Preferences:
    """Top-level preferences."""

    store: StorePreferences = field(default_factory=StorePreferences)
    build: BuildPreferences = field(default_factory=BuildPreferences)
    enabled_on_start: bool = True

    def bookmarks_path(self) -> Path:
        """Resolve the bookmarks file location."""
        if self.store.file:
            return Path(self.store.file).expanduser()
        return bookmarks_file(BOOKMARKS_FILENAME)


def default_prefs_path() -> Path:
    return bookmarks_file(PREFS_FILENAME)


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or default_prefs_path()
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data.get("store"), dict):
                sdata = data["store"]
                if "file" in sdata:
                    prefs.store.file = str(sdata["file"] or "")
                if sdata.get("encoding"):
                    prefs.store.encoding = str(sdata["encoding"])
            if isinstance(data.get("build"), dict):
                bdata = data["build"]
                if "shell" in bdata:
                    prefs.build.shell = str(bdata["shell"] or "")
            if isinstance(data.get("startup"), dict):
                udata = data["startup"]
                if "enabled" in udata:
                    prefs.enabled_on_start = bool(udata["enabled"])
        except (OSError, yaml.YAMLError, AttributeError):
            logger.debug("invalid preferences file %s, using defaults", path, exc_info=True)
            return Preferences()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path, exc_info=True)

    return prefs


def save_enabled_on_start(enabled: bool, path: Path | None = None) -> None:
    """Persist the ``startup.enabled`` flag, keeping every other setting."""
    path = path or default_prefs_path()
    data: dict = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError):
            logger.debug("rewriting unreadable preferences file %s", path, exc_info=True)
            data = {}
    if not isinstance(data, dict):
        data = {}
    startup = data.get("startup")
    if not isinstance(startup, dict):
        startup = {}
    startup["enabled"] = enabled
    data["startup"] = startup
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8")
