"""Data models for build bookmarks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildKey:
    """Identity of a bookmark: the directory a command runs in, and the command.

    Equality is exact string match; paths are not normalised.
    """

    directory: str
    command: str


@dataclass
class Bookmark:
    """A saved build recipe."""

    key: BuildKey
    name: str
    shortcut: str | None = None

    @property
    def directory(self) -> str:
        return self.key.directory

    @property
    def command(self) -> str:
        return self.key.command


@dataclass
class BuildState:
    """The directory and command the next build will use.

    Unset until a directory is known.
    """

    directory: str | None = None
    command: str | None = None

    @property
    def is_set(self) -> bool:
        return self.directory is not None

    def key(self) -> BuildKey | None:
        """Return the state as a key, or None if either half is missing."""
        if not self.directory or not self.command:
            return None
        return BuildKey(self.directory, self.command)

    def matches(self, key: BuildKey) -> bool:
        """True iff the state is set and equal to *key*."""
        return self.key() == key

    def set(self, directory: str, command: str) -> None:
        self.directory = directory
        self.command = command


def validate_key(key: BuildKey) -> None:
    """Raise ValueError unless both halves of *key* are non-empty."""
    if not key.directory:
        raise ValueError("bookmark directory must not be empty")
    if not key.command:
        raise ValueError("bookmark command must not be empty")


def validate_shortcut(shortcut: str | None) -> None:
    """Raise ValueError unless *shortcut* is None or one visible character."""
    if shortcut is None:
        return
    if len(shortcut) != 1 or not shortcut.isprintable() or shortcut.isspace():
        raise ValueError(f"shortcut must be a single visible character: {shortcut!r}")
