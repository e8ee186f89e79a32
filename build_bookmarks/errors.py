"""Exceptions raised by the bookmark core."""

from __future__ import annotations


class BookmarkError(Exception):
    """Base class for bookmark errors shown to the user."""


class RefusalError(BookmarkError):
    """Loading would clobber bookmarks already held in memory."""


class BookmarkFileError(BookmarkError, ValueError):
    """The bookmarks file does not match the expected format."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class NoActiveBuildError(BookmarkError):
    """An operation needs a current build command but none is set."""
