"""Persistence layer – the bookmarks file owns its path, format, and I/O."""

from .bookmark_file import BookmarkFile, Snapshot, dumps, loads

__all__ = [
    "BookmarkFile",
    "Snapshot",
    "dumps",
    "loads",
]
