"""In-memory bookmark store."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from operator import attrgetter

from .log import logger
from .models import Bookmark, BuildKey, validate_key, validate_shortcut
from .shortcuts import ShortcutBinder


class BookmarkStore:
    """Bookmarks keyed by ``(directory, command)``, kept sorted by name.

    Mutations keep the shortcut binder in step with the stored metadata and
    call *on_change* afterwards so menus can re-render.
    """

    def __init__(
        self,
        binder: ShortcutBinder | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.binder = binder if binder is not None else ShortcutBinder()
        self.on_change = on_change
        self._entries: list[Bookmark] = []
        self._defer_depth = 0
        self._pending_change = False

    # -- queries --------------------------------------------------------------

    def lookup(self, key: BuildKey) -> Bookmark | None:
        """Return the bookmark for exactly *key*, or None."""
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def find_by_name(self, name: str) -> Bookmark | None:
        """Return the first bookmark (in sorted order) named *name*."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, BuildKey) and self.lookup(key) is not None

    # -- mutations ------------------------------------------------------------

    def add(self, key: BuildKey, name: str, shortcut: str | None = None) -> Bookmark:
        """Insert a bookmark, or replace the metadata of an existing one."""
        validate_key(key)
        validate_shortcut(shortcut)

        entry = self.lookup(key)
        if entry is not None:
            self.binder.release(entry.shortcut, key)
            entry.name = name
            entry.shortcut = shortcut
        else:
            entry = Bookmark(key=key, name=name, shortcut=shortcut)
            self._entries.append(entry)

        if shortcut is not None:
            for other in self._entries:
                if other is not entry and other.shortcut == shortcut:
                    logger.debug("detaching shortcut %r from %r", shortcut, other.name)
                    other.shortcut = None

        self._entries.sort(key=attrgetter("name"))
        # Bind only once the metadata above is committed.
        self.binder.assign(key, shortcut)
        self._changed()
        return entry

    def remove(self, key: BuildKey) -> Bookmark | None:
        """Delete the bookmark for *key*; absent keys are ignored."""
        entry = self.lookup(key)
        if entry is not None:
            self._entries.remove(entry)
            self.binder.release(entry.shortcut, key)
        self._changed()
        return entry

    def clear(self) -> None:
        """Drop every bookmark and its shortcut."""
        for entry in self._entries:
            self.binder.release(entry.shortcut, entry.key)
        self._entries.clear()
        self._changed()

    @contextmanager
    def deferred_refresh(self) -> Iterator[None]:
        """Collapse the change notifications of a batch into one."""
        self._defer_depth += 1
        try:
            yield
        finally:
            self._defer_depth -= 1
            if self._defer_depth == 0 and self._pending_change:
                self._pending_change = False
                self._notify()

    def _changed(self) -> None:
        if self._defer_depth:
            self._pending_change = True
            return
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
