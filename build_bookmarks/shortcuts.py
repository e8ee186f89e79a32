"""Single-character shortcut table for bookmarks."""

from __future__ import annotations

from .log import logger
from .models import BuildKey


class ShortcutBinder:
    """Dispatch table mapping one character to one bookmark key.

    Binding a character that is already in use replaces the previous
    binding; the old holder is detached, not reported as an error.
    """

    def __init__(self) -> None:
        self._table: dict[str, BuildKey] = {}

    def assign(self, key: BuildKey, shortcut: str | None) -> BuildKey | None:
        """Bind *shortcut* to *key*.

        Returns the key that previously held the character, if it was a
        different one.  ``None`` as the shortcut binds nothing.
        """
        if shortcut is None:
            return None
        previous = self._table.get(shortcut)
        self._table[shortcut] = key
        if previous is not None and previous != key:
            logger.debug("shortcut %r moved from %s to %s", shortcut, previous, key)
            return previous
        return None

    def release(self, shortcut: str | None, key: BuildKey | None = None) -> None:
        """Unbind *shortcut*.

        With *key*, only unbind when the character still points at that key.
        """
        if shortcut is None or shortcut not in self._table:
            return
        if key is not None and self._table[shortcut] != key:
            return
        del self._table[shortcut]

    def lookup(self, shortcut: str) -> BuildKey | None:
        return self._table.get(shortcut)

    def bindings(self) -> dict[str, BuildKey]:
        return dict(self._table)

    def clear(self) -> None:
        self._table.clear()

    def __contains__(self, shortcut: object) -> bool:
        return shortcut in self._table

    def __len__(self) -> int:
        return len(self._table)
