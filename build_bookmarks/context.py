"""Shared state handed to every bookmark operation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .interfaces import BuildAction, MenuRenderer, NullMenu
from .models import BuildState
from .shortcuts import ShortcutBinder
from .store import BookmarkStore


@dataclass
class BookmarkContext:
    """The store, its shortcut table, the current build and the host hooks."""

    build_action: BuildAction
    menu: MenuRenderer = field(default_factory=NullMenu)
    state: BuildState = field(default_factory=BuildState)
    binder: ShortcutBinder = field(default_factory=ShortcutBinder)
    store: BookmarkStore = field(init=False)

    def __post_init__(self) -> None:
        self.store = BookmarkStore(self.binder, on_change=self.refresh_menu)

    def refresh_menu(self) -> None:
        self.menu.render(list(self.store), self.state)
