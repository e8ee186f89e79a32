"""Display projection of the bookmark store, shared by every renderer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .models import Bookmark, BuildState

SELECTED_MARK = "\u25cf"


@dataclass(frozen=True)
class MenuItem:
    """One bookmark as shown in a menu."""

    bookmark: Bookmark
    selected: bool

    @property
    def label(self) -> str:
        if self.bookmark.shortcut:
            return f"{self.bookmark.name}  [{self.bookmark.shortcut}]"
        return self.bookmark.name


@dataclass(frozen=True)
class MenuAction:
    """A menu command that only shows when it applies."""

    name: str
    label: str
    visible: bool


@dataclass
class MenuModel:
    items: list[MenuItem] = field(default_factory=list)
    actions: list[MenuAction] = field(default_factory=list)

    @property
    def selected(self) -> MenuItem | None:
        for item in self.items:
            if item.selected:
                return item
        return None

    def visible_actions(self) -> list[MenuAction]:
        return [action for action in self.actions if action.visible]


def build_menu(entries: Sequence[Bookmark], state: BuildState) -> MenuModel:
    """Project *entries* into menu items and actions for *state*.

    An item is selected only when the state is set and equals its key; with
    no build yet, nothing is selected.
    """
    items = [MenuItem(entry, state.matches(entry.key)) for entry in entries]
    current = state.key()
    bookmarked = current is not None and any(entry.key == current for entry in entries)
    actions = [
        MenuAction("add", "Bookmark current build", current is not None and not bookmarked),
        MenuAction("edit", "Edit bookmark", bookmarked),
        MenuAction("remove", "Remove bookmark", bookmarked),
        MenuAction("recompile", "Recompile from bookmark", bool(entries)),
    ]
    return MenuModel(items=items, actions=actions)
