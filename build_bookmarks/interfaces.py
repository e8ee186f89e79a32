"""Boundaries between the bookmark core and whatever hosts it."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models import Bookmark, BuildState


class BuildAction(Protocol):
    """Runs a build using the given state.  The result is never inspected."""

    def run(self, state: BuildState) -> object: ...


class Prompter(Protocol):
    """Asks the user for input."""

    def ask_string(self, prompt: str, default: str = "") -> str: ...

    def ask_char(self, prompt: str) -> str | None: ...

    def ask_from_choices(self, prompt: str, choices: Sequence[str]) -> str:
        """Return one of *choices*; anything else is rejected before returning."""
        ...


class MenuRenderer(Protocol):
    """Shows the bookmark list."""

    def render(self, entries: Sequence[Bookmark], state: BuildState) -> None: ...


class NullMenu:
    """Renderer that shows nothing, for one-shot command-line use."""

    def render(self, entries: Sequence[Bookmark], state: BuildState) -> None:
        return None
