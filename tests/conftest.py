"""Shared test fixtures for the build-bookmarks test suite."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from build_bookmarks.context import BookmarkContext
from build_bookmarks.models import Bookmark, BuildState
from build_bookmarks.persistence import BookmarkFile


class RecordingBuild:
    """BuildAction that records the state it was asked to build."""

    def __init__(self, status: int = 0) -> None:
        self.status = status
        self.runs: list[tuple[str | None, str | None]] = []

    def run(self, state: BuildState) -> int:
        self.runs.append((state.directory, state.command))
        return self.status


class RecordingMenu:
    """MenuRenderer that keeps every render call."""

    def __init__(self) -> None:
        self.renders: list[tuple[list[Bookmark], BuildState]] = []

    def render(self, entries: Sequence[Bookmark], state: BuildState) -> None:
        self.renders.append((list(entries), BuildState(state.directory, state.command)))

    @property
    def last_names(self) -> list[str]:
        return [entry.name for entry in self.renders[-1][0]]


class ScriptedPrompter:
    """Prompter that answers from a fixed script and records the prompts."""

    def __init__(self, strings=(), chars=(), choices=()) -> None:
        self.strings = list(strings)
        self.chars = list(chars)
        self.choices = list(choices)
        self.asked: list[tuple[str, object]] = []

    def ask_string(self, prompt: str, default: str = "") -> str:
        self.asked.append((prompt, default))
        answer = self.strings.pop(0) if self.strings else None
        return default if answer is None else answer

    def ask_char(self, prompt: str) -> str | None:
        self.asked.append((prompt, None))
        return self.chars.pop(0) if self.chars else None

    def ask_from_choices(self, prompt: str, choices: Sequence[str]) -> str:
        self.asked.append((prompt, list(choices)))
        answer = self.choices.pop(0)
        if isinstance(answer, int):
            return list(choices)[answer]
        assert answer in choices
        return answer


@pytest.fixture(autouse=True)
def bookmarks_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary location for every test."""
    home = tmp_path / "home"
    monkeypatch.setenv("BUILD_BOOKMARKS_HOME", str(home))
    return home


@pytest.fixture
def build() -> RecordingBuild:
    return RecordingBuild()


@pytest.fixture
def menu() -> RecordingMenu:
    return RecordingMenu()


@pytest.fixture
def ctx(build: RecordingBuild, menu: RecordingMenu) -> BookmarkContext:
    return BookmarkContext(build_action=build, menu=menu)


@pytest.fixture
def bookmark_file(tmp_path: Path) -> BookmarkFile:
    return BookmarkFile(tmp_path / "bookmarks.sexp")


@pytest.fixture
def make_prompter():
    """Factory for :class:`ScriptedPrompter` answers."""
    return ScriptedPrompter
