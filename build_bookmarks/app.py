"""Textual front end for build bookmarks."""

from __future__ import annotations

import atexit
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.text import Text
from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, OptionList, Static
from textual.widgets.option_list import Option

from .context import BookmarkContext
from .errors import BookmarkError
from .interfaces import BuildAction
from .lifecycle import BookmarkController
from .log import logger
from .menu import SELECTED_MARK, build_menu
from .models import Bookmark, BuildKey, BuildState
from .persistence import BookmarkFile
from .platform import abbreviate_home
from .preferences import Preferences, load_preferences, save_enabled_on_start
from .runner import ShellBuildAction
from .selector import choice_labels, default_name, restore_and_run
from .theme import BOOKMARKS_THEME
from .widgets import BookmarkPickerScreen, ShortcutPromptScreen, TextPromptScreen


class SuspendedBuildAction:
    """Run builds with the TUI suspended so their output reaches the terminal."""

    def __init__(self, app: App, inner: BuildAction) -> None:
        self.app = app
        self.inner = inner

    def run(self, state: BuildState) -> object:
        with self.app.suspend():
            print(f"\n--- build: {state.command}  (in {state.directory}) ---\n")
            status = self.inner.run(state)
            input(f"\n--- finished with status {status}; press Enter to return ---")
        return status


class _AppMenu:
    """Adapts the app to the MenuRenderer boundary."""

    def __init__(self, app: BuildBookmarksApp) -> None:
        self.app = app

    def render(self, entries: Sequence[Bookmark], state: BuildState) -> None:
        self.app.show_menu(entries, state)


class BuildBookmarksApp(App):
    """Bookmark list with single-key shortcuts for re-running builds."""

    TITLE = "Build Bookmarks"

    CSS = """
    #main { height: 1fr; }
    #menu-title {
        text-style: bold;
        padding: 0 1;
        background: $surface;
    }
    #bookmark-menu { height: 1fr; border: none; }
    #status-bar {
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    #status-build { width: 1fr; }
    #status-enabled { width: auto; }
    """

    BINDINGS = [
        Binding("ctrl+a", "add_bookmark", "Add", show=True),
        Binding("ctrl+d", "remove_bookmark", "Remove", show=True),
        Binding("ctrl+r", "recompile", "Recompile", show=True),
        Binding("ctrl+b", "build", "Build", show=True),
        Binding("ctrl+e", "set_command", "Command", show=True),
        Binding("ctrl+u", "long_form", "Edit next", show=False),
        Binding("ctrl+t", "toggle_bookmarks", "On/Off", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        prefs: Preferences | None = None,
        *,
        bookmark_file: BookmarkFile | None = None,
        build_action: BuildAction | None = None,
        state: BuildState | None = None,
        prefs_path: Path | None = None,
        register_exit: Callable = atexit.register,
        unregister_exit: Callable = atexit.unregister,
    ) -> None:
        super().__init__()
        self._prefs = prefs or load_preferences(prefs_path)
        self._prefs_path = prefs_path
        self._menu_ready = False
        self._long_form = False
        self._option_keys: dict[str, BuildKey] = {}

        if build_action is None:
            build_action = SuspendedBuildAction(
                self, ShellBuildAction(self._prefs.build.shell or None)
            )
        self.ctx = BookmarkContext(
            build_action=build_action,
            menu=_AppMenu(self),
            state=state or BuildState(),
        )
        self.controller = BookmarkController(
            self.ctx,
            bookmark_file
            or BookmarkFile(self._prefs.bookmarks_path(), self._prefs.store.encoding),
            register_exit=register_exit,
            unregister_exit=unregister_exit,
        )

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Vertical(id="main"):
            yield Static(" Bookmarks", id="menu-title")
            yield OptionList(id="bookmark-menu")
            with Horizontal(id="status-bar"):
                yield Static("No build yet", id="status-build")
                yield Static("", id="status-enabled")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(BOOKMARKS_THEME)
        self.theme = BOOKMARKS_THEME.name
        self._menu_ready = True
        if self._prefs.enabled_on_start:
            self._enable()
        self.ctx.refresh_menu()
        self.query_one("#bookmark-menu", OptionList).focus()

    def _enable(self) -> bool:
        try:
            self.controller.enable()
        except BookmarkError as exc:
            self.notify(f"Bookmarks not loaded: {exc}", severity="error")
            return False
        return True

    # ── Menu ────────────────────────────────────────────────────

    def show_menu(self, entries: Sequence[Bookmark], state: BuildState) -> None:
        """Redraw the bookmark list and status bar."""
        if not self._menu_ready:
            return
        model = build_menu(entries, state)
        option_list = self.query_one("#bookmark-menu", OptionList)
        option_list.clear_options()
        self._option_keys.clear()
        selected_index: int | None = None
        for index, item in enumerate(model.items):
            marker = SELECTED_MARK if item.selected else " "
            prompt = Text(f"{marker} {item.label}")
            prompt.append(f"   {item.bookmark.command}", style="dim")
            option_id = f"bookmark-{index}"
            self._option_keys[option_id] = item.bookmark.key
            option_list.add_option(Option(prompt, id=option_id))
            if item.selected:
                selected_index = index
        if selected_index is not None:
            option_list.highlighted = selected_index

        actions = "  \u00b7  ".join(action.label for action in model.visible_actions())
        title = " Bookmarks" + (f"   [dim]{actions}[/]" if actions else "")
        self.query_one("#menu-title", Static).update(title)

        if state.is_set:
            build_text = f"{state.command or ''}  in {abbreviate_home(state.directory or '')}"
        else:
            build_text = "No build yet"
        if self._long_form:
            build_text = "[edit next] " + build_text
        self.query_one("#status-build", Static).update(Text(build_text))
        enabled = "bookmarks on" if self.controller.enabled else "bookmarks off"
        self.query_one("#status-enabled", Static).update(enabled)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        key = self._option_keys.get(event.option.id or "")
        if key is not None:
            self._dispatch(key)

    # ── Shortcuts ───────────────────────────────────────────────

    def on_key(self, event: events.Key) -> None:
        if isinstance(self.screen, ModalScreen) or not self.controller.enabled:
            return
        char = event.character
        if not char or not char.isprintable() or char.isspace():
            return
        key = self.ctx.binder.lookup(char)
        if key is None:
            return
        event.stop()
        event.prevent_default()
        self._dispatch(key)

    def _dispatch(self, key: BuildKey) -> None:
        if self._long_form:
            self._long_form = False
            self._edit_and_run(key)
        else:
            self._run(key)

    def _run(self, key: BuildKey, command: str | None = None) -> None:
        try:
            status = restore_and_run(self.ctx, key, command)
        except (BookmarkError, OSError) as exc:
            logger.debug("build failed to start", exc_info=True)
            self.notify(str(exc), severity="error")
            return
        if isinstance(status, int):
            severity = "information" if status == 0 else "warning"
            self.notify(f"Build finished with status {status}", severity=severity)

    @work
    async def _edit_and_run(self, key: BuildKey) -> None:
        command = await self.push_screen_wait(TextPromptScreen("Build command", key.command))
        if command:
            self._run(key, command)

    # ── Actions ─────────────────────────────────────────────────

    def _require_enabled(self) -> bool:
        if isinstance(self.screen, ModalScreen):
            return False
        if not self.controller.enabled:
            self.notify("Bookmarks are off (Ctrl+T to turn on)", severity="warning")
            return False
        return True

    @work
    async def action_add_bookmark(self) -> None:
        """Bookmark the current build (Ctrl+A)."""
        if not self._require_enabled():
            return
        key = self.ctx.state.key()
        if key is None:
            self.notify("No build command to bookmark yet", severity="warning")
            return
        name = await self.push_screen_wait(
            TextPromptScreen("Bookmark name", default_name(self.ctx, key))
        )
        if name is None:
            return
        shortcut = await self.push_screen_wait(ShortcutPromptScreen())
        if shortcut is None:
            return
        try:
            entry = self.ctx.store.add(key, name, shortcut or None)
        except ValueError as exc:
            self.notify(str(exc), severity="error")
            return
        self.notify(f"Bookmarked {entry.name!r}")

    def action_remove_bookmark(self) -> None:
        """Remove the bookmark for the current build (Ctrl+D)."""
        if not self._require_enabled():
            return
        key = self.ctx.state.key()
        removed = self.ctx.store.remove(key) if key is not None else None
        if removed is None:
            self.notify("Current build is not bookmarked", severity="warning")
        else:
            self.notify(f"Removed {removed.name!r}")

    @work
    async def action_recompile(self) -> None:
        """Pick a bookmark and run it (Ctrl+R)."""
        if not self._require_enabled():
            return
        labels = choice_labels(self.ctx)
        if not labels:
            self.notify("No bookmarks yet", severity="warning")
            return
        choice = await self.push_screen_wait(BookmarkPickerScreen(list(labels)))
        if choice in labels:
            self._dispatch(labels[choice].key)

    def action_build(self) -> None:
        """Run the current build (Ctrl+B)."""
        key = self.ctx.state.key()
        if key is None:
            self.notify("No build command set (Ctrl+E)", severity="warning")
            return
        self._run(key)

    @work
    async def action_set_command(self) -> None:
        """Set the current build directory and command (Ctrl+E)."""
        if isinstance(self.screen, ModalScreen):
            return
        state = self.ctx.state
        directory = await self.push_screen_wait(
            TextPromptScreen("Build directory", state.directory or os.getcwd())
        )
        if not directory:
            return
        command = await self.push_screen_wait(
            TextPromptScreen("Build command", state.command or "")
        )
        if not command:
            return
        state.set(directory, command)
        self.ctx.refresh_menu()

    def action_long_form(self) -> None:
        """Edit the command of the next bookmark before running it (Ctrl+U)."""
        self._long_form = not self._long_form
        self.ctx.refresh_menu()

    def action_toggle_bookmarks(self) -> None:
        """Turn bookmarks on or off (Ctrl+T)."""
        if self.controller.enabled:
            try:
                self.controller.disable()
            except (BookmarkError, OSError) as exc:
                self.notify(f"Could not save bookmarks: {exc}", severity="error")
                return
        elif not self._enable():
            return
        try:
            save_enabled_on_start(self.controller.enabled, self._prefs_path)
        except OSError:
            logger.debug("could not persist startup flag", exc_info=True)
        self.ctx.refresh_menu()
        self.notify("Bookmarks on" if self.controller.enabled else "Bookmarks off")

    async def action_quit(self) -> None:
        try:
            self.controller.disable()
        except (BookmarkError, OSError) as exc:
            self.notify(f"Could not save bookmarks: {exc}", severity="error")
            return
        self.exit()


# ── Entry Point ─────────────────────────────────────────────────────


def run_app(prefs: Preferences | None = None, bookmark_file: BookmarkFile | None = None) -> None:
    """Run the Build Bookmarks TUI."""
    app = BuildBookmarksApp(prefs, bookmark_file=bookmark_file)
    app.run()
