"""Modal screen widgets for Build Bookmarks."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ..models import validate_shortcut

_MODAL_CSS = """
    #prompt-modal, #shortcut-modal, #picker-modal {
        width: 70;
        height: auto;
        max-height: 80%;
        padding: 1 2;
        border: round $primary;
        background: $surface;
    }
    .prompt-title {
        text-style: bold;
        margin-bottom: 1;
    }
    .prompt-hint {
        color: $text-muted;
    }
"""


def fuzzy_match(query: str, text: str) -> bool:
    """True if every character of *query* appears in *text* in order."""
    remaining = iter(text.lower())
    return all(ch in remaining for ch in query.lower())


def filter_choices(choices: Sequence[str], query: str) -> list[str]:
    """Return *choices* matching *query*, substring hits before fuzzy ones."""
    if not query:
        return list(choices)
    q = query.lower()
    direct = [c for c in choices if q in c.lower()]
    fuzzy = [c for c in choices if c not in direct and fuzzy_match(q, c)]
    return direct + fuzzy


class TextPromptScreen(ModalScreen[str | None]):
    """Ask for a line of text.  Dismisses with None when cancelled."""

    DEFAULT_CSS = "TextPromptScreen { align: center middle; }" + _MODAL_CSS

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, title: str, default: str = "") -> None:
        super().__init__()
        self._title = title
        self._default = default

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-modal"):
            yield Static(self._title, classes="prompt-title")
            yield Input(value=self._default, id="prompt-input")
            yield Static("[dim]Enter accepts, Esc cancels[/]", classes="prompt-hint")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ShortcutPromptScreen(ModalScreen[str | None]):
    """Capture one key as a shortcut.

    Dismisses with the character, ``""`` for no shortcut (Enter or
    Backspace), or None when cancelled with Escape.
    """

    DEFAULT_CSS = "ShortcutPromptScreen { align: center middle; }" + _MODAL_CSS

    def __init__(self, title: str = "Shortcut key") -> None:
        super().__init__()
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="shortcut-modal"):
            yield Static(self._title, classes="prompt-title")
            yield Static(
                "[dim]Press a key to bind, Enter for none, Esc to cancel[/]",
                classes="prompt-hint",
            )

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        if event.key == "escape":
            self.dismiss(None)
        elif event.key in ("enter", "backspace", "delete"):
            self.dismiss("")
        elif event.character:
            try:
                validate_shortcut(event.character)
            except ValueError:
                self.notify("Pick a visible character", severity="warning")
                return
            self.dismiss(event.character)


class BookmarkPickerScreen(ModalScreen[str]):
    """Modal for choosing a bookmark label with fuzzy filtering.

    Only an offered label can be returned; cancelling returns ``""``.
    """

    DEFAULT_CSS = "BookmarkPickerScreen { align: center middle; }" + _MODAL_CSS

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, choices: Sequence[str], title: str = "Recompile") -> None:
        super().__init__()
        self._choices = list(choices)
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-modal"):
            yield Static(
                f"{self._title}  [dim](type to filter, Enter selects)[/]",
                classes="prompt-title",
            )
            yield Input(placeholder="Type to filter\u2026", id="picker-input")
            yield OptionList(id="picker-results")

    def on_mount(self) -> None:
        self._update_results("")
        self.query_one("#picker-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "picker-input":
            self._update_results(event.value)

    def _update_results(self, query: str) -> None:
        option_list = self.query_one("#picker-results", OptionList)
        option_list.clear_options()
        matches = filter_choices(self._choices, query)
        for label in matches:
            option_list.add_option(Option(Text(label), id=label))
        if matches:
            option_list.highlighted = 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        if event.option.id is not None:
            self.dismiss(event.option.id)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        option_list = self.query_one("#picker-results", OptionList)
        if option_list.option_count > 0 and option_list.highlighted is not None:
            opt = option_list.get_option_at_index(option_list.highlighted)
            if opt.id is not None:
                self.dismiss(opt.id)

    def action_cancel(self) -> None:
        self.dismiss("")
