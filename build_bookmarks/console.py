"""Terminal prompts and menu rendering built on rich."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import InvalidResponse, Prompt, PromptBase
from rich.table import Table

from .menu import SELECTED_MARK, build_menu
from .models import Bookmark, BuildState, validate_shortcut
from .platform import abbreviate_home


class CharPrompt(PromptBase[str]):
    """Prompt for one character; an empty answer means none."""

    response_type = str
    validate_error_message = "[prompt.invalid]Please enter a single character, or nothing"

    def process_response(self, value: str) -> str:
        value = value.strip()
        if not value:
            return ""
        try:
            validate_shortcut(value)
        except ValueError:
            raise InvalidResponse(self.validate_error_message) from None
        return value


class ChoicePrompt(PromptBase[str]):
    """Prompt that only accepts an offered choice, or its 1-based number."""

    response_type = str
    validate_error_message = "[prompt.invalid]Please pick one of the listed entries"

    def process_response(self, value: str) -> str:
        value = value.strip()
        choices = self.choices or []
        if value in choices:
            return value
        if value.isdigit() and 1 <= int(value) <= len(choices):
            return choices[int(value) - 1]
        raise InvalidResponse(self.validate_error_message)


class RichPrompter:
    """Interactive prompts on a rich console."""

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = console or Console()
        self.stream = stream

    def ask_string(self, prompt: str, default: str = "") -> str:
        return Prompt.ask(
            prompt,
            console=self.console,
            default=default,
            show_default=bool(default),
            stream=self.stream,
        )

    def ask_char(self, prompt: str) -> str | None:
        answer = CharPrompt.ask(prompt, console=self.console, stream=self.stream)
        return answer or None

    def ask_from_choices(self, prompt: str, choices: Sequence[str]) -> str:
        for number, choice in enumerate(choices, 1):
            self.console.print(f"  [bold]{number:>2}[/]  {escape(choice)}")
        return ChoicePrompt.ask(
            prompt,
            console=self.console,
            choices=list(choices),
            show_choices=False,
            stream=self.stream,
        )


class RichMenuRenderer:
    """Print the bookmark menu as a table."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, entries: Sequence[Bookmark], state: BuildState) -> None:
        model = build_menu(entries, state)
        if not model.items:
            self.console.print("[dim]No bookmarks yet.[/]")
        else:
            table = Table(box=None, pad_edge=False)
            table.add_column("", width=1)
            table.add_column("Key", style="bold cyan")
            table.add_column("Name", style="bold")
            table.add_column("Directory")
            table.add_column("Command")
            for item in model.items:
                bookmark = item.bookmark
                table.add_row(
                    SELECTED_MARK if item.selected else "",
                    escape(bookmark.shortcut or ""),
                    escape(bookmark.name),
                    escape(abbreviate_home(bookmark.directory)),
                    escape(bookmark.command),
                )
            self.console.print(table)
        if state.is_set:
            self.console.print(
                f"[dim]Current build:[/] {escape(state.command or '')} "
                f"[dim]in[/] {escape(abbreviate_home(state.directory or ''))}"
            )
