"""Choosing a bookmark and making it the current build."""

from __future__ import annotations

import re
from collections.abc import Callable

from .context import BookmarkContext
from .interfaces import Prompter
from .log import logger
from .models import Bookmark, BuildKey

LABEL_WIDTH = 40
ELLIPSIS = "..."
MIN_COMMAND_TAIL = 8

_PATH_SEP_RE = re.compile(r"[\\/]+")


def suggest_name(directory: str, command: str) -> str:
    """Return the default label for a build.

    The last two segments of *directory*, then ``" | "``, then *command*.
    Labels stay under ``LABEL_WIDTH`` columns by replacing the head of the
    command with an ellipsis.
    """
    segments = [part for part in _PATH_SEP_RE.split(directory) if part]
    prefix = "/".join(segments[-2:]) + " | "
    if len(prefix) + len(command) < LABEL_WIDTH:
        return prefix + command
    keep = max(LABEL_WIDTH - 1 - len(prefix) - len(ELLIPSIS), MIN_COMMAND_TAIL)
    if keep >= len(command):
        return prefix + command
    return prefix + ELLIPSIS + command[-keep:]


def default_name(ctx: BookmarkContext, key: BuildKey) -> str:
    """Name to pre-fill when bookmarking *key*: its current name if it has one."""
    existing = ctx.store.lookup(key)
    if existing is not None:
        return existing.name
    return suggest_name(key.directory, key.command)


def choice_labels(ctx: BookmarkContext) -> dict[str, Bookmark]:
    """Map a unique display label to each bookmark, in store order.

    Entries whose labels collide get a `` <n>`` suffix.
    """
    labels: dict[str, Bookmark] = {}
    for entry in ctx.store:
        base = suggest_name(entry.directory, entry.command)
        label = base
        n = 2
        while label in labels:
            label = f"{base} <{n}>"
            n += 1
        labels[label] = entry
    return labels


def restore(ctx: BookmarkContext, key: BuildKey) -> None:
    """Make *key* the current build without running it."""
    ctx.state.set(key.directory, key.command)
    ctx.refresh_menu()


def restore_and_run(
    ctx: BookmarkContext,
    key: BuildKey,
    command: str | None = None,
) -> object:
    """Restore *key*, optionally swap in an edited *command*, then build."""
    restore(ctx, key)
    if command is not None and command != key.command:
        ctx.state.command = command
        ctx.refresh_menu()
    logger.info("building %r in %s", ctx.state.command, ctx.state.directory)
    return ctx.build_action.run(ctx.state)


def run_shortcut(
    ctx: BookmarkContext,
    char: str,
    command_editor: Callable[[str], str] | None = None,
) -> bool:
    """Run the bookmark bound to *char*.

    With *command_editor* (the long-form trigger) the restored command is
    passed through it before the build.  Returns False if *char* is unbound.
    """
    key = ctx.binder.lookup(char)
    if key is None:
        return False
    command = command_editor(key.command) if command_editor is not None else None
    restore_and_run(ctx, key, command)
    return True


def interactive_select(ctx: BookmarkContext, prompter: Prompter) -> Bookmark | None:
    """Let the user pick a bookmark by label, then restore and run it."""
    labels = choice_labels(ctx)
    if not labels:
        return None
    choice = prompter.ask_from_choices("Recompile", list(labels))
    entry = labels[choice]
    restore_and_run(ctx, entry.key)
    return entry
