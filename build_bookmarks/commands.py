"""User-facing bookmark commands: add, remove, recompile."""

from __future__ import annotations

from .context import BookmarkContext
from .errors import NoActiveBuildError
from .interfaces import Prompter
from .models import Bookmark
from .selector import default_name, interactive_select


def add_bookmark(
    ctx: BookmarkContext,
    prompter: Prompter,
    name: str | None = None,
    shortcut: str | None = None,
) -> Bookmark:
    """Bookmark the current build.

    Only values not passed in are asked for.  An empty *name* takes the
    suggested name and an empty *shortcut* means none.
    """
    key = ctx.state.key()
    if key is None:
        raise NoActiveBuildError("No build command to bookmark yet")
    if name is None:
        name = prompter.ask_string("Bookmark name", default_name(ctx, key))
    elif not name:
        name = default_name(ctx, key)
    if shortcut is None:
        shortcut = prompter.ask_char("Shortcut key (empty for none)")
    return ctx.store.add(key, name, shortcut or None)


def remove_bookmark(ctx: BookmarkContext) -> Bookmark | None:
    """Remove the bookmark for the current build, if there is one."""
    key = ctx.state.key()
    if key is None:
        return None
    return ctx.store.remove(key)


def recompile_from_bookmark(ctx: BookmarkContext, prompter: Prompter) -> Bookmark | None:
    return interactive_select(ctx, prompter)
