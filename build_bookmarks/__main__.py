"""Entry point for the Build Bookmarks CLI."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .commands import add_bookmark, recompile_from_bookmark, remove_bookmark
from .console import RichMenuRenderer, RichPrompter
from .context import BookmarkContext
from .errors import BookmarkError, NoActiveBuildError
from .lifecycle import BookmarkController
from .log import logger
from .models import BuildKey
from .persistence import BookmarkFile
from .preferences import Preferences, load_preferences
from .runner import ShellBuildAction
from .selector import restore_and_run, run_shortcut

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(
        console=Console(stderr=True), show_time=False, show_path=False
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _bookmark_file(args: argparse.Namespace, prefs: Preferences) -> BookmarkFile:
    path = Path(args.file).expanduser() if args.file else prefs.bookmarks_path()
    return BookmarkFile(path, prefs.store.encoding)


class _Cli:
    """State shared by one CLI invocation."""

    def __init__(self, args: argparse.Namespace, console: Console) -> None:
        self.args = args
        self.console = console
        self.prefs = load_preferences()
        self.builder = ShellBuildAction(self.prefs.build.shell or None)
        self.prompter = RichPrompter(console)

    @contextmanager
    def session(self) -> Iterator[BookmarkContext]:
        """Load bookmarks, hand out the context, and save on the way out."""
        ctx = BookmarkContext(build_action=self.builder)
        controller = BookmarkController(ctx, _bookmark_file(self.args, self.prefs))
        controller.enable()
        try:
            yield ctx
        finally:
            controller.disable()

    def build_status(self) -> int:
        return self.builder.last_status or 0


def _target_key(args: argparse.Namespace) -> BuildKey | None:
    """The key named on the command line, if a command was given."""
    words = list(args.command)
    if words and words[0] == "--":
        words = words[1:]
    if not words:
        return None
    directory = os.path.abspath(args.directory or os.getcwd())
    return BuildKey(directory, " ".join(words))


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_list(cli: _Cli) -> int:
    with cli.session() as ctx:
        RichMenuRenderer(cli.console).render(list(ctx.store), ctx.state)
    return 0


def _cmd_add(cli: _Cli) -> int:
    args = cli.args
    with cli.session() as ctx:
        key = _target_key(args)
        if key is not None:
            ctx.state.set(key.directory, key.command)
        entry = add_bookmark(ctx, cli.prompter, args.name, args.shortcut)
    suffix = f" on [bold cyan]{escape(entry.shortcut)}[/]" if entry.shortcut else ""
    cli.console.print(f"Bookmarked [bold]{escape(entry.name)}[/]{suffix}", highlight=False)
    return 0


def _cmd_remove(cli: _Cli) -> int:
    with cli.session() as ctx:
        key = _target_key(cli.args)
        removed = ctx.store.remove(key) if key is not None else remove_bookmark(ctx)
    if removed is None:
        cli.console.print("[yellow]No matching bookmark.[/]")
        return 1
    cli.console.print(f"Removed [bold]{escape(removed.name)}[/]", highlight=False)
    return 0


def _cmd_pick(cli: _Cli) -> int:
    with cli.session() as ctx:
        entry = recompile_from_bookmark(ctx, cli.prompter)
    if entry is None:
        cli.console.print("[yellow]No bookmarks yet.[/]")
        return 1
    return cli.build_status()


def _cmd_run(cli: _Cli) -> int:
    args = cli.args

    def edit(command: str) -> str:
        return cli.prompter.ask_string("Build command", command)

    editor = edit if args.edit else None
    with cli.session() as ctx:
        target = args.target
        if len(target) == 1 and target in ctx.binder:
            run_shortcut(ctx, target, editor)
        else:
            entry = ctx.store.find_by_name(target)
            if entry is None:
                raise BookmarkError(f"No bookmark with shortcut or name {target!r}")
            command = editor(entry.command) if editor is not None else None
            restore_and_run(ctx, entry.key, command)
    return cli.build_status()


def _cmd_last(cli: _Cli) -> int:
    with cli.session() as ctx:
        key = ctx.state.key()
        if key is None:
            raise NoActiveBuildError("No previous build recorded")
        restore_and_run(ctx, key)
    return cli.build_status()


def _cmd_tui(cli: _Cli) -> int:
    from .app import run_app

    run_app(cli.prefs, _bookmark_file(cli.args, cli.prefs))
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="build-bookmarks",
        description="Save, recall and re-run named build commands",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"build-bookmarks {__version__}",
    )
    parser.add_argument(
        "--file",
        "-f",
        type=str,
        help="Bookmarks file (default: from preferences)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("tui", help="Launch the interactive TUI (default)")
    sub.add_parser("list", help="List bookmarks")

    add = sub.add_parser("add", help="Bookmark a build (default: the last one)")
    add.add_argument("-C", "--directory", help="Build directory (default: cwd)")
    add.add_argument("--name", help="Bookmark name (prompted if omitted)")
    add.add_argument(
        "--shortcut", help="Single-character shortcut (empty for none, prompted if omitted)"
    )
    add.add_argument("command", nargs=argparse.REMAINDER, help="Build command")

    remove = sub.add_parser("remove", help="Remove a bookmark (default: the last build)")
    remove.add_argument("-C", "--directory", help="Build directory (default: cwd)")
    remove.add_argument("command", nargs=argparse.REMAINDER, help="Build command")

    sub.add_parser("pick", help="Choose a bookmark and run it")

    run = sub.add_parser("run", help="Run a bookmark by shortcut or name")
    run.add_argument("target", help="Shortcut character or bookmark name")
    run.add_argument("--edit", "-e", action="store_true", help="Edit the command first")

    sub.add_parser("last", help="Re-run the last build")
    return parser


_HANDLERS = {
    None: _cmd_tui,
    "tui": _cmd_tui,
    "list": _cmd_list,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "pick": _cmd_pick,
    "run": _cmd_run,
    "last": _cmd_last,
}


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the subcommand and return its exit status."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    console = Console()
    err = Console(stderr=True)

    try:
        return _HANDLERS[args.cmd](_Cli(args, console))
    except (BookmarkError, ValueError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        err.print(f"[bold red]error:[/] {escape(str(exc))}", highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
