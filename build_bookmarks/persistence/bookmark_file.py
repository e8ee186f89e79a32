"""Bookmarks file: the bookmark list plus the last active build."""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ..errors import BookmarkFileError, RefusalError
from ..log import logger
from ..models import Bookmark, BuildKey, BuildState, validate_key, validate_shortcut
from ..store import BookmarkStore
from ._base import TextStore
from ._literal import Char, Form, Pair, Symbol, read_forms, write, write_string

BOOKMARKS_RECORD = "bookmarks"
LAST_BUILD_RECORD = "last-build"

# The coding declaration is looked for near the end of the file only.
_TRAILER_WINDOW = 3000
_CODING_RE = re.compile(rb"^;+[ \t]*coding:[ \t]*([A-Za-z0-9._-]+)", re.MULTILINE)
_EOL_SUFFIX_RE = re.compile(r"-(?:unix|dos|mac)\Z")


@dataclass
class Snapshot:
    """Contents of a bookmarks file."""

    entries: list[Bookmark] = field(default_factory=list)
    last_build: BuildState = field(default_factory=BuildState)


# -- encoding -----------------------------------------------------------------


def dumps(
    entries: list[Bookmark],
    state: BuildState,
    *,
    encoding: str = "utf-8",
    now: datetime | None = None,
) -> str:
    """Render *entries* and *state* as bookmarks-file text."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [f";; Build bookmarks, generated {stamp}"]

    if entries:
        lines.append(f"({BOOKMARKS_RECORD}")
        rows = [
            " "
            + write(
                [
                    Pair(entry.key.directory, entry.key.command),
                    entry.name,
                    Char(entry.shortcut) if entry.shortcut else None,
                ]
            )
            for entry in entries
        ]
        rows[-1] += ")"
        lines.extend(rows)
    else:
        lines.append(f"({BOOKMARKS_RECORD})")

    lines.append(f"({LAST_BUILD_RECORD}")
    lines.append(f" (directory . {_write_optional(state.directory)})")
    lines.append(f" (command . {_write_optional(state.command)}))")

    lines.append(";; Local Variables:")
    lines.append(f";; coding: {encoding}")
    lines.append(";; End:")
    return "\n".join(lines) + "\n"


def _write_optional(value: str | None) -> str:
    return "nil" if value is None else write_string(value)


# -- decoding -----------------------------------------------------------------


def declared_encoding(raw: bytes, default: str = "utf-8") -> str:
    """Return the encoding named in the file's trailer, or *default*.

    End-of-line variants such as ``utf-8-unix`` name their base coding.
    """
    matches = _CODING_RE.findall(raw[-_TRAILER_WINDOW:])
    if not matches:
        return default
    return _EOL_SUFFIX_RE.sub("", matches[-1].decode("ascii"))


def decode(raw: bytes, default: str = "utf-8") -> str:
    encoding = declared_encoding(raw, default)
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise BookmarkFileError(f"unknown coding {encoding!r}") from None
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise BookmarkFileError(f"file is not valid {encoding}: {exc.reason}") from exc
    return text.lstrip("\ufeff")


def loads(text: str) -> Snapshot:
    """Parse bookmarks-file text into a :class:`Snapshot`."""
    snapshot = Snapshot()
    seen: set[str] = set()
    for form in read_forms(text):
        line = getattr(form, "line", None)
        if not isinstance(form, Form) or not form or not isinstance(form[0], Symbol):
            raise BookmarkFileError("expected a (bookmarks ...) or (last-build ...) record", line)
        record = form[0].name
        if record in seen:
            raise BookmarkFileError(f"duplicate {record} record", line)
        seen.add(record)
        if record == BOOKMARKS_RECORD:
            snapshot.entries = [_parse_entry(item, form.line) for item in form[1:]]
        elif record == LAST_BUILD_RECORD:
            snapshot.last_build = _parse_last_build(form[1:], form.line)
        else:
            raise BookmarkFileError(f"unknown record {record!r}", line)
    return snapshot


def _parse_entry(item: object, record_line: int) -> Bookmark:
    line = getattr(item, "line", record_line)
    if not isinstance(item, Form) or len(item) not in (2, 3):
        raise BookmarkFileError("bookmark must be ((directory . command) name [shortcut])", line)
    key, name = item[0], item[1]
    if not (isinstance(key, Pair) and isinstance(key.car, str) and isinstance(key.cdr, str)):
        raise BookmarkFileError("bookmark key must be (\"directory\" . \"command\")", line)
    if not isinstance(name, str):
        raise BookmarkFileError("bookmark name must be a string", line)

    # Files written before shortcuts existed carry only the name.
    raw_shortcut = item[2] if len(item) == 3 else None
    if raw_shortcut is not None and not isinstance(raw_shortcut, Char):
        raise BookmarkFileError("bookmark shortcut must be a character or nil", line)
    shortcut = raw_shortcut.value if raw_shortcut is not None else None

    build_key = BuildKey(key.car, key.cdr)
    try:
        validate_key(build_key)
        validate_shortcut(shortcut)
    except ValueError as exc:
        raise BookmarkFileError(str(exc), line) from None
    return Bookmark(key=build_key, name=name, shortcut=shortcut)


def _parse_last_build(fields: list[object], line: int) -> BuildState:
    state = BuildState()
    for item in fields:
        if not (isinstance(item, Pair) and isinstance(item.car, Symbol)):
            raise BookmarkFileError("last-build fields must be (name . value)", line)
        value = item.cdr
        if value is not None and not isinstance(value, str):
            raise BookmarkFileError(f"{item.car.name} must be a string or nil", item.line)
        if item.car.name == "directory":
            state.directory = value or None
        elif item.car.name == "command":
            state.command = value
        else:
            raise BookmarkFileError(f"unknown last-build field {item.car.name!r}", item.line)
    return state


# -- store --------------------------------------------------------------------


class BookmarkFile(TextStore):
    """The on-disk home of a :class:`BookmarkStore`."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        super().__init__(path, encoding)

    def read(self) -> Snapshot | None:
        """Parse the file; ``None`` when it is missing or unreadable."""
        raw = self.load_bytes()
        if raw is None:
            return None
        try:
            return loads(decode(raw, self.encoding))
        except BookmarkFileError as exc:
            logger.warning("malformed bookmarks file %s: %s", self.path, exc)
            raise

    def save(self, store: BookmarkStore, state: BuildState) -> None:
        """Write every bookmark and *state* to the file, atomically.

        Falls back to utf-8, declared in the trailer, when the configured
        encoding is unknown or cannot represent the text.
        """
        entries = list(store)
        encoding = self.encoding
        text = dumps(entries, state, encoding=encoding)
        try:
            text.encode(encoding)
        except (UnicodeEncodeError, LookupError):
            logger.warning("cannot save %s as %s; using utf-8", self.path, encoding)
            encoding = "utf-8"
            text = dumps(entries, state, encoding=encoding)
        self.save_text(text, encoding)
        logger.info("saved %d bookmark(s) to %s", len(store), self.path)

    def load(
        self,
        store: BookmarkStore,
        state: BuildState,
        *,
        force: bool = False,
    ) -> BookmarkStore:
        """Fill *store* from the file.

        Refuses to overwrite a non-empty store unless *force* is set.  When
        *state* is unset it is seeded from the file's last active build.
        """
        if len(store) and not force:
            raise RefusalError(
                f"{len(store)} bookmark(s) already in memory; "
                f"not loading {self.path} over them"
            )
        snapshot = self.read()
        with store.deferred_refresh():
            store.clear()
            if snapshot is None:
                logger.debug("no bookmarks file at %s", self.path)
                return store
            for entry in snapshot.entries:
                store.add(entry.key, entry.name, entry.shortcut)

        if not state.is_set and snapshot.last_build.directory is not None:
            state.directory = snapshot.last_build.directory
            state.command = snapshot.last_build.command
        logger.info("loaded %d bookmark(s) from %s", len(store), self.path)
        return store
