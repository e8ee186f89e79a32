"""Reader and writer for the literal syntax used by the bookmarks file.

The syntax is a small, data-only subset of Lisp printed forms:

- strings ``"..."`` with ``\\\\``, ``\\"``, ``\\n`` and ``\\t`` escapes
- characters ``?x`` (``?\\x`` for delimiters, ``?\\s`` for a space)
- ``nil``
- bare symbols (record names such as ``bookmarks``)
- lists ``( ... )`` and dotted pairs ``( a . b )``
- ``;`` comments to end of line

Nothing is ever evaluated; anything outside the grammar is a
:class:`~build_bookmarks.errors.BookmarkFileError`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..errors import BookmarkFileError


@dataclass(frozen=True)
class Symbol:
    name: str


@dataclass(frozen=True)
class Char:
    value: str


@dataclass(frozen=True)
class Pair:
    car: object
    cdr: object
    line: int = field(default=0, compare=False)


class Form(list):
    """A parsed list that remembers the line it started on."""

    def __init__(self, items: list[object], line: int) -> None:
        super().__init__(items)
        self.line = line


_TOKEN_RE = re.compile(
    r"""
      (?P<space>[ \t\r\f\v\n]+)
    | (?P<comment>;[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<char>\?(?:\\.|[^\\\s]))
    | (?P<atom>[^\s()";?]+)
    """,
    re.VERBOSE | re.DOTALL,
)

_STRING_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t"}
_CHAR_NAMES = {"s": " ", "n": "\n", "t": "\t"}
_CHAR_NEEDS_ESCAPE = set('()[]"\';\\')
_SYMBOL_RE = re.compile(r"[A-Za-z][A-Za-z0-9_-]*\Z")


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    line: int


def _tokenize(text: str) -> Iterator[_Token]:
    pos = 0
    line = 1
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise BookmarkFileError(f"unexpected character {text[pos]!r}", line)
        kind = match.lastgroup or ""
        token_text = match.group()
        if kind not in ("space", "comment"):
            yield _Token(kind, token_text, line)
        line += token_text.count("\n")
        pos = match.end()


def _unescape_string(token: _Token) -> str:
    body = token.text[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            nxt = body[i + 1]
            if nxt not in _STRING_ESCAPES:
                raise BookmarkFileError(f"unknown string escape \\{nxt}", token.line)
            out.append(_STRING_ESCAPES[nxt])
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _read_char(token: _Token) -> Char:
    body = token.text[1:]
    if body.startswith("\\"):
        escaped = body[1]
        return Char(_CHAR_NAMES.get(escaped, escaped))
    return Char(body)


class _Reader:
    def __init__(self, text: str) -> None:
        self._tokens = list(_tokenize(text))
        self._pos = 0

    def _peek(self) -> _Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            last = self._tokens[-1].line if self._tokens else 1
            raise BookmarkFileError("unexpected end of file", last)
        self._pos += 1
        return token

    def read_all(self) -> list[object]:
        forms: list[object] = []
        while self._peek() is not None:
            forms.append(self.read())
        return forms

    def read(self) -> object:
        token = self._next()
        if token.kind == "open":
            return self._read_list(token.line)
        if token.kind == "close":
            raise BookmarkFileError("unbalanced ')'", token.line)
        if token.kind == "string":
            return _unescape_string(token)
        if token.kind == "char":
            return _read_char(token)
        if token.text == "nil":
            return None
        if token.text == ".":
            raise BookmarkFileError("unexpected '.'", token.line)
        if not _SYMBOL_RE.match(token.text):
            raise BookmarkFileError(f"unsupported atom {token.text!r}", token.line)
        return Symbol(token.text)

    def _read_list(self, line: int) -> object:
        items: list[object] = []
        while True:
            token = self._peek()
            if token is None:
                raise BookmarkFileError("unterminated list", line)
            if token.kind == "close":
                self._pos += 1
                return Form(items, line)
            if token.kind == "atom" and token.text == ".":
                self._pos += 1
                if len(items) != 1:
                    raise BookmarkFileError("dotted pair needs exactly one car", token.line)
                cdr = self.read()
                closing = self._next()
                if closing.kind != "close":
                    raise BookmarkFileError("expected ')' after dotted pair", closing.line)
                return Pair(items[0], cdr, line)
            items.append(self.read())


def read_forms(text: str) -> list[object]:
    """Parse every top-level form in *text*."""
    return _Reader(text).read_all()


# -- writer -------------------------------------------------------------------


def write_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def write_char(value: str) -> str:
    if value == " ":
        return "?\\s"
    if value in _CHAR_NEEDS_ESCAPE:
        return "?\\" + value
    return "?" + value


def write(value: object) -> str:
    """Print *value* in the literal syntax."""
    if value is None:
        return "nil"
    if isinstance(value, str):
        return write_string(value)
    if isinstance(value, Char):
        return write_char(value.value)
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, Pair):
        return f"({write(value.car)} . {write(value.cdr)})"
    if isinstance(value, (list, tuple)):
        return "(" + " ".join(write(item) for item in value) + ")"
    raise TypeError(f"cannot write {type(value).__name__} as a literal")
