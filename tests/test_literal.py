"""Tests for the literal reader/writer behind the bookmarks file."""

from __future__ import annotations

import pytest

from build_bookmarks.errors import BookmarkFileError
from build_bookmarks.persistence._literal import (
    Char,
    Form,
    Pair,
    Symbol,
    read_forms,
    write,
    write_char,
    write_string,
)


class TestReader:
    def test_reads_strings_chars_and_nil(self):
        (form,) = read_forms('("a" ?b nil)')
        assert form == ["a", Char("b"), None]

    def test_reads_dotted_pair(self):
        (pair,) = read_forms('("/proj" . "make")')
        assert isinstance(pair, Pair)
        assert (pair.car, pair.cdr) == ("/proj", "make")

    def test_reads_symbols(self):
        (form,) = read_forms("(last-build)")
        assert form == [Symbol("last-build")]

    def test_skips_comments(self):
        forms = read_forms(';; header\n("x") ; trailing\n;; end\n')
        assert forms == [["x"]]

    def test_string_escapes(self):
        (form,) = read_forms(r'("say \"hi\"\n\\ok\t")')
        assert form == ['say "hi"\n\\ok\t']

    def test_string_with_literal_newline_counts_lines(self):
        with pytest.raises(BookmarkFileError) as exc_info:
            read_forms('("two\nlines")\n)')
        assert exc_info.value.line == 3

    def test_escaped_chars(self):
        (form,) = read_forms(r"(?\( ?\) ?\s ?\;)")
        assert form == [Char("("), Char(")"), Char(" "), Char(";")]

    def test_form_remembers_line(self):
        forms = read_forms('\n\n("a")')
        assert isinstance(forms[0], Form)
        assert forms[0].line == 3

    @pytest.mark.parametrize(
        "text",
        [
            '("unterminated"',
            ")",
            '("a" . "b" "c")',
            '(. "b")',
            "(123)",
            '("bad \\q escape")',
            "(#<buffer>)",
            "?",
        ],
    )
    def test_rejects_malformed_input(self, text):
        with pytest.raises(BookmarkFileError):
            read_forms(text)

    def test_code_is_read_as_plain_data(self):
        (form,) = read_forms('(shell-command "touch /tmp/pwned")')
        assert form == [Symbol("shell-command"), "touch /tmp/pwned"]


class TestWriter:
    def test_write_string_escapes(self):
        assert write_string('a"b\\c\nd') == '"a\\"b\\\\c\\nd"'

    def test_write_char(self):
        assert write_char("b") == "?b"
        assert write_char("(") == "?\\("
        assert write_char(" ") == "?\\s"

    def test_write_nested(self):
        text = write([Pair("/proj", "make"), "Build", Char("b")])
        assert text == '(("/proj" . "make") "Build" ?b)'

    def test_write_nil(self):
        assert write([Pair("/p", "m"), "x", None]) == '(("/p" . "m") "x" nil)'

    def test_write_rejects_unknown_types(self):
        with pytest.raises(TypeError):
            write(3.5)

    @pytest.mark.parametrize("value", ['odd "name"', "tab\there", "back\\slash", "ünïcødé"])
    def test_strings_read_back(self, value):
        (form,) = read_forms("(" + write_string(value) + ")")
        assert form == [value]

    @pytest.mark.parametrize("char", list("()[]\";'\\ab?Z9"))
    def test_chars_read_back(self, char):
        (form,) = read_forms("(" + write_char(char) + ")")
        assert form == [Char(char)]
