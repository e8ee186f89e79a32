"""Tests for the modal screens' filtering helpers."""

from __future__ import annotations

from build_bookmarks.widgets.screens import filter_choices, fuzzy_match

LABELS = ["proj | make", "other | ninja", "alice/proj | make test"]


class TestFuzzyMatch:
    def test_in_order_characters(self):
        assert fuzzy_match("pmk", "proj | make")

    def test_out_of_order_fails(self):
        assert not fuzzy_match("kmp", "proj | make")

    def test_case_insensitive(self):
        assert fuzzy_match("NIN", "other | ninja")


class TestFilterChoices:
    def test_empty_query_keeps_all(self):
        assert filter_choices(LABELS, "") == LABELS

    def test_substring_hits_come_first(self):
        assert filter_choices(LABELS, "make t") == ["alice/proj | make test"]
        assert filter_choices(LABELS, "ot")[0] == "other | ninja"

    def test_no_match(self):
        assert filter_choices(LABELS, "zzz") == []
