"""Tests for BookmarkStore and ShortcutBinder."""

from __future__ import annotations

import itertools

import pytest

from build_bookmarks.models import BuildKey, BuildState
from build_bookmarks.shortcuts import ShortcutBinder
from build_bookmarks.store import BookmarkStore

MAKE = BuildKey("/proj", "make")
MAKE_TEST = BuildKey("/proj", "make test")
OTHER = BuildKey("/other", "ninja")


# -- ShortcutBinder ----------------------------------------------------------


class TestShortcutBinder:
    def test_assign_and_lookup(self):
        binder = ShortcutBinder()
        binder.assign(MAKE, "b")
        assert binder.lookup("b") == MAKE
        assert "b" in binder
        assert len(binder) == 1

    def test_none_binds_nothing(self):
        binder = ShortcutBinder()
        assert binder.assign(MAKE, None) is None
        assert len(binder) == 0

    def test_rebinding_replaces_previous_holder(self):
        binder = ShortcutBinder()
        binder.assign(MAKE, "b")
        previous = binder.assign(OTHER, "b")
        assert previous == MAKE
        assert binder.lookup("b") == OTHER

    def test_rebinding_same_key_reports_nothing(self):
        binder = ShortcutBinder()
        binder.assign(MAKE, "b")
        assert binder.assign(MAKE, "b") is None

    def test_release_with_key_only_when_still_bound(self):
        binder = ShortcutBinder()
        binder.assign(OTHER, "b")
        binder.release("b", MAKE)
        assert binder.lookup("b") == OTHER
        binder.release("b", OTHER)
        assert binder.lookup("b") is None

    def test_release_unknown_is_noop(self):
        binder = ShortcutBinder()
        binder.release("z")
        binder.release(None)
        assert binder.bindings() == {}


# -- BookmarkStore -----------------------------------------------------------


class TestBookmarkStore:
    def test_add_then_lookup(self):
        store = BookmarkStore()
        entry = store.add(MAKE, "Build", "b")
        assert store.lookup(MAKE) is entry
        assert entry.name == "Build"
        assert entry.shortcut == "b"
        assert store.binder.lookup("b") == MAKE

    def test_lookup_is_exact(self):
        store = BookmarkStore()
        store.add(MAKE, "Build")
        assert store.lookup(BuildKey("/proj/", "make")) is None
        assert store.lookup(BuildKey("/proj", "make ")) is None

    def test_readd_replaces_metadata(self):
        store = BookmarkStore()
        first = store.add(MAKE, "Build", "b")
        second = store.add(MAKE, "Rebuild", "r")
        assert first is second
        assert len(store) == 1
        assert second.name == "Rebuild"
        assert store.binder.lookup("b") is None
        assert store.binder.lookup("r") == MAKE

    def test_readd_without_shortcut_releases_old_one(self):
        store = BookmarkStore()
        store.add(MAKE, "Build", "b")
        store.add(MAKE, "Build")
        assert store.binder.bindings() == {}

    def test_sorted_by_name_after_every_mutation(self):
        store = BookmarkStore()
        store.add(MAKE, "zeta")
        store.add(MAKE_TEST, "alpha")
        store.add(OTHER, "mid")
        assert [e.name for e in store] == ["alpha", "mid", "zeta"]
        store.add(MAKE_TEST, "zzz")
        assert [e.name for e in store] == ["mid", "zeta", "zzz"]

    def test_remove_absent_is_noop(self):
        store = BookmarkStore()
        store.add(MAKE, "Build")
        assert store.remove(OTHER) is None
        assert len(store) == 1

    def test_scenario_add_add_remove(self):
        store = BookmarkStore()
        store.add(MAKE, "Build", "b")
        assert [e.name for e in store] == ["Build"]
        assert store.binder.lookup("b") == MAKE

        store.add(MAKE_TEST, "Test")
        assert [e.name for e in store] == ["Build", "Test"]

        store.remove(MAKE)
        assert [e.name for e in store] == ["Test"]
        assert store.binder.lookup("b") is None

    def test_taking_a_used_shortcut_detaches_previous_entry(self):
        store = BookmarkStore()
        store.add(MAKE, "Build", "b")
        store.add(OTHER, "Ninja", "b")
        assert store.binder.lookup("b") == OTHER
        assert store.lookup(MAKE).shortcut is None
        # Re-adding the detached entry must not steal the key back.
        store.add(MAKE, "Build again")
        assert store.binder.lookup("b") == OTHER

    def test_shortcut_exclusivity_over_many_adds(self):
        store = BookmarkStore()
        keys = [BuildKey(f"/p{i}", "make") for i in range(4)]
        for key, char in zip(keys, itertools.cycle("ab")):
            store.add(key, key.directory, char)
        holders = [e for e in store if e.shortcut is not None]
        assert sorted(e.shortcut for e in holders) == ["a", "b"]
        for entry in holders:
            assert store.binder.lookup(entry.shortcut) == entry.key

    def test_key_uniqueness_over_many_adds(self):
        store = BookmarkStore()
        for name in ["one", "two", "three"]:
            store.add(MAKE, name)
            store.add(OTHER, name)
        assert len(store) == 2
        assert len({e.key for e in store}) == 2

    def test_rejects_empty_key_parts(self):
        store = BookmarkStore()
        with pytest.raises(ValueError):
            store.add(BuildKey("", "make"), "x")
        with pytest.raises(ValueError):
            store.add(BuildKey("/proj", ""), "x")

    def test_rejects_multi_char_shortcut(self):
        store = BookmarkStore()
        with pytest.raises(ValueError):
            store.add(MAKE, "Build", "bb")
        with pytest.raises(ValueError):
            store.add(MAKE, "Build", " ")
        assert len(store) == 0

    def test_clear_releases_bindings(self):
        store = BookmarkStore()
        store.add(MAKE, "Build", "b")
        store.add(OTHER, "Ninja", "n")
        store.clear()
        assert len(store) == 0
        assert store.binder.bindings() == {}

    def test_iteration_is_a_snapshot(self):
        store = BookmarkStore()
        store.add(MAKE, "Build")
        store.add(OTHER, "Ninja")
        seen = []
        for entry in store:
            seen.append(entry.name)
            store.remove(entry.key)
        assert seen == ["Build", "Ninja"]

    def test_find_by_name(self):
        store = BookmarkStore()
        store.add(MAKE, "Build")
        assert store.find_by_name("Build").key == MAKE
        assert store.find_by_name("nope") is None

    def test_contains(self):
        store = BookmarkStore()
        store.add(MAKE, "Build")
        assert MAKE in store
        assert OTHER not in store
        assert "Build" not in store


class TestChangeNotifications:
    def test_each_mutation_notifies(self):
        calls = []
        store = BookmarkStore(on_change=lambda: calls.append(1))
        store.add(MAKE, "Build")
        store.remove(MAKE)
        store.remove(MAKE)
        assert len(calls) == 3

    def test_binding_happens_before_notification(self):
        store = BookmarkStore()
        seen = []
        store.on_change = lambda: seen.append(store.binder.lookup("b"))
        store.add(MAKE, "Build", "b")
        assert seen == [MAKE]

    def test_deferred_refresh_collapses_notifications(self):
        calls = []
        store = BookmarkStore(on_change=lambda: calls.append(1))
        with store.deferred_refresh():
            store.add(MAKE, "Build")
            store.add(OTHER, "Ninja")
            assert calls == []
        assert calls == [1]


class TestBuildState:
    def test_unset_state_matches_nothing(self):
        state = BuildState()
        assert not state.is_set
        assert state.key() is None
        assert not state.matches(MAKE)

    def test_set_state_matches_its_key(self):
        state = BuildState("/proj", "make")
        assert state.is_set
        assert state.matches(MAKE)
        assert not state.matches(MAKE_TEST)

    def test_directory_without_command_has_no_key(self):
        state = BuildState("/proj", None)
        assert state.is_set
        assert state.key() is None
