"""Tests for hierarchical key resolution."""

import pytest

from refview.core import (
    ACTION_NONE,
    Action,
    KeyBindingManager,
    UnconfiguredViewError,
    ViewHierarchy,
    ViewId,
    build_keymap,
)
from refview.core.debug_events import get_debug_event_history

ALL_VIEWS = [ViewId.DIFF, ViewId.COMMIT, ViewId.HISTORY, ViewId.MAIN]


def test_innermost_view_wins_for_up_arrow() -> None:
    keymap = build_keymap()
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS), "up") == Action.DIFF_PREV_LINE


def test_unbound_key_in_ref_view_resolves_to_none() -> None:
    keymap = build_keymap()
    assert keymap.resolve(ViewHierarchy([ViewId.REF]), "tab") == ACTION_NONE


def test_falls_through_to_outer_view() -> None:
    keymap = build_keymap()
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS), "tab") == Action.HISTORY_NEXT_VIEW


def test_inner_binding_shadows_outer_for_any_key() -> None:
    keymap = KeyBindingManager()
    keymap.bind("x", ViewId.MAIN, Action.HISTORY_NEXT_VIEW)
    keymap.bind("x", ViewId.HISTORY, Action.COMMIT_NEXT)
    keymap.bind("x", ViewId.DIFF, Action.DIFF_NEXT_LINE)
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS), "x") == Action.DIFF_NEXT_LINE
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS[1:]), "x") == Action.COMMIT_NEXT


def test_no_match_anywhere_returns_none() -> None:
    keymap = build_keymap()
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS), "ctrl+z") == ACTION_NONE
    assert keymap.resolve(ViewHierarchy(), "up") == ACTION_NONE


def test_bind_then_resolve_only_affects_that_view() -> None:
    keymap = build_keymap()
    keymap.bind("up", ViewId.REF, Action.REF_SELECT)
    assert keymap.resolve(ViewHierarchy([ViewId.REF]), "up") == Action.REF_SELECT
    assert keymap.resolve(ViewHierarchy([ViewId.COMMIT]), "up") == Action.COMMIT_PREV
    assert keymap.resolve(ViewHierarchy([ViewId.DIFF]), "up") == Action.DIFF_PREV_LINE


def test_binding_none_masks_outer_views() -> None:
    keymap = build_keymap()
    keymap.bind("tab", ViewId.DIFF, ACTION_NONE)
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS), "tab") == ACTION_NONE


def test_remove_binding_restores_fall_through() -> None:
    keymap = build_keymap()
    assert keymap.remove_binding(ViewId.DIFF, "up") is True
    assert keymap.remove_binding(ViewId.DIFF, "up") is False
    assert keymap.resolve(ViewHierarchy(ALL_VIEWS), "up") == Action.COMMIT_PREV


def test_resolve_accepts_plain_sequences() -> None:
    keymap = build_keymap()
    assert keymap.resolve([ViewId.COMMIT, ViewId.HISTORY], "down") == Action.COMMIT_NEXT


def test_every_view_is_provisioned() -> None:
    keymap = KeyBindingManager()
    for view in ViewId:
        assert keymap.bindings_for_view(view) == {}


def test_missing_table_fails_at_construction() -> None:
    tables = {view: {} for view in ViewId if view != ViewId.COMMIT}
    with pytest.raises(UnconfiguredViewError) as excinfo:
        KeyBindingManager(tables)
    assert excinfo.value.view_ids == [ViewId.COMMIT]
    assert "commit" in str(excinfo.value)


def test_unknown_view_identifier_is_a_lookup_error() -> None:
    keymap = KeyBindingManager()
    with pytest.raises(LookupError):
        keymap.resolve(["diff"], "up")
    with pytest.raises(UnconfiguredViewError):
        keymap.bind("up", "nowhere", Action.DIFF_PREV_LINE)


def test_keys_for_action_in_binding_order() -> None:
    keymap = build_keymap()
    keymap.bind("k", ViewId.DIFF, Action.DIFF_PREV_LINE)
    assert keymap.keys_for_action(Action.DIFF_PREV_LINE, ViewId.DIFF) == ["up", "k"]
    assert keymap.keys_for_action(Action.DIFF_PREV_LINE, ViewId.COMMIT) == []


def test_bindings_for_view_is_a_copy() -> None:
    keymap = build_keymap()
    bindings = keymap.bindings_for_view(ViewId.REF)
    bindings["up"] = Action.NONE
    assert keymap.resolve([ViewId.REF], "up") == Action.REF_PREV


def test_copy_is_independent() -> None:
    keymap = build_keymap()
    clone = keymap.copy()
    clone.bind("up", ViewId.DIFF, Action.DIFF_NEXT_LINE)
    assert keymap.resolve([ViewId.DIFF], "up") == Action.DIFF_PREV_LINE
    assert clone.resolve([ViewId.DIFF], "up") == Action.DIFF_NEXT_LINE


def test_debug_events_for_bind_and_resolve() -> None:
    keymap = KeyBindingManager()
    keymap.bind("j", ViewId.DIFF, Action.DIFF_NEXT_LINE)
    keymap.resolve([ViewId.DIFF], "j")
    keymap.resolve([ViewId.DIFF], "q")
    events = get_debug_event_history("keybinding")
    assert [event.name for event in events] == ["keybinding.register", "keybinding.resolve"]
    assert events[0].data["source"] == "override"
    assert events[1].data == {"key": "j", "view": "diff", "action": "diff_next_line"}
