"""Tests for routing Textual key events through the binding table."""

from __future__ import annotations

import pytest
from textual.app import App, ComposeResult
from textual.events import Key
from textual.widgets import Static

from refview.core import ACTION_NONE, Action, KeyBindingManager, ViewHierarchy, ViewId, build_keymap
from refview.ui import KeyRoutingMixin, resolve_key_event

DIFF_FOCUSED = ViewHierarchy.from_outermost([ViewId.MAIN, ViewId.HISTORY, ViewId.COMMIT, ViewId.DIFF])


class RoutingHost(KeyRoutingMixin):
    def __init__(self, hierarchy: ViewHierarchy) -> None:
        self.hierarchy = hierarchy

    def current_view_hierarchy(self) -> ViewHierarchy:
        return self.hierarchy


class RoutingApp(KeyRoutingMixin, App[None]):
    def __init__(self, hierarchy: ViewHierarchy) -> None:
        super().__init__()
        self.hierarchy = hierarchy
        self.resolved: list[Action] = []

    def compose(self) -> ComposeResult:
        yield Static("diff")

    def current_view_hierarchy(self) -> ViewHierarchy:
        return self.hierarchy

    def on_key(self, event: Key) -> None:
        self.resolved.append(self.resolve_key(event))


def test_resolve_key_event_uses_event_key() -> None:
    keymap = build_keymap()
    assert resolve_key_event(keymap, DIFF_FOCUSED, Key("up", None)) == Action.DIFF_PREV_LINE
    assert resolve_key_event(keymap, DIFF_FOCUSED, Key("tab", "\t")) == Action.HISTORY_NEXT_VIEW


class TestKeyRoutingMixin:
    def test_uses_process_keymap_by_default(self) -> None:
        host = RoutingHost(ViewHierarchy([ViewId.REF]))
        assert host.resolve_key(Key("enter", "\r")) == Action.REF_SELECT
        assert host.resolve_key(Key("tab", "\t")) == ACTION_NONE

    def test_custom_binding_manager(self) -> None:
        manager = KeyBindingManager()
        manager.bind("j", ViewId.DIFF, Action.DIFF_NEXT_LINE)
        host = RoutingHost(DIFF_FOCUSED)
        host.binding_manager = manager
        assert host.resolve_key(Key("j", "j")) == Action.DIFF_NEXT_LINE
        assert host.resolve_key(Key("up", None)) == ACTION_NONE

    def test_empty_focus_chain(self) -> None:
        host = RoutingHost(ViewHierarchy())
        assert host.resolve_key(Key("up", None)) == ACTION_NONE

    def test_host_must_report_focus_chain(self) -> None:
        class NoHierarchy(KeyRoutingMixin):
            pass

        with pytest.raises(NotImplementedError, match="NoHierarchy must implement current_view_hierarchy"):
            NoHierarchy().resolve_key(Key("up", None))

    @pytest.mark.asyncio
    async def test_app_resolves_pressed_keys(self) -> None:
        app = RoutingApp(DIFF_FOCUSED)

        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.press("up")
            await pilot.pause()

        assert Action.DIFF_PREV_LINE in app.resolved
