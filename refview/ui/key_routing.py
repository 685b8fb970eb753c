"""Bridge Textual key events to the hierarchical key binding table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from refview.core.actions import ACTION_NONE, Action
from refview.core.dispatcher import KeyBindingManager
from refview.core.keymap import get_keymap
from refview.core.views import ViewHierarchy

if TYPE_CHECKING:
    from textual.events import Key


def resolve_key_event(keymap: KeyBindingManager, hierarchy: ViewHierarchy, event: Key) -> Action:
    """Resolve a Textual key press against the focused view chain."""
    return keymap.resolve(hierarchy, event.key)


class KeyRoutingMixin:
    """Mixin for apps that route key presses through the binding table.

    Host protocol:
        current_view_hierarchy() -> ViewHierarchy
            Required. Returns the focus chain, innermost view first, at the
            time of the key press.
        binding_manager: KeyBindingManager | None
            Optional. Overrides the process-wide manager from get_keymap().
    """

    binding_manager: KeyBindingManager | None = None

    def current_view_hierarchy(self) -> ViewHierarchy:
        """Required host hook; see the class docstring."""
        raise NotImplementedError(f"{type(self).__name__} must implement current_view_hierarchy()")

    def resolve_key(self, event: Key) -> Action:
        hierarchy = self.current_view_hierarchy()
        if not hierarchy:
            return ACTION_NONE
        return resolve_key_event(self.binding_manager or get_keymap(), hierarchy, event)
