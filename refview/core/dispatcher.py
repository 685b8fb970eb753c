"""Key binding table and hierarchical key resolution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from refview.core.actions import ACTION_NONE, Action
from refview.core.debug_events import emit_debug_event
from refview.core.views import ViewId


class UnconfiguredViewError(LookupError):
    """A view identifier has no binding table.

    The set of views is closed, so this signals a programming error rather
    than bad user input.
    """

    def __init__(self, view_ids: Iterable[object]) -> None:
        self.view_ids = list(view_ids)
        names = ", ".join(str(getattr(v, "value", v)) for v in self.view_ids)
        super().__init__(f"No key bindings table defined for view(s): {names}")


class KeyBindingManager:
    """Per-view key tables resolved innermost-view-first.

    Every ``ViewId`` is provisioned with a (possibly empty) table when the
    manager is created, so lookups and binds against a valid view cannot fail.
    """

    def __init__(self, tables: Mapping[ViewId, Mapping[str, Action]] | None = None) -> None:
        if tables is None:
            self._bindings: dict[ViewId, dict[str, Action]] = {view: {} for view in ViewId}
        else:
            self._bindings = {view: dict(keys) for view, keys in tables.items()}
        self.validate()

    def validate(self) -> None:
        """Raise UnconfiguredViewError unless every view has a table."""
        missing = [view for view in ViewId if view not in self._bindings]
        if missing:
            raise UnconfiguredViewError(missing)

    def _table(self, view_id: ViewId) -> dict[str, Action]:
        if not isinstance(view_id, ViewId) or view_id not in self._bindings:
            raise UnconfiguredViewError([view_id])
        return self._bindings[view_id]

    def resolve(self, hierarchy: Iterable[ViewId], key: str) -> Action:
        """Return the action bound to ``key`` in the innermost view that binds it."""
        for view_id in hierarchy:
            table = self._table(view_id)
            if key in table:
                action = table[key]
                emit_debug_event(
                    "keybinding.resolve",
                    category="keybinding",
                    key=key,
                    view=view_id.value,
                    action=action.value,
                )
                return action
        return ACTION_NONE

    def bind(self, key: str, view_id: ViewId, action: Action, *, emit: bool = True) -> None:
        """Bind ``key`` to ``action`` in ``view_id`` only.

        Binding ``ACTION_NONE`` masks any binding for the key in outer views.
        """
        table = self._table(view_id)
        table[key] = action
        if emit:
            emit_debug_event(
                "keybinding.register",
                category="keybinding",
                source="override",
                key=key,
                action=action.value,
                view=view_id.value,
            )

    def remove_binding(self, view_id: ViewId, key: str) -> bool:
        """Remove the binding for ``key`` in ``view_id``; return True if one existed."""
        table = self._table(view_id)
        removed = table.pop(key, None) is not None
        if removed:
            emit_debug_event("keybinding.remove", category="keybinding", key=key, view=view_id.value)
        return removed

    def keys_for_action(self, action: Action, view_id: ViewId) -> list[str]:
        """Keys bound to ``action`` directly in ``view_id``, in binding order."""
        return [key for key, bound in self._table(view_id).items() if bound == action]

    def bindings_for_view(self, view_id: ViewId) -> dict[str, Action]:
        return dict(self._table(view_id))

    def copy(self) -> KeyBindingManager:
        return KeyBindingManager(self._bindings)
