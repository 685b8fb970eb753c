"""Core keymap definitions (UI-agnostic)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from refview.core.actions import Action
from refview.core.debug_events import emit_debug_event
from refview.core.dispatcher import KeyBindingManager
from refview.core.views import ViewId

KEY_DISPLAY_OVERRIDES: dict[str, str] = {
    "question_mark": "?",
    "slash": "/",
    "space": "<space>",
    "escape": "<esc>",
    "enter": "<enter>",
    "delete": "<del>",
    "backspace": "<backspace>",
    "tab": "<tab>",
    "shift+tab": "<s-tab>",
    "left": "<left>",
    "right": "<right>",
    "up": "<up>",
    "down": "<down>",
    "home": "<home>",
    "end": "<end>",
    "pageup": "<pgup>",
    "pagedown": "<pgdn>",
}

KEY_ALIASES: dict[str, str] = {
    "return": "enter",
    "ret": "enter",
    "cr": "enter",
    "esc": "escape",
    "del": "delete",
    "bs": "backspace",
    "pgup": "pageup",
    "pgdn": "pagedown",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
}

MODIFIER_ALIASES: dict[str, str] = {
    "c": "ctrl",
    "control": "ctrl",
    "s": "shift",
    "m": "alt",
    "a": "alt",
    "meta": "alt",
}


def format_key(key: str) -> str:
    """Format a key name for display in UI hints."""
    if key in KEY_DISPLAY_OVERRIDES:
        return KEY_DISPLAY_OVERRIDES[key]
    if key.startswith("ctrl+"):
        return f"^{key.split('+', 1)[1]}"
    return key


def normalize_key(key: str) -> str:
    """Normalize a user supplied key name to the Textual naming scheme.

    Accepts Textual names (``"up"``, ``"ctrl+r"``), bracketed names as used in
    config files (``"<Up>"``, ``"<C-r>"``, ``"<S-Tab>"``) and common aliases
    (``"return"``, ``"esc"``). Single characters keep their case.
    """
    raw = key.strip()
    if len(raw) > 2 and raw.startswith("<") and raw.endswith(">"):
        raw = raw[1:-1]
    if len(raw) <= 1:
        return raw

    separator = "+" if "+" in raw[:-1] else "-" if "-" in raw[:-1] else None
    if separator is None:
        name = raw.lower()
        return KEY_ALIASES.get(name, name)

    *modifiers, name = raw.split(separator)
    parts = [MODIFIER_ALIASES.get(mod.lower(), mod.lower()) for mod in modifiers if mod]
    if len(name) > 1:
        name = name.lower()
        name = KEY_ALIASES.get(name, name)
    parts.append(name)
    return "+".join(parts)


@dataclass
class ActionKeyDef:
    """Definition of a default keybinding."""

    key: str  # Textual key name
    action: Action
    view: ViewId


class KeymapProvider(ABC):
    """Abstract base class for default keymap providers."""

    @abstractmethod
    def get_action_keys(self) -> list[ActionKeyDef]:
        """Get all default key definitions."""
        raise NotImplementedError


class DefaultKeymapProvider(KeymapProvider):
    """Default keymap with hardcoded bindings."""

    def __init__(self) -> None:
        self._action_keys_cache: list[ActionKeyDef] | None = None

    def get_action_keys(self) -> list[ActionKeyDef]:
        if self._action_keys_cache is None:
            self._action_keys_cache = self._build_action_keys()
        return list(self._action_keys_cache)

    def _build_action_keys(self) -> list[ActionKeyDef]:
        return [
            # History
            ActionKeyDef("tab", Action.HISTORY_NEXT_VIEW, ViewId.HISTORY),
            # Refs
            ActionKeyDef("up", Action.REF_PREV, ViewId.REF),
            ActionKeyDef("down", Action.REF_NEXT, ViewId.REF),
            ActionKeyDef("right", Action.REF_SCROLL_RIGHT, ViewId.REF),
            ActionKeyDef("left", Action.REF_SCROLL_LEFT, ViewId.REF),
            ActionKeyDef("enter", Action.REF_SELECT, ViewId.REF),
            # Commits
            ActionKeyDef("up", Action.COMMIT_PREV, ViewId.COMMIT),
            ActionKeyDef("down", Action.COMMIT_NEXT, ViewId.COMMIT),
            ActionKeyDef("right", Action.COMMIT_SCROLL_RIGHT, ViewId.COMMIT),
            ActionKeyDef("left", Action.COMMIT_SCROLL_LEFT, ViewId.COMMIT),
            # Diff
            ActionKeyDef("up", Action.DIFF_PREV_LINE, ViewId.DIFF),
            ActionKeyDef("down", Action.DIFF_NEXT_LINE, ViewId.DIFF),
            ActionKeyDef("right", Action.DIFF_SCROLL_RIGHT, ViewId.DIFF),
            ActionKeyDef("left", Action.DIFF_SCROLL_LEFT, ViewId.DIFF),
        ]


def build_keymap(provider: KeymapProvider | None = None) -> KeyBindingManager:
    """Create a binding manager seeded with the provider's defaults."""
    provider = provider or DefaultKeymapProvider()
    manager = KeyBindingManager()
    for ak in provider.get_action_keys():
        emit_debug_event(
            "keybinding.register",
            category="keybinding",
            source="default",
            provider=provider.__class__.__name__,
            key=ak.key,
            action=ak.action.value,
            view=ak.view.value,
        )
        manager.bind(ak.key, ak.view, ak.action, emit=False)
    manager.validate()
    return manager


# Global keymap instance
_keymap: KeyBindingManager | None = None


def get_keymap() -> KeyBindingManager:
    """Get the process-wide binding manager, creating the defaults on first use."""
    global _keymap
    if _keymap is None:
        _keymap = build_keymap()
    return _keymap


def set_keymap(manager: KeyBindingManager) -> None:
    """Replace the process-wide binding manager (for testing or custom keymaps)."""
    global _keymap
    manager.validate()
    _keymap = manager


def reset_keymap() -> None:
    """Reset to the default keymap on next access."""
    global _keymap
    _keymap = None
