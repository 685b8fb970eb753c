"""Core, UI-agnostic key binding models and helpers for refview."""

from .actions import ACTION_NONE, Action
from .dispatcher import KeyBindingManager, UnconfiguredViewError
from .keymap import (
    ActionKeyDef,
    DefaultKeymapProvider,
    KeymapProvider,
    build_keymap,
    format_key,
    get_keymap,
    normalize_key,
    reset_keymap,
    set_keymap,
)
from .views import ViewHierarchy, ViewId

__all__ = [
    "ACTION_NONE",
    "Action",
    "ActionKeyDef",
    "DefaultKeymapProvider",
    "KeyBindingManager",
    "KeymapProvider",
    "UnconfiguredViewError",
    "ViewHierarchy",
    "ViewId",
    "build_keymap",
    "format_key",
    "get_keymap",
    "normalize_key",
    "reset_keymap",
    "set_keymap",
]
