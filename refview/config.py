"""User key binding overrides.

Overrides arrive either as a settings mapping::

    {"keymap": {"ref": {"<C-r>": "ref_select"}, "diff": {"j": "diff_next_line"}}}

or as config file lines::

    map ref <C-r> ref_select

Both are applied to a KeyBindingManager through ``bind``. Problems are
returned as a list of messages so the caller can report them all at once.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from refview.core.actions import Action, parse_action
from refview.core.debug_events import emit_debug_event
from refview.core.dispatcher import KeyBindingManager
from refview.core.keymap import normalize_key
from refview.core.views import ViewId, parse_view_id

KEYMAP_SETTINGS_KEY = "keymap"


@dataclass(frozen=True)
class KeymapOverride:
    view: ViewId
    key: str
    action: Action


def _build_override(view_name: str, key_name: str, action_name: str) -> KeymapOverride | str:
    view = parse_view_id(view_name)
    if view is None:
        valid = ", ".join(v.value for v in ViewId)
        return f"Invalid view '{view_name}'. Valid views: {valid}"
    key = normalize_key(key_name)
    if not key:
        return "Empty key"
    action = parse_action(action_name)
    if action is None:
        return f"Invalid action '{action_name}'"
    return KeymapOverride(view=view, key=key, action=action)


def _apply(keymap: KeyBindingManager, override: KeymapOverride, source: str) -> None:
    keymap.bind(override.key, override.view, override.action)
    emit_debug_event(
        "config.keymap_override",
        category="config",
        source=source,
        view=override.view.value,
        key=override.key,
        action=override.action.value,
    )


def apply_keymap_settings(keymap: KeyBindingManager, settings: Mapping[str, Any]) -> list[str]:
    """Apply ``settings["keymap"]`` overrides; return problems found."""
    problems: list[str] = []
    keymap_settings = settings.get(KEYMAP_SETTINGS_KEY)
    if keymap_settings is None:
        return problems
    if not isinstance(keymap_settings, Mapping):
        return [f"'{KEYMAP_SETTINGS_KEY}' must be a mapping of view to key bindings"]

    for view_name, bindings in keymap_settings.items():
        if not isinstance(bindings, Mapping):
            problems.append(f"{KEYMAP_SETTINGS_KEY}.{view_name}: expected a mapping of key to action")
            continue
        for key_name, action_name in bindings.items():
            override = _build_override(str(view_name), str(key_name), str(action_name))
            if isinstance(override, str):
                problems.append(f"{KEYMAP_SETTINGS_KEY}.{view_name}.{key_name}: {override}")
                continue
            _apply(keymap, override, source="settings")
    return problems


def parse_map_command(line: str) -> KeymapOverride | str | None:
    """Parse one ``map <view> <key> <action>`` line.

    Returns None for blank and comment lines, a message for invalid lines.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    try:
        words = shlex.split(stripped)
    except ValueError as exc:
        return str(exc)
    if words[0] != "map":
        return f"Unknown command '{words[0]}'"
    if len(words) != 4:
        return "Expected: map <view> <key> <action>"
    return _build_override(words[1], words[2], words[3])


def apply_map_commands(keymap: KeyBindingManager, text: str) -> list[str]:
    """Apply every ``map`` line in ``text``; return problems with line numbers."""
    problems: list[str] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        result = parse_map_command(line)
        if result is None:
            continue
        if isinstance(result, str):
            problems.append(f"line {line_number}: {result}")
            continue
        _apply(keymap, result, source="map")
    return problems
