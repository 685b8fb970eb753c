"""Structured debug events for keybinding and filter activity."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

logger = logging.getLogger("refview.debug")

MAX_DEBUG_EVENTS = 500


@dataclass
class DebugEvent:
    """A single recorded debug event."""

    name: str
    category: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def iso(self) -> str:
        return self.timestamp.isoformat(timespec="milliseconds")


_history: deque[DebugEvent] = deque(maxlen=MAX_DEBUG_EVENTS)
_enabled: bool = True


def format_debug_data(data: dict[str, Any]) -> str:
    """Format event data as space separated key=value pairs."""
    parts = []
    for key, value in data.items():
        if value is None:
            continue
        parts.append(f"{key}={value!r}" if isinstance(value, str) else f"{key}={value}")
    return " ".join(parts)


def emit_debug_event(name: str, *, category: str = "general", **data: Any) -> None:
    """Record a debug event and forward it to the ``refview.debug`` logger."""
    if not _enabled:
        return
    event = DebugEvent(name=name, category=category, data=data)
    _history.append(event)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s [%s] %s", name, category, format_debug_data(data))


def set_debug_events_enabled(enabled: bool) -> None:
    global _enabled
    _enabled = bool(enabled)


def debug_events_enabled() -> bool:
    return _enabled


def get_debug_event_history(category: str | None = None) -> list[DebugEvent]:
    """Return recorded events, oldest first, optionally for one category."""
    if category is None:
        return list(_history)
    return [event for event in _history if event.category == category]


def clear_debug_events() -> None:
    _history.clear()
