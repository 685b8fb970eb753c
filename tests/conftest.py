"""Pytest fixtures shared by refview tests."""

from __future__ import annotations

import pytest

from refview.core.debug_events import clear_debug_events, set_debug_events_enabled
from refview.core.keymap import reset_keymap
from refview.filtering import Field, FieldTable, FieldType


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Ensure the process-wide keymap and debug history do not leak between tests."""
    reset_keymap()
    clear_debug_events()
    set_debug_events_enabled(True)
    yield
    reset_keymap()
    clear_debug_events()


@pytest.fixture
def name_fields() -> FieldTable:
    """Descriptor with a single string field read from dict entities."""
    return FieldTable({"name": Field(FieldType.STRING, lambda entity: entity["name"])})


@pytest.fixture
def mixed_fields() -> FieldTable:
    return FieldTable(
        {
            "name": Field(FieldType.STRING, lambda entity: entity["name"]),
            "size": Field(FieldType.NUMBER, lambda entity: entity["size"]),
            "created": Field(FieldType.DATE, lambda entity: entity["created"]),
        }
    )
