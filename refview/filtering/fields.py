"""Field descriptors: per entity kind field names, types and value extraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldType(Enum):
    """Declared type of a field or literal."""

    STRING = "String"
    NUMBER = "Number"
    DATE = "Date"
    # Literal-only types produced for GLOB/REGEXP comparisons
    GLOB = "Glob"
    REGEX = "Regex"

    @property
    def is_ordered(self) -> bool:
        return self in ORDERED_FIELD_TYPES


ORDERED_FIELD_TYPES = frozenset({FieldType.STRING, FieldType.NUMBER, FieldType.DATE})


class FieldDescriptor(ABC):
    """Capability exposing the fields of one entity kind.

    Field names are case-insensitive.
    """

    @abstractmethod
    def field_type(self, name: str) -> tuple[FieldType | None, bool]:
        """Return ``(type, exists)`` for ``name``."""
        raise NotImplementedError

    @abstractmethod
    def field_value(self, entity: Any, name: str) -> Any:
        """Extract the value of a registered field from ``entity``."""
        raise NotImplementedError


@dataclass(frozen=True)
class Field:
    field_type: FieldType
    value: Callable[[Any], Any]


class FieldTable(FieldDescriptor):
    """Field descriptor backed by a name -> Field mapping."""

    def __init__(self, fields: Mapping[str, Field] | None = None) -> None:
        self._fields: dict[str, Field] = {}
        for name, field in (fields or {}).items():
            self.register(name, field.field_type, field.value)

    def register(self, name: str, field_type: FieldType, value: Callable[[Any], Any]) -> None:
        """Register a field. Re-registering a name must keep its type."""
        key = name.lower()
        existing = self._fields.get(key)
        if existing is not None and existing.field_type != field_type:
            raise ValueError(
                f"Field {name!r} already registered as {existing.field_type.value}, not {field_type.value}"
            )
        self._fields[key] = Field(field_type, value)

    def field_type(self, name: str) -> tuple[FieldType | None, bool]:
        field = self._fields.get(name.lower())
        if field is None:
            return None, False
        return field.field_type, True

    def field_value(self, entity: Any, name: str) -> Any:
        return self._fields[name.lower()].value(entity)

    def field_names(self) -> list[str]:
        return sorted(self._fields)
