"""Entity filters: compiled queries bound to one entity kind."""

from __future__ import annotations

from typing import Any, ClassVar

from refview.filtering.compiler import Predicate, compile_filter
from refview.filtering.errors import FilterCompileError
from refview.filtering.fields import FieldDescriptor


class EntityFilter:
    """Decides visibility of entities of one kind.

    Subclasses set ``descriptor`` and override ``is_structural`` for rows
    that are scaffolding (headers, separators, placeholders); those rows are
    never hidden.
    """

    descriptor: ClassVar[FieldDescriptor]

    def __init__(self, predicate: Predicate, query: str = "") -> None:
        self._predicate = predicate
        self.query = query

    @classmethod
    def create(cls, query: str):
        """Compile ``query`` for this entity kind.

        Raises:
            FilterCompileError: carrying every error found in the query.
        """
        predicate, errors = compile_filter(query, cls.descriptor)
        if errors or predicate is None:
            raise FilterCompileError(query, errors)
        return cls(predicate, query)

    def is_structural(self, entity: Any) -> bool:
        return False

    def matches(self, entity: Any) -> bool:
        if self.is_structural(entity):
            return True
        return self._predicate(entity)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.query!r})"


class FilterStack:
    """Filters applied together; an entity is visible when all of them match."""

    def __init__(self) -> None:
        self._filters: list[EntityFilter] = []

    def push(self, entity_filter: EntityFilter) -> None:
        self._filters.append(entity_filter)

    def pop(self) -> EntityFilter | None:
        """Remove the most recently added filter."""
        return self._filters.pop() if self._filters else None

    def clear(self) -> None:
        self._filters.clear()

    def matches(self, entity: Any) -> bool:
        return all(entity_filter.matches(entity) for entity_filter in self._filters)

    @property
    def queries(self) -> list[str]:
        return [entity_filter.query for entity_filter in self._filters]

    def __len__(self) -> int:
        return len(self._filters)

    def __bool__(self) -> bool:
        return bool(self._filters)
