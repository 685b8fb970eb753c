"""Filter compile errors, returned as data rather than raised."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FilterErrorKind(str, Enum):
    SYNTAX = "syntax"
    UNKNOWN_FIELD = "unknown_field"
    TYPE_MISMATCH = "type_mismatch"


@dataclass(frozen=True)
class SourcePos:
    """1-based line/column position in a query."""

    line: int = 1
    col: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


@dataclass(frozen=True)
class FilterError:
    """A single problem found while compiling a query."""

    kind: FilterErrorKind
    message: str
    pos: SourcePos = SourcePos()

    @property
    def line(self) -> int:
        return self.pos.line

    @property
    def column(self) -> int:
        return self.pos.col

    def __str__(self) -> str:
        return f"{self.pos}: {self.message}"


class FilterCompileError(Exception):
    """Raised when a filter adapter is built from a query that does not compile."""

    def __init__(self, query: str, errors: list[FilterError]) -> None:
        self.query = query
        self.errors = list(errors)
        summary = "; ".join(str(error) for error in self.errors)
        super().__init__(f"Invalid filter {query!r}: {summary}")
