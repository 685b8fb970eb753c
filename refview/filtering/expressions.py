"""Expression tree produced by the query parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from refview.filtering.errors import SourcePos
from refview.filtering.scanner import TokenType

QUERY_DATE_FORMAT = "%Y-%m-%d"
QUERY_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Identifier:
    """Reference to a field by name."""

    name: str
    pos: SourcePos

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StringLiteral:
    value: str
    pos: SourcePos

    def __str__(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


@dataclass(frozen=True)
class NumberLiteral:
    value: float
    text: str
    pos: SourcePos

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class DateLiteral:
    value: datetime
    pos: SourcePos

    def __str__(self) -> str:
        return self.value.strftime(QUERY_DATE_TIME_FORMAT)


@dataclass(frozen=True)
class GlobLiteral:
    pattern: str
    regex: re.Pattern[str]
    pos: SourcePos

    def __str__(self) -> str:
        return f"Glob{{{self.pattern}}}"


@dataclass(frozen=True)
class RegexLiteral:
    pattern: str
    regex: re.Pattern[str]
    pos: SourcePos

    def __str__(self) -> str:
        return f"Regex{{{self.pattern}}}"


Operand = Identifier | StringLiteral | NumberLiteral | DateLiteral | GlobLiteral | RegexLiteral


@dataclass(frozen=True)
class Comparison:
    op: TokenType
    op_text: str
    lhs: Operand
    rhs: Operand
    pos: SourcePos

    def __str__(self) -> str:
        return f"{self.lhs} {self.op_text.upper()} {self.rhs}"


@dataclass(frozen=True)
class LogicalExpression:
    """AND / OR over a chain of boolean sub-expressions.

    ``a AND b AND c`` is a single node with three operands.
    """

    op: TokenType
    operands: tuple[Expression, ...]
    pos: SourcePos

    def __str__(self) -> str:
        joined = f" {self.op.name} ".join(str(operand) for operand in self.operands)
        return f"({joined})"


@dataclass(frozen=True)
class NotExpression:
    operand: Expression
    pos: SourcePos

    def __str__(self) -> str:
        return f"(NOT {self.operand})"


@dataclass(frozen=True)
class ErrorExpression:
    """Placeholder for input that failed to parse."""

    pos: SourcePos

    def __str__(self) -> str:
        return "<error>"


Expression = Comparison | LogicalExpression | NotExpression | ErrorExpression
