"""Compile filter queries into predicates over entities."""

from __future__ import annotations

import fnmatch
import operator
import re
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any, NamedTuple

from refview.core.debug_events import emit_debug_event
from refview.filtering.errors import FilterError, FilterErrorKind, SourcePos
from refview.filtering.expressions import (
    QUERY_DATE_FORMAT,
    QUERY_DATE_TIME_FORMAT,
    Comparison,
    DateLiteral,
    ErrorExpression,
    Expression,
    GlobLiteral,
    Identifier,
    LogicalExpression,
    NotExpression,
    NumberLiteral,
    Operand,
    RegexLiteral,
    StringLiteral,
)
from refview.filtering.fields import FieldDescriptor, FieldType
from refview.filtering.parser import parse_query
from refview.filtering.scanner import ORDERING_TOKENS, TokenType

Predicate = Callable[[Any], bool]

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_TIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")

_PATTERN_OPERATORS: dict[TokenType, FieldType] = {
    TokenType.CMP_GLOB: FieldType.GLOB,
    TokenType.CMP_REGEXP: FieldType.REGEX,
}

_VALUE_OPERATORS: dict[TokenType, Callable[[Any, Any], bool]] = {
    TokenType.CMP_EQ: operator.eq,
    TokenType.CMP_NE: operator.ne,
    TokenType.CMP_GT: operator.gt,
    TokenType.CMP_GE: operator.ge,
    TokenType.CMP_LT: operator.lt,
    TokenType.CMP_LE: operator.le,
}


class CompiledFilter(NamedTuple):
    """Result of compiling a query.

    ``predicate`` is None whenever ``errors`` is non-empty.
    """

    predicate: Predicate | None
    errors: list[FilterError]

    @property
    def ok(self) -> bool:
        return not self.errors


def accept_all(entity: Any) -> bool:
    return True


def compile_filter(query: str, descriptor: FieldDescriptor) -> CompiledFilter:
    """Compile ``query`` against the fields exposed by ``descriptor``.

    All syntax, unknown field and type errors are collected and returned
    together, ordered by position in the query. An empty query accepts every
    entity.
    """
    expression, errors = parse_query(query)

    if expression is None and not errors:
        emit_debug_event("filter.compile", category="filter", query=query, errors=0)
        return CompiledFilter(accept_all, [])

    checker = _TypeChecker(descriptor)
    if expression is not None:
        expression = checker.check(expression)
    errors = sorted(errors + checker.errors, key=lambda error: (error.line, error.column))

    emit_debug_event("filter.compile", category="filter", query=query, errors=len(errors))
    if errors or expression is None:
        return CompiledFilter(None, errors)

    return CompiledFilter(_generate(expression, descriptor), [])


class _TypeChecker:
    """Validates field references and operand types, refining literals."""

    def __init__(self, descriptor: FieldDescriptor) -> None:
        self.descriptor = descriptor
        self.errors: list[FilterError] = []

    def _error(self, kind: FilterErrorKind, pos: SourcePos, message: str) -> None:
        self.errors.append(FilterError(kind, message, pos))

    def check(self, expression: Expression) -> Expression:
        if isinstance(expression, LogicalExpression):
            return replace(expression, operands=tuple(self.check(operand) for operand in expression.operands))
        if isinstance(expression, NotExpression):
            return replace(expression, operand=self.check(expression.operand))
        if isinstance(expression, Comparison):
            return self._check_comparison(expression)
        return expression

    def operand_type(self, operand: Operand) -> FieldType | None:
        if isinstance(operand, Identifier):
            field_type, exists = self.descriptor.field_type(operand.name)
            return field_type if exists else None
        if isinstance(operand, StringLiteral):
            return FieldType.STRING
        if isinstance(operand, NumberLiteral):
            return FieldType.NUMBER
        if isinstance(operand, DateLiteral):
            return FieldType.DATE
        if isinstance(operand, GlobLiteral):
            return FieldType.GLOB
        return FieldType.REGEX

    def _check_comparison(self, comparison: Comparison) -> Comparison:
        unknown = False
        for operand in (comparison.lhs, comparison.rhs):
            if isinstance(operand, Identifier) and self.operand_type(operand) is None:
                self._error(FilterErrorKind.UNKNOWN_FIELD, operand.pos, f"Unknown field: {operand.name}")
                unknown = True
        if unknown:
            return comparison

        if comparison.op in _PATTERN_OPERATORS:
            return self._check_pattern_comparison(comparison)

        converted = self._convert_dates(comparison)
        if converted is None:
            return comparison
        comparison = converted

        lhs_type = self.operand_type(comparison.lhs)
        rhs_type = self.operand_type(comparison.rhs)
        if lhs_type != rhs_type:
            self._error(
                FilterErrorKind.TYPE_MISMATCH,
                comparison.pos,
                f"Attempting to compare different types - LHS Type: {lhs_type.value} vs RHS Type: {rhs_type.value}",
            )
        elif comparison.op in ORDERING_TOKENS and not lhs_type.is_ordered:
            self._error(
                FilterErrorKind.TYPE_MISMATCH,
                comparison.pos,
                f"Operator {comparison.op_text} is not valid for type {lhs_type.value}",
            )
        return comparison

    def _convert_dates(self, comparison: Comparison) -> Comparison | None:
        """Turn a string compared with a date field into a DateLiteral.

        Returns None (after recording an error) when the string is not a date.
        """
        for field_side, literal_side in (("lhs", "rhs"), ("rhs", "lhs")):
            field = getattr(comparison, field_side)
            literal = getattr(comparison, literal_side)
            if not (isinstance(field, Identifier) and isinstance(literal, StringLiteral)):
                continue
            if self.operand_type(field) != FieldType.DATE:
                continue

            date = parse_query_date(literal.value)
            if date is None:
                self._error(
                    FilterErrorKind.TYPE_MISMATCH,
                    literal.pos,
                    f"Invalid date: {literal.value}. Format must be either YYYY-MM-DD or YYYY-MM-DD HH:MM:SS",
                )
                return None
            return replace(comparison, **{literal_side: DateLiteral(date, literal.pos)})
        return comparison

    def _check_pattern_comparison(self, comparison: Comparison) -> Comparison:
        pattern_type = _PATTERN_OPERATORS[comparison.op]
        lhs_type = self.operand_type(comparison.lhs)
        rhs = comparison.rhs

        if isinstance(rhs, StringLiteral) and lhs_type == FieldType.STRING:
            try:
                if pattern_type == FieldType.GLOB:
                    rhs = GlobLiteral(rhs.value, re.compile(fnmatch.translate(rhs.value)), rhs.pos)
                else:
                    rhs = RegexLiteral(rhs.value, re.compile(rhs.value), rhs.pos)
            except re.error as exc:
                self._error(
                    FilterErrorKind.TYPE_MISMATCH,
                    rhs.pos,
                    f"Invalid {pattern_type.value.lower()} {rhs.value}: {exc}",
                )
                return comparison
            comparison = replace(comparison, rhs=rhs)

        if lhs_type != FieldType.STRING:
            self._error(
                FilterErrorKind.TYPE_MISMATCH,
                comparison.pos,
                f"Argument on LHS has invalid type: {lhs_type.value}. Allowed types are: String",
            )
        rhs_type = self.operand_type(comparison.rhs)
        if rhs_type != pattern_type:
            self._error(
                FilterErrorKind.TYPE_MISMATCH,
                comparison.pos,
                f"Argument on RHS has invalid type: {rhs_type.value}. Allowed types are: {pattern_type.value}",
            )
        return comparison


def parse_query_date(text: str) -> datetime | None:
    """Parse a query date literal as a naive local time."""
    if _DATE_PATTERN.match(text):
        date_format = QUERY_DATE_FORMAT
    elif _DATE_TIME_PATTERN.match(text):
        date_format = QUERY_DATE_TIME_FORMAT
    else:
        return None
    try:
        return datetime.strptime(text, date_format)
    except ValueError:
        return None


def _align_dates(lhs: datetime, rhs: datetime) -> tuple[datetime, datetime]:
    # Query dates are naive local times; entity dates may carry a timezone.
    if (lhs.tzinfo is None) != (rhs.tzinfo is None):
        if lhs.tzinfo is None:
            lhs = lhs.astimezone()
        else:
            rhs = rhs.astimezone()
    return lhs, rhs


def _value_getter(operand: Operand, descriptor: FieldDescriptor) -> Callable[[Any], Any]:
    if isinstance(operand, Identifier):
        name = operand.name
        return lambda entity: descriptor.field_value(entity, name)
    if isinstance(operand, (GlobLiteral, RegexLiteral)):
        value: Any = operand.regex
    else:
        value = operand.value
    return lambda entity: value


def _comparator(comparison: Comparison, field_type: FieldType) -> Callable[[Any, Any], bool]:
    if comparison.op == TokenType.CMP_GLOB:
        return lambda value, pattern: pattern.match(value) is not None
    if comparison.op == TokenType.CMP_REGEXP:
        return lambda value, pattern: pattern.search(value) is not None

    compare = _VALUE_OPERATORS[comparison.op]
    if field_type == FieldType.NUMBER:
        return lambda lhs, rhs: compare(float(lhs), float(rhs))
    if field_type == FieldType.DATE:
        return lambda lhs, rhs: compare(*_align_dates(lhs, rhs))
    return compare


def _generate(expression: Expression, descriptor: FieldDescriptor) -> Predicate:
    if isinstance(expression, LogicalExpression):
        operands = tuple(_generate(operand, descriptor) for operand in expression.operands)
        if expression.op == TokenType.AND:
            return lambda entity: all(operand(entity) for operand in operands)
        return lambda entity: any(operand(entity) for operand in operands)

    if isinstance(expression, NotExpression):
        operand = _generate(expression.operand, descriptor)
        return lambda entity: not operand(entity)

    if isinstance(expression, ErrorExpression):
        raise ValueError("Cannot generate a filter from an expression with syntax errors")

    checker = _TypeChecker(descriptor)
    field_type = checker.operand_type(expression.lhs)
    compare = _comparator(expression, field_type)
    lhs_value = _value_getter(expression.lhs, descriptor)
    rhs_value = _value_getter(expression.rhs, descriptor)
    return lambda entity: compare(lhs_value(entity), rhs_value(entity))
