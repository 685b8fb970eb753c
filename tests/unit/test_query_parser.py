"""Tests for filter query parsing and syntax error recovery."""

from refview.filtering.errors import FilterErrorKind
from refview.filtering.expressions import Comparison, Identifier, NumberLiteral, StringLiteral
from refview.filtering.parser import MAX_NESTING_DEPTH, parse_query


def _parsed(query: str) -> str:
    expression, errors = parse_query(query)
    assert errors == []
    return str(expression)


def test_empty_query() -> None:
    assert parse_query("") == (None, [])
    assert parse_query("   ") == (None, [])


def test_comparison_operands() -> None:
    expression, errors = parse_query('name = "main"')
    assert errors == []
    assert isinstance(expression, Comparison)
    assert isinstance(expression.lhs, Identifier)
    assert isinstance(expression.rhs, StringLiteral)
    assert expression.rhs.value == "main"


def test_number_literal() -> None:
    expression, _ = parse_query("parentCount >= 2")
    assert isinstance(expression.rhs, NumberLiteral)
    assert expression.rhs.value == 2.0


def test_and_binds_tighter_than_or() -> None:
    assert _parsed("a = 1 OR b = 2 AND c = 3") == "(a = 1 OR (b = 2 AND c = 3))"


def test_chains_flatten_into_one_node() -> None:
    assert _parsed("a = 1 AND b = 2 AND c = 3") == "(a = 1 AND b = 2 AND c = 3)"
    assert _parsed("a = 1 OR b = 2 OR c = 3") == "(a = 1 OR b = 2 OR c = 3)"


def test_parentheses_override_precedence() -> None:
    assert _parsed("(a = 1 OR b = 2) AND c = 3") == "((a = 1 OR b = 2) AND c = 3)"


def test_not_binds_tighter_than_and() -> None:
    assert _parsed("NOT a = 1 AND b = 2") == "((NOT a = 1) AND b = 2)"
    assert _parsed("NOT NOT a = 1") == "(NOT (NOT a = 1))"


def test_keyword_operators_rendered_upper_case() -> None:
    assert _parsed('name glob "feat*"') == 'name GLOB "feat*"'


def test_missing_operator_between_comparisons() -> None:
    _, errors = parse_query("a = 1 b = 2")
    assert len(errors) == 1
    assert errors[0].kind == FilterErrorKind.SYNTAX
    assert errors[0].message == "Expected operator but found: b"


def test_missing_comparison_operator() -> None:
    _, errors = parse_query("name main")
    assert [e.message for e in errors] == ["Expected comparison operator but found: main"]
    assert str(errors[0]) == "1:6: Expected comparison operator but found: main"


def test_missing_close_paren() -> None:
    _, errors = parse_query("(a = 1")
    assert [e.message for e in errors] == ["Expected ')' but found: EOF"]


def test_missing_operand() -> None:
    _, errors = parse_query("name =")
    assert [e.message for e in errors] == ["Expected Identifier, String or Number but found: EOF"]


def test_invalid_token_error_is_appended() -> None:
    _, errors = parse_query('name = "main')
    assert len(errors) == 1
    assert errors[0].message == 'Expected Identifier, String or Number but found: "main: Unterminated string'


def test_recovers_to_report_independent_errors() -> None:
    _, errors = parse_query("name main AND id = OR summary")
    assert [e.message for e in errors] == [
        "Expected comparison operator but found: main",
        "Expected Identifier, String or Number but found: OR",
        "Expected comparison operator but found: EOF",
    ]


def test_text_after_stray_token_is_still_parsed() -> None:
    expression, errors = parse_query('name = "a" name = "b" AND zz = 1')
    assert [e.message for e in errors] == ["Expected operator but found: name"]
    assert str(expression) == '(name = "a" AND zz = 1)'


def test_nesting_limit_reported_once() -> None:
    depth = MAX_NESTING_DEPTH + 1
    query = "(" * depth + 'name = "a"' + ")" * depth
    expression, errors = parse_query(query)
    assert [(e.kind, e.message) for e in errors] == [
        (FilterErrorKind.SYNTAX, f"Expression nested deeper than {MAX_NESTING_DEPTH} levels")
    ]
    assert errors[0].column == depth
    assert expression is not None


def test_nesting_at_limit_is_accepted() -> None:
    query = "(" * MAX_NESTING_DEPTH + 'name = "a"' + ")" * MAX_NESTING_DEPTH
    assert _parsed(query) == 'name = "a"'


def test_repeated_not_is_bounded() -> None:
    _, errors = parse_query("NOT " * 1200 + 'name = "a"')
    assert len(errors) == 1
    assert errors[0].message.startswith("Expression nested deeper than")


def test_long_flat_chain() -> None:
    expression, errors = parse_query(" AND ".join(['name = "a"'] * 1500))
    assert errors == []
    assert len(expression.operands) == 1500
