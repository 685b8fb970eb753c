"""Recursive-descent parser for filter queries.

Grammar::

    query      := <empty> | or_expr EOF
    or_expr    := and_expr ("OR" and_expr)*
    and_expr   := not_expr ("AND" not_expr)*
    not_expr   := "NOT" not_expr | primary
    primary    := "(" or_expr ")" | comparison
    comparison := operand cmp_op operand
    operand    := identifier | string | number

On a syntax error the parser records it, skips ahead to the next AND, OR,
closing parenthesis or end of input and carries on, so a single pass reports
every independent problem. Parentheses and NOT may nest at most
``MAX_NESTING_DEPTH`` levels.
"""

from __future__ import annotations

from collections.abc import Callable

from refview.filtering.errors import FilterError, FilterErrorKind
from refview.filtering.expressions import (
    Comparison,
    ErrorExpression,
    Expression,
    Identifier,
    LogicalExpression,
    NotExpression,
    NumberLiteral,
    Operand,
    StringLiteral,
)
from refview.filtering.scanner import COMPARISON_TOKENS, QueryScanner, Token, TokenType

_SYNC_TOKENS = frozenset({TokenType.AND, TokenType.OR, TokenType.RPAREN, TokenType.EOF})

MAX_NESTING_DEPTH = 50


class QueryParser:
    def __init__(self, query: str) -> None:
        self._tokens = QueryScanner(query).tokens()
        self._index = 0
        self._depth = 0
        self._abandoned = False
        self.errors: list[FilterError] = []

    def parse(self) -> Expression | None:
        """Parse the query; returns None for an empty query."""
        if self._peek().type == TokenType.EOF:
            return None

        expression = self._parse_or()

        # Sub-trees parsed after a stray token are kept so they are still
        # type-checked; the query is invalid either way.
        recovered: list[Expression] = []
        first_operator: Token | None = None
        while self._peek().type != TokenType.EOF:
            token = self._advance()
            self._error(token, f"Expected operator but found: {token.display()}")
            self._synchronize()
            if self._peek().type in (TokenType.AND, TokenType.OR):
                operator = self._advance()
                first_operator = first_operator or operator
                recovered.append(self._parse_or())

        if first_operator is not None:
            expression = LogicalExpression(first_operator.type, (expression, *recovered), first_operator.pos)
        return expression

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.type != TokenType.EOF:
            self._index += 1
        return token

    def _error(self, token: Token, message: str) -> None:
        if self._abandoned:
            return
        if token.error:
            message = f"{message}: {token.error}"
        self.errors.append(FilterError(FilterErrorKind.SYNTAX, message, token.pos))

    def _synchronize(self) -> None:
        while self._peek().type not in _SYNC_TOKENS:
            self._advance()

    def _enter(self, token: Token) -> bool:
        """Descend one nesting level; on overflow report once and skip to EOF."""
        if self._depth >= MAX_NESTING_DEPTH:
            self._error(token, f"Expression nested deeper than {MAX_NESTING_DEPTH} levels")
            self._abandoned = True
            self._index = len(self._tokens) - 1
            return False
        self._depth += 1
        return True

    def _parse_chain(self, operator_type: TokenType, parse_next: Callable[[], Expression]) -> Expression:
        operands = [parse_next()]
        first_operator: Token | None = None
        while self._peek().type == operator_type:
            operator = self._advance()
            first_operator = first_operator or operator
            operands.append(parse_next())
        if first_operator is None:
            return operands[0]
        return LogicalExpression(operator_type, tuple(operands), first_operator.pos)

    def _parse_or(self) -> Expression:
        return self._parse_chain(TokenType.OR, self._parse_and)

    def _parse_and(self) -> Expression:
        return self._parse_chain(TokenType.AND, self._parse_not)

    def _parse_not(self) -> Expression:
        if self._peek().type != TokenType.NOT:
            return self._parse_primary()

        operator = self._advance()
        if not self._enter(operator):
            return ErrorExpression(operator.pos)
        operand = self._parse_not()
        self._depth -= 1
        return NotExpression(operand, operator.pos)

    def _parse_primary(self) -> Expression:
        if self._peek().type != TokenType.LPAREN:
            return self._parse_comparison()

        paren = self._advance()
        if not self._enter(paren):
            return ErrorExpression(paren.pos)
        expression = self._parse_or()
        self._depth -= 1
        token = self._peek()
        if token.type == TokenType.RPAREN:
            self._advance()
        else:
            self._error(token, f"Expected ')' but found: {token.display()}")
        return expression

    def _parse_comparison(self) -> Expression:
        start = self._peek()
        lhs = self._parse_operand()
        if lhs is None:
            self._synchronize()
            return ErrorExpression(start.pos)

        operator = self._peek()
        if operator.type not in COMPARISON_TOKENS:
            self._error(operator, f"Expected comparison operator but found: {operator.display()}")
            self._synchronize()
            return ErrorExpression(start.pos)
        self._advance()

        rhs = self._parse_operand()
        if rhs is None:
            self._synchronize()
            return ErrorExpression(start.pos)

        return Comparison(operator.type, operator.value, lhs, rhs, operator.pos)

    def _parse_operand(self) -> Operand | None:
        token = self._peek()
        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(token.value, token.pos)
        if token.type == TokenType.STRING:
            self._advance()
            return StringLiteral(token.value, token.pos)
        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteral(float(token.value), token.value, token.pos)

        self._error(token, f"Expected Identifier, String or Number but found: {token.display()}")
        if token.type not in _SYNC_TOKENS:
            self._advance()
        return None


def parse_query(query: str) -> tuple[Expression | None, list[FilterError]]:
    """Parse ``query`` into an expression tree and the syntax errors found."""
    parser = QueryParser(query)
    expression = parser.parse()
    return expression, parser.errors
