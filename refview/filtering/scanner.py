"""Tokenizer for the filter query language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from refview.filtering.errors import SourcePos


class TokenType(Enum):
    INVALID = auto()
    EOF = auto()

    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    AND = auto()
    OR = auto()
    NOT = auto()

    CMP_EQ = auto()
    CMP_NE = auto()
    CMP_GT = auto()
    CMP_GE = auto()
    CMP_LT = auto()
    CMP_LE = auto()
    CMP_GLOB = auto()
    CMP_REGEXP = auto()

    LPAREN = auto()
    RPAREN = auto()


KEYWORDS: dict[str, TokenType] = {
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "NOT": TokenType.NOT,
    "GLOB": TokenType.CMP_GLOB,
    "REGEXP": TokenType.CMP_REGEXP,
}

COMPARISON_TOKENS = frozenset(
    {
        TokenType.CMP_EQ,
        TokenType.CMP_NE,
        TokenType.CMP_GT,
        TokenType.CMP_GE,
        TokenType.CMP_LT,
        TokenType.CMP_LE,
        TokenType.CMP_GLOB,
        TokenType.CMP_REGEXP,
    }
)

ORDERING_TOKENS = frozenset({TokenType.CMP_GT, TokenType.CMP_GE, TokenType.CMP_LT, TokenType.CMP_LE})

_ESCAPES = {"n": "\n", "t": "\t"}


def _is_digit(char: str) -> bool:
    # str.isdigit also accepts superscripts and other non-decimal digits
    return char.isascii() and char.isdigit()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    pos: SourcePos
    error: str | None = None

    def display(self) -> str:
        return "EOF" if self.type == TokenType.EOF else self.value


class QueryScanner:
    """Splits a query into tokens, skipping whitespace.

    Malformed input produces INVALID tokens carrying an error message; the
    scanner never raises.
    """

    def __init__(self, query: str) -> None:
        self._text = query
        self._index = 0
        self._line = 1
        self._col = 1

    def _peek(self, offset: int = 0) -> str:
        index = self._index + offset
        return self._text[index] if index < len(self._text) else ""

    def _advance(self) -> str:
        char = self._text[self._index]
        self._index += 1
        if char == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return char

    def _pos(self) -> SourcePos:
        return SourcePos(self._line, self._col)

    def tokens(self) -> list[Token]:
        """Scan the whole query; the last token is always EOF."""
        result: list[Token] = []
        while True:
            token = self.scan()
            result.append(token)
            if token.type == TokenType.EOF:
                return result

    def scan(self) -> Token:
        while self._peek().isspace():
            self._advance()

        pos = self._pos()
        char = self._peek()

        if not char:
            return Token(TokenType.EOF, "", pos)
        if char.isalpha():
            return self._scan_identifier(pos)
        if char == '"':
            return self._scan_string(pos)
        if char in "-." or _is_digit(char):
            return self._scan_number(pos)

        self._advance()
        if char == "=":
            return Token(TokenType.CMP_EQ, "=", pos)
        if char == "!":
            if self._peek() == "=":
                self._advance()
                return Token(TokenType.CMP_NE, "!=", pos)
            return Token(TokenType.INVALID, "!", pos, "Expected '=' character after '!'")
        if char in "<>":
            if self._peek() == "=":
                self._advance()
                token_type = TokenType.CMP_GE if char == ">" else TokenType.CMP_LE
                return Token(token_type, f"{char}=", pos)
            token_type = TokenType.CMP_GT if char == ">" else TokenType.CMP_LT
            return Token(token_type, char, pos)
        if char == "(":
            return Token(TokenType.LPAREN, "(", pos)
        if char == ")":
            return Token(TokenType.RPAREN, ")", pos)

        return Token(TokenType.INVALID, char, pos, f"Unexpected character {char}")

    def _scan_identifier(self, pos: SourcePos) -> Token:
        chars = []
        while self._peek() and self._peek().isalnum():
            chars.append(self._advance())
        value = "".join(chars)
        return Token(KEYWORDS.get(value.upper(), TokenType.IDENTIFIER), value, pos)

    def _scan_number(self, pos: SourcePos) -> Token:
        chars = [self._advance()]
        dot_seen = chars[0] == "."
        while True:
            char = self._peek()
            if char == "-":
                chars.append(self._advance())
                return Token(TokenType.INVALID, "".join(chars), pos, "Unexpected '-' character in number")
            if char == ".":
                chars.append(self._advance())
                if dot_seen:
                    return Token(TokenType.INVALID, "".join(chars), pos, "Unexpected '.' character in number")
                dot_seen = True
                continue
            if not _is_digit(char):
                break
            chars.append(self._advance())

        value = "".join(chars)
        if not any(_is_digit(c) for c in value):
            return Token(TokenType.INVALID, value, pos, "Invalid number")
        return Token(TokenType.NUMBER, value, pos)

    def _scan_string(self, pos: SourcePos) -> Token:
        self._advance()  # opening quote
        chars: list[str] = []
        raw = ['"']
        escape = False
        while self._peek():
            char = self._advance()
            raw.append(char)
            if escape:
                chars.append(_ESCAPES.get(char, char))
                escape = False
            elif char == "\\":
                escape = True
            elif char == '"':
                return Token(TokenType.STRING, "".join(chars), pos)
            else:
                chars.append(char)
        return Token(TokenType.INVALID, "".join(raw), pos, "Unterminated string")
