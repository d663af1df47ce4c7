"""Token kinds and token representation for the Elm lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simplify.source import Range


class TokenKind(Enum):
    # Reserved words
    MODULE = auto()
    PORT = auto()
    WHERE = auto()
    EXPOSING = auto()
    IMPORT = auto()
    AS = auto()
    TYPE = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    CASE = auto()
    OF = auto()
    LET = auto()
    IN = auto()

    # Literals
    INT_LIT = auto()
    FLOAT_LIT = auto()
    STRING_LIT = auto()
    TRIPLE_STRING_LIT = auto()
    CHAR_LIT = auto()

    # Identifiers, possibly qualified
    LOWER_NAME = auto()
    UPPER_NAME = auto()
    DOT_FIELD = auto()
    UNDERSCORE = auto()

    # Any symbolic operator, and prefix minus
    OPERATOR = auto()
    NEGATE = auto()

    # Brackets and separators
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()
    BACKSLASH = auto()

    # Operator-shaped symbols with a fixed meaning
    EQUALS = auto()
    COLON = auto()
    ARROW = auto()
    PIPE = auto()
    DOT_DOT = auto()

    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    range: Range


_RESERVED_WORDS = (
    TokenKind.MODULE, TokenKind.PORT, TokenKind.WHERE, TokenKind.EXPOSING,
    TokenKind.IMPORT, TokenKind.AS, TokenKind.TYPE, TokenKind.IF,
    TokenKind.THEN, TokenKind.ELSE, TokenKind.CASE, TokenKind.OF,
    TokenKind.LET, TokenKind.IN,
)

# `alias` and `infix` are contextual and lex as plain names.
KEYWORDS: dict[str, TokenKind] = {kind.name.lower(): kind for kind in _RESERVED_WORDS}

PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ",": TokenKind.COMMA,
    "\\": TokenKind.BACKSLASH,
}

# Characters that may form a symbolic operator.
OPERATOR_CHARS = frozenset("+-/*=.<>:&|^?%!")

RESERVED_SYMBOLS: dict[str, TokenKind] = {
    "=": TokenKind.EQUALS,
    ":": TokenKind.COLON,
    "->": TokenKind.ARROW,
    "|": TokenKind.PIPE,
    "..": TokenKind.DOT_DOT,
}
