"""Lexer for Elm source code.

Produces a flat stream of tokens. Layout is not encoded as tokens: every
token carries its range and the parser reads block structure from columns.
"""

from __future__ import annotations

from collections.abc import Callable

from simplify.errors import Diagnostic, Severity, SourceError
from simplify.source import Position, Range
from simplify.tokens import (
    KEYWORDS,
    OPERATOR_CHARS,
    PUNCTUATION,
    RESERVED_SYMBOLS,
    Token,
    TokenKind,
)

# Characters that can start an operand, used to tell negation from subtraction.
_OPERAND_START = frozenset("([{\"'_")
_BEFORE_NEGATION = frozenset("([{,")

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', '"': '"', "'": "'", '\\': '\\'}


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == '_'


class Lexer:
    """Tokenizes Elm source code."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []
        self.diagnostics: list[Diagnostic] = []
        self._start = Position(1, 1)

    def lex(self) -> list[Token]:
        """Tokenize the whole source; raises SourceError if anything failed."""
        while not self._at_end():
            self._start = self._here()
            self._lex_token()
        self._start = self._here()
        self._emit(TokenKind.EOF, "")
        if self.diagnostics:
            raise SourceError(self.diagnostics)
        return self.tokens

    def _lex_token(self) -> None:
        ch = self._peek()
        if ch in ' \r\n':
            self._advance()
        elif ch == '\t':
            self._error("tabs are not allowed; use spaces")
            self._advance()
        elif self._looking_at('--'):
            self._take_while(lambda c: c != '\n')
        elif self._looking_at('{-'):
            self._skip_block_comment()
        elif self._looking_at('"""'):
            self._lex_multiline_string()
        elif ch == '"':
            self._lex_string()
        elif ch == "'":
            self._lex_char()
        elif ch.isdigit():
            self._lex_number()
        elif ch.isalpha():
            self._lex_name()
        elif ch == '_':
            self._lex_underscore()
        elif ch == '.' and self._peek(1).islower():
            self._advance()
            self._emit(TokenKind.DOT_FIELD, self._take_while(_is_word_char))
        elif ch in OPERATOR_CHARS:
            self._lex_operator()
        elif ch in PUNCTUATION:
            self._advance()
            self._emit(PUNCTUATION[ch], ch)
        else:
            self._advance()
            self._error(f"unexpected character: {ch!r}")

    # -- Cursor

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _here(self) -> Position:
        return Position(self.line, self.col)

    def _peek(self, offset: int = 0) -> str:
        """The character ``offset`` ahead, or NUL past the end."""
        idx = self.pos + offset
        return self.source[idx] if idx < len(self.source) else '\0'

    def _looking_at(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def _advance(self, count: int = 1) -> str:
        taken = self.source[self.pos:self.pos + count]
        for ch in taken:
            if ch == '\n':
                self.line += 1
                self.col = 1
            else:
                self.col += 1
        self.pos += len(taken)
        return taken

    def _take_while(self, predicate: Callable[[str], bool]) -> str:
        begin = self.pos
        while not self._at_end() and predicate(self.source[self.pos]):
            self._advance()
        return self.source[begin:self.pos]

    def _emit(self, kind: TokenKind, value: str) -> Token:
        token = Token(kind, value, Range(self._start, self._here()))
        self.tokens.append(token)
        return token

    def _error(self, message: str, at: Position | None = None) -> None:
        """Record an error at ``at``, defaulting to the start of the current token."""
        if at is None:
            at = self._start
        self.diagnostics.append(
            Diagnostic(
                message=message,
                details=[],
                range=Range(at, Position(at.row, at.column + 1)),
                severity=Severity.ERROR,
            )
        )

    # -- Comments

    def _skip_block_comment(self) -> None:
        depth = 0
        while not self._at_end():
            if self._looking_at('{-'):
                depth += 1
                self._advance(2)
            elif self._looking_at('-}'):
                depth -= 1
                self._advance(2)
                if depth == 0:
                    return
            else:
                self._advance()
        self._error("unterminated block comment")

    # -- Strings and characters

    def _lex_multiline_string(self) -> None:
        self._advance(3)
        chunks: list[str] = []
        while not self._at_end():
            if self._looking_at('"""'):
                self._advance(3)
                self._emit(TokenKind.TRIPLE_STRING_LIT, ''.join(chunks))
                return
            chunks.append(self._string_char())
        self._error("unterminated triple-quoted string")

    def _lex_string(self) -> None:
        self._advance()
        chunks: list[str] = []
        while not self._at_end() and self._peek() not in ('"', '\n'):
            chunks.append(self._string_char())
        if self._peek() != '"':
            self._error("unterminated string literal")
            return
        self._advance()
        self._emit(TokenKind.STRING_LIT, ''.join(chunks))

    def _lex_char(self) -> None:
        self._advance()
        if self._at_end():
            self._error("unterminated character literal")
            return
        value = self._string_char()
        if self._peek() == "'":
            self._advance()
        else:
            self._error("unterminated character literal")
        self._emit(TokenKind.CHAR_LIT, value)

    def _string_char(self) -> str:
        """One character of string or char content, decoding escapes."""
        if self._peek() != '\\':
            return self._advance()
        self._advance()
        if self._at_end():
            self._error("unexpected end of escape sequence", self._here())
            return ""
        ch = self._advance()
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if ch == 'u' and self._peek() == '{':
            self._advance()
            digits = self._take_while(lambda c: c != '}')
            self._advance()
            try:
                return chr(int(digits, 16))
            except (ValueError, OverflowError):
                self._error("invalid unicode escape", Position(self.line, self.col - 1))
                return ""
        self._error(f"unknown escape sequence: \\{ch}", Position(self.line, self.col - 1))
        return ch

    # -- Numbers

    def _lex_number(self) -> None:
        begin = self.pos
        if self._peek() == '0' and self._peek(1) in 'xX':
            self._advance(2)
            self._take_while(lambda c: c in _HEX_DIGITS)
            self._emit(TokenKind.INT_LIT, self.source[begin:self.pos])
            return

        self._take_while(str.isdigit)
        kind = TokenKind.INT_LIT
        if self._peek() == '.' and self._peek(1).isdigit():
            kind = TokenKind.FLOAT_LIT
            self._advance()
            self._take_while(str.isdigit)
        sign = 1 if self._peek(1) in '+-' else 0
        if self._peek() in 'eE' and self._peek(1 + sign).isdigit():
            kind = TokenKind.FLOAT_LIT
            self._advance(1 + sign)
            self._take_while(str.isdigit)
        self._emit(kind, self.source[begin:self.pos])

    # -- Names

    def _lex_name(self) -> None:
        word = self._take_while(_is_word_char)
        if word[0].islower():
            self._emit(KEYWORDS.get(word, TokenKind.LOWER_NAME), word)
            return

        # Module.Sub.value or Module.Sub.Type, stopping after the first lowercase segment
        parts = [word]
        while parts[-1][0].isupper() and self._peek() == '.' and self._peek(1).isalpha():
            self._advance()
            parts.append(self._take_while(_is_word_char))
        kind = TokenKind.UPPER_NAME if parts[-1][0].isupper() else TokenKind.LOWER_NAME
        self._emit(kind, '.'.join(parts))

    def _lex_underscore(self) -> None:
        self._advance()
        if _is_word_char(self._peek()):
            self._take_while(_is_word_char)
            self._error("names cannot start with an underscore")
            return
        self._emit(TokenKind.UNDERSCORE, "_")

    # -- Operators

    def _lex_operator(self) -> None:
        before = self.source[self.pos - 1] if self.pos > 0 else ' '
        symbol = self._take_while(lambda c: c in OPERATOR_CHARS)
        if symbol in RESERVED_SYMBOLS:
            self._emit(RESERVED_SYMBOLS[symbol], symbol)
        elif symbol == '-' and self._is_negation(before):
            self._emit(TokenKind.NEGATE, symbol)
        elif symbol == '.':
            self._error("unexpected character: '.'")
        else:
            self._emit(TokenKind.OPERATOR, symbol)

    def _is_negation(self, before: str) -> bool:
        """A minus directly followed by an operand and not preceded by one."""
        after = self._peek()
        starts_operand = after.isalnum() or after in _OPERAND_START
        return starts_operand and (before.isspace() or before in _BEFORE_NEGATION)
