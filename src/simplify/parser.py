"""Parser for Elm modules.

Transforms a token stream into an AST using a Pratt expression parser for
operators and recursive descent for everything else. Block structure comes
from columns: a token starting at or left of the innermost block column
ends the expression being parsed.
"""

from __future__ import annotations

from simplify.ast_nodes import (
    AllPattern,
    Application,
    AsPattern,
    CaseBranch,
    CaseExpr,
    CharLit,
    CharPattern,
    CustomTypeDeclaration,
    Declaration,
    Expr,
    ExposedItem,
    Exposing,
    FloatLit,
    FloatPattern,
    FunctionDeclaration,
    FunctionOrValue,
    IfBlock,
    Import,
    InfixDeclaration,
    IntegerLit,
    IntPattern,
    LambdaExpr,
    LetDeclaration,
    LetDestructuring,
    LetExpr,
    ListExpr,
    ListPattern,
    Module,
    ModuleHeader,
    NamedPattern,
    Negation,
    OperatorApplication,
    ParenthesizedExpr,
    ParenthesizedPattern,
    Pattern,
    PortDeclaration,
    PrefixOperator,
    RecordAccess,
    RecordAccessFunction,
    RecordExpr,
    RecordPattern,
    RecordSetter,
    RecordUpdate,
    StringLit,
    StringPattern,
    TupleExpr,
    TuplePattern,
    TypeAliasDeclaration,
    UnConsPattern,
    UnitExpr,
    UnitPattern,
    VarPattern,
)
from simplify.errors import Diagnostic, Severity, SourceError
from simplify.source import Position, Range
from simplify.tokens import Token, TokenKind

# ── Binding powers for Pratt parser ─────────────────────────────

# Elm's (precedence, associativity) for the operators of elm/core,
# elm/parser and elm/url.
_FIXITY: dict[str, tuple[int, str]] = {
    '<|': (0, 'right'),
    '|>': (0, 'left'),
    '||': (2, 'right'),
    '&&': (3, 'right'),
    '==': (4, 'non'),
    '/=': (4, 'non'),
    '<': (4, 'non'),
    '>': (4, 'non'),
    '<=': (4, 'non'),
    '>=': (4, 'non'),
    '++': (5, 'right'),
    '::': (5, 'right'),
    '|=': (5, 'left'),
    '+': (6, 'left'),
    '-': (6, 'left'),
    '|.': (6, 'left'),
    '*': (7, 'left'),
    '/': (7, 'left'),
    '//': (7, 'left'),
    '</>': (7, 'right'),
    '^': (8, 'right'),
    '<?>': (8, 'left'),
    '<<': (9, 'right'),
    '>>': (9, 'left'),
}

_DEFAULT_FIXITY = (9, 'left')


def _binding_power(operator: str) -> tuple[int, int]:
    """(left_bp, right_bp) for an infix operator."""
    precedence, assoc = _FIXITY.get(operator, _DEFAULT_FIXITY)
    if assoc == 'right':
        return 2 * precedence, 2 * precedence
    return 2 * precedence, 2 * precedence + 1


_ATOM_START = frozenset({
    TokenKind.LOWER_NAME, TokenKind.UPPER_NAME,
    TokenKind.INT_LIT, TokenKind.FLOAT_LIT, TokenKind.STRING_LIT,
    TokenKind.TRIPLE_STRING_LIT, TokenKind.CHAR_LIT,
    TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE,
    TokenKind.DOT_FIELD, TokenKind.NEGATE,
})

_PATTERN_ATOM_START = frozenset({
    TokenKind.UNDERSCORE, TokenKind.LOWER_NAME, TokenKind.UPPER_NAME,
    TokenKind.INT_LIT, TokenKind.FLOAT_LIT, TokenKind.STRING_LIT,
    TokenKind.CHAR_LIT, TokenKind.NEGATE,
    TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE,
})


def split_qualified(value: str) -> tuple[tuple[str, ...], str]:
    """``"List.map"`` → ``(("List",), "map")``."""
    parts = value.split('.')
    return tuple(parts[:-1]), parts[-1]


class Parser:
    """Parses a list of tokens into an Elm AST."""

    def __init__(self, tokens: list[Token], filename: str = "<stdin>") -> None:
        self.tokens = tokens
        self.pos = 0
        self.filename = filename
        self.diagnostics: list[Diagnostic] = []
        self._layout: list[int] = [1]
        self._signatures: dict[str, Range] = {}

    # ── Token access ─────────────────────────────────────────────

    def _current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF

    def _peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1] if self.pos > 0 else self.tokens[0]

    def _at(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _at_any(self, *kinds: TokenKind) -> bool:
        return self._current().kind in kinds

    def _at_word(self, word: str) -> bool:
        tok = self._current()
        return tok.kind == TokenKind.LOWER_NAME and tok.value == word

    def _advance(self) -> Token:
        tok = self._current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def _expect(self, kind: TokenKind) -> Token:
        if self._current().kind == kind:
            return self._advance()
        tok = self._current()
        self._error(f"expected {kind.name}, got {tok.kind.name} ({tok.value!r})", tok.range)
        raise _ParseError

    def _error(self, message: str, rng: Range) -> None:
        self.diagnostics.append(
            Diagnostic(
                message=message,
                details=[],
                range=rng,
                severity=Severity.ERROR,
            )
        )

    def _range_from(self, start: Position) -> Range:
        """Range from ``start`` to the end of the last consumed token."""
        return Range(start, self._previous().range.end)

    def _continues(self) -> bool:
        """Whether the current token may continue the expression being parsed."""
        tok = self._current()
        return tok.kind != TokenKind.EOF and tok.range.start.column > self._layout[-1]

    def _synchronize(self) -> None:
        """Skip tokens until the next top-level declaration."""
        self._advance()
        while not self._at(TokenKind.EOF) and self._current().range.start.column != 1:
            self._advance()

    # ── Top-level parsing ────────────────────────────────────────

    def parse(self) -> Module:
        """Parse the entire token stream into a Module."""
        header = None
        imports: list[Import] = []
        declarations: list[Declaration] = []

        try:
            if self._at(TokenKind.MODULE) or self._peek(1).kind == TokenKind.MODULE:
                header = self._parse_module_header()
            while self._at(TokenKind.IMPORT):
                imports.append(self._parse_import())
        except _ParseError:
            self._synchronize()

        while not self._at(TokenKind.EOF):
            try:
                decl = self._parse_declaration()
                if decl is not None:
                    declarations.append(decl)
            except _ParseError:
                self._synchronize()

        end = self._current().range.end
        if self.diagnostics:
            raise SourceError(self.diagnostics)
        return Module(header, imports, declarations, Range(Position(1, 1), end))

    def _parse_module_header(self) -> ModuleHeader:
        start = self._current().range.start
        if self._at(TokenKind.PORT) or self._at_word("effect"):
            self._advance()
        self._expect(TokenKind.MODULE)
        name_tok = self._expect(TokenKind.UPPER_NAME)
        if self._at(TokenKind.WHERE):
            self._advance()
            self._skip_balanced(TokenKind.LBRACE, TokenKind.RBRACE)
        self._expect(TokenKind.EXPOSING)
        exposing = self._parse_exposing()
        return ModuleHeader(tuple(name_tok.value.split('.')), exposing, self._range_from(start))

    def _parse_import(self) -> Import:
        start = self._advance().range.start  # import
        name_tok = self._expect(TokenKind.UPPER_NAME)
        alias = None
        exposing = None
        if self._at(TokenKind.AS):
            self._advance()
            alias = self._expect(TokenKind.UPPER_NAME).value
        if self._at(TokenKind.EXPOSING):
            self._advance()
            exposing = self._parse_exposing()
        return Import(tuple(name_tok.value.split('.')), alias, exposing, self._range_from(start))

    def _parse_exposing(self) -> Exposing:
        start = self._expect(TokenKind.LPAREN).range.start
        if self._at(TokenKind.DOT_DOT):
            self._advance()
            self._expect(TokenKind.RPAREN)
            return Exposing(True, [], self._range_from(start))
        items: list[ExposedItem] = []
        while True:
            items.append(self._parse_exposed_item())
            if not self._at(TokenKind.COMMA):
                break
            self._advance()
        self._expect(TokenKind.RPAREN)
        return Exposing(False, items, self._range_from(start))

    def _parse_exposed_item(self) -> ExposedItem:
        tok = self._current()
        if tok.kind == TokenKind.LOWER_NAME:
            self._advance()
            return ExposedItem(tok.value, False, tok.range)
        if tok.kind == TokenKind.UPPER_NAME:
            self._advance()
            is_open = False
            if self._at(TokenKind.LPAREN) and self._peek(1).kind == TokenKind.DOT_DOT:
                self._advance()
                self._advance()
                self._expect(TokenKind.RPAREN)
                is_open = True
            return ExposedItem(tok.value, is_open, self._range_from(tok.range.start))
        if tok.kind == TokenKind.LPAREN:
            self._advance()
            op = self._expect(TokenKind.OPERATOR)
            self._expect(TokenKind.RPAREN)
            return ExposedItem(op.value, False, self._range_from(tok.range.start))
        self._error(f"unexpected token in exposing list: {tok.value!r}", tok.range)
        raise _ParseError

    def _parse_declaration(self) -> Declaration | None:
        """Parse a single top-level declaration."""
        tok = self._current()

        if tok.range.start.column != 1:
            self._error(f"unexpected token at module level: {tok.kind.name} ({tok.value!r})",
                        tok.range)
            raise _ParseError

        if tok.kind == TokenKind.TYPE:
            return self._parse_type_declaration()
        if tok.kind == TokenKind.PORT:
            start = self._advance().range.start
            name_tok = self._expect(TokenKind.LOWER_NAME)
            self._skip_to_layout_end()
            return PortDeclaration(name_tok.value, self._range_from(start))
        if self._at_word("infix"):
            start_index = self.pos
            start = self._advance().range.start
            self._skip_to_layout_end()
            operator = next(
                (t.value for t in self.tokens[start_index:self.pos] if t.kind == TokenKind.OPERATOR),
                "",
            )
            return InfixDeclaration(operator, self._range_from(start))
        if tok.kind == TokenKind.LOWER_NAME:
            if self._peek(1).kind == TokenKind.COLON:
                self._parse_signature()
                return None
            return self._parse_function_declaration()

        self._error(f"unexpected token at module level: {tok.kind.name} ({tok.value!r})", tok.range)
        raise _ParseError

    def _skip_to_layout_end(self) -> None:
        while self._continues():
            self._advance()

    def _skip_balanced(self, open_kind: TokenKind, close_kind: TokenKind) -> None:
        self._expect(open_kind)
        depth = 1
        while depth and not self._at(TokenKind.EOF):
            tok = self._advance()
            if tok.kind == open_kind:
                depth += 1
            elif tok.kind == close_kind:
                depth -= 1

    def _parse_signature(self) -> None:
        name_tok = self._advance()
        self._advance()  # :
        self._skip_to_layout_end()
        self._signatures[name_tok.value] = self._range_from(name_tok.range.start)

    def _parse_type_declaration(self) -> Declaration:
        start = self._advance().range.start  # type
        if self._at_word("alias"):
            self._advance()
            name_tok = self._expect(TokenKind.UPPER_NAME)
            while self._at(TokenKind.LOWER_NAME):
                self._advance()
            self._expect(TokenKind.EQUALS)
            is_record = self._at(TokenKind.LBRACE)
            self._skip_to_layout_end()
            return TypeAliasDeclaration(name_tok.value, is_record, self._range_from(start))

        name_tok = self._expect(TokenKind.UPPER_NAME)
        while self._at(TokenKind.LOWER_NAME):
            self._advance()
        self._expect(TokenKind.EQUALS)
        constructors = [self._expect(TokenKind.UPPER_NAME).value]
        depth = 0
        while self._continues():
            tok = self._advance()
            if tok.kind in (TokenKind.LPAREN, TokenKind.LBRACE):
                depth += 1
            elif tok.kind in (TokenKind.RPAREN, TokenKind.RBRACE):
                depth -= 1
            elif tok.kind == TokenKind.PIPE and depth == 0:
                constructors.append(self._expect(TokenKind.UPPER_NAME).value)
        return CustomTypeDeclaration(name_tok.value, constructors, self._range_from(start))

    def _parse_function_declaration(self) -> FunctionDeclaration:
        name_tok = self._expect(TokenKind.LOWER_NAME)
        args: list[Pattern] = []
        while not self._at(TokenKind.EQUALS):
            args.append(self._parse_pattern_atom())
        self._expect(TokenKind.EQUALS)
        self._layout.append(name_tok.range.start.column)
        try:
            body = self._parse_expression(0)
        finally:
            self._layout.pop()
        signature = self._signatures.pop(name_tok.value, None)
        start = signature.start if signature is not None else name_tok.range.start
        return FunctionDeclaration(
            name_tok.value, name_tok.range, args, body, signature,
            self._range_from(start),
        )

    # ── Expressions ──────────────────────────────────────────────

    def _parse_expression(self, min_bp: int) -> Expr:
        """Parse an expression using Pratt parsing with binding powers."""
        left = self._parse_prefix()

        while True:
            tok = self._current()
            if tok.kind != TokenKind.OPERATOR or not self._continues():
                break
            left_bp, right_bp = _binding_power(tok.value)
            if left_bp < min_bp:
                break
            op_tok = self._advance()
            right = self._parse_expression(right_bp)
            left = OperatorApplication(
                op_tok.value, left, right, op_tok.range,
                Range.between(left.range, right.range),
            )

        return left

    def _parse_prefix(self) -> Expr:
        """Parse an operand: a block expression or an application."""
        tok = self._current()
        match tok.kind:
            case TokenKind.IF:
                return self._parse_if()
            case TokenKind.CASE:
                return self._parse_case()
            case TokenKind.LET:
                return self._parse_let()
            case TokenKind.BACKSLASH:
                return self._parse_lambda()
        return self._parse_application()

    def _parse_application(self) -> Expr:
        func = self._parse_atom()
        args: list[Expr] = []
        while self._current().kind in _ATOM_START and self._continues():
            args.append(self._parse_atom())
        if not args:
            return func
        return Application(func, args, Range.between(func.range, args[-1].range))

    def _parse_atom(self) -> Expr:
        tok = self._current()
        if tok.kind == TokenKind.NEGATE:
            self._advance()
            operand = self._parse_atom()
            return Negation(operand, self._range_from(tok.range.start))

        expr = self._parse_primary()
        # Record access binds to the atom it touches: `model.user.name`.
        while self._at(TokenKind.DOT_FIELD) and self._current().range.start == expr.range.end:
            field_tok = self._advance()
            expr = RecordAccess(
                expr, field_tok.value, field_tok.range,
                Range.between(expr.range, field_tok.range),
            )
        return expr

    def _parse_primary(self) -> Expr:
        tok = self._current()
        match tok.kind:
            case TokenKind.LOWER_NAME | TokenKind.UPPER_NAME:
                self._advance()
                module_name, name = split_qualified(tok.value)
                return FunctionOrValue(module_name, name, tok.range)
            case TokenKind.INT_LIT:
                self._advance()
                if tok.value[:2].lower() == '0x':
                    return IntegerLit(int(tok.value, 16), True, tok.range)
                return IntegerLit(int(tok.value), False, tok.range)
            case TokenKind.FLOAT_LIT:
                self._advance()
                return FloatLit(float(tok.value), tok.range)
            case TokenKind.STRING_LIT:
                self._advance()
                return StringLit(tok.value, False, tok.range)
            case TokenKind.TRIPLE_STRING_LIT:
                self._advance()
                return StringLit(tok.value, True, tok.range)
            case TokenKind.CHAR_LIT:
                self._advance()
                return CharLit(tok.value, tok.range)
            case TokenKind.DOT_FIELD:
                self._advance()
                return RecordAccessFunction(tok.value, tok.range)
            case TokenKind.LPAREN:
                return self._parse_parenthesized()
            case TokenKind.LBRACKET:
                return self._parse_list()
            case TokenKind.LBRACE:
                return self._parse_record()

        self._error(f"unexpected token in expression: {tok.kind.name} ({tok.value!r})", tok.range)
        raise _ParseError

    def _parse_parenthesized(self) -> Expr:
        start = self._advance().range.start  # (
        if self._at(TokenKind.RPAREN):
            self._advance()
            return UnitExpr(self._range_from(start))
        if self._at_any(TokenKind.OPERATOR, TokenKind.NEGATE) and self._peek(1).kind == TokenKind.RPAREN:
            op = self._advance().value
            self._advance()
            return PrefixOperator(op, self._range_from(start))

        # Inside delimiters the enclosing block no longer constrains columns.
        self._layout.append(0)
        try:
            elements = [self._parse_expression(0)]
            while self._at(TokenKind.COMMA):
                self._advance()
                elements.append(self._parse_expression(0))
        finally:
            self._layout.pop()
        self._expect(TokenKind.RPAREN)
        if len(elements) == 1:
            return ParenthesizedExpr(elements[0], self._range_from(start))
        return TupleExpr(elements, self._range_from(start))

    def _parse_list(self) -> ListExpr:
        start = self._advance().range.start  # [
        elements: list[Expr] = []
        self._layout.append(0)
        try:
            if not self._at(TokenKind.RBRACKET):
                elements.append(self._parse_expression(0))
                while self._at(TokenKind.COMMA):
                    self._advance()
                    elements.append(self._parse_expression(0))
        finally:
            self._layout.pop()
        self._expect(TokenKind.RBRACKET)
        return ListExpr(elements, self._range_from(start))

    def _parse_record(self) -> Expr:
        start = self._advance().range.start  # {
        if self._at(TokenKind.RBRACE):
            self._advance()
            return RecordExpr([], self._range_from(start))

        self._layout.append(0)
        try:
            record = None
            if self._at(TokenKind.LOWER_NAME) and self._peek(1).kind == TokenKind.PIPE:
                name_tok = self._advance()
                self._advance()  # |
                record = FunctionOrValue((), name_tok.value, name_tok.range)
            fields = [self._parse_record_setter()]
            while self._at(TokenKind.COMMA):
                self._advance()
                fields.append(self._parse_record_setter())
        finally:
            self._layout.pop()
        self._expect(TokenKind.RBRACE)
        if record is not None:
            return RecordUpdate(record, fields, self._range_from(start))
        return RecordExpr(fields, self._range_from(start))

    def _parse_record_setter(self) -> RecordSetter:
        name_tok = self._expect(TokenKind.LOWER_NAME)
        self._expect(TokenKind.EQUALS)
        value = self._parse_expression(0)
        return RecordSetter(name_tok.value, value, Range.between(name_tok.range, value.range))

    def _parse_if(self) -> IfBlock:
        start = self._advance().range.start  # if
        condition = self._parse_expression(0)
        self._expect(TokenKind.THEN)
        then_branch = self._parse_expression(0)
        self._expect(TokenKind.ELSE)
        else_branch = self._parse_expression(0)
        return IfBlock(condition, then_branch, else_branch, self._range_from(start))

    def _parse_case(self) -> CaseExpr:
        start = self._advance().range.start  # case
        subject = self._parse_expression(0)
        self._expect(TokenKind.OF)

        column = self._current().range.start.column
        if not self._continues():
            self._error("expected case branches", self._current().range)
            raise _ParseError
        branches: list[CaseBranch] = []
        while not self._at(TokenKind.EOF) and self._current().range.start.column == column:
            pattern = self._parse_pattern()
            self._expect(TokenKind.ARROW)
            self._layout.append(column)
            try:
                body = self._parse_expression(0)
            finally:
                self._layout.pop()
            branches.append(CaseBranch(pattern, body, Range.between(pattern.range, body.range)))
        return CaseExpr(subject, branches, self._range_from(start))

    def _parse_let(self) -> LetExpr:
        start = self._advance().range.start  # let
        column = self._current().range.start.column
        declarations: list[LetDeclaration] = []
        saved_signatures = self._signatures
        self._signatures = {}
        self._layout.append(column)
        try:
            while not self._at(TokenKind.IN) and self._current().range.start.column == column:
                decl = self._parse_let_declaration()
                if decl is not None:
                    declarations.append(decl)
        finally:
            self._layout.pop()
            self._signatures = saved_signatures
        self._expect(TokenKind.IN)
        body = self._parse_expression(0)
        return LetExpr(declarations, body, self._range_from(start))

    def _parse_let_declaration(self) -> LetDeclaration | None:
        tok = self._current()
        if tok.kind == TokenKind.LOWER_NAME:
            if self._peek(1).kind == TokenKind.COLON:
                self._parse_signature()
                return None
            return self._parse_function_declaration()
        pattern = self._parse_pattern()
        self._expect(TokenKind.EQUALS)
        body = self._parse_expression(0)
        return LetDestructuring(pattern, body, Range.between(pattern.range, body.range))

    def _parse_lambda(self) -> LambdaExpr:
        start = self._advance().range.start  # \
        args: list[Pattern] = []
        while not self._at(TokenKind.ARROW):
            args.append(self._parse_pattern_atom())
        self._expect(TokenKind.ARROW)
        body = self._parse_expression(0)
        return LambdaExpr(args, body, self._range_from(start))

    # ── Patterns ─────────────────────────────────────────────────

    def _parse_pattern(self) -> Pattern:
        pattern = self._parse_cons_pattern()
        while self._at(TokenKind.AS):
            self._advance()
            name_tok = self._expect(TokenKind.LOWER_NAME)
            name = VarPattern(name_tok.value, name_tok.range)
            pattern = AsPattern(pattern, name, Range.between(pattern.range, name.range))
        return pattern

    def _parse_cons_pattern(self) -> Pattern:
        head = self._parse_constructor_pattern()
        if self._at(TokenKind.OPERATOR) and self._current().value == '::':
            self._advance()
            tail = self._parse_cons_pattern()
            return UnConsPattern(head, tail, Range.between(head.range, tail.range))
        return head

    def _parse_constructor_pattern(self) -> Pattern:
        if not self._at(TokenKind.UPPER_NAME):
            return self._parse_pattern_atom()
        tok = self._advance()
        module_name, name = split_qualified(tok.value)
        args: list[Pattern] = []
        while self._current().kind in _PATTERN_ATOM_START:
            args.append(self._parse_pattern_atom())
        return NamedPattern(module_name, name, args, tok.range, self._range_from(tok.range.start))

    def _parse_pattern_atom(self) -> Pattern:
        tok = self._current()
        match tok.kind:
            case TokenKind.UNDERSCORE:
                self._advance()
                return AllPattern(tok.range)
            case TokenKind.LOWER_NAME:
                self._advance()
                return VarPattern(tok.value, tok.range)
            case TokenKind.UPPER_NAME:
                self._advance()
                module_name, name = split_qualified(tok.value)
                return NamedPattern(module_name, name, [], tok.range, tok.range)
            case TokenKind.INT_LIT:
                self._advance()
                base = 16 if tok.value[:2].lower() == '0x' else 10
                return IntPattern(int(tok.value, base), tok.range)
            case TokenKind.NEGATE:
                self._advance()
                num = self._current()
                if num.kind == TokenKind.INT_LIT:
                    self._advance()
                    base = 16 if num.value[:2].lower() == "0x" else 10
                    return IntPattern(-int(num.value, base), self._range_from(tok.range.start))
                if num.kind == TokenKind.FLOAT_LIT:
                    self._advance()
                    return FloatPattern(-float(num.value), self._range_from(tok.range.start))
            case TokenKind.FLOAT_LIT:
                self._advance()
                return FloatPattern(float(tok.value), tok.range)
            case TokenKind.STRING_LIT:
                self._advance()
                return StringPattern(tok.value, tok.range)
            case TokenKind.CHAR_LIT:
                self._advance()
                return CharPattern(tok.value, tok.range)
            case TokenKind.LPAREN:
                return self._parse_parenthesized_pattern()
            case TokenKind.LBRACKET:
                self._advance()
                elements = self._parse_pattern_list(TokenKind.RBRACKET)
                return ListPattern(elements, self._range_from(tok.range.start))
            case TokenKind.LBRACE:
                self._advance()
                fields: list[VarPattern] = []
                while not self._at(TokenKind.RBRACE):
                    if fields:
                        self._expect(TokenKind.COMMA)
                    field_tok = self._expect(TokenKind.LOWER_NAME)
                    fields.append(VarPattern(field_tok.value, field_tok.range))
                self._expect(TokenKind.RBRACE)
                return RecordPattern(fields, self._range_from(tok.range.start))

        self._error(f"unexpected token in pattern: {tok.kind.name} ({tok.value!r})", tok.range)
        raise _ParseError

    def _parse_parenthesized_pattern(self) -> Pattern:
        start = self._advance().range.start  # (
        if self._at(TokenKind.RPAREN):
            self._advance()
            return UnitPattern(self._range_from(start))
        elements = self._parse_pattern_list(TokenKind.RPAREN)
        if len(elements) == 1:
            return ParenthesizedPattern(elements[0], self._range_from(start))
        return TuplePattern(elements, self._range_from(start))

    def _parse_pattern_list(self, close: TokenKind) -> list[Pattern]:
        elements: list[Pattern] = []
        while not self._at(close):
            if elements:
                self._expect(TokenKind.COMMA)
            elements.append(self._parse_pattern())
        self._expect(close)
        return elements


class _ParseError(Exception):
    """Internal exception for parser error recovery."""


def parse_module(source: str, filename: str = "<stdin>") -> Module:
    """Lex and parse Elm source text."""
    from simplify.lexer import Lexer

    tokens = Lexer(source, filename).lex()
    return Parser(tokens, filename).parse()
