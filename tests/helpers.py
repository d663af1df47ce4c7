"""Shared test helpers for the elm-simplify test suite."""

from __future__ import annotations

from simplify.config import SimplifyConfig
from simplify.errors import Diagnostic
from simplify.fix import apply_fixes
from simplify.lexer import Lexer
from simplify.names import build_lookup_table
from simplify.parser import Parser
from simplify.simplifier import simplify_source


def parse(source: str):
    """Lex and parse source, return the Module."""
    tokens = Lexer(source, "Test.elm").lex()
    return Parser(tokens, "Test.elm").parse()


def wrap(expression: str, imports: str = "") -> str:
    """A module holding ``expression`` as the body of the declaration ``a``."""
    body = "\n".join("    " + line if line else line for line in expression.split("\n"))
    header = "module A exposing (..)\n\n"
    if imports:
        header += imports.strip() + "\n\n"
    return f"{header}\na =\n{body}\n"


def analyze(source: str, config: SimplifyConfig | None = None) -> list[Diagnostic]:
    """Analyse a whole module's source text."""
    _, diagnostics = simplify_source(source, "Test.elm", config)
    return diagnostics


def analyze_expr(expression: str, imports: str = "",
                 config: SimplifyConfig | None = None) -> list[Diagnostic]:
    return analyze(wrap(expression, imports), config)


def lookup_for(source: str):
    module = parse(source)
    return module, build_lookup_table(module)


def assert_fix(expression: str, expected: str, *, imports: str = "",
               config: SimplifyConfig | None = None) -> Diagnostic:
    """Assert ``expression`` gets exactly one diagnostic whose fix yields ``expected``."""
    source = wrap(expression, imports)
    diagnostics = analyze(source, config)
    assert len(diagnostics) == 1, (
        f"Expected one diagnostic but got: {[d.message for d in diagnostics] or 'none'}"
    )
    diag = diagnostics[0]
    assert diag.fixes, f"Diagnostic {diag.message!r} has no fix"
    assert apply_fixes(source, diag.fixes) == wrap(expected, imports)
    return diag


def assert_no_errors(expression: str, *, imports: str = "",
                     config: SimplifyConfig | None = None) -> None:
    diagnostics = analyze_expr(expression, imports, config)
    assert not diagnostics, f"Unexpected diagnostics: {[d.message for d in diagnostics]}"
