"""Traversal controller: walks a module and collects simplification diagnostics.

Each top-level declaration is visited in pre-order with a fresh ignore-set.
A routine that explains a sub-node (the inner call of a piped application)
adds that sub-node's range to the set, and the set is carried along to the
nodes visited after it so the sub-node is not reported a second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import simplify.checks  # noqa: F401  (registers every rule routine)
from simplify.ast_nodes import Expr, FunctionDeclaration, Module, expression_children
from simplify.config import SimplifyConfig
from simplify.dispatch import Context, dispatch
from simplify.errors import Diagnostic, OverlappingFixesError
from simplify.fix import Edit, apply_fixes, check_disjoint
from simplify.names import ModuleNameLookupTable, build_lookup_table
from simplify.parser import parse_module
from simplify.source import Range, SourceFile

logger = logging.getLogger(__name__)


class Simplifier:
    """Runs every registered rule over a parsed module."""

    def __init__(self, config: SimplifyConfig | None = None) -> None:
        self.config = config or SimplifyConfig()
        self.diagnostics: list[Diagnostic] = []

    def analyze(
        self, module: Module, lookup: ModuleNameLookupTable, source: SourceFile,
    ) -> list[Diagnostic]:
        context = Context(lookup, source, expect_nan=self.config.analysis.expect_nan)
        self.diagnostics = []
        for decl in module.declarations:
            if not isinstance(decl, FunctionDeclaration):
                continue
            logger.debug("visiting declaration %s", decl.name)
            found, _ = self._visit(context, decl.body, frozenset())
            for diag in found:
                self._accept(diag)
        self.diagnostics.sort(key=lambda d: (d.range, d.message))
        return self.diagnostics

    def _visit(
        self, context: Context, node: Expr, ignored: frozenset[Range],
    ) -> tuple[list[Diagnostic], frozenset[Range]]:
        diagnostics: list[Diagnostic] = []
        if node.range not in ignored:
            found, explained = dispatch(context, node)
            diagnostics.extend(found)
            ignored = ignored | explained
        for child in expression_children(node):
            found, ignored = self._visit(context, child, ignored)
            diagnostics.extend(found)
        return diagnostics, ignored

    def _accept(self, diag: Diagnostic) -> None:
        try:
            check_disjoint(diag.fixes)
        except OverlappingFixesError as e:
            logger.error("dropping diagnostic %r: %s", diag.message, e)
            return
        self.diagnostics.append(diag)


def analyze(
    module: Module,
    lookup: ModuleNameLookupTable,
    source: SourceFile,
    config: SimplifyConfig | None = None,
) -> list[Diagnostic]:
    """Simplification diagnostics for an already parsed and resolved module."""
    return Simplifier(config).analyze(module, lookup, source)


def simplify_source(
    text: str, filename: str = "<stdin>", config: SimplifyConfig | None = None,
) -> tuple[SourceFile, list[Diagnostic]]:
    """Parse, resolve and analyse Elm source text. Raises SourceError."""
    source = SourceFile(text, filename)
    module = parse_module(text, filename)
    lookup = build_lookup_table(module)
    return source, analyze(module, lookup, source, config)


def compatible_fixes(diagnostics: list[Diagnostic]) -> list[Edit]:
    """Edits of as many diagnostics as can be applied together, earliest first."""
    chosen: list[Edit] = []
    for diag in diagnostics:
        if not diag.fixes:
            continue
        try:
            check_disjoint(chosen + list(diag.fixes))
        except OverlappingFixesError:
            continue
        chosen.extend(diag.fixes)
    return chosen


@dataclass
class FixResult:
    text: str
    passes: int
    applied: int

    def changed(self, original: str) -> bool:
        return self.text != original


def fix_source(
    text: str, filename: str = "<stdin>", config: SimplifyConfig | None = None,
) -> FixResult:
    """Apply fixes pass after pass until nothing is left to fix.

    Stops after ``config.fix.max_passes`` passes. Raises SourceError when the
    text (or a fixed version of it) does not parse.
    """
    config = config or SimplifyConfig()
    applied = 0
    passes = 0
    while passes < config.fix.max_passes:
        _, diagnostics = simplify_source(text, filename, config)
        edits = compatible_fixes(diagnostics)
        if not edits:
            break
        passes += 1
        applied += len(edits)
        logger.debug("%s: pass %d applies %d edit(s)", filename, passes, len(edits))
        text = apply_fixes(text, edits)
    return FixResult(text, passes, applied)
