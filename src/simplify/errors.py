"""Diagnostics, Rust-style colored rendering and error types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers.elm import ElmLexer

if TYPE_CHECKING:
    from simplify.fix import Edit
    from simplify.source import Range, SourceFile


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_GREEN = "\033[1;32m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class Diagnostic:
    """A message about a range of source text, with the edits that resolve it.

    All edits of one diagnostic address the original source and are applied
    together as a single patch.
    """

    message: str
    details: tuple[str, ...]
    range: Range
    fixes: tuple[Edit, ...] = ()
    severity: Severity = Severity.WARNING

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", tuple(self.details))
        object.__setattr__(self, "fixes", tuple(self.fixes))

    @property
    def has_fix(self) -> bool:
        return bool(self.fixes)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color
        self._lexer = ElmLexer()
        self._formatter = TerminalFormatter()

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def _highlight(self, text: str) -> str:
        if not self.color:
            return text
        return highlight(text, self._lexer, self._formatter).rstrip("\n")

    def render(self, diag: Diagnostic, source: SourceFile) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]
        rng = diag.range

        lines.append(
            f"{self._c(color)}{sev.value}{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )
        lines.append(
            f"  {self._c(_BLUE)}-->{self._c(_RESET)} "
            f"{source.name}:{rng.start.row}:{rng.start.column}"
        )
        lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

        for row in range(rng.start.row, rng.end.row + 1):
            text = source.line_at(row)
            if row == rng.end.row and rng.end.column == 1 and row != rng.start.row:
                break
            lines.append(
                f"  {self._c(_BLUE)}{row:>4} |{self._c(_RESET)} {text}"
            )
            first = rng.start.column if row == rng.start.row else 1
            last = rng.end.column if row == rng.end.row else len(text) + 1
            padding = " " * (first - 1)
            carets = "^" * max(1, last - first)
            lines.append(
                f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                f"{padding}{self._c(color)}{carets}{self._c(_RESET)}"
            )

        for detail in diag.details:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {detail}")

        if diag.fixes:
            preview = fix_preview(source, diag)
            lines.append(f"  {self._c(_GREEN)}fix:{self._c(_RESET)}")
            for text in self._highlight(preview).split("\n"):
                lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)} {text}")

        return "\n".join(lines)


def fix_preview(source: SourceFile, diag: Diagnostic) -> str:
    """The source lines touched by a diagnostic, after its fixes are applied."""
    from simplify.fix import apply_fixes

    first = min([diag.range.start.row] + [e.range.start.row for e in diag.fixes])
    last = max([diag.range.end.row] + [e.range.end.row for e in diag.fixes])
    fixed = apply_fixes(source.content, diag.fixes)
    fixed_lines = fixed.split("\n")
    # Rows after the touched block keep their count, so slice from the end.
    trailing = len(source.lines) - last
    return "\n".join(fixed_lines[first - 1:len(fixed_lines) - trailing])


class SourceError(Exception):
    """Lexing or parsing failed; carries every error diagnostic found."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")


class OverlappingFixesError(Exception):
    """Two edits meant to be applied together address overlapping text."""

    def __init__(self, first: Edit, second: Edit) -> None:
        self.first = first
        self.second = second
        super().__init__(f"overlapping edits at {first.range} and {second.range}")
