"""Source positions, ranges and source file access."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, order=True)
class Position:
    """A 1-indexed (row, column) location."""

    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row}:{self.column}"


@dataclass(frozen=True, order=True)
class Range:
    """A half-open range of source text: ``start`` is included, ``end`` is not."""

    start: Position
    end: Position

    @classmethod
    def of(cls, start_row: int, start_col: int, end_row: int, end_col: int) -> Range:
        return cls(Position(start_row, start_col), Position(end_row, end_col))

    @classmethod
    def between(cls, first: Range, last: Range) -> Range:
        """The range from the start of ``first`` to the end of ``last``."""
        return cls(first.start, last.end)

    def contains(self, other: Range) -> bool:
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: Range) -> bool:
        return self.start < other.end and other.start < self.end

    def is_empty(self) -> bool:
        return self.start == self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


EMPTY_RANGE = Range.of(0, 0, 0, 0)


class SourceFile:
    """A loaded source text with line and range access."""

    def __init__(self, content: str, name: str = "<stdin>") -> None:
        self.name = name
        self.content = content
        self.lines = content.split("\n")
        self._line_offsets: list[int] = []
        offset = 0
        for line in self.lines:
            self._line_offsets.append(offset)
            offset += len(line) + 1

    @classmethod
    def read(cls, path: Path) -> SourceFile:
        return cls(path.read_text(), str(path))

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def offset_of(self, position: Position) -> int:
        """Character offset of a position into ``content``."""
        row = min(max(position.row, 1), len(self.lines))
        return self._line_offsets[row - 1] + position.column - 1

    def text_at(self, rng: Range) -> str:
        """Extract the text covered by a range."""
        return self.content[self.offset_of(rng.start):self.offset_of(rng.end)]
