"""Text edits and the builders rule routines compose them from.

Edits address the original, unmodified source. A diagnostic's edits are
applied together; they must never overlap.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from simplify.errors import OverlappingFixesError
from simplify.source import Position, Range, SourceFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsertAt:
    position: Position
    text: str

    @property
    def range(self) -> Range:
        return Range(self.position, self.position)


@dataclass(frozen=True)
class RemoveRange:
    range: Range


@dataclass(frozen=True)
class ReplaceRange:
    range: Range
    text: str


Edit = InsertAt | RemoveRange | ReplaceRange


def replacement_text(edit: Edit) -> str:
    match edit:
        case InsertAt(text=text) | ReplaceRange(text=text):
            return text
        case RemoveRange():
            return ""


# ── Builders ─────────────────────────────────────────────────────


def insert_at(position: Position, text: str) -> list[Edit]:
    return [InsertAt(position, text)]


def remove_range(rng: Range) -> list[Edit]:
    return [RemoveRange(rng)]


def replace_range_by(rng: Range, text: str) -> list[Edit]:
    return [ReplaceRange(rng, text)]


def keep_only(parent: Range, keep: Range) -> list[Edit]:
    """Delete everything in ``parent`` except ``keep``.

    Works for every call spelling since only the surrounding text differs:
    ``f x``, ``f <| x`` and ``x |> f`` all reduce to removing the text on
    each side of the kept node.
    """
    edits: list[Edit] = []
    if parent.start < keep.start:
        edits.append(RemoveRange(Range(parent.start, keep.start)))
    if keep.end < parent.end:
        edits.append(RemoveRange(Range(keep.end, parent.end)))
    return edits


# ── Validation and application ──────────────────────────────────


def check_disjoint(edits: Sequence[Edit]) -> None:
    """Raise OverlappingFixesError when two edits address overlapping text.

    Two insertions at the same position are ambiguous and count as overlapping.
    An insertion at the boundary of a removal does not.
    """
    ordered = sorted(edits, key=lambda e: (e.range.start, e.range.end))
    for first, second in zip(ordered, ordered[1:]):
        if first.range.overlaps(second.range):
            raise OverlappingFixesError(first, second)
        if first.range == second.range and first.range.is_empty():
            raise OverlappingFixesError(first, second)


def apply_fixes(content: str, edits: Iterable[Edit]) -> str:
    """Apply a set of edits to ``content``, all addressing its original text."""
    edits = list(edits)
    check_disjoint(edits)
    source = SourceFile(content)
    located = [
        (source.offset_of(e.range.start), source.offset_of(e.range.end), replacement_text(e))
        for e in edits
    ]
    # Apply from the end so earlier offsets stay valid.
    located.sort(key=lambda item: (item[0], item[1]), reverse=True)
    result = content
    for start, end, text in located:
        result = result[:start] + text + result[end:]
    logger.debug("applied %d edit(s)", len(edits))
    return result
