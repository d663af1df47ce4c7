"""Locally bound names inside a declaration body.

Elm forbids shadowing, so a local binding only ever hides a top-level or
imported name. Resolution just needs to know whether a lowercase name is
bound somewhere between the reference and the enclosing declaration.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto

from simplify.source import Range


class BindingKind(Enum):
    ARGUMENT = auto()
    LAMBDA_ARGUMENT = auto()
    LET_BINDING = auto()
    PATTERN = auto()


@dataclass(frozen=True)
class Binding:
    name: str
    kind: BindingKind
    range: Range


class LocalBindings:
    """Frames of bindings, innermost first."""

    def __init__(self) -> None:
        self._frames: ChainMap[str, Binding] = ChainMap()

    @contextmanager
    def frame(self) -> Iterator[LocalBindings]:
        """Open a frame for a function, lambda, let block or case branch."""
        self._frames = self._frames.new_child()
        try:
            yield self
        finally:
            self._frames = self._frames.parents

    @property
    def depth(self) -> int:
        return len(self._frames.maps) - 1

    def bind(self, name: str, kind: BindingKind, rng: Range) -> Binding:
        binding = Binding(name, kind, rng)
        self._frames[name] = binding
        return binding

    def get(self, name: str) -> Binding | None:
        return self._frames.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._frames
