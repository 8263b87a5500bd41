# comparable/interface.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .kinds import Pair


class Implementation(ABC):
    """
    Comparison between the two types of one canonical pair.

    ``pair`` is the self-reported key ``(tag_a, tag_b)``; the dispatcher
    refuses to use an implementation whose ``pair`` differs from the key it
    was found under. ``compare(x, y)`` always receives ``x`` of ``tag_a`` and
    ``y`` of ``tag_b``, and must be a pure function returning -1, 0 or 1.
    """

    pair: Optional[Pair] = None

    @abstractmethod
    def compare(self, x: Any, y: Any) -> int:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.pair!r}>"


class FunctionImplementation(Implementation):
    """Adapter turning a plain ``fn(x, y) -> -1|0|1`` into an Implementation bound to a pair."""

    def __init__(self, pair: Pair, fn: Callable[[Any, Any], int]):
        if not callable(fn):
            raise TypeError(f"Comparison function for {pair!r} must be callable")
        self.pair = pair
        self.fn = fn

    def compare(self, x: Any, y: Any) -> int:
        return self.fn(x, y)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", repr(self.fn))
        return f"<FunctionImplementation {self.pair!r} {name}>"
