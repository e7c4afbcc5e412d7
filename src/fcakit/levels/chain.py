# src/fcakit/levels/chain.py
"""
Totally ordered classification levels (a bounded chain).

A chain L = (E, ≤, ⊥, ⊤) of integrity/classification levels is the simplest
bounded lattice: join is max and meet is min. It shares the
:class:`~fcakit.concepts.concept.Ordering` result type with concept
comparison, but never answers ``INCOMPARABLE``.

The normalization ν(ℓⱼ) = j / (k - 1) embeds any chain of k levels into
[0, 1]. Equal normalized values only mean equal ordinal *position* in two
chains, not interchangeable levels.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..concepts.concept import Ordering

__all__ = [
    "OrderedLevel",
    "BoundedChain",
]


@dataclass(frozen=True)
class OrderedLevel:
    """A level with a stable ``id``, its ``ordinal`` position (0 = bottom) and a display ``name``."""
    id: str
    ordinal: int
    name: str = ""

    def __str__(self) -> str:
        return self.name or self.id


class BoundedChain:
    """
    Levels given bottom to top with strictly increasing ordinals.

    Raises
    ------
    ValueError
        If ``levels`` is empty, ordinals do not strictly increase, or ids repeat.
    """

    def __init__(self, id: str, name: str, levels: Iterable[OrderedLevel]) -> None:
        levels = tuple(levels)
        if not levels:
            raise ValueError("A chain must have at least one level.")
        for a, b in zip(levels, levels[1:]):
            if not a.ordinal < b.ordinal:
                raise ValueError(
                    f"Levels must be given bottom to top with increasing ordinals ({a.id!r} ≥ {b.id!r})."
                )
        if len({lv.id for lv in levels}) != len(levels):
            raise ValueError("Level ids must be unique.")

        self.id = id
        self.name = name
        self.levels: Tuple[OrderedLevel, ...] = levels
        self._by_ordinal = {lv.ordinal: lv for lv in levels}
        self._position = {lv.id: i for i, lv in enumerate(levels)}

    @classmethod
    def from_names(cls, id: str, name: str, names: Iterable[str]) -> "BoundedChain":
        """Chain whose ids are ``names`` and ordinals 0, 1, 2, …"""
        return cls(id, name, [OrderedLevel(n, i, n) for i, n in enumerate(names)])

    @property
    def bottom(self) -> OrderedLevel:
        return self.levels[0]

    @property
    def top(self) -> OrderedLevel:
        return self.levels[-1]

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self):
        return iter(self.levels)

    def __repr__(self) -> str:
        return f"BoundedChain({self.id!r}, {[lv.id for lv in self.levels]!r})"

    def position(self, level: OrderedLevel) -> int:
        """Index of ``level``, bottom first; ``KeyError`` for a level of another chain."""
        try:
            idx = self._position[level.id]
        except KeyError as e:
            raise KeyError(f"Level {level.id!r} is not part of chain {self.id!r}") from e
        if self.levels[idx] != level:
            raise KeyError(f"Level {level!r} does not match {self.levels[idx]!r} in chain {self.id!r}")
        return idx

    def compare(self, a: OrderedLevel, b: OrderedLevel) -> Ordering:
        i, j = self.position(a), self.position(b)
        if i < j:
            return Ordering.LESS
        if i > j:
            return Ordering.GREATER
        return Ordering.EQUAL

    def leq(self, a: OrderedLevel, b: OrderedLevel) -> bool:
        return self.position(a) <= self.position(b)

    def join(self, a: OrderedLevel, b: OrderedLevel) -> OrderedLevel:
        """Least upper bound; for a chain, the higher level."""
        return self.levels[max(self.position(a), self.position(b))]

    def meet(self, a: OrderedLevel, b: OrderedLevel) -> OrderedLevel:
        """Greatest lower bound; for a chain, the lower level."""
        return self.levels[min(self.position(a), self.position(b))]

    def from_ordinal(self, ordinal: int) -> Optional[OrderedLevel]:
        return self._by_ordinal.get(ordinal)

    def normalize(self, level: OrderedLevel) -> float:
        """ν(ℓ) = position / (k - 1); a single-level chain maps to 0.0."""
        k = len(self.levels)
        if k == 1:
            return 0.0
        return self.position(level) / (k - 1)
