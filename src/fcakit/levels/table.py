# src/fcakit/levels/table.py
"""
Per-level attribute requirements and their formal context.

Each level of a :class:`BoundedChain` carries the set of attributes it
requires. Flattened into a context (levels as objects), the concept lattice
answers questions such as "which levels share exactly these requirements?"
and the per-object deltas give the step from one level to the next.
"""

from __future__ import annotations
from typing import Dict, Hashable, Iterable, Optional, Sequence, Tuple

from ..config import EnumerationConfig
from ..context.core import FormalContext, FormalContextBuilder
from ..concepts.lattice import LatticeCache
from .chain import BoundedChain, OrderedLevel

__all__ = [
    "LevelAttributeTable",
    "level_cache",
]


class LevelAttributeTable:
    """
    Attribute sets indexed by the ordinal position of ``chain``'s levels.

    Parameters
    ----------
    chain : BoundedChain
    attribute_sets : sequence of iterables
        One entry per level, bottom first.

    Raises
    ------
    ValueError
        If the number of attribute sets differs from the number of levels.
    """

    def __init__(self, chain: BoundedChain, attribute_sets: Sequence[Iterable[Hashable]]) -> None:
        sets: Tuple[Tuple[Hashable, ...], ...] = tuple(tuple(dict.fromkeys(s)) for s in attribute_sets)
        if len(sets) != len(chain):
            raise ValueError(
                f"Expected {len(chain)} attribute sets for chain {chain.id!r}, got {len(sets)}."
            )
        self.chain = chain
        self._sets = sets

    def __len__(self) -> int:
        return len(self._sets)

    def __getitem__(self, position: int) -> frozenset:
        return frozenset(self._sets[position])

    def attributes_for(self, level: OrderedLevel) -> frozenset:
        return self[self.chain.position(level)]

    def as_dict(self) -> Dict[str, frozenset]:
        return {lv.id: self[i] for i, lv in enumerate(self.chain.levels)}

    @property
    def attributes(self) -> Tuple[Hashable, ...]:
        """Union of all sets, in first-seen order walking from the bottom level."""
        seen: Dict[Hashable, None] = {}
        for s in self._sets:
            for m in s:
                seen.setdefault(m, None)
        return tuple(seen)

    def is_monotone(self) -> bool:
        """True iff each level requires everything the level below requires."""
        return all(set(lo) <= set(hi) for lo, hi in zip(self._sets, self._sets[1:]))

    def to_context(self, *, id: Optional[str] = None, name: Optional[str] = None) -> FormalContext:
        """Levels (by id) as objects, required attributes as incidences."""
        b = FormalContextBuilder(
            id=self.chain.id if id is None else id,
            name=self.chain.name if name is None else name,
        )
        for m in self.attributes:
            b.add_attribute(m)
        for lv, s in zip(self.chain.levels, self._sets):
            b.add_object_attributes(lv.id, s)
        return b.build()


def level_cache(table: LevelAttributeTable, config: Optional[EnumerationConfig] = None) -> LatticeCache:
    """Lazy lattice over ``table.to_context()``."""
    return LatticeCache(table.to_context, config)
