# src/fcakit/concepts/concept.py
"""
Formal concepts and their (partial) order.

A formal concept of K = (G, M, I) is a pair (A, B) with A' = B and B' = A.
Concepts are ordered by extent inclusion:

    (A₁, B₁) ≤ (A₂, B₂)  ⟺  A₁ ⊆ A₂  ⟺  B₁ ⊇ B₂

This is a *partial* order, so :func:`compare_concepts` can answer
``Ordering.INCOMPARABLE``, unlike the total order of
:class:`fcakit.levels.BoundedChain`.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable

from ..context.core import FormalContext
from .derivation import derive_attributes, derive_objects

__all__ = [
    "Ordering",
    "FormalConcept",
    "concept_from_extent",
    "concept_from_intent",
    "is_valid_concept",
    "compare_concepts",
]


class Ordering(Enum):
    """Result of comparing two elements of an ordered set."""
    LESS = -1
    EQUAL = 0
    GREATER = 1
    INCOMPARABLE = None


@dataclass(frozen=True)
class FormalConcept:
    """
    Immutable (extent, intent) pair, compared and hashed by content.

    The constructor does not check the fixed-point condition; use
    :func:`concept_from_extent` / :func:`concept_from_intent` to build concepts
    and :func:`is_valid_concept` to verify hand-made ones.
    """
    extent: frozenset
    intent: frozenset

    def __post_init__(self):
        object.__setattr__(self, "extent", frozenset(self.extent))
        object.__setattr__(self, "intent", frozenset(self.intent))

    def __le__(self, other: "FormalConcept") -> bool:
        if not isinstance(other, FormalConcept):
            return NotImplemented
        return self.extent <= other.extent

    def __lt__(self, other: "FormalConcept") -> bool:
        if not isinstance(other, FormalConcept):
            return NotImplemented
        return self.extent < other.extent

    def __ge__(self, other: "FormalConcept") -> bool:
        if not isinstance(other, FormalConcept):
            return NotImplemented
        return self.extent >= other.extent

    def __gt__(self, other: "FormalConcept") -> bool:
        if not isinstance(other, FormalConcept):
            return NotImplemented
        return self.extent > other.extent


def concept_from_extent(context: FormalContext, extent: Iterable[Hashable]) -> FormalConcept:
    """
    Concept generated by a set of objects: (A'', A').

    The returned extent is the closure of ``extent`` and may be strictly larger.
    """
    intent = derive_attributes(context, extent)
    return FormalConcept(derive_objects(context, intent), intent)


def concept_from_intent(context: FormalContext, intent: Iterable[Hashable]) -> FormalConcept:
    """Concept generated by a set of attributes: (B', B'')."""
    ext = derive_objects(context, intent)
    return FormalConcept(ext, derive_attributes(context, ext))


def is_valid_concept(context: FormalContext, extent: Iterable[Hashable], intent: Iterable[Hashable]) -> bool:
    """Check A' = B and B' = A exactly."""
    ext = frozenset(extent)
    itt = frozenset(intent)
    return derive_attributes(context, ext) == itt and derive_objects(context, itt) == ext


def compare_concepts(c1: FormalConcept, c2: FormalConcept) -> Ordering:
    """Compare by extent inclusion (subconcept order)."""
    sub = c1.extent <= c2.extent
    sup = c2.extent <= c1.extent
    if sub and sup:
        return Ordering.EQUAL
    if sub:
        return Ordering.LESS
    if sup:
        return Ordering.GREATER
    return Ordering.INCOMPARABLE
