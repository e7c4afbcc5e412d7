# src/fcakit/concepts/lattice.py
"""
Concept lattice enumeration and navigation.

Enumeration (Basic Algorithm)
-----------------------------
A frontier is seeded with the empty object set, the full object set and every
singleton. Each candidate is closed (A ↦ A''); every newly discovered closed
extent pushes one successor candidate per object it does not contain
(A'' ∪ {g}). The loop ends when no new closed extent appears. Closed extents
are deduplicated by the packed-bit signature of their mask.

Every closed extent E contains ∅'' and is reached from it by adding objects of
E one at a time, so the result is complete. The number of concepts can be
exponential in min(|G|, |M|); nothing is ever truncated. Callers who need a
bound set one on :class:`fcakit.config.EnumerationConfig`, which refuses
oversized contexts *before* enumeration starts.

Ordering of ``ConceptLattice.concepts``
---------------------------------------
Ascending extent size, ties broken by the tuple of object declaration
positions. The bottom concept therefore comes first and the top concept last.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from ..config import EnumerationConfig
from ..context.core import FormalContext
from ..utils import log_event, ordered
from .concept import FormalConcept, concept_from_extent
from .derivation import (
    extent_mask_closure,
    mask_signature,
    mask_to_attributes,
    mask_to_objects,
)

__all__ = [
    "ConceptLattice",
    "compute_concept_lattice",
    "LatticeCache",
]


def _cover_matrix(extents: np.ndarray) -> np.ndarray:
    """
    covers[i, j] is True iff concept i is an immediate subconcept of concept j.

    ``extents`` is the (n_concepts × n_objects) boolean matrix of extent masks.
    """
    n = extents.shape[0]
    if n == 0:
        return np.zeros((0, 0), dtype=bool)
    E = extents.astype(np.int64)
    sizes = E.sum(axis=1)
    inter = E @ E.T
    subset = inter == sizes[:, None]            # extent_i ⊆ extent_j
    strict = subset & ~subset.T
    S = strict.astype(np.int64)
    between = (S @ S) > 0                       # ∃k: i < k < j
    return strict & ~between


@dataclass(frozen=True, eq=False)
class ConceptLattice:
    """
    The complete, duplicate-free set of formal concepts of a context, ordered by
    extent inclusion.

    Build it with :func:`compute_concept_lattice`; the cover relation is computed
    once at construction and the lattice is read-only afterwards.

    Attributes
    ----------
    context : FormalContext
    concepts : tuple[FormalConcept, ...]
        Bottom first, top last (see module notes).
    top : FormalConcept
        Extent = all objects.
    bottom : FormalConcept
        Maximal intent; ties broken by smallest extent, then by object
        declaration positions.
    """

    context: FormalContext
    concepts: Tuple[FormalConcept, ...]
    top: FormalConcept
    bottom: FormalConcept
    _by_extent: Mapping[frozenset, int] = field(repr=False)
    _by_intent: Mapping[frozenset, int] = field(repr=False)
    _upper: Tuple[Tuple[int, ...], ...] = field(repr=False)
    _lower: Tuple[Tuple[int, ...], ...] = field(repr=False)

    def __init__(self, context: FormalContext, concepts: Iterable[FormalConcept]) -> None:
        concepts = tuple(concepts)
        if not concepts:
            raise ValueError("A concept lattice has at least one concept.")

        pos = {g: i for i, g in enumerate(context.objects)}
        rank = lambda c: (len(c.extent), tuple(sorted(pos.get(g, len(pos)) for g in c.extent)))
        concepts = tuple(sorted(concepts, key=rank))

        by_extent = {c.extent: i for i, c in enumerate(concepts)}
        by_intent = {c.intent: i for i, c in enumerate(concepts)}

        extents = np.zeros((len(concepts), context.n_objects), dtype=bool)
        for i, c in enumerate(concepts):
            for g in c.extent:
                if g in pos:
                    extents[i, pos[g]] = True
        covers = _cover_matrix(extents)
        upper = tuple(tuple(int(j) for j in np.flatnonzero(covers[i])) for i in range(len(concepts)))
        lower = tuple(tuple(int(i) for i in np.flatnonzero(covers[:, j])) for j in range(len(concepts)))

        top = max(concepts, key=lambda c: (len(c.extent), -len(c.intent)))
        bottom = min(concepts, key=lambda c: (-len(c.intent),) + rank(c))

        object.__setattr__(self, "context", context)
        object.__setattr__(self, "concepts", concepts)
        object.__setattr__(self, "top", top)
        object.__setattr__(self, "bottom", bottom)
        object.__setattr__(self, "_by_extent", MappingProxyType(by_extent))
        object.__setattr__(self, "_by_intent", MappingProxyType(by_intent))
        object.__setattr__(self, "_upper", upper)
        object.__setattr__(self, "_lower", lower)

    # ──────────────────────────────────────────────────────────────────
    # Lookup
    # ──────────────────────────────────────────────────────────────────
    def _index(self, concept: FormalConcept) -> int:
        idx = self._by_extent.get(concept.extent)
        if idx is None or self.concepts[idx].intent != concept.intent:
            raise KeyError(f"Concept is not part of this lattice: {concept!r}")
        return idx

    def find_by_extent(self, extent: Iterable[Hashable]) -> Optional[FormalConcept]:
        idx = self._by_extent.get(frozenset(extent))
        return None if idx is None else self.concepts[idx]

    def find_by_intent(self, intent: Iterable[Hashable]) -> Optional[FormalConcept]:
        idx = self._by_intent.get(frozenset(intent))
        return None if idx is None else self.concepts[idx]

    # ──────────────────────────────────────────────────────────────────
    # Navigation
    # ──────────────────────────────────────────────────────────────────
    def subconcepts(self, concept: FormalConcept) -> List[FormalConcept]:
        """Immediate subconcepts (lower covers) of ``concept``."""
        return [self.concepts[k] for k in self._lower[self._index(concept)]]

    def superconcepts(self, concept: FormalConcept) -> List[FormalConcept]:
        """Immediate superconcepts (upper covers) of ``concept``."""
        return [self.concepts[k] for k in self._upper[self._index(concept)]]

    def join(self, c1: FormalConcept, c2: FormalConcept) -> FormalConcept:
        """Least upper bound: ((A₁ ∪ A₂)'', A₁' ∩ A₂')."""
        c = concept_from_extent(self.context, c1.extent | c2.extent)
        return self.find_by_extent(c.extent) or c

    def meet(self, c1: FormalConcept, c2: FormalConcept) -> FormalConcept:
        """Greatest lower bound: (A₁ ∩ A₂, (B₁ ∪ B₂)''), re-closed through concept_from_extent."""
        c = concept_from_extent(self.context, c1.extent & c2.extent)
        return self.find_by_extent(c.extent) or c

    def edges(self) -> List[Tuple[FormalConcept, FormalConcept]]:
        """All cover pairs (lower, upper) of the Hasse diagram."""
        return [
            (self.concepts[i], self.concepts[j])
            for i, ups in enumerate(self._upper)
            for j in ups
        ]

    # ──────────────────────────────────────────────────────────────────
    # Container protocol / export
    # ──────────────────────────────────────────────────────────────────
    def __len__(self) -> int:
        return len(self.concepts)

    def __iter__(self) -> Iterator[FormalConcept]:
        return iter(self.concepts)

    def __contains__(self, concept: object) -> bool:
        if not isinstance(concept, FormalConcept):
            return False
        idx = self._by_extent.get(concept.extent)
        return idx is not None and self.concepts[idx] == concept

    def to_frame(self) -> pd.DataFrame:
        """
        One row per concept, indexed by ``concept_id`` (position in ``concepts``).

        Columns: extent, intent (tuples in declaration order), n_objects,
        n_attributes, support, is_top, is_bottom.
        """
        n = self.context.n_objects
        rows = []
        for cid, c in enumerate(self.concepts):
            rows.append({
                "concept_id": cid,
                "extent": tuple(ordered(c.extent, self.context.objects)),
                "intent": tuple(ordered(c.intent, self.context.attributes)),
                "n_objects": len(c.extent),
                "n_attributes": len(c.intent),
                "support": (len(c.extent) / n) if n else 0.0,
                "is_top": c == self.top,
                "is_bottom": c == self.bottom,
            })
        return pd.DataFrame(rows).set_index("concept_id")

    def summary(self) -> Dict[str, Any]:
        """Small dict summary useful in logs/demos."""
        return {
            "context": self.context.name,
            "objects": self.context.n_objects,
            "attributes": self.context.n_attributes,
            "concepts": len(self.concepts),
            "edges": sum(len(u) for u in self._upper),
        }


def _enumerate_closed_extents(context: FormalContext) -> List[Tuple[np.ndarray, np.ndarray]]:
    n = context.n_objects
    seeds: List[np.ndarray] = [np.ones(n, dtype=bool), np.zeros(n, dtype=bool)]
    for i in range(n):
        s = np.zeros(n, dtype=bool)
        s[i] = True
        seeds.append(s)

    frontier = list(reversed(seeds))
    tried: set = set()
    closed: Dict[bytes, Tuple[np.ndarray, np.ndarray]] = {}

    while frontier:
        cand = frontier.pop()
        csig = mask_signature(cand)
        if csig in tried:
            continue
        tried.add(csig)

        extent, intent = extent_mask_closure(context, cand)
        sig = mask_signature(extent)
        if sig in closed:
            continue
        closed[sig] = (extent, intent)

        for i in np.flatnonzero(~extent):
            nxt = extent.copy()
            nxt[i] = True
            frontier.append(nxt)

    return list(closed.values())


def compute_concept_lattice(
    context: FormalContext,
    config: Optional[EnumerationConfig] = None,
    *,
    verbose: bool = False,
) -> ConceptLattice:
    """
    Enumerate every formal concept of ``context`` and order them.

    Parameters
    ----------
    context : FormalContext
    config : EnumerationConfig, optional
        Size guards; exceeding one raises ``ValueError`` before any work is done.
    verbose : bool, default=False
        Print progress events (also enabled by ``config.verbose``).

    Returns
    -------
    ConceptLattice
    """
    cfg = config or EnumerationConfig()
    cfg.check(context.n_objects, context.n_attributes)
    verbose = verbose or cfg.verbose

    if verbose:
        log_event(
            f"enumerating concepts of {context.name or context.id or 'context'!r}: "
            f"{context.n_objects} objects × {context.n_attributes} attributes"
        )

    closed = _enumerate_closed_extents(context)
    concepts = [
        FormalConcept(mask_to_objects(context, ext), mask_to_attributes(context, itt))
        for ext, itt in closed
    ]
    lattice = ConceptLattice(context, concepts)

    if verbose:
        log_event(f"found {len(lattice)} concepts, {lattice.summary()['edges']} cover edges")
    return lattice


class LatticeCache:
    """
    Caller-owned lazy holder for a context and its concept lattice.

    Both are computed on first access and kept until :meth:`rebuild` or
    :meth:`clear`. Because contexts are immutable, a cached lattice never goes
    stale; build a new cache (or call ``rebuild``) when the factory would now
    return a genuinely new context.

    Notes
    -----
    - This class is not thread-safe during the first access; share the
      ``lattice`` value, not the cache, across threads.

    Examples
    --------
    >>> from fcakit.context import FormalContextBuilder
    >>> cache = LatticeCache(lambda: FormalContextBuilder().add_object_attributes("g", ["m"]).build())
    >>> cache.is_built
    False
    >>> len(cache.lattice)
    1
    >>> cache.is_built
    True
    """

    def __init__(
        self,
        context_factory: Callable[[], FormalContext],
        config: Optional[EnumerationConfig] = None,
    ) -> None:
        self._factory = context_factory
        self._config = config
        self._context: Optional[FormalContext] = None
        self._lattice: Optional[ConceptLattice] = None

    @classmethod
    def for_context(cls, context: FormalContext, config: Optional[EnumerationConfig] = None) -> "LatticeCache":
        return cls(lambda: context, config)

    @property
    def context(self) -> FormalContext:
        if self._context is None:
            self._context = self._factory()
        return self._context

    @property
    def lattice(self) -> ConceptLattice:
        if self._lattice is None:
            self._lattice = compute_concept_lattice(self.context, self._config)
        return self._lattice

    @property
    def is_built(self) -> bool:
        return self._lattice is not None

    def rebuild(self) -> ConceptLattice:
        """Re-run the factory and recompute the lattice."""
        self.clear()
        return self.lattice

    def clear(self) -> None:
        self._context = None
        self._lattice = None
