# src/fcakit/relations/implications.py
"""
Attribute implications (X → Y) of a formal context.

An implication X → Y holds in K iff X' ⊆ Y', i.e. every object having all of
X also has all of Y (equivalently Y ⊆ X'').

Generation
----------
:func:`compute_implications` walks the concept intents of the lattice. For
each intent B and each attribute m ∉ B it looks at the premise P = B ∪ {m}
and emits ``P → P'' \\ P`` whenever that closure gap is non-empty; the top
intent additionally yields ``∅ → G'``. (The closure gap of an intent itself is
always empty, which is why the one-attribute extensions are used.)

Guarantees:

- every emitted implication holds (confidence is always 1.0);
- the set is complete: closing any attribute set under the emitted rules with
  :func:`close_under_implications` yields its context closure B'';
- the set is **not** minimal and is not the Guigues-Duquenne (pseudo-intent)
  basis. Do not present it as one.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, List, Optional, Sequence

import pandas as pd

from ..config import EnumerationConfig
from ..context.core import FormalContext
from ..concepts.derivation import closure_attributes, derive_objects
from ..concepts.lattice import ConceptLattice, compute_concept_lattice
from ..utils import ordered

__all__ = [
    "AttributeImplication",
    "holds_implication",
    "compute_implications",
    "close_under_implications",
    "implications_frame",
]


def _fmt_set(items: Iterable[Hashable], order: Optional[Sequence[Hashable]], fmt: Callable[[Hashable], str]) -> str:
    parts = [fmt(x) for x in ordered(items, order, key=fmt)]
    return "{" + ", ".join(parts) + "}" if parts else "∅"


@dataclass(frozen=True)
class AttributeImplication:
    """
    Exact attribute implication: premise ⇒ conclusion.

    - ``support``: fraction of objects having every premise attribute.
    - ``confidence``: always 1.0; implications here are exact, not statistical.
    """
    premise: frozenset
    conclusion: frozenset
    support: float = 0.0
    confidence: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "premise", frozenset(self.premise))
        object.__setattr__(self, "conclusion", frozenset(self.conclusion))
        if not 0.0 <= float(self.support) <= 1.0:
            raise ValueError("support must be within [0, 1]")

    # --------------------------- core API ---------------------------

    def holds(self, context: FormalContext) -> bool:
        return holds_implication(context, self.premise, self.conclusion)

    # --------------------------- pretty / repr ---------------------------

    def pretty(
        self,
        *,
        unicode_ops: bool = True,
        arrow: Optional[str] = None,
        order: Optional[Sequence[Hashable]] = None,
        attribute_formatter: Optional[Callable[[Hashable], str]] = None,
    ) -> str:
        """Human-friendly text, e.g. '{fault_injection} ⇒ {code_review, unit_test}'."""
        fmt = attribute_formatter or str
        op = arrow or ("⇒" if unicode_ops else "->")
        return f"{_fmt_set(self.premise, order, fmt)} {op} {_fmt_set(self.conclusion, order, fmt)}"

    def signature(self) -> str:
        """Stable textual signature (good for logs)."""
        return self.pretty(unicode_ops=True)

    def __repr__(self) -> str:
        return f"({self.signature()} | support={self.support:.3g})"


def holds_implication(
    context: FormalContext,
    premise: Iterable[Hashable],
    conclusion: Iterable[Hashable],
) -> bool:
    """True iff every object having all of ``premise`` also has all of ``conclusion``."""
    return derive_objects(context, premise) <= derive_objects(context, conclusion)


def compute_implications(
    context: FormalContext,
    min_support: float = 0.0,
    *,
    lattice: Optional[ConceptLattice] = None,
    config: Optional[EnumerationConfig] = None,
) -> List[AttributeImplication]:
    """
    Valid, complete (not minimal) implication set of ``context``.

    Parameters
    ----------
    context : FormalContext
    min_support : float, default=0.0
        Drop implications whose premise support is below this fraction.
    lattice : ConceptLattice, optional
        A lattice already computed for ``context`` (e.g. from a LatticeCache).
    config : EnumerationConfig, optional
        Used only when the lattice has to be computed here.

    Returns
    -------
    list[AttributeImplication]
        Top concept first; within a concept, attributes in declaration order.
        A premise is emitted at most once.
    """
    if lattice is None:
        lattice = compute_concept_lattice(context, config)
    elif lattice.context is not context:
        raise ValueError("lattice was computed for a different context")

    n = context.n_objects
    out: List[AttributeImplication] = []
    seen: set = set()

    def emit(premise: frozenset) -> None:
        if premise in seen:
            return
        seen.add(premise)
        gap = closure_attributes(context, premise) - premise
        if not gap:
            return
        support = (len(derive_objects(context, premise)) / n) if n else 0.0
        if support < min_support:
            return
        out.append(AttributeImplication(premise, gap, support, 1.0))

    emit(frozenset())
    for concept in reversed(lattice.concepts):
        for m in context.attributes:
            if m not in concept.intent:
                emit(concept.intent | {m})
    return out


def close_under_implications(
    attributes: Iterable[Hashable],
    implications: Iterable[AttributeImplication],
) -> frozenset:
    """Smallest superset of ``attributes`` closed under every implication (forward chaining)."""
    closed = set(attributes)
    rules = list(implications)
    changed = True
    while changed:
        changed = False
        for r in rules:
            if r.premise <= closed and not r.conclusion <= closed:
                closed |= r.conclusion
                changed = True
    return frozenset(closed)


def implications_frame(
    implications: Iterable[AttributeImplication],
    *,
    order: Optional[Sequence[Hashable]] = None,
) -> pd.DataFrame:
    """
    Tabulate implications, most supported first.

    Columns: rule, premise, conclusion, n_premise, n_conclusion, support, confidence.
    """
    rows = []
    for r in implications:
        rows.append({
            "rule": r.pretty(order=order),
            "premise": tuple(ordered(r.premise, order)),
            "conclusion": tuple(ordered(r.conclusion, order)),
            "n_premise": len(r.premise),
            "n_conclusion": len(r.conclusion),
            "support": float(r.support),
            "confidence": float(r.confidence),
        })
    cols = ["rule", "premise", "conclusion", "n_premise", "n_conclusion", "support", "confidence"]
    out = pd.DataFrame(rows, columns=cols)
    if out.empty:
        return out
    return out.sort_values(
        ["support", "n_premise", "rule"],
        ascending=[False, True, True],
        kind="mergesort",
    ).reset_index(drop=True)
