# src/fcakit/validation.py
"""
Batch diagnostics for contexts and concept lattices.

Nothing here raises on a malformed input: every problem found is appended to
``ValidationReport.errors`` so a caller sees all of them at once.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import List

from .context.core import FormalContext
from .concepts.concept import Ordering, compare_concepts, is_valid_concept
from .concepts.lattice import ConceptLattice
from .forms.pretty import describe_concept

__all__ = [
    "ValidationReport",
    "validate_context",
    "validate_concept_lattice",
]


@dataclass
class ValidationReport:
    """``valid`` is True iff ``errors`` is empty."""
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid


def validate_context(context: FormalContext) -> ValidationReport:
    """
    Structural checks:

    - no duplicate objects / attributes;
    - every incidence entry references a declared object and attribute.
    """
    report = ValidationReport()

    dup_g = [g for g, k in Counter(context.objects).items() if k > 1]
    if dup_g:
        report.errors.append(f"Context has duplicate objects: {dup_g!r}")
    dup_m = [m for m, k in Counter(context.attributes).items() if k > 1]
    if dup_m:
        report.errors.append(f"Context has duplicate attributes: {dup_m!r}")

    for g, m in context.incidence_pairs():
        if not context.has_object(g):
            report.errors.append(f"Incidence ({g!r}, {m!r}) references undeclared object {g!r}")
        if not context.has_declared_attribute(m):
            report.errors.append(f"Object {g!r} has attribute {m!r} not in attribute set")

    return report


def validate_concept_lattice(lattice: ConceptLattice) -> ValidationReport:
    """
    Invariant checks:

    - every concept is a fixed point (A' = B, B' = A);
    - extents are pairwise distinct;
    - the top holds all objects and the bottom lies below every concept;
    - LESS in the extent order means a strictly larger intent;
    - every listed cover pair is immediate.
    """
    report = ValidationReport()
    ctx = lattice.context

    def show(c) -> str:
        return describe_concept(c, context=ctx)

    for c in lattice.concepts:
        if not is_valid_concept(ctx, c.extent, c.intent):
            report.errors.append(f"Invalid concept: {show(c)}")

    if len({c.extent for c in lattice.concepts}) != len(lattice.concepts):
        report.errors.append("Lattice contains duplicate extents")

    if lattice.top.extent != frozenset(ctx.objects):
        report.errors.append("Top concept should contain all objects")

    for c in lattice.concepts:
        if not lattice.bottom.extent <= c.extent:
            report.errors.append(f"Bottom concept is not below {show(c)}")

    for c1 in lattice.concepts:
        for c2 in lattice.concepts:
            if compare_concepts(c1, c2) is Ordering.LESS and not c1.intent > c2.intent:
                report.errors.append(
                    f"Ordering inconsistency: {show(c1)} < {show(c2)} but intent not a strict superset"
                )

    for lo, up in lattice.edges():
        if not lo < up:
            report.errors.append(f"Cover {show(lo)} → {show(up)} is not strictly increasing")
            continue
        for c in lattice.concepts:
            if lo < c < up:
                report.errors.append(
                    f"Cover {show(lo)} → {show(up)} is not immediate: {show(c)} lies between"
                )
                break

    return report
