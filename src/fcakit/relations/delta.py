# src/fcakit/relations/delta.py
"""
Pointwise comparison of objects by their attribute sets.

    Delta(target, baseline) = {target}' \\ {baseline}'

answers "what does ``target`` require that ``baseline`` does not?". Deltas use
each object's own row, not closures.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, Iterable

import pandas as pd

from ..context.core import FormalContext
from ..concepts.derivation import derive_attributes, derive_objects
from ..utils import ordered

__all__ = [
    "AttributeDelta",
    "compute_attribute_delta",
    "compute_attribute_symmetric_delta",
    "compute_shared_attributes",
    "find_objects_with_attributes",
    "delta_frame",
]


@dataclass(frozen=True)
class AttributeDelta:
    """Both directions of a comparison: ``added`` = target \\ baseline, ``removed`` = baseline \\ target."""
    added: frozenset
    removed: frozenset

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed

    def reversed(self) -> "AttributeDelta":
        return AttributeDelta(self.removed, self.added)


def compute_attribute_delta(context: FormalContext, target: Hashable, baseline: Hashable) -> frozenset:
    """Attributes of ``target`` that ``baseline`` lacks."""
    return context.attributes_of(target) - context.attributes_of(baseline)


def compute_attribute_symmetric_delta(context: FormalContext, target: Hashable, baseline: Hashable) -> AttributeDelta:
    t = context.attributes_of(target)
    b = context.attributes_of(baseline)
    return AttributeDelta(added=t - b, removed=b - t)


def compute_shared_attributes(context: FormalContext, objects: Iterable[Hashable]) -> frozenset:
    """Attributes shared by every object given (the derivation A')."""
    return derive_attributes(context, objects)


def find_objects_with_attributes(context: FormalContext, attributes: Iterable[Hashable]) -> frozenset:
    """Objects having every attribute given (the derivation B')."""
    return derive_objects(context, attributes)


def delta_frame(context: FormalContext, baseline: Hashable) -> pd.DataFrame:
    """Compare every object of ``context`` against ``baseline``; one row per object."""
    rows = []
    for g in context.objects:
        d = compute_attribute_symmetric_delta(context, g, baseline)
        rows.append({
            "object": g,
            "n_added": len(d.added),
            "n_removed": len(d.removed),
            "added": tuple(ordered(d.added, context.attributes)),
            "removed": tuple(ordered(d.removed, context.attributes)),
        })
    cols = ["object", "n_added", "n_removed", "added", "removed"]
    return pd.DataFrame(rows, columns=cols)
