# src/fcakit/concepts/derivation.py
"""
Derivation (Galois) operators of a formal context.

For A ⊆ G and B ⊆ M:

    A' = {m ∈ M | ∀g ∈ A: gIm}      (derive_attributes)
    B' = {g ∈ G | ∀m ∈ B: gIm}      (derive_objects)

Both are antitone and together form a Galois connection; the composites
A ↦ A'' and B ↦ B'' are closure operators (extensive, monotone, idempotent).
The empty set derives to *everything* on the other side (vacuous truth).

Two flavours live here:

- set-level operators over frozensets, built on the context's forward/reverse
  indexes (cost proportional to the rows/columns touched);
- mask-level operators over ``context.matrix`` used by bulk enumeration, with
  boolean numpy masks in declaration order. ``np.all`` over an empty axis is
  True, which gives the vacuous-truth cases for free.
"""

from __future__ import annotations
from typing import Hashable, Iterable, Tuple

import numpy as np

from ..context.core import FormalContext

__all__ = [
    "derive_attributes",
    "derive_objects",
    "closure_objects",
    "closure_attributes",
    "objects_to_mask",
    "attributes_to_mask",
    "mask_to_objects",
    "mask_to_attributes",
    "extent_mask_closure",
    "mask_signature",
]


def _as_set(items: Iterable[Hashable]) -> frozenset:
    return items if isinstance(items, frozenset) else frozenset(items)


# =====================================================================
# Set-level operators
# =====================================================================

def derive_attributes(context: FormalContext, objects: Iterable[Hashable]) -> frozenset:
    """A': attributes common to all objects in ``objects`` (all attributes if empty)."""
    objs = _as_set(objects)
    if not objs:
        return frozenset(context.attributes)

    rows = sorted((context.attributes_of(g) for g in objs), key=len)
    result = set(rows[0])
    for row in rows[1:]:
        if not result:
            break
        result &= row
    return frozenset(result)


def derive_objects(context: FormalContext, attributes: Iterable[Hashable]) -> frozenset:
    """B': objects having every attribute in ``attributes`` (all objects if empty)."""
    attrs = _as_set(attributes)
    if not attrs:
        return frozenset(context.objects)

    cols = sorted((context.objects_having(m) for m in attrs), key=len)
    result = set(cols[0])
    for col in cols[1:]:
        if not result:
            break
        result &= col
    return frozenset(result)


def closure_objects(context: FormalContext, objects: Iterable[Hashable]) -> frozenset:
    """A'': the largest extent with the same intent as ``objects``."""
    return derive_objects(context, derive_attributes(context, objects))


def closure_attributes(context: FormalContext, attributes: Iterable[Hashable]) -> frozenset:
    """B'': every attribute implied by ``attributes`` in this context."""
    return derive_attributes(context, derive_objects(context, attributes))


# =====================================================================
# Mask-level operators
# =====================================================================

def objects_to_mask(context: FormalContext, objects: Iterable[Hashable]) -> np.ndarray:
    """Boolean mask over ``context.objects``; undeclared objects are ignored."""
    mask = np.zeros(context.n_objects, dtype=np.bool_)
    for g in objects:
        if context.has_object(g):
            mask[context.object_index(g)] = True
    return mask


def attributes_to_mask(context: FormalContext, attributes: Iterable[Hashable]) -> np.ndarray:
    """Boolean mask over ``context.attributes``; undeclared attributes are ignored."""
    mask = np.zeros(context.n_attributes, dtype=np.bool_)
    for m in attributes:
        if context.has_declared_attribute(m):
            mask[context.attribute_index(m)] = True
    return mask


def mask_to_objects(context: FormalContext, mask: np.ndarray) -> frozenset:
    return frozenset(context.objects[int(i)] for i in np.flatnonzero(mask))


def mask_to_attributes(context: FormalContext, mask: np.ndarray) -> frozenset:
    return frozenset(context.attributes[int(j)] for j in np.flatnonzero(mask))


def extent_mask_closure(context: FormalContext, mask: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Close an object mask.

    Returns
    -------
    extent, intent : (ndarray[bool], ndarray[bool])
        ``extent`` is the mask of A'' and ``intent`` the mask of A'.
    """
    mat = context.matrix
    intent = mat[np.asarray(mask, dtype=np.bool_)].all(axis=0)
    extent = mat[:, intent].all(axis=1)
    return extent, intent


def mask_signature(mask: np.ndarray) -> bytes:
    """Canonical hashable key of a mask (packed bits, declaration order)."""
    return np.packbits(np.asarray(mask, dtype=np.bool_), bitorder="little").tobytes()
