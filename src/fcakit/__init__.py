"""
fcakit: Formal Concept Analysis on finite object/attribute contexts.

Build a context, enumerate its concept lattice, read off attribute
implications and per-object deltas:

    from fcakit import FormalContextBuilder, compute_concept_lattice
    ctx = (FormalContextBuilder(id="ctx", name="Example")
           .add_object_attributes("L1", ["a"])
           .add_object_attributes("L2", ["a", "b"])
           .build())
    lattice = compute_concept_lattice(ctx)
"""

from __future__ import annotations

from .config import EnumerationConfig
from .context import (
    FormalContext,
    FormalContextBuilder,
    context_from_matrix,
    context_from_frame,
    subcontext,
    apposition,
    subposition,
)
from .concepts import (
    derive_attributes,
    derive_objects,
    closure_objects,
    closure_attributes,
    Ordering,
    FormalConcept,
    concept_from_extent,
    concept_from_intent,
    is_valid_concept,
    compare_concepts,
    ConceptLattice,
    compute_concept_lattice,
    LatticeCache,
)
from .relations import (
    AttributeImplication,
    holds_implication,
    compute_implications,
    close_under_implications,
    implications_frame,
    AttributeDelta,
    compute_attribute_delta,
    compute_attribute_symmetric_delta,
    compute_shared_attributes,
    find_objects_with_attributes,
    delta_frame,
)
from .validation import ValidationReport, validate_context, validate_concept_lattice
from .forms import (
    context_to_cross_table,
    describe_concept,
    describe_concept_lattice,
    describe_delta,
)
from .levels import OrderedLevel, BoundedChain, LevelAttributeTable, level_cache

__version__ = "0.1.0"

__all__ = [
    "EnumerationConfig",
    "FormalContext",
    "FormalContextBuilder",
    "context_from_matrix",
    "context_from_frame",
    "subcontext",
    "apposition",
    "subposition",
    "derive_attributes",
    "derive_objects",
    "closure_objects",
    "closure_attributes",
    "Ordering",
    "FormalConcept",
    "concept_from_extent",
    "concept_from_intent",
    "is_valid_concept",
    "compare_concepts",
    "ConceptLattice",
    "compute_concept_lattice",
    "LatticeCache",
    "AttributeImplication",
    "holds_implication",
    "compute_implications",
    "close_under_implications",
    "implications_frame",
    "AttributeDelta",
    "compute_attribute_delta",
    "compute_attribute_symmetric_delta",
    "compute_shared_attributes",
    "find_objects_with_attributes",
    "delta_frame",
    "ValidationReport",
    "validate_context",
    "validate_concept_lattice",
    "context_to_cross_table",
    "describe_concept",
    "describe_concept_lattice",
    "describe_delta",
    "OrderedLevel",
    "BoundedChain",
    "LevelAttributeTable",
    "level_cache",
]
