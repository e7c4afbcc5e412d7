from __future__ import annotations

from .derivation import (
    derive_attributes,
    derive_objects,
    closure_objects,
    closure_attributes,
    objects_to_mask,
    attributes_to_mask,
    mask_to_objects,
    mask_to_attributes,
    extent_mask_closure,
    mask_signature,
)
from .concept import (
    Ordering,
    FormalConcept,
    concept_from_extent,
    concept_from_intent,
    is_valid_concept,
    compare_concepts,
)
from .lattice import ConceptLattice, compute_concept_lattice, LatticeCache

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
    "Ordering",
    "FormalConcept",
    "concept_from_extent",
    "concept_from_intent",
    "is_valid_concept",
    "compare_concepts",
    "ConceptLattice",
    "compute_concept_lattice",
    "LatticeCache",
]
