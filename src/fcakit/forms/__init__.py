from __future__ import annotations

from .pretty import (
    context_to_cross_table,
    describe_concept,
    describe_concept_lattice,
    describe_delta,
)

__all__ = [
    "context_to_cross_table",
    "describe_concept",
    "describe_concept_lattice",
    "describe_delta",
]
