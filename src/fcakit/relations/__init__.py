from __future__ import annotations

from .implications import (
    AttributeImplication,
    holds_implication,
    compute_implications,
    close_under_implications,
    implications_frame,
)
from .delta import (
    AttributeDelta,
    compute_attribute_delta,
    compute_attribute_symmetric_delta,
    compute_shared_attributes,
    find_objects_with_attributes,
    delta_frame,
)

__all__ = [
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
]
