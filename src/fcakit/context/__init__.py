from __future__ import annotations

from .core import FormalContext, FormalContextBuilder, context_from_matrix, context_from_frame
from .algebra import subcontext, apposition, subposition

__all__ = [
    "FormalContext",
    "FormalContextBuilder",
    "context_from_matrix",
    "context_from_frame",
    "subcontext",
    "apposition",
    "subposition",
]
