# src/fcakit/config.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

"""
Configuration objects for concept-lattice enumeration.

Enumeration is exponential in the worst case and never truncates its output,
so the only knobs are *up-front* size guards a caller may set, plus a
``verbose`` switch for progress events.

Examples
--------
>>> from fcakit.config import EnumerationConfig
>>> cfg = EnumerationConfig(max_objects=40)
>>> cfg.max_objects
40
>>> cfg.max_attributes is None
True
"""

__all__ = [
    'EnumerationConfig',
]


@dataclass(frozen=True)
class EnumerationConfig:
    """
    Guards and switches for :func:`fcakit.concepts.lattice.compute_concept_lattice`.

    Parameters
    ----------
    max_objects : int or None, default=None
        Refuse to enumerate contexts with more objects than this. ``None`` means
        no limit.
    max_attributes : int or None, default=None
        Same guard for attributes.
    verbose : bool, default=False
        Print progress events via :func:`fcakit.utils.log_event`.

    Notes
    -----
    - Guards are checked before enumeration starts and raise ``ValueError``; the
      enumeration itself always runs to completion.
    - Treat a config as an immutable snapshot.

    Examples
    --------
    >>> EnumerationConfig(max_objects=10, max_attributes=200)
    EnumerationConfig(max_objects=10, max_attributes=200, verbose=False)
    """

    max_objects: Optional[int] = None
    max_attributes: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        if self.max_objects is not None and self.max_objects < 0:
            raise ValueError("max_objects must be ≥ 0")
        if self.max_attributes is not None and self.max_attributes < 0:
            raise ValueError("max_attributes must be ≥ 0")

    def check(self, n_objects: int, n_attributes: int) -> None:
        """Raise ``ValueError`` if a context of the given shape exceeds a guard."""
        if self.max_objects is not None and n_objects > self.max_objects:
            raise ValueError(
                f"context has {n_objects} objects, more than max_objects={self.max_objects}"
            )
        if self.max_attributes is not None and n_attributes > self.max_attributes:
            raise ValueError(
                f"context has {n_attributes} attributes, more than max_attributes={self.max_attributes}"
            )
