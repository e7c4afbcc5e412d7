# src/fcakit/utils.py

"""
Small shared helpers: the event printer used by ``verbose`` runs and
ordering helpers for frozensets of arbitrary hashable labels.
"""

from __future__ import annotations
from typing import Callable, Hashable, Iterable, List, Optional, Sequence

__all__ = [
    "log_event",
    "ordered",
]


def log_event(msg: str) -> None:
    """Minimal consistent log printer for enumeration steps."""
    print(f"[fcakit] {msg}")


def ordered(
    items: Iterable[Hashable],
    order: Optional[Sequence[Hashable]] = None,
    *,
    key: Optional[Callable[[Hashable], str]] = None,
) -> List[Hashable]:
    """
    Return ``items`` as a list in a stable order.

    If ``order`` is given (e.g. a context's declared objects), items follow their
    position in it and unknown items trail, sorted by text. Otherwise items are
    sorted by ``key`` (default ``str``).
    """
    fmt = key or str
    items = list(items)
    if order is None:
        return sorted(items, key=lambda x: fmt(x))
    pos = {x: i for i, x in enumerate(order)}
    n = len(pos)
    return sorted(items, key=lambda x: (pos.get(x, n), fmt(x)))
