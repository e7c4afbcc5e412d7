from __future__ import annotations

from .chain import OrderedLevel, BoundedChain
from .table import LevelAttributeTable, level_cache

__all__ = [
    "OrderedLevel",
    "BoundedChain",
    "LevelAttributeTable",
    "level_cache",
]
