# src/fcakit/context/core.py

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, Iterator, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype

__all__ = [
    "FormalContext",
    "FormalContextBuilder",
    "context_from_matrix",
    "context_from_frame",
]

_EMPTY: frozenset = frozenset()

# ──────────────────────────────────────────────────────────────────────────────
# Local helpers
# ──────────────────────────────────────────────────────────────────────────────

def _is_boolean_like(s: pd.Series) -> bool:
    """
    Return True if `s` behaves like a boolean indicator column.

    Accepts:
    • bool dtype or pandas nullable 'boolean' dtype
    • integer columns with only {0,1} (ignoring NA)
    • float columns with only {0.0,1.0} (ignoring NA)
    • categorical columns whose categories are subset of {0,1,True,False}
    """
    if is_bool_dtype(s) or str(s.dtype).lower().startswith("boolean"):
        return True

    if isinstance(s.dtype, pd.CategoricalDtype):
        cats = pd.Series(s.cat.categories, dtype="object")
        return bool(cats.isin([0, 1, True, False]).all())

    vals = s.dropna()
    if vals.empty:
        return False

    if pd.api.types.is_integer_dtype(vals):
        return bool(vals.isin([0, 1]).all())

    if pd.api.types.is_float_dtype(vals):
        return bool(vals.isin([0.0, 1.0]).all())

    return False


def _as_bool_array(s: pd.Series) -> np.ndarray:
    """Boolean view of an indicator column; NA -> False."""
    if isinstance(s.dtype, pd.CategoricalDtype):
        s = s.astype(object)
    elif is_bool_dtype(s) or str(s.dtype).lower().startswith("boolean"):
        return s.fillna(False).astype(bool).to_numpy(dtype=np.bool_)
    # 0/1 columns (True == 1), including nullable Int64/Float64 with NA
    return s.eq(1).fillna(False).to_numpy(dtype=np.bool_)


# ──────────────────────────────────────────────────────────────────────────────
# Core data model
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class FormalContext:
    """
    Immutable formal context K = (G, M, I).

    Responsibilities
    ----------------
    • Owns the ordered object tuple ``objects`` (G) and attribute tuple ``attributes`` (M).
    • Holds a forward index (object → frozenset of attributes) and a reverse index
      (attribute → frozenset of objects), so ``has_attribute``, ``attributes_of`` and
      ``objects_having`` cost proportional to one row or column.
    • Exposes a read-only numpy incidence ``matrix`` in declaration order for
      bulk mask-level closures.

    Contexts are normally produced by :class:`FormalContextBuilder`. Direct
    construction does **not** validate the inputs, so that
    :func:`fcakit.validation.validate_context` can report every structural
    problem in one pass.
    """

    id: str
    name: str
    objects: Tuple[Hashable, ...]
    attributes: Tuple[Hashable, ...]
    matrix: np.ndarray = field(repr=False)
    _forward: Mapping[Hashable, frozenset] = field(repr=False)
    _reverse: Mapping[Hashable, frozenset] = field(repr=False)
    _object_pos: Mapping[Hashable, int] = field(repr=False)
    _attribute_pos: Mapping[Hashable, int] = field(repr=False)

    def __init__(
        self,
        objects: Iterable[Hashable],
        attributes: Iterable[Hashable],
        incidence: Mapping[Hashable, Iterable[Hashable]],
        *,
        id: str = "",
        name: str = "",
    ) -> None:
        objs = tuple(objects)
        attrs = tuple(attributes)

        forward: Dict[Hashable, frozenset] = {g: _EMPTY for g in objs}
        for g, ms in incidence.items():
            forward[g] = frozenset(ms)

        reverse_sets: Dict[Hashable, set] = {m: set() for m in attrs}
        for g, ms in forward.items():
            for m in ms:
                reverse_sets.setdefault(m, set()).add(g)
        reverse = {m: frozenset(gs) for m, gs in reverse_sets.items()}

        obj_pos = {g: i for i, g in reversed(list(enumerate(objs)))}
        attr_pos = {m: j for j, m in reversed(list(enumerate(attrs)))}

        mat = np.zeros((len(objs), len(attrs)), dtype=np.bool_)
        for i, g in enumerate(objs):
            for m in forward.get(g, _EMPTY):
                j = attr_pos.get(m)
                if j is not None:
                    mat[i, j] = True
        mat.setflags(write=False)

        object.__setattr__(self, "id", id)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "objects", objs)
        object.__setattr__(self, "attributes", attrs)
        object.__setattr__(self, "matrix", mat)
        object.__setattr__(self, "_forward", MappingProxyType(forward))
        object.__setattr__(self, "_reverse", MappingProxyType(reverse))
        object.__setattr__(self, "_object_pos", MappingProxyType(obj_pos))
        object.__setattr__(self, "_attribute_pos", MappingProxyType(attr_pos))

    # Incidence queries
    def has_attribute(self, obj: Hashable, attribute: Hashable) -> bool:
        """Does object ``obj`` have ``attribute``? Unknown labels answer False."""
        return attribute in self._forward.get(obj, _EMPTY)

    def attributes_of(self, obj: Hashable) -> frozenset:
        """All attributes of ``obj`` (empty for an unknown object)."""
        return self._forward.get(obj, _EMPTY)

    def objects_having(self, attribute: Hashable) -> frozenset:
        """All objects having ``attribute`` (empty for an unknown attribute)."""
        return self._reverse.get(attribute, _EMPTY)

    # Convenience accessors
    def object_index(self, obj: Hashable) -> int:
        try:
            return self._object_pos[obj]
        except KeyError as e:
            raise KeyError(f"Unknown object: {obj!r}") from e

    def attribute_index(self, attribute: Hashable) -> int:
        try:
            return self._attribute_pos[attribute]
        except KeyError as e:
            raise KeyError(f"Unknown attribute: {attribute!r}") from e

    def has_object(self, obj: Hashable) -> bool:
        return obj in self._object_pos

    def has_declared_attribute(self, attribute: Hashable) -> bool:
        return attribute in self._attribute_pos

    def incidence_pairs(self) -> Iterator[Tuple[Hashable, Hashable]]:
        """Yield every raw (object, attribute) incidence entry, declared or not."""
        for g, ms in self._forward.items():
            for m in ms:
                yield g, m

    @property
    def n_objects(self) -> int:
        return len(self.objects)

    @property
    def n_attributes(self) -> int:
        return len(self.attributes)

    def __len__(self) -> int:
        return len(self.objects)

    def to_frame(self) -> pd.DataFrame:
        """Boolean cross table (index = objects, columns = attributes)."""
        return pd.DataFrame(
            np.array(self.matrix, dtype=bool),
            index=pd.Index(list(self.objects), dtype=object, tupleize_cols=False),
            columns=pd.Index(list(self.attributes), dtype=object, tupleize_cols=False),
        )

    def summary(self) -> Dict[str, Any]:
        """Small dict summary useful in logs/demos."""
        return {
            "id": self.id,
            "name": self.name,
            "objects": int(self.n_objects),
            "attributes": int(self.n_attributes),
            "incidences": int(self.matrix.sum()),
            "density": float(self.matrix.mean()) if self.matrix.size else 0.0,
        }


class FormalContextBuilder:
    """
    Mutable accumulator for a :class:`FormalContext`.

    Every mutator returns the builder so calls chain. ``build()`` copies the
    accumulated state, so later mutation never leaks into a built context.

    Examples
    --------
    >>> ctx = (FormalContextBuilder("lv", "Levels")
    ...        .add_object_attributes("L1", ["a"])
    ...        .add_object_attributes("L2", ["a", "b"])
    ...        .build())
    >>> sorted(ctx.attributes_of("L2"))
    ['a', 'b']
    """

    def __init__(self, id: str = "", name: str = "") -> None:
        self.id = id
        self.name = name
        self._objects: Dict[Hashable, None] = {}
        self._attributes: Dict[Hashable, None] = {}
        self._incidence: Dict[Hashable, Dict[Hashable, None]] = {}

    def add_object(self, obj: Hashable) -> "FormalContextBuilder":
        self._objects.setdefault(obj, None)
        self._incidence.setdefault(obj, {})
        return self

    def add_attribute(self, attribute: Hashable) -> "FormalContextBuilder":
        self._attributes.setdefault(attribute, None)
        return self

    def set_incidence(self, obj: Hashable, attribute: Hashable, value: bool = True) -> "FormalContextBuilder":
        """Set (or with ``value=False`` clear) ``obj I attribute``; registers both labels."""
        self.add_object(obj)
        self.add_attribute(attribute)
        if value:
            self._incidence[obj].setdefault(attribute, None)
        else:
            self._incidence[obj].pop(attribute, None)
        return self

    def add_object_attributes(self, obj: Hashable, attributes: Iterable[Hashable]) -> "FormalContextBuilder":
        self.add_object(obj)
        for m in attributes:
            self.set_incidence(obj, m, True)
        return self

    def build(self) -> FormalContext:
        return FormalContext(
            tuple(self._objects),
            tuple(self._attributes),
            {g: tuple(ms) for g, ms in self._incidence.items()},
            id=self.id,
            name=self.name,
        )


def context_from_matrix(
    objects: Sequence[Hashable],
    attributes: Sequence[Hashable],
    matrix: Any,
    *,
    id: str = "",
    name: str = "",
) -> FormalContext:
    """
    Build a context from a boolean cross table where ``matrix[i][j]`` is True iff
    object ``i`` has attribute ``j``. Attributes no object has are still declared.
    """
    mat = np.asarray(matrix, dtype=bool)
    if mat.size == 0 and len(objects) * len(attributes) == 0:
        mat = mat.reshape(len(objects), len(attributes))
    if mat.ndim != 2 or mat.shape != (len(objects), len(attributes)):
        raise ValueError(
            f"matrix shape {mat.shape} does not match {len(objects)} objects × {len(attributes)} attributes"
        )

    incidence: Dict[Hashable, set] = {}
    for i, g in enumerate(objects):
        row = incidence.setdefault(g, set())
        row.update(attributes[int(j)] for j in np.flatnonzero(mat[i]))

    return FormalContext(
        tuple(dict.fromkeys(objects)),
        tuple(dict.fromkeys(attributes)),
        incidence,
        id=id,
        name=name,
    )


def context_from_frame(df: pd.DataFrame, *, id: str = "", name: str = "") -> FormalContext:
    """
    Build a context from a DataFrame: rows are objects (index labels) and
    boolean-like columns are attributes. NA counts as absent; other columns
    are ignored.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError("context_from_frame requires a pandas DataFrame.")

    bool_cols = [c for c in df.columns if _is_boolean_like(df[c])]
    builder = FormalContextBuilder(id, name)
    for m in bool_cols:
        builder.add_attribute(m)

    masks = {c: _as_bool_array(df[c]) for c in bool_cols}
    for i, g in enumerate(df.index):
        builder.add_object(g)
        for c in bool_cols:
            if masks[c][i]:
                builder.set_incidence(g, c)
    return builder.build()
