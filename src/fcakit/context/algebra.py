# src/fcakit/context/algebra.py
"""
Structural operations that build new contexts from existing ones.

- Subcontext:   K[H, N]   restrict to objects H ⊆ G and attributes N ⊆ M
- Apposition:   K₁ | K₂   same objects, attributes side by side
- Subposition:  K₁ / K₂   same attributes, objects stacked

All results go through :class:`~fcakit.context.core.FormalContextBuilder`, so
they carry no duplicate labels and every incidence references declared labels.
"""

from __future__ import annotations
from typing import Hashable, Iterable, Optional

from .core import FormalContext, FormalContextBuilder

__all__ = [
    "subcontext",
    "apposition",
    "subposition",
]


def _copy_rows(builder: FormalContextBuilder, context: FormalContext, objects, attributes) -> None:
    for g in objects:
        builder.add_object(g)
        row = context.attributes_of(g)
        for m in attributes:
            if m in row:
                builder.set_incidence(g, m)


def subcontext(
    context: FormalContext,
    objects: Optional[Iterable[Hashable]] = None,
    attributes: Optional[Iterable[Hashable]] = None,
) -> FormalContext:
    """
    Restrict ``context`` to the given objects and/or attributes.

    Omitted arguments mean "all". Labels the context does not declare are
    dropped silently; declaration order of ``context`` is preserved.
    """
    if objects is None:
        objs = list(context.objects)
    else:
        keep = set(objects)
        objs = [g for g in context.objects if g in keep]

    if attributes is None:
        attrs = list(context.attributes)
    else:
        keep_m = set(attributes)
        attrs = [m for m in context.attributes if m in keep_m]

    builder = FormalContextBuilder(f"{context.id}_sub", f"{context.name} (subcontext)")
    for m in attrs:
        builder.add_attribute(m)
    _copy_rows(builder, context, objs, attrs)
    return builder.build()


def apposition(context1: FormalContext, context2: FormalContext) -> FormalContext:
    """
    K₁ | K₂ over a shared object set.

    Raises
    ------
    ValueError
        If the two contexts do not declare exactly the same objects.
    """
    if set(context1.objects) != set(context2.objects):
        only1 = [g for g in context1.objects if g not in set(context2.objects)]
        only2 = [g for g in context2.objects if g not in set(context1.objects)]
        raise ValueError(
            "Apposition requires contexts with identical object sets "
            f"(only in first: {only1!r}, only in second: {only2!r})"
        )

    builder = FormalContextBuilder(
        f"{context1.id}|{context2.id}",
        f"{context1.name} | {context2.name}",
    )
    for m in context1.attributes:
        builder.add_attribute(m)
    for m in context2.attributes:
        builder.add_attribute(m)

    _copy_rows(builder, context1, context1.objects, context1.attributes)
    _copy_rows(builder, context2, context1.objects, context2.attributes)
    return builder.build()


def subposition(context1: FormalContext, context2: FormalContext) -> FormalContext:
    """
    K₁ / K₂: objects of both contexts stacked over the union of attributes.

    Differing attribute sets are tolerated (each object keeps the incidences
    of its own context); an object present in both keeps the union.
    """
    builder = FormalContextBuilder(
        f"{context1.id}/{context2.id}",
        f"{context1.name} / {context2.name}",
    )
    for m in context1.attributes:
        builder.add_attribute(m)
    for m in context2.attributes:
        builder.add_attribute(m)

    _copy_rows(builder, context1, context1.objects, context1.attributes)
    _copy_rows(builder, context2, context2.objects, context2.attributes)
    return builder.build()
