# src/fcakit/forms/pretty.py

"""
Formatting helpers (no monkey-patching).

Every helper takes optional formatter callbacks for objects and attributes and
treats its inputs as read-only.

Use:
    from fcakit.forms.pretty import context_to_cross_table, describe_concept
    print(context_to_cross_table(ctx))
    print(describe_concept(concept, context=ctx))   # declaration order
"""

from __future__ import annotations
from typing import Callable, Hashable, Iterable, List, Optional, Sequence

from ..context.core import FormalContext
from ..concepts.concept import FormalConcept
from ..concepts.lattice import ConceptLattice
from ..relations.delta import AttributeDelta
from ..utils import ordered

__all__ = [
    "context_to_cross_table",
    "describe_concept",
    "describe_concept_lattice",
    "describe_delta",
]

Formatter = Callable[[Hashable], str]


def _join(items: Iterable[Hashable], order: Optional[Sequence[Hashable]], fmt: Formatter) -> str:
    return ", ".join(fmt(x) for x in ordered(items, order, key=fmt)) or "∅"


def context_to_cross_table(
    context: FormalContext,
    *,
    object_formatter: Optional[Formatter] = None,
    attribute_formatter: Optional[Formatter] = None,
) -> str:
    """
    Cross table of a context: '×' where the incidence holds, '·' elsewhere.

    >>> from fcakit.context import FormalContextBuilder
    >>> ctx = FormalContextBuilder().add_object_attributes("L1", ["a"]).add_attribute("b").build()
    >>> print(context_to_cross_table(ctx))
           │ a b
    ───────┼────
    L1     │ × ·
    """
    fmt_g = object_formatter or str
    fmt_m = attribute_formatter or str

    obj_strs = [fmt_g(g) for g in context.objects]
    attr_strs = [fmt_m(m) for m in context.attributes]

    obj_w = max([len(s) for s in obj_strs] + [6])
    attr_w = max([len(s) for s in attr_strs] + [1])

    lines: List[str] = []
    lines.append(f"{' ' * obj_w} │ " + " ".join(a.ljust(attr_w) for a in attr_strs))
    lines.append(f"{'─' * obj_w}─┼─" + "─" * max((attr_w + 1) * len(attr_strs) - 1, 0))

    for g, g_str in zip(context.objects, obj_strs):
        cells = []
        for m in context.attributes:
            mark = "×" if context.has_attribute(g, m) else "·"
            cells.append(mark.rjust(attr_w // 2 + 1).ljust(attr_w))
        lines.append(f"{g_str.ljust(obj_w)} │ " + " ".join(cells))

    return "\n".join(line.rstrip() for line in lines)


def describe_concept(
    concept: FormalConcept,
    *,
    object_formatter: Optional[Formatter] = None,
    attribute_formatter: Optional[Formatter] = None,
    context: Optional[FormalContext] = None,
) -> str:
    """
    '({L1, L2}, {a})' style description; '∅' for an empty side.

    With ``context`` the members follow declaration order, otherwise they are
    sorted by their formatted text.
    """
    fmt_g = object_formatter or str
    fmt_m = attribute_formatter or str
    g_order = context.objects if context is not None else None
    m_order = context.attributes if context is not None else None
    ext = _join(concept.extent, g_order, fmt_g)
    itt = _join(concept.intent, m_order, fmt_m)
    return f"({{{ext}}}, {{{itt}}})"


def describe_concept_lattice(
    lattice: ConceptLattice,
    *,
    object_formatter: Optional[Formatter] = None,
    attribute_formatter: Optional[Formatter] = None,
) -> str:
    """Header with sizes, then one line per concept with [⊤]/[⊥] markers."""
    ctx = lattice.context
    lines: List[str] = [
        f'Concept Lattice for "{ctx.name}"',
        f"Objects: {ctx.n_objects}",
        f"Attributes: {ctx.n_attributes}",
        f"Concepts: {len(lattice)}",
        "",
        "Concepts (ordered by extent size):",
    ]
    for c in lattice.concepts:
        marker = ""
        if c == lattice.top:
            marker += " [⊤]"
        if c == lattice.bottom:
            marker += " [⊥]"
        desc = describe_concept(
            c,
            object_formatter=object_formatter,
            attribute_formatter=attribute_formatter,
            context=ctx,
        )
        lines.append(f"  {desc}{marker}")
    return "\n".join(lines)


def describe_delta(
    delta: AttributeDelta,
    *,
    attribute_formatter: Optional[Formatter] = None,
    order: Optional[Sequence[Hashable]] = None,
) -> str:
    """ADDED/REMOVED blocks with '+'/'-' bullets, or a no-difference line."""
    fmt = attribute_formatter or str
    if delta.is_empty:
        return "No difference."
    lines: List[str] = []
    if delta.added:
        lines.append(f"ADDED ({len(delta.added)})")
        lines.extend(f"  + {fmt(m)}" for m in ordered(delta.added, order, key=fmt))
    if delta.removed:
        lines.append(f"REMOVED ({len(delta.removed)})")
        lines.extend(f"  - {fmt(m)}" for m in ordered(delta.removed, order, key=fmt))
    return "\n".join(lines)
