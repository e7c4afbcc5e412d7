from itertools import chain, combinations

import pandas as pd
import pytest

from fcakit.config import EnumerationConfig
from fcakit.concepts import (
    Ordering,
    FormalConcept,
    ConceptLattice,
    LatticeCache,
    compute_concept_lattice,
    compare_concepts,
    closure_objects,
    derive_attributes,
    is_valid_concept,
)
from fcakit.context import FormalContextBuilder


def _all_closed_extents(ctx):
    objs = list(ctx.objects)
    subsets = chain.from_iterable(combinations(objs, k) for k in range(len(objs) + 1))
    return {closure_objects(ctx, s) for s in subsets}


# -----------------------
# Scenario / fixtures
# -----------------------

def test_scenario_lattice(scenario_ctx):
    lattice = compute_concept_lattice(scenario_ctx)
    assert len(lattice) == 3
    expected = {
        FormalConcept({"L0", "L1", "L2"}, set()),
        FormalConcept({"L1", "L2"}, {"a"}),
        FormalConcept({"L2"}, {"a", "b"}),
    }
    assert set(lattice.concepts) == expected
    assert lattice.top == FormalConcept({"L0", "L1", "L2"}, set())
    assert lattice.bottom == FormalConcept({"L2"}, {"a", "b"})
    # bottom first, top last
    assert lattice.concepts[0] == lattice.bottom
    assert lattice.concepts[-1] == lattice.top


def test_integrity_lattice_is_a_chain(integrity_ctx):
    lattice = compute_concept_lattice(integrity_ctx)
    assert len(lattice) == 4
    assert [len(c.extent) for c in lattice.concepts] == [1, 2, 3, 4]
    for lo, hi in zip(lattice.concepts, lattice.concepts[1:]):
        assert compare_concepts(lo, hi) is Ordering.LESS
    assert lattice.top.extent == frozenset(integrity_ctx.objects)
    assert lattice.bottom.intent == frozenset(integrity_ctx.attributes)


def _c(extent, intent):
    return FormalConcept(extent.split(), intent.split())


# Derived by hand from the cross table in conftest.py
LIVING_CONCEPTS = {
    _c("leech bream frog dog spike_weed reed bean maize", "needs_water"),
    _c("leech frog dog reed bean maize", "needs_water lives_on_land"),
    _c("leech bream frog spike_weed reed", "needs_water lives_in_water"),
    _c("leech bream frog dog", "needs_water can_move"),
    _c("spike_weed reed maize", "needs_water monocotyledon"),
    _c("leech bream frog", "needs_water lives_in_water can_move"),
    _c("leech frog dog", "needs_water lives_on_land can_move"),
    _c("bream frog dog", "needs_water has_limbs can_move"),
    _c("leech frog reed", "needs_water lives_in_water lives_on_land"),
    _c("spike_weed reed", "needs_water lives_in_water monocotyledon"),
    _c("reed maize", "needs_water lives_on_land monocotyledon"),
    _c("leech frog", "needs_water lives_in_water lives_on_land can_move"),
    _c("bream frog", "needs_water lives_in_water has_limbs can_move"),
    _c("frog dog", "needs_water lives_on_land has_limbs can_move"),
    _c("reed", "needs_water lives_in_water lives_on_land monocotyledon"),
    _c("bean", "needs_water lives_on_land dicotyledon"),
    _c("frog", "needs_water lives_in_water lives_on_land has_limbs can_move"),
    _c("", "needs_water lives_in_water lives_on_land has_limbs monocotyledon dicotyledon can_move"),
}


def test_living_beings_concepts_match_reference(living_beings):
    lattice = compute_concept_lattice(living_beings)
    assert len(LIVING_CONCEPTS) == 18
    assert set(lattice.concepts) == LIVING_CONCEPTS


def test_living_beings_lattice(living_beings):
    lattice = compute_concept_lattice(living_beings)
    assert len(lattice) == 18
    assert lattice.top == FormalConcept(living_beings.objects, {"needs_water"})
    assert lattice.bottom == FormalConcept(set(), living_beings.attributes)
    movers = lattice.find_by_intent({"needs_water", "can_move"})
    assert movers is not None
    assert movers.extent == frozenset({"leech", "bream", "frog", "dog"})
    sizes = sorted(len(c.extent) for c in lattice)
    assert sizes == [0, 1, 1, 1, 2, 2, 2, 2, 2, 3, 3, 3, 3, 3, 4, 5, 6, 8]


def test_lattice_is_complete_and_duplicate_free(living_beings, random_contexts):
    for ctx in [living_beings] + random_contexts:
        lattice = compute_concept_lattice(ctx)
        extents = [c.extent for c in lattice.concepts]
        assert len(set(extents)) == len(extents)
        assert set(extents) == _all_closed_extents(ctx)
        for c in lattice:
            assert is_valid_concept(ctx, c.extent, c.intent)
            assert c.intent == derive_attributes(ctx, c.extent)


def test_top_and_bottom_bounds(living_beings, random_contexts):
    for ctx in [living_beings] + random_contexts:
        lattice = compute_concept_lattice(ctx)
        assert lattice.top.extent == frozenset(ctx.objects)
        for c in lattice:
            assert lattice.bottom <= c <= lattice.top


def test_order_consistency(living_beings):
    lattice = compute_concept_lattice(living_beings)
    for c1 in lattice:
        for c2 in lattice:
            cmp = compare_concepts(c1, c2)
            if cmp is Ordering.LESS:
                assert c1.intent > c2.intent
            elif cmp is Ordering.EQUAL:
                assert c1 == c2


# -----------------------
# Edge cases
# -----------------------

def test_zero_object_context():
    ctx = FormalContextBuilder().add_attribute("x").add_attribute("y").build()
    lattice = compute_concept_lattice(ctx)
    assert len(lattice) == 1
    only = lattice.concepts[0]
    assert only.extent == frozenset()
    assert only.intent == frozenset({"x", "y"})
    assert lattice.top == lattice.bottom == only
    assert lattice.edges() == []


def test_zero_attribute_context():
    ctx = FormalContextBuilder().add_object("g").add_object("h").build()
    lattice = compute_concept_lattice(ctx)
    assert len(lattice) == 1
    assert lattice.top == FormalConcept({"g", "h"}, set())


def test_empty_concepts_rejected(scenario_ctx):
    with pytest.raises(ValueError):
        ConceptLattice(scenario_ctx, [])


# -----------------------
# Navigation
# -----------------------

def test_covers_in_scenario(scenario_ctx):
    lattice = compute_concept_lattice(scenario_ctx)
    mid = lattice.find_by_extent({"L1", "L2"})
    assert lattice.superconcepts(mid) == [lattice.top]
    assert lattice.subconcepts(mid) == [lattice.bottom]
    assert lattice.superconcepts(lattice.top) == []
    assert lattice.subconcepts(lattice.bottom) == []
    assert set(lattice.edges()) == {(lattice.bottom, mid), (mid, lattice.top)}


def test_covers_are_immediate(living_beings):
    lattice = compute_concept_lattice(living_beings)
    for lo, hi in lattice.edges():
        assert lo < hi
        assert not any(lo < c < hi for c in lattice)
    # only the top lacks an upper cover
    for c in lattice:
        if c != lattice.top:
            assert lattice.superconcepts(c)


def test_join_and_meet(integrity_ctx, living_beings):
    lattice = compute_concept_lattice(integrity_ctx)
    c1 = lattice.find_by_extent({"L2", "L3"})
    c2 = lattice.find_by_extent({"L1", "L2", "L3"})
    joined = lattice.join(c1, c2)
    assert "L1" in joined.extent and "L2" in joined.extent
    assert joined is c2
    assert lattice.meet(c1, c2) is c1

    lattice = compute_concept_lattice(living_beings)
    bean = lattice.find_by_extent({"bean"})
    bream = lattice.find_by_extent({"bream", "frog"})
    assert lattice.join(bean, bream) == lattice.top
    assert lattice.meet(bean, bream) == lattice.bottom
    for a in lattice:
        for b in lattice:
            j = lattice.join(a, b)
            m = lattice.meet(a, b)
            assert a <= j and b <= j
            assert m <= a and m <= b
            assert j in lattice and m in lattice


def test_lookup_and_foreign_concepts(scenario_ctx):
    lattice = compute_concept_lattice(scenario_ctx)
    assert lattice.find_by_intent({"a"}) == FormalConcept({"L1", "L2"}, {"a"})
    assert lattice.find_by_intent({"b"}) is None
    assert lattice.find_by_extent({"L0"}) is None

    foreign = FormalConcept({"L0"}, set())
    assert foreign not in lattice
    with pytest.raises(KeyError):
        lattice.subconcepts(foreign)
    with pytest.raises(KeyError):
        lattice.superconcepts(FormalConcept({"L2"}, {"a"}))


# -----------------------
# Export / config / logging
# -----------------------

def test_to_frame_and_summary(scenario_ctx):
    lattice = compute_concept_lattice(scenario_ctx)
    df = lattice.to_frame()
    assert isinstance(df, pd.DataFrame)
    assert df.index.name == "concept_id"
    assert list(df.columns) == [
        "extent", "intent", "n_objects", "n_attributes", "support", "is_top", "is_bottom",
    ]
    assert df.loc[0, "extent"] == ("L2",)
    assert df.loc[0, "intent"] == ("a", "b")
    assert bool(df.loc[0, "is_bottom"])
    assert bool(df.loc[2, "is_top"])
    assert df["support"].tolist() == pytest.approx([1 / 3, 2 / 3, 1.0])

    s = lattice.summary()
    assert s == {"context": "Scenario", "objects": 3, "attributes": 2, "concepts": 3, "edges": 2}


def test_config_guards(living_beings):
    with pytest.raises(ValueError):
        compute_concept_lattice(living_beings, EnumerationConfig(max_objects=4))
    with pytest.raises(ValueError):
        compute_concept_lattice(living_beings, EnumerationConfig(max_attributes=3))
    lattice = compute_concept_lattice(living_beings, EnumerationConfig(max_objects=8, max_attributes=7))
    assert len(lattice) == 18


def test_verbose_logs_events(scenario_ctx, capsys):
    compute_concept_lattice(scenario_ctx, verbose=True)
    out = capsys.readouterr().out
    assert "[fcakit]" in out
    assert "found 3 concepts" in out

    compute_concept_lattice(scenario_ctx)
    assert capsys.readouterr().out == ""


# -----------------------
# LatticeCache
# -----------------------

def test_lattice_cache_is_lazy_and_reused(scenario_ctx):
    calls = []

    def factory():
        calls.append(1)
        return scenario_ctx

    cache = LatticeCache(factory)
    assert not cache.is_built
    assert calls == []
    first = cache.lattice
    assert cache.is_built
    assert cache.lattice is first
    assert len(calls) == 1


def test_lattice_cache_rebuild_and_clear(scenario_ctx):
    cache = LatticeCache.for_context(scenario_ctx)
    first = cache.lattice
    second = cache.rebuild()
    assert second is not first
    assert len(second) == len(first)
    cache.clear()
    assert not cache.is_built
    assert cache.context is scenario_ctx
