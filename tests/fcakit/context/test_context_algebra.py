import pytest

from fcakit.context import FormalContextBuilder, subcontext, apposition, subposition


def _ctx(id, rows, attributes=()):
    b = FormalContextBuilder(id=id, name=id.upper())
    for m in attributes:
        b.add_attribute(m)
    for g, ms in rows.items():
        b.add_object_attributes(g, ms)
    return b.build()


# -----------------------
# subcontext
# -----------------------

def test_subcontext_restricts_objects(integrity_ctx):
    sub = subcontext(integrity_ctx, objects=["L1", "L2"])
    assert sub.objects == ("L1", "L2")
    assert sub.attributes == integrity_ctx.attributes
    assert sub.attributes_of("L2") == integrity_ctx.attributes_of("L2")


def test_subcontext_restricts_attributes(integrity_ctx):
    sub = subcontext(integrity_ctx, attributes=["code_review", "unit_test"])
    assert sub.attributes == ("unit_test", "code_review")  # source declaration order
    assert sub.has_attribute("L1", "unit_test")
    assert sub.attributes_of("L3") == frozenset({"unit_test", "code_review"})


def test_subcontext_drops_unknown_labels_and_renames(integrity_ctx):
    sub = subcontext(integrity_ctx, objects=["L3", "L9"], attributes=["formal_review", "ghost"])
    assert sub.objects == ("L3",)
    assert sub.attributes == ("formal_review",)
    assert sub.id == "integrity_sub"
    assert sub.name == "Integrity levels (subcontext)"


def test_subcontext_does_not_touch_source(integrity_ctx):
    before = integrity_ctx.attributes_of("L3")
    subcontext(integrity_ctx, objects=["L0"], attributes=[])
    assert integrity_ctx.attributes_of("L3") == before


# -----------------------
# apposition
# -----------------------

def test_apposition_combines_attributes():
    k1 = _ctx("k1", {"A": ["x"], "B": ["y"]})
    k2 = _ctx("k2", {"A": ["p"], "B": ["q"]})
    combined = apposition(k1, k2)
    assert len(combined.objects) == 2
    assert combined.attributes == ("x", "y", "p", "q")
    assert combined.has_attribute("A", "x")
    assert combined.has_attribute("A", "p")
    assert combined.has_attribute("B", "q")
    assert not combined.has_attribute("B", "p")
    assert combined.id == "k1|k2"


def test_apposition_accepts_reordered_objects():
    k1 = _ctx("k1", {"A": ["x"], "B": []})
    k2 = _ctx("k2", {"B": ["p"], "A": []})
    combined = apposition(k1, k2)
    assert combined.objects == ("A", "B")
    assert combined.attributes_of("B") == frozenset({"p"})


def test_apposition_rejects_different_objects():
    k1 = _ctx("k1", {"A": ["x"], "B": ["y"]})
    k2 = _ctx("k2", {"A": ["p"], "C": ["q"]})
    with pytest.raises(ValueError, match="identical object sets"):
        apposition(k1, k2)


# -----------------------
# subposition
# -----------------------

def test_subposition_stacks_objects():
    k1 = _ctx("k1", {"A": ["x"]}, attributes=["x", "y"])
    k2 = _ctx("k2", {"B": ["x", "y"]}, attributes=["x", "y"])
    combined = subposition(k1, k2)
    assert combined.objects == ("A", "B")
    assert combined.attributes == ("x", "y")
    assert combined.has_attribute("A", "x")
    assert combined.has_attribute("B", "x")
    assert not combined.has_attribute("A", "y")


def test_subposition_tolerates_different_attributes():
    k1 = _ctx("k1", {"A": ["x"]})
    k2 = _ctx("k2", {"B": ["z"], "A": ["w"]})
    combined = subposition(k1, k2)
    assert combined.attributes == ("x", "z", "w")
    assert combined.attributes_of("A") == frozenset({"x", "w"})
    assert combined.attributes_of("B") == frozenset({"z"})
