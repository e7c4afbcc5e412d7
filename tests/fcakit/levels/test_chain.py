import pytest

from fcakit.concepts import Ordering
from fcakit.levels import OrderedLevel, BoundedChain


@pytest.fixture
def chain():
    return BoundedChain.from_names("sil", "Integrity", ["L0", "L1", "L2", "L3"])


def test_bounds(chain):
    assert chain.bottom.id == "L0"
    assert chain.top.id == "L3"
    assert len(chain) == 4
    assert [lv.ordinal for lv in chain] == [0, 1, 2, 3]


def test_compare_and_leq(chain):
    l0, l1, l2, l3 = chain.levels
    assert chain.compare(l1, l2) is Ordering.LESS
    assert chain.compare(l3, l0) is Ordering.GREATER
    assert chain.compare(l2, l2) is Ordering.EQUAL
    assert chain.leq(l0, l3)
    assert not chain.leq(l3, l0)


def test_join_and_meet_are_max_and_min(chain):
    for a in chain:
        for b in chain:
            assert chain.join(a, b).ordinal == max(a.ordinal, b.ordinal)
            assert chain.meet(a, b).ordinal == min(a.ordinal, b.ordinal)
            assert chain.compare(a, b) is not Ordering.INCOMPARABLE


def test_from_ordinal(chain):
    assert chain.from_ordinal(2).id == "L2"
    assert chain.from_ordinal(7) is None


def test_normalize(chain):
    assert [chain.normalize(lv) for lv in chain] == pytest.approx([0.0, 1 / 3, 2 / 3, 1.0])


def test_normalize_single_level():
    chain = BoundedChain("one", "One", [OrderedLevel("only", 5, "Only")])
    assert chain.normalize(chain.top) == 0.0
    assert chain.top is chain.bottom


def test_normalize_uses_position_not_ordinal():
    chain = BoundedChain("gaps", "Gaps", [
        OrderedLevel("low", 10), OrderedLevel("mid", 20), OrderedLevel("high", 40),
    ])
    assert chain.normalize(chain.from_ordinal(20)) == pytest.approx(0.5)


def test_normalize_foreign_level(chain):
    with pytest.raises(KeyError):
        chain.normalize(OrderedLevel("L9", 9))


def test_levels_of_another_chain_rejected(chain):
    other = BoundedChain.from_names("other", "Other", ["L0", "X1"])
    l1 = chain.from_ordinal(1)
    with pytest.raises(KeyError):
        chain.compare(l1, other.top)
    with pytest.raises(KeyError):
        chain.leq(other.top, l1)
    with pytest.raises(KeyError):
        chain.join(l1, OrderedLevel("L9", 9))
    # same id, different ordinal
    with pytest.raises(KeyError):
        chain.meet(l1, OrderedLevel("L2", 7, "L2"))


def test_join_returns_the_chains_own_level(chain):
    l1, l3 = chain.from_ordinal(1), chain.from_ordinal(3)
    assert chain.join(l1, l3) is l3
    assert chain.meet(l1, l3) is l1


def test_empty_chain_rejected():
    with pytest.raises(ValueError):
        BoundedChain("empty", "Empty", [])


def test_non_increasing_ordinals_rejected():
    with pytest.raises(ValueError):
        BoundedChain("bad", "Bad", [OrderedLevel("a", 0), OrderedLevel("b", 0)])
    with pytest.raises(ValueError):
        BoundedChain("bad", "Bad", [OrderedLevel("a", 2), OrderedLevel("b", 1)])


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        BoundedChain("dup", "Dup", [OrderedLevel("a", 0), OrderedLevel("a", 1)])


def test_level_str():
    assert str(OrderedLevel("L1", 1, "Level one")) == "Level one"
    assert str(OrderedLevel("L1", 1)) == "L1"
