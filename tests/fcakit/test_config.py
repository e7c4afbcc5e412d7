import pytest

from fcakit.config import EnumerationConfig
from fcakit.utils import log_event, ordered


def test_defaults_have_no_limits():
    cfg = EnumerationConfig()
    assert cfg.max_objects is None and cfg.max_attributes is None
    cfg.check(10_000, 10_000)


def test_negative_limits_rejected():
    with pytest.raises(ValueError):
        EnumerationConfig(max_objects=-1)
    with pytest.raises(ValueError):
        EnumerationConfig(max_attributes=-3)


def test_check_enforces_limits():
    cfg = EnumerationConfig(max_objects=5, max_attributes=2)
    cfg.check(5, 2)
    with pytest.raises(ValueError, match="max_objects"):
        cfg.check(6, 2)
    with pytest.raises(ValueError, match="max_attributes"):
        cfg.check(5, 3)


def test_log_event_prefix(capsys):
    log_event("hello")
    assert capsys.readouterr().out == "[fcakit] hello\n"


def test_ordered_helper():
    assert ordered({"b", "a", "c"}) == ["a", "b", "c"]
    assert ordered({"b", "a", "zz"}, ["b", "a"]) == ["b", "a", "zz"]
    assert ordered({3, 10, 2}, key=lambda x: f"{x:03d}") == [2, 3, 10]
