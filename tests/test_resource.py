import pytest

from tlib2d.resource import Resource


def test_defaults():
    r = Resource()
    assert (r.minimum, r.maximum, r.value) == (0, 10, 10)
    assert r.full()


def test_value_defaults_to_maximum():
    r = Resource(2, 8)
    assert r.value == 8


def test_initial_value_is_clamped():
    assert Resource(0, 10, 15).value == 10
    assert Resource(0, 10, -5).value == 0


def test_maximum_below_minimum_raises():
    with pytest.raises(ValueError):
        Resource(5, 1)


def test_reduce_to_depletion():
    r = Resource(0, 10)
    r.reduce(100)
    assert r.value == r.minimum
    assert r.depleted()
    assert not r.full()


def test_add_clamps_to_maximum():
    r = Resource(0, 10, 5)
    r.add(100)
    assert r.value == r.maximum
    assert r.full()


def test_set_min_above_value_raises_value():
    r = Resource(0, 10, 3)
    r.set_min(6)
    assert r.value == 6
    assert r.depleted()


def test_set_max_below_value_lowers_value():
    r = Resource(0, 10, 10)
    r.set_max(4)
    assert r.value == 4


def test_set_max_and_value():
    r = Resource(0, 10, 1)
    r.set_max_and_value(25)
    assert r.maximum == 25
    assert r.value == 25