import math

import pytest

from tlib2d.geometry import Circle, Rect, Vec2


def test_add_then_subtract_round_trips():
    a, b = Vec2(1.5, -2.0), Vec2(7.0, 3.25)
    assert (a + b) - b == a


def test_scalar_and_vector_multiplication():
    v = Vec2(2.0, 3.0)
    assert v * 2 == 2 * v
    assert (v * Vec2(1.0, 1.0)) == v
    assert (v * 4) / 4 == v


def test_reflect_across_horizontal_axis_flips_y():
    v = Vec2(3.0, 4.0)
    r = v.reflect(Vec2(1.0, 0.0))
    assert r.x == v.x
    assert r.y == -v.y


def test_reflect_across_vertical_axis_flips_x():
    v = Vec2(-5.0, 2.0)
    r = v.reflect(Vec2(0.0, 1.0))
    assert r.x == -v.x
    assert r.y == v.y


def test_reflect_twice_is_identity():
    v = Vec2(1.25, -7.5)
    axis = Vec2(2.0, 3.0)
    back = v.reflect(axis).reflect(axis)
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)


def test_reflect_zero_axis_raises():
    with pytest.raises(ValueError):
        Vec2(1.0, 1.0).reflect(Vec2(0.0, 0.0))


def test_rotate_by_pi_negates():
    v = Vec2(3.0, -2.0)
    r = v.rotated(math.pi)
    assert r.x == pytest.approx(-v.x)
    assert r.y == pytest.approx(-v.y)


def test_rotation_preserves_length():
    v = Vec2(3.0, 4.0)
    origin = Vec2()
    assert v.rotated(0.7).distance_to(origin) == pytest.approx(v.distance_to(origin))


def test_rounded_halves_go_away_from_zero():
    assert Vec2(1.5, -2.5).rounded() == Vec2(2.0, -3.0)


def test_distance_and_squared_agree():
    a, b = Vec2(0.0, 0.0), Vec2(3.0, 4.0)
    assert a.distance_to(b) == pytest.approx(5.0)
    assert a.distance_to_squared(b) == pytest.approx(a.distance_to(b) ** 2)


def test_from_ltrb_round_trip():
    lt, rb = Vec2(20.0, 20.0), Vec2(120.0, 150.0)
    r = Rect.from_ltrb(lt, rb)
    assert r.pos() == lt
    assert Vec2(r.right(), r.bottom()) == rb
    assert r.pos() + r.size() == rb


def test_contains_center_and_excludes_outside():
    r = Rect(10.0, 10.0, 20.0, 150.0)
    assert r.contains(r.center())
    assert r.contains(r.pos())
    assert not r.contains(Vec2(r.right(), r.center().y))
    assert not r.contains(Vec2(r.x - 1, r.y))


def test_intersects_circle():
    r = Rect(10.0, 10.0, 20.0, 150.0)
    c = r.center()
    assert r.intersects_circle(Circle(c.x, c.y, 1.0))
    assert r.intersects_circle(Circle(r.right() + 4.0, c.y, 8.0))
    assert not r.intersects_circle(Circle(r.right() + 50.0, c.y, 8.0))