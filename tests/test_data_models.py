import math
import random

import pytest

from gravsim.constants import COLOR_OPTIONS, DEFAULT_TRAIL_THICKNESS
from gravsim.data_models import Body, BodyStyle
from gravsim.errors import InvalidArgument
from gravsim.vector_utils import Vector2


def make_body(mass=1.0, x=0.0, y=0.0, mx=0.0, my=0.0) -> Body:
    return Body(mass=mass, position=Vector2(x, y), momentum=Vector2(mx, my))


def test_radius_is_ten_times_mass() -> None:
    assert make_body(mass=0.5).radius == 5.0


def test_gravitational_coefficient() -> None:
    a = make_body(1.0, 0, 0)
    b = make_body(1.0, 10, 0)

    assert a.gravitational_coefficient(b) == pytest.approx(0.005)
    assert b.gravitational_coefficient(a) == pytest.approx(0.005)


def test_gravitational_coefficient_scales_with_masses() -> None:
    a = make_body(0.5, 0, 0)
    b = make_body(0.2, 3, 4)

    assert a.gravitational_coefficient(b) == pytest.approx(0.5 * 0.2 / 25 * 0.5)


def test_apply_gravity_pulls_toward_other() -> None:
    a = make_body(1.0, 0, 0)
    b = make_body(1.0, 10, 0)

    a.apply_gravity(b)

    assert a.momentum.x == pytest.approx(0.05)
    assert a.momentum.y == 0
    assert a.position == Vector2(0, 0)
    assert b.momentum == Vector2(0, 0)


def test_apply_gravity_accumulates_onto_existing_momentum() -> None:
    a = make_body(1.0, 0, 0, mx=1.0, my=-1.0)
    b = make_body(1.0, 0, 10)

    a.apply_gravity(b)

    assert a.momentum.x == pytest.approx(1.0)
    assert a.momentum.y == pytest.approx(-1.0 + 0.05)


def test_coincident_bodies_give_nan_momentum() -> None:
    a = make_body(1.0, 2, 2)
    b = make_body(1.0, 2, 2)

    assert a.gravitational_coefficient(b) == math.inf
    a.apply_gravity(b)

    assert math.isnan(a.momentum.x)
    assert math.isnan(a.momentum.y)


def test_advance_moves_by_momentum_without_trail_by_default() -> None:
    a = make_body(1.0, 1, 1, mx=2, my=-3)

    a.advance()

    assert a.position == Vector2(3, -2)
    assert a.trail_capacity == 0
    assert len(a.trail) == 0


def test_advance_records_pre_step_position() -> None:
    a = make_body(1.0, 0, 0, mx=1, my=0)
    a.set_trail_capacity(5)

    a.advance()
    a.advance()

    assert list(a.trail) == [Vector2(0, 0), Vector2(1, 0)]
    assert a.position == Vector2(2, 0)


def test_trail_keeps_newest_entries_when_full() -> None:
    a = make_body(1.0, 0, 0, mx=1, my=0)
    a.set_trail_capacity(3)

    for _ in range(10):
        a.advance()
        assert len(a.trail) <= 3

    assert [p.x for p in a.trail] == [7, 8, 9]


def test_shrinking_trail_capacity_drops_oldest() -> None:
    a = make_body(1.0, 0, 0, mx=1, my=0)
    a.set_trail_capacity(10)
    for _ in range(6):
        a.advance()

    a.set_trail_capacity(2)

    assert [p.x for p in a.trail] == [4, 5]
    a.set_trail_capacity(0)
    assert len(a.trail) == 0


@pytest.mark.parametrize("n", [-1, 100001, 2.5, "10", True])
def test_set_trail_capacity_rejects_bad_values(n) -> None:
    a = make_body()
    a.set_trail_capacity(4)

    with pytest.raises(InvalidArgument):
        a.set_trail_capacity(n)
    assert a.trail_capacity == 4


@pytest.mark.parametrize("n", [0, 100000])
def test_set_trail_capacity_accepts_bounds(n) -> None:
    a = make_body()

    assert a.set_trail_capacity(n) == n
    assert a.trail_capacity == n


def test_body_string_snapshot() -> None:
    text = str(make_body(1.0, 1, 2, mx=3, my=4))

    assert text.startswith("BODY SNAPSHOT")
    assert "Position: [ 1, 2 ]" in text
    assert "Motion vector: [ 3, 4 ]" in text


def test_style_color_index_validation() -> None:
    style = BodyStyle(radius=10.0)

    assert style.set_color_index(len(COLOR_OPTIONS) - 1) == len(COLOR_OPTIONS) - 1
    assert style.color == COLOR_OPTIONS[-1]
    for bad in (-1, len(COLOR_OPTIONS)):
        with pytest.raises(InvalidArgument):
            style.set_color_index(bad)
    assert style.color_index == len(COLOR_OPTIONS) - 1


def test_style_random_color_is_in_palette() -> None:
    style = BodyStyle(radius=10.0)
    rng = random.Random(42)

    for _ in range(50):
        i = style.set_random_color(rng)
        assert 0 <= i < len(COLOR_OPTIONS)


def test_style_trail_thickness_bounded_by_radius() -> None:
    style = BodyStyle(radius=5.0)

    assert style.trail_thickness == DEFAULT_TRAIL_THICKNESS
    assert style.set_trail_thickness(5.0) == 5.0
    for bad in (0, -1, 5.01, float("nan"), float("inf"), "3", None, True):
        with pytest.raises(InvalidArgument):
            style.set_trail_thickness(bad)
    assert style.trail_thickness == 5.0


def test_mass_is_fixed_after_construction() -> None:
    body = make_body(mass=3.0)

    with pytest.raises(AttributeError):
        body.mass = 2.0
    assert body.mass == 3.0
    assert body.radius == 30.0
