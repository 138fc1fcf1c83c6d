import random

import pytest

from gravsim.constants import DEFAULT_TRAIL_LENGTH, MAX_SPEED
from gravsim.controller import SimulationController
from gravsim.errors import CapacityExceeded, InvalidArgument
from gravsim.vector_utils import Vector2


@pytest.fixture
def sim() -> SimulationController:
    return SimulationController(rng=random.Random(7))


def test_starts_paused_and_tick_does_nothing(sim) -> None:
    sim.add_body(1.0, 0, 0)
    sim.add_body(1.0, 10, 0)

    assert sim.tick() is False
    assert sim.frame == 0
    assert sim.collection.body(0).position == Vector2(0, 0)


def test_tick_runs_speed_steps(sim) -> None:
    sim.add_body(1.0, 0, 0, 1.0, 0.0)
    sim.set_speed(3)
    sim.start()

    assert sim.tick() is True
    assert sim.frame == 1
    assert sim.collection.body(0).position == Vector2(3, 0)


def test_speed_zero_ticks_without_moving(sim) -> None:
    sim.add_body(1.0, 0, 0, 1.0, 0.0)
    sim.set_speed(0)
    sim.start()

    sim.tick()

    assert sim.collection.body(0).position == Vector2(0, 0)


@pytest.mark.parametrize("speed", [-1, MAX_SPEED + 1, 1.5])
def test_set_speed_rejects_bad_values(sim, speed) -> None:
    with pytest.raises(InvalidArgument):
        sim.set_speed(speed)
    assert sim.speed == 1


def test_toggle(sim) -> None:
    assert sim.toggle() is True
    assert sim.playing
    assert sim.toggle() is False
    sim.stop()
    assert not sim.playing


def test_step_once_ignores_pause(sim) -> None:
    sim.add_body(1.0, 0, 0, 0.0, 2.0)

    sim.step_once()

    assert sim.collection.body(0).position == Vector2(0, 2)


def test_new_bodies_get_trail_length_and_selection(sim) -> None:
    b = sim.add_body(0.5, 1, 2)

    assert b.trail_capacity == DEFAULT_TRAIL_LENGTH
    assert sim.selected_index == 0
    assert sim.get_selected_body() is b


def test_set_trail_length_applies_to_all(sim) -> None:
    sim.add_body(1.0, 0, 0)
    sim.add_body(1.0, 50, 0)

    sim.set_trail_length(12)

    assert sim.trail_length == 12
    assert [b.trail_capacity for b in sim.collection] == [12, 12]
    with pytest.raises(InvalidArgument):
        sim.set_trail_length(-5)
    assert sim.trail_length == 12


def test_clear_trails(sim) -> None:
    sim.add_body(1.0, 0, 0, 1.0, 0.0)
    sim.step_once()
    assert len(sim.collection.body(0).trail) == 1

    sim.clear_trails()

    assert len(sim.collection.body(0).trail) == 0


def test_capacity_is_enforced_through_controller(sim) -> None:
    for i in range(10):
        sim.add_body(0.1, i * 20.0, 0)

    with pytest.raises(CapacityExceeded):
        sim.add_body(0.1, 500, 0)
    assert len(sim.collection) == 10
    assert sim.selected_index == 9


def test_delete_selected_moves_selection(sim) -> None:
    sim.add_body(1.0, 0, 0)
    sim.add_body(1.0, 50, 0)

    sim.delete_selected()
    assert len(sim.collection) == 1
    assert sim.selected_index == 0

    sim.delete_selected()
    assert len(sim.collection) == 0
    assert sim.selected_index is None
    assert sim.delete_selected() is None


def test_select_body_at(sim) -> None:
    sim.add_body(1.0, 0, 0)
    sim.add_body(0.5, 100, 0)

    assert sim.select_body_at((102, 1), pick_radius=1) == 1
    assert sim.select_body_at((3, 3), pick_radius=1) == 0
    assert sim.select_body_at((50, 50), pick_radius=1) is None
    assert sim.get_selected_body() is None


def test_selected_edits(sim) -> None:
    sim.add_body(1.0, 0, 0)

    sim.set_selected_color(4)
    sim.set_selected_trail_thickness(3)
    sim.set_selected_position(5, 6)
    sim.set_selected_momentum(0.1, 0.2)

    style = sim.get_selected_style()
    body = sim.get_selected_body()
    assert style.color_index == 4
    assert style.trail_thickness == 3
    assert body.position == Vector2(5, 6)
    assert body.momentum == Vector2(0.1, 0.2)


def test_selected_edits_without_selection(sim) -> None:
    with pytest.raises(InvalidArgument):
        sim.set_selected_color(1)
    with pytest.raises(InvalidArgument):
        sim.set_selected_position(0, 0)


def test_load_preset_replaces_bodies(sim) -> None:
    sim.add_body(1.0, 500, 500)

    count = sim.load_preset("Triangle")

    assert count == 3
    assert len(sim.collection) == 3
    assert sim.collection.body(0).position == Vector2(-8, 3)
    assert sim.collection.style(0).color_index == 1
    assert all(b.trail_capacity == DEFAULT_TRAIL_LENGTH for b in sim.collection)
    assert sim.selected_index == 0


def test_load_unknown_preset_keeps_bodies(sim) -> None:
    sim.add_body(1.0, 500, 500)

    with pytest.raises(InvalidArgument):
        sim.load_preset("Nope")
    assert len(sim.collection) == 1


def test_frame_state(sim) -> None:
    empty = sim.frame_state()
    assert empty.bodies == []
    assert empty.center_of_mass is None

    sim.load_preset("Binary")
    state = sim.frame_state()

    assert len(state.bodies) == 2
    assert state.center_of_mass == pytest.approx((0.0, 0.0))
    assert state.selected_index == 0
    assert state.playing is False
    assert state.speed == 1


def test_body_labels_do_not_snapshot_trails(sim, monkeypatch) -> None:
    sim.set_trail_length(1000)
    sim.add_body(2.0, 1.25, -3.0)
    sim.add_body(1.0, 40.0, 0.0)
    sim.collection.run_steps(500)

    def no_snapshot():
        raise AssertionError("body labels must not copy trails")

    monkeypatch.setattr(sim.collection, "snapshot", no_snapshot)
    labels, selected = sim.body_labels()

    assert len(labels) == 2
    assert labels[0].startswith("#0  m=2  (")
    assert labels[1].startswith("#1  m=1  (")
    assert selected == 1


def test_body_labels_empty(sim) -> None:
    assert sim.body_labels() == ([], None)
