from __future__ import annotations

import pytest

from rover_sim.geometry_utils import Heading, Position
from rover_sim.rover import RoverNotLanded, RoverState


def test_new_state_is_unlanded() -> None:
    state = RoverState()
    assert state.landed is False
    assert state.stopped is False
    assert state.position is None
    assert state.heading is None


def test_land_and_reland_resets() -> None:
    state = RoverState()
    state.land((1, 2), Heading.EAST)
    state.set_stopped(True)
    state.move_forward()
    state.land(Position(-5, 9), Heading.SOUTH)
    assert state.landed is True
    assert state.stopped is False
    assert state.position == Position(-5, 9)
    assert state.heading is Heading.SOUTH


@pytest.mark.parametrize(
    "heading, forward, backward",
    [
        (Heading.NORTH, (0, 1), (0, -1)),
        (Heading.SOUTH, (0, -1), (0, 1)),
        (Heading.EAST, (1, 0), (-1, 0)),
        (Heading.WEST, (-1, 0), (1, 0)),
    ],
)
def test_targets_do_not_mutate(heading: Heading, forward: tuple, backward: tuple) -> None:
    state = RoverState()
    state.land((0, 0), heading)
    assert state.forward_target() == Position(*forward)
    assert state.backward_target() == Position(*backward)
    assert state.position == Position(0, 0)
    assert state.heading is heading


def test_forward_backward_are_inverse() -> None:
    for heading in Heading:
        state = RoverState()
        state.land((3, -4), heading)
        state.move_forward()
        assert state.position != Position(3, -4)
        state.move_backward()
        assert state.position == Position(3, -4)
        state.move_backward()
        state.move_forward()
        assert state.position == Position(3, -4)


def test_rotations() -> None:
    state = RoverState()
    state.land((0, 0), Heading.NORTH)
    state.rotate_left()
    assert state.heading is Heading.WEST
    state.rotate_right()
    state.rotate_right()
    assert state.heading is Heading.EAST
    assert state.position == Position(0, 0)


def test_motion_before_landing_raises() -> None:
    state = RoverState()
    for op in (
        state.move_forward,
        state.move_backward,
        state.rotate_left,
        state.rotate_right,
        state.forward_target,
        state.backward_target,
    ):
        with pytest.raises(RoverNotLanded):
            op()
    assert state.landed is False


def test_snapshot() -> None:
    state = RoverState()
    assert state.snapshot()["landed"] is False
    state.land((2, 3), Heading.WEST)
    assert state.snapshot() == {"landed": True, "x": 2, "y": 3, "heading": "WEST", "stopped": False}


def test_land_accepts_heading_name() -> None:
    state = RoverState()
    state.land((0, 0), "east")  # type: ignore[arg-type]
    assert state.heading is Heading.EAST
    state.move_forward()
    assert state.position == Position(1, 0)


def test_land_rejects_bad_heading_without_landing() -> None:
    state = RoverState()
    with pytest.raises(ValueError):
        state.land((0, 0), "up")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        state.land((0, 0), 3)  # type: ignore[arg-type]
    assert state.landed is False
    assert state.position is None
