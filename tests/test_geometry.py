from __future__ import annotations

import pytest

from rover_sim.geometry_utils import HEADING_ORDER, Heading, Position, heading_index


def test_four_left_turns_restore_heading() -> None:
    for start in Heading:
        h = start
        seen = []
        for _ in range(4):
            h = h.left()
            seen.append(h)
        assert h is start
        assert set(seen) == set(Heading)


def test_four_right_turns_restore_heading() -> None:
    for start in Heading:
        h = start
        for _ in range(4):
            h = h.right()
        assert h is start


def test_left_then_right_is_identity() -> None:
    for h in Heading:
        assert h.left().right() is h
        assert h.right().left() is h


def test_left_rotation_order() -> None:
    assert Heading.WEST.left() is Heading.SOUTH
    assert Heading.SOUTH.left() is Heading.EAST
    assert Heading.EAST.left() is Heading.NORTH
    assert Heading.NORTH.left() is Heading.WEST


def test_deltas() -> None:
    assert Heading.NORTH.delta == (0, 1)
    assert Heading.SOUTH.delta == (0, -1)
    assert Heading.EAST.delta == (1, 0)
    assert Heading.WEST.delta == (-1, 0)


def test_heading_from_name() -> None:
    assert Heading.from_name("north") is Heading.NORTH
    assert Heading.from_name(" W ") is Heading.WEST
    with pytest.raises(ValueError):
        Heading.from_name("up")


def test_position_value_semantics() -> None:
    p = Position(-3, 7)
    assert p == Position(-3, 7)
    assert hash(p) == hash(Position(-3, 7))
    assert p.offset(1, -1) == Position(-2, 6)
    # offset never mutates
    assert p == Position(-3, 7)
    assert Position.coerce((2, 5)) == Position(2, 5)


def test_heading_index_is_clockwise() -> None:
    assert [heading_index(h) for h in HEADING_ORDER] == [0, 1, 2, 3]
    assert HEADING_ORDER[(heading_index(Heading.WEST) + 1) % 4] is Heading.WEST.right()
