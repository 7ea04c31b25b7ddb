"""
Rover command actions.

The action set is closed: four primitives and ``Compose``. Every variant is
a stateless frozen dataclass that can be bound to any number of rovers;
``execute_action`` is the single dispatch point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Tuple, Union

if TYPE_CHECKING:
    from .rover import Rover


class _ActionBase:
    def execute(self, rover: "Rover") -> bool:
        """Attempt one command unit on ``rover``; return whether it succeeded."""
        return execute_action(self, rover)  # type: ignore[arg-type]


@dataclass(frozen=True)
class MoveForward(_ActionBase):
    """Step one cell ahead unless a sensor reports the cell unsafe."""


@dataclass(frozen=True)
class MoveBackward(_ActionBase):
    """Step one cell behind unless a sensor reports the cell unsafe."""


@dataclass(frozen=True)
class RotateLeft(_ActionBase):
    """Turn 90 degrees counter-clockwise. Never blocked."""


@dataclass(frozen=True)
class RotateRight(_ActionBase):
    """Turn 90 degrees clockwise. Never blocked."""


@dataclass(frozen=True)
class Compose(_ActionBase):
    """Ordered sequence of actions run as one command.

    Stops at the first failing child, so steps after a blocked move are never
    applied. An empty sequence succeeds.
    """

    actions: Tuple["Action", ...] = ()


Action = Union[MoveForward, MoveBackward, RotateLeft, RotateRight, Compose]


def execute_action(action: Action, rover: "Rover") -> bool:
    """Run ``action`` against ``rover`` and report success."""
    state = rover.state
    if isinstance(action, MoveForward):
        if rover.is_danger(state.forward_target()):
            return False
        state.move_forward()
        return True
    if isinstance(action, MoveBackward):
        if rover.is_danger(state.backward_target()):
            return False
        state.move_backward()
        return True
    if isinstance(action, RotateLeft):
        state.rotate_left()
        return True
    if isinstance(action, RotateRight):
        state.rotate_right()
        return True
    if isinstance(action, Compose):
        for child in action.actions:
            if not execute_action(child, rover):
                return False
        return True
    raise TypeError(f"Not a rover action: {action!r}")


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def move_forward() -> MoveForward:
    return MoveForward()


def move_backward() -> MoveBackward:
    return MoveBackward()


def rotate_left() -> RotateLeft:
    return RotateLeft()


def rotate_right() -> RotateRight:
    return RotateRight()


def compose(*actions: Action) -> Compose:
    return Compose(tuple(actions))


# ---------------------------------------------------------------------------
# Parsing from configuration
# ---------------------------------------------------------------------------

_PRIMITIVES = {
    "forward": MoveForward,
    "f": MoveForward,
    "backward": MoveBackward,
    "b": MoveBackward,
    "left": RotateLeft,
    "l": RotateLeft,
    "right": RotateRight,
    "r": RotateRight,
}


def parse_action(spec: Any) -> Action:
    """Build an action from a config value.

    A string names a primitive (``forward``, ``backward``, ``left``,
    ``right`` or their first letter). A list becomes a ``Compose`` of its
    parsed elements, recursively.
    """
    if isinstance(spec, str):
        try:
            return _PRIMITIVES[spec.strip().lower()]()
        except KeyError:
            raise ValueError(
                f"Unknown action: {spec!r}. Available: {sorted(set(_PRIMITIVES))}"
            ) from None
    if isinstance(spec, (list, tuple)):
        return Compose(tuple(parse_action(item) for item in spec))
    raise ValueError(f"Action must be a name or a list of actions, got {spec!r}")
