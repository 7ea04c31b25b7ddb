"""
Top-level package for the grid rover simulator.

Components:
- geometry_utils: grid positions and compass headings
- actions: rover command actions (primitives and composition)
- rover: rover state machine, command interpreter and builder
- sensors: cell safety sensors (obstacles, occupancy grid, boundary)
- world: blocked-cell maps and JSON map loading
- config: YAML configuration and rover factory
- env: Gymnasium-compatible command environment
"""

from .geometry_utils import Heading, Position
from .actions import (
    Action,
    Compose,
    MoveBackward,
    MoveForward,
    RotateLeft,
    RotateRight,
    compose,
    move_backward,
    move_forward,
    parse_action,
    rotate_left,
    rotate_right,
)
from .rover import Rover, RoverBuilder, RoverNotLanded, RoverState
from .sensors import BoundarySensor, ObstacleSensor, OccupancyGridSensor, Sensor
from .world import World

__all__ = [
    "Heading",
    "Position",
    "Action",
    "Compose",
    "MoveBackward",
    "MoveForward",
    "RotateLeft",
    "RotateRight",
    "compose",
    "move_backward",
    "move_forward",
    "parse_action",
    "rotate_left",
    "rotate_right",
    "Rover",
    "RoverBuilder",
    "RoverNotLanded",
    "RoverState",
    "BoundarySensor",
    "ObstacleSensor",
    "OccupancyGridSensor",
    "Sensor",
    "World",
]
