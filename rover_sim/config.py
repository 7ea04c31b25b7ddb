"""
YAML configuration for building a rover.

Example (``configs/sim.yaml``)::

    seed: 0
    landing: {x: 0, y: 0, heading: NORTH}
    commands: {f: forward, b: backward, l: left, r: right, u: [left, left]}
    map: rover_sim/maps/crater_field.json
    sensors:
      obstacles: true
      boundary: {xmin: -10, ymin: -10, xmax: 10, ymax: 10}
    logging: {telemetry_path: runs/telemetry.jsonl}

``map`` may instead describe a seeded random obstacle field::

    map:
      random: {count: 12, xmin: -5, ymin: -5, xmax: 5, ymax: 5}

Malformed sections raise ``ValueError`` (or ``KeyError`` for a missing
required entry) naming the offending key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple
import random

import yaml

from .actions import Action, parse_action
from .geometry_utils import Heading, Position
from .rover import Rover, RoverBuilder
from .sensors import BoundarySensor, ObstacleSensor
from .world import World

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


DEFAULT_COMMANDS: Dict[str, Any] = {
    "f": "forward",
    "b": "backward",
    "l": "left",
    "r": "right",
}


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return ``cfg[key]`` as a mapping; a missing or empty section is ``{}``."""
    section = cfg.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(section).__name__}")
    return section


def _int(section: Dict[str, Any], key: str, name: str, default: Optional[int] = None) -> int:
    """Read an integer entry; ``name`` is the dotted key used in error messages."""
    if key not in section:
        if default is None:
            raise KeyError(name)
        return default
    value = section[key]
    if isinstance(value, bool):
        raise ValueError(f"{name}: expected an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name}: expected an integer, got {value!r}") from None


@dataclass
class RandomMapConfig:
    """Seeded random obstacle field inside an inclusive box."""

    count: int
    xmin: int
    ymin: int
    xmax: int
    ymax: int


@dataclass
class RoverConfig:
    landing_x: int = 0
    landing_y: int = 0
    heading: Heading = Heading.NORTH
    commands: Dict[str, Action] = field(default_factory=dict)
    map_path: Optional[str] = None
    random_map: Optional[RandomMapConfig] = None
    use_obstacle_sensor: bool = True
    boundary: Optional[Tuple[int, int, int, int]] = None
    telemetry_path: Optional[str] = None
    seed: int = 0

    @property
    def landing(self) -> Position:
        return Position(self.landing_x, self.landing_y)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "RoverConfig":
        """Validate and convert a raw config dict (as loaded from YAML)."""
        if not isinstance(cfg, dict):
            raise ValueError(f"Config must be a mapping, got {type(cfg).__name__}")
        landing_cfg = _section(cfg, "landing")
        sensors_cfg = _section(cfg, "sensors")
        logging_cfg = _section(cfg, "logging")

        raw_commands = cfg.get("commands")
        if raw_commands is None:
            raw_commands = DEFAULT_COMMANDS
        if not isinstance(raw_commands, dict):
            raise ValueError(f"'commands' must be a mapping, got {type(raw_commands).__name__}")
        commands: Dict[str, Action] = {}
        for key, spec in raw_commands.items():
            key = str(key)
            if len(key) != 1:
                raise ValueError(f"Command key must be a single character, got {key!r}")
            try:
                commands[key] = parse_action(spec)
            except ValueError as exc:
                raise ValueError(f"commands.{key}: {exc}") from exc

        boundary = None
        boundary_cfg = _section(sensors_cfg, "boundary")
        if boundary_cfg:
            boundary = (
                _int(boundary_cfg, "xmin", "sensors.boundary.xmin"),
                _int(boundary_cfg, "ymin", "sensors.boundary.ymin"),
                _int(boundary_cfg, "xmax", "sensors.boundary.xmax"),
                _int(boundary_cfg, "ymax", "sensors.boundary.ymax"),
            )

        map_path = None
        random_map = None
        map_cfg = cfg.get("map")
        if isinstance(map_cfg, str):
            map_path = map_cfg
        elif isinstance(map_cfg, dict):
            random_cfg = _section(map_cfg, "random")
            if not random_cfg:
                raise ValueError("'map' mapping must contain a 'random' section")
            random_map = RandomMapConfig(
                count=_int(random_cfg, "count", "map.random.count"),
                xmin=_int(random_cfg, "xmin", "map.random.xmin"),
                ymin=_int(random_cfg, "ymin", "map.random.ymin"),
                xmax=_int(random_cfg, "xmax", "map.random.xmax"),
                ymax=_int(random_cfg, "ymax", "map.random.ymax"),
            )
        elif map_cfg is not None:
            raise ValueError(f"'map' must be a file path or a mapping, got {type(map_cfg).__name__}")

        heading_name = landing_cfg.get("heading", "NORTH")
        try:
            heading = Heading.from_name(heading_name)
        except ValueError as exc:
            raise ValueError(f"landing.heading: {exc}") from exc

        return cls(
            landing_x=_int(landing_cfg, "x", "landing.x", default=0),
            landing_y=_int(landing_cfg, "y", "landing.y", default=0),
            heading=heading,
            commands=commands,
            map_path=map_path,
            random_map=random_map,
            use_obstacle_sensor=bool(sensors_cfg.get("obstacles", True)),
            boundary=boundary,
            telemetry_path=logging_cfg.get("telemetry_path"),
            seed=_int(cfg, "seed", "seed", default=0),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "RoverConfig":
        return cls.from_dict(load_yaml(path))


def load_world(cfg: RoverConfig) -> World:
    """World from the configured map.

    A map file is loaded as is; a random map is generated with
    ``random.Random(cfg.seed)`` and never blocks the landing cell. Without a
    map the world is empty.
    """
    if cfg.map_path:
        return World.from_map_file(cfg.map_path)
    world = World()
    if cfg.random_map is not None:
        rm = cfg.random_map
        world.generate_random_obstacles(
            count=rm.count,
            xmin=rm.xmin,
            ymin=rm.ymin,
            xmax=rm.xmax,
            ymax=rm.ymax,
            rng=random.Random(cfg.seed),
            keep_clear=[cfg.landing],
        )
    return world


def build_rover(
    cfg: RoverConfig,
    world: Optional[World] = None,
    telemetry: Optional["TelemetryLogger"] = None,
) -> Rover:
    """Build an unlanded rover from config.

    ``world`` feeds the obstacle sensor when enabled; the boundary sensor is
    added when a boundary is configured.
    """
    builder = RoverBuilder()
    for key, action in cfg.commands.items():
        builder.program_command(key, action)
    if cfg.use_obstacle_sensor and world is not None:
        builder.add_sensor(ObstacleSensor(world))
    if cfg.boundary is not None:
        builder.add_sensor(BoundarySensor(*cfg.boundary))
    builder.with_telemetry(telemetry)
    return builder.build()
