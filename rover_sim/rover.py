from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .actions import Action, execute_action
from .geometry_utils import Heading, Position
from .sensors import Sensor

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


class RoverNotLanded(RuntimeError):
    """Raised when the rover is commanded before it has landed."""

    def __init__(self, message: str = "Rover has not landed yet") -> None:
        super().__init__(message)


class RoverState:
    """Landing flag, stop flag and pose of a rover on the grid.

    ``position`` and ``heading`` are ``None`` until :meth:`land` is called.
    Movement methods do not check sensors; callers verify the target cell
    first.
    """

    def __init__(self) -> None:
        self.landed = False
        self.stopped = False
        self.position: Optional[Position] = None
        self.heading: Optional[Heading] = None

    # ------------------------------------------------------------------
    # Landing and flags
    # ------------------------------------------------------------------
    def land(self, position: Union[Position, Tuple[int, int]], heading: Union[Heading, str]) -> None:
        """Place the rover. Re-landing resets the pose and the stop flag.

        ``heading`` may be a :class:`Heading` or a name accepted by
        :meth:`Heading.from_name`; an invalid value leaves the state untouched.
        """
        if not isinstance(heading, Heading):
            if not isinstance(heading, str):
                raise TypeError(f"Heading must be a Heading or a name, got {heading!r}")
            heading = Heading.from_name(heading)
        position = Position.coerce(position)
        self.position = position
        self.heading = heading
        self.landed = True
        self.stopped = False

    def set_stopped(self, stopped: bool) -> None:
        self.stopped = bool(stopped)

    def _require_landed(self) -> Tuple[Position, Heading]:
        if not self.landed or self.position is None or self.heading is None:
            raise RoverNotLanded()
        return self.position, self.heading

    # ------------------------------------------------------------------
    # Lookahead
    # ------------------------------------------------------------------
    def forward_target(self) -> Position:
        """Cell one step ahead along the current heading."""
        position, heading = self._require_landed()
        dx, dy = heading.delta
        return position.offset(dx, dy)

    def backward_target(self) -> Position:
        """Cell one step behind the current heading."""
        position, heading = self._require_landed()
        dx, dy = heading.delta
        return position.offset(-dx, -dy)

    # ------------------------------------------------------------------
    # Motion primitives
    # ------------------------------------------------------------------
    def move_forward(self) -> None:
        self.position = self.forward_target()

    def move_backward(self) -> None:
        self.position = self.backward_target()

    def rotate_left(self) -> None:
        _, heading = self._require_landed()
        self.heading = heading.left()

    def rotate_right(self) -> None:
        _, heading = self._require_landed()
        self.heading = heading.right()

    def snapshot(self) -> Dict[str, Any]:
        """Serialize the current state to a dict for telemetry."""
        if not self.landed or self.position is None or self.heading is None:
            return {"landed": False, "x": None, "y": None, "heading": None, "stopped": self.stopped}
        return {
            "landed": True,
            "x": self.position.x,
            "y": self.position.y,
            "heading": self.heading.value,
            "stopped": self.stopped,
        }


class Rover:
    """Command interpreter binding characters to actions over one RoverState.

    Instances are produced by :class:`RoverBuilder`; the command table and
    sensor list are fixed for the rover's lifetime.
    """

    def __init__(
        self,
        commands: Mapping[str, Action],
        sensors: Iterable[Sensor],
        telemetry: Optional["TelemetryLogger"] = None,
    ) -> None:
        self._commands: Mapping[str, Action] = MappingProxyType(dict(commands))
        self._sensors: Tuple[Sensor, ...] = tuple(sensors)
        self._telemetry = telemetry
        self.state = RoverState()

    @property
    def commands(self) -> Mapping[str, Action]:
        return self._commands

    @property
    def sensors(self) -> Tuple[Sensor, ...]:
        return self._sensors

    def land(self, position: Union[Position, Tuple[int, int]], heading: Union[Heading, str]) -> None:
        self.state.land(position, heading)

    def execute(self, commands: str) -> None:
        """Run a command string.

        An unbound character stops the rover and discards the rest of the
        string. A bound command that fails (blocked move) stops the rover but
        the following characters are still processed; ``stopped`` always
        reflects the last processed command.
        """
        if not self.state.landed:
            raise RoverNotLanded()

        for c in commands:
            action = self._commands.get(c)
            if action is None:
                self.state.set_stopped(True)
                self._log_command(c, bound=False, ok=False)
                return
            ok = execute_action(action, self)
            self.state.set_stopped(not ok)
            self._log_command(c, bound=True, ok=ok)

    def is_danger(self, position: Position) -> bool:
        """True if any sensor refuses to certify ``position`` as safe."""
        for sensor in self._sensors:
            if not sensor.is_safe(position.x, position.y):
                return True
        return False

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def report(self) -> str:
        """Human-readable status: ``unknown`` or ``(x, y) HEADING[ stopped]``."""
        state = self.state
        if not state.landed or state.position is None or state.heading is None:
            return "unknown"
        text = f"({state.position.x}, {state.position.y}) {state.heading.value}"
        if state.stopped:
            text += " stopped"
        return text

    def __str__(self) -> str:
        return self.report()

    def _log_command(self, command: str, bound: bool, ok: bool) -> None:
        if self._telemetry is None:
            return
        record: Dict[str, Any] = {"command": command, "bound": bound, "ok": ok}
        record.update(self.state.snapshot())
        self._telemetry.log_step(record)


class RoverBuilder:
    """Collects command bindings and sensors, then builds an unlanded Rover."""

    def __init__(self) -> None:
        self._commands: Dict[str, Action] = {}
        self._sensors: List[Sensor] = []
        self._telemetry: Optional["TelemetryLogger"] = None

    def program_command(self, command: str, action: Action) -> "RoverBuilder":
        if not isinstance(command, str) or len(command) != 1:
            raise ValueError(f"Command must be a single character, got {command!r}")
        self._commands[command] = action
        return self

    def add_sensor(self, sensor: Sensor) -> "RoverBuilder":
        self._sensors.append(sensor)
        return self

    def with_telemetry(self, telemetry: Optional["TelemetryLogger"]) -> "RoverBuilder":
        self._telemetry = telemetry
        return self

    def build(self) -> Rover:
        return Rover(commands=self._commands, sensors=self._sensors, telemetry=self._telemetry)
