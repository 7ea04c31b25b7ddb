from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from .geometry_utils import Heading, Position, heading_index
from .rover import Rover, RoverNotLanded


@dataclass
class EnvConfig:
    landing_x: int = 0
    landing_y: int = 0
    heading: Heading = Heading.NORTH
    max_steps: int = 200
    stop_penalty: float = -1.0


class RoverEnv(gym.Env):
    """Gymnasium environment driving a grid rover one command per step.

    Action ``i`` sends the i-th bound command character (sorted order).
    Observation is ``[x, y, heading_index, stopped]`` as float32.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(self, rover: Rover, config: Optional[EnvConfig] = None, render_mode: Optional[str] = None) -> None:
        super().__init__()
        if not rover.commands:
            raise ValueError("RoverEnv needs a rover with at least one bound command")
        self.rover = rover
        self.cfg = config or EnvConfig()
        self.render_mode = render_mode
        self.command_keys: List[str] = sorted(rover.commands)

        self.action_space = spaces.Discrete(len(self.command_keys))
        self.observation_space = spaces.Box(
            low=np.array([-np.inf, -np.inf, 0.0, 0.0], dtype=np.float32),
            high=np.array([np.inf, np.inf, 3.0, 1.0], dtype=np.float32),
            dtype=np.float32,
        )
        self._step_count = 0

    # ------------------------------------------------------------------
    # Gym API
    # ------------------------------------------------------------------
    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        options = options or {}
        x = int(options.get("x", self.cfg.landing_x))
        y = int(options.get("y", self.cfg.landing_y))
        heading = options.get("heading", self.cfg.heading)
        if not isinstance(heading, Heading):
            heading = Heading.from_name(heading)

        self._step_count = 0
        self.rover.land(Position(x, y), heading)
        return self._get_obs(), {"report": self.rover.report()}

    def step(self, action: Any) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        idx = int(action)
        if not self.action_space.contains(idx):
            raise ValueError(f"Invalid action index {idx} for {self.action_space}")
        self._step_count += 1

        command = self.command_keys[idx]
        self.rover.execute(command)
        stopped = self.rover.state.stopped

        reward = self.cfg.stop_penalty if stopped else 0.0
        truncated = self._step_count >= self.cfg.max_steps

        info: Dict[str, Any] = {
            "command": command,
            "stopped": stopped,
            "report": self.rover.report(),
        }
        return self._get_obs(), float(reward), False, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return self.rover.report()
        return None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    def _get_obs(self) -> np.ndarray:
        state = self.rover.state
        if not state.landed or state.position is None or state.heading is None:
            raise RoverNotLanded()
        return np.array(
            [
                state.position.x,
                state.position.y,
                heading_index(state.heading),
                1.0 if state.stopped else 0.0,
            ],
            dtype=np.float32,
        )
