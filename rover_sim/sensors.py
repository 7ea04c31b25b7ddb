from __future__ import annotations

from typing import Tuple

import numpy as np

from .world import World


class Sensor:
    """Safety predicate consulted before every move.

    The base sensor certifies every cell. Implementations must be free of
    side effects: one command may query the same cell more than once.
    """

    def is_safe(self, x: int, y: int) -> bool:
        return True


class ObstacleSensor(Sensor):
    """Reports cells blocked in a :class:`World` as unsafe."""

    def __init__(self, world: World) -> None:
        self.world = world

    def is_safe(self, x: int, y: int) -> bool:
        return not self.world.is_blocked(x, y)


class OccupancyGridSensor(Sensor):
    """Occupancy-grid lookup.

    Parameters
    ----------
    grid : np.ndarray
        2D bool array indexed ``[y - oy, x - ox]``; True marks an unsafe cell.
    origin : tuple[int, int]
        Grid coordinates ``(ox, oy)`` of element ``[0, 0]``.

    Cells outside the array are reported safe.
    """

    def __init__(self, grid: np.ndarray, origin: Tuple[int, int] = (0, 0)) -> None:
        arr = np.asarray(grid, dtype=bool)
        if arr.ndim != 2:
            raise ValueError(f"Occupancy grid must be 2D, got shape {arr.shape}")
        self.grid = arr
        self.origin = (int(origin[0]), int(origin[1]))

    @classmethod
    def from_world(cls, world: World, xmin: int, ymin: int, xmax: int, ymax: int) -> "OccupancyGridSensor":
        grid, origin = world.to_occupancy_grid(xmin, ymin, xmax, ymax)
        return cls(grid, origin)

    def is_safe(self, x: int, y: int) -> bool:
        col = x - self.origin[0]
        row = y - self.origin[1]
        rows, cols = self.grid.shape
        if not (0 <= row < rows and 0 <= col < cols):
            return True
        return not bool(self.grid[row, col])


class BoundarySensor(Sensor):
    """Reports every cell outside an inclusive rectangle as unsafe."""

    def __init__(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        if xmin > xmax or ymin > ymax:
            raise ValueError(f"Empty boundary: ({xmin}, {ymin})-({xmax}, {ymax})")
        self.xmin = xmin
        self.ymin = ymin
        self.xmax = xmax
        self.ymax = ymax

    def is_safe(self, x: int, y: int) -> bool:
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax
