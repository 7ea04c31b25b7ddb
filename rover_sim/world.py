from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union
import json
import random

import numpy as np

from .geometry_utils import Position


class World:
    """Unbounded grid with a set of blocked cells.

    Parameters
    ----------
    obstacles : iterable of Position or (x, y)
        Initially blocked cells.
    """

    def __init__(
        self,
        obstacles: Optional[Iterable[Union[Position, Tuple[int, int]]]] = None,
    ) -> None:
        self.obstacles: Set[Position] = set()
        for cell in obstacles or ():
            self.add_obstacle(cell)

    # ------------------------------------------------------------------
    # Map loading / saving
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Union[Dict[str, Any], List[Any]]) -> "World":
        """Create world from a map description.

        ``data`` is either ``{"obstacles": [...]}`` or the bare obstacle list.
        Each entry is ``{"x": .., "y": ..}`` or an ``[x, y]`` pair.
        """
        if isinstance(data, dict):
            entries = data.get("obstacles", [])
        elif isinstance(data, list):
            entries = data
        else:
            raise ValueError(f"Map must be an object or a list of cells, got {type(data).__name__}")
        if not isinstance(entries, list):
            raise ValueError(f"'obstacles' must be a list, got {type(entries).__name__}")

        cells: List[Position] = []
        for i, entry in enumerate(entries):
            try:
                if isinstance(entry, dict):
                    cells.append(Position(int(entry["x"]), int(entry["y"])))
                else:
                    x, y = entry
                    cells.append(Position(int(x), int(y)))
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"obstacles[{i}]: invalid cell {entry!r} ({exc})") from exc
        return cls(obstacles=cells)

    @classmethod
    def from_map_file(cls, path: str) -> "World":
        """Create world from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_map_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize world description to a Python dict."""
        cells = sorted(self.obstacles, key=lambda p: (p.y, p.x))
        return {"obstacles": [{"x": p.x, "y": p.y} for p in cells]}

    # ------------------------------------------------------------------
    # Obstacle editing
    # ------------------------------------------------------------------
    def clear_obstacles(self) -> None:
        """Remove all obstacles."""
        self.obstacles.clear()

    def add_obstacle(self, cell: Union[Position, Tuple[int, int]]) -> None:
        """Block a single cell."""
        self.obstacles.add(Position.coerce(cell))

    def generate_random_obstacles(
        self,
        count: int,
        xmin: int,
        ymin: int,
        xmax: int,
        ymax: int,
        rng: random.Random,
        keep_clear: Iterable[Union[Position, Tuple[int, int]]] = (),
    ) -> None:
        """Replace obstacles with ``count`` distinct random cells in the box.

        Cells listed in ``keep_clear`` (e.g. the landing site) are never
        blocked.
        """
        self.clear_obstacles()
        reserved = {Position.coerce(c) for c in keep_clear}
        candidates = [
            Position(x, y)
            for y in range(ymin, ymax + 1)
            for x in range(xmin, xmax + 1)
            if Position(x, y) not in reserved
        ]
        if count > len(candidates):
            raise ValueError(
                f"Cannot place {count} obstacles in a box with {len(candidates)} free cells"
            )
        for cell in rng.sample(candidates, count):
            self.add_obstacle(cell)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_blocked(self, x: int, y: int) -> bool:
        return Position(x, y) in self.obstacles

    def __contains__(self, cell: object) -> bool:
        if isinstance(cell, (Position, tuple)):
            return Position.coerce(cell) in self.obstacles
        return False

    def __len__(self) -> int:
        return len(self.obstacles)

    def to_occupancy_grid(
        self, xmin: int, ymin: int, xmax: int, ymax: int
    ) -> Tuple[np.ndarray, Tuple[int, int]]:
        """Rasterize the box [xmin, xmax] x [ymin, ymax] into a bool array.

        Returns the array indexed ``[y - ymin, x - xmin]`` and its origin
        ``(xmin, ymin)``.
        """
        grid = np.zeros((ymax - ymin + 1, xmax - xmin + 1), dtype=bool)
        for p in self.obstacles:
            if xmin <= p.x <= xmax and ymin <= p.y <= ymax:
                grid[p.y - ymin, p.x - xmin] = True
        return grid, (xmin, ymin)
