"""
On-demand neighbourhood of a height grid.

Nodes are row-major linear indices. Neighbours and step admissibility are
computed from the index and the height array; no adjacency list is built.
"""

from enum import Enum
from typing import Iterator, Tuple

import numpy as np


class Direction(Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class StepRule(Enum):
    """Which way a search walks the elevation constraint."""

    CLIMB = "climb"  # Forward: may rise at most max_climb per step
    DESCEND = "descend"  # Backward: may drop at most max_climb per step


class GridAdjacency:
    """4-connected adjacency over a rectangular height grid."""

    def __init__(
        self, width: int, height: int, heights: np.ndarray, max_climb: int = 1
    ):
        """Initialize adjacency.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            heights: Elevations, either flat (width*height) or shaped (height, width)
            max_climb: Largest elevation change a step may make against the rule
        """
        if width <= 0 or height <= 0:
            raise ValueError("Grid dimensions must be positive")
        flat = np.asarray(heights).reshape(-1)
        if flat.size != width * height:
            raise ValueError(
                f"Height array has {flat.size} cells, expected {width * height}"
            )
        self.width = width
        self.height = height
        self.max_climb = max_climb
        # Signed copy so that height arithmetic cannot wrap around
        self.heights = flat.astype(np.int64)

    @property
    def node_count(self) -> int:
        return self.width * self.height

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, x: int, y: int) -> int:
        if not self.is_valid_position(x, y):
            raise IndexError(
                f"Position ({x}, {y}) outside {self.width}x{self.height} grid"
            )
        return y * self.width + x

    def position_of(self, node_id: int) -> Tuple[int, int]:
        if not 0 <= node_id < self.node_count:
            raise IndexError(f"Node {node_id} outside grid of {self.node_count} cells")
        return node_id % self.width, node_id // self.width

    def height_of(self, node_id: int) -> int:
        return int(self.heights[node_id])

    def neighbors(self, node_id: int) -> Iterator[int]:
        """Yield in-bounds neighbours in up, right, down, left order."""
        x, y = self.position_of(node_id)
        for direction in Direction:
            nx, ny = x + direction.dx, y + direction.dy
            if self.is_valid_position(nx, ny):
                yield ny * self.width + nx

    def can_step(self, from_height: int, to_height: int, rule: StepRule) -> bool:
        if rule is StepRule.CLIMB:
            return to_height <= from_height + self.max_climb
        return from_height <= to_height + self.max_climb

    def traversable_neighbors(self, node_id: int, rule: StepRule) -> Iterator[int]:
        """Yield neighbours that may be stepped onto from node_id under rule."""
        from_height = self.heights[node_id]
        for neighbor in self.neighbors(node_id):
            if self.can_step(from_height, self.heights[neighbor], rule):
                yield neighbor
