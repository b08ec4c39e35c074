import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..pathfinding.adjacency import GridAdjacency
from ..util.logger import logger
from .errors import GridParseError

START_MARKER = "S"
END_MARKER = "E"
LOWEST = "a"
HIGHEST = "z"
MAX_ELEVATION = ord(HIGHEST) - ord(LOWEST)


def elevation_of(char: str) -> int:
    """Elevation for a map character; S and E map to a and z."""
    if char == START_MARKER:
        char = LOWEST
    elif char == END_MARKER:
        char = HIGHEST
    if not LOWEST <= char <= HIGHEST:
        raise ValueError(f"Invalid elevation character {char!r}")
    return ord(char) - ord(LOWEST)


class HeightMap:
    def __init__(
        self,
        width: int,
        height: int,
        start: Tuple[int, int] = (0, 0),
        end: Tuple[int, int] = (0, 0),
    ):
        self.width = width
        self.height = height
        self.grid = np.zeros((height, width), dtype=np.uint8)
        self.start = start
        self.end = end

    @classmethod
    def from_text(cls, text: str) -> "HeightMap":
        """Parse a height map made of a-z rows with one S and one E.

        Raises:
            GridParseError: if the text is empty, ragged, has an unknown
                character or does not have exactly one S and one E
        """
        rows = text.splitlines()
        while rows and not rows[-1].strip():
            rows.pop()
        if not rows:
            raise GridParseError("Height map is empty")

        width = len(rows[0])
        if width == 0:
            raise GridParseError("Height map rows are empty", line=1)

        heightmap = cls(width, len(rows))
        start: Optional[Tuple[int, int]] = None
        end: Optional[Tuple[int, int]] = None

        for y, row in enumerate(rows):
            if len(row) != width:
                raise GridParseError(
                    f"Row has {len(row)} cells, expected {width}", line=y + 1
                )
            for x, char in enumerate(row):
                if char == START_MARKER:
                    if start is not None:
                        raise GridParseError(
                            f"Second start marker, first at {start}",
                            line=y + 1,
                            column=x + 1,
                        )
                    start = (x, y)
                elif char == END_MARKER:
                    if end is not None:
                        raise GridParseError(
                            f"Second end marker, first at {end}",
                            line=y + 1,
                            column=x + 1,
                        )
                    end = (x, y)
                try:
                    heightmap.grid[y, x] = elevation_of(char)
                except ValueError as e:
                    raise GridParseError(str(e), line=y + 1, column=x + 1) from e

        if start is None:
            raise GridParseError(f"Missing start marker {START_MARKER!r}")
        if end is None:
            raise GridParseError(f"Missing end marker {END_MARKER!r}")

        heightmap.start = start
        heightmap.end = end
        logger.bind(component="terrain").debug(
            f"Parsed {width}x{len(rows)} height map, start {start}, end {end}"
        )
        return heightmap

    @classmethod
    def load_text_file(cls, filename: str) -> "HeightMap":
        try:
            with open(filename, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise GridParseError(f"Height map is not valid text: {e.reason}") from e
        return cls.from_text(text)

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_elevation(self, x: int, y: int) -> Optional[int]:
        if not self.is_valid_position(x, y):
            return None
        return int(self.grid[y, x])

    def set_elevation(self, x: int, y: int, elevation: int) -> None:
        if not 0 <= elevation <= MAX_ELEVATION:
            raise ValueError(f"Elevation must be between 0 and {MAX_ELEVATION}")
        if self.is_valid_position(x, y):
            self.grid[y, x] = elevation

    def index_of(self, x: int, y: int) -> int:
        """Row-major node id for a position."""
        if not self.is_valid_position(x, y):
            raise IndexError(f"Position ({x}, {y}) outside height map")
        return y * self.width + x

    def position_of(self, node_id: int) -> Tuple[int, int]:
        if not 0 <= node_id < self.width * self.height:
            raise IndexError(f"Node {node_id} outside height map")
        return node_id % self.width, node_id // self.width

    @property
    def start_index(self) -> int:
        return self.index_of(*self.start)

    @property
    def end_index(self) -> int:
        return self.index_of(*self.end)

    def find_cells_by_elevation(self, elevation: int) -> List[Tuple[int, int]]:
        ys, xs = np.nonzero(self.grid == elevation)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def lowest_cell_indices(self) -> List[int]:
        """Node ids of every cell at elevation a, including the start."""
        return [int(i) for i in np.flatnonzero(self.grid.reshape(-1) == 0)]

    def adjacency(self, max_climb: int = 1) -> GridAdjacency:
        return GridAdjacency(self.width, self.height, self.grid, max_climb=max_climb)

    def copy(self) -> "HeightMap":
        new_map = HeightMap(self.width, self.height, self.start, self.end)
        new_map.grid = self.grid.copy()
        return new_map

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "grid": self.grid.tolist(),
            "start": list(self.start),
            "end": list(self.end),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HeightMap":
        heightmap = cls(
            data["width"],
            data["height"],
            start=tuple(data["start"]),
            end=tuple(data["end"]),
        )
        grid = np.array(data["grid"], dtype=np.int64)
        if grid.shape != (heightmap.height, heightmap.width):
            raise ValueError(
                f"Grid shape {grid.shape} does not match "
                f"{heightmap.width}x{heightmap.height}"
            )
        if grid.size and (grid.min() < 0 or grid.max() > MAX_ELEVATION):
            raise ValueError(f"Elevations must be between 0 and {MAX_ELEVATION}")
        for name, position in (("start", heightmap.start), ("end", heightmap.end)):
            if len(position) != 2 or not heightmap.is_valid_position(*position):
                raise ValueError(f"{name} {position} outside height map")
        heightmap.grid = grid.astype(np.uint8)
        return heightmap

    def save_to_file(self, filename: str) -> None:
        with open(filename, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filename: str) -> "HeightMap":
        with open(filename, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def render(self, path: Optional[Iterable[int]] = None) -> str:
        """Text form of the map, with cells on path shown as '#'."""
        on_path = set(path) if path is not None else set()
        result = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) == self.start:
                    row.append(START_MARKER)
                elif (x, y) == self.end:
                    row.append(END_MARKER)
                elif y * self.width + x in on_path:
                    row.append("#")
                else:
                    row.append(chr(ord(LOWEST) + int(self.grid[y, x])))
            result.append("".join(row))
        return "\n".join(result)

    def __str__(self) -> str:
        return self.render()
