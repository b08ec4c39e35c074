"""
Dijkstra search over a height grid.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set

import numpy as np

from ..util.logger import logger
from .adjacency import GridAdjacency, StepRule
from .config import SearchConfig
from .indexed_heap import IndexedMinHeap

# Distance recorded for nodes no search has reached
UNREACHED = int(np.iinfo(np.uint32).max)


class SearchState(Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass
class SearchResult:
    """Result of a single search call."""

    distance: int
    state: SearchState
    target: Optional[int]
    path: Optional[List[int]]
    nodes_explored: int
    time_taken_ms: float

    @property
    def reached(self) -> bool:
        return self.distance != UNREACHED


class ShortestPathSearch:
    """Shortest paths over a GridAdjacency with unit-style step costs."""

    def __init__(
        self, adjacency: GridAdjacency, config: Optional[SearchConfig] = None
    ):
        """Initialize search.

        Args:
            adjacency: Grid neighbourhood to walk
            config: Search configuration, defaults to SearchConfig()
        """
        self.adjacency = adjacency
        self.config = config or SearchConfig()
        # A shortest path visits each node at most once and must stay below UNREACHED
        longest = (adjacency.node_count - 1) * self.config.step_cost
        if longest >= UNREACHED:
            raise ValueError(
                f"step_cost {self.config.step_cost} too large for "
                f"{adjacency.node_count} nodes, distances would reach {UNREACHED}"
            )
        self.state = SearchState.INITIALIZED
        self.logger = logger.bind(component="search")

    @classmethod
    def for_heightmap(
        cls, heightmap, config: Optional[SearchConfig] = None
    ) -> "ShortestPathSearch":
        """Build a search over a HeightMap using config.max_climb."""
        config = config or SearchConfig()
        return cls(heightmap.adjacency(max_climb=config.max_climb), config)

    def shortest_distance(self, start: int, end: int) -> int:
        """Length of the shortest climb from start to end, or UNREACHED."""
        return self.find_path(start, end).distance

    def min_distance_to_any(self, end: int, candidates: Iterable[int]) -> int:
        """Shortest distance from any candidate to end, or UNREACHED."""
        return self.find_nearest(end, candidates).distance

    def find_path(self, start: int, end: int) -> SearchResult:
        """Search forward from start, stopping the first time end is popped.

        Args:
            start: Source node id
            end: Target node id

        Returns:
            SearchResult; path runs from start to end when tracking is on
        """
        start_time = time.time()
        self.logger.debug(f"Searching {start} -> {end}")

        self.adjacency.position_of(end)
        distances, visited, predecessors, heap = self._seed(start)
        self.state = SearchState.RUNNING
        nodes_explored = 0
        distance = UNREACHED

        while heap:
            current_distance, node = heap.pop()
            nodes_explored += 1
            if node == end:
                # First pop of the target carries its final distance
                distance = current_distance
                break
            visited[node] = True
            self._relax(
                node,
                current_distance,
                StepRule.CLIMB,
                distances,
                visited,
                predecessors,
                heap,
            )

        if distance != UNREACHED:
            self.state = SearchState.FOUND
        else:
            self.state = SearchState.EXHAUSTED

        path = None
        if distance != UNREACHED and predecessors is not None:
            path = self._walk_back(predecessors, end)
            path.reverse()

        elapsed_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            f"Search {self.state.value} after {nodes_explored} nodes "
            f"in {elapsed_ms:.2f}ms"
        )
        return SearchResult(
            distance=distance,
            state=self.state,
            target=end if distance != UNREACHED else None,
            path=path,
            nodes_explored=nodes_explored,
            time_taken_ms=elapsed_ms,
        )

    def find_nearest(self, end: int, candidates: Iterable[int]) -> SearchResult:
        """Find the candidate with the shortest route to end.

        Walks backward from end under the descend rule until every candidate
        has been popped or the reachable region is exhausted.

        Args:
            end: Node every route must finish at
            candidates: Possible source node ids

        Returns:
            SearchResult; target is the closest candidate and path runs from
            it to end when tracking is on
        """
        start_time = time.time()
        remaining: Set[int] = set(candidates)
        for candidate in remaining:
            self.adjacency.position_of(candidate)
        self.logger.debug(
            f"Searching back from {end} towards {len(remaining)} candidates"
        )

        distances, visited, predecessors, heap = self._seed(end)
        self.state = SearchState.RUNNING
        nodes_explored = 0
        min_distance = UNREACHED
        nearest: Optional[int] = None

        while remaining and heap:
            current_distance, node = heap.pop()
            nodes_explored += 1
            if node in remaining:
                remaining.remove(node)
                if current_distance < min_distance:
                    min_distance = current_distance
                    nearest = node
                if not remaining:
                    break
            visited[node] = True
            self._relax(
                node,
                current_distance,
                StepRule.DESCEND,
                distances,
                visited,
                predecessors,
                heap,
            )

        if nearest is not None:
            self.state = SearchState.FOUND
        else:
            self.state = SearchState.EXHAUSTED
        if remaining:
            self.logger.debug(f"{len(remaining)} candidates unreachable from {end}")

        path = None
        if nearest is not None and predecessors is not None:
            # Predecessors point back towards end, so this is already source-first
            path = self._walk_back(predecessors, nearest)

        elapsed_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            f"Search {self.state.value} after {nodes_explored} nodes "
            f"in {elapsed_ms:.2f}ms"
        )
        return SearchResult(
            distance=min_distance,
            state=self.state,
            target=nearest,
            path=path,
            nodes_explored=nodes_explored,
            time_taken_ms=elapsed_ms,
        )

    def _seed(self, source: int):
        """Fresh per-call state with source queued at distance 0."""
        node_count = self.adjacency.node_count
        # Validates source before any allocation is used
        self.adjacency.position_of(source)

        distances = np.full(node_count, UNREACHED, dtype=np.uint32)
        visited = np.zeros(node_count, dtype=np.bool_)
        predecessors = None
        if self.config.track_paths:
            predecessors = np.full(node_count, -1, dtype=np.int64)

        heap = IndexedMinHeap()
        distances[source] = 0
        visited[source] = True
        heap.insert(0, source)
        return distances, visited, predecessors, heap

    def _relax(
        self,
        node: int,
        node_distance: int,
        rule: StepRule,
        distances: np.ndarray,
        visited: np.ndarray,
        predecessors: Optional[np.ndarray],
        heap: IndexedMinHeap,
    ) -> None:
        candidate = node_distance + self.config.step_cost
        for neighbor in self.adjacency.traversable_neighbors(node, rule):
            if visited[neighbor]:
                continue
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                if predecessors is not None:
                    predecessors[neighbor] = node
                heap.insert_or_decrease(neighbor, candidate)

    @staticmethod
    def _walk_back(predecessors: np.ndarray, node: int) -> List[int]:
        """Follow predecessor links from node to the search source."""
        path = [node]
        while predecessors[node] != -1:
            node = int(predecessors[node])
            path.append(node)
        return path
