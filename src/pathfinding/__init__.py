"""
Dijkstra shortest-path search over elevation grids.

Built on an indexed min-heap that supports decrease-key.
"""

from .adjacency import Direction, GridAdjacency, StepRule
from .config import SearchConfig
from .indexed_heap import IndexedMinHeap
from .search import UNREACHED, SearchResult, SearchState, ShortestPathSearch

__all__ = [
    "Direction",
    "GridAdjacency",
    "IndexedMinHeap",
    "SearchConfig",
    "SearchResult",
    "SearchState",
    "ShortestPathSearch",
    "StepRule",
    "UNREACHED",
]
