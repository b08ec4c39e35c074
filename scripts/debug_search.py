#!/usr/bin/env python3
"""
Debug script for the terrain search - prints per-candidate distances and
checks that the first candidate popped is already the nearest one.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import src modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.pathfinding import UNREACHED, SearchConfig, ShortestPathSearch
from src.terrain import HeightMap
from src.util.logger import set_component_level


def main():
    """Run searches with verbose output."""
    parser = argparse.ArgumentParser(
        description="Debug terrain search with verbose output"
    )
    parser.add_argument("input", help="Path to the height map text file")
    parser.add_argument(
        "--max-climb", type=int, default=1, help="Largest elevation gain per step"
    )

    args = parser.parse_args()
    set_component_level("search", "DEBUG")

    heightmap = HeightMap.load_text_file(args.input)
    print("=== Height map ===")
    print(heightmap)
    print(f"Size: {heightmap.width}x{heightmap.height}")
    print(f"Start: {heightmap.start}  End: {heightmap.end}")
    print()

    search = ShortestPathSearch.for_heightmap(
        heightmap, SearchConfig(max_climb=args.max_climb)
    )

    climb = search.find_path(heightmap.start_index, heightmap.end_index)
    print("=== Start to end ===")
    print(f"State: {climb.state.value}")
    print(f"Distance: {climb.distance if climb.reached else 'unreachable'}")
    print(f"Nodes: {climb.nodes_explored}")
    print(f"Time: {climb.time_taken_ms:.1f}ms")
    if climb.path:
        print(heightmap.render(climb.path))
    print()

    candidates = heightmap.lowest_cell_indices()
    nearest = search.find_nearest(heightmap.end_index, candidates)
    print("=== Nearest lowest cell to end ===")
    print(f"Candidates: {len(candidates)}")
    print(f"State: {nearest.state.value}")
    print(f"Distance: {nearest.distance if nearest.reached else 'unreachable'}")
    if nearest.target is not None:
        print(f"Nearest: {heightmap.position_of(nearest.target)}")
    print(f"Nodes: {nearest.nodes_explored}")
    print(f"Time: {nearest.time_taken_ms:.1f}ms")
    print()

    # Per-candidate distances, one backward search each
    per_candidate = [
        search.min_distance_to_any(heightmap.end_index, [candidate])
        for candidate in candidates
    ]
    reachable = [d for d in per_candidate if d != UNREACHED]
    print(f"Reachable candidates: {len(reachable)} of {len(candidates)}")
    if reachable:
        best = min(reachable)
        print(f"Minimum over single-candidate searches: {best}")
        if best != nearest.distance:
            print("MISMATCH between multi-candidate and single-candidate searches!")


if __name__ == "__main__":
    main()
