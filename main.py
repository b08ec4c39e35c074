#!/usr/bin/env python3
"""
Hill-climb route finder

Reads an a-z height map with S (start) and E (end) markers and reports the
fewest steps from S to E, climbing at most one level per step, and the
fewest steps from any lowest cell to E.
"""

import argparse
import sys

from src.pathfinding import SearchConfig, ShortestPathSearch
from src.terrain import GridParseError, HeightMap
from src.util.logger import logger, set_component_level


def format_distance(result) -> str:
    return str(result.distance) if result.reached else "unreachable"


def run(input_path: str, plot_path=None, show_path: bool = False) -> int:
    """Solve both questions for one height map file and print the answers."""
    log = logger.bind(component="cli")
    try:
        heightmap = HeightMap.load_text_file(input_path)
    except OSError as e:
        log.error(f"Could not read {input_path}: {e}")
        return 1
    except GridParseError as e:
        log.error(f"Invalid height map {input_path}: {e}")
        return 1

    search = ShortestPathSearch.for_heightmap(heightmap, SearchConfig())

    climb = search.find_path(heightmap.start_index, heightmap.end_index)
    print(format_distance(climb))

    nearest = search.find_nearest(heightmap.end_index, heightmap.lowest_cell_indices())
    print(format_distance(nearest))

    if show_path and climb.path:
        print()
        print(heightmap.render(climb.path))

    if plot_path:
        from src.visualizer.terrain_plot import plot_heightmap

        paths = {}
        if climb.path:
            paths["start to end"] = climb.path
        if nearest.path:
            paths["nearest lowest cell"] = nearest.path
        plot_heightmap(heightmap, paths, save_path=plot_path)
        log.info(f"Saved plot to {plot_path}")

    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Shortest hill-climb routes across an elevation map",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py input.txt                    # Print both distances
  python main.py input.txt --show-path        # Also draw the S->E route
  python main.py input.txt --plot route.png   # Save a terrain plot
        """,
    )

    parser.add_argument("input", help="Path to the height map text file")
    parser.add_argument(
        "--plot", default=None, help="Save a matplotlib plot of the routes here"
    )
    parser.add_argument(
        "--show-path", action="store_true", help="Print the map with the S->E route"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log search progress at DEBUG level"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        set_component_level("search", "DEBUG")
        set_component_level("terrain", "DEBUG")

    return run(args.input, plot_path=args.plot, show_path=args.show_path)


if __name__ == "__main__":
    sys.exit(main())
