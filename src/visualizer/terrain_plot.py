"""
Matplotlib rendering of height maps and the routes found across them.
"""

from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt

from src.terrain.heightmap import LOWEST, MAX_ELEVATION, HeightMap

PATH_COLORS = ["#FF0000", "#00BFFF", "#FFA500", "#7CFC00"]


def plot_heightmap(
    heightmap: HeightMap,
    paths: Optional[Dict[str, Sequence[int]]] = None,
    save_path: Optional[str] = None,
    show_letters: bool = False,
):
    """Draw the elevation grid with optional labelled routes on top.

    Args:
        heightmap: Parsed terrain
        paths: Label -> node ids from source to target
        save_path: Write the figure here instead of showing it
        show_letters: Annotate each cell with its elevation letter

    Returns:
        The matplotlib Figure
    """
    width, height = heightmap.width, heightmap.height
    fig, ax = plt.subplots(figsize=(max(4, width * 0.25), max(3, height * 0.25)))

    im = ax.imshow(
        heightmap.grid,
        cmap="terrain",
        vmin=0,
        vmax=MAX_ELEVATION,
        interpolation="nearest",
    )
    cbar = plt.colorbar(im, ax=ax, shrink=0.8)
    cbar.set_label("Elevation")

    if show_letters:
        for y in range(height):
            for x in range(width):
                ax.text(
                    x,
                    y,
                    chr(ord(LOWEST) + int(heightmap.grid[y, x])),
                    ha="center",
                    va="center",
                    fontsize=6,
                    color="black",
                )

    for i, (label, path) in enumerate((paths or {}).items()):
        if not path:
            continue
        xs = [node % width for node in path]
        ys = [node // width for node in path]
        ax.plot(
            xs,
            ys,
            color=PATH_COLORS[i % len(PATH_COLORS)],
            linewidth=2,
            label=f"{label} ({len(path) - 1} steps)",
            zorder=5,
        )

    sx, sy = heightmap.start
    ex, ey = heightmap.end
    ax.scatter([sx], [sy], marker="o", color="white", edgecolors="black", zorder=10)
    ax.scatter(
        [ex], [ey], marker="*", s=120, color="yellow", edgecolors="black", zorder=10
    )

    ax.set_xlim(-0.5, width - 0.5)
    ax.set_ylim(height - 0.5, -0.5)
    ax.set_xlabel("X (columns)")
    ax.set_ylabel("Y (rows)")
    ax.set_title(f"Height map: {width}×{height}")
    if paths:
        ax.legend(loc="upper right", fontsize=8)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
    else:
        plt.show()

    return fig
