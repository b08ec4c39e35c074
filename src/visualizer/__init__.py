"""
Plotting helpers for height maps and search routes.
"""

from .terrain_plot import plot_heightmap

__all__ = ["plot_heightmap"]
