"""
Elevation maps for hill-climb searches.

Parses the a-z text format with S/E markers into a numpy height grid.
"""

from .errors import GridParseError
from .heightmap import HeightMap, elevation_of

__all__ = ["GridParseError", "HeightMap", "elevation_of"]
