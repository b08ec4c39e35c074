"""
Configuration for terrain shortest-path searches.
"""

from dataclasses import dataclass


@dataclass
class SearchConfig:
    """Configuration for ShortestPathSearch."""

    # Admissibility
    max_climb: int = 1  # Largest allowed elevation gain per step

    # Edge weights
    step_cost: int = 1  # Cost of every grid step

    # Results
    track_paths: bool = True  # Record predecessors so routes can be rebuilt

    def __post_init__(self):
        """Validate configuration."""
        if self.max_climb < 0:
            raise ValueError("max_climb must be non-negative")
        if self.step_cost <= 0:
            raise ValueError("step_cost must be positive")
