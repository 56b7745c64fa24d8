"""
Simulation configuration.

All knobs of a run live in one dataclass so the CLI, the tests and the
simulation agree on defaults. Validation happens once, at construction.
"""

import math
from dataclasses import dataclass
from typing import Optional


class ConfigurationError(ValueError):
    """Raised when a SimulationConfig describes a degenerate run."""


@dataclass
class SimulationConfig:
    """
    Parameters:
    -----------
    canvas_extent : side length of the square canvas
    point_count : total number of synthetic points
    point_radius : display radius of a point
    centroid_radius : display radius of a centroid (default 8x point_radius)
    batch_size : points assigned per tick (default point_count / 30, rounded up)
    k : number of clusters
    smoothing : fraction of the remaining distance a centroid moves per tick
    snap_threshold : distance below which a centroid snaps onto its target
    max_placement_retries : re-sampling rounds before blob points are clamped
    """

    canvas_extent: float = 720
    point_count: int = 2500
    point_radius: float = 1
    centroid_radius: Optional[float] = None
    batch_size: Optional[int] = None
    k: int = 4
    smoothing: float = 0.1
    snap_threshold: float = 0.1
    max_placement_retries: int = 100

    def __post_init__(self):
        if self.centroid_radius is None:
            self.centroid_radius = self.point_radius * 8
        if self.batch_size is None and self.point_count > 0:
            self.batch_size = max(1, math.ceil(self.point_count / 30))
        self.validate()

    def validate(self):
        """Fail fast on any configuration the engine cannot run."""
        if self.k <= 0:
            raise ConfigurationError(f"k must be positive, got {self.k}")
        if self.point_count <= 0:
            raise ConfigurationError(f"point_count must be positive, got {self.point_count}")
        if self.canvas_extent <= 0:
            raise ConfigurationError(f"canvas_extent must be positive, got {self.canvas_extent}")
        if self.point_radius <= 0 or self.centroid_radius <= 0:
            raise ConfigurationError("point_radius and centroid_radius must be positive")
        if self.canvas_extent <= 2 * self.point_radius:
            raise ConfigurationError(
                f"canvas_extent ({self.canvas_extent}) leaves no room for points "
                f"of radius {self.point_radius}")
        if self.batch_size is None or self.batch_size <= 0:
            raise ConfigurationError(f"batch_size must be positive, got {self.batch_size}")
        if not 0 < self.smoothing <= 1:
            raise ConfigurationError(f"smoothing must be in (0, 1], got {self.smoothing}")
        if self.snap_threshold <= 0:
            raise ConfigurationError(f"snap_threshold must be positive, got {self.snap_threshold}")
        if self.max_placement_retries < 0:
            raise ConfigurationError("max_placement_retries cannot be negative")
        return self

    @property
    def bounds(self):
        """Inclusive (low, high) range a point centre may occupy on either axis."""
        return self.point_radius, self.canvas_extent - self.point_radius
