"""Animated k-means: Lloyd's algorithm stepped one frame at a time."""

from .config import SimulationConfig, ConfigurationError
from .records import Color, Point, Centroid, centroid_from_point, hue_step_color
from .datasets import generate_run
from .clustering import (SimulationState, SimulationContext, nearest_centroid,
                         advance_clustering)
from .reposition import lerp_with_snap, advance_reposition
from .rendering import RenderAdapter, MatplotlibRenderer
from .simulation import Simulation, FINAL_MESSAGE

__all__ = [
    'SimulationConfig', 'ConfigurationError',
    'Color', 'Point', 'Centroid', 'centroid_from_point', 'hue_step_color',
    'generate_run',
    'SimulationState', 'SimulationContext', 'nearest_centroid', 'advance_clustering',
    'lerp_with_snap', 'advance_reposition',
    'RenderAdapter', 'MatplotlibRenderer',
    'Simulation', 'FINAL_MESSAGE',
]
