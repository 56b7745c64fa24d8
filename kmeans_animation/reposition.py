"""
Centroid repositioning: glide each centroid toward its target.

Each tick every axis moves a fixed fraction of the remaining distance
(exponential smoothing). Exponential smoothing never arrives on its own,
so once an axis is within `snap_threshold` of its target it jumps
straight onto it. Arriving exactly matters: convergence is tested with
exact equality.
"""

import logging

from .clustering import SimulationState

logger = logging.getLogger(__name__)


def lerp_with_snap(start, end, amount, threshold):
    """Linear interpolation from start toward end, snapping when close."""
    if abs(start - end) < threshold:
        return end
    return start + (end - start) * amount


def advance_reposition(context, smoothing=0.1, snap_threshold=0.1):
    """
    Move every centroid one step toward its target.

    When all centroids have arrived, start a new clustering pass.
    Returns the (possibly updated) state.
    """
    if context.state is not SimulationState.REPOSITIONING:
        raise RuntimeError(f"advance_reposition called in state {context.state.name}")

    complete = 0
    for centroid in context.centroids:
        centroid.x = lerp_with_snap(centroid.x, centroid.target_x, smoothing, snap_threshold)
        centroid.y = lerp_with_snap(centroid.y, centroid.target_y, smoothing, snap_threshold)
        if centroid.at_target:
            complete += 1

    if complete == context.k:
        context.start_pass()
        context.state = SimulationState.CLUSTERING
        logger.debug("All %d centroids at target; starting pass %d",
                     complete, context.passes + 1)

    return context.state
