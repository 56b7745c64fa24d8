"""
K-MEANS, ONE FRAME AT A TIME (Paradigm: CENTROID PARTITIONING)

===============================================================
WHAT IT IS (THE CORE IDEA)
===============================================================

Lloyd's algorithm, unrolled so every step can be watched:

    1. ASSIGN: each point → nearest centroid
    2. UPDATE: each centroid's target → mean of its points
    3. If no centroid moved: done
    4. Otherwise glide centroids to their targets, go to 1

A plain implementation assigns all n points in one vectorized call.
Here the ASSIGN step is spread over many ticks: the worklist holds
the points not yet assigned in this pass and each tick pops a batch
of them. The batch size only controls animation cadence; the result
of a pass is the same as assigning everything at once.

===============================================================
THE PARTITION INVARIANT
===============================================================

At any moment between ticks:

    worklist ∪ cluster_0 ∪ ... ∪ cluster_{K-1} = all points

and every point is in exactly one of them. When the worklist is
empty the clusters are a partition of the point set.

===============================================================
CONVERGENCE
===============================================================

Converged ⇔ every centroid already sits EXACTLY on its freshly
computed mean. No tolerance: the repositioning step snaps onto
targets, so a stable assignment reproduces bit-identical means.

EMPTY CLUSTERS:
    A centroid that owns no points has no mean. It keeps its current
    position as its target, which counts as "not moved" for the
    convergence test.
===============================================================
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .records import Point, Centroid

logger = logging.getLogger(__name__)


class SimulationState(enum.Enum):
    CLUSTERING = "clustering"
    REPOSITIONING = "repositioning"
    FINAL = "final"


@dataclass
class SimulationContext:
    """Everything a run owns. Mutated only by the tick handlers."""

    points: List[Point]
    centroids: List[Centroid]
    clusters: Optional[List[List[Point]]] = None
    worklist: Optional[List[Point]] = None
    state: SimulationState = SimulationState.CLUSTERING
    passes: int = 0
    inertia: float = 0.0
    history: List[float] = field(default_factory=list)

    def __post_init__(self):
        if self.clusters is None:
            self.clusters = [[] for _ in self.centroids]
        if self.worklist is None:
            self.worklist = list(self.points)

    @property
    def k(self):
        return len(self.centroids)

    def start_pass(self):
        """Refill the worklist with every point and empty all clusters."""
        self.worklist = list(self.points)
        self.clusters = [[] for _ in self.centroids]
        self.inertia = 0.0


def centroid_positions(centroids):
    return np.array([(c.x, c.y) for c in centroids], dtype=float)


def nearest_centroid(point, centroids):
    """
    Index of the centroid closest to `point` (Euclidean).

    np.argmin returns the first minimum, so ties go to the lowest index.
    """
    C = centroid_positions(centroids)
    distances = np.hypot(C[:, 0] - point.x, C[:, 1] - point.y)
    return int(np.argmin(distances))


def _assign_batch(batch, centroids):
    """
    Vectorized nearest-centroid search for a batch of points.

    Returns labels (b,) and squared distances to the chosen centroid (b,).
    """
    P = np.array([(p.x, p.y) for p in batch], dtype=float)   # (b, 2)
    C = centroid_positions(centroids)                         # (K, 2)

    diff = P[:, np.newaxis, :] - C[np.newaxis, :, :]          # (b, K, 2)
    distances = np.hypot(diff[..., 0], diff[..., 1])          # (b, K)
    labels = np.argmin(distances, axis=1)
    nearest = distances[np.arange(len(batch)), labels]
    return labels, nearest ** 2


def _update_targets(context):
    """Retarget every centroid onto the mean of its cluster."""
    for idx, (centroid, cluster) in enumerate(zip(context.centroids, context.clusters)):
        if not cluster:
            logger.debug("Cluster %d is empty; centroid %d keeps its position", idx, idx)
            centroid.retarget(centroid.x, centroid.y)
            continue
        mean_x, mean_y = np.array([(p.x, p.y) for p in cluster], dtype=float).mean(axis=0)
        centroid.retarget(float(mean_x), float(mean_y))


def has_converged(centroids):
    return all(c.at_target for c in centroids)


def _color_final_clusters(context):
    for centroid, cluster in zip(context.centroids, context.clusters):
        for point in cluster:
            point.color = centroid.color.copy()
            point.color.alpha = 1.0


def _finish_pass(context):
    _update_targets(context)
    context.passes += 1
    context.history.append(context.inertia)
    logger.info("Pass %d finished: inertia=%.1f", context.passes, context.inertia)

    if has_converged(context.centroids):
        _color_final_clusters(context)
        context.state = SimulationState.FINAL
        logger.info("Converged after %d passes", context.passes)
    else:
        context.state = SimulationState.REPOSITIONING
        logger.debug("Targets moved; repositioning")


def advance_clustering(context, batch_size):
    """
    Assign up to `batch_size` worklist points to their nearest centroid.

    If this call empties the worklist, the pass is finished: targets are
    recomputed and the state moves to FINAL or REPOSITIONING.
    """
    if context.state is not SimulationState.CLUSTERING:
        raise RuntimeError(f"advance_clustering called in state {context.state.name}")
    if not context.worklist:
        raise RuntimeError("advance_clustering called with an empty worklist")

    batch = [context.worklist.pop() for _ in range(min(batch_size, len(context.worklist)))]

    labels, sq_dists = _assign_batch(batch, context.centroids)
    for point, label in zip(batch, labels):
        context.clusters[label].append(point)
    context.inertia += float(sq_dists.sum())

    if not context.worklist:
        _finish_pass(context)

    return context.state
