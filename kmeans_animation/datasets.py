"""
SYNTHETIC POINT SETS: Blobs plus background scatter

Every run starts from a fresh point set and fresh centroids.

WHAT THE DATA LOOKS LIKE:
    ~90% of points are scattered around K randomly placed "blob" anchors:
        offset = r * (cos a, -sin a),   r ~ U[0, 75],  a ~ U[0, 2π)
        jitter = ±N(24, 15) on each axis (random sign)
    ~10% of points are uniform noise over the whole canvas.

    The jitter has a non-zero mean, so each blob is a ring-ish smear
    rather than a tight Gaussian. That is what makes the animation
    interesting: the clusters are visible but not trivially separated.

WHY K BLOBS AND K CENTROIDS?
    The number of blobs matches the number of clusters, so a good run
    recovers the blobs. Centroids start on randomly chosen data points
    (with replacement), so two centroids may start on the same point and
    one of them may end up owning nothing for a while.

PLACEMENT:
    A blob near the canvas edge throws some of its samples off-canvas.
    Those are re-sampled, but only a bounded number of times; whatever
    is still outside after that is clamped onto the canvas.
"""

import logging
from typing import List, Tuple

import numpy as np

from .records import Point, Centroid, centroid_from_point

logger = logging.getLogger(__name__)

BLOB_RADIUS = 75.0
NUDGE_MEAN = 24.0
NUDGE_STD = 15.0
BLOB_FRACTION = 9 / 10


def _uniform_positions(rng, n, low, high):
    return rng.uniform(low, high, size=(n, 2))


def _nudge(rng, n):
    """Per-axis jitter: |N(24, 15)|-ish magnitude with a random sign."""
    signs = rng.choice([-1.0, 1.0], size=(n, 2))
    return signs * rng.normal(NUDGE_MEAN, NUDGE_STD, size=(n, 2))


def _blob_candidates(rng, anchors):
    n = anchors.shape[0]
    r = rng.uniform(0, BLOB_RADIUS, size=n)
    angle = rng.uniform(0, 2 * np.pi, size=n)
    offsets = np.column_stack([r * np.cos(angle), -r * np.sin(angle)])
    return anchors + offsets + _nudge(rng, n)


def _inside(positions, low, high):
    return np.all((positions > low) & (positions < high), axis=1)


def make_blob_positions(rng, anchors, n_samples, low, high, max_retries=100):
    """
    Sample n_samples positions around randomly chosen anchors.

    Parameters:
    -----------
    rng : np.random.RandomState
    anchors : (K, 2) array of blob anchors
    n_samples : number of positions to draw
    low, high : open interval every coordinate must fall in
    max_retries : re-sampling rounds for out-of-bounds candidates

    Returns:
    --------
    positions : (n_samples, 2) array, all inside [low, high]
    """
    choice = rng.randint(anchors.shape[0], size=n_samples)
    chosen = anchors[choice]
    positions = _blob_candidates(rng, chosen)

    outside = ~_inside(positions, low, high)
    retries = 0
    while outside.any() and retries < max_retries:
        positions[outside] = _blob_candidates(rng, chosen[outside])
        outside = ~_inside(positions, low, high)
        retries += 1

    n_outside = int(outside.sum())
    if n_outside:
        logger.warning("%d blob points still off-canvas after %d retries; clamping",
                       n_outside, max_retries)
        positions[outside] = np.clip(positions[outside], low, high)

    return positions


def generate_run(config, random_state=None) -> Tuple[List[Point], List[Centroid]]:
    """
    Build the points and centroids of a new run.

    random_state seeds a private RandomState, so two calls with the same
    seed and config return identical runs.
    """
    rng = np.random.RandomState(random_state)
    low, high = config.bounds

    anchors = _uniform_positions(rng, config.k, low, high)

    n_blob = int(config.point_count * BLOB_FRACTION)
    n_scatter = config.point_count - n_blob

    blob_xy = make_blob_positions(rng, anchors, n_blob, low, high,
                                  max_retries=config.max_placement_retries)
    scatter_xy = _uniform_positions(rng, n_scatter, low, high)
    positions = np.vstack([blob_xy, scatter_xy])

    points = [Point(float(x), float(y), radius=config.point_radius) for x, y in positions]

    # Starting centroids: K data points, drawn with replacement
    seeds = rng.randint(len(points), size=config.k)
    centroids = [centroid_from_point(points[i], idx, config.k, config.centroid_radius)
                 for idx, i in enumerate(seeds)]

    logger.info("Generated %d points (%d blob, %d scatter) and %d centroids",
                len(points), n_blob, n_scatter, len(centroids))
    return points, centroids
