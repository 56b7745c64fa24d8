import matplotlib
matplotlib.use('Agg')

import pytest

from kmeans_animation import Point, SimulationConfig, centroid_from_point


def four_point_run(config, random_state=None):
    """Two columns of two points, centroids on the bottom of each column."""
    points = [Point(0.0, 0.0), Point(0.0, 1.0), Point(10.0, 0.0), Point(10.0, 1.0)]
    centroids = [centroid_from_point(points[0], 0, 2, 8.0),
                 centroid_from_point(points[2], 1, 2, 8.0)]
    return points, centroids


@pytest.fixture
def four_point_config():
    return SimulationConfig(canvas_extent=20, point_count=4, k=2)


@pytest.fixture
def small_config():
    return SimulationConfig(point_count=300, k=3, batch_size=7)


class RecordingRenderer:
    """Logs every adapter call as (name, args)."""

    def __init__(self):
        self.calls = []

    def begin_frame(self):
        self.calls.append(('begin_frame',))

    def draw_line(self, centroid, point):
        self.calls.append(('draw_line', centroid, point))

    def draw_centroid(self, centroid):
        self.calls.append(('draw_centroid', centroid))

    def draw_point(self, point):
        self.calls.append(('draw_point', point))

    def draw_overlay_text(self, message):
        self.calls.append(('draw_overlay_text', message))

    def end_frame(self):
        self.calls.append(('end_frame',))

    def names(self):
        return [c[0] for c in self.calls]
