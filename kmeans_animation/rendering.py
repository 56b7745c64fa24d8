"""
Render adapters.

The simulation never draws anything itself. After each tick it walks its
points, centroids and clusters and calls a RenderAdapter:

    while running:   draw_line (per cluster member) → draw_centroid → draw_point
    when final:      draw_point → draw_overlay_text

begin_frame / end_frame bracket one tick's worth of calls.
"""

import logging

import numpy as np
from matplotlib.collections import LineCollection

logger = logging.getLogger(__name__)


class RenderAdapter:
    """Drawing surface interface. Every hook defaults to doing nothing."""

    def begin_frame(self):
        pass

    def draw_line(self, centroid, point):
        pass

    def draw_centroid(self, centroid):
        pass

    def draw_point(self, point):
        pass

    def draw_overlay_text(self, message):
        pass

    def end_frame(self):
        pass


class MatplotlibRenderer(RenderAdapter):
    """
    Draws frames onto a matplotlib Axes.

    Issuing one artist per point would be far too slow for thousands of
    points, so draw calls are buffered during the frame and flushed in
    end_frame as one LineCollection, two scatters and one text artist.
    Radii are in canvas units; scatter sizes are in points², so the sizes
    are an approximation chosen to look right at the default figure size.
    """

    def __init__(self, ax, canvas_extent, marker_scale=4.0):
        self.ax = ax
        self.canvas_extent = canvas_extent
        self.marker_scale = marker_scale
        self.artists = []
        self._reset_buffers()

        ax.set_facecolor('black')
        ax.set_xlim(0, canvas_extent)
        # Canvas y grows downward
        ax.set_ylim(canvas_extent, 0)
        ax.set_aspect('equal')
        ax.set_xticks([])
        ax.set_yticks([])

    def _reset_buffers(self):
        self._segments = []
        self._segment_colors = []
        self._centroids = []
        self._points = []
        self._message = None

    def begin_frame(self):
        self._reset_buffers()

    def draw_line(self, centroid, point):
        self._segments.append([(centroid.x, centroid.y), (point.x, point.y)])
        self._segment_colors.append(centroid.color.to_rgba())

    def draw_centroid(self, centroid):
        self._centroids.append(centroid)

    def draw_point(self, point):
        self._points.append(point)

    def draw_overlay_text(self, message):
        self._message = message

    def _scatter(self, items, zorder):
        xy = np.array([(item.x, item.y) for item in items], dtype=float)
        sizes = [(self.marker_scale * item.radius) ** 2 for item in items]
        colors = [item.color.to_rgba() for item in items]
        return self.ax.scatter(xy[:, 0], xy[:, 1], s=sizes, c=colors,
                               linewidths=0, zorder=zorder)

    def end_frame(self):
        for artist in self.artists:
            artist.remove()
        self.artists = []

        if self._segments:
            lines = LineCollection(self._segments, colors=self._segment_colors,
                                   linewidths=0.5, zorder=1)
            self.ax.add_collection(lines)
            self.artists.append(lines)
        if self._centroids:
            self.artists.append(self._scatter(self._centroids, zorder=2))
        if self._points:
            self.artists.append(self._scatter(self._points, zorder=3))
        if self._message:
            text = self.ax.text(self.canvas_extent / 2, self.canvas_extent - 16,
                                self._message, color='yellow', fontsize=12,
                                ha='center', va='center', zorder=4)
            self.artists.append(text)
        return self.artists
