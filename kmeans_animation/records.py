"""
Records shared by the engine and the renderers: colours, points, centroids.

Points and centroids compare by identity. A cluster holds references to the
very Point objects the simulation owns, so equality by value would let two
coincident points collapse into one.
"""

from dataclasses import dataclass, field

from matplotlib.colors import hsv_to_rgb


@dataclass
class Color:
    """HSB colour with alpha. hue in [0, 360], saturation/brightness in [0, 100]."""

    hue: float = 0.0
    saturation: float = 0.0
    brightness: float = 100.0
    alpha: float = 1.0

    def copy(self):
        return Color(self.hue, self.saturation, self.brightness, self.alpha)

    def to_rgba(self):
        """Convert to an (r, g, b, a) tuple in [0, 1] for matplotlib."""
        r, g, b = hsv_to_rgb((
            (self.hue % 360) / 360.0,
            self.saturation / 100.0,
            self.brightness / 100.0,
        ))
        return float(r), float(g), float(b), float(self.alpha)


def neutral_color():
    """Opaque white: the colour of a point before it has a final cluster."""
    return Color(0.0, 0.0, 100.0, 1.0)


def hue_step_color(index, k, alpha=0.25):
    """Divide the hue circle into k equal steps and pick step `index`."""
    return Color(360.0 * (index / k), 100.0, 100.0, alpha)


@dataclass(eq=False)
class Point:
    x: float
    y: float
    color: Color = field(default_factory=neutral_color)
    radius: float = 1.0


@dataclass(eq=False)
class Centroid:
    """
    A cluster representative.

    (x, y) is where the centroid is drawn and measured from; (target_x,
    target_y) is the cluster mean it is travelling toward. The two are equal
    whenever the centroid is not moving.
    """

    x: float
    y: float
    target_x: float
    target_y: float
    color: Color
    radius: float = 8.0

    @property
    def at_target(self):
        return self.x == self.target_x and self.y == self.target_y

    def retarget(self, target_x, target_y):
        self.target_x = target_x
        self.target_y = target_y


def centroid_from_point(point, index, k, radius):
    """Build a new Centroid sitting on `point`, coloured by its creation index."""
    return Centroid(
        x=point.x,
        y=point.y,
        target_x=point.x,
        target_y=point.y,
        color=hue_step_color(index, k),
        radius=radius,
    )
