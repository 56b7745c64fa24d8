import pytest

from kmeans_animation import Color, Point, centroid_from_point, hue_step_color


def test_points_compare_by_identity():
    a, b = Point(1.0, 2.0), Point(1.0, 2.0)
    assert a != b
    assert len({a, b}) == 2


def test_centroid_from_point_is_a_distinct_record():
    p = Point(3.0, 4.0)
    c = centroid_from_point(p, 1, 4, radius=8.0)
    assert (c.x, c.y) == (3.0, 4.0)
    assert (c.target_x, c.target_y) == (3.0, 4.0)
    assert c.at_target
    assert c.radius == 8.0

    c.x = 100.0
    assert p.x == 3.0


def test_hue_steps_divide_the_circle():
    hues = [hue_step_color(i, 4).hue for i in range(4)]
    assert hues == [0.0, 90.0, 180.0, 270.0]
    assert hue_step_color(0, 4).alpha == 0.25


def test_color_copy_is_independent():
    c = Color(120.0, 100.0, 100.0, 0.25)
    d = c.copy()
    d.alpha = 1.0
    assert c.alpha == 0.25


def test_to_rgba():
    assert Color(0.0, 100.0, 100.0, 0.5).to_rgba() == pytest.approx((1.0, 0.0, 0.0, 0.5))
    assert Point(0.0, 0.0).color.to_rgba() == pytest.approx((1.0, 1.0, 1.0, 1.0))
