import pytest

from plotterm.transform import Viewport, ViewTransform
from plotterm.values import SCALE_MAX, SCALE_MIN


def test_viewport_center_is_half_size():
    viewport = Viewport(800, 600)
    assert viewport.center == (400, 300)
    assert Viewport((801, 601)).center == (400.5, 300.5)


def test_default_transform_puts_origin_at_viewport_center(transform, viewport):
    assert transform.scale == 40
    assert transform.math_to_screen((0, 0), viewport) == (400, 300)
    assert transform.math_to_screen((1, 1), viewport) == (440, 260)


def test_math_y_grows_upwards_on_screen(transform, viewport):
    assert transform.math_to_screen((0, 2), viewport).y < transform.math_to_screen((0, 1), viewport).y


@pytest.mark.parametrize("scale, offset_x, offset_y", [
    (40, 0, 0),
    (0.001, 1234.5, -77),
    (3.7, -0.25, 0.125),
    (100000, 1e-3, 2e-3),
])
@pytest.mark.parametrize("point", [(0, 0), (1.5, -2.25), (-300, 12000.5)])
def test_screen_to_math_inverts_math_to_screen(scale, offset_x, offset_y, point, viewport):
    transform = ViewTransform(scale, offset_x, offset_y)
    screen = transform.math_to_screen(point, viewport)
    back = transform.screen_to_math(screen, viewport)
    assert back.x == pytest.approx(point[0], rel=1e-9, abs=1e-9)
    assert back.y == pytest.approx(point[1], rel=1e-9, abs=1e-9)


def test_pan_moves_rendered_points_by_delta_pixels(viewport):
    transform = ViewTransform(scale=25)
    before = transform.math_to_screen((3, 4), viewport)
    transform.pan((10, -5))
    after = transform.math_to_screen((3, 4), viewport)
    assert after.x == pytest.approx(before.x + 10)
    assert after.y == pytest.approx(before.y - 5)


@pytest.mark.parametrize("anchor", [(0, 0), (123, 456), (400, 300), (799, 1)])
@pytest.mark.parametrize("factor", [1.1, 0.9, 3.0])
def test_zoom_keeps_point_under_anchor(anchor, factor, viewport):
    transform = ViewTransform(scale=17, offset_x=2.5, offset_y=-1)
    under_anchor = transform.screen_to_math(anchor, viewport)
    transform.zoom_at(anchor, factor, viewport)
    assert transform.scale == pytest.approx(17 * factor)
    projected = transform.math_to_screen(under_anchor, viewport)
    assert projected.x == pytest.approx(anchor[0], abs=1e-6)
    assert projected.y == pytest.approx(anchor[1], abs=1e-6)


def test_zoom_keeps_anchor_when_scale_is_clamped(viewport):
    transform = ViewTransform(scale=SCALE_MAX / 2)
    under_anchor = transform.screen_to_math((100, 100), viewport)
    transform.zoom_at((100, 100), 10, viewport)
    assert transform.scale == SCALE_MAX
    projected = transform.math_to_screen(under_anchor, viewport)
    assert projected.x == pytest.approx(100)
    assert projected.y == pytest.approx(100)


def test_scale_is_clamped_on_construction_and_assignment():
    assert ViewTransform(scale=0).scale == SCALE_MIN
    assert ViewTransform(scale=1e9).scale == SCALE_MAX
    transform = ViewTransform()
    transform.scale = -5
    assert transform.scale == SCALE_MIN


def test_repeated_zooming_never_leaves_scale_range(viewport):
    transform = ViewTransform()
    for _ in range(500):
        transform.zoom_at((10, 20), 1.1, viewport)
    assert transform.scale == SCALE_MAX
    for _ in range(1000):
        transform.zoom_at((10, 20), 0.9, viewport)
    assert transform.scale == SCALE_MIN


def test_zoom_at_center_keeps_offsets_zero(transform, viewport):
    transform.zoom_at(viewport.center, 1.1, viewport)
    assert transform.scale == pytest.approx(44)
    assert transform.offset_x == 0
    assert transform.offset_y == 0


def test_reset_restores_default_view(transform, viewport):
    transform.pan((-35, 80))
    transform.zoom_at((10, 10), 0.5, viewport)
    transform.reset()
    assert transform == ViewTransform(40, 0, 0)
    assert transform.offset == (0, 0)


def test_visible_bounds(transform, viewport):
    assert transform.visible_bounds(viewport) == (-10, 10, -7.5, 7.5)
    transform.pan((40, 0))
    x_min, x_max, y_min, y_max = transform.visible_bounds(viewport)
    assert (x_min, x_max) == (-11, 9)
