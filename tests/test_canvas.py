import pytest

from plotterm.canvas import Canvas, clip_line
from plotterm.grid import plan_grid
from plotterm.render import Renderer
from plotterm.sampler import sample_curve
from plotterm.subpixels import BlockChars, BrailleChars
from plotterm.utils import Color, V2


def test_canvas_size_is_measured_in_pixels():
    canvas = Canvas((10, 5))
    assert canvas.cell_size == (10, 5)
    assert canvas.size == (20, 20)
    assert Canvas((10, 5), resolution="high").size == (20, 10)


def test_unknown_resolution_is_rejected():
    with pytest.raises(ValueError):
        Canvas((10, 5), resolution="square")


def test_braille_pixels():
    canvas = Canvas((2, 2))
    canvas.set_at((0, 0), color="red")
    assert canvas[0, 0][0] == "⠁"
    canvas.set_at((1, 3))
    assert canvas[0, 0][0] == "⢁"
    assert canvas.get_at((1, 3)) and not canvas.get_at((1, 2))
    assert canvas[1, 1][0] == " "


def test_block_pixels():
    canvas = Canvas((2, 2), resolution="high")
    canvas.set_at((0, 0))
    canvas.set_at((1, 0))
    assert canvas[0, 0][0] == BlockChars.UPPER_HALF_BLOCK
    canvas.set_at((0, 1))
    canvas.set_at((1, 1))
    assert canvas[0, 0][0] == BlockChars.FULL_BLOCK


def test_braille_dots_follow_unicode_numbering():
    # dots 1-3 go down the left column, 4-6 down the right, 7 and 8 are the bottom row
    assert BrailleChars.char(BrailleChars.bit((0, 0))) == "⠁"
    assert BrailleChars.char(BrailleChars.bit((0, 2))) == "⠄"
    assert BrailleChars.char(BrailleChars.bit((1, 0))) == "⠈"
    assert BrailleChars.char(BrailleChars.bit((0, 3))) == "⡀"
    assert BrailleChars.char(BrailleChars.bit((1, 3))) == "⢀"
    assert BrailleChars.char(0b11111111) == "⣿"
    assert BrailleChars.char(0) == BrailleChars.EMPTY


def test_out_of_canvas_pixels_are_ignored():
    canvas = Canvas((2, 2))
    canvas.set_at((-1, 0))
    canvas.set_at((4, 0))
    canvas.set_at((0, 8))
    assert canvas.as_text() == "  \n  "


def test_cell_color_and_emphasis():
    canvas = Canvas((2, 1))
    canvas.set_at((0, 0), color="#ff0000", emphasis=True)
    char, color, emphasis = canvas[0, 0]
    assert color == Color((255, 0, 0))
    assert emphasis
    canvas.set_at((2, 0))
    assert canvas[1, 0][1] == canvas.default_color
    assert not canvas[1, 0][2]


def test_horizontal_line():
    canvas = Canvas((4, 1))
    canvas.line((0, 0), (7, 0), color="white")
    assert all(canvas.get_at((x, 0)) for x in range(8))
    assert not canvas.get_at((0, 1))


def test_diagonal_line_is_continuous():
    canvas = Canvas((5, 5))
    canvas.line((0, 0), (9, 19), color="white")
    rows = {y for y in range(20) for x in range(10) if canvas.get_at((x, y))}
    assert rows == set(range(20))


def test_wide_line():
    canvas = Canvas((4, 2))
    canvas.line((0, 4), (7, 4), color="white", width=2)
    assert canvas.get_at((3, 3)) and canvas.get_at((3, 4))
    assert not canvas.get_at((3, 5))


def test_lines_with_huge_coordinates_are_clipped():
    canvas = Canvas((10, 10))
    canvas.line((10, -1e12), (10, 1e12), color="white")
    assert all(canvas.get_at((10, y)) for y in range(40))
    canvas.line((-1e300, 5), (-1e299, 5), color="white")
    assert not canvas.get_at((0, 5))


@pytest.mark.parametrize("pos1, pos2, expected", [
    ((-13, 5), (51, 5), ((0, 5), (19, 5))),
    ((5, 5), (6, 6), ((5, 5), (6, 6))),
    ((-10, -10), (-1, -1), None),
    ((0, 30), (19, 30), None),
])
def test_clip_line(pos1, pos2, expected):
    assert clip_line(pos1, pos2, (20, 20)) == expected


def test_polyline_joins_points():
    canvas = Canvas((4, 2))
    canvas.polyline([(0, 0), (3, 0), (3, 5)], color="white")
    assert canvas.get_at((1, 0)) and canvas.get_at((3, 3))
    assert not canvas.get_at((0, 5))


def test_single_point_polyline():
    canvas = Canvas((2, 2))
    canvas.polyline([(2, 2)], color="white")
    assert canvas.get_at((2, 2))


@pytest.mark.parametrize("align, baseline, cells", [
    ("left", "top", [(4, 2), (5, 2)]),
    ("center", "top", [(3, 2), (4, 2)]),
    ("right", "middle", [(2, 2), (3, 2)]),
    ("left", "bottom", [(4, 2), (5, 2)]),
])
def test_text_anchoring(align, baseline, cells):
    canvas = Canvas((10, 5))
    canvas.text((8, 9), "ab", color="white", align=align, baseline=baseline)
    assert sorted(canvas.texts) == cells


def test_last_draw_wins_between_text_and_pixels():
    canvas = Canvas((3, 1))
    canvas.set_at((0, 0), color="red", emphasis=True)
    canvas.text((-2, 0), "xyz", color="white")
    assert canvas.as_text() == "yz "
    assert not canvas.get_at((0, 0))
    assert canvas[0, 0] == ("y", Color("white"), False)

    canvas.set_at((3, 1), color="red", emphasis=True)
    char, color, emphasis = canvas[1, 0]
    assert char == BrailleChars.char(BrailleChars.bit((1, 1)))
    assert color == Color("red") and emphasis
    assert canvas.as_text()[0] == "y"


def test_text_outside_canvas_is_clipped():
    canvas = Canvas((3, 1))
    canvas.text((0, 100), "hidden", color="white")
    canvas.text((8, 0), "hidden", color="white")
    assert canvas.as_text() == "   "
    assert not canvas.texts


def test_bad_text_anchor_is_rejected():
    canvas = Canvas((3, 1))
    with pytest.raises(ValueError):
        canvas.text((0, 0), "x", color="white", align="justify")
    with pytest.raises(ValueError):
        canvas.text((0, 0), "x", color="white", baseline="alphabetic")


def test_clear_and_resize():
    canvas = Canvas((3, 1))
    canvas.set_at((0, 0))
    canvas.text((4, 0), "x", color="white")
    canvas.clear()
    assert canvas.as_text() == "   "
    canvas.resize((2, 2))
    assert canvas.size == (4, 8)
    assert canvas.as_text() == "  \n  "


def test_cell_to_pixel_maps_to_cell_center():
    canvas = Canvas((10, 5))
    assert canvas.cell_to_pixel((0, 0)) == (1, 2)
    assert canvas.cell_to_pixel(V2(3, 2)) == (7, 10)


def test_curve_is_drawn_over_origin_label(transform, viewport, context):
    canvas = Canvas((400, 150))
    segments = sample_curve("-0.1", transform, viewport)
    Renderer(canvas, context).render(plan_grid(transform, viewport), segments, transform, viewport)
    # "0" is anchored right of (396, 304), the curve runs along y = 304
    char, color, emphasis = canvas[197, 76]
    assert char != "0"
    assert color == context.curve_color and emphasis
