import pytest

from plotterm.utils import Color, V2, clamp


@pytest.mark.parametrize("value, components", [
    ("#ff0000", (255, 0, 0)),
    ("#0F0", (0, 255, 0)),
    ("cyan", (0, 255, 255)),
    ("White", (255, 255, 255)),
    ((0.0, 0.5, 1.0), (0, 127, 255)),
    ((10, 20, 300), (10, 20, 255)),
    (Color("red"), (255, 0, 0)),
])
def test_color_parsing(value, components):
    assert Color(value).components == components


@pytest.mark.parametrize("value", ["#12", "#ggg", "nocolor", (1, 2)])
def test_invalid_colors(value):
    with pytest.raises(ValueError):
        Color(value)


def test_colors_are_immutable_and_hashable():
    color = Color("red")
    with pytest.raises(AttributeError):
        color.components = (0, 0, 0)
    assert {color: 1}[Color((255, 0, 0))] == 1


def test_color_equality():
    assert Color("red") == (255, 0, 0)
    assert Color("red") == "#f00"
    assert Color("red") != "blue"
    assert Color("red") != None  # noqa: E711


def test_color_repr_shows_name_or_components():
    assert repr(Color("RED")) == "<Color red>"
    assert repr(Color("#0102ff")) == "<Color (1, 2, 255)>"


def test_vector_operations():
    a = V2(1, 2)
    assert a + (1, 1) == (2, 3)
    assert a - V2(1, 1) == (0, 1)
    assert a * 2 == (2, 4)
    assert a * (3, 4) == (3, 8)
    assert V2(7, 9) // (2, 4) == (3, 2)
    assert V2(3, 4) / 2 == (1.5, 2)
    assert abs(V2(3, 4)) == 5
    assert V2((5, 6)).y == 6


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-5, 0, 10) == 0
    assert clamp(50, 0, 10) == 10
