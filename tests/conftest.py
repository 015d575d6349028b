import pytest

import plotterm
from plotterm import events
from plotterm.render import Surface
from plotterm.transform import Viewport, ViewTransform


class RecordingSurface(Surface):
    """Surface that only keeps a log of the draw calls it receives"""

    def __init__(self, size=(800, 600)):
        self._size = tuple(size)
        self.calls = []

    @property
    def size(self):
        return self._size

    def clear(self):
        self.calls.append(("clear",))

    def line(self, pos1, pos2, *, color, width=1):
        self.calls.append(("line", tuple(pos1), tuple(pos2), color, width))

    def polyline(self, points, *, color, width=1, emphasis=False):
        self.calls.append(("polyline", [tuple(p) for p in points], color, width, emphasis))

    def text(self, pos, text, *, color, align="left", baseline="top"):
        self.calls.append(("text", tuple(pos), text, color, align, baseline))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture(autouse=True)
def clean_event_bus():
    events.clear()
    yield
    events.clear()


@pytest.fixture()
def viewport():
    return Viewport(800, 600)


@pytest.fixture()
def transform():
    return ViewTransform()


@pytest.fixture()
def surface():
    return RecordingSurface()


@pytest.fixture()
def context():
    with plotterm.context as ctx:
        yield ctx
