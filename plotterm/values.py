from plotterm.utils import V2

ESC = "\x1b"

#: Zoom limits, in pixels per math unit
SCALE_MIN = 0.001
SCALE_MAX = 100000

#: View restored by "reset": 40 pixels per unit, origin at the viewport center
DEFAULT_SCALE = 40.0
DEFAULT_OFFSET = V2(0.0, 0.0)

#: Grid lines are spaced to land roughly this many pixels apart
TARGET_TICK_PIXELS = 80

#: Each wheel notch multiplies or divides the scale by 1 +/- this value
ZOOM_INTENSITY = 0.1

#: Tick values are rounded to this many significant digits
TICK_PRECISION = 10

#: Ticks closer to zero than this are treated as the origin and not labeled
ORIGIN_EPSILON = 1e-10

#: Character to denote an empty-space on the canvas
EMPTY = "\x20"
#: Character to denote a filled-pixel on the canvas
FULL_BLOCK = "█"


class IterableNS(type):
    def __iter__(cls):
        return (v for k, v in cls.__dict__.items() if k[0] != "_")


class Directions(metaclass=IterableNS):
    """Direction vector constants, in screen space (y grows downwards)

    Used by keyboard panning.
    """

    UP = V2(0, -1)
    RIGHT = V2(1, 0)
    DOWN = V2(0, 1)
    LEFT = V2(-1, 0)
