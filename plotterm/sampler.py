"""Per-pixel-column curve sampling

The curve is sampled exactly once for each horizontal pixel of the viewport,
so the cost of a frame is bounded by the viewport width whatever the zoom.
Samples where the function is undefined split the curve into separate
:any:`PathSegment` runs, which is how poles and domain edges show up as gaps.
"""
import math

from plotterm.expression import evaluate as default_evaluate
from plotterm.utils import V2


class PathSegment(list):
    """Continuous run of (pixel_x, pixel_y) curve points, as V2 instances"""

    __slots__ = ()

    @property
    def start(self):
        return self[0]

    @property
    def end(self):
        return self[-1]

    def __repr__(self):
        return f"PathSegment({len(self)} points{', from ' + repr(self[0]) + ' to ' + repr(self[-1]) if self else ''})"


def _safe_evaluate(evaluate, expression, x):
    try:
        return evaluate(expression, x)
    except Exception:
        # Evaluators are required not to raise; a misbehaving one just loses the sample.
        return math.nan


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _offscreen(py, height):
    return py < 0 or py > height


def sample_curve(expression, transform, viewport, evaluate=default_evaluate, max_jump=None):
    """Samples 'expression' across the viewport, one point per pixel column

    Args:
      - expression (str): expression handed untouched to 'evaluate'
      - transform (ViewTransform): current pan and zoom
      - viewport (Viewport): drawing area. Columns 0 to width, inclusive, are sampled
      - evaluate (callable): evaluate(expression, x) -> number; anything that is not
            a finite number means "no point here"
      - max_jump (Optional[float]): when given, two consecutive finite samples more than
            this many pixels apart vertically, with at least one of them outside the
            viewport, are not connected. Removes the near-vertical lines drawn across
            asymptotes such as tan(x) poles. None (default) connects all finite samples.

    Returns a list of :any:`PathSegment`, left to right. An empty expression
    gives an empty list.
    """
    if not expression or not str(expression).strip():
        return []

    segments = []
    current = None
    for x_pixel in range(viewport.width + 1):
        x = transform.screen_to_math((x_pixel, 0), viewport).x
        y = _safe_evaluate(evaluate, expression, x)

        if not _is_number(y):
            current = None
            continue

        point = V2(x_pixel, transform.math_to_screen((x, y), viewport).y)
        if not math.isfinite(point.y):
            current = None
            continue

        if current is not None and max_jump is not None:
            previous = current[-1]
            if abs(point.y - previous.y) > max_jump and (
                _offscreen(point.y, viewport.height) or _offscreen(previous.y, viewport.height)
            ):
                current = None

        if current is None:
            current = PathSegment()
            segments.append(current)
        current.append(point)

    return segments
