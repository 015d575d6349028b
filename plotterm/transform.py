"""Math-space <-> pixel-space mapping with pan and cursor-anchored zoom
"""
import logging
from collections import namedtuple

from plotterm.utils import V2, clamp
from plotterm.values import DEFAULT_OFFSET, DEFAULT_SCALE, SCALE_MAX, SCALE_MIN

logger = logging.getLogger(__name__)


class Viewport(namedtuple("Viewport", "width height")):
    """Size, in pixels, of the area the plot is drawn on.

    Derived from the drawing surface size whenever it changes; read-only
    for the duration of a frame.
    """

    __slots__ = ()

    def __new__(cls, width, height=None):
        if height is None:
            width, height = width
        return super().__new__(cls, int(width), int(height))

    @property
    def center_x(self):
        return self.width / 2

    @property
    def center_y(self):
        return self.height / 2

    @property
    def center(self):
        return V2(self.center_x, self.center_y)

    @property
    def size(self):
        return V2(self.width, self.height)


class ViewTransform:
    """Pan and zoom state of a plot.

    Args:
      - scale (float): pixels per math unit. Clamped to [SCALE_MIN, SCALE_MAX]
      - offset_x (float): horizontal pan, in math units
      - offset_y (float): vertical pan, in math units

    Pixel coordinates grow rightwards and downwards, from the top-left corner
    of the viewport; math coordinates have the usual orientation. With no
    offset, the math origin sits at the viewport center.

    Mutating methods change the instance in place: callers are responsible
    for redrawing afterwards.
    """

    __slots__ = ("_scale", "offset_x", "offset_y")

    def __init__(self, scale=DEFAULT_SCALE, offset_x=DEFAULT_OFFSET.x, offset_y=DEFAULT_OFFSET.y):
        self.scale = scale
        self.offset_x = float(offset_x)
        self.offset_y = float(offset_y)

    @property
    def scale(self):
        return self._scale

    @scale.setter
    def scale(self, value):
        clamped = clamp(float(value), SCALE_MIN, SCALE_MAX)
        if clamped != value:
            logger.debug("Scale %r clamped to %r", value, clamped)
        self._scale = clamped

    @property
    def offset(self):
        return V2(self.offset_x, self.offset_y)

    def math_to_screen(self, pos, viewport):
        """Projects a math-space point into pixel coordinates"""
        x, y = pos
        return V2(
            viewport.center_x + (x + self.offset_x) * self._scale,
            viewport.center_y - (y - self.offset_y) * self._scale,
        )

    def screen_to_math(self, pos, viewport):
        """Converts a pixel position back into math-space coordinates"""
        px, py = pos
        return V2(
            (px - viewport.center_x) / self._scale - self.offset_x,
            -(py - viewport.center_y) / self._scale + self.offset_y,
        )

    def pan(self, delta):
        """Moves every rendered point by 'delta' pixels, whatever the current zoom"""
        dx, dy = delta
        self.offset_x += dx / self._scale
        self.offset_y += dy / self._scale

    def zoom_at(self, anchor, factor, viewport):
        """Multiplies the scale by 'factor', keeping the math point under 'anchor' fixed

        Args:
          - anchor (2-sequence): pixel position, usually the mouse cursor
          - factor (float): scale multiplier. Values > 1 zoom in.
          - viewport (Viewport): current drawing area

        The resulting scale is clamped; even then, the point under the anchor
        keeps its pixel position.
        """
        ax, ay = anchor
        mx, my = self.screen_to_math(anchor, viewport)
        self.scale = self._scale * factor
        self.offset_x = (ax - viewport.center_x) / self._scale - mx
        self.offset_y = my - (viewport.center_y - ay) / self._scale

    def reset(self):
        """Restores the default view: 40 pixels per unit, origin at the center"""
        self.scale = DEFAULT_SCALE
        self.offset_x, self.offset_y = DEFAULT_OFFSET

    def visible_bounds(self, viewport):
        """Returns (x_min, x_max, y_min, y_max): the math-space area shown in viewport"""
        x1, y1 = self.screen_to_math((0, 0), viewport)
        x2, y2 = self.screen_to_math((viewport.width, viewport.height), viewport)
        return min(x1, x2), max(x1, x2), min(y1, y2), max(y1, y2)

    def __eq__(self, other):
        if not isinstance(other, ViewTransform):
            return NotImplemented
        return (self.scale, self.offset_x, self.offset_y) == (other.scale, other.offset_x, other.offset_y)

    def __repr__(self):
        return f"ViewTransform(scale={self.scale!r}, offset_x={self.offset_x!r}, offset_y={self.offset_y!r})"
