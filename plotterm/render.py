"""Frame rendering: grid, axes, tick labels and curve, issued against a drawing surface
"""
from abc import ABC, abstractmethod

from plotterm.grid import format_tick
from plotterm.utils import V2, clamp
from plotterm.values import ORIGIN_EPSILON


class Surface(ABC):
    """Drawing primitives the renderer relies on

    Coordinates are in pixels, from the top-left corner. Implementations must
    tolerate coordinates far outside their area (clipping them), as curves
    near a pole can reach huge pixel values.
    """

    @property
    @abstractmethod
    def size(self):
        """(width, height) in pixels"""

    @abstractmethod
    def clear(self):
        pass

    @abstractmethod
    def line(self, pos1, pos2, *, color, width=1):
        pass

    @abstractmethod
    def polyline(self, points, *, color, width=1, emphasis=False):
        """Strokes a single continuous path through all 'points'"""

    @abstractmethod
    def text(self, pos, text, *, color, align="left", baseline="top"):
        """Writes 'text' anchored at 'pos'

        'align' is one of "left", "center", "right"; 'baseline' one of
        "top", "middle", "bottom".
        """


class Renderer:
    """Draws complete frames on a :any:`Surface`

    Args:
      - surface (Surface): target of the draw calls
      - context (Optional[Context]): colors and label geometry. Defaults to
            the package root context.

    Drawing order is: clear, grid lines, tick labels, axes, origin label, curve.
    Later draws cover earlier ones. Each frame is drawn from scratch.
    """

    def __init__(self, surface, context=None):
        if context is None:
            from plotterm import context
        self.surface = surface
        self.context = context

    def render(self, plan, segments, transform, viewport):
        self.surface.clear()
        origin = transform.math_to_screen((0, 0), viewport)
        self.draw_grid(plan, transform, viewport, origin)
        self.draw_axes(viewport, origin)
        self.draw_origin_label(viewport, origin)
        self.draw_curve(segments)

    def draw_grid(self, plan, transform, viewport, origin):
        ctx = self.context
        surface = self.surface
        width, height = viewport

        for value in plan.x_ticks:
            screen_x = transform.math_to_screen((value, 0), viewport).x
            surface.line((screen_x, 0), (screen_x, height), color=ctx.grid_color)
        for value in plan.y_ticks:
            screen_y = transform.math_to_screen((0, value), viewport).y
            surface.line((0, screen_y), (width, screen_y), color=ctx.grid_color)

        # Labels stick to the axes, but are kept inside the viewport when an axis scrolls away
        label_y = clamp(origin.y + ctx.label_gap, ctx.label_margin, height - ctx.label_clearance)
        for value in plan.x_ticks:
            if abs(value) <= ORIGIN_EPSILON:
                continue
            screen_x = transform.math_to_screen((value, 0), viewport).x
            surface.text(
                (screen_x, label_y), format_tick(value),
                color=ctx.label_color, align="center", baseline="top"
            )

        label_x = clamp(origin.x - ctx.label_gap, ctx.label_indent, width - ctx.label_margin)
        for value in plan.y_ticks:
            if abs(value) <= ORIGIN_EPSILON:
                continue
            screen_y = transform.math_to_screen((0, value), viewport).y
            surface.text(
                (label_x, screen_y), format_tick(value),
                color=ctx.label_color, align="right", baseline="middle"
            )

    def draw_axes(self, viewport, origin):
        ctx = self.context
        width, height = viewport
        slack = ctx.axis_slack
        if -slack <= origin.y <= height + slack:
            self.surface.line((0, origin.y), (width, origin.y), color=ctx.axis_color, width=2)
        if -slack <= origin.x <= width + slack:
            self.surface.line((origin.x, 0), (origin.x, height), color=ctx.axis_color, width=2)

    def draw_origin_label(self, viewport, origin):
        width, height = viewport
        if 0 < origin.x < width and 0 < origin.y < height:
            gap = self.context.label_gap
            self.surface.text(
                origin + V2(-gap, gap), "0",
                color=self.context.origin_color, align="right", baseline="top"
            )

    def draw_curve(self, segments):
        for segment in segments:
            self.surface.polyline(
                segment, color=self.context.curve_color,
                width=self.context.curve_width, emphasis=True
            )
