import logging
from collections import namedtuple

from plotterm.expression import evaluate as default_evaluate
from plotterm.grid import plan_grid
from plotterm.sampler import sample_curve
from plotterm.transform import Viewport, ViewTransform

logger = logging.getLogger(__name__)


Frame = namedtuple("Frame", "plan segments")


class PlotSession:
    """State of one interactive plot: the view transform, the viewport and the expression

    Args:
      - size (2-sequence): viewport size in pixels
      - expression (str): initial expression
      - context (Optional[Context]): grid spacing and jump-breaking settings.
            Defaults to the package root context.
      - evaluate (callable): evaluate(expression, x) -> number, nan where undefined

    The transform is the only state kept from one frame to the next:
    every frame recomputes grid and curve from transform, viewport and expression.
    """

    def __init__(self, size, expression="", context=None, evaluate=default_evaluate):
        if context is None:
            from plotterm import context
        self.context = context
        self.transform = ViewTransform()
        self.viewport = Viewport(size)
        self.expression = expression
        self.evaluate = evaluate

    def resize(self, size):
        self.viewport = Viewport(size)
        logger.debug("Viewport resized to %dx%d", *self.viewport)

    def set_expression(self, expression):
        self.expression = expression

    def reset_view(self):
        self.transform.reset()
        logger.debug("View reset")

    def frame(self):
        """Computes grid plan and curve segments for the current state"""
        plan = plan_grid(self.transform, self.viewport, self.context.tick_spacing)
        segments = sample_curve(
            self.expression, self.transform, self.viewport,
            evaluate=self.evaluate, max_jump=self.context.break_jumps,
        )
        return Frame(plan, segments)

    def redraw(self, renderer):
        """Draws the current state using 'renderer'. Returns the computed frame"""
        frame = self.frame()
        renderer.render(frame.plan, frame.segments, self.transform, self.viewport)
        return frame

    def __repr__(self):
        return f"<PlotSession {self.expression!r} {self.transform!r} {self.viewport!r}>"
