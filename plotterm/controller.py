"""Pointer, wheel and keyboard interaction: turns user gestures into pan and zoom
"""
import enum
import logging

from plotterm.events import EventTypes, Subscription
from plotterm.input import MouseButtons
from plotterm.utils import V2

logger = logging.getLogger(__name__)


class InteractionState(enum.Enum):
    IDLE = "idle"
    PANNING = "panning"


class InteractionController:
    """Two-state (Idle / Panning) machine driving a :any:`PlotSession` view

    Args:
      - session (PlotSession): owner of the transform and viewport being changed
      - redraw (callable): called, with no arguments, after each change to the view
      - context (Optional[Context]): supplies zoom_intensity and pan_step.
            Defaults to the package root context.
      - position_map (Optional[callable]): converts event positions into
            viewport pixels (e.g. terminal cells to canvas pixels)

    - pointer down with the primary button starts panning;
    - pointer moves while panning pan the view by the pixel delta since the last move;
    - pointer up, anywhere, goes back to idle;
    - a wheel turn zooms around the cursor, in any state.
    """

    def __init__(self, session, redraw, context=None, position_map=None):
        if context is None:
            from plotterm import context
        self.session = session
        self.redraw = redraw
        self.context = context
        self.position_map = position_map or V2
        self.state = InteractionState.IDLE
        self.last_pos = None
        self.subscription = None

    @property
    def panning(self):
        return self.state is InteractionState.PANNING

    def pointer_down(self, pos, button=MouseButtons.Button1):
        if button != MouseButtons.Button1:
            return
        self.state = InteractionState.PANNING
        self.last_pos = V2(pos)
        logger.debug("Panning from %s", self.last_pos)

    def pointer_move(self, pos):
        if not self.panning:
            return
        pos = V2(pos)
        delta = pos - self.last_pos
        self.last_pos = pos
        if delta == (0, 0):
            return
        self.session.transform.pan(delta)
        self.redraw()

    def pointer_up(self, pos=None):
        self.state = InteractionState.IDLE
        self.last_pos = None

    def wheel(self, pos, delta):
        """Zooms in (delta < 0, scrolling up) or out around 'pos'

        Returns True: the wheel gesture is always consumed by the plot.
        """
        direction = 1 if delta < 0 else -1
        factor = 1 + self.context.zoom_intensity * direction
        self.session.transform.zoom_at(pos, factor, self.session.viewport)
        self.redraw()
        return True

    def zoom_center(self, factor):
        """Zooms by 'factor' keeping the viewport center fixed"""
        self.session.transform.zoom_at(self.session.viewport.center, factor, self.session.viewport)
        self.redraw()

    def pan_by_keys(self, direction):
        """Moves the view point one pan_step in 'direction' (content moves the opposite way)"""
        self.session.transform.pan(V2(direction) * -self.context.pan_step)
        self.redraw()

    def reset(self):
        self.session.reset_view()
        self.redraw()

    def handle_event(self, event):
        """Routes mouse events from the event bus to the gesture methods"""
        pos = self.position_map(event.pos)
        if event.type == EventTypes.MouseWheel:
            self.wheel(pos, event.delta)
        elif event.type == EventTypes.MousePress:
            self.pointer_down(pos, event.buttons)
        elif event.type == EventTypes.MouseMove:
            self.pointer_move(pos)
        elif event.type == EventTypes.MouseRelease:
            self.pointer_up(pos)

    def subscribe(self):
        """Starts receiving mouse events from the event bus"""
        if self.subscription is None:
            self.subscription = Subscription(
                EventTypes.MousePress | EventTypes.MouseMove | EventTypes.MouseRelease | EventTypes.MouseWheel,
                self.handle_event,
            )
        return self.subscription

    def unsubscribe(self):
        if self.subscription is not None:
            self.subscription.kill()
            self.subscription = None
