"""Interactive terminal function plotter

Run ``plotterm -e "sin(x)/x"``. The bottom line holds the expression prompt;
the rest of the terminal shows the plot. Drag with the mouse to pan and use
the wheel to zoom around the cursor. Tab switches keyboard focus between
the prompt and the plot; with the plot focused, arrows pan, +/- zoom and
Home resets the view. Ctrl+R resets the view from anywhere, Esc quits.
"""
import logging
import os
import re
import time

import click

import plotterm
from plotterm import events
from plotterm.canvas import Canvas
from plotterm.controller import InteractionController
from plotterm.events import Event, EventTypes, Subscription
from plotterm.expression import ExpressionError, compile_expression
from plotterm.input import KeyCodes, inkey, keyboard, mouse
from plotterm.render import Renderer
from plotterm.session import PlotSession
from plotterm.subpixels import resolutions
from plotterm.terminal import ScreenCommands
from plotterm.utils import V2
from plotterm.values import Directions

logger = logging.getLogger(__name__)

PROMPT = "f(x) = "

_focus_keys = {
    KeyCodes.UP: Directions.UP,
    KeyCodes.DOWN: Directions.DOWN,
    KeyCodes.LEFT: Directions.LEFT,
    KeyCodes.RIGHT: Directions.RIGHT,
}


def terminal_size():
    try:
        return V2(os.get_terminal_size())
    except OSError as error:
        if error.errno == 25:
            logger.error(
                "This terminal type does not allow guessing screen size. "
                "Use --dump WIDTHxHEIGHT to render without a terminal"
            )
        raise


class PromptLine:
    """Single line text editor holding the expression being typed"""

    def __init__(self, text=""):
        self.text = text
        self.cursor = len(text)

    def handle_key(self, key):
        """Applies an editing key. Returns True if the text changed"""
        text, cursor = self.text, self.cursor
        if key == KeyCodes.LEFT:
            self.cursor = max(0, cursor - 1)
        elif key == KeyCodes.RIGHT:
            self.cursor = min(len(text), cursor + 1)
        elif key == KeyCodes.HOME:
            self.cursor = 0
        elif key == KeyCodes.END:
            self.cursor = len(text)
        elif key in (KeyCodes.BACK, "\x08"):
            if cursor:
                self.text = text[: cursor - 1] + text[cursor:]
                self.cursor -= 1
        elif key == KeyCodes.DELETE:
            self.text = text[:cursor] + text[cursor + 1:]
        elif key == KeyCodes.CTRL_U:
            self.text, self.cursor = "", 0
        elif len(key) == 1 and key.isprintable():
            self.text = text[:cursor] + key + text[cursor:]
            self.cursor += 1
        return self.text != text


class PlotApp:
    """Wires terminal input, plot session, renderer and terminal output together

    Args:
      - expression (str): initial expression
      - size (Optional[2-sequence]): terminal size in cells. Queried if not given.
      - context (Optional[Context]): configuration. Defaults to the root context.
    """

    def __init__(self, expression="", size=None, context=None):
        self.context = context or plotterm.context
        cols, rows = size or terminal_size()
        self.canvas = Canvas((cols, max(1, rows - 1)), resolution=self.context.resolution)
        self.session = PlotSession(self.canvas.size, expression, context=self.context)
        self.renderer = Renderer(self.canvas, self.context)
        self.controller = InteractionController(
            self.session, self.invalidate, self.context, position_map=self.canvas.cell_to_pixel
        )
        self.commands = ScreenCommands(raw_tty=True)
        self.prompt = PromptLine(expression)
        self.focus_on_plot = False
        self.status = ""
        self.dirty = True
        self.subscriptions = []
        self._validate(expression)

    def invalidate(self):
        self.dirty = True

    def _validate(self, expression):
        try:
            if expression.strip():
                compile_expression(expression)
        except ExpressionError as error:
            self.status = str(error)
        else:
            self.status = ""

    # Event handlers

    def on_key(self, event):
        key = event.key
        if key == KeyCodes.ESC:
            Event(EventTypes.QuitLoop)
        elif key == KeyCodes.CTRL_R:
            Event(EventTypes.ViewReset)
        elif key in (KeyCodes.TAB, KeyCodes.SHIFT_TAB):
            self.focus_on_plot = not self.focus_on_plot
            self.dirty = True
        elif self.focus_on_plot:
            self.on_plot_key(key)
        elif key == KeyCodes.ENTER:
            self.focus_on_plot = True
            self.dirty = True
        elif self.prompt.handle_key(key):
            Event(EventTypes.ExpressionChange, expression=self.prompt.text)
        else:
            # cursor movement only
            self.dirty = True

    def on_plot_key(self, key):
        if key in _focus_keys:
            self.controller.pan_by_keys(_focus_keys[key])
        elif key in ("+", "="):
            self.controller.zoom_center(1 + self.context.zoom_intensity)
        elif key in ("-", "_"):
            self.controller.zoom_center(1 - self.context.zoom_intensity)
        elif key in (KeyCodes.HOME, "0", "r"):
            Event(EventTypes.ViewReset)

    def on_expression_change(self, event):
        self.session.set_expression(event.expression)
        self._validate(event.expression)
        self.dirty = True

    def on_reset(self, event):
        self.controller.reset()

    def on_resize(self, event):
        cols, rows = event.size
        self.canvas.resize((cols, max(1, rows - 1)))
        self.session.resize(self.canvas.size)
        self.commands.clear()
        self.dirty = True

    def subscribe(self):
        self.controller.subscribe()
        self.subscriptions = [
            Subscription(EventTypes.KeyPress, self.on_key),
            Subscription(EventTypes.ExpressionChange, self.on_expression_change),
            Subscription(EventTypes.ViewReset, self.on_reset),
            Subscription(EventTypes.TerminalSizeChange, self.on_resize),
        ]

    def unsubscribe(self):
        self.controller.unsubscribe()
        for subscription in self.subscriptions:
            subscription.kill()
        self.subscriptions = []

    # Output

    def status_line(self):
        if self.status:
            return self.status
        transform = self.session.transform
        x_min, x_max, y_min, y_max = transform.visible_bounds(self.session.viewport)
        focus = "plot" if self.focus_on_plot else "prompt"
        return f"x: {x_min:.4g}..{x_max:.4g}  y: {y_min:.4g}..{y_max:.4g}  [{focus}]"

    def draw(self):
        self.session.redraw(self.renderer)
        self.commands.render_canvas(self.canvas)
        row = self.canvas.cell_size.y
        cols = self.canvas.cell_size.x
        status = self.status_line()
        line = f"{PROMPT}{self.prompt.text}"
        self.commands.print_at((0, row), line[:cols], clear_line=True)
        if len(line) + len(status) + 2 <= cols:
            color = self.context.label_color if not self.status else "red"
            self.commands.print_at((cols - len(status), row), status, color=color)
        if self.focus_on_plot:
            self.commands.cursor_hide()
        else:
            self.commands.cursor_show()
            self.commands.moveto((min(cols - 1, len(PROMPT) + self.prompt.cursor), row))
        self.dirty = False

    def run(self):
        quit_loop = Subscription(EventTypes.QuitLoop)
        self.subscribe()
        events.register_sigwinch()
        self.commands.toggle_buffer()
        self.commands.clear()
        try:
            with keyboard(), mouse():
                while not quit_loop:
                    frame_start = time.time()
                    inkey()
                    events.process()
                    if self.dirty:
                        self.draw()
                    frame_wait = max(0, (1 / self.context.fps) - (time.time() - frame_start))
                    time.sleep(frame_wait)
        except KeyboardInterrupt:
            pass
        finally:
            quit_loop.kill()
            self.unsubscribe()
            events.unregister_sigwinch()
            self.commands.reset_colors()
            self.commands.cursor_show()
            self.commands.toggle_buffer()


def render_once(expression, size, context=None, ansi=True):
    """Renders a single frame for a canvas of 'size' cells and returns it as a string"""
    context = context or plotterm.context
    canvas = Canvas(size, resolution=context.resolution)
    session = PlotSession(canvas.size, expression, context=context)
    session.redraw(Renderer(canvas, context))
    if ansi:
        return ScreenCommands.canvas_to_ansi(canvas, pos=None) + "\n"
    return canvas.as_text()


def _parse_size(ctx, param, value):
    if value is None:
        return None
    match = re.fullmatch(r"\s*(\d+)\s*[xX]\s*(\d+)\s*", value)
    if not match or not all(int(group) > 0 for group in match.groups()):
        raise click.BadParameter("size must be given as WIDTHxHEIGHT, in character cells")
    return V2(int(match.group(1)), int(match.group(2)))


@click.command()
@click.option("-e", "--expression", type=str, default="sin(x)", show_default=True,
              help="Function of x to plot, e.g. 'x^2 - 2', 'tan(x)', 'sqrt(1 - x*x)'.")
@click.option("--resolution", type=click.Choice(sorted(resolutions)), default="braille", show_default=True,
              help="Pixels per character cell: braille is 2x4, high is 2x2.")
@click.option("--curve-color", type=str, default=None, help="Curve color, as #rrggbb or a color name.")
@click.option("--tick-spacing", type=click.FloatRange(min=1), default=None,
              help="Approximate distance, in pixels, between grid lines.")
@click.option("--break-jumps", type=click.FloatRange(min=0), default=None,
              help="Do not connect consecutive samples more than this many pixels apart "
                   "when one of them is off-screen (hides lines across asymptotes).")
@click.option("--dump", "dump_size", type=str, default=None, callback=_parse_size, metavar="WIDTHxHEIGHT",
              help="Render a single frame of this size to stdout and exit.")
@click.option("--plain", is_flag=True, help="With --dump: output plain text without colors.")
@click.option("--log-file", type=click.Path(dir_okay=False, writable=True), default=None,
              help="Write log records to this file.")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), default="WARNING",
              show_default=True)
def main(expression, resolution, curve_color, tick_spacing, break_jumps, dump_size, plain, log_file, log_level):
    """Plots a function of x in the terminal, with mouse pan and zoom."""
    if log_file:
        logging.basicConfig(
            filename=log_file, level=getattr(logging, log_level),
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    context = plotterm.context
    context.resolution = resolution
    context.break_jumps = break_jumps
    if curve_color is not None:
        try:
            context.curve_color = curve_color
        except ValueError as error:
            raise click.BadParameter(str(error), param_hint="--curve-color")
    if tick_spacing is not None:
        context.tick_spacing = tick_spacing

    if dump_size is not None:
        click.echo(render_once(expression, dump_size, context, ansi=not plain), nl=plain)
        return

    PlotApp(expression, context=context).run()


if __name__ == "__main__":
    main()
