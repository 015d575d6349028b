"""Plotterm is an interactive function plotter for the text terminal

Usage: run the ``plotterm`` command, or import the main classes to
compute plot frames (grid plan and curve segments) for any view and
render them on a character canvas.
Plots use braille or block characters as sub-cell pixels, and can be
panned by dragging with the mouse and zoomed with the mouse wheel.
"""
import logging
import sys

from plotterm.contexts import Context

if sys.platform == "win32":
    import colorama
    colorama.init(convert=True)

from plotterm.canvas import Canvas
from plotterm.controller import InteractionController
from plotterm.events import EventTypes
from plotterm.expression import ExpressionError, compile_expression, evaluate
from plotterm.grid import GridPlan, calculate_step, plan_grid
from plotterm.input import keyboard, mouse, inkey, KeyCodes
from plotterm.render import Renderer, Surface
from plotterm.sampler import PathSegment, sample_curve
from plotterm.session import PlotSession
from plotterm.terminal import ScreenCommands
from plotterm.transform import Viewport, ViewTransform
from plotterm.utils import Color, V2


__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

context = Context()
