"""Adaptive coordinate grid: "nice" tick spacing for any zoom level
"""
import math
import re
from collections import namedtuple

from plotterm.values import TARGET_TICK_PIXELS, TICK_PRECISION


GridPlan = namedtuple("GridPlan", "step x_ticks y_ticks")
GridPlan.__doc__ = """Tick spacing and visible tick positions, in math units, for one frame"""


def calculate_step(scale, target_pixels=TARGET_TICK_PIXELS):
    """Picks the grid step, in math units, for a given zoom level

    Args:
      - scale (float): pixels per math unit
      - target_pixels (float): desired on-screen distance between grid lines

    The returned step is 1, 2, 5 or 10 times a power of ten: the nearest such
    value not smaller than the step that would land exactly 'target_pixels' apart.
    So grid density stays visually constant while the label values change.
    """
    step_units = target_pixels / scale
    magnitude = 10 ** math.floor(math.log10(step_units))
    residual = step_units / magnitude

    if residual > 5:
        return 10 * magnitude
    if residual > 2:
        return 5 * magnitude
    if residual > 1:
        return 2 * magnitude
    return magnitude


def round_tick(value, precision=TICK_PRECISION):
    """Strips binary floating-point residue from a tick value"""
    return float(f"{value:.{precision}g}")


def tick_range(lower, upper, step):
    """All multiples of 'step' from floor(lower) to ceil(upper), inclusive"""
    first = math.floor(lower / step)
    last = math.ceil(upper / step)
    return [round_tick(index * step) for index in range(first, last + 1)]


def plan_grid(transform, viewport, target_pixels=TARGET_TICK_PIXELS):
    """Computes the grid for the current view

    Args:
      - transform (ViewTransform): current pan and zoom
      - viewport (Viewport): size of the drawing area
      - target_pixels (float): desired on-screen distance between grid lines

    Returns a :any:`GridPlan` whose tick lists cover the whole viewport,
    rounded outwards to the nearest multiple of the step.
    """
    step = calculate_step(transform.scale, target_pixels)
    x_min, x_max, y_min, y_max = transform.visible_bounds(viewport)
    return GridPlan(step, tick_range(x_min, x_max, step), tick_range(y_min, y_max, step))


def format_tick(value):
    """Label text for a tick value: '2', '0.5', '1e-6'"""
    text = f"{value:.{TICK_PRECISION}g}"
    return re.sub(r"e([+-])0*(\d)", r"e\1\2", text).replace("e+", "e")
