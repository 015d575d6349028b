from .collections import IterableFlag, mirror_dict
from .colors import Color, css_colors
from .vector import V2


def clamp(value, minimum, maximum):
    """Returns 'value' limited to the closed interval [minimum, maximum]"""
    return max(minimum, min(maximum, value))
