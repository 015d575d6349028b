"""Plot configuration namespaces

Colors, label geometry and interaction tunables used by the renderer,
the curve sampler and the interaction controller live in a :any:`Context`.
The package keeps a root instance as ``plotterm.context``; the command line
interface updates it from its options.
"""
import threading
from copy import copy

from plotterm.utils import Color
from plotterm.values import TARGET_TICK_PIXELS, ZOOM_INTENSITY


_sentinel = object()


class ContextVar:
    def __init__(self, type_, default=None):
        self.type = type_
        self.default = default

    def __set_name__(self, owner, name):
        self.name = name

    def __set__(self, instance, value):
        if not isinstance(value, self.type):
            # May generate ValueError TypeError: expected behavior
            type_ = self.type[0] if isinstance(self.type, tuple) else self.type
            if value != self.default:  # Allow setting typed values back to None
                value = type_(value)
        setattr(instance._locals, self.name, value)

    def __get__(self, instance, owner):
        if not instance:
            return self
        value = getattr(instance._locals, self.name, _sentinel)
        if value is _sentinel:
            value = self.default
            if callable(value) and not isinstance(value, type):
                value = value()
            setattr(instance._locals, self.name, value)
        return value


class Context:
    """Configuration namespace for plot rendering and interaction

        Args:
        - **kw: initial keyword arguments for a context

        Attributes used by the library:

        - axis_color, grid_color, label_color, origin_color, curve_color: colors
          for each element drawn in a frame.
        - curve_width: stroke width, in pixels, of the plotted curve.
        - tick_spacing: approximate distance, in pixels, between grid lines.
        - zoom_intensity: relative scale change for each wheel notch.
        - pan_step: pixels moved by each keyboard pan.
        - break_jumps: when set, a jump larger than this many pixels between two
          samples, with one of them off-screen, breaks the curve. None disables it.
        - resolution: "braille" (2x4 pixels per cell) or "high" (2x2).
        - fps: maximum number of frames rendered per second.
        - label_gap, label_margin, label_clearance, label_indent, axis_slack:
          tick label and axis placement, in pixels.

        The attributes here are set independently for each thread.
        If used as a context-manager, the current attributes are pushed in a stack
        and any changes made in the corresponding `with` block are reverted on `__exit__`.
    """

    axis_color = ContextVar(Color, Color("#ffffff"))
    grid_color = ContextVar(Color, Color("#262a33"))
    label_color = ContextVar(Color, Color("#94a3b8"))
    origin_color = ContextVar(Color, Color("#cbd5e1"))
    curve_color = ContextVar(Color, Color("#06b6d4"))
    curve_width = ContextVar(int, 1)
    tick_spacing = ContextVar(float, float(TARGET_TICK_PIXELS))
    zoom_intensity = ContextVar(float, ZOOM_INTENSITY)
    pan_step = ContextVar(float, 8.0)
    break_jumps = ContextVar((float, type(None)), None)
    resolution = ContextVar(str, "braille")
    fps = ContextVar(float, 30.0)
    label_gap = ContextVar(float, 4.0)
    label_margin = ContextVar(float, 2.0)
    label_clearance = ContextVar(float, 8.0)
    label_indent = ContextVar(float, 12.0)
    axis_slack = ContextVar(float, 10.0)

    def __init__(self, **kw):
        self._locals = threading.local()
        self._update(kw)

    def _update(self, params):
        for attr, value in params.items():
            setattr(self, attr, value)

    def __setattr__(self, name, value):
        if name.startswith("_"):
            return super().__setattr__(name, value)
        if isinstance(getattr(self.__class__, name, None), ContextVar):
            # Use descriptor
            super().__setattr__(name, value)
        else:
            setattr(self._locals, name, value)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._locals, name)

    def __call__(self, **kw):
        """Update new parameters before Context is used as a context manager"""
        self._locals._new_parameters = kw
        return self

    def __enter__(self):
        new_parameters = self._locals.__dict__.pop("_new_parameters", {})
        data = copy(self._locals.__dict__)
        data["_previously_existing"] = set(data.keys())
        self._locals.__dict__.setdefault("_stack", []).append(data)
        self._update(new_parameters)
        return self

    def __exit__(self, exc_name, traceback, frame):
        data = self._locals._stack.pop()
        to_remove = set(self._locals.__dict__.keys()) - data.pop("_previously_existing", set())
        for extra_key in to_remove:
            delattr(self._locals, extra_key)
        self._locals.__dict__.update(data)

    def __iter__(self):
        for name, attr in self.__class__.__dict__.items():
            if isinstance(attr, ContextVar):
                yield (name, getattr(self, name))
        for name, value in self._locals.__dict__.items():
            if name.startswith("_") or isinstance(getattr(self.__class__, name, None), ContextVar):
                continue
            yield (name, value)

    def __repr__(self):
        return "Context[\n{}\n]".format(
            "\n".join(f"   {key} = {value!r}" for key, value in self)
        )

    def __copy__(self):
        return self.__class__(**dict(self))
