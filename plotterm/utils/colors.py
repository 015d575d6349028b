import typing as T

css_colors = {
    "black": (0, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "white": (255, 255, 255),
    "maroon": (128, 0, 0),
    "red": (255, 0, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "olive": (128, 128, 0),
    "yellow": (255, 255, 0),
    "navy": (0, 0, 128),
    "blue": (0, 0, 255),
    "teal": (0, 128, 128),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
}


ColorCompat = T.Union["Color", T.Sequence[float], str]


class Color:
    """RGB color value used by the plot styles

      Args:
        - value: 3-sequence with floats in 0-1.0 range, or int in 0-255 range, or a string with
                 color in HTML hex notation (3 or 6 digits) or HTML (css) color name

    Colors are immutable and hashable, so they can be stored per cell on a canvas
    and compared cheaply when rendering.
    """

    __slots__ = ("components", "name")

    def __init__(self, value: ColorCompat):
        self.name = ""
        if isinstance(value, Color):
            components = value.components
            self.name = value.name
        elif isinstance(value, str):
            value = value.strip()
            if value.startswith("#"):
                components = self._from_html(value)
            elif value.lower() in css_colors:
                components = css_colors[value.lower()]
                self.name = value.lower()
            else:
                raise ValueError(f"Unrecognized color value or name: {value!r}")
        else:
            components = self.normalize_color(value)
        object.__setattr__(self, "components", tuple(components))

    def __setattr__(self, name, value):
        if name == "components":
            raise AttributeError("Color components are read only")
        object.__setattr__(self, name, value)

    @staticmethod
    def _from_html(html):
        digits = html.strip("#;")
        try:
            if len(digits) == 3:
                return tuple((int(d, 16) << 4) + int(d, 16) for d in digits)
            if len(digits) == 6:
                return tuple(int(digits[i : i + 2], 16) for i in range(0, 6, 2))
        except ValueError:
            pass
        raise ValueError(f"Unrecognized color value or name: {html!r}")

    @staticmethod
    def normalize_color(components):
        """Converts RGB colors to use 0-255 integers.

        Args:
          - components: a 3-sequence, with float components on the range 0.0-1.0,
              or integer components in the 0-255 range.

        returns: 3-tuple normalized to 0-255 range.
        """
        components = tuple(components)
        if len(components) != 3:
            raise ValueError(f"Colors need exactly 3 components, got {components!r}")
        if all(isinstance(c, float) and 0 <= c <= 1.0 for c in components):
            return tuple(int(c * 255) for c in components)
        return tuple(max(0, min(255, int(c))) for c in components)

    def __len__(self):
        return 3

    def __iter__(self):
        return iter(self.components)

    def __getitem__(self, index):
        return self.components[index]

    def __eq__(self, other):
        if not isinstance(other, Color):
            try:
                other = Color(other)
            except (ValueError, TypeError):
                return False
        return self.components == other.components

    def __hash__(self):
        return hash(self.components)

    def __repr__(self):
        return f"<Color {self.name or self.components!r}>"
