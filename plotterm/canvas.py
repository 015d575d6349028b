import math

from plotterm.render import Surface
from plotterm.subpixels import resolutions
from plotterm.utils import V2, Color
from plotterm.values import EMPTY


def clip_line(pos1, pos2, size):
    """Clips the segment pos1-pos2 to the rectangle (0, 0)-(width - 1, height - 1)

    Liang-Barsky clipping: returns the two clipped end points, or None
    if the segment does not cross the rectangle.
    """
    x1, y1 = pos1
    x2, y2 = pos2
    x_max, y_max = size[0] - 1, size[1] - 1
    dx, dy = x2 - x1, y2 - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1), (dx, x_max - x1), (-dy, y1), (dy, y_max - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    clipped = (x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy)
    if not all(math.isfinite(c) for c in clipped):
        return None
    return V2(clipped[:2]), V2(clipped[2:])


class Canvas(Surface):
    """Pixel surface emulated with unicode block characters on a grid of text cells

    Args:
      - size (2-sequence): size in character cells (columns, rows)
      - resolution (str): "braille" for 2x4 pixels per cell, "high" for 2x2
      - default_color (Color): color for cells that got no explicit color

    Each cell keeps the pixels set in it, the color of the last pixel drawn
    there, and whether it was drawn with emphasis. A cell shows either pixels
    or a text character, whichever was drawn last: text erases the pixels of
    the cells it occupies, and a pixel set afterwards replaces the character.
    The ``size`` attribute is measured in pixels, as required by :any:`Surface`;
    ``cell_size`` gives the size in cells.
    """

    def __init__(self, size, resolution="braille", default_color="white"):
        if resolution not in resolutions:
            raise ValueError(f"Unrecognized resolution: {resolution!r}. Use one of {sorted(resolutions)}")
        self.block = resolutions[resolution]
        self.resolution = resolution
        self.default_color = Color(default_color)
        self.cell_size = V2(size)
        self.block_size = V2(self.block.block_width, self.block.block_height)
        self.clear()

    @property
    def size(self):
        return self.cell_size * self.block_size

    def resize(self, size):
        self.cell_size = V2(size)
        self.clear()

    def clear(self):
        cols, rows = self.cell_size
        self.dots = [[0] * cols for _ in range(rows)]
        self.colors = {}
        self.emphasis = set()
        self.texts = {}

    def cell_to_pixel(self, cell):
        """Pixel at the center of a text cell: maps mouse positions to canvas coordinates"""
        return V2(cell) * self.block_size + self.block_size / 2

    def _in_bounds(self, pos):
        width, height = self.size
        return 0 <= pos[0] < width and 0 <= pos[1] < height

    def set_at(self, pos, color=None, emphasis=False):
        """Sets the pixel at 'pos'. Positions outside the canvas are ignored"""
        pos = V2(math.floor(pos[0]), math.floor(pos[1]))
        if not self._in_bounds(pos):
            return
        cell = pos // self.block_size
        inner = pos - cell * self.block_size
        self.texts.pop(cell, None)
        self.dots[cell.y][cell.x] |= self.block.bit(inner)
        self.colors[cell] = Color(color) if color is not None else self.default_color
        if emphasis:
            self.emphasis.add(cell)
        else:
            self.emphasis.discard(cell)

    def get_at(self, pos):
        """Whether the pixel at 'pos' is set"""
        pos = V2(math.floor(pos[0]), math.floor(pos[1]))
        if not self._in_bounds(pos):
            return False
        cell = pos // self.block_size
        inner = pos - cell * self.block_size
        return bool(self.dots[cell.y][cell.x] & self.block.bit(inner))

    def _stamp(self, pos, color, width, emphasis):
        if width <= 1:
            self.set_at(pos, color, emphasis)
            return
        start = -(width // 2)
        for dx in range(start, start + width):
            for dy in range(start, start + width):
                self.set_at(pos + (dx, dy), color, emphasis)

    def line(self, pos1, pos2, *, color, width=1, emphasis=False):
        """Draws a straight line connecting both coordinates, clipped to the canvas"""
        clipped = clip_line(pos1, pos2, self.size)
        if clipped is None:
            return
        pos1, pos2 = (V2(round(p.x), round(p.y)) for p in clipped)

        self._stamp(pos1, color, width, emphasis)
        max_manh = max(abs(pos2.x - pos1.x), abs(pos2.y - pos1.y))
        if max_manh == 0:
            return
        step = (pos2 - pos1) / max_manh
        current = pos1
        for _ in range(max_manh):
            current += step
            self._stamp(V2(round(current.x), round(current.y)), color, width, emphasis)

    def polyline(self, points, *, color, width=1, emphasis=False):
        points = list(points)
        if len(points) == 1:
            self._stamp(V2(points[0]), color, width, emphasis)
        for pos1, pos2 in zip(points, points[1:]):
            self.line(pos1, pos2, color=color, width=width, emphasis=emphasis)

    def text(self, pos, text, *, color, align="left", baseline="top"):
        block_width, block_height = self.block_size
        col = math.floor(pos[0] / block_width)
        if align == "center":
            col -= len(text) // 2
        elif align == "right":
            col -= len(text)
        elif align != "left":
            raise ValueError(f"Unrecognized text alignment: {align!r}")

        if baseline in ("top", "middle"):
            row = math.floor(pos[1] / block_height)
        elif baseline == "bottom":
            row = math.ceil(pos[1] / block_height) - 1
        else:
            raise ValueError(f"Unrecognized text baseline: {baseline!r}")

        cols, rows = self.cell_size
        if not 0 <= row < rows:
            return
        color = Color(color)
        for offset, char in enumerate(text):
            if 0 <= col + offset < cols:
                cell = V2(col + offset, row)
                self.dots[row][cell.x] = 0
                self.colors.pop(cell, None)
                self.emphasis.discard(cell)
                self.texts[cell] = (char, color)

    def __getitem__(self, cell):
        """(char, color, emphasis) shown at a text cell"""
        cell = V2(cell)
        if cell in self.texts:
            char, color = self.texts[cell]
            return char, color, False
        bits = self.dots[cell.y][cell.x]
        if not bits:
            return EMPTY, None, False
        return self.block.char(bits), self.colors.get(cell, self.default_color), cell in self.emphasis

    def iter_rows(self):
        """Yields, for each row, a list of (char, color, emphasis) cells"""
        cols, rows = self.cell_size
        for y in range(rows):
            yield [self[x, y] for x in range(cols)]

    def as_text(self):
        """Canvas contents as plain text, one line per row"""
        return "\n".join("".join(cell[0] for cell in row) for row in self.iter_rows())

    def __repr__(self):
        return f"<Canvas {self.resolution} {self.cell_size.x}x{self.cell_size.y} cells>"
