class V2(tuple):
    """2-component Vector class used for pixel and math-space points

    Works as a 2-sequence, but offers "x" and "y" properties to the coordinates
    as well as basic operations. As V2 inherits from Python's tuple, it is imutable
    and can be used as dictionary keys, among other common sequence operations.

    Args:
      x (number or 2-sequence): 1st vector coordinate or 2-sequence with coordinates
      y (number): 2nd vector coordinate. Ignored if x is a sequence
    Suported ops:
      - + (``__add__``): Adds both components of 2 vectors
      - - (``__sub__``): Subtracts both components of 2 vectors.
      - * (``__mul__``): Multiplies vector components by a scalar or another 2-sequence
      - abs (``__abs__``): Returns vector length
    """

    __slots__ = ()

    def __new__(cls, x=0, y=0):
        """Accepts two coordinates as two parameters for x and y"""
        if hasattr(x, "__len__") or hasattr(x, "__iter__"):
            x, y = x
        elif x is None:
            x = y = 0
        return super().__new__(cls, (x, y))

    def __init__(self, *args, **kw):
        # "Eat" arguments that would otherwise hit tuple.__init__
        return

    x = property(lambda self: self[0])
    y = property(lambda self: self[1])

    def __add__(self, other):
        """Adds both components of a V2 or other 2-sequence"""
        return self.__class__(self[0] + other[0], self[1] + other[1])

    __radd__ = __add__

    def __sub__(self, other):
        """Subtracts both components of a V2 or other 2-sequence"""
        return self.__class__(self[0] - other[0], self[1] - other[1])

    def __rsub__(self, other):
        return self.__class__(other[0] - self[0], other[1] - self[1])

    def __mul__(self, other):
        """multiplies a V2 by an scalar or by another Seq[2] (item by item)"""
        if hasattr(other, "__len__") and len(other) == 2:
            return self.__class__(self[0] * other[0], self[1] * other[1])
        return self.__class__(self[0] * other, self[1] * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if hasattr(other, "__len__") and len(other) == 2:
            return self.__class__(self[0] / other[0], self[1] / other[1])
        return self.__class__(self[0] / other, self[1] / other)

    def __floordiv__(self, other):
        if hasattr(other, "__len__") and len(other) == 2:
            return self.__class__(self[0] // other[0], self[1] // other[1])
        return self.__class__(self[0] // other, self[1] // other)

    def __abs__(self):
        """Returns Vector length
           Returns:
             - (float): Euclidian length of vector

        """
        return (self.x ** 2 + self.y ** 2) ** 0.5

    def __repr__(self):
        return f"V2({self.x}, {self.y})"
