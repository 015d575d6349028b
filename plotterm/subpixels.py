import unicodedata

from plotterm import values


class SubPixels:
    """Maps "pixels" inside a character cell to unicode block characters

    Subclasses list the pixel-representing characters in order, so that
    bits in numbers from 0 to `bit_size` match the pixels set on the corresponding
    character. The canvas keeps one such number per cell and only turns it
    into a character when rendering.

    The class itself is stateless, and each subclass is used as a single-instance.
    """

    block_width: int
    block_height: int
    bit_size: int = 0b1111

    def __init_subclass__(cls):
        # Depends on ordered class namespaces: characters are declared in bit order
        chars = [value for key, value in cls.__dict__.items() if key.isupper()]
        cls.chars_in_order = dict(enumerate(chars))

    @classmethod
    def bit(cls, pos):
        """Bit standing for the pixel at 'pos' inside a cell ((0, 0) is top-left)"""
        return 2 ** (pos[0] + cls.block_width * pos[1])

    @classmethod
    def char(cls, bits):
        """Character showing the pixels set in 'bits'"""
        return cls.chars_in_order[bits & cls.bit_size]


class BlockChars_(SubPixels):
    """1/4 block characters: 2x2 pixels per cell"""

    block_width = 2
    block_height = 2

    EMPTY = values.EMPTY
    QUADRANT_UPPER_LEFT = "▘"
    QUADRANT_UPPER_RIGHT = "▝"
    UPPER_HALF_BLOCK = "▀"
    QUADRANT_LOWER_LEFT = "▖"
    LEFT_HALF_BLOCK = "▌"
    QUADRANT_UPPER_RIGHT_AND_LOWER_LEFT = "▞"
    QUADRANT_UPPER_LEFT_AND_UPPER_RIGHT_AND_LOWER_LEFT = "▛"
    QUADRANT_LOWER_RIGHT = "▗"
    QUADRANT_UPPER_LEFT_AND_LOWER_RIGHT = "▚"
    RIGHT_HALF_BLOCK = "▐"
    QUADRANT_UPPER_LEFT_AND_UPPER_RIGHT_AND_LOWER_RIGHT = "▜"
    LOWER_HALF_BLOCK = "▄"
    QUADRANT_UPPER_LEFT_AND_LOWER_LEFT_AND_LOWER_RIGHT = "▙"
    QUADRANT_UPPER_RIGHT_AND_LOWER_LEFT_AND_LOWER_RIGHT = "▟"
    FULL_BLOCK = values.FULL_BLOCK


BlockChars = BlockChars_()


class BrailleChars_(SubPixels):
    """1/8 Unicode Braille characters: 2x4 pixels per cell"""

    block_width = 2
    block_height = 4
    bit_size: int = 0b11111111

    EMPTY = values.EMPTY

    for codepoint in range(0x2801, 0x2900):
        char = chr(codepoint)
        locals()[unicodedata.name(char)] = char
    del codepoint, char

    @classmethod
    def bit(cls, pos):
        # Braille dots 1-6 run down the two columns; dots 7 and 8 were added later as a bottom row
        return (2 ** (pos[1] + 3 * pos[0])) if pos[1] < 3 else (2 ** (6 + pos[0]))


BrailleChars = BrailleChars_()


#: Block classes by resolution name, as accepted in ``context.resolution``
resolutions = {
    "high": BlockChars,
    "braille": BrailleChars,
}
