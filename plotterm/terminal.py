import sys

from threading import Lock

from plotterm.utils import V2, Color
from plotterm.values import EMPTY

if sys.platform != "win32":
    import fcntl
    import os


class UnblockTTY:
    """When changing the terminal to raw mode, stdin and stdout become "unblocking"
    meaning that a large amount of output might raise an IO Error
    (BlockingIOError) when refreshing the output.

    The interactive application switches to raw mode (code for that is in
    plotterm.input); this temporarily disables the non-blocking nature of the
    file while a frame is written.
    """

    def __enter__(self):
        self.fd = sys.stdin.fileno()
        self.flags_save = fcntl.fcntl(self.fd, fcntl.F_GETFL)
        flags = self.flags_save & ~os.O_NONBLOCK
        fcntl.fcntl(self.fd, fcntl.F_SETFL, flags)

    def __exit__(self, *args):
        fcntl.fcntl(self.fd, fcntl.F_SETFL, self.flags_save)


class ScreenCommands:
    """Low level functions to execute ANSI-Sequence-related tasks on the terminal.

    Args:
      - file: output stream. Defaults to sys.stdout at each call.
      - raw_tty (bool): set when stdin was put in non-blocking raw mode,
            so writes are wrapped in :any:`UnblockTTY`.
    """

    locks = {}

    def __init__(self, file=None, raw_tty=False):
        self.file = file
        self.raw_tty = raw_tty and sys.platform != "win32"
        self.alternate_terminal_buffer = 0

    def __repr__(self):
        return f"ScreenCommands [file={self.file!r}, raw_tty={self.raw_tty}]"

    def _print(self, *args, sep="", end="", flush=True):
        """Inner print method

        Is used in place of normal Python's print, changing the defaults
        to values more suitable to the internal usage.
        """
        file = self.file or sys.stdout
        text = sep.join(args) + end
        if self.raw_tty and file is sys.stdout:
            with UnblockTTY():
                file.write(text)
                if flush:
                    file.flush()
            return
        file.write(text)
        if flush:
            file.flush()

    def CSI(self, *args):
        """Writes a CSI command to the terminal

        Args:
          - \\*args: Sequence of parameters to the command, separated by ";"
          - the last argument is the command itself

        Check https://en.wikipedia.org/wiki/ANSI_escape_code#CSI_sequences for available commands
        """
        command = args[-1]
        params = ";".join(str(arg) for arg in args[:-1])
        self._print("\x1b[", params, command)

    def SGR(self, *args):
        """Writes a SGR ("Select Graphic Rendition") command: colors and text effects"""
        self.CSI(*args, "m")

    def clear(self):
        """Writes ANSI sequence to clear the screen"""
        self.CSI(2, "J")

    def cursor_hide(self):
        self.CSI("?25", "l")

    def cursor_show(self):
        self.CSI("?25", "h")

    def toggle_buffer(self):
        """Switches between the normal and the alternate screen buffers"""
        self.CSI("?1049", "l" if self.alternate_terminal_buffer else "h")
        self.alternate_terminal_buffer ^= 1

    def moveto(self, pos):
        """Writes ANSI Sequence to position the text cursor

        Args:
          - pos (2-sequence): screen coordinates, (0, 0) being the top-left corner.

        Please note that ANSI commands count screen coordinates from 1,
        while in this project, coordinates start at 0.
        """
        pos = V2(pos)
        self.CSI(pos.y + 1, pos.x + 1, "H")

    def reset_colors(self):
        """Writes ANSI sequence to reset terminal colors to the default"""
        self.SGR(0)

    def set_fg_color(self, color):
        """Writes ANSI sequence to set the foreground color
        color: RGB  3-sequence (0.0-1.0 or 0-255 range) or color name
        """
        self.SGR(38, 2, *Color(color))

    def print_at(self, pos, text, color=None, clear_line=False):
        """Positions the cursor and prints a text sequence

        Args:
          - pos (2-sequence): screen coordinates, (0, 0) being the top-left corner.
          - text: Text to render at position
          - color: optional foreground color
          - clear_line (bool): erase the rest of the line after the text
        """
        self.moveto(pos)
        if color is not None:
            self.set_fg_color(color)
        self._print(text)
        self.reset_colors()
        if clear_line:
            self.CSI("K")

    def render_canvas(self, canvas, pos=(0, 0)):
        """Writes a whole canvas to the terminal in a single write call

        Args:
          - canvas (Canvas): the canvas to output
          - pos (2-sequence): terminal cell where the canvas top-left corner goes

        Color and bold SGR sequences are only issued when they change from one
        cell to the next.
        """
        key = getattr(self.file, "name", "<stdout>")
        if key not in self.__class__.locks:
            self.__class__.locks[key] = Lock()
        with self.__class__.locks[key]:
            self._print(self.canvas_to_ansi(canvas, pos))

    @staticmethod
    def canvas_to_ansi(canvas, pos=(0, 0)):
        """Canvas contents as a string with ANSI color sequences

        Each row is preceded by a cursor positioning sequence, taking 'pos' as
        the top-left corner. If 'pos' is None, rows are separated by newlines instead,
        for output to files and pipes.
        """
        CSI = "\x1b["
        parts = []
        last_color = last_bold = None
        for y, row in enumerate(canvas.iter_rows()):
            if pos is None:
                if y:
                    parts.append("\n")
            else:
                parts.append(f"{CSI}{pos[1] + y + 1};{pos[0] + 1}H")
            for char, color, bold in row:
                if char == EMPTY:
                    parts.append(EMPTY)
                    continue
                codes = []
                if bold != last_bold:
                    codes.append("1" if bold else "22")
                    last_bold = bold
                if color != last_color:
                    codes.append("38;2;{};{};{}".format(*color))
                    last_color = color
                if codes:
                    parts.append(CSI + ";".join(codes) + "m")
                parts.append(char)
        parts.append(CSI + "0m")
        return "".join(parts)
