"""non-blocking keyboard and mouse reading for the interactive plot

Keyboard tokens and mouse reports are turned into events on the
:mod:`plotterm.events` bus. Mouse tracking uses the xterm "any event"
mode (1003) with SGR extended coordinates (1006), so wheel turns and
drags are reported as well as clicks.
"""
import enum
import io
import os
import re
import sys

from collections import deque

from plotterm.events import Event, EventTypes, list_subscriptions
from plotterm.utils import mirror_dict, V2


class KeyboardBase:
    # abstract
    def __init__(self):
        self.enabled = 0

    def __enter__(self):
        pass

    def __exit__(self, *args):
        pass

    def inkey(self, break_=True, clear=True):
        pass

    def __call__(self):
        return self


class _posix_KeyCodes:
    """Character keycodes as they appear in stdin

    (and as they are reported by :any:`inkey` function). This class
    is used only as a namespace. Printable-character keys are not listed
    here, as their "code" is just a string containing themselves.
    """

    ESC = "\x1b"
    BACK = "\x7f"
    DELETE = "\x1b[3~"
    ENTER = "\r"
    PGUP = "\x1b[5~"
    PGDOWN = "\x1b[6~"
    HOME = "\x1b[H"
    END = "\x1b[F"
    UP = "\x1b[A"
    RIGHT = "\x1b[C"
    DOWN = "\x1b[B"
    LEFT = "\x1b[D"
    TAB = "\t"
    SHIFT_TAB = "\x1b[Z"
    CTRL_R = "\x12"
    CTRL_U = "\x15"

    codes = mirror_dict(locals())


class _PosixKeyboard(KeyboardBase):

    # Keyboard reading code copied and evolved from
    # https://stackoverflow.com/a/6599441/108205
    # (@mheyman, Mar, 2011)

    def __init__(self):
        super().__init__()
        self._last_pressed_after_ESC = ""
        self.not_consumed = deque()

    def __enter__(self):
        """
        Reconfigures `stdin` so that key presses are read in a non-blocking way.

        Inside a managed block, the :any:`inkey` function can be called and will
        return whether a key is currently pressed, and which it is.
        """
        self.fd = sys.stdin.fileno()
        # save old state
        if self.enabled == 0:
            self.flags_save = fcntl.fcntl(self.fd, fcntl.F_GETFL)
            self.attrs_save = termios.tcgetattr(self.fd)
        # make raw - the way to do this comes from the termios(3) man page.
        attrs = list(self.attrs_save)  # copy the stored version to update

        # Check flags at https://linux.die.net/man/3/termios
        attrs[0] &= ~(
            termios.IGNBRK
            | termios.BRKINT
            | termios.PARMRK
            | termios.ISTRIP
            | termios.INLCR
            | termios.IGNCR
            | termios.ICRNL
            | termios.IXON
        )
        # oflag
        attrs[1] &= ~termios.OPOST
        # cflag
        attrs[2] &= ~(termios.CSIZE | termios.PARENB)
        attrs[2] |= termios.CS8
        # lflag
        attrs[3] &= ~(
            termios.ECHONL | termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN
        )
        termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        fcntl.fcntl(self.fd, fcntl.F_SETFL, self.flags_save | os.O_NONBLOCK)
        self.enabled += 1
        return self

    def __exit__(self, exc_type, exc_value, tb):
        # restore old state
        self.enabled -= 1
        if self.enabled <= 0:
            self.reset()

    def reset(self):
        if hasattr(self, "attrs_save"):
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self.attrs_save)
            fcntl.fcntl(self.fd, fcntl.F_SETFL, self.flags_save)
        self.enabled = 0
        self._last_pressed_after_ESC = ""

    def _scan_code(self, stream):

        composed = ""
        while True:
            # read byte by byte, so that no extra input is consumed from stdin
            if self._last_pressed_after_ESC:
                next_char = self._last_pressed_after_ESC
            else:
                next_char = stream.read(1)
            if not next_char:
                return composed, True
            # There is one special case, when "ESC" is pressed in non-clearing mode:
            # we should not have read the next token, but it is already fetched by now.
            if len(composed) == 2 and composed[0] == "\x1b" and composed[1] != "[":
                self._last_pressed_after_ESC = composed[1]
                return composed[0], False

            self._last_pressed_after_ESC = ""
            composed += next_char
            if composed == "\x1b":
                continue
            if len(composed) == 1 or composed in self.keycodes.codes or len(composed) > 30:
                return composed, False

            # "mouse" is the module level singleton for the mouse reader, defined bellow.
            if mouse.enabled:
                # mouse.match consumes the token
                if mouse.match(composed):
                    return "", False

    def inkey(self, break_=True, clear=True, consume=True):
        """Return currently pressed key as a string

        Args:
        - break\\_ (bool): Boolean parameter specifying whether "CTRL + C"
            (\\x03) should raise KeyboardInterrupt or be returned as a
            keycode. Defaults to True.
        - clear (bool): reads all pending input, generating one event
            for each token, and returns only the last key.
        - consume: remove the received key from keypresses.

        *Important*: This function only works inside a
        :any:`keyboard` managed context. (Posix)

        Code values or code sequences for non-character keys,
        like ESC or direction arrows are kept as constants
        in the "KeyCodes" class.
        """
        if not self.enabled:
            raise RuntimeError("keyboard context manager must be entered to enable non-blocking keyboard reads")

        if self.not_consumed and consume:
            return self.not_consumed.popleft()

        last_emitted = old_keycode = ""

        if not clear:
            buffer = sys.stdin
        else:
            buffer = io.StringIO(sys.stdin.read(10000) or "")
            buffer.seek(0)

        while True:
            keycode, stream_eof = self._scan_code(buffer)
            if stream_eof and not keycode:
                keycode = old_keycode
            if keycode == "\x03" and break_:
                raise KeyboardInterrupt()
            if keycode and list_subscriptions(EventTypes.KeyPress):
                if not (stream_eof and last_emitted == keycode and old_keycode == keycode):
                    Event(EventTypes.KeyPress, key=keycode)
                last_emitted = keycode
            if not clear or stream_eof:
                # next characters will be consumed in next calls
                break
            old_keycode = keycode
        if not consume:
            self.not_consumed.append(keycode)
        return keycode

    keycodes = _posix_KeyCodes


class _win32_KeyCodes:
    """Character keycodes as read by msvcrt. Namespace only."""

    ESC = "\x1b"
    BACK = "\x08"
    DELETE = "à5"
    ENTER = "\r"
    PGUP = "àI"
    PGDOWN = "àQ"
    HOME = "àG"
    END = "àO"
    UP = "àH"
    RIGHT = "àM"
    DOWN = "àP"
    LEFT = "àK"
    TAB = "\t"
    SHIFT_TAB = "\x00\x0f"
    CTRL_R = "\x12"
    CTRL_U = "\x15"

    codes = mirror_dict(locals())


class _WindowsKeyboard(KeyboardBase):
    """Keyboard reader offering compatibility with the Posix equivalent.

    There is no mouse support on this platform: the view can be
    moved with the keyboard only.
    """

    def __enter__(self):
        self.enabled += 1
        return self

    def __exit__(self, exc_type, exc_value, tb):
        self.enabled -= 1

    def inkey(self, break_=True, clear=True, consume=True):
        if not msvcrt.kbhit():
            return ""

        code = msvcrt.getwch()
        if code in "\x00à":
            code += msvcrt.getwch()
        if code == "\x03" and break_:
            raise KeyboardInterrupt()

        if list_subscriptions(EventTypes.KeyPress):
            Event(EventTypes.KeyPress, key=code)

        return code

    keycodes = _win32_KeyCodes


class MouseButtons(enum.IntFlag):
    Button1 = 1
    Button2 = 2
    Button3 = 4
    MouseWheelUp = 8
    MouseWheelDown = 16


_button_map = {
    0: MouseButtons.Button1,
    1: MouseButtons.Button2,
    2: MouseButtons.Button3,
    64: MouseButtons.MouseWheelUp,
    65: MouseButtons.MouseWheelDown,
}

#: Bit set in SGR mouse reports for motion events
_MOTION_FLAG = 0x20
#: Modifier bits (shift, meta, control): not used for plot interaction
_MODIFIER_MASK = 0x04 | 0x08 | 0x10


class _Mouse:
    """Mouse reporting for the terminal

    Used as a context manager (it enters the keyboard context as well),
    it asks the terminal to report all mouse activity. Reports are decoded
    by :any:`match` into MousePress, MouseMove, MouseRelease and MouseWheel events,
    with positions in character cells.
    """

    def __init__(self):
        self.enabled = False

    def __enter__(self):
        self.keyboard = keyboard()
        self.keyboard.__enter__()
        self.enabled = True
        sys.stdout.write("\x1b[?1003h\x1b[?1015h\x1b[?1006h")
        sys.stdout.flush()
        return self

    def __exit__(self, *args):
        sys.stdout.write("\x1b[?1006l\x1b[?1015l\x1b[?1003l")
        sys.stdout.flush()
        self.enabled = False
        self.keyboard.__exit__(*args)

    def match(self, sequence):
        """Decodes one SGR mouse report, dispatching the matching event

        The ANSI sequence for a mouse event in mode 1006 is '<ESC>[<B;Col;RowM'
        (last char is 'm' on button-release). Returns the event, or None if
        'sequence' is not a mouse report.
        """
        m = re.match(r"\x1b\[\<(?P<button>\d+);(?P<column>\d+);(?P<row>\d+)(?P<press>[Mm])$", sequence)
        if not m:
            return None
        params = m.groupdict()
        code = int(params["button"]) & ~_MODIFIER_MASK
        pressed = params["press"] == "M"
        moving = bool(code & _MOTION_FLAG)
        button = _button_map.get(code & ~_MOTION_FLAG)

        pos = V2(int(params["column"]) - 1, int(params["row"]) - 1)

        if button in (MouseButtons.MouseWheelUp, MouseButtons.MouseWheelDown) and not moving:
            delta = -1 if button == MouseButtons.MouseWheelUp else 1
            return Event(EventTypes.MouseWheel, pos=pos, buttons=button, delta=delta)
        if moving:
            return Event(EventTypes.MouseMove, pos=pos, buttons=button)
        if pressed:
            return Event(EventTypes.MousePress, pos=pos, buttons=button)
        return Event(EventTypes.MouseRelease, pos=pos, buttons=button)

    def __call__(self):
        # Keeps symmetry with "keyboard" which must be called for use as with context management
        return self


# Singleton avaliable application wide:
mouse = _Mouse()


if sys.platform != "win32":
    import fcntl
    import termios
    # Singleton avaliable application wide:
    keyboard = _PosixKeyboard()
    inkey = keyboard.inkey
    KeyCodes = _posix_KeyCodes
else:
    import msvcrt
    # Singleton avaliable application wide:
    keyboard = _WindowsKeyboard()
    inkey = keyboard.inkey
    KeyCodes = _win32_KeyCodes
