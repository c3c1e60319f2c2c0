import sys
from enum import Enum

from byteshell.config import CLEAR_LINE, MAX_INPUT
from byteshell.history import AT_END, NO_CHANGE, Direction
from byteshell.terminal import EOF, INTERRUPT

ENTER = (b"\n", b"\r")
BACKSPACE = (b"\x7f", b"\b")
CTRL_C = b"\x03"
CTRL_D = b"\x04"
ESC = b"\x1b"


class State(Enum):
    NORMAL = 0
    ESCAPE = 1
    ESCAPE_BRACKET = 2


class LineBuffer:
    """Characters of the line being typed, capped at max_len."""

    def __init__(self, max_len=MAX_INPUT - 1):
        self.max_len = max_len
        self.chars = []

    def __len__(self):
        return len(self.chars)

    def __str__(self):
        return "".join(self.chars)

    def append(self, ch):
        if len(self.chars) >= self.max_len:
            return False
        self.chars.append(ch)
        return True

    def pop(self):
        return self.chars.pop() if self.chars else None

    def replace(self, text):
        self.chars = list(text[:self.max_len])

    def clear(self):
        self.chars = []


class LineEditor:
    """
    Read one line from raw keystrokes.

    Handles Enter, Backspace, Ctrl+C (drop the line), Ctrl+D (end of input)
    and the Up/Down arrow sequences for history. The cursor always sits at
    the end of the text; there is no left/right movement.
    """

    def __init__(self, reader, history, prompt, out=None, max_input=MAX_INPUT):
        self.reader = reader
        self.history = history
        self.prompt = prompt
        self.out = out or sys.stdout
        self.max_len = max_input - 1

    def write(self, text):
        self.out.write(text)
        self.out.flush()

    def redraw(self, buf):
        self.write(CLEAR_LINE + self.prompt() + str(buf))

    def read_line(self):
        """
        Block until a full line is entered.
        Returns: the line, or None on Ctrl+D / end of input
        """
        buf = LineBuffer(self.max_len)
        state = State.NORMAL

        while True:
            c = self.reader.read()

            if c is EOF:
                return None

            if c is INTERRUPT or (state is State.NORMAL and c == CTRL_C):
                self.write("\n" + self.prompt())
                buf.clear()
                state = State.NORMAL
                continue

            if state is State.ESCAPE:
                state = State.ESCAPE_BRACKET if c == b"[" else State.NORMAL
                continue

            if state is State.ESCAPE_BRACKET:
                if c == b"A":
                    self._recall(buf, Direction.OLDER)
                elif c == b"B":
                    self._recall(buf, Direction.NEWER)
                # Left/right and other sequences are dropped
                state = State.NORMAL
                continue

            if c in ENTER:
                self.write("\n")
                return str(buf)
            elif c in BACKSPACE:
                if buf.pop() is not None:
                    self.write("\b \b")
            elif c == CTRL_D:
                return None
            elif c == ESC:
                state = State.ESCAPE
            elif 0x20 <= c[0] < 0x7f:
                ch = c.decode("ascii")
                if buf.append(ch):
                    self.write(ch)

    def _recall(self, buf, direction):
        entry = self.history.navigate(direction)
        if entry is NO_CHANGE:
            return
        if entry is AT_END:
            buf.clear()
        else:
            buf.replace(entry)
        self.redraw(buf)
