import atexit
import os
import signal
import sys
from contextlib import contextmanager

import termios

# Reader results that are not keystrokes
EOF = object()
INTERRUPT = object()


class TerminalMode:
    """Switch stdin between its original mode and raw character mode."""

    def __init__(self, fd=None):
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.saved = None
        self.raw = False
        self._registered = False

    def enter_raw_mode(self):
        """
        Save the current attributes and turn off echo, canonical mode,
        extended input processing and signal keys.
        Returns: True if raw mode is active
        """
        try:
            if not os.isatty(self.fd):
                print("Warning: Not running in a real terminal. Line editing may not work properly.",
                      file=sys.stderr)
                return False

            self.saved = termios.tcgetattr(self.fd)
            self._register_cleanup()

            raw = termios.tcgetattr(self.fd)
            raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
            raw[6][termios.VMIN] = 1
            raw[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
            self.raw = True
            return True
        except (termios.error, OSError) as e:
            print(f"Warning: Could not enable raw mode: {e}", file=sys.stderr)
            return False

    def restore_mode(self):
        """Put back the saved attributes; safe to call more than once"""
        if self.saved is None or not self.raw:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self.saved)
        except (termios.error, OSError) as e:
            print(f"Warning: Could not restore terminal: {e}", file=sys.stderr)
        finally:
            self.raw = False

    def _register_cleanup(self):
        if self._registered:
            return
        atexit.register(self.restore_mode)
        # SIGTERM/SIGHUP unwind through SystemExit so finally blocks and atexit run
        for sig in (signal.SIGTERM, signal.SIGHUP):
            signal.signal(sig, _exit_on_signal)
        self._registered = True


def _exit_on_signal(signum, frame):
    raise SystemExit(128 + signum)


@contextmanager
def raw_mode(fd=None):
    """Run a block with the terminal in raw mode, restoring it afterwards"""
    mode = TerminalMode(fd)
    mode.enter_raw_mode()
    try:
        yield mode
    finally:
        mode.restore_mode()


class KeyReader:
    """Blocking one-byte reader over a file descriptor."""

    def __init__(self, fd=None):
        self.fd = sys.stdin.fileno() if fd is None else fd

    def read(self):
        """
        Read a single byte.
        Returns: bytes of length 1, EOF or INTERRUPT
        """
        try:
            data = os.read(self.fd, 1)
        except KeyboardInterrupt:
            return INTERRUPT
        if not data:
            return EOF
        return data
