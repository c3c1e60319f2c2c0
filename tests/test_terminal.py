import os
import pty
import signal
import subprocess
import sys
import termios
import time

import pytest

from byteshell import terminal
from byteshell.terminal import EOF, INTERRUPT, KeyReader, TerminalMode, raw_mode

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def tty_pair():
    master, slave = pty.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


def test_raw_mode_clears_line_discipline_flags(tty_pair):
    _, slave = tty_pair
    original = termios.tcgetattr(slave)
    mode = TerminalMode(slave)
    assert mode.enter_raw_mode()

    attrs = termios.tcgetattr(slave)
    for flag in (termios.ECHO, termios.ICANON, termios.IEXTEN, termios.ISIG):
        assert not attrs[3] & flag
    assert attrs[6][termios.VMIN] in (1, b"\x01")
    assert attrs[6][termios.VTIME] in (0, b"\x00")

    mode.restore_mode()
    assert termios.tcgetattr(slave)[3] == original[3]


def test_restore_is_idempotent(tty_pair):
    _, slave = tty_pair
    original = termios.tcgetattr(slave)
    mode = TerminalMode(slave)
    mode.restore_mode()
    mode.enter_raw_mode()
    mode.restore_mode()
    mode.restore_mode()
    assert termios.tcgetattr(slave)[3] == original[3]
    assert not mode.raw


def test_raw_mode_context_manager(tty_pair):
    _, slave = tty_pair
    with raw_mode(slave) as mode:
        assert mode.raw
        assert not termios.tcgetattr(slave)[3] & termios.ICANON
    assert termios.tcgetattr(slave)[3] & termios.ICANON


def test_not_a_tty_is_a_warning(capsys):
    r, w = os.pipe()
    try:
        mode = TerminalMode(r)
        assert mode.enter_raw_mode() is False
        mode.restore_mode()
    finally:
        os.close(r)
        os.close(w)
    assert "Warning" in capsys.readouterr().err


def test_reader_returns_single_bytes_then_eof():
    r, w = os.pipe()
    os.write(w, b"ab")
    os.close(w)
    reader = KeyReader(r)
    try:
        assert reader.read() == b"a"
        assert reader.read() == b"b"
        assert reader.read() is EOF
    finally:
        os.close(r)


def test_reader_turns_keyboard_interrupt_into_result(monkeypatch):
    def interrupted(fd, n):
        raise KeyboardInterrupt

    monkeypatch.setattr("byteshell.terminal.os.read", interrupted)
    assert KeyReader(0).read() is INTERRUPT


def test_cleanup_registered_once(tty_pair, monkeypatch):
    _, slave = tty_pair
    registered = []
    handlers = {}
    monkeypatch.setattr(terminal.atexit, "register", registered.append)
    monkeypatch.setattr(terminal.signal, "signal",
                        lambda sig, handler: handlers.__setitem__(sig, handler))

    mode = TerminalMode(slave)
    mode.enter_raw_mode()
    mode.restore_mode()
    mode.enter_raw_mode()
    mode.restore_mode()

    assert registered == [mode.restore_mode]
    assert set(handlers) == {signal.SIGTERM, signal.SIGHUP}
    with pytest.raises(SystemExit) as exc:
        handlers[signal.SIGTERM](signal.SIGTERM, None)
    assert exc.value.code == 128 + signal.SIGTERM


def _wait_for(predicate, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return False


def test_sigterm_restores_terminal(tty_pair):
    master, slave = tty_pair
    original = termios.tcgetattr(slave)
    env = dict(os.environ, PYTHONPATH=ROOT, BYTESHELL_HISTFILE="")
    code = "import sys; from byteshell.shell import main; sys.exit(main(['--no-banner']))"
    proc = subprocess.Popen([sys.executable, "-c", code], stdin=slave,
                            stdout=slave, stderr=slave, cwd=ROOT, env=env)
    try:
        assert _wait_for(lambda: not termios.tcgetattr(slave)[3] & termios.ICANON)
        proc.send_signal(signal.SIGTERM)
        assert proc.wait(timeout=10) == 128 + signal.SIGTERM
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
    assert termios.tcgetattr(slave)[3] == original[3]
