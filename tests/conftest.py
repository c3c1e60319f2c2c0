import io

import pytest

from byteshell.history import HistoryStore
from byteshell.shell import ShellSession
from byteshell.terminal import EOF


class FakeReader:
    """Hands out scripted keystrokes, then EOF."""

    def __init__(self, *chunks):
        self.keys = []
        for chunk in chunks:
            if isinstance(chunk, bytes):
                self.keys.extend(chunk[i:i + 1] for i in range(len(chunk)))
            else:
                self.keys.append(chunk)

    def read(self):
        if not self.keys:
            return EOF
        return self.keys.pop(0)


def plain_prompt():
    return "$ "


@pytest.fixture
def make_session():
    def factory(*chunks, executor=None, history=None):
        kwargs = {}
        if executor is not None:
            kwargs["executor"] = executor
        return ShellSession(reader=FakeReader(*chunks), out=io.StringIO(),
                            history=history if history is not None else HistoryStore(),
                            prompt=plain_prompt, **kwargs)
    return factory
