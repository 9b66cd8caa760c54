from contextlib import contextmanager

import pytest
from blessed.keyboard import Keystroke

from barsh.terminal import BlessedBackend, Key


class FakeTerm:
    width, height = 80, 24
    normal = ""

    def __init__(self, pending=()):
        self.log = []
        self.pending = list(pending)

    def _mode(self, name):
        @contextmanager
        def cm():
            self.log.append(f"enter {name}")
            try:
                yield
            finally:
                self.log.append(f"exit {name}")
        return cm()

    def cbreak(self): return self._mode("cbreak")
    def fullscreen(self): return self._mode("fullscreen")
    def hidden_cursor(self): return self._mode("hidden_cursor")

    def inkey(self, timeout=None, esc_delay=None):
        return self.pending.pop(0) if self.pending else Keystroke('')


@pytest.mark.parametrize("ks, expected", [
    (Keystroke('a'), Key(char='a')),
    (Keystroke('Q'), Key(char='Q')),
    (Keystroke('\x1b[B', code=258, name='KEY_DOWN'), Key('KEY_DOWN')),
    (Keystroke('\x7f'), Key('KEY_BACKSPACE')),
    (Keystroke('\x08', code=263, name='KEY_BACKSPACE'), Key('KEY_BACKSPACE')),
    (Keystroke('\n', code=343, name='KEY_ENTER'), Key('KEY_ENTER')),
    (Keystroke('\r'), Key('KEY_ENTER')),
    (Keystroke('\x1b', code=361, name='KEY_ESCAPE'), Key('KEY_ESCAPE')),
    (Keystroke('\x03'), Key('KEY_CTRL_C')),
])
def test_keystroke_mapping(ks, expected):
    assert BlessedBackend(FakeTerm()).to_key(ks) == expected


def test_timeout_gives_no_key():
    assert BlessedBackend(FakeTerm()).poll_event(timeout=0) is None


def test_key_is_char():
    assert Key(char='x').is_char
    assert not Key('KEY_UP').is_char
    assert not Key(char='\t').is_char


def test_session_releases_terminal_on_error():
    term = FakeTerm()
    with pytest.raises(ValueError):
        with BlessedBackend(term).session():
            raise ValueError("boom")
    assert term.log[-3:] == ["exit hidden_cursor", "exit fullscreen", "exit cbreak"]


def test_flush_input_drains_pending_keys():
    term = FakeTerm([Keystroke('a'), Keystroke('b')])
    BlessedBackend(term).flush_input()
    assert term.pending == []


def test_backend_missing_a_method_cannot_be_created():
    from barsh.terminal import Backend

    class Incomplete(Backend):
        def size(self):
            return 80, 24

    with pytest.raises(TypeError):
        Incomplete()
