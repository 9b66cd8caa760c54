from contextlib import contextmanager

from barsh.terminal import Backend, Key


class ScriptedBackend(Backend):
    """Plays back a fixed list of keys and keeps every frame drawn."""

    def __init__(self, keys=(), size=(60, 20)):
        self.keys = list(keys)
        self.frames = []
        self.width, self.height = size
        self.active = False
        self.sessions = 0
        self.flushed = 0

    @contextmanager
    def session(self):
        self.active = True
        self.sessions += 1
        try:
            yield self
        finally:
            self.active = False

    def size(self):
        return self.width, self.height

    def draw(self, frame):
        assert self.active
        self.frames.append(frame)

    def poll_event(self, timeout=None):
        if not self.keys:
            raise AssertionError("ran out of scripted keys")
        return self.keys.pop(0)

    def flush_input(self):
        self.flushed += 1


def char(c):
    return Key(char=c)


DOWN, UP = Key('KEY_DOWN'), Key('KEY_UP')
LEFT, RIGHT = Key('KEY_LEFT'), Key('KEY_RIGHT')
ENTER, ESC = Key('KEY_ENTER'), Key('KEY_ESCAPE')
BACKSPACE = Key('KEY_BACKSPACE')
