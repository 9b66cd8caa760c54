import abc
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional, Tuple

from barsh.screen import Frame

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Key:
    name: Optional[str] = None  # KEY_UP, KEY_ENTER, ... for non-printable keys
    char: str = ""

    @property
    def is_char(self) -> bool:
        return self.name is None and len(self.char) == 1 and self.char.isprintable()



class Backend(abc.ABC):
    '''
    What the event loop needs from a terminal.
    `session()` must restore the terminal on every way out of the `with`.
    '''
    @abc.abstractmethod
    def session(self):
        raise NotImplementedError

    @abc.abstractmethod
    def size(self) -> Tuple[int, int]:
        raise NotImplementedError

    @abc.abstractmethod
    def draw(self, frame: Frame):
        raise NotImplementedError

    @abc.abstractmethod
    def poll_event(self, timeout: Optional[float] = None) -> Optional[Key]:
        raise NotImplementedError

    def flush_input(self):
        pass



class BlessedBackend(Backend):
    KEY_ALIASES = {
        '\x7f': 'KEY_BACKSPACE', '\x08': 'KEY_BACKSPACE',
        '\r': 'KEY_ENTER', '\n': 'KEY_ENTER',
        '\x1b': 'KEY_ESCAPE', '\x03': 'KEY_CTRL_C',
    }

    def __init__(self, term=None, esc_delay: float = 0.025):
        if term is None:
            from blessed import Terminal
            term = Terminal()
        self.term = term
        self.esc_delay = esc_delay

    @contextmanager
    def session(self):
        with self.term.cbreak(), self.term.fullscreen(), self.term.hidden_cursor():
            log.debug("terminal acquired (%dx%d)", self.term.width, self.term.height)
            try:
                yield self
            finally:
                print(self.term.normal, end='', flush=True)
                log.debug("terminal released")

    def size(self):
        return self.term.width, self.term.height

    def draw(self, frame: Frame):
        frame.flush(self.term)

    def to_key(self, ks) -> Optional[Key]:
        if not ks:
            return None
        alias = self.KEY_ALIASES.get(str(ks))
        if alias:
            return Key(alias)
        if ks.is_sequence:
            return Key(ks.name)
        return Key(char=str(ks))

    def poll_event(self, timeout=None):
        return self.to_key(self.term.inkey(timeout=timeout, esc_delay=self.esc_delay))

    def flush_input(self):
        while self.term.inkey(timeout=0):
            pass
