import logging
import queue
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from barsh.errors import NoSelection, StreamError
from barsh.parser import StreamAccumulator
from barsh.render import render
from barsh.state import ListState, Mode
from barsh.terminal import Backend, Key

log = logging.getLogger(__name__)



#====================================
# events
#====================================

@dataclass
class StreamChunk:
    text: str

@dataclass
class StreamEnd:
    pass

@dataclass
class StreamFailed:
    error: BaseException


def pump(chunks: Iterable[str], events: queue.Queue, cancel: Optional[threading.Event] = None):
    '''
    Producer side: moves chunks from the completion stream onto `events`, in order.
    Finishes with StreamEnd or StreamFailed unless cancelled.
    Once `cancel` is set it stops at the next chunk and closes the source.
    '''
    it = iter(chunks)
    try:
        for chunk in it:
            if cancel is not None and cancel.is_set():
                log.debug("stream cancelled, closing source")
                break
            events.put(StreamChunk(chunk))
        else:
            events.put(StreamEnd())
    except Exception as e:
        events.put(StreamFailed(e))
    finally:
        close = getattr(it, "close", None)
        if close is not None: close()



#====================================
# key handling
#====================================

@dataclass
class Quit:
    pass

@dataclass
class Execute:
    command: str

Outcome = Union[Quit, Execute]


def _finalize(state: ListState) -> Optional[Outcome]:
    try:
        return Execute(state.finalize_selection())
    except NoSelection:
        log.debug("enter with nothing selected, ignored")
        return None


def dispatch(state: ListState, key: Key) -> Optional[Outcome]:
    '''
    Applies one key press to `state`.
    Returns an Outcome when the session should end, None to keep going.
    '''
    if key.name == 'KEY_CTRL_C':
        return Quit()

    if state.mode is Mode.BROWSING:
        if key.char == 'q': return Quit()
        if key.char == 'e':
            try:
                state.enter_edit_mode()
            except NoSelection:
                log.debug("edit requested with nothing selected, ignored")
        elif key.name == 'KEY_DOWN': state.select_next()
        elif key.name == 'KEY_UP': state.select_previous()
        elif key.name == 'KEY_ENTER': return _finalize(state)
        return None

    if key.name == 'KEY_ESCAPE': state.exit_edit_mode()
    elif key.name == 'KEY_ENTER': return _finalize(state)
    elif key.name == 'KEY_BACKSPACE': state.delete_char_backward()
    elif key.name == 'KEY_LEFT': state.move_cursor_left()
    elif key.name == 'KEY_RIGHT': state.move_cursor_right()
    elif key.is_char: state.insert_char(key.char)
    return None



#====================================
# main-loop
#====================================

class App:
    '''
    Runs one session: stream the candidates in, then let the user pick one.
    `run()` returns the finalized command, or None if the user quit.
    '''

    def __init__(self, backend: Backend, chunks: Iterable[str], max_chars: Optional[int] = None,
                 tick_interval: float = 0.1):
        self.backend = backend
        self.chunks = chunks
        self.state = ListState()
        self.accumulator = StreamAccumulator(max_chars)
        self.tick_interval = tick_interval
        self.tick = 0

    def draw(self, streaming=False):
        w, h = self.backend.size()
        self.backend.draw(render(self.state, w, h, self.tick if streaming else None))

    def stream(self):
        events = queue.Queue()
        cancel = threading.Event()
        threading.Thread(target=pump, args=(self.chunks, events, cancel), daemon=True).start()
        try:
            self._consume(events)
        finally:
            # stop the producer on every way out, errors included
            cancel.set()

        log.info("stream complete, %d candidates", len(self.state.items))
        self.accumulator.discard()
        # keys pressed while the list was still growing are dropped
        self.backend.flush_input()

    def _consume(self, events: queue.Queue):
        self.draw(streaming=True)
        while True:
            try:
                event = events.get(timeout=self.tick_interval)
            except queue.Empty:
                self.tick += 1
                self.draw(streaming=True)
                continue

            if isinstance(event, StreamChunk):
                items = self.accumulator.append(event.text)
                self.state.replace_items(items, preserve_selection=True)
                self.draw(streaming=True)
            elif isinstance(event, StreamFailed):
                raise StreamError(f"completion stream failed: {event.error}") from event.error
            else:
                return

    def interact(self) -> Optional[str]:
        while True:
            self.draw()
            key = self.backend.poll_event()
            if key is None:
                continue
            outcome = dispatch(self.state, key)
            if isinstance(outcome, Quit):
                log.info("quit without executing")
                return None
            if isinstance(outcome, Execute):
                return outcome.command

    def run(self) -> Optional[str]:
        with self.backend.session():
            self.stream()
            return self.interact()
