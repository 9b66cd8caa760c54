import logging
from typing import List, Optional

from barsh.errors import StreamError

log = logging.getLogger(__name__)



def parse(text: str) -> List[str]:
    '''
    Turns raw completion text into candidate commands:
    one per non-blank line, trimmed, in order.
    '''
    # only \n breaks a line; \r\n is folded first, other control chars stay in the command
    lines = text.replace('\r\n', '\n').split('\n')
    return [line.strip() for line in lines if line.strip()]



class StreamAccumulator:
    """Owns the raw response text while it streams in."""

    def __init__(self, max_chars: Optional[int] = None):
        self._parts: List[str] = []
        self._size = 0
        self.max_chars = max_chars

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def append(self, chunk: str) -> List[str]:
        self._size += len(chunk)
        if self.max_chars is not None and self._size > self.max_chars:
            raise StreamError(f"response exceeded {self.max_chars} characters")
        self._parts.append(chunk)
        items = parse(self.text)
        log.debug("chunk of %d chars, %d candidates", len(chunk), len(items))
        return items

    def discard(self):
        self._parts = []
        self._size = 0
