import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from barsh.errors import NoSelection, NotEditing

log = logging.getLogger(__name__)


class Mode(enum.Enum):
    BROWSING = "browsing"
    EDITING = "editing"


@dataclass
class ListState:
    '''
    The candidate list the user is looking at.

    `cursor` is a character offset into the selected item.
    It only means something while `mode` is EDITING.
    '''
    items: List[str] = field(default_factory=list)
    selected: Optional[int] = None
    cursor: int = 0
    mode: Mode = Mode.BROWSING

    @property
    def current(self) -> Optional[str]:
        if self.selected is None: return None
        return self.items[self.selected]

    def _select(self, i: int):
        self.selected = i
        self.cursor = len(self.items[i])

    def select_next(self):
        if not self.items: return
        if self.selected is None: self._select(0)
        else: self._select((self.selected + 1) % len(self.items))

    def select_previous(self):
        if not self.items: return
        if self.selected is None: self._select(0)
        else: self._select((self.selected - 1) % len(self.items))

    def enter_edit_mode(self):
        if self.selected is None:
            raise NoSelection()
        self.cursor = min(self.cursor, len(self.items[self.selected]))
        self.mode = Mode.EDITING
        log.debug("editing item %d", self.selected)

    def exit_edit_mode(self):
        self.mode = Mode.BROWSING

    def _editing(self) -> str:
        if self.mode is not Mode.EDITING:
            raise NotEditing()
        if self.selected is None:
            raise NoSelection()
        return self.items[self.selected]

    def insert_char(self, c: str):
        text = self._editing()
        self.items[self.selected] = text[:self.cursor] + c + text[self.cursor:]
        self.cursor += len(c)

    def delete_char_backward(self):
        text = self._editing()
        if self.cursor == 0: return
        # always the character before the caret, never the one under it
        self.items[self.selected] = text[:self.cursor-1] + text[self.cursor:]
        self.cursor -= 1

    def move_cursor_left(self):
        self._editing()
        if self.cursor > 0: self.cursor -= 1

    def move_cursor_right(self):
        text = self._editing()
        if self.cursor < len(text): self.cursor += 1

    def replace_items(self, new_items: List[str], preserve_selection: bool = True):
        '''
        Swaps in a freshly parsed list and reclamps selection and cursor.

        With `preserve_selection` the selected index is kept, clamped to the
        new last item; otherwise selection goes back to the first item.
        A non-empty list always ends up with a selection, an empty one never does.
        '''
        old_text = self.current
        self.items = list(new_items)

        if not self.items:
            self.selected, self.cursor = None, 0
            self.mode = Mode.BROWSING
            return

        if self.selected is None or not preserve_selection:
            self._select(0)
            return

        if self.selected >= len(self.items):
            self._select(len(self.items) - 1)
            return

        # same index still exists: keep the caret, glued to the end if it was there
        text = self.items[self.selected]
        if old_text is not None and self.cursor >= len(old_text):
            self.cursor = len(text)
        else:
            self.cursor = min(self.cursor, len(text))

    def finalize_selection(self) -> str:
        if self.selected is None:
            raise NoSelection()
        return self.items[self.selected]
