from typing import List, Optional, Tuple

from barsh.region import Region
from barsh.screen import Frame, ScreenBuffer
from barsh.state import ListState, Mode

MARGIN = 2
ROW_HEIGHT = 2  # one line of text + one blank line under it
SPINNER = "/-\\|"

Legend = List[Tuple[str, Optional[str]]]  # (text, style)

LEGENDS = {
    Mode.BROWSING: [
        ("Press ", None), ("q", 'bold'), (" to exit, ", None),
        ("Enter", 'bold'), (" to execute, ", None),
        ("e", 'bold'), (" to start editing.", None),
    ],
    Mode.EDITING: [
        ("Press ", None), ("Esc", 'bold'), (" to stop editing, ", None),
        ("Enter", 'bold'), (" to execute", None),
    ],
}


def legend_for(state: ListState, tick: Optional[int] = None) -> Legend:
    if tick is not None:
        spin = SPINNER[tick % len(SPINNER)]
        return [(spin, 'yellow'), (f" waiting for suggestions ({len(state.items)} so far)", None)]
    return LEGENDS[state.mode]


def scroll_offset(selected: Optional[int], visible: int) -> int:
    if selected is None or selected < visible: return 0
    return selected - visible + 1



def render(state: ListState, width: int, height: int, tick: Optional[int] = None) -> Frame:
    '''
    Draws `state` into a fresh frame. Reads state, never writes it.

    `tick` is the spinner step while the response is still streaming;
    pass None once it is complete.
    '''
    buf = ScreenBuffer(width, height)
    legend_r, list_r = Region(0, 0, width, height).inset(MARGIN).split_top(1)

    x = legend_r.x
    for text, style in legend_for(state, tick):
        buf.puts(x, legend_r.y, text[:max(0, legend_r.right - x)], style)
        x += len(text)

    buf.rect_line(list_r, txt_color='blue')
    buf.puts(list_r.x + 1, list_r.y, "Commands"[:max(0, list_r.w - 2)], 'bold')

    inner_w = max(0, list_r.w - 2)
    visible = max(1, (list_r.h - 1) // ROW_HEIGHT)
    offset = scroll_offset(state.selected, visible)

    if not state.items and tick is None:
        buf.puts(list_r.x + 1, list_r.y + 1, "(no suggestions)"[:inner_w], 'dim')

    for i, item in enumerate(state.items[offset:offset + visible]):
        row = list_r.y + 1 + ROW_HEIGHT * i
        if row >= list_r.y + list_r.h - 1: break
        selected = (offset + i == state.selected)
        buf.puts(list_r.x + 1, row, item[:inner_w], 'bold' if selected else None,
                 txt_color='yellow' if selected else None)

    cursor = None
    if state.mode is Mode.EDITING and state.selected is not None:
        col = list_r.x + 1 + state.cursor
        row = list_r.y + ROW_HEIGHT * (state.selected - offset) + 1
        cursor = (min(col, list_r.right - 2), row)

    return Frame(buf, cursor)
