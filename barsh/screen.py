from dataclasses import dataclass
from typing import List, Optional, Tuple

from barsh.region import RegionLike, as_region


class ScreenBuffer:
    def __init__(self, w, h):
        self.w, self.h = w, h
        self.chars = [[' '] * w for _ in range(h)]
        self.styles: List[List[Optional[str]]] = [[None] * w for _ in range(h)]
        self.txt_colors: List[List[Optional[str]]] = [[None] * w for _ in range(h)]

    def put(self, x, y, char, style=None, txt_color=None):
        if 0 <= x < self.w and 0 <= y < self.h:
            self.chars[y][x] = char
            self.styles[y][x] = style
            self.txt_colors[y][x] = txt_color

    def puts(self, x, y, text, style=None, txt_color=None):
        for i, c in enumerate(text):
            self.put(x + i, y, c, style, txt_color)

    def row_text(self, y) -> str:
        return "".join(self.chars[y])

    def flush(self, term):
        out = term.home
        for y in range(self.h):
            for x in range(self.w):
                c = self.chars[y][x]
                fg, s = self.txt_colors[y][x], self.styles[y][x]
                parts = [p for p in [fg, s] if p]
                attr = "_".join(parts) if parts else None
                styled = getattr(term, attr, None) if attr else None
                out += styled(c) if styled else c
        return out

    def rect_line(self, r: RegionLike, style=None, txt_color=None):
        x, y, w, h = as_region(r)
        if w < 2 or h < 2: return
        for col in range(x + 1, x + w - 1):
            self.put(col, y, '─', style, txt_color)
            self.put(col, y + h - 1, '─', style, txt_color)
        for row in range(y + 1, y + h - 1):
            self.put(x, row, '│', style, txt_color)
            self.put(x + w - 1, row, '│', style, txt_color)
        self.put(x, y, '┌', style, txt_color)
        self.put(x + w - 1, y, '┐', style, txt_color)
        self.put(x, y + h - 1, '└', style, txt_color)
        self.put(x + w - 1, y + h - 1, '┘', style, txt_color)


@dataclass
class Frame:
    buf: ScreenBuffer
    cursor: Optional[Tuple[int, int]] = None  # (x, y); None hides the caret

    def flush(self, term):
        out = self.buf.flush(term)
        if self.cursor is None:
            out += term.hide_cursor
        else:
            out += term.move_xy(*self.cursor) + term.normal_cursor
        print(out, end='', flush=True)
