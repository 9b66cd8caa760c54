from typing import Tuple, Union

RegionLike = Union['Region', Tuple[int, int, int, int]]


def as_region(r: RegionLike) -> 'Region':
    if isinstance(r, Region):
        return r
    if isinstance(r, tuple) and len(r) == 4:
        return Region(*r)
    raise TypeError(f"not a region: {r!r}")


class Region(tuple):
    """
    (x, y, w, h) in terminal cells. Width and height never go negative,
    so a layout that runs out of room just gets empty regions.
    """
    def __new__(cls, x: int = 0, y: int = 0, w: int = 0, h: int = 0):
        return super().__new__(cls, (int(x), int(y), max(0, int(w)), max(0, int(h))))

    def __repr__(self):
        return f"Region{super().__repr__()}"

    x = property(lambda self: self[0])
    y = property(lambda self: self[1])
    w = property(lambda self: self[2])
    h = property(lambda self: self[3])

    @property
    def right(self) -> int:
        return self.x + self.w

    def inset(self, margin: int) -> 'Region':
        return Region(self.x + margin, self.y + margin, self.w - 2 * margin, self.h - 2 * margin)

    def split_top(self, rows: int) -> Tuple['Region', 'Region']:
        rows = min(rows, self.h)
        return (Region(self.x, self.y, self.w, rows),
                Region(self.x, self.y + rows, self.w, self.h - rows))
