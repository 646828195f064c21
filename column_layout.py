from dataclasses import dataclass


DEFAULT_PADDING = 2


@dataclass(frozen=True)
class ColumnFormat:
    """Width of a column and its left edge in an unscrolled rendering, in characters."""

    width: int
    start: int

    @property
    def end(self) -> int:
        return self.start + self.width


def compute_column_widths(grid, padding: int = DEFAULT_PADDING, window_width: int = 80):
    window_width = max(1, window_width)
    widths = []
    for col, name in enumerate(grid.header):
        max_len = len(name)
        if grid.row_count:
            max_len = max(max_len, int(grid.column_values(col).str.len().max()))
        # a single column may never be wider than the window
        widths.append(max(1, min(window_width, max_len + padding)))
    return widths


class ColumnLayout:
    """Contiguous column layout, computed once per grid and never recomputed."""

    def __init__(self, widths):
        self.columns: list[ColumnFormat] = []
        start = 0
        for width in widths:
            self.columns.append(ColumnFormat(width=width, start=start))
            start += width

    @classmethod
    def from_grid(cls, grid, padding: int = DEFAULT_PADDING, window_width: int = 80):
        return cls(compute_column_widths(grid, padding, window_width))

    def __len__(self):
        return len(self.columns)

    def __getitem__(self, idx) -> ColumnFormat:
        return self.columns[idx]

    def __iter__(self):
        return iter(self.columns)

    def right_edge(self, idx: int) -> int:
        return self.columns[idx].end

    @property
    def total_width(self) -> int:
        return self.columns[-1].end if self.columns else 0
