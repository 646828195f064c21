import logging

from column_layout import ColumnLayout, DEFAULT_PADDING
from rendering import RenderAction, TerminalExtent


logger = logging.getLogger(__name__)


class ViewportController:
    """
    Viewport and cursor state over a Grid.

    row_offset / col_offset locate the top-left visible cell in the grid.
    cursor_row is relative to the screen: 0 is the header line, 1..N are the
    visible data rows. cursor_col is relative to col_offset.

    Every user action is a method returning the RenderAction it requires.
    """

    def __init__(self, grid, extent: TerminalExtent, padding: int = DEFAULT_PADDING):
        self.grid = grid
        # at least one displayable data row below the header
        self.extent = TerminalExtent(max(1, extent.chars_wide), max(2, extent.chars_tall))
        self.layout = ColumnLayout.from_grid(grid, padding, self.extent.chars_wide)
        self.row_offset = 0
        self.col_offset = 0
        self.cursor_row = 0
        self.cursor_col = 0
        self.command_buffer: list[str] = []
        self.last_search: str | None = None

    # ---------- helpers ----------
    def x_offset(self) -> int:
        return self.layout[self.col_offset].start

    def displayable_data_rows(self) -> int:
        # one line is taken by the header
        return self.extent.chars_tall - 1

    def page_step(self) -> int:
        return max(1, self.displayable_data_rows() - 1)

    def last_window_offset(self) -> int:
        return max(0, self.grid.row_count - self.displayable_data_rows())

    def bottom_cursor_row(self) -> int:
        return min(self.displayable_data_rows(), self.grid.row_count)

    def final_row_visible(self) -> bool:
        return self.row_offset + self.displayable_data_rows() >= self.grid.row_count

    def first_row_visible(self) -> bool:
        return self.row_offset == 0

    def last_col_visible(self) -> bool:
        return self.layout.total_width <= self.x_offset() + self.extent.chars_wide

    def is_bottom(self) -> bool:
        return self.cursor_row == self.bottom_cursor_row()

    def current_column(self) -> int:
        return self.col_offset + self.cursor_col

    def current_row(self) -> int | None:
        """Absolute data row under the cursor, None on the header line."""
        if self.cursor_row == 0:
            return None
        return self.row_offset + self.cursor_row - 1

    def snapshot(self) -> tuple[int, int, int, int]:
        return (self.row_offset, self.col_offset, self.cursor_row, self.cursor_col)

    def check_invariants(self):
        n_rows = self.grid.row_count
        n_cols = len(self.layout)
        assert 0 <= self.row_offset <= self.last_window_offset(), self.snapshot()
        assert 0 <= self.cursor_row <= self.bottom_cursor_row(), self.snapshot()
        assert 0 <= self.col_offset < n_cols, self.snapshot()
        assert 0 <= self.cursor_col < n_cols - self.col_offset, self.snapshot()
        if self.cursor_row:
            assert self.current_row() < n_rows, self.snapshot()

    # ---------- sort ----------
    def ascending(self, col: int) -> RenderAction:
        self.grid.sort(col)
        return RenderAction.RERENDER

    def descending(self, col: int) -> RenderAction:
        self.grid.sort(col, descending=True)
        return RenderAction.RERENDER

    def original_order(self) -> RenderAction:
        return self.ascending(0)

    # ---------- command buffer ----------
    def start_command(self, prefix: str = "/"):
        self.command_buffer = [prefix]

    def append_command(self, ch: str):
        self.command_buffer.append(ch)

    def pop_command(self) -> bool:
        """Drop the last character; False once the buffer is empty."""
        if self.command_buffer:
            self.command_buffer.pop()
        return bool(self.command_buffer)

    def clear_command(self):
        self.command_buffer = []

    def command_text(self) -> str:
        return "".join(self.command_buffer)

    def execute_command(self) -> RenderAction:
        text = self.command_text()
        self.clear_command()
        if len(text) > 1 and text[0] == "/":
            self.last_search = text[1:]
            return self.search(self.last_search)
        return RenderAction.NONE

    def repeat_search(self) -> RenderAction:
        if not self.last_search:
            return RenderAction.NONE
        return self.search(self.last_search)

    # ---------- search ----------
    def _jump_to_row(self, row: int):
        shown = self.displayable_data_rows()
        n_rows = self.grid.row_count
        if row < shown:
            # first window position
            self.row_offset = 0
            self.cursor_row = row + 1
        elif n_rows - row < shown:
            # last window position
            self.row_offset = n_rows - shown
            self.cursor_row = row - self.row_offset + 1
        else:
            self.row_offset = row
            self.cursor_row = 1

    def search(self, pattern: str) -> RenderAction:
        # the row after the cursor; the header counts as the row before the window
        start = self.row_offset + self.cursor_row
        found = self.grid.find(self.current_column(), pattern, start)
        if found is None:
            logger.debug("search %r: no match in column %d", pattern, self.current_column())
        else:
            logger.debug("search %r: row %d", pattern, found)
            self._jump_to_row(found)
        return RenderAction.RERENDER

    # ---------- vertical movement ----------
    def move_down(self) -> RenderAction:
        if self.is_bottom():
            if not self.final_row_visible():
                self.row_offset += 1
                return RenderAction.RERENDER
            return RenderAction.NONE
        self.cursor_row += 1
        return RenderAction.MOVE_CURSOR

    def move_up(self) -> RenderAction:
        if self.cursor_row == 1:
            if not self.first_row_visible():
                self.row_offset -= 1
                return RenderAction.RERENDER
            self.cursor_row = 0
            return RenderAction.MOVE_CURSOR
        if self.cursor_row > 1:
            self.cursor_row -= 1
            return RenderAction.MOVE_CURSOR
        return RenderAction.NONE

    def move_page_down(self) -> RenderAction:
        if self.grid.row_count == 0:
            return RenderAction.NONE
        if self.cursor_row == 0:
            # from the header straight to the first data row
            self.cursor_row = 1
            return RenderAction.MOVE_CURSOR
        if not self.final_row_visible():
            self.row_offset = min(
                self.last_window_offset(), self.row_offset + self.page_step()
            )
            return RenderAction.RERENDER
        bottom = self.bottom_cursor_row()
        if self.cursor_row != bottom:
            self.cursor_row = bottom
            return RenderAction.MOVE_CURSOR
        return RenderAction.NONE

    def move_page_up(self) -> RenderAction:
        if not self.first_row_visible():
            self.row_offset = max(0, self.row_offset - self.page_step())
            return RenderAction.RERENDER
        if self.cursor_row != 0:
            self.cursor_row = 0
            return RenderAction.MOVE_CURSOR
        return RenderAction.NONE

    def move_home(self) -> RenderAction:
        self.row_offset = 0
        self.cursor_row = 0
        return RenderAction.RERENDER

    def move_end(self) -> RenderAction:
        self.row_offset = self.last_window_offset()
        self.cursor_row = self.bottom_cursor_row()
        return RenderAction.RERENDER

    # ---------- horizontal movement ----------
    def move_right(self) -> RenderAction:
        if self.current_column() == len(self.layout) - 1:
            return RenderAction.NONE
        self.cursor_col += 1
        cur = self.current_column()
        new_end = self.layout.right_edge(cur)
        width = self.extent.chars_wide
        if new_end - self.x_offset() <= width:
            return RenderAction.MOVE_CURSOR
        # smallest offset for which the new column fits in the window
        for i in range(self.col_offset, cur + 1):
            if new_end - self.layout[i].start <= width:
                self.cursor_col -= i - self.col_offset
                self.col_offset = i
                break
        return RenderAction.RERENDER

    def move_left(self) -> RenderAction:
        if self.cursor_col == 0:
            if self.col_offset != 0:
                self.col_offset -= 1
                return RenderAction.RERENDER
            return RenderAction.NONE
        self.cursor_col -= 1
        return RenderAction.MOVE_CURSOR

    def move_start_of_line(self) -> RenderAction:
        self.cursor_col = 0
        if self.col_offset == 0:
            return RenderAction.MOVE_CURSOR
        self.col_offset = 0
        return RenderAction.RERENDER

    def move_end_of_line(self) -> RenderAction:
        total = self.layout.total_width
        last = len(self.layout) - 1
        for i, col in enumerate(self.layout):
            if total - col.start <= self.extent.chars_wide:
                self.col_offset = i
                self.cursor_col = last - i
                break
        return RenderAction.RERENDER
