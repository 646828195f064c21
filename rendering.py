from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


ELLIPSIS = "…"

# control characters would break the frame across screen lines
_CONTROL_CHARS = {c: " " for c in (*range(32), 127)}


class RenderAction(Enum):
    """What a state change requires from the renderer."""

    RERENDER = "rerender"
    MOVE_CURSOR = "move_cursor"
    COMMAND = "command"
    RESET = "reset"
    NONE = "none"


@dataclass(frozen=True)
class TerminalExtent:
    chars_wide: int
    chars_tall: int


class TableRenderer(ABC):
    """
    Receives viewport state and produces output for it.
    Subclasses decide what "output" is: bytes on a terminal, strings in a test.
    """

    def render(self, state, action: RenderAction):
        if action is RenderAction.RERENDER:
            return self.full_render(state)
        if action is RenderAction.MOVE_CURSOR:
            return self.cursor_render(state)
        if action is RenderAction.COMMAND:
            return self.command_render(state)
        if action is RenderAction.RESET:
            return self.clear_render()
        if action is RenderAction.NONE:
            return None
        raise ValueError(f"Unknown render action: {action!r}")

    @abstractmethod
    def window_size(self) -> TerminalExtent: ...

    @abstractmethod
    def full_render(self, state): ...

    @abstractmethod
    def cursor_render(self, state): ...

    @abstractmethod
    def command_render(self, state): ...

    @abstractmethod
    def clear_render(self): ...


# ---------- formatting helpers shared by all backends ----------
def fixed_width(value: str, width: int) -> str:
    if width <= 0:
        return ""
    value = value.translate(_CONTROL_CHARS)
    if len(value) > width:
        return value[: width - 1] + ELLIPSIS
    return value.ljust(width)


def format_row(state, row) -> str:
    """Visible part of a row, each cell padded or truncated to its column width."""
    term_w = state.extent.chars_wide
    x_offset = state.x_offset()
    cells = []
    for col in range(state.col_offset, len(state.layout)):
        fmt = state.layout[col]
        if fmt.start >= term_w + x_offset:
            break
        last_pos = fmt.end - x_offset
        width = fmt.width
        if last_pos > term_w:
            width -= last_pos - term_w
        cells.append(fixed_width(row[col], width))
    return "".join(cells)


def frame_lines(state) -> list[str]:
    lines = [format_row(state, state.grid.header)]
    stop = min(state.row_offset + state.displayable_data_rows(), state.grid.row_count)
    for row in state.grid.rows(state.row_offset, stop):
        lines.append(format_row(state, row))
    return lines


def cursor_position(state) -> tuple[int, int]:
    """Zero-based (y, x) screen position of the cursor."""
    col = state.layout[state.current_column()]
    return state.cursor_row, col.start - state.x_offset()


class TextTableRenderer(TableRenderer):
    """Plain-text backend: returns strings instead of writing to a terminal."""

    def __init__(self, width: int, height: int):
        self.extent = TerminalExtent(width, height)
        self.output: list[str] = []

    def window_size(self) -> TerminalExtent:
        return self.extent

    def _emit(self, text):
        self.output.append(text)
        return text

    def _goto(self, state) -> str:
        y, x = cursor_position(state)
        return f"<goto>{y + 1};{x + 1}</goto>"

    def full_render(self, state):
        return self._emit("\n".join(frame_lines(state) + [self._goto(state)]))

    def cursor_render(self, state):
        return self._emit(self._goto(state))

    def command_render(self, state):
        return self._emit(f"<command>{state.command_text()}</command>")

    def clear_render(self):
        return self._emit("<clear>")
