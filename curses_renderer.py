import curses

from rendering import TableRenderer, TerminalExtent, cursor_position, frame_lines


class CursesTableRenderer(TableRenderer):
    """Draws the table on a curses screen. Header bold, command line on the last row."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        try:
            curses.curs_set(1)
        except curses.error:
            pass

    def window_size(self) -> TerminalExtent:
        h, w = self.stdscr.getmaxyx()
        return TerminalExtent(chars_wide=w, chars_tall=h)

    def _addstr(self, y, x, text, attr=curses.A_NORMAL):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # writing the bottom-right cell moves the cursor off screen
            pass

    def _goto(self, state):
        y, x = cursor_position(state)
        h, w = self.stdscr.getmaxyx()
        try:
            self.stdscr.move(max(0, min(y, h - 1)), max(0, min(x, w - 1)))
        except curses.error:
            pass

    def full_render(self, state):
        self.stdscr.erase()
        for y, line in enumerate(frame_lines(state)):
            attr = curses.A_BOLD if y == 0 else curses.A_NORMAL
            self._addstr(y, 0, line, attr)
        self._goto(state)
        self.stdscr.refresh()
        return True

    def cursor_render(self, state):
        self._goto(state)
        self.stdscr.refresh()
        return True

    def command_render(self, state):
        h, w = self.stdscr.getmaxyx()
        text = state.command_text()
        # keep the tail of a long pattern visible
        visible = text[-(w - 1):] if len(text) >= w else text
        self.stdscr.move(h - 1, 0)
        self.stdscr.clrtoeol()
        self._addstr(h - 1, 0, visible)
        self.stdscr.refresh()
        return True

    def clear_render(self):
        self.stdscr.erase()
        self.stdscr.move(0, 0)
        self.stdscr.refresh()
        return True
