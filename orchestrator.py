import curses
import logging
from enum import Enum

from column_layout import DEFAULT_PADDING
from command_pane import CommandPane, KEY_CTRL_C, KEY_CTRL_Q, KEY_CTRL_X
from rendering import RenderAction
from viewport_controller import ViewportController


logger = logging.getLogger(__name__)


class Mode(Enum):
    NORMAL = "normal"
    COMMAND = "command"


NORMAL_KEYS = {
    # quit
    "q": "quit",
    KEY_CTRL_Q: "quit",
    KEY_CTRL_X: "quit",
    KEY_CTRL_C: "quit",
    # sort
    "a": "sort_ascending",
    "d": "sort_descending",
    "o": "original_order",
    # navigation
    curses.KEY_DOWN: "move_down",
    "j": "move_down",
    curses.KEY_UP: "move_up",
    "k": "move_up",
    curses.KEY_NPAGE: "move_page_down",
    curses.KEY_PPAGE: "move_page_up",
    curses.KEY_HOME: "move_home",
    "g": "go",
    curses.KEY_END: "move_end",
    "G": "move_end",
    curses.KEY_RIGHT: "move_right",
    "l": "move_right",
    curses.KEY_LEFT: "move_left",
    "h": "move_left",
    "0": "move_start_of_line",
    "$": "move_end_of_line",
    # search
    "/": "start_search",
    " ": "repeat_search",
}


class Orchestrator:
    """Reads keys, routes them by mode to the viewport, and renders the result."""

    def __init__(self, renderer, grid, padding: int = DEFAULT_PADDING):
        self.renderer = renderer
        self.state = ViewportController(grid, renderer.window_size(), padding)
        self.command = CommandPane(self.state)
        self.mode = Mode.NORMAL
        self.prev_key = None

    # ---------------- key handling ----------------
    def handle_key(self, key) -> RenderAction:
        if self.mode is Mode.COMMAND:
            action = self._handle_command_key(key)
        else:
            action = self._handle_normal_key(key)
        self.prev_key = key
        return action

    def _handle_normal_key(self, key) -> RenderAction:
        name = NORMAL_KEYS.get(key)
        if name is None:
            return RenderAction.NONE
        return getattr(self, f"_cmd_{name}")()

    def _handle_command_key(self, key) -> RenderAction:
        outcome = self.command.handle_key(key)
        if outcome is None:
            return RenderAction.COMMAND
        if outcome == "ignored":
            return RenderAction.NONE
        if outcome == "quit":
            return RenderAction.RESET

        self._set_mode(Mode.NORMAL)
        if outcome == "submit":
            if len(self.command.get_buffer()) <= 1:
                self.command.reset()
                return RenderAction.RERENDER
            logger.info("search %r", self.command.get_buffer()[1:])
            return self.state.execute_command()
        # cancel, or backspace past the prompt
        return RenderAction.RERENDER

    def _set_mode(self, mode: Mode):
        if mode is not self.mode:
            logger.debug("mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    # ---------------- normal mode commands ----------------
    def _cmd_quit(self):
        return RenderAction.RESET

    def _cmd_sort_ascending(self):
        return self.state.ascending(self.state.current_column())

    def _cmd_sort_descending(self):
        return self.state.descending(self.state.current_column())

    def _cmd_original_order(self):
        return self.state.original_order()

    def _cmd_move_down(self):
        return self.state.move_down()

    def _cmd_move_up(self):
        return self.state.move_up()

    def _cmd_move_page_down(self):
        return self.state.move_page_down()

    def _cmd_move_page_up(self):
        return self.state.move_page_up()

    def _cmd_move_home(self):
        return self.state.move_home()

    def _cmd_go(self):
        # "gg" jumps to the top
        if self.prev_key == "g":
            return self.state.move_home()
        return RenderAction.NONE

    def _cmd_move_end(self):
        return self.state.move_end()

    def _cmd_move_right(self):
        return self.state.move_right()

    def _cmd_move_left(self):
        return self.state.move_left()

    def _cmd_move_start_of_line(self):
        return self.state.move_start_of_line()

    def _cmd_move_end_of_line(self):
        return self.state.move_end_of_line()

    def _cmd_start_search(self):
        self._set_mode(Mode.COMMAND)
        self.command.activate("/")
        return RenderAction.COMMAND

    def _cmd_repeat_search(self):
        return self.state.repeat_search()

    # ---------------- loop ----------------
    def run(self, read_key):
        """Render, then handle one key at a time until a quit key."""
        self.renderer.render(self.state, RenderAction.RERENDER)
        while True:
            key = read_key()
            action = self.handle_key(key)
            self.renderer.render(self.state, action)
            if action is RenderAction.RESET:
                logger.info("quit")
                break


def read_curses_key(stdscr):
    """Next key: a one-character str, or a curses KEY_* int for special keys."""
    while True:
        try:
            return stdscr.get_wch()
        except curses.error:
            # interrupted read (e.g. a resize signal); keep waiting
            continue
