import curses


KEY_CTRL_C = "\x03"
KEY_CTRL_Q = "\x11"
KEY_CTRL_X = "\x18"
KEY_ESC = "\x1b"
QUIT_KEYS = (KEY_CTRL_Q, KEY_CTRL_X, KEY_CTRL_C)
ENTER_KEYS = ("\n", "\r", curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, "\x7f", "\x08")


def is_printable(key) -> bool:
    # characters arrive as str, special keys as curses int codes
    return isinstance(key, str) and len(key) == 1 and key.isprintable()


class CommandPane:
    """
    Key handling for the search prompt.
    Edits go straight into the viewport's command buffer; handle_key returns
    None while typing, or one of "submit", "cancel", "empty", "quit", "ignored".
    """

    def __init__(self, state):
        self.state = state
        self.active = False

    def activate(self, prefix: str = "/"):
        self.active = True
        self.state.start_command(prefix)

    def reset(self):
        self.active = False
        self.state.clear_command()

    def get_buffer(self) -> str:
        return self.state.command_text()

    def handle_key(self, key):
        if not self.active:
            return None

        if key in QUIT_KEYS:
            return "quit"

        if key in ENTER_KEYS:
            self.active = False
            return "submit"

        if key == KEY_ESC:
            self.reset()
            return "cancel"

        if key in BACKSPACE_KEYS:
            if not self.state.pop_command():
                self.active = False
                return "empty"
            return None

        if is_printable(key):
            self.state.append_command(key)
            return None

        return "ignored"
