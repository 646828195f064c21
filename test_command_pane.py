import curses

from command_pane import CommandPane, is_printable
from grid import Grid
from rendering import TerminalExtent
from viewport_controller import ViewportController


def _pane():
    grid = Grid.from_records(["a"], [["x"]])
    state = ViewportController(grid, TerminalExtent(20, 5))
    pane = CommandPane(state)
    pane.activate()
    return pane


def _feed(pane, keys):
    return [pane.handle_key(k) for k in keys]


def test_activate_seeds_slash():
    pane = _pane()
    assert pane.get_buffer() == "/"
    assert pane.active


def test_printable_characters_append():
    pane = _pane()
    assert _feed(pane, list("ab c")) == [None] * 4
    assert pane.get_buffer() == "/ab c"


def test_unicode_characters_append():
    pane = _pane()
    _feed(pane, ["ő", "€"])
    assert pane.get_buffer() == "/ő€"


def test_backspace_deletes_and_empties():
    pane = _pane()
    _feed(pane, ["a"])
    assert pane.handle_key(curses.KEY_BACKSPACE) is None
    assert pane.get_buffer() == "/"
    assert pane.handle_key("\x7f") == "empty"
    assert pane.get_buffer() == ""
    assert not pane.active


def test_enter_submits_and_keeps_buffer():
    pane = _pane()
    _feed(pane, ["z"])
    assert pane.handle_key("\n") == "submit"
    assert pane.get_buffer() == "/z"


def test_escape_cancels_and_clears():
    pane = _pane()
    _feed(pane, list("abc"))
    assert pane.handle_key("\x1b") == "cancel"
    assert pane.get_buffer() == ""
    assert not pane.active


def test_ctrl_keys_quit():
    for key in ("\x11", "\x18", "\x03"):
        assert _pane().handle_key(key) == "quit"


def test_special_keys_are_ignored():
    pane = _pane()
    assert pane.handle_key(curses.KEY_LEFT) == "ignored"
    assert pane.handle_key("\t") == "ignored"
    assert pane.get_buffer() == "/"


def test_inactive_pane_ignores_keys():
    pane = _pane()
    pane.reset()
    assert pane.handle_key("a") is None
    assert pane.get_buffer() == ""


def test_is_printable():
    assert is_printable("a")
    assert is_printable(" ")
    assert not is_printable("\n")
    assert not is_printable(curses.KEY_DOWN)
