import curses
import unittest

from grid import Grid
from orchestrator import Mode, Orchestrator
from rendering import RenderAction, TextTableRenderer


def small_grid():
    return Grid.from_records(
        ["a", "bb", "c"],
        [[f"{i}a", f"{i}bb", f"{i}c"] for i in range(1, 6)],
    )


class OrchestratorTests(unittest.TestCase):
    def setUp(self):
        self.renderer = TextTableRenderer(9, 4)
        self.orch = Orchestrator(self.renderer, small_grid())
        self.state = self.orch.state

    def feed(self, keys):
        return [self.orch.handle_key(k) for k in keys]

    def test_vim_and_arrow_keys_move(self):
        self.assertEqual(
            self.feed(["j", curses.KEY_DOWN, "k", curses.KEY_UP]),
            [RenderAction.MOVE_CURSOR] * 4,
        )
        self.assertEqual(self.feed(["l", curses.KEY_RIGHT]), [RenderAction.MOVE_CURSOR, RenderAction.RERENDER])
        self.assertEqual(self.feed(["h", curses.KEY_LEFT]), [RenderAction.MOVE_CURSOR, RenderAction.RERENDER])
        self.assertEqual(self.state.snapshot(), (0, 0, 0, 0))

    def test_paging_home_end_keys(self):
        self.assertEqual(self.orch.handle_key(curses.KEY_NPAGE), RenderAction.MOVE_CURSOR)
        self.assertEqual(self.orch.handle_key("G"), RenderAction.RERENDER)
        self.assertEqual(self.state.current_row(), 4)
        self.assertEqual(self.orch.handle_key(curses.KEY_PPAGE), RenderAction.RERENDER)
        self.assertEqual(self.orch.handle_key(curses.KEY_HOME), RenderAction.RERENDER)
        self.assertEqual(self.state.snapshot(), (0, 0, 0, 0))
        self.orch.handle_key(curses.KEY_END)
        self.assertEqual(self.state.current_row(), 4)

    def test_gg_jumps_home(self):
        self.orch.handle_key("G")
        self.assertEqual(self.orch.handle_key("g"), RenderAction.NONE)
        self.assertEqual(self.orch.handle_key("g"), RenderAction.RERENDER)
        self.assertEqual(self.state.snapshot(), (0, 0, 0, 0))

    def test_single_g_after_other_key_does_nothing(self):
        self.orch.handle_key("G")
        self.feed(["g", "j", "g"])
        self.assertNotEqual(self.state.row_offset, 0)

    def test_line_start_and_end(self):
        self.assertEqual(self.orch.handle_key("$"), RenderAction.RERENDER)
        self.assertEqual(self.state.current_column(), 3)
        self.assertEqual(self.orch.handle_key("0"), RenderAction.RERENDER)
        self.assertEqual(self.state.current_column(), 0)

    def test_sort_keys(self):
        self.feed(["l", "d"])
        self.assertEqual(self.state.grid.row(0)[1], "5a")
        self.feed(["a"])
        self.assertEqual(self.state.grid.row(0)[1], "1a")
        self.feed(["d", "o"])
        self.assertEqual(self.state.grid.row(0)[0], "1")

    def test_quit_keys(self):
        for key in ("q", "\x11", "\x18", "\x03"):
            self.assertEqual(self.orch.handle_key(key), RenderAction.RESET)

    def test_unknown_key_is_noop(self):
        self.assertEqual(self.orch.handle_key("z"), RenderAction.NONE)
        self.assertEqual(self.orch.handle_key(curses.KEY_RESIZE), RenderAction.NONE)

    def test_search_flow(self):
        self.orch.handle_key("l")
        self.assertEqual(self.orch.handle_key("/"), RenderAction.COMMAND)
        self.assertIs(self.orch.mode, Mode.COMMAND)
        self.assertEqual(self.feed(["4", "a"]), [RenderAction.COMMAND] * 2)
        self.assertEqual(self.state.command_text(), "/4a")
        self.assertEqual(self.orch.handle_key("\n"), RenderAction.RERENDER)
        self.assertIs(self.orch.mode, Mode.NORMAL)
        self.assertEqual(self.state.current_row(), 3)
        self.assertEqual(self.state.command_text(), "")

    def test_repeat_search_with_space(self):
        self.orch.handle_key("l")
        self.feed(["/", "a", "\r"])
        self.assertEqual(self.state.current_row(), 0)
        self.assertEqual(self.orch.handle_key(" "), RenderAction.RERENDER)
        self.assertEqual(self.state.current_row(), 1)
        self.orch.handle_key(" ")
        self.assertEqual(self.state.current_row(), 2)

    def test_space_without_previous_search(self):
        self.assertEqual(self.orch.handle_key(" "), RenderAction.NONE)

    def test_enter_on_empty_pattern(self):
        self.orch.handle_key("/")
        self.assertEqual(self.orch.handle_key("\n"), RenderAction.RERENDER)
        self.assertIs(self.orch.mode, Mode.NORMAL)
        self.assertEqual(self.state.snapshot(), (0, 0, 0, 0))

    def test_backspace_past_prompt_returns_to_normal(self):
        self.orch.handle_key("/")
        self.orch.handle_key("x")
        self.assertEqual(self.orch.handle_key(curses.KEY_BACKSPACE), RenderAction.COMMAND)
        self.assertEqual(self.orch.handle_key(curses.KEY_BACKSPACE), RenderAction.RERENDER)
        self.assertIs(self.orch.mode, Mode.NORMAL)
        # keys act as commands again
        self.assertEqual(self.orch.handle_key("j"), RenderAction.MOVE_CURSOR)

    def test_escape_cancels_search(self):
        self.feed(["/", "q"])
        self.assertEqual(self.orch.handle_key("\x1b"), RenderAction.RERENDER)
        self.assertIs(self.orch.mode, Mode.NORMAL)
        self.assertEqual(self.state.command_text(), "")

    def test_escape_keeps_previous_search(self):
        self.orch.handle_key("l")
        self.feed(["/", "2", "\n"])
        self.feed(["/", "5", "\x1b"])
        self.orch.handle_key("k")
        self.orch.handle_key(" ")
        self.assertEqual(self.state.current_row(), 1)

    def test_command_mode_letters_are_not_commands(self):
        self.orch.handle_key("/")
        self.assertEqual(self.orch.handle_key("q"), RenderAction.COMMAND)
        self.assertEqual(self.orch.handle_key("j"), RenderAction.COMMAND)
        self.assertEqual(self.state.snapshot(), (0, 0, 0, 0))

    def test_ctrl_quit_in_command_mode(self):
        self.orch.handle_key("/")
        self.assertEqual(self.orch.handle_key("\x18"), RenderAction.RESET)

    def test_run_renders_each_key_until_quit(self):
        keys = iter(["j", "z", "/", "x", "\x1b", "q", "j"])
        self.orch.run(lambda: next(keys))
        out = self.renderer.output
        self.assertTrue(out[0].startswith("#  a   bb\n1  1a  1…"))
        self.assertEqual(out[1], "<goto>2;1</goto>")
        self.assertEqual(out[2], "<command>/</command>")
        self.assertEqual(out[3], "<command>/x</command>")
        self.assertTrue(out[4].startswith("#  a   bb"))
        self.assertEqual(out[5], "<clear>")
        self.assertEqual(len(out), 6)
        # the key after quit is never read
        self.assertEqual(next(keys), "j")


if __name__ == "__main__":
    unittest.main()
