import io
import unittest

from game import Player, Session, Shell, Variant
from nim_core import shell as shell_mod


def run_script(lines, session=None):
    out, err = io.StringIO(), io.StringIO()
    sh = Shell(session, stdin=io.StringIO("".join(l + "\n" for l in lines)), out=out, err=err)
    sh.run()
    return sh, out.getvalue(), err.getvalue()


class TestShellCommands(unittest.TestCase):
    def test_given_startup_when_quit_then_opener_message_and_prompt(self):
        _, out, err = run_script(["QUIT"])
        self.assertTrue(out.startswith(shell_mod.HUMAN_OPENER + "\n"))
        self.assertIn(shell_mod.SHELL_PROMPT, out)
        self.assertEqual(err, "")

    def test_given_end_of_input_when_running_then_loop_stops(self):
        sh, _, _ = run_script([])
        self.assertIsNone(sh.session.game)

    def test_given_new_game_when_human_removes_then_machine_replies(self):
        sh, out, err = run_script(["NEW 1 2 3", "REMOVE 1 1", "PRINT", "QUIT"])
        self.assertEqual(err, "")
        self.assertIn("Player machine removed 1 stick(s) from row 3.", out)
        self.assertIn("1: 0\n2: 2\n3: 2", out)
        self.assertIs(sh.session.game.variant, Variant.STANDARD)

    def test_given_lowercase_abbreviations_when_dispatching_then_first_letter_matches(self):
        sh, out, err = run_script(["m 1 3", "p", "q"])
        self.assertEqual(err, "")
        self.assertIs(sh.session.game.variant, Variant.MISERE)
        self.assertIn("1: 1\n2: 3", out)

    def test_given_no_game_when_remove_or_print_then_not_running_message(self):
        _, out, _ = run_script(["REMOVE 1 1", "PRINT", "QUIT"])
        self.assertEqual(out.count(shell_mod.GAME_NOT_RUNNING), 2)

    def test_given_bad_configuration_when_new_then_invalid_input_error(self):
        for cmd in ("NEW", "NEW 0 3", "NEW a b", "MISERE -1"):
            sh, _, err = run_script([cmd, "QUIT"])
            self.assertIn(shell_mod.INVALID_INPUT, err, cmd)
            self.assertIsNone(sh.session.game)

    def test_given_running_game_when_new_rejected_then_old_game_discarded(self):
        sh, out, err = run_script(["NEW 3 4", "NEW x", "PRINT", "REMOVE 1 1", "QUIT"])
        self.assertIn(shell_mod.INVALID_INPUT, err)
        self.assertIsNone(sh.session.game)
        self.assertEqual(out.count(shell_mod.GAME_NOT_RUNNING), 2)
        self.assertNotIn("1: 3", out)

    def test_given_illegal_move_when_remove_then_error_and_board_unchanged(self):
        sh, _, err = run_script(["NEW 3", "REMOVE 1 5", "REMOVE 2 1", "REMOVE 1 x", "QUIT"])
        self.assertEqual(err.count(shell_mod.ILLEGAL_MOVE), 2)
        self.assertIn(shell_mod.INVALID_INPUT, err)
        self.assertEqual(sh.session.game.rows, [3])

    def test_given_unknown_or_empty_command_when_dispatching_then_invalid_command(self):
        _, out, err = run_script(["XYZ", "", "QUIT"])
        self.assertEqual(out.count(shell_mod.INVALID_COMMAND), 2)
        self.assertEqual(err, "")

    def test_given_switch_when_new_game_then_machine_opens(self):
        sh, out, _ = run_script(["SWITCH", "NEW 3 4 5", "SWITCH", "QUIT"])
        self.assertIn(shell_mod.MACHINE_OPENER, out)
        self.assertIn("Player machine removed 2 stick(s) from row 1.", out)
        self.assertEqual(sh.session.game.rows, [1, 4, 5])
        self.assertIs(sh.session.opener, Player.HUMAN)
        self.assertEqual(out.count(shell_mod.HUMAN_OPENER), 2)

    def test_given_human_takes_last_stick_when_standard_then_human_wins(self):
        _, out, _ = run_script(["NEW 2", "REMOVE 1 2", "REMOVE 1 1", "QUIT"])
        self.assertEqual(out.count(shell_mod.HUMAN_WINS), 2)
        self.assertNotIn("Player machine", out)

    def test_given_human_takes_last_stick_when_misere_then_machine_wins(self):
        _, out, _ = run_script(["MISERE 2", "REMOVE 1 2", "QUIT"])
        self.assertIn(shell_mod.MACHINE_WINS, out)

    def test_given_machine_takes_last_stick_when_standard_then_machine_wins(self):
        _, out, _ = run_script(["NEW 1 2", "REMOVE 2 2", "QUIT"])
        self.assertIn("Player machine removed 1 stick(s) from row 1.", out)
        self.assertIn(shell_mod.MACHINE_WINS, out)

    def test_given_verbose_toggle_when_printing_then_binary_and_nim_sum_shown(self):
        sh, out, err = run_script(["NEW 3 4 5", "VERBOSE on", "PRINT", "VERBOSE OFF", "VERBOSE", "QUIT"])
        self.assertIn("1: 3 (11)\n2: 4 (100)\n3: 5 (101)\nNim sum: 2 (10)", out)
        self.assertFalse(sh.session.verbose)
        self.assertIn(shell_mod.INVALID_INPUT, err)

    def test_given_help_when_requested_then_lists_commands(self):
        _, out, _ = run_script(["HELP", "QUIT"])
        for word in ("NEW", "MISERE", "REMOVE", "SWITCH", "PRINT", "VERBOSE", "QUIT"):
            self.assertIn(word, out)

    def test_given_session_when_shell_starts_then_session_state_used(self):
        session = Session(opener=Player.MACHINE, verbose=True)
        sh, out, _ = run_script(["NEW 1", "QUIT"], session=session)
        self.assertTrue(out.startswith(shell_mod.MACHINE_OPENER))
        self.assertIn("Player machine removed 1 stick(s) from row 1.", out)
        self.assertIn(shell_mod.MACHINE_WINS, out)
        self.assertIs(sh.session, session)


if __name__ == "__main__":
    unittest.main()
