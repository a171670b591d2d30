import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from game import EngineConfig, GameSession, GameStatus
from helpers import make_board, make_state
from shenzhen_core.cli import main, run_command


class TestCommandLoop(unittest.TestCase):
    def test_given_text_commands_when_run_then_session_updated(self):
        session = GameSession(state=make_state(make_board([['normal-B-9'], ['normal-A-8']])))
        self.assertTrue(run_command(session, 'move normal-A-8 col-0'))
        self.assertEqual(len(session.state.board.columns[0]), 2)
        self.assertTrue(run_command(session, 'undo'))
        self.assertTrue(run_command(session, 'pause'))
        self.assertEqual(session.state.status, GameStatus.PAUSED)
        self.assertFalse(run_command(session, 'move normal-A-8 col-0'))
        self.assertTrue(run_command(session, 'resume'))

    def test_given_unknown_or_empty_command_then_help_and_no_change(self):
        session = GameSession(EngineConfig())
        buf = io.StringIO()
        with redirect_stdout(buf):
            self.assertFalse(run_command(session, 'fly away'))
        self.assertIn('commands:', buf.getvalue())
        self.assertFalse(run_command(session, '   '))
        self.assertIsNone(run_command(session, 'quit'))

    def test_given_new_with_seed_then_deal_is_reproducible(self):
        a, b = GameSession(), GameSession()
        run_command(a, 'new 17')
        run_command(b, 'new 17')
        self.assertEqual(a.state.board, b.state.board)

    def test_given_scripted_stdin_when_main_runs_then_board_printed_until_eof(self):
        buf = io.StringIO()
        with patch('builtins.input', side_effect=['wand', 'quit']), redirect_stdout(buf):
            main(['--seed', '2'])
        out = buf.getvalue()
        self.assertIn('found A:', out)
        self.assertIn('game 1', out)


if __name__ == '__main__':
    unittest.main(verbosity=2)
