import random
import unittest

from game import (
    DRAGON_COLORS,
    EngineConfig,
    GameSession,
    GameStatus,
    NUM_COLUMNS,
    NUM_FREE_CELLS,
    SUITS,
    check_invariants,
    full_deck,
    initial_state,
    new_game,
    pause_game,
    restart_game,
    resume_game,
    toggle_dev_mode,
    undo,
)


class TestLifecycle(unittest.TestCase):
    def test_given_idle_state_when_new_game_then_playing_with_fresh_deal(self):
        s = initial_state()
        self.assertEqual(s.status, GameStatus.IDLE)
        ns = new_game(s, seed=3)
        self.assertEqual(ns.status, GameStatus.PLAYING)
        self.assertTrue(ns.timer_running)
        self.assertEqual(ns.game_id, 1)
        self.assertEqual(ns.history, ())
        self.assertIsNotNone(ns.initial_board)
        self.assertEqual(check_invariants(ns.board), [])
        self.assertEqual(new_game(ns, seed=3).game_id, 2)

    def test_given_new_game_when_deal_cleanup_runs_then_nothing_to_undo(self):
        ns = new_game(initial_state(), seed=11)
        raw = new_game(initial_state(), seed=11, skip_auto_move=True)
        self.assertEqual(raw.board, raw.initial_board)
        self.assertEqual(ns.history, ())
        self.assertIs(undo(ns), ns)

    def test_given_played_game_when_restart_then_same_deal_replayed(self):
        session = GameSession()
        session.new_game(seed=5)
        deal = session.state.initial_board
        game_id = session.state.game_id
        session.state = restart_game(session.state, skip_auto_move=True)
        self.assertEqual(session.state.board, deal)
        self.assertEqual(session.state.game_id, game_id)
        self.assertEqual(session.state.history, ())

    def test_given_no_deal_when_restart_then_noop(self):
        s = initial_state()
        self.assertIs(restart_game(s), s)

    def test_given_playing_when_pausing_and_resuming_then_status_and_timer_toggle(self):
        s = new_game(initial_state(), seed=1)
        p = pause_game(s)
        self.assertEqual(p.status, GameStatus.PAUSED)
        self.assertFalse(p.timer_running)
        self.assertIs(pause_game(p), p)
        r = resume_game(p)
        self.assertEqual(r.status, GameStatus.PLAYING)
        self.assertTrue(r.timer_running)
        self.assertIs(resume_game(r), r)

    def test_given_paused_when_restart_or_new_game_then_blocked(self):
        p = pause_game(new_game(initial_state(), seed=4))
        self.assertIs(restart_game(p), p)
        self.assertIs(new_game(p, seed=5), p)
        self.assertEqual(p.status, GameStatus.PAUSED)
        r = resume_game(p)
        self.assertEqual(restart_game(r).status, GameStatus.PLAYING)
        self.assertEqual(new_game(r, seed=5).game_id, p.game_id + 1)

    def test_given_any_state_when_toggling_dev_mode_then_flag_flips_and_survives_new_game(self):
        s = toggle_dev_mode(initial_state())
        self.assertTrue(s.dev_mode)
        self.assertTrue(new_game(s, seed=1).dev_mode)
        self.assertFalse(toggle_dev_mode(s).dev_mode)


class TestGameSession(unittest.TestCase):
    def test_given_session_when_commands_rejected_then_reports_no_change(self):
        session = GameSession(EngineConfig(no_auto_move_first_move=True))
        self.assertTrue(session.new_game(seed=9))
        self.assertFalse(session.move('normal-Z-1', 'col-0'))
        self.assertFalse(session.undo())
        self.assertFalse(session.can_undo)
        self.assertTrue(session.pause())
        self.assertFalse(session.auto_solve())
        self.assertTrue(session.resume())

    def test_given_config_dev_mode_when_session_created_then_state_starts_in_dev_mode(self):
        session = GameSession(EngineConfig(dev_mode=True))
        self.assertTrue(session.state.dev_mode)
        self.assertTrue(session.toggle_dev_mode())
        self.assertFalse(session.state.dev_mode)


def _random_command(session, rng, ids):
    roll = rng.random()
    if roll < 0.70:
        targets = ([f"col-{i}" for i in range(NUM_COLUMNS)]
                   + [f"free-{i}" for i in range(NUM_FREE_CELLS)]
                   + [f"foundation-{s}" for s in SUITS] + ['foundation-flower'])
        return 'move', lambda: session.move(rng.choice(ids), rng.choice(targets))
    if roll < 0.80:
        color = rng.choice(DRAGON_COLORS)
        return 'collect', lambda: session.collect(color)
    if roll < 0.90:
        return 'wand', session.auto_solve
    return 'undo', session.undo


class TestRandomPlayProperties(unittest.TestCase):
    def test_given_random_commands_then_cards_conserved_and_undo_inverts_each_action(self):
        ids = [c.id for c in full_deck()]
        for seed in range(4):
            rng = random.Random(seed)
            session = GameSession()
            session.new_game(seed=seed)
            committed = 0
            for _ in range(400):
                before = session.state
                name, run = _random_command(session, rng, ids)
                changed = run()
                after = session.state
                self.assertEqual(check_invariants(after.board), [], (seed, name))
                if not changed:
                    self.assertIs(after, before)
                    continue
                if name == 'undo':
                    continue
                committed += 1
                for suit in SUITS:
                    self.assertGreaterEqual(after.board.foundations.rank(suit),
                                            before.board.foundations.rank(suit))
                self.assertFalse(after.history[len(before.history)].is_auto)
                self.assertEqual(undo(after), before)
            self.assertGreater(committed, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
