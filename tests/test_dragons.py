import unittest

from game import can_collect_dragons, collect_dragons, locked_marker, parse_card, undo
from helpers import column_ids, make_board, make_state


class TestDragonCollector(unittest.TestCase):
    def test_given_three_column_tops_and_one_free_cell_when_collecting_then_locked_in_that_cell(self):
        s = make_state(make_board(
            [['dragon-A-0'], ['normal-B-4', 'dragon-A-1'], ['dragon-A-2']],
            free=['dragon-A-3', None, None],
        ))
        self.assertTrue(can_collect_dragons(s, 'A'))
        ns = collect_dragons(s, 'A')
        self.assertTrue(ns.board.dragon_collected('A'))
        self.assertEqual(ns.board.dragons, (1, 0, 0))
        self.assertEqual(ns.board.free_cells[0], locked_marker('A'))
        self.assertEqual(ns.board.free_cells[0].id, 'dragon-A-locked')
        self.assertEqual(column_ids(ns, 0), [])
        self.assertEqual(column_ids(ns, 1), ['normal-B-4'])
        self.assertEqual(column_ids(ns, 2), [])
        self.assertEqual(len(ns.history), 1)

    def test_given_dragons_in_two_free_cells_when_collecting_then_leftmost_staged_cell_used(self):
        s = make_state(make_board(
            [['dragon-B-0'], ['dragon-B-1']],
            free=['dragon-B-2', None, 'dragon-B-3'],
        ))
        ns = collect_dragons(s, 'B')
        self.assertEqual(ns.board.free_cells[0], locked_marker('B'))
        self.assertIsNone(ns.board.free_cells[1])
        self.assertIsNone(ns.board.free_cells[2])

    def test_given_no_staged_dragon_when_collecting_then_lowest_empty_cell_used(self):
        s = make_state(make_board(
            [['dragon-C-0'], ['dragon-C-1'], ['dragon-C-2'], ['dragon-C-3']],
            free=['normal-A-5', None, None],
        ))
        ns = collect_dragons(s, 'C')
        self.assertEqual(ns.board.free_cells[1], locked_marker('C'))
        self.assertEqual(ns.board.free_cells[0], parse_card('normal-A-5'))

    def test_given_full_free_cells_and_no_staged_dragon_then_noop(self):
        s = make_state(make_board(
            [['dragon-C-0'], ['dragon-C-1'], ['dragon-C-2'], ['dragon-C-3']],
            free=['normal-A-5', 'normal-B-5', 'normal-C-5'],
        ))
        self.assertFalse(can_collect_dragons(s, 'C'))
        self.assertIs(collect_dragons(s, 'C'), s)

    def test_given_buried_dragon_when_collecting_then_nothing_changes(self):
        s = make_state(make_board(
            [['dragon-A-0', 'normal-B-6'], ['dragon-A-1'], ['dragon-A-2'], ['dragon-A-3']],
        ))
        self.assertFalse(can_collect_dragons(s, 'A'))
        self.assertIs(collect_dragons(s, 'A'), s)

    def test_given_already_collected_or_bad_color_then_noop(self):
        s = make_state(make_board([], free=['dragon-A-locked'], dragons=(1, 0, 0)))
        self.assertIs(collect_dragons(s, 'A'), s)
        self.assertIs(collect_dragons(s, 'D'), s)

    def test_given_dev_mode_when_dragon_buried_then_collected_anyway(self):
        s = make_state(make_board(
            [['dragon-A-0', 'normal-B-6'], ['dragon-A-1'], ['dragon-A-2'], ['dragon-A-3']],
        ), dev_mode=True)
        ns = collect_dragons(s, 'A')
        self.assertEqual(ns.board.dragons, (1, 0, 0))
        self.assertEqual(column_ids(ns, 0), ['normal-B-6'])
        self.assertEqual(ns.board.free_cells[0], locked_marker('A'))

    def test_given_collection_exposes_one_when_done_then_cascade_and_undo_restore(self):
        s = make_state(make_board(
            [['normal-C-1', 'dragon-A-0'], ['dragon-A-1'], ['dragon-A-2'], ['dragon-A-3']],
        ))
        ns = collect_dragons(s, 'A')
        self.assertEqual(ns.board.foundations.rank('C'), 1)
        self.assertEqual([h.is_auto for h in ns.history], [False, True])
        self.assertEqual(undo(ns), s)

    def test_given_paused_when_collecting_then_blocked(self):
        s = make_state(make_board([['dragon-A-0'], ['dragon-A-1'], ['dragon-A-2'], ['dragon-A-3']]),
                       status='paused')
        self.assertFalse(can_collect_dragons(s, 'A'))
        self.assertIs(collect_dragons(s, 'A'), s)


if __name__ == '__main__':
    unittest.main(verbosity=2)
