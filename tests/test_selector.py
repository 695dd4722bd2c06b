import unittest

import numpy as np

from connectfour.ai.selector import MoveSelector, MoveTier
from connectfour.utils import WIDTH, IllegalMove
from tests.helpers import ONE, TWO, FULL_STACK, build


class TestMoveSelector(unittest.TestCase):
    def setUp(self):
        self.selector = MoveSelector(seed=0)

    def test_win_beats_block(self):
        # ONE threatens column 3 along the bottom row, TWO can finish column 6
        board = build({0: [ONE], 1: [ONE], 2: [ONE], 6: [TWO, TWO, TWO]})
        self.assertEqual(self.selector.select(board, TWO), 6)
        self.assertEqual(self.selector.last_tier, MoveTier.WIN)

    def test_blocks_only_threat(self):
        board = build({2: [ONE, ONE, ONE], 5: [TWO], 6: [TWO]})
        self.assertEqual(self.selector.select(board, TWO), 2)
        self.assertEqual(self.selector.last_tier, MoveTier.BLOCK)

    def test_block_prefers_lowest_column(self):
        # Open three on the bottom row: columns 0 and 4 both win for ONE
        board = build({1: [ONE], 2: [ONE], 3: [ONE], 6: [TWO, TWO]})
        self.assertEqual(self.selector.find_blocking_column(board, TWO), 0)
        self.assertEqual(self.selector.select(board, TWO), 0)

    def test_winning_column_skips_full_columns(self):
        board = build({0: FULL_STACK, 1: [TWO], 2: [TWO], 3: [TWO]})
        self.assertEqual(self.selector.find_winning_column(board, TWO), 4)

    def test_no_tactics_means_random(self):
        board = build({3: [ONE]})
        column = self.selector.select(board, TWO)
        self.assertTrue(board.can_place(column))
        self.assertEqual(self.selector.last_tier, MoveTier.RANDOM)

    def test_select_leaves_board_untouched(self):
        board = build({0: [ONE], 1: [ONE], 2: [ONE], 6: [TWO, TWO]})
        before = board.copy()
        self.selector.select(board, TWO)
        self.assertEqual(board, before)

    def test_random_spread_on_empty_board(self):
        board = build({})
        picks = set()
        for seed in range(30):
            column = MoveSelector(seed=seed).select(board, TWO)
            self.assertTrue(board.can_place(column))
            picks.add(column)
        self.assertGreater(len(picks), 1)

    def test_random_walks_right_to_open_column(self):
        board = build({column: FULL_STACK for column in range(WIDTH - 1)})
        for seed in range(10):
            self.assertEqual(MoveSelector(seed=seed).random_column(board), WIDTH - 1)

    def test_random_wraps_past_last_column(self):
        board = build({column: FULL_STACK for column in range(1, WIDTH)})
        seeds = [seed for seed in range(20)
                 if int(np.random.default_rng(seed).integers(WIDTH)) > 0]
        self.assertTrue(seeds)
        for seed in seeds:
            self.assertEqual(MoveSelector(seed=seed).random_column(board), 0)

    def test_random_on_full_board_raises(self):
        board = build({column: FULL_STACK for column in range(WIDTH)})
        with self.assertRaises(IllegalMove):
            self.selector.random_column(board)

    def test_same_seed_same_choice(self):
        board = build({})
        first = [MoveSelector(seed=42).random_column(board) for _ in range(3)]
        self.assertEqual(len(set(first)), 1)

        selector = MoveSelector(seed=5)
        a = [selector.random_column(board) for _ in range(5)]
        selector.reseed(5)
        b = [selector.random_column(board) for _ in range(5)]
        self.assertEqual(a, b)


if __name__ == '__main__':
    unittest.main()
