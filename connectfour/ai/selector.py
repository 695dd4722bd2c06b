"""
selector.py - Move selection for the automated Connect Four opponent

The opponent looks exactly one move ahead and picks a column by strict
priority:

1. A column that wins immediately
2. A column the opponent would win with next move (blocked with our own token)
3. A random column that still has room

Ties inside a tier go to the lowest column index.
"""

from enum import Enum, auto
from typing import Optional

import numpy as np

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import WIDTH, Side, IllegalMove


class MoveTier(Enum):
    """Which rule produced a move."""
    WIN = auto()
    BLOCK = auto()
    RANDOM = auto()


class MoveSelector:
    """
    One-ply heuristic opponent.

    All lookahead happens on board copies; the board passed in is never
    modified.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Seed for the random fallback (None draws fresh entropy)
        """
        self.rng = np.random.default_rng(seed)
        self.last_tier: Optional[MoveTier] = None

    def reseed(self, seed: Optional[int]):
        self.rng = np.random.default_rng(seed)

    def select(self, board: Board, side: Side) -> int:
        """
        Choose the column ``side`` should play.

        Args:
            board: The current game board (not modified)
            side: The side to move

        Returns:
            A column that can take a token
        """
        debug.start_timer("select")

        tier = MoveTier.WIN
        column = self.find_winning_column(board, side)
        if column is None:
            tier = MoveTier.BLOCK
            column = self.find_blocking_column(board, side)
        if column is None:
            tier = MoveTier.RANDOM
            column = self.random_column(board)

        self.last_tier = tier
        debug.end_timer("select", "ai")
        debug.debug(f"{side} chose column {column} ({tier.name.lower()})", "ai")
        return column

    @staticmethod
    def find_winning_column(board: Board, side: Side) -> Optional[int]:
        """First column where a token for ``side`` completes four in a row."""
        for column in range(WIDTH):
            if not board.can_place(column):
                continue
            if board.with_move(side, column).has_win(side):
                return column
        return None

    @classmethod
    def find_blocking_column(cls, board: Board, side: Side) -> Optional[int]:
        """First column where the other side would win on its next move."""
        return cls.find_winning_column(board, side.other())

    def random_column(self, board: Board) -> int:
        """
        Pick a random start column and walk right (wrapping) to the first open one.

        Raises:
            IllegalMove: every column is full
        """
        start = int(self.rng.integers(WIDTH))
        for offset in range(WIDTH):
            column = (start + offset) % WIDTH
            if board.can_place(column):
                return column
        raise IllegalMove("No column has room for another token")
