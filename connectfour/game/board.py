"""
board.py - Board representation for Connect Four

This module implements the Board class: the grid of cells, column-drop
placement, last-move tracking and win detection.
"""

from typing import List, Optional, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (WIDTH, HEIGHT, Side, SpaceState, IllegalMove, OutOfRange,
                               has_connection, render_board_ascii)


class Board:
    """
    A Connect Four board.

    The grid is a ``HEIGHT x WIDTH`` numpy array of ``SpaceState`` values with
    row 0 at the bottom. Tokens only ever land on the lowest empty row of a
    column, so every column is filled contiguously from the bottom.
    """

    def __init__(self):
        self.grid = np.zeros((HEIGHT, WIDTH), dtype=np.int8)
        self.last_move: Optional[Tuple[int, int]] = None

    def copy(self) -> 'Board':
        """
        Create an independent copy of the board.

        Returns:
            A new Board with the same grid and last move
        """
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        new_board.last_move = self.last_move
        return new_board

    __copy__ = copy

    def __deepcopy__(self, memo) -> 'Board':
        return self.copy()

    def with_move(self, side: Side, column: int) -> 'Board':
        """
        Return a copy of this board with ``side`` played in ``column``.

        The board itself is left untouched.
        """
        trial = self.copy()
        trial.place(side, column)
        return trial

    @staticmethod
    def _check_column(column: int):
        if not 0 <= column < WIDTH:
            raise OutOfRange(f"Column {column} out of range")

    @staticmethod
    def _check_row(row: int):
        if not 0 <= row < HEIGHT:
            raise OutOfRange(f"Row {row} out of range")

    def space_at(self, row: int, column: int) -> SpaceState:
        """
        Get the state of one cell.

        Args:
            row: 0-based row, 0 is the bottom
            column: 0-based column

        Returns:
            The SpaceState at that position
        """
        self._check_row(row)
        self._check_column(column)
        return SpaceState(int(self.grid[row, column]))

    def column_height(self, column: int) -> int:
        """Number of tokens in ``column``."""
        self._check_column(column)
        for row in range(HEIGHT - 1, -1, -1):
            if self.grid[row, column] != SpaceState.EMPTY.value:
                return row + 1
        return 0

    def can_place(self, column: int) -> bool:
        return self.column_height(column) < HEIGHT

    def valid_moves(self) -> List[int]:
        """Columns that still have room, in increasing order."""
        return [column for column in range(WIDTH) if self.can_place(column)]

    def is_full(self) -> bool:
        return not any(self.can_place(column) for column in range(WIDTH))

    def place(self, side: Side, column: int) -> int:
        """
        Drop a token for ``side`` into ``column``.

        Args:
            side: The side placing the token
            column: 0-based column

        Returns:
            The row the token landed on

        Raises:
            OutOfRange: column is not on the board
            IllegalMove: column is already full
        """
        if not self.can_place(column):
            raise IllegalMove(f"Column {column + 1} is full")

        row = self.column_height(column)
        self._set_space(row, column, side.space_state)
        debug.trace(f"{side} placed at ({row}, {column})", "board")
        return row

    def _set_space(self, row: int, column: int, state: SpaceState):
        self._check_row(row)
        self._check_column(column)
        self.grid[row, column] = state.value
        self.last_move = (row, column)

    def has_win(self, side: Side) -> bool:
        """Check whether ``side`` has four in a row in any direction."""
        return has_connection(self.grid, side.space_state.value)

    def is_last_move(self, row: int, column: int) -> bool:
        return self.last_move == (row, column)

    def get_state(self) -> np.ndarray:
        """Copy of the grid array."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid, self.last_move)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid) and self.last_move == other.last_move

    def __str__(self) -> str:
        return self.render()
