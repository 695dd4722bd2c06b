"""
utils.py - Constants, enumerations and grid helpers for Connect Four

Row 0 is the bottom row of the board throughout the package.
"""

from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np

# Game constants
WIDTH = 7
HEIGHT = 6
CONNECT_N = 4  # Number of tokens in a line to win


class ConnectFourError(Exception):
    """Base class for errors raised by the game."""


class OutOfRange(ConnectFourError, IndexError):
    """A row or column index outside the board was used."""


class IllegalMove(ConnectFourError, ValueError):
    """A token cannot be placed where it was asked to go."""


class InvalidInput(ConnectFourError, ValueError):
    """Text typed by the human player is not a usable column."""


class SpaceState(Enum):
    """Contents of one cell; the values are what the grid array stores."""
    EMPTY = 0
    PLAYER_ONE = 1
    PLAYER_TWO = 2


class Side(Enum):
    """The two sides of a game; ONE is the human, TWO the automated opponent."""
    ONE = 1
    TWO = 2

    def other(self) -> 'Side':
        return Side.TWO if self == Side.ONE else Side.ONE

    @property
    def space_state(self) -> SpaceState:
        return SpaceState(self.value)

    @property
    def label(self) -> str:
        return f"Player {self.value}"

    def __str__(self):
        return "X" if self == Side.ONE else "O"


class GameResult(Enum):
    """Outcome of a game session."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    @classmethod
    def won_by(cls, side: Side) -> 'GameResult':
        return cls.PLAYER_ONE_WIN if side == Side.ONE else cls.PLAYER_TWO_WIN

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Side]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Side.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Side.TWO
        return None


class Direction(Enum):
    """Directions scanned for a winning line."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# (row step, column step) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


def has_line(mask: np.ndarray, row_step: int, column_step: int,
             length: int = CONNECT_N) -> bool:
    """
    Check a boolean mask for ``length`` consecutive True cells along one direction.

    Every possible starting cell is tested at once by AND-ing shifted views
    of the mask.

    Args:
        mask: Boolean array, True where the player's tokens are
        row_step: -1, 0 or 1
        column_step: 0 or 1

    Returns:
        True if any line of the requested length exists
    """
    rows, cols = mask.shape
    row_span = (length - 1) * abs(row_step)
    col_span = (length - 1) * column_step
    starts_h = rows - row_span
    starts_w = cols - col_span
    if starts_h <= 0 or starts_w <= 0:
        return False

    first_row = row_span if row_step < 0 else 0
    hits = np.ones((starts_h, starts_w), dtype=bool)
    for k in range(length):
        r = first_row + k * row_step
        c = k * column_step
        hits &= mask[r:r + starts_h, c:c + starts_w]
    return bool(hits.any())


def has_connection(grid: np.ndarray, value: int) -> bool:
    """
    Check whether ``value`` has CONNECT_N tokens in a row anywhere on the grid.

    Each of the four directions is checked independently.
    """
    mask = grid == value
    return any(has_line(mask, dr, dc) for dr, dc in DIRECTION_VECTORS.values())


def render_board_ascii(grid: np.ndarray,
                       last_move: Optional[Tuple[int, int]] = None) -> str:
    """
    Render the grid as plain text, top row first.

    The most recent move, when given, is wrapped in brackets.
    """
    symbols = {
        SpaceState.EMPTY.value: ".",
        SpaceState.PLAYER_ONE.value: "X",
        SpaceState.PLAYER_TWO.value: "O",
    }
    rows, cols = grid.shape
    lines = []
    for row in range(rows - 1, -1, -1):
        cells = []
        for col in range(cols):
            symbol = symbols[int(grid[row, col])]
            if last_move == (row, col):
                cells.append(f"[{symbol}]")
            else:
                cells.append(f" {symbol} ")
        lines.append("|" + "".join(cells) + "|")

    lines.append("+" + "-" * (cols * 3) + "+")
    lines.append(" " + "".join(f" {col + 1} " for col in range(cols)) + " ")
    return "\n".join(lines)
