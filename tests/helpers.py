"""Shared board-building helpers for the test suites."""

from connectfour.game.board import Board
from connectfour.utils import WIDTH, Side

ONE = Side.ONE
TWO = Side.TWO

# Bottom-up stacks that fill a column without four of a kind
FULL_STACK = [ONE, ONE, TWO, TWO, ONE, ONE]


def build(stacks, mirror=False):
    """
    Build a board from ``{column: [side, ...]}`` stacks, listed bottom-up.

    With ``mirror`` every column c is placed at WIDTH - 1 - c instead.
    """
    board = Board()
    for column, sides in stacks.items():
        target = WIDTH - 1 - column if mirror else column
        for side in sides:
            board.place(side, target)
    return board


def draw_sequence():
    """
    Column order that fills all 42 cells, alternating sides from ONE, with
    no four in a row anywhere.

    Columns 0, 1, 4, 5 end up X O X O X O bottom-up and columns 2, 3, 6
    end up O X O X O X.
    """
    moves = []
    for a, b in [(0, 2), (1, 3), (4, 6)]:
        moves += [a, b, b, a] * 3
    moves += [5] * 6
    return moves
