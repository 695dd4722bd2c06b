"""
cli.py - Command-line interface for Connect Four

This module provides the console collaborators for a game session (reading
columns, drawing the board, announcing results) and the command-line entry
point for playing or benchmarking the computer opponent.
"""

import argparse
import sys
from typing import List, Optional, TextIO

from connectfour.ai.selector import MoveSelector
from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.game.rules import GameSession
from connectfour.utils import WIDTH, HEIGHT, SpaceState, GameResult, InvalidInput

# ANSI escape codes
COLOR_RED = "\x1b[31m"
COLOR_RESET = "\x1b[0m"
HIGHLIGHT = "\x1b[7m"
UNDO_HIGHLIGHT = "\x1b[0m"
CLEAR_SCREEN = "\x1b[2J\x1b[H"
BELL = "\a"

QUIT_COMMANDS = {"q", "quit", "exit"}


def parse_column(raw: str) -> int:
    """
    Convert a typed 1-based column number to a 0-based column.

    Raises:
        InvalidInput: the text is not a number between 1 and WIDTH
    """
    text = raw.strip()
    if not text.isdigit():
        raise InvalidInput(f"Invalid input. Please enter a column number between 1 and {WIDTH}.")

    column = int(text) - 1
    if not 0 <= column < WIDTH:
        raise InvalidInput(f"Column must be between 1 and {WIDTH}.")
    return column


class ConsoleInput:
    """Reads the human player's columns from standard input."""

    def __init__(self, output: Optional[TextIO] = None):
        self.output = output or sys.stdout
        self.exhausted = False

    def request_column(self) -> Optional[int]:
        """
        Prompt for a column.

        Returns:
            0-based column, or None for unusable input, quit or end of input
        """
        if self.exhausted:
            return None

        try:
            self.output.write(f"\nEnter a column between 1 and {WIDTH}.  ")
            self.output.flush()
            raw = input()
        except EOFError:
            debug.info("End of input", "cli")
            self.exhausted = True
            return None

        if raw.strip().lower() in QUIT_COMMANDS:
            self.exhausted = True
            return None

        try:
            return parse_column(raw)
        except InvalidInput as e:
            print(e, file=self.output)
            return None


class ConsolePresenter:
    """Draws boards and results on a terminal."""

    def __init__(self, use_color: bool = True, clear_screen: bool = True,
                 output: Optional[TextIO] = None):
        self.use_color = use_color
        self.clear_screen = clear_screen
        self.output = output or sys.stdout

    def _write(self, text: str = "") -> None:
        print(text, file=self.output)

    def _cell(self, board: Board, row: int, column: int) -> str:
        state = board.space_at(row, column)
        if state == SpaceState.PLAYER_ONE:
            text = f"{COLOR_RED}X {COLOR_RESET}" if self.use_color else "X "
        elif state == SpaceState.PLAYER_TWO:
            text = "O "
        else:
            text = ". "

        if board.is_last_move(row, column):
            if self.use_color:
                return f"{HIGHLIGHT}{text}{UNDO_HIGHLIGHT}"
            return text.rstrip() + "*"
        return text

    def format_board(self, board: Board) -> str:
        """Board as terminal text, top row first, with column numbers below."""
        lines = []
        for row in range(HEIGHT - 1, -1, -1):
            lines.append("".join(self._cell(board, row, column) for column in range(WIDTH)))
            lines.append("")
        lines.append(" ".join(str(column + 1) for column in range(WIDTH)) + " ")
        lines.append("**" * WIDTH)
        return "\n".join(lines)

    def show_board(self, board: Board) -> None:
        if self.clear_screen:
            self.output.write(CLEAR_SCREEN)
        self._write(self.format_board(board))
        self.output.flush()

    def show_message(self, text: str) -> None:
        self._write(text)

    def show_outcome(self, result: GameResult) -> None:
        if result == GameResult.DRAW:
            self._write("It's a draw!")
        elif result.winner is not None:
            self._write(f"{result.winner.label} wins!")
            if result.winner == GameSession.automated_side:
                self.output.write(BELL * 4)
        self.output.flush()

    def acknowledge(self) -> bool:
        try:
            input("Press Enter to play again (Ctrl-D to quit). ")
        except EOFError:
            return False
        return True


class SimpleCLI:
    """Command-line interface for Connect Four."""

    def __init__(self):
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        parser = argparse.ArgumentParser(description='Connect Four against the computer')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--log-file', default=None, help='Also write log lines to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play against the computer')
        play_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the computer\'s random moves')
        play_parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
        play_parser.add_argument('--no-clear', action='store_true',
                                 help='Do not clear the screen between boards')

        benchmark_parser = subparsers.add_parser(
            'benchmark', help='Let the computer play itself and time its moves')
        benchmark_parser.add_argument('--games', type=int, default=100,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Seed for the random moves')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command named on the command line; returns an exit status."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> int:
        """Play games interactively until input ends or the player quits."""
        session = GameSession(MoveSelector(self.args.seed))
        presenter = ConsolePresenter(use_color=not self.args.no_color,
                                     clear_screen=not self.args.no_clear)
        games = session.run(ConsoleInput(), presenter)
        print(f"\nThanks for playing! Games finished: {games}")
        return games

    def benchmark(self) -> dict:
        """Play the selector against itself and report results and timing."""
        games = self.args.games
        print(f"Running benchmark with {games} games...")

        selector = MoveSelector(self.args.seed)
        session = GameSession(selector)
        tally = {result: 0 for result in GameResult if result.is_game_over()}
        moves = 0

        debug.start_timer("benchmark")
        for _ in range(games):
            session.reset()
            while not session.result.is_game_over():
                session.apply_move(selector.select(session.board, session.active_side))
                moves += 1
            tally[session.result] += 1
        elapsed = debug.end_timer("benchmark", "cli") or 0.0

        print(f"Player 1 wins: {tally[GameResult.PLAYER_ONE_WIN]}")
        print(f"Player 2 wins: {tally[GameResult.PLAYER_TWO_WIN]}")
        print(f"Draws: {tally[GameResult.DRAW]}")
        if moves:
            print(f"Selected {moves} moves in {elapsed:.6f} seconds, "
                  f"{elapsed / moves * 1000:.6f} ms per move")
        return tally


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
