import contextlib
import io
import unittest
from unittest import mock

from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.interfaces.cli import (ConsoleInput, ConsolePresenter, SimpleCLI, BELL,
                                        parse_column, main)
from connectfour.utils import WIDTH, GameResult, InvalidInput, Side


class TestParseColumn(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(parse_column("1"), 0)
        self.assertEqual(parse_column(" 7 \n"), WIDTH - 1)

    def test_invalid(self):
        for raw in ["0", "8", "", "abc", "-1", "2.5"]:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidInput):
                    parse_column(raw)


class TestConsoleInput(unittest.TestCase):
    def setUp(self):
        self.output = io.StringIO()
        self.reader = ConsoleInput(output=self.output)

    def test_bad_then_good(self):
        with mock.patch('builtins.input', side_effect=["nine", "4"]):
            self.assertIsNone(self.reader.request_column())
            self.assertFalse(self.reader.exhausted)
            self.assertEqual(self.reader.request_column(), 3)
        self.assertIn("Invalid input", self.output.getvalue())
        self.assertIn("Enter a column between 1 and 7.", self.output.getvalue())

    def test_end_of_input(self):
        with mock.patch('builtins.input', side_effect=EOFError):
            self.assertIsNone(self.reader.request_column())
        self.assertTrue(self.reader.exhausted)

    def test_quit(self):
        with mock.patch('builtins.input', return_value="q"):
            self.assertIsNone(self.reader.request_column())
        self.assertTrue(self.reader.exhausted)


class TestConsolePresenter(unittest.TestCase):
    def setUp(self):
        self.output = io.StringIO()
        self.presenter = ConsolePresenter(use_color=False, clear_screen=False,
                                          output=self.output)

    def test_board_layout(self):
        board = Board()
        board.place(Side.ONE, 0)
        board.place(Side.TWO, 1)
        lines = self.presenter.format_board(board).split("\n")

        self.assertEqual(lines[0], ". " * WIDTH)
        self.assertEqual(lines[10], "X O*. . . . . ")
        self.assertEqual(lines[-2], "1 2 3 4 5 6 7 ")
        self.assertEqual(lines[-1], "**" * WIDTH)

    def test_color_highlights_last_move(self):
        presenter = ConsolePresenter(use_color=True, clear_screen=True, output=self.output)
        board = Board()
        board.place(Side.ONE, 3)
        presenter.show_board(board)
        text = self.output.getvalue()
        self.assertTrue(text.startswith("\x1b[2J"))
        self.assertIn("\x1b[7m\x1b[31mX ", text)

    def test_outcomes(self):
        self.presenter.show_outcome(GameResult.PLAYER_ONE_WIN)
        self.presenter.show_outcome(GameResult.DRAW)
        text = self.output.getvalue()
        self.assertIn("Player 1 wins!", text)
        self.assertIn("It's a draw!", text)
        self.assertNotIn(BELL, text)

    def test_computer_win_rings_bell(self):
        self.presenter.show_outcome(GameResult.PLAYER_TWO_WIN)
        text = self.output.getvalue()
        self.assertIn("Player 2 wins!", text)
        self.assertIn(BELL * 4, text)

    def test_acknowledge(self):
        with mock.patch('builtins.input', return_value=""):
            self.assertTrue(self.presenter.acknowledge())
        with mock.patch('builtins.input', side_effect=EOFError):
            self.assertFalse(self.presenter.acknowledge())


class TestSimpleCLI(unittest.TestCase):
    def tearDown(self):
        debug.configure(level=DebugLevel.WARNING)

    def test_benchmark(self):
        cli = SimpleCLI()
        cli.parse_args(['benchmark', '--games', '5', '--seed', '11'])
        with contextlib.redirect_stdout(io.StringIO()) as out:
            tally = cli.benchmark()
        self.assertEqual(sum(tally.values()), 5)
        self.assertIn("Draws:", out.getvalue())

    def test_play_until_end_of_input(self):
        inputs = ["4", "4", "4"]
        with mock.patch('builtins.input', side_effect=inputs + [EOFError()]), \
                contextlib.redirect_stdout(io.StringIO()) as out:
            status = main(['play', '--seed', '2', '--no-color', '--no-clear'])
        self.assertEqual(status, 0)
        self.assertIn("Games finished: 0", out.getvalue())

    def test_no_command(self):
        with contextlib.redirect_stdout(io.StringIO()) as out:
            status = main([])
        self.assertEqual(status, 1)
        self.assertIn("Please specify a command", out.getvalue())

    def test_debug_flag(self):
        SimpleCLI().parse_args(['--debug', 'benchmark'])
        self.assertEqual(debug.level, DebugLevel.DEBUG)


if __name__ == '__main__':
    unittest.main()
