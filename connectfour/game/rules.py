"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. GameSession, the turn and game-over state machine for human vs computer play
2. The collaborator protocols a session talks to (input and presentation)
3. A gymnasium-compatible environment where an agent plays against the
   heuristic opponent
"""

from typing import Dict, Optional, Protocol, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connectfour.ai.selector import MoveSelector
from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import WIDTH, HEIGHT, Side, GameResult, IllegalMove


class InputProvider(Protocol):
    """Source of the human player's column choices."""

    exhausted: bool

    def request_column(self) -> Optional[int]:
        """
        Return a 0-based column, or None when nothing usable was entered.

        When None is returned because input has ended, ``exhausted`` is True.
        """
        ...


class Presenter(Protocol):
    """Sink for everything the player should see."""

    def show_board(self, board: Board) -> None:
        ...

    def show_message(self, text: str) -> None:
        ...

    def show_outcome(self, result: GameResult) -> None:
        ...

    def acknowledge(self) -> bool:
        """Wait for the player before a new game; False if input has ended."""
        ...


class GameSession:
    """
    One human side against the automated opponent.

    ``result`` is the state of the session: IN_PROGRESS while moves are
    being played, then a win for one side or DRAW. Finished sessions are not
    resumed; ``reset`` starts a new game on a fresh board.
    """

    automated_side = Side.TWO

    def __init__(self, selector: Optional[MoveSelector] = None):
        """
        Args:
            selector: Move selector for the automated side (a fresh one if None)
        """
        self.selector = selector if selector is not None else MoveSelector()
        self.reset()

    def reset(self) -> None:
        """Start a new game: empty board, Side ONE to move."""
        debug.debug("Starting new game", "game")
        self.board = Board()
        self.active_side = Side.ONE
        self.result = GameResult.IN_PROGRESS

    def is_automated_turn(self) -> bool:
        return self.active_side == self.automated_side

    def apply_move(self, column: int) -> GameResult:
        """
        Play ``column`` for the side to move and advance the state machine.

        Args:
            column: 0-based column

        Returns:
            The session result after the move

        Raises:
            IllegalMove: the column is full or the game is already over; the
                board is left unchanged
        """
        if self.result.is_game_over():
            raise IllegalMove("The game is already over")

        side = self.active_side
        self.board.place(side, column)

        if self.board.has_win(side):
            self.result = GameResult.won_by(side)
            debug.info(f"{side.label} wins with column {column}", "game")
        elif self.board.is_full():
            self.result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")
        else:
            self.active_side = side.other()

        return self.result

    def automated_move(self) -> int:
        """Column the automated side wants to play on the current board."""
        return self.selector.select(self.board, self.automated_side)

    def play_turn(self, input_provider: InputProvider,
                  presenter: Optional[Presenter] = None) -> Optional[GameResult]:
        """
        Play one turn for whichever side is to move.

        The human side is asked again after unusable input or a full column.
        A finished game is left as it is and its result returned.

        Returns:
            The result after the turn, or None if the human's input has ended
        """
        if self.result.is_game_over():
            return self.result

        if self.is_automated_turn():
            return self.apply_move(self.automated_move())

        while True:
            column = input_provider.request_column()
            if column is None:
                if input_provider.exhausted:
                    debug.info("Input ended", "game")
                    return None
                continue

            try:
                return self.apply_move(column)
            except IllegalMove as e:
                debug.debug(f"Rejected move: {e}", "game")
                if presenter is not None:
                    presenter.show_message(str(e))

    def run(self, input_provider: InputProvider, presenter: Presenter,
            max_games: Optional[int] = None) -> int:
        """
        Play games until input ends, the player declines to continue, or
        ``max_games`` games have finished.

        Returns:
            Number of games played to a result
        """
        finished = 0
        while max_games is None or finished < max_games:
            presenter.show_board(self.board)
            result = self.play_turn(input_provider, presenter)
            if result is None:
                break
            if not result.is_game_over():
                continue

            finished += 1
            presenter.show_board(self.board)
            presenter.show_outcome(result)
            if not presenter.acknowledge():
                break
            self.reset()

        return finished


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Side ONE; each step plays the agent's column and then,
    unless the game is over, the heuristic opponent's reply.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 selector: Optional[MoveSelector] = None):
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(WIDTH)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(HEIGHT, WIDTH), dtype=np.int8
        )

        self.session = GameSession(selector)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.selector.reseed(seed)

        self.session.reset()
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        column = int(action)
        board = self.session.board

        if self.session.result.is_game_over():
            debug.warning("step() called after the game ended", "env")
            return self._get_observation(), 0.0, True, False, self._get_info()

        if not (0 <= column < WIDTH and board.can_place(column)):
            debug.warning(f"Invalid action: {column}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        result = self.session.apply_move(column)
        if not result.is_game_over():
            result = self.session.apply_move(self.session.automated_move())

        if result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif result == GameResult.DRAW:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, result.is_game_over(), False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.session.board.render()
        if self.render_mode == "human":
            print(self.session.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.session.board.get_state()

    def _get_info(self) -> Dict:
        board = self.session.board
        valid_moves = board.valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.session.active_side.value,
            'game_result': self.session.result.name,
            'last_move': board.last_move,
            'opponent_tier': (self.session.selector.last_tier.name
                              if self.session.selector.last_tier else None),
        }
