"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation and the game session
state machine. GameSession lives in connectfour.game.rules and is not
re-exported here because it depends on connectfour.ai.
"""

from connectfour.game.board import Board

__all__ = ['Board']
