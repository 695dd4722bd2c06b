"""
connectfour - Connect Four against a heuristic computer opponent

This package provides the board model, the one-move-lookahead opponent,
the turn-by-turn game session and a console front end.
"""

# Version number
__version__ = '0.1.0'
