"""
connectfour.ai - The automated opponent

This package holds the heuristic move selector used for the computer side.
"""

from connectfour.ai.selector import MoveSelector, MoveTier

__all__ = ['MoveSelector', 'MoveTier']
