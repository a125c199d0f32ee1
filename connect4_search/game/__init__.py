"""
connect4_search.game - Board and game bookkeeping for Connect Four

This package contains the immutable board the search engine expands and
the game record used by drivers to play moves.
"""

from connect4_search.game.board import Board
from connect4_search.game.rules import ConnectFourGame

__all__ = ['Board', 'ConnectFourGame']
