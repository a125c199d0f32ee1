"""
connect4_search.ai - Game-tree search for Connect Four

This package provides the search tree (State), the static evaluator and
the MinimaxPlayer that drives them.
"""

from connect4_search.ai.evaluation import evaluate_board
from connect4_search.ai.state import State
from connect4_search.ai.minimax import MinimaxPlayer

__all__ = ['State', 'MinimaxPlayer', 'evaluate_board']
