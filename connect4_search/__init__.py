"""
connect4_search - Game-tree search engine for Connect Four

This package provides an immutable Connect Four board, a lazily expanded
game tree with minimax and alpha-beta pruning, a static position evaluator,
and a command-line interface for playing against and analysing with the
search.
"""

# Version number
__version__ = '0.2.0'
