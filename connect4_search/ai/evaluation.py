"""
evaluation.py - Static evaluation of Connect Four positions

Leaves of the search tree that are neither won nor full are scored by
counting pieces over every four-in-a-row window: +1 for each of the AI's
pieces, -1 for each of the opponent's. A piece is counted once per window it
belongs to, so central pieces, which sit in more windows, weigh more.
"""

from connect4_search.game.board import Board
from connect4_search.utils import Turn


def evaluate_board(board: Board, ai: Turn) -> int:
    """
    Heuristic desirability of board for ai.

    Args:
        board: The position to score
        ai: The player the score favours

    Returns:
        Sum over all windows and their cells of 0 (empty), +1 (ai) or -1 (opponent)
    """
    total = 0
    for window in Board.get_four_in_a_rows():
        for loc in window:
            if loc.is_occupied(board):
                total += 1 if loc.get_player(board) is ai else -1
    return total
