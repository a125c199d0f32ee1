"""
rules.py - Game state management for Connect Four

This module provides ConnectFourGame, the record of a game being played:
the current board, whose turn it is, the result so far and the history
needed to undo moves. The search engine never touches it; the driver
applies the search's chosen move here.
"""

from typing import List, Optional

from connect4_search.debug import debug
from connect4_search.errors import SearchError
from connect4_search.utils import Turn, GameResult, Move
from connect4_search.game.board import Board


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Boards are immutable, so the history is just the list of earlier boards.
    """

    def __init__(self, first: Turn = Turn.ONE):
        """
        Initialize a new Connect Four game.

        Args:
            first: Player who moves first
        """
        debug.debug("Initializing ConnectFourGame", "game")
        self.first = first
        self.reset()

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board = Board()
        self.current_player = self.first
        self.game_result = GameResult.IN_PROGRESS
        self.history: List[Board] = []
        self.moves_made: List[Move] = []

    def make_move(self, column: int) -> bool:
        """
        Make a move for the current player.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was made, False if it was not legal
        """
        if self.game_result.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result})", "game")
            return False

        try:
            move = Move(column)
            board = self.board.apply_move(self.current_player, move)
        except SearchError as e:
            debug.debug(f"Invalid move: {e}", "game")
            return False

        self.history.append(self.board)
        self.moves_made.append(move)
        self.board = board
        self._update_result()

        if not self.game_result.is_game_over():
            self.current_player = self.current_player.other()
            debug.debug(f"Switching to player {self.current_player}", "game")

        return True

    def _update_result(self) -> None:
        winner = self.board.has_connect_four()
        if winner is not None:
            self.game_result = GameResult.win_for(winner)
            debug.info(f"Player {winner} wins after move in column {self.moves_made[-1]}", "game")
        elif self.board.is_full():
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        debug.debug("Undoing last move", "game")
        self.board = self.history.pop()
        self.moves_made.pop()
        # The mover of the undone move is to play again
        self.current_player = self.first if len(self.moves_made) % 2 == 0 else self.first.other()
        self.game_result = GameResult.IN_PROGRESS
        return True

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Turn]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Turn.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Turn.TWO
        return None

    def get_current_player(self) -> Turn:
        """Get the player to move."""
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        """Get the playable columns (empty once the game is over)."""
        if self.game_result.is_game_over():
            return []
        return [move.column for move in self.board.get_possible_moves()]

    def render(self) -> str:
        """Render the game as a string."""
        return self.board.render()
