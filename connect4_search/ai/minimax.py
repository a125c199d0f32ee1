"""
minimax.py - Minimax player for Connect Four

This module provides MinimaxPlayer, which picks moves for one side by
growing a State tree to a fixed depth, running minimax with alpha-beta
pruning over it and reading back the preferred move.

The player keeps its tree between turns. After each move is played,
observe() moves the root down to the matching child so the next search only
has to expand the new frontier.
"""

from typing import Optional

from connect4_search.ai.state import State
from connect4_search.debug import debug
from connect4_search.errors import InvalidArgument, PreconditionViolation
from connect4_search.game.board import Board
from connect4_search.utils import DEFAULT_SEARCH_DEPTH, Move, Turn


class MinimaxPlayer:
    """
    A Connect Four player that searches the game tree with minimax.

    The search looks ``depth`` plies ahead and assumes the opponent picks
    the move that is worst for this player.
    """

    def __init__(self, ai: Turn, depth: int = DEFAULT_SEARCH_DEPTH, alpha_beta: bool = True):
        """
        Initialize the minimax player.

        Args:
            ai: The side this player moves for
            depth: Search depth in plies (higher = stronger but slower)
            alpha_beta: Whether to prune the search
        """
        if depth < 1:
            raise InvalidArgument(f"Search depth must be >= 1, got {depth}")
        self.ai = ai
        self.depth = depth
        self.alpha_beta = alpha_beta
        self.root: Optional[State] = None
        # Statistics of the last search
        self.nodes_expanded = 0
        self.nodes_searched = 0
        self.last_value: Optional[int] = None

    def _root_for(self, board: Board, player: Turn) -> State:
        """Reuse the kept tree if it matches the position, otherwise start a new one."""
        if self.root is not None and self.root.player is player and self.root.board == board:
            debug.debug(f"Reusing search tree of {self.root.count_nodes()} nodes", "player")
            return self.root
        debug.debug("Starting a new search tree", "player")
        return State(self.ai, board, player)

    def get_move(self, board: Board, player: Optional[Turn] = None) -> Move:
        """
        Get the preferred move on board.

        Args:
            board: The current position
            player: Side to move (defaults to this player's side)

        Returns:
            The chosen move

        Raises:
            PreconditionViolation: if board has no possible moves
        """
        player = self.ai if player is None else player
        if not board.get_possible_moves():
            raise PreconditionViolation("No moves are possible on this board")

        self.root = self._root_for(board, player)
        debug.reset_counters()

        debug.start_timer("expand")
        self.root.expand_up_to(self.depth)
        debug.end_timer("expand", "player")

        debug.start_timer("minimax")
        self.last_value = self.root.compute_minimax(alpha_beta=self.alpha_beta)
        debug.end_timer("minimax", "player")

        self.nodes_expanded = debug.get_counter("nodes_expanded")
        self.nodes_searched = debug.get_counter("nodes_searched")

        move = self.root.get_preferred_move()
        if move is None:
            # Only reachable when the root is already decided (e.g. a won board)
            move = self.root.board.get_possible_moves()[0]
            debug.warning(f"No child matches root value {self.last_value}, playing {move}", "player")

        debug.info(f"{self.ai} plays column {move} (value {self.last_value}, "
                   f"{self.nodes_expanded} nodes expanded, {self.nodes_searched} searched)", "player")
        return move

    def observe(self, move: Move) -> None:
        """
        Follow a move that was played, keeping the subtree below it.

        Args:
            move: The move just played, by either side
        """
        if self.root is None:
            return
        if self.root.is_expanded:
            try:
                self.root = self.root.get_child(move)
                return
            except PreconditionViolation:
                debug.warning(f"Move {move} not in search tree, discarding it", "player")
        self.root = None

    def reset(self) -> None:
        """Forget the kept search tree."""
        self.root = None
