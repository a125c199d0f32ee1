"""
state.py - Lazily expanded game tree with minimax and alpha-beta pruning

A State is one node of the search tree: a board, the player to move on it
and the player the search is working for (the AI). Children are created on
demand by expand_up_to, values are filled in by compute_minimax, and
get_preferred_move reads the result back out.

Typical use by a driver:

    root = State(ai=Turn.TWO, board=board, player=Turn.TWO)
    root.expand_up_to(4)
    root.compute_minimax()
    move = root.get_preferred_move()
"""

import itertools
from typing import Dict, Optional, Tuple

from connect4_search.ai.evaluation import evaluate_board
from connect4_search.debug import debug, DebugLevel
from connect4_search.errors import InvalidArgument, PreconditionViolation
from connect4_search.game.board import Board
from connect4_search.utils import MIN_VALUE, MAX_VALUE, Move, Turn

# Each compute_minimax call stamps the nodes it visits with a fresh pass number
_minimax_passes = itertools.count(1)


class State:
    """
    A node of the game tree.

    The node owns its children outright; nothing else refers to them. The
    only fields that change after construction are the children mapping,
    which goes once from unexpanded to a fixed set of moves, and the value,
    which every minimax pass overwrites.
    """

    __slots__ = ('_ai', '_board', '_player', '_children', '_value', '_pass')

    def __init__(self, ai: Turn, board: Board, player: Turn):
        """
        Create an unexpanded node.

        Args:
            ai: The player whose outcome the values measure
            board: Position at this node
            player: Player to move on board
        """
        self._ai = ai
        self._board = board
        self._player = player
        # None until expanded; afterwards a dict in ascending Move order
        self._children: Optional[Dict[Move, 'State']] = None
        self._value: Optional[int] = None
        self._pass = 0

    @property
    def ai(self) -> Turn:
        return self._ai

    @property
    def board(self) -> Board:
        return self._board

    @property
    def player(self) -> Turn:
        return self._player

    @property
    def is_expanded(self) -> bool:
        """Whether children have been created for this node."""
        return self._children is not None

    @property
    def children(self) -> Tuple[Tuple[Move, 'State'], ...]:
        """
        (move, child) pairs in ascending move order.

        Raises:
            PreconditionViolation: if the node is not expanded
        """
        self._require_expanded("children")
        return tuple(self._children.items())

    @property
    def value(self) -> int:
        """
        Value stored by the last minimax pass that reached this node.

        Raises:
            PreconditionViolation: if no minimax pass has reached this node
        """
        if self._value is None:
            raise PreconditionViolation("Minimax has not been computed for this state")
        return self._value

    def _require_expanded(self, operation: str) -> None:
        if self._children is None:
            raise PreconditionViolation(f"{operation} requires an expanded state")

    def get_child(self, move: Move) -> 'State':
        """
        Get the child reached by move.

        Raises:
            PreconditionViolation: if the node is not expanded or move is not possible here
        """
        self._require_expanded("get_child")
        try:
            return self._children[move]
        except KeyError:
            raise PreconditionViolation(f"Move {move} is not possible from this state") from None

    def expand_up_to(self, depth: int) -> None:
        """
        Make sure the subtree below this node is materialised for depth plies.

        Existing children are kept and only the frontier grows, so calling
        this again with the same or a smaller depth changes nothing.

        Args:
            depth: Number of plies to expand; 0 does nothing

        Raises:
            InvalidArgument: if depth is negative
        """
        if depth < 0:
            raise InvalidArgument(f"Expansion depth must be >= 0, got {depth}")
        if depth == 0:
            return

        if self._children is None:
            next_player = self._player.other()
            self._children = {
                move: State(self._ai, self._board.apply_move(self._player, move), next_player)
                for move in sorted(self._board.get_possible_moves())
            }
            debug.increment("nodes_expanded", len(self._children))
            if debug.is_enabled_for(DebugLevel.TRACE, "search"):
                debug.trace(f"Expanded {self._player} to move: {len(self._children)} children", "search")

        for child in self._children.values():
            child.expand_up_to(depth - 1)

    def compute_minimax(self, alpha_beta: bool = True) -> int:
        """
        Compute and store the value of this node and the nodes below it.

        In order of priority a node is worth: MAX_VALUE or MIN_VALUE if its
        board has a four-in-a-row for the AI or the opponent; 0 if the board
        is full; the static evaluation if it is unexpanded; otherwise the
        maximum (AI to move) or minimum (opponent to move) of its children.

        With alpha_beta, children that cannot change the result are skipped
        and keep whatever value they had before.

        Args:
            alpha_beta: Prune with an alpha-beta window; False visits every node

        Returns:
            The value stored for this node
        """
        pass_id = next(_minimax_passes)
        value = self._minimax(MIN_VALUE, MAX_VALUE, alpha_beta, pass_id)
        debug.debug(f"Minimax pass {pass_id} (alpha-beta {alpha_beta}): value {value}", "search")
        return value

    def _cutoff(self, move: Move, alpha: int, beta: int) -> None:
        if debug.is_enabled_for(DebugLevel.TRACE, "search"):
            debug.trace(f"Cutoff after column {move} for {self._player} (alpha {alpha}, beta {beta})", "search")

    def _minimax(self, alpha: int, beta: int, prune: bool, pass_id: int) -> int:
        debug.increment("nodes_searched")
        self._pass = pass_id

        winner = self._board.has_connect_four()
        if winner is not None:
            self._value = MAX_VALUE if winner is self._ai else MIN_VALUE
        elif self._board.is_full():
            self._value = 0
        elif self._children is None:
            self._value = self.compute_board_value()
        elif self._player is self._ai:
            best = MIN_VALUE
            for move, child in self._children.items():
                best = max(best, child._minimax(alpha, beta, prune, pass_id))
                if prune:
                    alpha = max(alpha, best)
                    if alpha >= beta:
                        self._cutoff(move, alpha, beta)
                        break
            self._value = best
        else:
            best = MAX_VALUE
            for move, child in self._children.items():
                best = min(best, child._minimax(alpha, beta, prune, pass_id))
                if prune:
                    beta = min(beta, best)
                    if alpha >= beta:
                        self._cutoff(move, alpha, beta)
                        break
            self._value = best

        return self._value

    def compute_board_value(self) -> int:
        """Static evaluation of this node's board for the AI."""
        return evaluate_board(self._board, self._ai)

    def get_preferred_move(self) -> Optional[Move]:
        """
        Get the move whose child carries this node's value.

        Children are scanned left to right and the first match wins, so ties
        go to the leftmost column. Only children visited by the same minimax
        pass as this node are considered.

        Returns:
            The preferred move, or None if no visited child matches

        Raises:
            PreconditionViolation: if the node is unexpanded, has no value yet
                or has no possible moves
        """
        self._require_expanded("get_preferred_move")
        value = self.value
        if not self._children:
            raise PreconditionViolation("No moves are possible from this state")

        for move, child in self._children.items():
            if child._pass == self._pass and child._value == value:
                return move
        return None

    def count_nodes(self) -> int:
        """Number of nodes in the materialised subtree, this one included."""
        if not self._children:
            return 1
        return 1 + sum(child.count_nodes() for child in self._children.values())

    def dump(self) -> str:
        """Indented description of this node and its whole subtree."""
        return self._dump(0, "")

    def _dump(self, depth: int, indent: str) -> str:
        mover = "AI" if self._player is self._ai else "Opponent"
        lines = [
            f"{indent}{mover} will play next on the board below as {self._player.symbol}",
            f"{indent}Value: {'not computed' if self._value is None else self._value}",
            self._board.render(indent),
        ]
        if self._children:
            lines.append(f"{indent}Children at depth {depth + 1}:")
            lines.append(f"{indent}----------------")
            for child in self._children.values():
                lines.append(child._dump(depth + 1, indent + "   "))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.dump()

    def __repr__(self) -> str:
        return (f"State(ai={self._ai.name}, player={self._player.name}, "
                f"expanded={self.is_expanded}, value={self._value})")
