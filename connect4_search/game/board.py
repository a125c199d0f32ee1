"""
board.py - Immutable board representation for Connect Four

This module implements the Board class. A Board never changes once it is
built: applying a move returns a new Board, which lets the search tree keep
one board per node without copying on read.
"""

import numpy as np
from typing import Iterable, List, Optional, Tuple

from connect4_search.debug import debug, DebugLevel
from connect4_search.errors import IllegalMoveError, InvalidArgument
from connect4_search.utils import (ROWS, COLS, EMPTY, FOUR_IN_A_ROWS, WINDOW_ROWS, WINDOW_COLS,
                                   Location, Move, Turn, render_board_ascii)


class Board:
    """
    An immutable Connect Four position.

    The grid is a read-only ``ROWS x COLS`` numpy array. Row 0 is the top of
    the board; dropped pieces come to rest at the highest empty row index.
    """

    __slots__ = ('_grid',)

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Create a board. With no grid the board is empty.

        The board keeps its own copy of grid, so the caller's array is left
        untouched. The values are trusted; use from_grid to validate external input.
        """
        if grid is None:
            grid = np.zeros((ROWS, COLS), dtype=np.int8)
        else:
            grid = np.array(grid, dtype=np.int8)
        grid.flags.writeable = False
        self._grid = grid

    @classmethod
    def _wrap(cls, grid: np.ndarray) -> 'Board':
        """Take ownership of a freshly built int8 grid without copying it."""
        board = cls.__new__(cls)
        grid.flags.writeable = False
        board._grid = grid
        return board

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """
        Build a board from a ROWS x COLS array-like of 0/1/2 values.

        Raises:
            InvalidArgument: if the shape or a cell value is wrong
        """
        array = np.array(grid)
        if array.shape != (ROWS, COLS):
            raise InvalidArgument(f"Grid must have shape {(ROWS, COLS)}, got {array.shape}")
        if array.dtype.kind not in 'iuf' or \
                not np.isin(array, (EMPTY, Turn.ONE.value, Turn.TWO.value)).all():
            raise InvalidArgument("Grid cells must be 0 (empty), 1 or 2")
        return cls._wrap(array.astype(np.int8))

    @classmethod
    def from_string(cls, position: str) -> 'Board':
        """
        Build a board from ROWS*COLS comma-separated cell values, row-major from the top.

        Raises:
            InvalidArgument: if the string cannot be parsed
        """
        try:
            values = [int(c) for c in position.split(',')]
        except ValueError as e:
            raise InvalidArgument(f"Cannot parse position: {e}") from e
        if len(values) != ROWS * COLS:
            raise InvalidArgument(f"Position string must have {ROWS * COLS} values, got {len(values)}")
        return cls.from_grid(np.array(values).reshape(ROWS, COLS))

    @classmethod
    def from_moves(cls, columns: Iterable[int], first: Turn = Turn.ONE) -> 'Board':
        """
        Replay a sequence of column drops, alternating players starting with first.

        Raises:
            InvalidArgument: for a column outside the board
            IllegalMoveError: for a drop into a full column
        """
        board = cls()
        player = first
        for column in columns:
            board = board.apply_move(player, Move(column))
            player = player.other()
        return board

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the grid."""
        return self._grid

    def cell(self, row: int, col: int) -> int:
        """Grid value at (row, col): 0 for empty, otherwise a Turn value."""
        return int(self._grid[row, col])

    def piece_count(self) -> int:
        """Number of pieces on the board."""
        return int(np.count_nonzero(self._grid))

    def next_player(self, first: Turn = Turn.ONE) -> Turn:
        """Player to move, assuming the players alternated starting with first."""
        return first if self.piece_count() % 2 == 0 else first.other()

    def _landing_row(self, column: int) -> int:
        """Row a piece dropped into column would occupy, or -1 if the column is full."""
        empty_rows = np.flatnonzero(self._grid[:, column] == EMPTY)
        return int(empty_rows[-1]) if empty_rows.size else -1

    def apply_move(self, player: Turn, move: Move) -> 'Board':
        """
        Drop a piece for player into move's column.

        Returns:
            The resulting Board; this board is unchanged

        Raises:
            IllegalMoveError: if the column is full
        """
        row = self._landing_row(move.column)
        if row < 0:
            raise IllegalMoveError(f"Column {move.column} is full")

        if debug.is_enabled_for(DebugLevel.TRACE, "board"):
            debug.trace(f"{player} drops into column {move.column} at row {row}", "board")
        grid = self._grid.copy()
        grid[row, move.column] = player.value
        return Board._wrap(grid)

    def get_possible_moves(self) -> List[Move]:
        """
        Get the moves that can be played, in ascending column order.

        A won board still reports its open columns; deciding that a won
        position is terminal is left to the caller.
        """
        return [Move(int(col)) for col in np.flatnonzero(self._grid[0] == EMPTY)]

    def has_connect_four(self) -> Optional[Turn]:
        """
        Get the player owning a complete four-in-a-row, or None.

        If both players somehow own one, the player of the first window found wins.
        """
        windows = self._grid[WINDOW_ROWS, WINDOW_COLS]
        won = (windows[:, 0] != EMPTY) & (windows == windows[:, :1]).all(axis=1)
        hits = np.flatnonzero(won)
        if hits.size == 0:
            return None
        return Turn(int(windows[hits[0], 0]))

    def is_full(self) -> bool:
        """Check whether every cell is occupied."""
        return bool((self._grid[0] != EMPTY).all())

    @staticmethod
    def get_four_in_a_rows() -> Tuple[Tuple[Location, ...], ...]:
        """All windows of four consecutive cells on the grid."""
        return FOUR_IN_A_ROWS

    def render(self, indent: str = "") -> str:
        """
        Render the board as a string.

        Args:
            indent: Prefix for every line

        Returns:
            String representation of the board
        """
        return render_board_ascii(self._grid, indent)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __repr__(self) -> str:
        return f"Board(pieces={self.piece_count()})"

    def __str__(self) -> str:
        return self.render()
