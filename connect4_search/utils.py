"""
utils.py - Constants, value types and helper functions for the Connect Four search engine

This module provides the board geometry, the Turn and Move value types,
board locations, the precomputed four-in-a-row windows and the ASCII
renderer shared by the board, the search tree and the command-line interface.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple, List

import numpy as np

from connect4_search.errors import InvalidArgument, PreconditionViolation

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
EMPTY = 0  # Grid value of an empty cell

# Search constants
DEFAULT_SEARCH_DEPTH = 4

# Node values live in the 32-bit signed range; wins and losses sit at the extremes
MIN_VALUE = int(np.iinfo(np.int32).min)
MAX_VALUE = int(np.iinfo(np.int32).max)


class Turn(Enum):
    """Enumeration of the two players. The value is the grid encoding."""
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Turn':
        """Get the other player."""
        return Turn.TWO if self is Turn.ONE else Turn.ONE

    @property
    def symbol(self) -> str:
        """Display symbol used when rendering boards."""
        return "X" if self is Turn.ONE else "O"

    def __str__(self):
        return self.symbol


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Turn) -> 'GameResult':
        """Get the result recording a win for player."""
        return GameResult.PLAYER_ONE_WIN if player is Turn.ONE else GameResult.PLAYER_TWO_WIN


@dataclass(frozen=True, order=True)
class Move:
    """
    A column a piece can be dropped into.

    Moves compare by column, so sorting them gives left-to-right order.
    """
    column: int

    def __post_init__(self):
        if not (0 <= self.column < COLS):
            raise InvalidArgument(f"Column {self.column} out of range 0..{COLS - 1}")

    def __str__(self):
        return str(self.column)


@dataclass(frozen=True)
class Location:
    """A single cell of the grid."""
    row: int
    col: int

    def is_occupied(self, board) -> bool:
        """Check whether a piece sits in this cell of board."""
        return board.cell(self.row, self.col) != EMPTY

    def get_player(self, board) -> Turn:
        """
        Get the player occupying this cell of board.

        Raises:
            PreconditionViolation: if the cell is empty
        """
        value = board.cell(self.row, self.col)
        if value == EMPTY:
            raise PreconditionViolation(f"Location ({self.row}, {self.col}) is empty")
        return Turn(value)


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def _build_four_in_a_rows() -> Tuple[Tuple[Location, ...], ...]:
    """Enumerate every window of CONNECT_N consecutive cells on the grid."""
    # (row, col) steps: horizontal, vertical, diagonal down-right, diagonal up-right
    directions = [(0, 1), (1, 0), (1, 1), (-1, 1)]
    windows: List[Tuple[Location, ...]] = []
    for dr, dc in directions:
        for row in range(ROWS):
            for col in range(COLS):
                end_row = row + (CONNECT_N - 1) * dr
                end_col = col + (CONNECT_N - 1) * dc
                if not is_valid_position(end_row, end_col):
                    continue
                windows.append(tuple(Location(row + i * dr, col + i * dc)
                                     for i in range(CONNECT_N)))
    return tuple(windows)


FOUR_IN_A_ROWS = _build_four_in_a_rows()

# Fancy-index arrays over FOUR_IN_A_ROWS, shape (len(FOUR_IN_A_ROWS), CONNECT_N)
WINDOW_ROWS = np.array([[loc.row for loc in window] for window in FOUR_IN_A_ROWS], dtype=np.intp)
WINDOW_COLS = np.array([[loc.col for loc in window] for window in FOUR_IN_A_ROWS], dtype=np.intp)


def render_board_ascii(grid: np.ndarray, indent: str = "") -> str:
    """
    Render a grid as ASCII art.

    Args:
        grid: The board grid
        indent: Prefix added to every line

    Returns:
        ASCII representation of the board
    """
    result = [indent + "|" + "-" * (COLS * 2 - 1) + "|"]

    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            cell = grid[row, col]
            cells.append(" " if cell == EMPTY else Turn(int(cell)).symbol)
        result.append(indent + "|" + " ".join(cells) + "|")

    result.append(indent + "|" + "-" * (COLS * 2 - 1) + "|")
    result.append(indent + "|" + " ".join(str(i) for i in range(COLS)) + "|")

    return "\n".join(result)
