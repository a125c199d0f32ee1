"""Shared fixtures for the connect4_search tests."""

import numpy as np
import pytest

from connect4_search.debug import debug, DebugLevel
from connect4_search.game.board import Board
from connect4_search.utils import ROWS, COLS, Turn


def drawn_grid() -> np.ndarray:
    """
    A full grid with no four-in-a-row.

    Rows read XXOOXXO / OOXXOOX alternately, so no line of four is uniform.
    """
    grid = np.zeros((ROWS, COLS), dtype=np.int8)
    for row in range(ROWS):
        for col in range(COLS):
            grid[row, col] = Turn.ONE.value if (col // 2 + row) % 2 == 0 else Turn.TWO.value
    return grid


@pytest.fixture
def drawn_board() -> Board:
    return Board.from_grid(drawn_grid())


@pytest.fixture
def x_to_win() -> Board:
    """X holds columns 0-2 of the bottom row and is to move; column 3 wins."""
    return Board.from_moves([0, 0, 1, 1, 2, 6])


@pytest.fixture(autouse=True)
def quiet_debug():
    debug.configure(level=DebugLevel.WARNING)
    debug.reset_counters()
    yield
    debug.reset_counters()
