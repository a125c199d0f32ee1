"""Tests for the immutable Board and its value types."""

import numpy as np
import pytest

from connect4_search.errors import IllegalMoveError, InvalidArgument, PreconditionViolation
from connect4_search.game.board import Board
from connect4_search.utils import ROWS, COLS, Location, Move, Turn


class TestTurnAndMove:

    def test_other_is_an_involution(self):
        for turn in Turn:
            assert turn.other() is not turn
            assert turn.other().other() is turn

    def test_symbols(self):
        assert Turn.ONE.symbol == "X"
        assert str(Turn.TWO) == "O"

    def test_moves_order_by_column(self):
        moves = [Move(4), Move(0), Move(6), Move(2)]
        assert sorted(moves) == [Move(0), Move(2), Move(4), Move(6)]
        assert Move(3) == Move(3)
        assert Move(1) < Move(2)

    @pytest.mark.parametrize("column", [-1, COLS])
    def test_move_out_of_range(self, column):
        with pytest.raises(InvalidArgument):
            Move(column)


class TestBoardMoves:

    def test_empty_board(self):
        board = Board()
        assert board.piece_count() == 0
        assert board.get_possible_moves() == [Move(c) for c in range(COLS)]
        assert not board.is_full()
        assert board.has_connect_four() is None

    def test_apply_move_returns_new_board(self):
        board = Board()
        after = board.apply_move(Turn.ONE, Move(3))
        assert board.piece_count() == 0
        assert after.piece_count() == 1
        assert after.cell(ROWS - 1, 3) == Turn.ONE.value

    def test_pieces_stack(self):
        board = Board.from_moves([3, 3])
        assert board.cell(ROWS - 1, 3) == Turn.ONE.value
        assert board.cell(ROWS - 2, 3) == Turn.TWO.value
        assert board.next_player() is Turn.ONE

    def test_full_column_is_not_possible(self):
        board = Board.from_moves([2] * ROWS)
        assert Move(2) not in board.get_possible_moves()
        assert len(board.get_possible_moves()) == COLS - 1
        with pytest.raises(IllegalMoveError):
            board.apply_move(Turn.ONE, Move(2))

    def test_illegal_move_is_a_precondition_violation(self):
        board = Board.from_moves([0] * ROWS)
        with pytest.raises(PreconditionViolation):
            board.apply_move(Turn.TWO, Move(0))

    def test_grid_is_read_only(self):
        board = Board()
        with pytest.raises(ValueError):
            board.grid[0, 0] = 1

    def test_equality_and_hash(self):
        a = Board.from_moves([3, 4])
        b = Board().apply_move(Turn.ONE, Move(3)).apply_move(Turn.TWO, Move(4))
        assert a == b
        assert hash(a) == hash(b)
        assert a != Board.from_moves([4, 3])


class TestBoardConstruction:

    def test_from_string(self):
        values = [0] * (ROWS * COLS)
        values[-1] = 2
        board = Board.from_string(",".join(str(v) for v in values))
        assert board.cell(ROWS - 1, COLS - 1) == Turn.TWO.value
        assert board.piece_count() == 1

    def test_from_string_wrong_length(self):
        with pytest.raises(InvalidArgument):
            Board.from_string("0,1,2")

    def test_from_string_not_numbers(self):
        with pytest.raises(InvalidArgument):
            Board.from_string(",".join(["x"] * (ROWS * COLS)))

    def test_from_grid_rejects_bad_values(self):
        grid = np.zeros((ROWS, COLS), dtype=int)
        grid[0, 0] = 3
        with pytest.raises(InvalidArgument):
            Board.from_grid(grid)

    @pytest.mark.parametrize("value", [300, -129, 1.5, "x", None])
    def test_from_grid_rejects_out_of_range_values(self, value):
        grid = [[0] * COLS for _ in range(ROWS)]
        grid[2][4] = value
        with pytest.raises(InvalidArgument):
            Board.from_grid(grid)

    def test_from_grid_accepts_lists(self):
        grid = [[0] * COLS for _ in range(ROWS)]
        grid[ROWS - 1][0] = 2
        board = Board.from_grid(grid)
        assert board.cell(ROWS - 1, 0) == Turn.TWO.value
        assert board.grid.dtype == np.int8

    def test_caller_array_stays_writable(self):
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        for board in (Board(grid), Board.from_grid(grid)):
            assert grid.flags.writeable
            grid[ROWS - 1, 0] = Turn.ONE.value
            assert board.piece_count() == 0
            grid[ROWS - 1, 0] = 0

    def test_from_grid_rejects_bad_shape(self):
        with pytest.raises(InvalidArgument):
            Board.from_grid(np.zeros((ROWS, COLS + 1)))


class TestWinDetection:

    def _board(self, cells, player=Turn.ONE):
        grid = np.zeros((ROWS, COLS), dtype=int)
        for row, col in cells:
            grid[row, col] = player.value
        return Board.from_grid(grid)

    def test_horizontal(self):
        board = self._board([(ROWS - 1, c) for c in range(4)])
        assert board.has_connect_four() is Turn.ONE

    def test_vertical(self):
        board = self._board([(r, 3) for r in range(ROWS - 1, ROWS - 5, -1)], Turn.TWO)
        assert board.has_connect_four() is Turn.TWO

    def test_diagonal_up(self):
        board = self._board([(ROWS - 1 - i, i) for i in range(4)])
        assert board.has_connect_four() is Turn.ONE

    def test_diagonal_down(self):
        board = self._board([(i, i + 3) for i in range(4)], Turn.TWO)
        assert board.has_connect_four() is Turn.TWO

    def test_three_is_not_a_win(self):
        board = self._board([(ROWS - 1, c) for c in range(3)])
        assert board.has_connect_four() is None

    def test_broken_line_is_not_a_win(self):
        board = self._board([(ROWS - 1, c) for c in (0, 1, 3, 4)])
        assert board.has_connect_four() is None

    def test_won_board_still_reports_moves(self, x_to_win):
        won = x_to_win.apply_move(Turn.ONE, Move(3))
        assert won.has_connect_four() is Turn.ONE
        assert len(won.get_possible_moves()) == COLS


class TestFullBoard:

    def test_drawn_board(self, drawn_board):
        assert drawn_board.is_full()
        assert drawn_board.has_connect_four() is None
        assert drawn_board.get_possible_moves() == []


class TestFourInARows:

    def test_window_count(self):
        # 24 horizontal, 21 vertical and 12 along each diagonal direction
        windows = Board.get_four_in_a_rows()
        assert len(windows) == 69
        assert all(len(window) == 4 for window in windows)
        assert len(set(windows)) == len(windows)

    def test_location_player(self):
        board = Board.from_moves([5])
        loc = Location(ROWS - 1, 5)
        assert loc.is_occupied(board)
        assert loc.get_player(board) is Turn.ONE

    def test_empty_location_has_no_player(self):
        loc = Location(0, 0)
        assert not loc.is_occupied(Board())
        with pytest.raises(PreconditionViolation):
            loc.get_player(Board())


class TestRendering:

    def test_render_with_indent(self):
        text = Board.from_moves([0, 6]).render("  ")
        lines = text.splitlines()
        assert len(lines) == ROWS + 3
        assert all(line.startswith("  |") for line in lines)
        assert lines[ROWS] == "  |X           O|"
        assert lines[-1] == "  |0 1 2 3 4 5 6|"
