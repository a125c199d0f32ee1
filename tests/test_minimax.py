"""Tests for MinimaxPlayer: move choice, statistics and tree reuse."""

import pytest

from connect4_search.ai.minimax import MinimaxPlayer
from connect4_search.errors import InvalidArgument, PreconditionViolation
from connect4_search.game.board import Board
from connect4_search.game.rules import ConnectFourGame
from connect4_search.utils import Move, Turn


class TestMinimaxPlayer:

    def test_depth_must_be_positive(self):
        with pytest.raises(InvalidArgument):
            MinimaxPlayer(Turn.ONE, depth=0)

    def test_takes_immediate_win(self, x_to_win):
        player = MinimaxPlayer(Turn.ONE, depth=3)
        assert player.get_move(x_to_win) == Move(3)
        assert player.last_value == player.root.value

    def test_blocks_opponent_threat(self):
        board = Board.from_moves([0, 6, 1, 6, 2])
        player = MinimaxPlayer(Turn.TWO, depth=2)
        assert player.get_move(board) == Move(3)

    def test_opening_move_is_centre(self):
        player = MinimaxPlayer(Turn.ONE, depth=1)
        assert player.get_move(Board()) == Move(3)

    def test_same_choice_without_pruning(self):
        board = Board.from_moves([3, 3, 2])
        pruned = MinimaxPlayer(Turn.TWO, depth=3).get_move(board)
        full = MinimaxPlayer(Turn.TWO, depth=3, alpha_beta=False).get_move(board)
        assert pruned == full

    def test_records_statistics(self):
        player = MinimaxPlayer(Turn.ONE, depth=2, alpha_beta=False)
        player.get_move(Board())
        assert player.nodes_expanded == 7 + 49
        assert player.nodes_searched == 1 + 7 + 49

    def test_full_board_has_no_move(self, drawn_board):
        player = MinimaxPlayer(Turn.ONE, depth=2)
        with pytest.raises(PreconditionViolation):
            player.get_move(drawn_board)

    def test_won_board_falls_back_to_first_move(self, x_to_win):
        won = x_to_win.apply_move(Turn.ONE, Move(3))
        player = MinimaxPlayer(Turn.TWO, depth=1)
        assert player.get_move(won) == Move(0)


class TestTreeReuse:

    def test_observe_follows_played_moves(self):
        board = Board.from_moves([3])
        player = MinimaxPlayer(Turn.TWO, depth=2)
        move = player.get_move(board)

        reply = Move(0)
        grandchild = player.root.get_child(move).get_child(reply)
        player.observe(move)
        player.observe(reply)
        assert player.root is grandchild

        next_board = board.apply_move(Turn.TWO, move).apply_move(Turn.ONE, reply)
        player.get_move(next_board)
        assert player.root is grandchild
        assert grandchild.is_expanded

    def test_mismatched_position_starts_fresh(self):
        player = MinimaxPlayer(Turn.ONE, depth=1)
        player.get_move(Board())
        old_root = player.root
        player.get_move(Board.from_moves([0, 0]))
        assert player.root is not old_root

    def test_observe_beyond_tree_drops_it(self):
        player = MinimaxPlayer(Turn.ONE, depth=1)
        player.get_move(Board())
        player.observe(Move(3))
        player.observe(Move(3))
        assert player.root is None
        player.observe(Move(3))
        assert player.root is None

    def test_reset(self):
        player = MinimaxPlayer(Turn.ONE, depth=1)
        player.get_move(Board())
        player.reset()
        assert player.root is None


class TestSelfPlay:

    def test_game_runs_to_completion(self):
        game = ConnectFourGame()
        players = {
            Turn.ONE: MinimaxPlayer(Turn.ONE, depth=2),
            Turn.TWO: MinimaxPlayer(Turn.TWO, depth=1),
        }
        while not game.is_game_over():
            mover = game.get_current_player()
            move = players[mover].get_move(game.board, mover)
            assert game.make_move(move.column)
            for player in players.values():
                player.observe(move)

        assert game.is_game_over()
        assert len(game.moves_made) <= 42
