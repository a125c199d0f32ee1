"""
cli.py - Command-line interface for the Connect Four search engine

This module provides a CLI for playing against the minimax player,
analysing a position with the search and benchmarking the search.
"""

import argparse
import random
import sys
from typing import List, Optional

from connect4_search.ai.minimax import MinimaxPlayer
from connect4_search.ai.state import State
from connect4_search.debug import debug, DebugLevel
from connect4_search.errors import InvalidArgument, SearchError
from connect4_search.game.board import Board
from connect4_search.game.rules import ConnectFourGame
from connect4_search.utils import COLS, DEFAULT_SEARCH_DEPTH, MAX_VALUE, MIN_VALUE, Move, Turn

# Special human inputs
QUIT, UNDO, RESTART = -1, -2, -3


def parse_columns(text: str) -> List[int]:
    """Parse a comma-separated list of columns ("" gives an empty list)."""
    text = text.strip()
    if not text:
        return []
    return [int(c) for c in text.split(',')]


def describe_value(value: int) -> str:
    """Human-readable form of a node value."""
    if value == MAX_VALUE:
        return f"{value} (forced win)"
    if value == MIN_VALUE:
        return f"{value} (forced loss)"
    return str(value)


class SimpleCLI:
    """Simple command-line interface for the search engine."""

    def __init__(self):
        """Initialize the CLI."""
        self.game = ConnectFourGame()
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true', help='Enable debug logging')
        common.add_argument('--debug-level', choices=[level.name.lower() for level in DebugLevel],
                            default='warning', help='Logging level (default: warning)')
        common.add_argument('--log-file', type=str, help='Also write the log to this file')
        common.add_argument('--depth', type=int, default=DEFAULT_SEARCH_DEPTH,
                            help=f'Search depth in plies (default: {DEFAULT_SEARCH_DEPTH})')
        common.add_argument('--no-pruning', action='store_true',
                            help='Disable alpha-beta pruning')

        parser = argparse.ArgumentParser(description='Connect Four search engine')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[common],
                                            help='Play a game against the search')
        play_parser.add_argument('--first', choices=['human', 'ai'], default='human',
                                 help='Who moves first (default: human)')

        analyze_parser = subparsers.add_parser('analyze', parents=[common],
                                               help='Search a position and report the preferred move')
        analyze_parser.add_argument('--moves', type=str, default='',
                                    help='Comma-separated columns played from the empty board')
        analyze_parser.add_argument('--position', type=str,
                                    help='Comma-separated cell values (0/1/2), row-major from the top')
        analyze_parser.add_argument('--to-move', choices=['x', 'o'],
                                    help='Side to move (default: inferred from the piece count)')
        analyze_parser.add_argument('--dump', action='store_true',
                                    help='Print the whole search tree')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                                 help='Benchmark the search')
        benchmark_parser.add_argument('--iterations', type=int, default=10,
                                      help='Number of random positions to search')
        benchmark_parser.add_argument('--seed', type=int, default=None, help='Random seed')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        parser = self.build_parser()
        self.args = parser.parse_args(argv)

        if self.args.command is None:
            return

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments. Returns the exit status."""
        if not self.args:
            self.parse_args(argv)

        handlers = {
            'play': self.play_game,
            'analyze': self.analyze_position,
            'benchmark': self.benchmark,
        }
        handler = handlers.get(self.args.command)
        if handler is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            handler()
        except SearchError as e:
            debug.error(f"{self.args.command} failed: {e}", "cli")
            print(f"Error: {e}")
            return 1
        return 0

    def make_player(self, ai: Turn) -> MinimaxPlayer:
        return MinimaxPlayer(ai, depth=self.args.depth, alpha_beta=not self.args.no_pruning)

    def play_game(self) -> None:
        """Play a game against the minimax player."""
        human = Turn.ONE if self.args.first == 'human' else Turn.TWO
        player = self.make_player(human.other())

        print("Starting a new Connect Four game!")
        print(f"You play {human}, the AI plays {player.ai} (search depth {player.depth}).")
        print(f"Enter column number (0-{COLS - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        self.game.reset()
        print(self.game.render())

        while not self.game.is_game_over():
            if self.game.get_current_player() == human:
                move = self.get_human_move()

                if move is None:
                    continue
                elif move == QUIT:
                    print("Quitting game.")
                    return
                elif move == UNDO:
                    self.undo_to_human()
                    player.reset()
                    print(self.game.render())
                    continue
                elif move == RESTART:
                    self.game.reset()
                    player.reset()
                    print("Game restarted.")
                    print(self.game.render())
                    continue
            else:
                print("AI is thinking...")
                move = player.get_move(self.game.board, player.ai).column
                print(f"AI plays column {move} (value {describe_value(player.last_value)})")

            if self.game.make_move(move):
                player.observe(Move(move))
                print(self.game.render())
            else:
                print(f"Invalid move: {move}")

        print("Game over!")
        winner = self.game.get_winner()
        if winner == human:
            print("You win! Congratulations!")
        elif winner is not None:
            print("AI wins! Better luck next time.")
        else:
            print("It's a draw!")

    def undo_to_human(self) -> None:
        """Undo moves until it is the human's turn again, one full round back."""
        human = self.game.get_current_player()
        undone = 0
        while self.game.undo_move():
            undone += 1
            if self.game.get_current_player() == human:
                break
        if undone:
            print(f"Undid {undone} move(s).")
        else:
            print("No moves to undo.")

    def get_human_move(self) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, or special command code, or None if invalid input
        """
        user_input = input(f"Your move (columns 0-{COLS - 1}, q/u/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        elif user_input == 'u':
            return UNDO
        elif user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None

        if 0 <= move < COLS:
            return move
        print(f"Column must be between 0 and {COLS - 1}.")
        return None

    def load_position(self) -> Board:
        """Build the board described by --position or --moves."""
        if self.args.position:
            return Board.from_string(self.args.position)
        try:
            columns = parse_columns(self.args.moves)
        except ValueError as e:
            raise InvalidArgument(f"Cannot parse moves: {e}") from e
        return Board.from_moves(columns)

    def analyze_position(self) -> None:
        """Search a position and print the preferred move."""
        if self.args.depth < 1:
            raise InvalidArgument(f"Search depth must be >= 1, got {self.args.depth}")
        board = self.load_position()
        if self.args.to_move:
            to_move = Turn.ONE if self.args.to_move == 'x' else Turn.TWO
        else:
            to_move = board.next_player()

        print("Position:")
        print(board.render())

        winner = board.has_connect_four()
        if winner is not None:
            print(f"{winner} has already won.")
            return
        if board.is_full():
            print("The board is full: draw.")
            return

        root = State(to_move, board, to_move)
        root.expand_up_to(self.args.depth)
        value = root.compute_minimax(alpha_beta=not self.args.no_pruning)
        move = root.get_preferred_move()

        print(f"{to_move} to move, search depth {self.args.depth}")
        print(f"Value: {describe_value(value)}")
        print(f"Preferred move: column {move}")
        print(f"Tree size: {root.count_nodes()} nodes")

        if self.args.dump:
            print()
            print(root.dump())

    def benchmark(self) -> None:
        """Time the search on random positions, with and without pruning."""
        if self.args.iterations < 1:
            raise InvalidArgument(f"Iterations must be >= 1, got {self.args.iterations}")
        rng = random.Random(self.args.seed)
        print(f"Running benchmark with {self.args.iterations} positions at depth {self.args.depth}...")

        boards = []
        for _ in range(self.args.iterations):
            game = ConnectFourGame()
            for _ in range(rng.randint(0, 12)):
                valid_moves = game.get_valid_moves()
                if not valid_moves:
                    break
                game.make_move(rng.choice(valid_moves))
            if game.is_game_over():
                game.undo_move()
            boards.append((game.board, game.get_current_player()))

        for alpha_beta in (True, False):
            label = "alpha-beta" if alpha_beta else "plain minimax"
            searched = 0
            expanded = 0
            debug.start_timer(label)
            for board, to_move in boards:
                debug.reset_counters()
                root = State(to_move, board, to_move)
                root.expand_up_to(self.args.depth)
                root.compute_minimax(alpha_beta=alpha_beta)
                root.get_preferred_move()
                searched += debug.get_counter("nodes_searched")
                expanded += debug.get_counter("nodes_expanded")
            elapsed = debug.end_timer(label, "cli")
            print(f"{label}: {elapsed:.3f} seconds total, "
                  f"{elapsed / len(boards) * 1000:.2f} ms per position, "
                  f"{expanded} nodes expanded, {searched} nodes searched")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
