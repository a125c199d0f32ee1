"""
errors.py - Exception types for the Connect Four search engine

Every error raised by the library is a caller contract violation. They
subclass the matching builtin so callers can also catch them generically.
"""


class SearchError(Exception):
    """Base class for all errors raised by connect4_search."""


class InvalidArgument(SearchError, ValueError):
    """An argument is outside its allowed range (negative depth, bad column, bad grid)."""


class PreconditionViolation(SearchError, RuntimeError):
    """An operation was called on an object that is not in the required state."""


class IllegalMoveError(PreconditionViolation):
    """A move was applied to a column that cannot take another piece."""
