"""
connect4_search.interfaces - User interfaces for the Connect Four search engine

This package contains the command-line interface.
"""

# Don't import anything here to avoid circular imports
__all__ = []
