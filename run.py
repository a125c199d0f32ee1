#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four search engine

Examples:
    python run.py play --depth 5
    python run.py analyze --moves 3,3,4 --depth 4 --dump
    python run.py benchmark --iterations 20
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect4_search.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
