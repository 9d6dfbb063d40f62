"""Tablut rule engine, minimax search and game layer."""

__version__ = "0.1.0"
