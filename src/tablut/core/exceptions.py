"""Exceptions raised by the Tablut core and engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tablut.core.move import Move


class TablutError(Exception):
    """Base class for all Tablut errors."""


class IllegalMoveError(TablutError, ValueError):
    """A move was applied that is not legal in the current position."""

    def __init__(self, move: Move, reason: str = "illegal move") -> None:
        super().__init__(f"{reason}: {move.long}")
        self.move = move


class MoveLimitError(TablutError, ValueError):
    """A move limit was rejected because it is invalid for the current game."""


class SearchError(TablutError, RuntimeError):
    """The search reached a state the rules should have made impossible."""
