"""Core domain layer — pure Tablut rules with zero external dependencies.

Quick start::

    from tablut.core import Position, parse_move

    pos = Position.initial()
    pos.make_move(parse_move("d1-3"))
    for move in pos.legal_moves():
        print(move)
"""

from tablut.core.board import Board
from tablut.core.captures import CaptureResolver
from tablut.core.enums import Direction, RepetitionWinner, Side, WinReason
from tablut.core.exceptions import (
    IllegalMoveError,
    MoveLimitError,
    SearchError,
    TablutError,
)
from tablut.core.history import HistoryTracker, PositionSnapshot
from tablut.core.move import Move
from tablut.core.move_generator import MoveGenerator
from tablut.core.notation import (
    STARTING_ENCODED,
    board_from_rows,
    move_to_str,
    parse_move,
    position_from_encoded,
    position_to_encoded,
)
from tablut.core.piece import Piece, side_of
from tablut.core.position import Position
from tablut.core.rules import REPETITION_WINNER_POLICY, Rules
from tablut.core.types import (
    THRONE,
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums
    "Direction",
    "RepetitionWinner",
    "Side",
    "WinReason",
    # Types / helpers
    "THRONE",
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    # Domain objects
    "Board",
    "CaptureResolver",
    "HistoryTracker",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "PositionSnapshot",
    "REPETITION_WINNER_POLICY",
    "Rules",
    "side_of",
    # Errors
    "IllegalMoveError",
    "MoveLimitError",
    "SearchError",
    "TablutError",
    # Notation
    "STARTING_ENCODED",
    "board_from_rows",
    "move_to_str",
    "parse_move",
    "position_from_encoded",
    "position_to_encoded",
]
