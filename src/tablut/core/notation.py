"""Move notation and the encoded single-position text form.

Moves are written ``d1-d3`` (both squares), ``d1-3`` (same column, target
row) or ``e1-c`` (same row, target column). An encoded position is the side
to move (``B`` attackers, ``W`` defenders) followed by the 81 piece chars in
square-index order, a1 first.
"""

from __future__ import annotations

import re

from tablut.core.board import Board
from tablut.core.enums import Side
from tablut.core.move import Move
from tablut.core.piece import Piece
from tablut.core.position import Position
from tablut.core.types import NUM_SQUARES, make_square, parse_square

_MOVE_RE = re.compile(r"^([a-i][1-9])-(?:([a-i][1-9])|([1-9])|([a-i]))$")

_SIDE_CHARS: dict[str, Side] = {"B": Side.ATTACKER, "W": Side.DEFENDER}

STARTING_ENCODED = Position.initial().encoded()


# -- Moves ------------------------------------------------------------------


def parse_move(text: str) -> Move:
    """Parse move notation such as ``d1-d3``, ``d1-3`` or ``e1-c``.

    Raises:
        ValueError: if *text* is malformed or not a rook move.
    """
    match = _MOVE_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid move notation: {text!r}")

    start, full, row_digit, col_letter = match.groups()
    from_sq = parse_square(start)
    if full is not None:
        to_sq = parse_square(full)
    elif row_digit is not None:
        to_sq = parse_square(start[0] + row_digit)
    else:
        to_sq = parse_square(col_letter + start[1])
    return Move(from_sq, to_sq)


def move_to_str(move: Move) -> str:
    """Abbreviated notation, e.g. ``d1-3``."""
    return str(move)


# -- Encoded positions --------------------------------------------------------


def position_from_encoded(text: str, move_limit: int | None = None) -> Position:
    """Build a :class:`Position` from its encoded text form.

    The result starts with an empty history rooted at the decoded layout.
    """
    if len(text) != NUM_SQUARES + 1:
        raise ValueError(
            f"Encoded position must be {NUM_SQUARES + 1} characters, got {len(text)}"
        )

    side = _SIDE_CHARS.get(text[0])
    if side is None:
        raise ValueError(f"Invalid side-to-move character: {text[0]!r}")

    board = Board()
    royals = 0
    for sq, char in enumerate(text[1:]):
        piece = Piece.from_char(char)
        if piece == Piece.ROYAL:
            royals += 1
        board[sq] = piece
    if royals > 1:
        raise ValueError(f"Encoded position has {royals} royal pieces")

    return Position(board, turn=side, move_limit=move_limit)


def position_to_encoded(position: Position) -> str:
    return position.encoded()


def board_from_rows(rows: list[str]) -> Board:
    """Board from nine text rows of piece chars, row 9 first.

    Spaces inside a row are ignored, so ``render(coordinates=False)`` output
    can be read back.
    """
    if len(rows) != 9:
        raise ValueError(f"Expected 9 rows, got {len(rows)}")
    board = Board()
    for index, line in enumerate(rows):
        cells = line.replace(" ", "")
        if len(cells) != 9:
            raise ValueError(f"Row {9 - index} must have 9 squares: {line!r}")
        row = 8 - index
        for col, char in enumerate(cells):
            board[make_square(col, row)] = Piece.from_char(char)
    return board
