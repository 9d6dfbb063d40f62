"""Capture resolution after a piece lands on a square."""

from __future__ import annotations

from tablut.core.board import Board
from tablut.core.enums import Side
from tablut.core.piece import Piece, side_of
from tablut.core.types import (
    THRONE,
    THRONE_AREA,
    THRONE_NEIGHBORS,
    Square,
    beyond,
    neighbors,
)

_THRONE_HOSTILE_ATTACKERS = 3


class CaptureResolver:
    """Applies the capture rules around a destination square.

    *mover* is the side that has just moved. Pieces of the opposite side
    next to the destination are sandwiched against a hostile square; the
    royal piece inside the throne area must instead be surrounded.
    """

    __slots__ = ("_board", "_mover")

    def __init__(self, board: Board, mover: Side) -> None:
        self._board = board
        self._mover = mover

    def resolve(self, dest: Square) -> list[Square]:
        """Remove every piece captured by the move to *dest*.

        Returns the squares that were emptied, in N, E, S, W order.
        """
        board = self._board
        victim_side = self._mover.opposite
        captured: list[Square] = []

        for nb in neighbors(dest):
            piece = board[nb]
            if side_of(piece) != victim_side:
                continue

            if piece == Piece.ROYAL and nb in THRONE_AREA:
                if self.is_royal_surrounded(nb):
                    board[nb] = Piece.EMPTY
                    captured.append(nb)
                continue

            far = beyond(dest, nb)
            if far is not None and self.is_hostile(far):
                board[nb] = Piece.EMPTY
                captured.append(nb)

        return captured

    def is_hostile(self, sq: Square) -> bool:
        """Whether *sq* closes a sandwich against the mover's opponent."""
        piece = self._board[sq]
        if sq == THRONE:
            if piece == Piece.EMPTY:
                return True
            if piece == Piece.ROYAL and self._mover == Side.ATTACKER:
                return self._throne_attackers() == _THRONE_HOSTILE_ATTACKERS
        return side_of(piece) == self._mover

    def is_royal_surrounded(self, sq: Square) -> bool:
        """Whether the royal piece on *sq* has a hostile square on all four sides.

        Only attackers and the empty throne count. All four neighbours are
        examined regardless of the order they come in.
        """
        board = self._board
        adjacent = neighbors(sq)
        hostile = 0
        for nb in adjacent:
            piece = board[nb]
            if piece == Piece.ATTACKER or (nb == THRONE and piece == Piece.EMPTY):
                hostile += 1
        return hostile == len(adjacent) == 4

    def _throne_attackers(self) -> int:
        board = self._board
        return sum(1 for nb in THRONE_NEIGHBORS if board[nb] == Piece.ATTACKER)
