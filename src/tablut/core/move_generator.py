"""Legal move generation for rook-moving Tablut pieces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tablut.core.enums import Direction, Side
from tablut.core.move import Move
from tablut.core.piece import Piece
from tablut.core.types import NUM_SQUARES, THRONE, Square, step

if TYPE_CHECKING:
    from tablut.core.position import Position


# -- Precomputed lookup tables ---------------------------------------------


def _build_rays() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(NUM_SQUARES):
        square_rays: list[tuple[Square, ...]] = []
        for direction in Direction:
            ray: list[Square] = []
            current = step(sq, direction)
            while current is not None:
                ray.append(current)
                current = step(current, direction)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


# [square][direction] -> squares walked outward, nearest first.
_ROOK_RAYS = _build_rays()


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Pure with respect to the position: nothing is mutated.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, side: Side | None = None) -> list[Move]:
        """All legal moves for *side* (default: the side to move).

        Ordered by origin square, then direction N, E, S, W, then distance.
        """
        if side is None:
            side = self._pos.turn
        moves: list[Move] = []
        for sq in self._board.side_squares(side):
            self._gen_rook(sq, moves)
        return moves

    def moves_from(self, sq: Square) -> list[Move]:
        """Legal destinations for whatever piece stands on *sq*."""
        moves: list[Move] = []
        if not self._board.is_empty(sq):
            self._gen_rook(sq, moves)
        return moves

    def has_legal_move(self, side: Side) -> bool:
        """Whether *side* can move at all. Stops at the first move found."""
        board = self._board
        for sq in board.side_squares(side):
            royal = board[sq] == Piece.ROYAL
            for ray in _ROOK_RAYS[sq]:
                for to_sq in ray:
                    if to_sq == THRONE:
                        if not board.is_empty(to_sq):
                            break
                        if not royal:
                            continue
                    if board.is_empty(to_sq):
                        return True
                    break
        return False

    # -- Generators (private) ----------------------------------------------

    def _gen_rook(self, sq: Square, moves: list[Move]) -> None:
        board = self._board
        royal = board[sq] == Piece.ROYAL
        for ray in _ROOK_RAYS[sq]:
            for to_sq in ray:
                if to_sq == THRONE:
                    # An occupied throne blocks everyone; only ROYAL may stop on it.
                    if not board.is_empty(to_sq):
                        break
                    if not royal:
                        continue
                if not board.is_empty(to_sq):
                    break
                moves.append(Move(sq, to_sq))
