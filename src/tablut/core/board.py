"""Board - piece placement on a 9x9 board."""

from __future__ import annotations

from typing import Final

from tablut.core.enums import Side
from tablut.core.piece import Piece
from tablut.core.types import (
    BOARD_SIZE,
    NUM_SQUARES,
    THRONE,
    Square,
    make_square,
    parse_square,
)
from tablut.core.zobrist import piece_key

INITIAL_ATTACKERS: Final[tuple[Square, ...]] = tuple(
    parse_square(name)
    for name in (
        "a4", "a5", "a6", "b5",
        "i4", "i5", "i6", "h5",
        "d1", "e1", "f1", "e2",
        "d9", "e9", "f9", "e8",
    )
)
INITIAL_DEFENDERS: Final[tuple[Square, ...]] = tuple(
    parse_square(name)
    for name in ("e6", "f5", "e4", "d5", "e7", "e3", "c5", "g5")
)

_PIECE_COUNT = len(Piece)


class Board:
    """Mutable 81-square board with incremental piece indexes."""

    __slots__ = ("_squares", "_piece_bitboards", "_royal_square", "_key")

    def __init__(self) -> None:
        self._squares: list[Piece] = [Piece.EMPTY] * NUM_SQUARES
        # [piece] -> bitboard of occupied squares (index 0 unused).
        self._piece_bitboards: list[int] = [0] * _PIECE_COUNT
        self._royal_square: Square | None = None
        # Zobrist key of the piece layout.
        self._key = 0

    @staticmethod
    def _squares_from_bitboard(bitboard: int) -> list[Square]:
        squares: list[Square] = []
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece) -> None:
        old_piece = self._squares[sq]
        if old_piece == piece:
            return

        mask = 1 << sq

        if old_piece != Piece.EMPTY:
            self._piece_bitboards[old_piece] &= ~mask
            self._key ^= piece_key(old_piece, sq)
            if old_piece == Piece.ROYAL and self._royal_square == sq:
                self._royal_square = None

        self._squares[sq] = piece

        if piece == Piece.EMPTY:
            return

        self._piece_bitboards[piece] |= mask
        self._key ^= piece_key(piece, sq)
        if piece == Piece.ROYAL:
            self._royal_square = sq

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] == Piece.EMPTY

    # -- Query helpers ------------------------------------------------------

    def pieces(self, piece: Piece) -> list[Square]:
        """Squares occupied by *piece*, in ascending square order."""
        return self._squares_from_bitboard(self._piece_bitboards[piece])

    def side_bitboard(self, side: Side) -> int:
        """Bitboard of all squares occupied by *side* (ROYAL is a defender)."""
        if side == Side.ATTACKER:
            return self._piece_bitboards[Piece.ATTACKER]
        return self._piece_bitboards[Piece.DEFENDER] | self._piece_bitboards[Piece.ROYAL]

    def side_squares(self, side: Side) -> list[Square]:
        """All squares occupied by *side*, in ascending square order."""
        return self._squares_from_bitboard(self.side_bitboard(side))

    def count(self, side: Side) -> int:
        """Number of pieces belonging to *side*."""
        return self.side_bitboard(side).bit_count()

    @property
    def royal_square(self) -> Square | None:
        """Square of the royal piece, or None once it has been captured."""
        return self._royal_square

    @property
    def layout_key(self) -> int:
        """Zobrist key of the piece layout (independent of side to move)."""
        return self._key

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._piece_bitboards = self._piece_bitboards.copy()
        b._royal_square = self._royal_square
        b._key = self._key
        return b

    def copy_from(self, other: Board) -> None:
        """Overwrite this placement with *other*'s, keeping object identity."""
        self._squares = other._squares.copy()
        self._piece_bitboards = other._piece_bitboards.copy()
        self._royal_square = other._royal_square
        self._key = other._key

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for sq in INITIAL_ATTACKERS:
            b[sq] = Piece.ATTACKER
        for sq in INITIAL_DEFENDERS:
            b[sq] = Piece.DEFENDER
        b[THRONE] = Piece.ROYAL
        return b

    # -- Rendering ----------------------------------------------------------

    def render(self, coordinates: bool = True) -> str:
        """Text grid, row 9 at the top, optionally with row/column labels."""
        rows: list[str] = []
        for row in range(BOARD_SIZE - 1, -1, -1):
            label = f"{row + 1:2d} " if coordinates else ""
            cells = " ".join(str(self[make_square(col, row)]) for col in range(BOARD_SIZE))
            rows.append(label + cells)
        if coordinates:
            rows.append("   " + " ".join("abcdefghi"))
        return "\n".join(rows)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return self.render()
