"""Piece values and their owning side."""

from __future__ import annotations

from enum import IntEnum

from tablut.core.enums import Side


class Piece(IntEnum):
    """Contents of a single square."""

    EMPTY = 0
    ATTACKER = 1
    DEFENDER = 2
    ROYAL = 3

    def __str__(self) -> str:
        """Single display character ('-', 'B', 'W' or 'K')."""
        return _CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its display character, e.g. 'K' → ROYAL."""
        try:
            return _FROM_CHAR[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None


_CHARS: dict[Piece, str] = {
    Piece.EMPTY: "-",
    Piece.ATTACKER: "B",
    Piece.DEFENDER: "W",
    Piece.ROYAL: "K",
}
_FROM_CHAR: dict[str, Piece] = {v: k for k, v in _CHARS.items()}

# ROYAL belongs to the defenders for counting and hostility.
_OWNER: tuple[Side | None, ...] = (None, Side.ATTACKER, Side.DEFENDER, Side.DEFENDER)


def side_of(piece: Piece) -> Side | None:
    """Owning side of *piece*; None for an empty square."""
    return _OWNER[piece]
