"""Zobrist keys for incremental piece-layout hashing."""

from __future__ import annotations

from typing import Final

from tablut.core.piece import Piece
from tablut.core.types import NUM_SQUARES, Square

_SEED: Final = 0x7AB1A7C0DE5EED01
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64(_SEED + index)


# Indexed by Piece value; EMPTY squares contribute nothing.
_PIECE_KEYS: Final = tuple(
    tuple(
        0 if piece == Piece.EMPTY else _nth_key(piece * NUM_SQUARES + sq)
        for sq in range(NUM_SQUARES)
    )
    for piece in Piece
)


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[piece][sq]
