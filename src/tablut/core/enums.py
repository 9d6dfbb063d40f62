"""Core enumerations for the Tablut domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Side(IntEnum):
    """The two opposing sides. Attackers move first."""

    ATTACKER = 0
    DEFENDER = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class Direction(IntEnum):
    """Orthogonal directions in generation order."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def delta(self) -> tuple[int, int]:
        """(column, row) offset of one step."""
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}


class WinReason(IntEnum):
    """Why a game ended."""

    KING_CAPTURED = auto()
    KING_ESCAPED = auto()
    NO_MOVES = auto()
    REPETITION = auto()
    MOVE_LIMIT = auto()


class RepetitionWinner(IntEnum):
    """Which side is awarded the game when a layout repeats."""

    SIDE_TO_MOVE = auto()
    SIDE_THAT_MOVED = auto()
