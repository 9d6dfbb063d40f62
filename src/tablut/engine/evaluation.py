"""Position scoring: terminal values and the default material heuristic.

All scores are signed for the defenders: positive favours the defending
side, negative the attackers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Final

from tablut.core.enums import Side

if TYPE_CHECKING:
    from tablut.core.position import Position

Evaluator = Callable[["Position"], int]

# Magnitude of an immediate win. A win found *ply* half-moves deep scores
# WINNING_VALUE - ply, so faster wins are preferred.
WINNING_VALUE: Final = 1_000_000
# Every win reachable within this many plies scores at least WILL_WIN_VALUE,
# which no heuristic value ever reaches.
MAX_PLY: Final = 1_000
WILL_WIN_VALUE: Final = WINNING_VALUE - MAX_PLY


def terminal_score(winner: Side, ply: int) -> int:
    """Score of a decided game reached *ply* half-moves below the root."""
    magnitude = WINNING_VALUE - ply
    return magnitude if winner == Side.DEFENDER else -magnitude


def is_winning_score(score: int) -> bool:
    return abs(score) >= WILL_WIN_VALUE


def material_balance(position: Position) -> int:
    """Defender pieces (royal included) minus attacker pieces."""
    return position.num_pieces(Side.DEFENDER) - position.num_pieces(Side.ATTACKER)
