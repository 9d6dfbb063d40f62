"""End-of-game rules: royal capture or escape, immobility, repetition, move limit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from tablut.core.enums import RepetitionWinner, Side, WinReason
from tablut.core.move_generator import MoveGenerator
from tablut.core.types import is_on_edge

if TYPE_CHECKING:
    from tablut.core.position import Position

# Who is awarded the game when a piece layout recurs. SIDE_TO_MOVE means the
# side that did NOT make the repeating move wins.
REPETITION_WINNER_POLICY: Final = RepetitionWinner.SIDE_TO_MOVE


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def moves_made(move_count: int, side: Side) -> int:
        """Moves *side* has played after *move_count* plies, attackers first."""
        attacker_moves = (move_count + 1) // 2
        if side == Side.ATTACKER:
            return attacker_moves
        return move_count - attacker_moves

    @staticmethod
    def is_royal_captured(position: Position) -> bool:
        return position.board.royal_square is None

    @staticmethod
    def has_royal_escaped(position: Position) -> bool:
        royal = position.board.royal_square
        return royal is not None and is_on_edge(royal)

    @staticmethod
    def is_immobilised(position: Position) -> bool:
        """The side to move has no legal move."""
        return not MoveGenerator(position).has_legal_move(position.turn)

    @staticmethod
    def repetition_winner(
        position: Position,
        policy: RepetitionWinner = REPETITION_WINNER_POLICY,
    ) -> Side:
        """Winner when the current layout is a repeat, per *policy*."""
        if policy == RepetitionWinner.SIDE_TO_MOVE:
            return position.turn
        return position.turn.opposite

    @staticmethod
    def exceeds_move_limit(position: Position) -> bool:
        """The side that just moved has gone over the configured limit."""
        limit = position.move_limit
        if limit is None:
            return False
        return Rules.moves_made(position.move_count, position.turn.opposite) > limit

    @staticmethod
    def decided_outcome(position: Position) -> tuple[Side, WinReason] | None:
        """Outcome from the piece layout alone: capture, escape or immobility."""
        if Rules.is_royal_captured(position):
            return Side.ATTACKER, WinReason.KING_CAPTURED
        if Rules.has_royal_escaped(position):
            return Side.DEFENDER, WinReason.KING_ESCAPED
        if Rules.is_immobilised(position):
            return position.turn.opposite, WinReason.NO_MOVES
        return None
