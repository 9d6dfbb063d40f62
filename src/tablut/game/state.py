"""Game state machine — tracks phase transitions and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from tablut.core.enums import Side, WinReason
from tablut.core.move import Move
from tablut.core.notation import move_to_str, position_from_encoded
from tablut.core.position import Position
from tablut.core.types import Square
from tablut.game.interfaces import GamePhase


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    side: Side
    captured: tuple[Square, ...] = ()

    @property
    def was_capture(self) -> bool:
        return bool(self.captured)


@dataclass
class GameState:
    """Manages game lifecycle: phase, outcome and move history.

    This is a pure data/logic class — no threading, no UI.
    """

    position: Position = field(default_factory=Position.initial, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_encoded: str | None = field(default=None, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, encoded: str | None = None, move_limit: int | None = None) -> None:
        """Initialise (or reset) the game, from *encoded* if given."""
        self.start_encoded = encoded
        if encoded is None:
            self.position = Position.initial()
            self.position.set_move_limit(move_limit)
        else:
            self.position = position_from_encoded(encoded, move_limit=move_limit)
        self.phase = GamePhase.AWAITING_MOVE
        self.move_history.clear()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a move and return the history record.

        Raises:
            IllegalMoveError: if *move* is not legal; nothing is recorded.
        """
        side = self.position.turn
        captured = self.position.make_move(move)
        record = MoveRecord(
            move=move,
            notation=move_to_str(move),
            side=side,
            captured=tuple(captured),
        )
        self.move_history.append(record)

        if self.position.winner is not None:
            self.phase = GamePhase.GAME_OVER
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.position.undo()
        if self.position.winner is None:
            self.phase = GamePhase.AWAITING_MOVE
        return record.move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Side:
        return self.position.turn

    @property
    def winner(self) -> Side | None:
        return self.position.winner

    @property
    def end_reason(self) -> WinReason | None:
        return self.position.end_reason

    @property
    def repeated(self) -> bool:
        return self.position.repeated

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of moves played since setup."""
        return len(self.move_history)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return self.position.legal_moves()
