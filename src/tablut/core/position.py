"""Position — complete game state (board + metadata) with make/undo."""

from __future__ import annotations

import logging

from tablut.core.board import Board
from tablut.core.captures import CaptureResolver
from tablut.core.enums import Side, WinReason
from tablut.core.exceptions import IllegalMoveError, MoveLimitError
from tablut.core.history import HistoryTracker, PositionSnapshot
from tablut.core.move import Move
from tablut.core.move_generator import MoveGenerator
from tablut.core.piece import Piece, side_of
from tablut.core.rules import Rules
from tablut.core.types import (
    NUM_SQUARES,
    THRONE,
    Square,
    direction_between,
    is_valid_square,
    square_name,
    squares_between,
)

_LOGGER = logging.getLogger(__name__)


class Position:
    """Full Tablut position: board + side to move + counters + outcome.

    Every applied move pushes a snapshot onto the position's own
    :class:`HistoryTracker`, which also remembers every layout reached so far
    for repetition detection. History is never shared between positions:
    :meth:`copy` starts a fresh history rooted at the copied state, while
    :meth:`full_copy` duplicates the whole history. A board passed to the
    constructor is copied.
    """

    __slots__ = (
        "board",
        "turn",
        "move_count",
        "winner",
        "repeated",
        "end_reason",
        "_move_limit",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        turn: Side = Side.ATTACKER,
        move_count: int = 0,
        move_limit: int | None = None,
    ) -> None:
        self.board = board.copy() if board is not None else Board.initial()
        self.turn = turn
        self.move_count = move_count
        self.winner: Side | None = None
        self.repeated = False
        self.end_reason: WinReason | None = None
        self._move_limit: int | None = None
        self._history = HistoryTracker(self._snapshot())
        if move_limit is not None:
            self.set_move_limit(move_limit)

    @classmethod
    def initial(cls) -> Position:
        """The canonical starting position, attackers to move."""
        return cls()

    def init(self) -> None:
        """Reset to the starting layout, clear history and lift the move limit."""
        self.board = Board.initial()
        self.turn = Side.ATTACKER
        self.move_count = 0
        self.winner = None
        self.repeated = False
        self.end_reason = None
        self._move_limit = None
        self._history = HistoryTracker(self._snapshot())

    # ── Direct access ────────────────────────────────────────────────────

    def get(self, sq: Square) -> Piece:
        return self.board[sq]

    def put(self, piece: Piece, sq: Square) -> None:
        """Place *piece* on *sq* without any legality check."""
        self.board[sq] = piece

    # ── Legality ─────────────────────────────────────────────────────────

    def is_legal(self, from_sq: Square, to_sq: Square | None = None) -> bool:
        """Whether *from_sq* holds a piece of the side to move and, when
        *to_sq* is given, whether from-to is an unblocked rook move that
        does not end on the throne (unless the mover is royal).
        """
        if not is_valid_square(from_sq):
            return False
        if side_of(self.board[from_sq]) != self.turn:
            return False
        if to_sq is None:
            return True
        if not is_valid_square(to_sq):
            return False
        if to_sq == THRONE and self.board[from_sq] != Piece.ROYAL:
            return False
        return self.is_unblocked_move(from_sq, to_sq)

    def is_legal_move(self, move: Move) -> bool:
        return self.is_legal(move.from_sq, move.to_sq)

    def is_unblocked_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether from-to is a rook move over empty squares, *to_sq* included."""
        if direction_between(from_sq, to_sq) is None:
            return False
        board = self.board
        if not board.is_empty(to_sq):
            return False
        return all(board.is_empty(sq) for sq in squares_between(from_sq, to_sq))

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> list[Square]:
        """Apply *move*, resolve captures and outcome, and record history.

        Returns the squares whose pieces were captured.

        Raises:
            IllegalMoveError: if *move* is not legal here. Nothing is changed.
        """
        if not self.is_legal_move(move):
            raise IllegalMoveError(move)

        board = self.board
        board[move.to_sq] = board[move.from_sq]
        board[move.from_sq] = Piece.EMPTY

        captured = CaptureResolver(board, self.turn).resolve(move.to_sq)
        if captured:
            _LOGGER.debug(
                "%s captures on %s",
                move,
                ", ".join(square_name(sq) for sq in captured),
            )

        self.turn = self.turn.opposite
        self.move_count += 1
        self._update_outcome()
        self._history.push(self._snapshot())
        return captured

    def undo(self) -> None:
        """Undo the last :meth:`make_move`. Has no effect at the root."""
        previous = self._history.pop()
        if previous is None:
            return
        self._restore(previous)

    # ── Outcome bookkeeping ──────────────────────────────────────────────

    def _update_outcome(self) -> None:
        # The first outcome decided in a line of play is kept.
        if self.winner is None:
            outcome = Rules.decided_outcome(self)
            if outcome is not None:
                self._declare(*outcome)

        if self._history.has_seen(self.board):
            self.repeated = True
            if self.winner is None:
                self._declare(Rules.repetition_winner(self), WinReason.REPETITION)

        if self.winner is None and Rules.exceeds_move_limit(self):
            self._declare(self.turn, WinReason.MOVE_LIMIT)

    def _declare(self, winner: Side, reason: WinReason) -> None:
        self.winner = winner
        self.end_reason = reason

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, side: Side | None = None) -> list[Move]:
        """All legal moves for *side* (default: side to move)."""
        return MoveGenerator(self).generate_legal_moves(side)

    def has_legal_move(self, side: Side) -> bool:
        return MoveGenerator(self).has_legal_move(side)

    def king_position(self) -> Square | None:
        return self.board.royal_square

    def num_pieces(self, side: Side) -> int:
        """Pieces *side* has on the board; the royal piece counts as a defender."""
        return self.board.count(side)

    def moves_made(self, side: Side) -> int:
        return Rules.moves_made(self.move_count, side)

    @property
    def move_limit(self) -> int | None:
        return self._move_limit

    def set_move_limit(self, limit: int | None) -> None:
        """Cap the number of moves per side; None lifts the cap.

        Raises:
            MoveLimitError: if *limit* is negative or already exceeded,
                i.e. ``2 * limit < move_count``. The limit is unchanged.
        """
        if limit is not None:
            if limit < 0:
                raise MoveLimitError(f"Move limit must be non-negative, got {limit}")
            if 2 * limit < self.move_count:
                raise MoveLimitError(
                    f"Move limit {limit} is too small: {self.move_count} moves "
                    "already played"
                )
        self._move_limit = limit

    @property
    def layout_key(self) -> int:
        """Zobrist key of the piece layout."""
        return self.board.layout_key

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def is_game_over(self) -> bool:
        return self.winner is not None

    # ── Copies ───────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Snapshot copy: same state, fresh history rooted at this state."""
        pos = Position.__new__(Position)
        pos._load(self._snapshot())
        pos._move_limit = self._move_limit
        pos._history = HistoryTracker(pos._snapshot())
        return pos

    def full_copy(self) -> Position:
        """Independent copy including the undo stack and seen layouts."""
        pos = Position.__new__(Position)
        pos._load(self._snapshot())
        pos._move_limit = self._move_limit
        pos._history = self._history.copy()
        return pos

    # ── Rendering ────────────────────────────────────────────────────────

    def render(self, coordinates: bool = True) -> str:
        return self.board.render(coordinates)

    def encoded(self) -> str:
        """Side to move ('B' or 'W') followed by 81 piece chars, a1 first."""
        side_char = "B" if self.turn == Side.ATTACKER else "W"
        return side_char + "".join(str(self.board[sq]) for sq in range(NUM_SQUARES))

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.turn == other.turn
            and self.move_count == other.move_count
            and self.winner == other.winner
            and self.repeated == other.repeated
        )

    __hash__ = None  # type: ignore[assignment]

    # ── Snapshot helpers ─────────────────────────────────────────────────

    def _snapshot(self) -> PositionSnapshot:
        return PositionSnapshot(
            board=self.board.copy(),
            turn=self.turn,
            move_count=self.move_count,
            winner=self.winner,
            repeated=self.repeated,
            end_reason=self.end_reason,
        )

    def _restore(self, snapshot: PositionSnapshot) -> None:
        self.board.copy_from(snapshot.board)
        self.turn = snapshot.turn
        self.move_count = snapshot.move_count
        self.winner = snapshot.winner
        self.repeated = snapshot.repeated
        self.end_reason = snapshot.end_reason

    def _load(self, snapshot: PositionSnapshot) -> None:
        self.board = snapshot.board.copy()
        self.turn = snapshot.turn
        self.move_count = snapshot.move_count
        self.winner = snapshot.winner
        self.repeated = snapshot.repeated
        self.end_reason = snapshot.end_reason
