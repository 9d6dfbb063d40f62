"""Per-position undo stack and repetition record."""

from __future__ import annotations

from dataclasses import dataclass

from tablut.core.board import Board
from tablut.core.enums import Side, WinReason


@dataclass(slots=True)
class PositionSnapshot:
    """Full state saved after each move so it can be restored on undo."""

    board: Board
    turn: Side
    move_count: int
    winner: Side | None
    repeated: bool
    end_reason: WinReason | None

    @property
    def layout_key(self) -> int:
        return self.board.layout_key


class HistoryTracker:
    """Chronological snapshot stack plus a multiset of seen piece layouts.

    The bottom of the stack is the root state the history was started from;
    it is never popped. Layouts are keyed by placement only, so the same
    arrangement reached with a different side to move still counts as seen.
    """

    __slots__ = ("_stack", "_seen")

    def __init__(self, root: PositionSnapshot) -> None:
        self._stack: list[PositionSnapshot] = [root]
        self._seen: dict[int, int] = {root.layout_key: 1}

    def push(self, snapshot: PositionSnapshot) -> None:
        self._stack.append(snapshot)
        key = snapshot.layout_key
        self._seen[key] = self._seen.get(key, 0) + 1

    def pop(self) -> PositionSnapshot | None:
        """Drop the latest snapshot and return the one now on top.

        Returns None (and changes nothing) when only the root is left.
        """
        if len(self._stack) <= 1:
            return None
        snapshot = self._stack.pop()
        key = snapshot.layout_key
        count = self._seen[key] - 1
        if count:
            self._seen[key] = count
        else:
            del self._seen[key]
        return self._stack[-1]

    def has_seen(self, board: Board) -> bool:
        """Whether *board*'s piece layout is already recorded.

        The layout key only narrows the search; a hit is confirmed square by
        square against the recorded boards, so a key collision never counts
        as a repetition.
        """
        key = board.layout_key
        if key not in self._seen:
            return False
        return any(
            snapshot.board == board
            for snapshot in self._stack
            if snapshot.layout_key == key
        )

    @property
    def can_undo(self) -> bool:
        return len(self._stack) > 1

    def copy(self) -> HistoryTracker:
        """Independent copy; snapshots are immutable once pushed so they are shared."""
        tracker = HistoryTracker.__new__(HistoryTracker)
        tracker._stack = self._stack.copy()
        tracker._seen = self._seen.copy()
        return tracker
