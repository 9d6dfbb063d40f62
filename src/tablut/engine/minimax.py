"""Minimax search with alpha-beta pruning and iterative deepening."""

from __future__ import annotations

import logging
from time import perf_counter, sleep

from tablut.core.enums import Side
from tablut.core.exceptions import SearchError
from tablut.core.move import Move
from tablut.core.position import Position
from tablut.core.rules import Rules
from tablut.engine.evaluation import Evaluator, material_balance, terminal_score
from tablut.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 10_000_000
_YIELD_EVERY_NODES = 4096


def _never_cancelled() -> bool:
    return False


class _SearchAborted(Exception):
    """Raised inside the tree when the deadline passes or the caller cancels."""


class MinimaxEngine(IEngine):
    """Depth-limited minimax over a private copy of the caller's position.

    Defender-to-move nodes maximise and attacker-to-move nodes minimise the
    defender-signed score. Moves are tried in generation order and only a
    strictly better score replaces the current best, so ties keep the
    earliest move.
    """

    __slots__ = (
        "_evaluator",
        "_cancel_check",
        "_deadline",
        "_nodes",
        "_last_yield_nodes",
    )

    def __init__(self, evaluator: Evaluator = material_balance) -> None:
        self._evaluator = evaluator
        self._nodes = 0
        self._last_yield_nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    # -- Public API ---------------------------------------------------------

    def search(
        self,
        position: Position,
        limits: SearchLimits | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Best move for the side to move in *position*.

        *position* is never mutated. A position that is already decided, by
        its recorded winner or by its layout (royal gone or on the edge, side
        to move without a legal move), returns its terminal score and no
        move. If the time limit runs out or *is_cancelled* returns True, the
        move from the last fully searched depth is returned (depth 0 and the
        first legal move when none finished).

        Raises:
            ValueError: if ``limits.max_depth`` is not positive.
            SearchError: if a position reached inside the tree is undecided
                but has no legal move.
        """
        if limits is None:
            limits = SearchLimits()
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        board = position.full_copy()
        winner = board.winner
        if winner is None:
            # Positions set up directly have not been judged yet.
            outcome = Rules.decided_outcome(board)
            if outcome is not None:
                winner = outcome[0]
        if winner is not None:
            return SearchResult(None, terminal_score(winner, 0), 0, 0)

        root_moves = board.legal_moves()

        best_move = root_moves[0]
        best_score = self._evaluator(board)
        completed_depth = 0

        for depth in range(1, limits.max_depth + 1):
            try:
                score, move = self._search_root(board, root_moves, depth)
            except _SearchAborted:
                _LOGGER.debug("Search stopped during depth %d", depth)
                break

            best_move = move
            best_score = score
            completed_depth = depth
            _LOGGER.debug(
                "depth %d: best %s score %d nodes %d",
                depth,
                move,
                score,
                self._nodes,
            )

        return SearchResult(best_move, best_score, completed_depth, self._nodes)

    def find_move(self, position: Position, depth: int | None = None) -> Move | None:
        """Best move at *depth* (default depth of :class:`SearchLimits`).

        Returns None when the game in *position* is already decided.
        """
        limits = SearchLimits() if depth is None else SearchLimits(max_depth=depth)
        return self.search(position, limits).best_move

    # -- Tree search (private) ----------------------------------------------

    def _search_root(
        self,
        board: Position,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[int, Move]:
        maximizing = board.turn == Side.DEFENDER
        best_score = -_INF_SCORE if maximizing else _INF_SCORE
        best_move = root_moves[0]
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            board.make_move(move)
            try:
                score = self._minimax(board, depth - 1, alpha, beta, ply=1)
            finally:
                board.undo()

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

        return best_score, best_move

    def _minimax(
        self,
        board: Position,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        if self._should_stop():
            raise _SearchAborted

        self._nodes += 1

        if board.winner is not None:
            return terminal_score(board.winner, ply)
        if depth <= 0:
            return self._evaluator(board)

        moves = board.legal_moves()
        if not moves:
            raise SearchError(
                f"No legal move for the {board.turn} and no winner declared"
            )

        maximizing = board.turn == Side.DEFENDER
        best_score = -_INF_SCORE if maximizing else _INF_SCORE

        for move in moves:
            board.make_move(move)
            try:
                score = self._minimax(board, depth - 1, alpha, beta, ply + 1)
            finally:
                board.undo()

            if maximizing:
                best_score = max(best_score, score)
                alpha = max(alpha, score)
            else:
                best_score = min(best_score, score)
                beta = min(beta, score)
            if alpha >= beta:
                break

        return best_score

    def _should_stop(self) -> bool:
        # Give other threads (the Qt event loop) a chance to run.
        if self._nodes - self._last_yield_nodes >= _YIELD_EVERY_NODES:
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() >= self._deadline
