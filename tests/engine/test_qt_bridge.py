"""Tests for the Qt engine worker."""

from __future__ import annotations

from collections.abc import Callable

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtTest import QSignalSpy  # noqa: E402

from tablut.core.exceptions import SearchError  # noqa: E402
from tablut.core.move import Move  # noqa: E402
from tablut.core.position import Position  # noqa: E402
from tablut.engine.evaluation import WINNING_VALUE  # noqa: E402
from tablut.engine.qt_bridge import EngineWorker  # noqa: E402
from tablut.engine.search import CancelCheck, SearchLimits, SearchResult  # noqa: E402

pytestmark = pytest.mark.usefixtures("qapp")

SearchBody = Callable[[Position, CancelCheck], SearchResult]


class _ScriptedEngine:
    """Runs *body* for every search and keeps the positions it was given."""

    def __init__(self, body: SearchBody) -> None:
        self._body = body
        self.positions: list[Position] = []

    def search(
        self,
        position: Position,
        limits: SearchLimits | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del limits
        self.positions.append(position)
        assert is_cancelled is not None
        return self._body(position, is_cancelled)


def _first_move(position: Position, _cancelled: CancelCheck) -> SearchResult:
    return SearchResult(position.legal_moves()[0], 0, 1, 1)


class _Spies:
    def __init__(self, worker: EngineWorker) -> None:
        self.best = QSignalSpy(worker.best_move_ready)
        self.no_move = QSignalSpy(worker.search_no_move)
        self.cancelled = QSignalSpy(worker.search_cancelled)
        self.errors = QSignalSpy(worker.search_error)

    def counts(self) -> tuple[int, int, int, int]:
        return (
            len(self.best),
            len(self.no_move),
            len(self.cancelled),
            len(self.errors),
        )


class TestRequestMove:
    def test_real_engine_reports_a_legal_move(self) -> None:
        position = Position.initial()
        worker = EngineWorker(max_depth=1)
        moves: list[Move] = []
        worker.best_move_ready.connect(lambda _id, move, *_rest: moves.append(move))
        spies = _Spies(worker)

        worker.request_move(position, 3)

        assert spies.counts() == (1, 0, 0, 0)
        assert spies.best[0][0] == 3
        assert spies.best[0][3] == 1
        assert moves[0] in position.legal_moves()
        assert worker.active_request is None

    def test_decided_position_reports_no_move(self, make_position) -> None:
        worker = EngineWorker(max_depth=2)
        spies = _Spies(worker)

        worker.request_move(make_position(attackers=["a2"], defenders=["c3"]), 11)

        assert spies.counts() == (0, 1, 0, 0)
        assert spies.no_move[0][0] == 11
        assert spies.no_move[0][1] == -WINNING_VALUE

    def test_engine_only_sees_a_copy(self) -> None:
        had_history: list[bool] = []

        def play_first(position: Position, cancelled: CancelCheck) -> SearchResult:
            had_history.append(position.can_undo)
            position.make_move(position.legal_moves()[0])
            return _first_move(position, cancelled)

        engine = _ScriptedEngine(play_first)
        position = Position.initial()
        position.make_move(position.legal_moves()[0])

        EngineWorker(engine=engine).request_move(position, 1)

        searched = engine.positions[0]
        assert searched is not position
        assert had_history == [True]
        assert position.move_count == 1

    def test_cancel_during_search(self) -> None:
        worker = EngineWorker()

        def cancel_midway(position: Position, cancelled: CancelCheck) -> SearchResult:
            assert not cancelled()
            worker.cancel()
            assert cancelled()
            return _first_move(position, cancelled)

        worker._engine = _ScriptedEngine(cancel_midway)
        spies = _Spies(worker)

        worker.request_move(Position.initial(), 7)

        assert spies.counts() == (0, 0, 1, 0)
        assert spies.cancelled[0][0] == 7

    def test_new_request_clears_previous_cancel(self) -> None:
        worker = EngineWorker(engine=_ScriptedEngine(_first_move))
        worker.cancel()
        spies = _Spies(worker)

        worker.request_move(Position.initial(), 8)

        assert spies.counts() == (1, 0, 0, 0)


class TestErrors:
    def test_rule_error_is_reported(self) -> None:
        def fail(_position: Position, _cancelled: CancelCheck) -> SearchResult:
            raise SearchError("no legal move")

        worker = EngineWorker(engine=_ScriptedEngine(fail))
        spies = _Spies(worker)

        worker.request_move(Position.initial(), 5)

        assert spies.counts() == (0, 0, 0, 1)
        assert spies.errors[0][0] == 5
        assert "no legal move" in spies.errors[0][1]

    def test_unexpected_failure_is_reported(self) -> None:
        def crash(_position: Position, _cancelled: CancelCheck) -> SearchResult:
            raise KeyError("missing")

        worker = EngineWorker(engine=_ScriptedEngine(crash))
        spies = _Spies(worker)

        worker.request_move(Position.initial(), 6)

        assert spies.counts() == (0, 0, 0, 1)
        assert spies.errors[0][1].startswith("KeyError")
        assert worker.active_request is None

    def test_non_position_rejected(self) -> None:
        engine = _ScriptedEngine(_first_move)
        worker = EngineWorker(engine=engine)
        spies = _Spies(worker)

        worker.request_move("B" + "-" * 81, 2)

        assert spies.counts() == (0, 0, 0, 1)
        assert "str" in spies.errors[0][1]
        assert engine.positions == []


class TestLimits:
    def test_defaults(self) -> None:
        assert EngineWorker().limits == SearchLimits(max_depth=3, time_limit_ms=None)

    def test_set_limits(self) -> None:
        worker = EngineWorker()
        worker.set_limits(5, 250)
        assert worker.limits == SearchLimits(max_depth=5, time_limit_ms=250)
        worker.set_limits(2, 0)
        assert worker.limits == SearchLimits(max_depth=2, time_limit_ms=None)

    def test_invalid_depth_keeps_limits(self) -> None:
        worker = EngineWorker(max_depth=4, time_limit_ms=100)
        worker.set_limits(0, 50)
        assert worker.limits == SearchLimits(max_depth=4, time_limit_ms=100)

    def test_limits_reach_the_engine(self) -> None:
        seen: list[SearchLimits | None] = []

        class _LimitsEngine:
            def search(
                self,
                position: Position,
                limits: SearchLimits | None = None,
                is_cancelled: CancelCheck | None = None,
            ) -> SearchResult:
                seen.append(limits)
                return SearchResult(None, 0, 0, 0)

        worker = EngineWorker(engine=_LimitsEngine())
        worker.set_limits(2, 300)
        worker.request_move(Position.initial(), 9)
        assert seen == [SearchLimits(max_depth=2, time_limit_ms=300)]
