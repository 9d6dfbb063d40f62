"""Tests for the minimax search engine."""

import pytest

from tablut.core.enums import Side
from tablut.core.move import Move
from tablut.core.notation import parse_move
from tablut.core.position import Position
from tablut.core.types import parse_square
from tablut.engine.evaluation import (
    WILL_WIN_VALUE,
    WINNING_VALUE,
    is_winning_score,
    material_balance,
    terminal_score,
)
from tablut.engine.minimax import MinimaxEngine
from tablut.engine.search import DEFAULT_TIME_LIMIT_MS, SearchLimits


def _mv(start: str, end: str) -> Move:
    return Move(parse_square(start), parse_square(end))


class TestEvaluation:
    def test_material_balance_start(self, start: Position) -> None:
        assert material_balance(start) == 9 - 16

    def test_terminal_scores_prefer_shallow_wins(self) -> None:
        assert terminal_score(Side.DEFENDER, 0) == WINNING_VALUE
        assert terminal_score(Side.DEFENDER, 1) > terminal_score(Side.DEFENDER, 2)
        assert terminal_score(Side.ATTACKER, 1) < terminal_score(Side.ATTACKER, 2)
        assert terminal_score(Side.ATTACKER, 3) == -(WINNING_VALUE - 3)

    def test_wins_dominate_heuristic(self) -> None:
        assert is_winning_score(terminal_score(Side.DEFENDER, 50))
        assert is_winning_score(terminal_score(Side.ATTACKER, 50))
        assert not is_winning_score(81)
        assert WILL_WIN_VALUE > 81

    def test_default_limits(self) -> None:
        limits = SearchLimits()
        assert limits.max_depth == 3
        assert limits.time_limit_ms is None
        assert DEFAULT_TIME_LIMIT_MS == 20_000


class TestSearch:
    def test_rejects_non_positive_depth(self, start: Position) -> None:
        with pytest.raises(ValueError):
            MinimaxEngine().search(start, SearchLimits(max_depth=0))

    def test_does_not_mutate_caller(self, start: Position) -> None:
        start.make_move(parse_move("d1-3"))
        before = start.encoded()
        MinimaxEngine().search(start, SearchLimits(max_depth=2))
        assert start.encoded() == before
        assert start.move_count == 1
        start.undo()
        assert start == Position.initial()

    def test_deterministic(self, start: Position) -> None:
        limits = SearchLimits(max_depth=2)
        first = MinimaxEngine().search(start, limits)
        second = MinimaxEngine().search(start, limits)
        assert first == second
        assert first.depth == 2
        assert first.nodes > 0

    def test_single_legal_move(self, make_position) -> None:
        pos = make_position(attackers=["a1"], defenders=["a2", "c1"], king="g7")
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=3))
        assert result.best_move == _mv("a1", "b1")

    def test_defender_takes_immediate_escape(self, make_position) -> None:
        pos = make_position(attackers=["h8", "h2"], king="c5", turn=Side.DEFENDER)
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=3))
        assert result.best_move == _mv("c5", "c9")
        assert result.score == WINNING_VALUE - 1

    def test_attacker_captures_royal(self, make_position) -> None:
        pos = make_position(attackers=["d5", "f5", "e6", "e1"], king="e5")
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move == _mv("e1", "e4")
        assert result.score == -(WINNING_VALUE - 1)

    def test_decided_position_has_no_move(self, make_position) -> None:
        pos = make_position(attackers=["d5", "f5", "e6", "e1"], king="e5")
        pos.make_move(parse_move("e1-4"))
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=3))
        assert result.best_move is None
        assert result.score == -WINNING_VALUE
        assert result.depth == 0

    def test_unjudged_immobile_root_is_decided(self, make_position) -> None:
        pos = make_position(
            attackers=["b3", "c2", "a2", "b1"], king="b2", turn=Side.DEFENDER
        )
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=1))
        assert result.best_move is None
        assert result.score == -WINNING_VALUE
        assert result.nodes == 0

    def test_side_without_pieces_loses_at_root(self, make_position) -> None:
        pos = make_position(defenders=["c3"], king="e5")
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move is None
        assert result.score == WINNING_VALUE

    def test_missing_royal_at_root(self, make_position) -> None:
        pos = make_position(attackers=["a2"], defenders=["c3"])
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move is None
        assert result.score == -WINNING_VALUE
        assert result.depth == 0

    def test_royal_on_edge_at_root(self, make_position) -> None:
        pos = make_position(attackers=["a2"], king="e9")
        result = MinimaxEngine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move is None
        assert result.score == WINNING_VALUE
        assert pos.winner is None

    def test_custom_evaluator(self, start: Position) -> None:
        calls: list[int] = []

        def flat(position: Position) -> int:
            calls.append(position.move_count)
            return 0

        result = MinimaxEngine(evaluator=flat).search(start, SearchLimits(max_depth=1))
        assert calls
        assert result.best_move == start.legal_moves()[0]
        assert result.score == 0

    def test_find_move(self, start: Position) -> None:
        move = MinimaxEngine().find_move(start, depth=1)
        assert move in start.legal_moves()


class TestStopping:
    def test_cancel_before_first_depth(self, start: Position) -> None:
        result = MinimaxEngine().search(
            start, SearchLimits(max_depth=3), is_cancelled=lambda: True
        )
        assert result.depth == 0
        assert result.best_move == start.legal_moves()[0]
        assert result.nodes == 0

    def test_cancel_mid_search_keeps_completed_depth(self, start: Position) -> None:
        checks = 0

        def cancel_after_a_while() -> bool:
            nonlocal checks
            checks += 1
            return checks > 2_000

        result = MinimaxEngine().search(
            start, SearchLimits(max_depth=3), is_cancelled=cancel_after_a_while
        )
        assert 1 <= result.depth < 3
        assert result.best_move in start.legal_moves()
        assert start == Position.initial()

    def test_time_limit(self, start: Position) -> None:
        result = MinimaxEngine().search(
            start, SearchLimits(max_depth=6, time_limit_ms=1)
        )
        assert result.depth < 6
        assert result.best_move in start.legal_moves()
