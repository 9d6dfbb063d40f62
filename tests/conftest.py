"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterable, Iterator

import pytest

from tablut.core.board import Board
from tablut.core.enums import Side
from tablut.core.piece import Piece
from tablut.core.position import Position
from tablut.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

PositionFactory = Callable[..., Position]


def build_position(
    *,
    attackers: Iterable[str] = (),
    defenders: Iterable[str] = (),
    king: str | None = None,
    turn: Side = Side.ATTACKER,
    move_limit: int | None = None,
) -> Position:
    """Position with only the listed pieces on an otherwise empty board."""
    board = Board()
    for name in attackers:
        board[parse_square(name)] = Piece.ATTACKER
    for name in defenders:
        board[parse_square(name)] = Piece.DEFENDER
    if king is not None:
        board[parse_square(king)] = Piece.ROYAL
    return Position(board, turn=turn, move_limit=move_limit)


@pytest.fixture
def make_position() -> PositionFactory:
    """Factory for sparse positions, e.g. ``make_position(king="e5")``."""
    return build_position


@pytest.fixture
def start() -> Position:
    return Position.initial()


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt bridge tests."""
    qtcore = pytest.importorskip("PyQt6.QtCore")

    app = qtcore.QCoreApplication.instance()
    if app is None:
        app = qtcore.QCoreApplication([])
    yield app
