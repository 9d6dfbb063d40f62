"""Concrete player implementations."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from tablut.core.enums import Side
from tablut.engine.minimax import MinimaxEngine
from tablut.engine.search import IEngine, SearchLimits, SearchResult
from tablut.game.interfaces import IPlayer

if TYPE_CHECKING:
    from tablut.core.position import Position

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """A human participant — moves come from the front end.

    ``request_move`` is a no-op because humans type their moves.
    """

    __slots__ = ("_side", "_name")

    def __init__(self, side: Side, name: str = "") -> None:
        self._side = side
        self._name = name or f"Player ({side})"

    @property
    def side(self) -> Side:
        return self._side

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """Engine-backed participant.

    The controller calls :meth:`request_move` while it is still inside
    ``new_game``/``submit_move``, so the player only records a frozen copy of
    the position there. The front end runs the search later with
    :meth:`think` and submits the result, which keeps engine-vs-engine games
    from nesting one controller call inside another.
    """

    __slots__ = ("_side", "_name", "_engine", "_limits", "_pending", "_cancel_event")

    def __init__(
        self,
        side: Side,
        name: str = "Engine",
        *,
        engine: IEngine | None = None,
        limits: SearchLimits | None = None,
    ) -> None:
        self._side = side
        self._name = name
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._limits = limits if limits is not None else SearchLimits()
        self._pending: Position | None = None
        self._cancel_event = threading.Event()

    @property
    def side(self) -> Side:
        return self._side

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def has_pending_request(self) -> bool:
        return self._pending is not None

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def request_move(self, position: Position) -> None:
        if position.turn != self._side:
            _LOGGER.warning(
                "%s asked to move for the %s; ignoring", self._name, position.turn
            )
            return
        self._cancel_event.clear()
        self._pending = position.full_copy()

    def cancel(self) -> None:
        self._pending = None
        self._cancel_event.set()

    def think(self) -> SearchResult | None:
        """Search the pending position.

        Returns None when nothing was requested or the request was cancelled
        before or during the search.
        """
        position = self._pending
        if position is None:
            return None
        self._pending = None
        result = self._engine.search(
            position, self._limits, is_cancelled=self._cancel_event.is_set
        )
        if self._cancel_event.is_set():
            _LOGGER.debug("%s: search cancelled", self._name)
            return None
        return result
