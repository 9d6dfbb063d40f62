"""Qt bridge to run the minimax search in a worker thread.

Requires the optional ``qt`` extra (PyQt6).
"""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from tablut.core.exceptions import TablutError
from tablut.core.position import Position
from tablut.engine.minimax import MinimaxEngine
from tablut.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that answers move requests from a Qt front end.

    Every :meth:`request_move` ends with exactly one signal:
    ``best_move_ready``, ``search_no_move`` (the position is already
    decided), ``search_cancelled`` or ``search_error``. The engine only ever
    sees a full copy of the requested position, repetition history included.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits", "_active_request")

    def __init__(
        self,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = None,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._cancel_event = threading.Event()
        self._active_request: int | None = None

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def active_request(self) -> int | None:
        """Id of the search in progress, if any."""
        return self._active_request

    # -- Slots --------------------------------------------------------------

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        if not isinstance(position_obj, Position):
            self._fail(
                request_id,
                f"Expected a Position, got {type(position_obj).__name__}",
            )
            return

        self._cancel_event.clear()
        self._active_request = request_id
        try:
            result = self._run(position_obj.full_copy(), request_id)
        finally:
            self._active_request = None
        if result is not None:
            self._publish(request_id, result)

    @pyqtSlot()
    def cancel(self) -> None:
        """Ask the running search to stop at its next node."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Limits for the next search. ``time_limit_ms <= 0`` means no deadline.

        A depth below 1 is ignored and the current limits stay.
        """
        if max_depth < 1:
            _LOGGER.warning(
                "Ignoring search depth %d; keeping %s", max_depth, self._limits
            )
            return
        deadline = time_limit_ms if time_limit_ms > 0 else None
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=deadline)

    # -- Internals ------------------------------------------------------------

    def _run(self, position: Position, request_id: int) -> SearchResult | None:
        try:
            return self._engine.search(
                position, self._limits, is_cancelled=self._cancel_event.is_set
            )
        except TablutError as exc:
            _LOGGER.warning("Search %d failed: %s", request_id, exc)
            self._fail(request_id, str(exc))
        except Exception as exc:
            _LOGGER.exception("Search %d crashed", request_id)
            self._fail(request_id, f"{type(exc).__name__}: {exc}")
        return None

    def _publish(self, request_id: int, result: SearchResult) -> None:
        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
        elif result.best_move is None:
            self.search_no_move.emit(
                request_id, result.score, result.depth, result.nodes
            )
        else:
            _LOGGER.debug(
                "Search %d: %s at depth %d", request_id, result.best_move, result.depth
            )
            self.best_move_ready.emit(
                request_id, result.best_move, result.score, result.depth, result.nodes
            )

    def _fail(self, request_id: int, message: str) -> None:
        self.search_error.emit(request_id, message)
