"""GameController — the central orchestrator of a Tablut game.

Coordinates: Players, GameState, move legality.
Emits events via simple callbacks so the front end / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from tablut.core.enums import Side, WinReason
from tablut.core.move import Move
from tablut.game.interfaces import GamePhase, IGameController, IPlayer
from tablut.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, "GameState"], None]
GameOverCallback = Callable[[Side, WinReason], None]  # winner, reason
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates moves, switches turns, notifies
    listeners.

    Methods are meant to be called from a single thread. AI players are
    asked to move through :meth:`IPlayer.request_move` and answer by calling
    :meth:`submit_move`.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Side, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, side: Side) -> IPlayer | None:
        return self._players.get(side)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        attacker: IPlayer,
        defender: IPlayer,
        encoded: str | None = None,
        move_limit: int | None = None,
    ) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

        self._players = {Side.ATTACKER: attacker, Side.DEFENDER: defender}
        self._state = GameState()
        self._state.setup(encoded, move_limit=move_limit)
        _LOGGER.info(
            "New game: %s (attackers) vs %s (defenders), move limit %s",
            attacker.name,
            defender.name,
            "none" if move_limit is None else move_limit,
        )

        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            _LOGGER.warning("Move %s rejected: the game is over", move)
            return False
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            _LOGGER.warning("Move %s rejected: no game in progress", move)
            return False
        if not self._state.position.is_legal_move(move):
            _LOGGER.warning("Move %s rejected: illegal", move)
            return False

        record = self._state.apply_move(move)
        self._emit_move(record)

        if self._state.is_game_over:
            self._emit_game_over()
            return True

        self._prompt_current_player()
        return True

    def undo_move(self) -> bool:
        if not self._state.move_history:
            return False

        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

        self._state.undo_last_move()
        self._prompt_current_player()
        return True

    def set_move_limit(self, limit: int | None) -> None:
        """Change the per-side move cap of the running game.

        Raises:
            MoveLimitError: if the limit is negative or already exceeded.
        """
        self._state.position.set_move_limit(limit)
        _LOGGER.info("Move limit set to %s", "none" if limit is None else limit)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        if self._state.is_game_over:
            self._emit_phase(GamePhase.GAME_OVER)
            return

        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state.position)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self) -> None:
        winner = self._state.winner
        reason = self._state.end_reason
        assert winner is not None and reason is not None
        _LOGGER.info(
            "Game over: %s win (%s)%s",
            winner,
            reason.name.lower(),
            ", position repeated" if self._state.repeated else "",
        )
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(winner, reason)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
