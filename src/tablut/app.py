"""Console front end: play Tablut against a person or the engine."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from tablut.core.enums import Side, WinReason
from tablut.core.exceptions import MoveLimitError
from tablut.core.notation import parse_move
from tablut.engine.search import SearchLimits
from tablut.game.controller import GameController
from tablut.game.interfaces import IPlayer
from tablut.game.player import AIPlayer, HumanPlayer
from tablut.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

_HELP = """\
Commands:
  <move>         play a move, e.g. d1-d3, d1-3 or e1-c
  moves          list legal moves
  board          show the board
  undo           take back the last move
  limit <n|off>  set the move limit per side
  new            start over
  quit           leave"""

_REASONS: dict[WinReason, str] = {
    WinReason.KING_CAPTURED: "the king was captured",
    WinReason.KING_ESCAPED: "the king reached the edge",
    WinReason.NO_MOVES: "the opponent could not move",
    WinReason.REPETITION: "a position was repeated",
    WinReason.MOVE_LIMIT: "the move limit was exceeded",
}


class ConsoleSession:
    """Line-oriented game loop driving a :class:`GameController`.

    Input and output go through *read* and *write* so the loop can be
    driven from tests.
    """

    __slots__ = (
        "_controller",
        "_limits",
        "_kinds",
        "_move_limit",
        "_read",
        "_write",
    )

    def __init__(
        self,
        *,
        attacker: str = "human",
        defender: str = "ai",
        limits: SearchLimits | None = None,
        move_limit: int | None = None,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._controller = GameController()
        self._limits = limits if limits is not None else SearchLimits()
        self._kinds = {Side.ATTACKER: attacker, Side.DEFENDER: defender}
        self._move_limit = move_limit
        self._read = read
        self._write = write

        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)

    @property
    def controller(self) -> GameController:
        return self._controller

    def new_game(self) -> None:
        self._controller.new_game(
            self._make_player(Side.ATTACKER),
            self._make_player(Side.DEFENDER),
            move_limit=self._move_limit,
        )
        self._write(self._controller.state.position.render())

    def run(self) -> None:
        """Play until the user quits, input ends or an engine-only game ends."""
        self.new_game()
        while True:
            state = self._controller.state
            player = self._controller.current_player
            if state.is_game_over:
                if not self._has_human():
                    return
            elif isinstance(player, AIPlayer):
                self._play_engine_move(player)
                continue

            try:
                line = self._read(self._prompt(state)).strip()
            except EOFError:
                return
            if not line:
                continue
            if not self._handle(line):
                return

    # ── Commands ─────────────────────────────────────────────────────────

    def _handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the user quits."""
        command, _, argument = line.partition(" ")
        command = command.lower()
        state = self._controller.state

        if command in ("quit", "exit", "q"):
            return False
        if command in ("help", "?"):
            self._write(_HELP)
        elif command == "board":
            self._write(state.position.render())
        elif command == "moves":
            moves = state.legal_moves() if not state.is_game_over else []
            self._write(" ".join(str(m) for m in moves) or "No legal moves.")
        elif command == "undo":
            self._undo()
        elif command == "limit":
            self._set_limit(argument.strip())
        elif command == "new":
            self.new_game()
        else:
            self._submit(line)
        return True

    def _submit(self, text: str) -> None:
        try:
            move = parse_move(text)
        except ValueError as exc:
            self._write(f"{exc}. Type 'help' for commands.")
            return
        if not self._controller.submit_move(move):
            self._write(f"Illegal move: {move.long}")

    def _undo(self) -> None:
        # Against the engine, take back its reply as well.
        if not self._controller.undo_move():
            self._write("Nothing to undo.")
            return
        player = self._controller.current_player
        if player is not None and not player.is_human and self._has_human():
            self._controller.undo_move()
        self._write(self._controller.state.position.render())

    def _set_limit(self, argument: str) -> None:
        if argument.lower() in ("off", "none"):
            limit = None
        else:
            try:
                limit = int(argument)
            except ValueError:
                self._write(f"Invalid move limit: {argument!r}")
                return
        try:
            self._controller.set_move_limit(limit)
        except MoveLimitError as exc:
            self._write(str(exc))
            return
        self._move_limit = limit

    # ── Engine turn ──────────────────────────────────────────────────────

    def _play_engine_move(self, player: AIPlayer) -> None:
        result = player.think()
        if result is None:
            raise RuntimeError(f"{player.name} was not asked for a move")
        _LOGGER.debug(
            "Engine: %s score %d depth %d nodes %d",
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )
        if result.best_move is None or not self._controller.submit_move(
            result.best_move
        ):
            raise RuntimeError(f"Engine produced no playable move: {result}")

    # ── Event handlers ───────────────────────────────────────────────────

    def _on_move(self, record: MoveRecord, state: GameState) -> None:
        line = f"{record.side}: {record.notation}"
        if record.was_capture:
            line += f" ({len(record.captured)} captured)"
        self._write(line)
        self._write(state.position.render())

    def _on_game_over(self, winner: Side, reason: WinReason) -> None:
        self._write(f"The {winner} side wins: {_REASONS[reason]}.")
        if self._controller.state.repeated and reason != WinReason.REPETITION:
            self._write("The final position was also a repetition.")

    # ── Helpers ──────────────────────────────────────────────────────────

    def _make_player(self, side: Side) -> IPlayer:
        if self._kinds[side] == "ai":
            return AIPlayer(side, name=f"Engine ({side})", limits=self._limits)
        return HumanPlayer(side)

    def _has_human(self) -> bool:
        return "human" in self._kinds.values()

    def _prompt(self, state: GameState) -> str:
        if state.is_game_over:
            return "game over> "
        return f"{state.side_to_move} to move> "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tablut",
        description="Play Tablut in the terminal against a person or the engine.",
    )
    parser.add_argument(
        "--attacker",
        choices=("human", "ai"),
        default="human",
        help="who plays the attacking side (moves first)",
    )
    parser.add_argument(
        "--defender",
        choices=("human", "ai"),
        default="ai",
        help="who plays the defending side",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=SearchLimits().max_depth,
        help="engine search depth in plies",
    )
    parser.add_argument(
        "--time-limit-ms",
        type=int,
        default=None,
        help="engine time budget per move in milliseconds (default: unlimited)",
    )
    parser.add_argument(
        "--move-limit",
        type=int,
        default=None,
        help="maximum number of moves per side",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log engine statistics and game events",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Launch the console game."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.depth < 1:
        print("--depth must be at least 1", file=sys.stderr)
        return 2
    if args.move_limit is not None and args.move_limit < 0:
        print("--move-limit must not be negative", file=sys.stderr)
        return 2

    session = ConsoleSession(
        attacker=args.attacker,
        defender=args.defender,
        limits=SearchLimits(max_depth=args.depth, time_limit_ms=args.time_limit_ms),
        move_limit=args.move_limit,
    )
    session.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
