"""Game management layer — controller, players, state machine.

Quick start::

    from tablut.core import Side, parse_move
    from tablut.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        attacker=HumanPlayer(Side.ATTACKER, "Alice"),
        defender=HumanPlayer(Side.DEFENDER, "Bob"),
        move_limit=50,
    )
    ctrl.submit_move(parse_move("d1-3"))
"""

from tablut.game.controller import GameController, GameEvents
from tablut.game.interfaces import GamePhase, IGameController, IPlayer
from tablut.game.player import AIPlayer, HumanPlayer
from tablut.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
]
