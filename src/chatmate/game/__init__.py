"""Game layer: players, phases and the controller."""

from chatmate.game.controller import GameController, GameEvents
from chatmate.game.interfaces import GamePhase, IPlayer
from chatmate.game.player import AIPlayer, HumanPlayer

__all__ = [
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GamePhase",
    "HumanPlayer",
    "IPlayer",
]
