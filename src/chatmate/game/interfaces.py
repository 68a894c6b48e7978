"""Player contract and phase machine used by :class:`GameController`.

A game pairs two players, one per color. The controller tells the side to
move that it is its turn; the player answers later by submitting a move or
move text back to the controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chatmate.core.enums import Color

if TYPE_CHECKING:
    from chatmate.core.state import GameState


class GamePhase(IntEnum):
    """Where a game stands between turns.

    ``THINKING`` is entered only while a model-backed player owes a move;
    a human turn stays in ``AWAITING_MOVE``.
    """

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()
    GAME_OVER = auto()


class IPlayer(ABC):
    """One side of a game, either a person or a text-completion model."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Label used in log lines."""

    @property
    @abstractmethod
    def is_human(self) -> bool:
        """False for players whose moves come from a suggestion request."""

    @abstractmethod
    def request_move(self, state: GameState) -> None:
        """Called when it is this player's turn in *state*.

        Must not block. A model player starts a suggestion request and
        feeds the decoded reply to the controller when it arrives.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Drop an outstanding suggestion request, if any."""
