"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chatmate.core.enums import Color
from chatmate.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chatmate.core.state import GameState


class _NamedPlayer(IPlayer):
    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name


class HumanPlayer(_NamedPlayer):
    """A human participant; moves arrive through ``submit_move``."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(_NamedPlayer):
    """A model-driven participant that delegates to callbacks.

    ``AIPlayer`` holds no provider logic itself. In an application
    *on_request_move* forwards the state to a ``SuggestionWorker`` living in
    a ``QThread`` and the worker's ``move_ready`` signal feeds
    ``GameController.submit_move``.

    Args:
        color: Side the AI plays.
        name: Display name, usually the model name.
        on_request_move: ``(GameState) -> None``, called when the controller
            asks the AI to move.
        on_cancel: ``() -> None``, called to drop a pending request.
    """

    __slots__ = ("_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Model",
        on_request_move: Callable[[GameState], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, state: GameState) -> None:
        if self._on_request_move is not None:
            self._on_request_move(state)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
