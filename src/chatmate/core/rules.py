"""High-level rule queries: check, mobility, game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chatmate.core.enums import Color, GameResult
from chatmate.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chatmate.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Repetition and fifty-move draws are not declared; the clocks are only
    tracked.
    """

    @staticmethod
    def is_in_check(state: GameState, color: Color | None = None) -> bool:
        gen = MoveGenerator(state)
        return gen.is_in_check(state.turn if color is None else color)

    @staticmethod
    def has_any_legal_move(state: GameState) -> bool:
        return MoveGenerator(state).has_any_legal_move()

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        if not Rules.is_in_check(state):
            return False
        return not Rules.has_any_legal_move(state)

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        if Rules.is_in_check(state):
            return False
        return not Rules.has_any_legal_move(state)

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Result implied by the terminal flags of *state*."""
        if state.game_over and state.winner is not None:
            return GameResult.win_for(state.winner)
        if state.checkmate:
            return GameResult.win_for(state.turn.opposite)
        if state.stalemate:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
