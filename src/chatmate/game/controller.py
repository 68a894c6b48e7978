"""GameController: the orchestrator of a game between humans and models.

Holds the stack of immutable states, routes moves through the transition,
prompts players and notifies listeners via simple callbacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chatmate.core.enums import Color, GameResult
from chatmate.core.move import Move
from chatmate.core.notation.fen import position_from_fen
from chatmate.core.notation.move_text import DecodeFailure, parse_move_text
from chatmate.core.rules import Rules
from chatmate.core.state import GameState
from chatmate.core.transition import apply_move, rejection_reason
from chatmate.game.interfaces import GamePhase, IPlayer

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]  # move, resulting state
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]
RejectCallback = Callable[[str], None]  # reason


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_move_rejected: list[RejectCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a full game: validates moves, switches turns, notifies
    listeners.

    Methods are meant to be called from a single thread (the main/UI
    thread). Suggestions arrive via ``submit_move`` or
    ``submit_move_text``, connected to the ``SuggestionWorker`` signals.
    """

    __slots__ = ("_states", "_players", "_phase", "events")

    def __init__(self) -> None:
        self._states: list[GameState] = [GameState.initial()]
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._states[-1]

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self.state)

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self.state.turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        """Set up a new game, optionally from a position string."""
        self._cancel_pending()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        start = position_from_fen(fen) if fen else GameState.initial()
        self._states = [start]
        _LOGGER.info("New game: %s vs %s", white.name, black.name)

        if start.is_terminal:
            self._finish()
            return
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        """Apply *move* for the side to move. Returns True if applied."""
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False

        before = self.state
        after = apply_move(before, move)
        if after is before:
            reason = rejection_reason(before, move) or "move rejected"
            self._reject(f"{move}: {reason}")
            return False

        self._states.append(after)
        self._emit_move(move, after)

        if after.is_terminal:
            self._finish()
            return True

        self._prompt_current_player()
        return True

    def submit_move_text(self, text: str | None) -> bool:
        """Decode free-form move *text* and apply it."""
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        decoded = parse_move_text(self.state, text)
        if isinstance(decoded, DecodeFailure):
            self._reject(str(decoded))
            return False
        return self.submit_move(decoded)

    def undo_move(self, plies: int = 1) -> bool:
        """Take back *plies* half-moves. Returns True on success."""
        if plies < 1 or self._phase == GamePhase.GAME_OVER:
            return False
        if len(self._states) <= plies:
            return False

        self._cancel_pending()
        del self._states[-plies:]
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
        else:
            self._set_phase(GamePhase.THINKING)
            cp.request_move(self.state)

    def _cancel_pending(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human and self._phase == GamePhase.THINKING:
            cp.cancel()

    def _reject(self, reason: str) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            _LOGGER.warning("%s move rejected: %s", cp.name, reason)
        else:
            _LOGGER.debug("Move rejected: %s", reason)
        for cb in self.events.on_move_rejected:
            cb(reason)

    def _finish(self) -> None:
        result = self.result
        _LOGGER.info("Game over: %s", result.name)
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_move(self, move: Move, state: GameState) -> None:
        for cb in self.events.on_move:
            cb(move, state)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
