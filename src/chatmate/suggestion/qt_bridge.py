"""Qt bridge to run move suggestion in a worker thread."""

from __future__ import annotations

import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chatmate.core.notation.move_text import DecodeFailure
from chatmate.core.state import GameState
from chatmate.suggestion.interfaces import MoveSuggester, SuggestionLimits
from chatmate.suggestion.service import request_suggested_move


class SuggestionWorker(QObject):
    """Thread-affine worker that asks a suggester for moves on demand."""

    move_ready = pyqtSignal(int, object)
    move_rejected = pyqtSignal(int, str)
    suggestion_error = pyqtSignal(int, str)
    suggestion_cancelled = pyqtSignal(int)

    def __init__(
        self,
        suggester: MoveSuggester,
        *,
        min_latency_s: float = 1.0,
        timeout_s: float | None = 30.0,
    ) -> None:
        super().__init__()
        self._suggester = suggester
        self._limits = SuggestionLimits(min_latency_s=min_latency_s, timeout_s=timeout_s)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Ask for a move in *state_obj* and emit the decoded result."""
        if not isinstance(state_obj, GameState):
            self.suggestion_error.emit(request_id, "Suggester received invalid state")
            return

        self._cancel_event.clear()
        try:
            outcome = request_suggested_move(
                state_obj,
                self._suggester,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            self.suggestion_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.suggestion_cancelled.emit(request_id)
            return

        if isinstance(outcome, DecodeFailure):
            self.move_rejected.emit(request_id, str(outcome))
            return

        self.move_ready.emit(request_id, outcome)

    @pyqtSlot()
    def cancel(self) -> None:
        """Stop waiting on the current request and discard its result."""
        self._cancel_event.set()

    @pyqtSlot(float, float)
    def set_limits(self, min_latency_s: float, timeout_s: float) -> None:
        """Update pacing limits (takes effect on the next request)."""
        self._limits = SuggestionLimits(min_latency_s=min_latency_s, timeout_s=timeout_s)
