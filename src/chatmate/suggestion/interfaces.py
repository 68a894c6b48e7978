"""Shared move-suggestion models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chatmate.config import SuggestionSettings
    from chatmate.core.state import GameState


class SuggestionError(RuntimeError):
    """The provider answered with something that is not a usable reply."""


@dataclass(slots=True, frozen=True)
class SuggestionLimits:
    """Pacing constraints for a single suggestion request.

    Replies faster than *min_latency_s* are held back until that much time
    has passed; a provider still silent after *timeout_s* counts as a
    failed decode.
    """

    min_latency_s: float = 1.0
    timeout_s: float | None = 30.0

    @classmethod
    def from_settings(cls, settings: SuggestionSettings) -> SuggestionLimits:
        return cls(min_latency_s=settings.min_latency_s, timeout_s=settings.timeout_s)


class MoveSuggester(Protocol):
    """Anything that returns free-form move text for a game state."""

    def suggest(self, state: GameState) -> str: ...
