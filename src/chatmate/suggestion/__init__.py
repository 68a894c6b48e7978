"""Move suggestion: prompts, provider table, pacing and the Qt worker bridge."""

from chatmate.suggestion.interfaces import MoveSuggester, SuggestionError, SuggestionLimits
from chatmate.suggestion.prompting import SYSTEM_PROMPT, build_prompt, history_text
from chatmate.suggestion.providers import (
    MODELS,
    PROVIDERS,
    ModelSpec,
    ProviderRequest,
    ProviderStrategy,
    ProviderSuggester,
    find_model,
)
from chatmate.suggestion.qt_bridge import SuggestionWorker
from chatmate.suggestion.service import request_suggested_move

__all__ = [
    "MODELS",
    "PROVIDERS",
    "SYSTEM_PROMPT",
    "ModelSpec",
    "MoveSuggester",
    "ProviderRequest",
    "ProviderStrategy",
    "ProviderSuggester",
    "SuggestionError",
    "SuggestionLimits",
    "SuggestionWorker",
    "build_prompt",
    "find_model",
    "history_text",
    "request_suggested_move",
]
