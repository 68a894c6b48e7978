"""User-tunable settings for games against a text-completion opponent."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

# Provider id -> environment variable holding its API key.
API_KEY_ENV_VARS: dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "google": "GOOGLE_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass
class SuggestionSettings:
    """All user-configurable suggestion settings."""

    # Model
    model_id: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 100

    # Pacing
    min_latency_s: float = 1.0
    timeout_s: float = 30.0

    # Prompt
    history_window: int = 10  # plies of history included in the prompt


def api_key_for_provider(provider: str, environ: Mapping[str, str] | None = None) -> str:
    """API key for *provider* from the environment, or ``""`` if unknown/unset."""
    env = os.environ if environ is None else environ
    var = API_KEY_ENV_VARS.get(provider)
    if var is None:
        return ""
    return env.get(var, "")
