"""Prompt construction for text-completion move suggestions."""

from __future__ import annotations

from chatmate.core.notation import movetext_from_history, position_to_fen
from chatmate.core.state import GameState

SYSTEM_PROMPT = (
    "You are a chess grandmaster assistant that provides precise chess moves in "
    "standard notation. Give ONLY the move without any explanation or additional text."
)

NO_HISTORY_TEXT = "No moves played yet."


def history_text(state: GameState, window: int = 10) -> str:
    """One-line summary of the last *window* plies."""
    if not state.history:
        return NO_HISTORY_TEXT
    count = min(window, len(state.history))
    movetext = movetext_from_history(
        state.history,
        fullmove_number=state.fullmove_number,
        turn=state.turn,
        last=count,
    )
    return f"Move history (last {count} moves): {movetext}"


def build_prompt(state: GameState, window: int = 10) -> str:
    """User prompt embedding the position string and recent history."""
    return (
        "You are an expert chess player. I'll give you a chess position in FEN "
        "notation and your task is to suggest the best move.\n"
        "\n"
        f"Current position: {position_to_fen(state)}\n"
        "\n"
        f"{history_text(state, window)}\n"
        "\n"
        'Based on this position, provide the best move in algebraic notation '
        '(e.g. "e4", "Nf3", "O-O") or in the format "e2e4".\n'
        "\n"
        "Give only ONE single move without any explanation or additional text.\n"
    )
