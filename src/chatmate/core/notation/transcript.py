"""Numbered movetext built from a game history."""

from __future__ import annotations

from collections.abc import Sequence

from chatmate.core.enums import Color
from chatmate.core.move import MoveRecord


def movetext_from_history(
    history: Sequence[MoveRecord],
    *,
    fullmove_number: int,
    turn: Color,
    last: int | None = None,
) -> str:
    """Render *history* as ``1. e4 e5 2. Nf3 ...``.

    *fullmove_number* and *turn* describe the state after the final record
    and anchor the numbering, so games started from a position string are
    numbered correctly. With *last*, only that many trailing plies are
    rendered; a window opening on a Black move starts with ``N...``.
    """
    if not history:
        return ""

    # Number of the final ply: Black's move bumps the counter after the fact.
    number = fullmove_number if turn == Color.BLACK else fullmove_number - 1
    numbers: list[int] = []
    for record in reversed(history):
        numbers.append(number)
        if record.piece.color == Color.WHITE:
            number -= 1
    numbers.reverse()

    start = 0 if last is None else max(0, len(history) - last)
    parts: list[str] = []
    for idx in range(start, len(history)):
        record = history[idx]
        if record.piece.color == Color.WHITE:
            parts.append(f"{numbers[idx]}.")
        elif idx == start:
            parts.append(f"{numbers[idx]}...")
        parts.append(record.notation)
    return " ".join(parts)
