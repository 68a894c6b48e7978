"""Notation package: position strings, algebraic notation, move-text decoding."""

from chatmate.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chatmate.core.notation.move_text import DecodeFailure, parse_move_text
from chatmate.core.notation.san import move_to_san
from chatmate.core.notation.transcript import movetext_from_history

__all__ = [
    "STARTING_FEN",
    "DecodeFailure",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_move_text",
    "movetext_from_history",
]
