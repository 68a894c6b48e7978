"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chatmate.core import DecodeFailure, GameState, Move, apply_move, parse_move_text
    from chatmate.core.types import E2, E4

    state = GameState.initial()
    state = apply_move(state, Move(E2, E4))
    reply = parse_move_text(state, "e5")
    if not isinstance(reply, DecodeFailure):
        state = apply_move(state, reply)
"""

from chatmate.core.board import Board
from chatmate.core.enums import CastleSide, CastlingRights, Color, GameResult, PieceType
from chatmate.core.move import Move, MoveRecord
from chatmate.core.move_generator import MoveGenerator
from chatmate.core.notation import (
    STARTING_FEN,
    DecodeFailure,
    move_to_san,
    movetext_from_history,
    parse_move_text,
    position_from_fen,
    position_to_fen,
)
from chatmate.core.piece import Piece
from chatmate.core.rules import Rules
from chatmate.core.state import GameState
from chatmate.core.transition import apply_move
from chatmate.core.types import Square, make_square, parse_square

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Squares
    "Square",
    "make_square",
    "parse_square",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Rules",
    "apply_move",
    # Notation
    "STARTING_FEN",
    "DecodeFailure",
    "move_to_san",
    "movetext_from_history",
    "parse_move_text",
    "position_from_fen",
    "position_to_fen",
]
