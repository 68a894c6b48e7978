"""Algebraic notation for applied moves."""

from __future__ import annotations

from chatmate.core.enums import PieceType
from chatmate.core.move import Move
from chatmate.core.move_generator import MoveGenerator, castle_side_of
from chatmate.core.piece import Piece
from chatmate.core.state import GameState
from chatmate.core.types import Square

CHECK_SUFFIX = "+"
MATE_SUFFIX = "#"


def effective_promotion(piece: Piece, move: Move) -> PieceType | None:
    """Piece a pawn becomes on *move*, or ``None`` when nothing promotes."""
    if piece.piece_type != PieceType.PAWN:
        return None
    if move.to_sq.rank != piece.color.promotion_rank:
        return None
    return move.promotion or PieceType.QUEEN


def move_to_san(state: GameState, move: Move, *, gives_check: bool = False) -> str:
    """Notation for *move* given the *state* before it is applied.

    Castling is rendered as a bare ``O-O``/``O-O-O``. *gives_check* appends
    the check marker; the mate marker is applied by the transition once the
    resulting position is known to be terminal.
    """
    board = state.board
    piece = board[move.from_sq]
    if piece is None:
        return ""

    castle = castle_side_of(piece, move.from_sq, move.to_sq)
    if castle is not None:
        return castle.symbol

    san = ""
    if piece.piece_type != PieceType.PAWN:
        san += piece.piece_type.letter

    rivals = _rival_origins(state, piece, move)
    if rivals:
        san += move.from_sq.file_char
        if any(sq.file == move.from_sq.file for sq in rivals):
            san += move.from_sq.rank_char

    is_capture = board[move.to_sq] is not None or (
        piece.piece_type == PieceType.PAWN and move.from_sq.file != move.to_sq.file
    )
    if is_capture:
        if piece.piece_type == PieceType.PAWN and not san:
            san += move.from_sq.file_char
        san += "x"

    san += move.to_sq.name

    promotion = effective_promotion(piece, move)
    if promotion is not None:
        san += "=" + promotion.letter

    if gives_check:
        san += CHECK_SUFFIX
    return san


def mark_mate(san: str) -> str:
    """Turn a trailing check marker into the mate marker (or append it)."""
    return san.removesuffix(CHECK_SUFFIX) + MATE_SUFFIX


def _rival_origins(state: GameState, piece: Piece, move: Move) -> list[Square]:
    """Other same-kind, same-side pieces that can also reach the destination."""
    gen = MoveGenerator(state)
    return [
        sq
        for sq, other in state.board
        if sq != move.from_sq
        and other == piece
        and move.to_sq in gen.legal_destinations(sq)
    ]
