"""State transition: validate one move and produce the next :class:`GameState`."""

from __future__ import annotations

import dataclasses
import logging

from chatmate.core.enums import PROMOTION_TYPES, CastlingRights, Color, PieceType
from chatmate.core.move import Move, MoveRecord
from chatmate.core.move_generator import CASTLE_PATHS, MoveGenerator, castle_side_of
from chatmate.core.notation.san import effective_promotion, mark_mate, move_to_san
from chatmate.core.piece import Piece
from chatmate.core.state import GameState
from chatmate.core.types import Square, make_square

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


def rejection_reason(state: GameState, move: Move) -> str | None:
    """Why *move* cannot be applied to *state*, or ``None`` if it can."""
    if state.game_over:
        return "game is over"
    piece = state.board[move.from_sq]
    if piece is None:
        return f"no piece on {move.from_sq}"
    if piece.color != state.turn:
        return f"piece on {move.from_sq} does not belong to {state.turn}"
    if move.to_sq not in MoveGenerator(state).legal_destinations(move.from_sq):
        return f"{move.to_sq} is not reachable from {move.from_sq}"
    promotion = effective_promotion(piece, move)
    if promotion is not None and promotion not in PROMOTION_TYPES:
        return f"cannot promote to {promotion.name.lower()}"
    return None


def apply_move(state: GameState, move: Move) -> GameState:
    """Apply *move* and return the resulting state.

    An invalid move returns *state* itself, unchanged; callers detect a
    rejection by identity. Terminal outcomes are reported through the
    ``checkmate``, ``stalemate`` and ``game_over`` flags of the result.
    """
    reason = rejection_reason(state, move)
    if reason is not None:
        _LOGGER.debug("Rejected %s: %s", move, reason)
        return state

    board = state.board
    piece = board[move.from_sq]
    assert piece is not None
    mover = piece.color
    captured = list(state.captured)

    # 1. Capture on the destination; taking the king ends the game at once.
    captured_piece = board[move.to_sq]
    if captured_piece is not None:
        captured[mover] = (*captured[mover], captured_piece.piece_type)
        if captured_piece.piece_type == PieceType.KING:
            _LOGGER.info(
                "%s captured the %s king on %s", mover, captured_piece.color, move.to_sq
            )
            return dataclasses.replace(
                state,
                board=board.move_piece(move.from_sq, move.to_sq),
                captured=(captured[0], captured[1]),
                game_over=True,
                winner=mover,
            )

    castling = state.castling
    en_passant: Square | None = None
    is_en_passant = False
    castle = None
    changes: dict[Square, Piece | None] = {move.from_sq: None, move.to_sq: piece}

    if piece.piece_type == PieceType.PAWN:
        # 2. En passant, double push, promotion.
        if move.to_sq == state.en_passant:
            passed_sq = make_square(move.to_sq.file, move.from_sq.rank)
            passed_pawn = board[passed_sq]
            if passed_pawn is not None:
                is_en_passant = True
                captured_piece = passed_pawn
                captured[mover] = (*captured[mover], passed_pawn.piece_type)
                changes[passed_sq] = None

        if abs(move.to_sq.rank - move.from_sq.rank) == 2:
            en_passant = make_square(
                move.from_sq.file, (move.from_sq.rank + move.to_sq.rank) // 2
            )

        promotion = effective_promotion(piece, move)
        if promotion is not None:
            changes[move.to_sq] = Piece(mover, promotion)
    else:
        # 3. King and rook bookkeeping.
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(mover)
            castle = castle_side_of(piece, move.from_sq, move.to_sq)
            if castle is not None:
                path = CASTLE_PATHS[(mover, castle)]
                changes[path.rook_from] = None
                changes[path.rook_to] = board[path.rook_from]
        elif piece.piece_type == PieceType.ROOK and move.from_sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[move.from_sq]

    # 4-5. Relocate, flip the turn, advance the clocks.
    if piece.piece_type == PieceType.PAWN or captured_piece is not None:
        halfmove_clock = 0
    else:
        halfmove_clock = state.halfmove_clock + 1
    fullmove_number = state.fullmove_number + (1 if mover == Color.BLACK else 0)

    next_state = dataclasses.replace(
        state,
        board=board.replace(changes),
        turn=mover.opposite,
        castling=castling,
        en_passant=en_passant,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
        captured=(captured[0], captured[1]),
        check=False,
        checkmate=False,
        stalemate=False,
    )

    # 6. Check for the side now to move.
    gen = MoveGenerator(next_state)
    in_check = gen.is_in_check(next_state.turn)

    # 7-8. History record and terminal detection.
    notation = move_to_san(state, move, gives_check=in_check)
    no_moves = not gen.has_any_legal_move()
    checkmate = in_check and no_moves
    if checkmate:
        notation = mark_mate(notation)

    record = MoveRecord(
        from_sq=move.from_sq,
        to_sq=move.to_sq,
        promotion=effective_promotion(piece, move),
        piece=piece,
        captured_piece=captured_piece,
        is_check=in_check,
        is_checkmate=checkmate,
        is_en_passant=is_en_passant,
        castle=castle,
        notation=notation,
    )
    if checkmate:
        _LOGGER.info("Checkmate: %s wins after %s", mover, notation)

    return dataclasses.replace(
        next_state,
        check=in_check,
        checkmate=checkmate,
        stalemate=no_moves and not in_check,
        history=(*state.history, record),
    )
