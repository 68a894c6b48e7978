"""Decoding free-form move text (e.g. a text-completion reply) into a Move.

Accepted forms, tried in order:

* castling symbols: ``O-O``, ``O-O-O``, ``0-0``, ``0-0-0``;
* long coordinate notation: ``e2e4``, ``e7e8q``, ``g1-f3``;
* short algebraic notation: ``e4``, ``Nf3``, ``exd5``, ``Rae1``,
  ``R1a3``, ``Qh4e1``, ``e8=Q``.

Every candidate is checked against the move generator, so anything decoded
here is accepted by :func:`chatmate.core.transition.apply_move`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from chatmate.core.enums import CastleSide, PieceType
from chatmate.core.move import Move
from chatmate.core.move_generator import CASTLE_PATHS, MoveGenerator
from chatmate.core.piece import Piece
from chatmate.core.state import GameState
from chatmate.core.types import FILES, RANKS, Square, is_square_name, parse_square

_LOGGER = logging.getLogger(__name__)

_CASTLE_RE = re.compile(r"^(O-O-O|0-0-0|O-O|0-0)[+#]?$", re.IGNORECASE)
_LONG_RE = re.compile(r"^([a-h][1-8])-?([a-h][1-8])=?([qrbnQRBN])?$")
_PROMOTION_RE = re.compile(r"^(.*[a-h][18])=?([QRBNqrbn])$")
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+\s*")
_STRIP_CHARS = "+#x:"
_PIECE_LETTERS = "KQRBNP"
# Lowercase piece letters that cannot be confused with a file letter.
_LOWER_PIECE_LETTERS = "kqrn"


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """Move text that could not be resolved to exactly one legal move."""

    text: str
    reason: str

    def __str__(self) -> str:
        return f"Cannot decode {self.text!r}: {self.reason}"


def parse_move_text(state: GameState, text: str | None) -> Move | DecodeFailure:
    """Decode *text* against *state*; never raises."""
    raw = text or ""
    clean = _normalise(raw)
    if not clean:
        return _fail(raw, "no move text")

    castle = _CASTLE_RE.match(clean)
    if castle is not None:
        side = CastleSide.QUEENSIDE if len(castle.group(1)) == 5 else CastleSide.KINGSIDE
        return _decode_castle(state, raw, side)

    long_form = _LONG_RE.match(clean)
    if long_form is not None:
        return _decode_long(state, raw, *long_form.groups())

    return _decode_short(state, raw, clean)


def _normalise(text: str) -> str:
    clean = " ".join(text.split())
    clean = clean.strip("\"'`")
    clean = _MOVE_NUMBER_RE.sub("", clean)
    return clean.rstrip(".!?").strip()


def _decode_castle(state: GameState, raw: str, side: CastleSide) -> Move | DecodeFailure:
    path = CASTLE_PATHS[(state.turn, side)]
    if path.king_to not in MoveGenerator(state).legal_destinations(path.king_from):
        return _fail(raw, f"{side.symbol} is not available for {state.turn}")
    return Move(path.king_from, path.king_to)


def _decode_long(
    state: GameState, raw: str, from_name: str, to_name: str, promo: str | None
) -> Move | DecodeFailure:
    from_sq = parse_square(from_name)
    to_sq = parse_square(to_name)
    piece = state.board[from_sq]
    if piece is None or piece.color != state.turn:
        return _fail(raw, f"no {state.turn} piece on {from_sq}")
    if to_sq not in MoveGenerator(state).legal_destinations(from_sq):
        return _fail(raw, f"{to_sq} is not reachable from {from_sq}")
    promotion = PieceType.from_letter(promo) if promo else None
    return Move(from_sq, to_sq, _promotion_for(piece, to_sq, promotion))


def _decode_short(state: GameState, raw: str, clean: str) -> Move | DecodeFailure:
    for ch in _STRIP_CHARS:
        clean = clean.replace(ch, "")

    promotion: PieceType | None = None
    promo_match = _PROMOTION_RE.match(clean)
    if promo_match is not None:
        clean, promo_letter = promo_match.groups()
        promotion = PieceType.from_letter(promo_letter)

    if len(clean) < 2 or not is_square_name(clean[-2:]):
        return _fail(raw, "no destination square")
    to_sq = parse_square(clean[-2:])
    rest = clean[:-2].replace("-", "")

    piece_type = PieceType.PAWN
    if rest and (rest[0] in _PIECE_LETTERS or rest[0] in _LOWER_PIECE_LETTERS):
        piece_type = PieceType.from_letter(rest[0])
        rest = rest[1:]

    from_file: int | None = None
    from_rank: int | None = None
    for ch in rest:
        if ch in FILES and from_file is None:
            from_file = FILES.index(ch)
        elif ch in RANKS and from_rank is None:
            from_rank = RANKS.index(ch)
        else:
            return _fail(raw, f"unexpected {ch!r} before the destination")

    gen = MoveGenerator(state)
    candidates: list[Square] = []
    for sq, piece in state.board:
        if piece.color != state.turn or piece.piece_type != piece_type:
            continue
        if from_file is not None and sq.file != from_file:
            continue
        if from_rank is not None and sq.rank != from_rank:
            continue
        if to_sq in gen.legal_destinations(sq):
            candidates.append(sq)

    name = piece_type.name.lower()
    if not candidates:
        return _fail(raw, f"no {name} can reach {to_sq}")
    if len(candidates) > 1:
        origins = ", ".join(sq.name for sq in candidates)
        return _fail(raw, f"ambiguous {name} move to {to_sq} (from {origins})")

    from_sq = candidates[0]
    mover = state.board[from_sq]
    assert mover is not None
    return Move(from_sq, to_sq, _promotion_for(mover, to_sq, promotion))


def _promotion_for(
    piece: Piece, to_sq: Square, requested: PieceType | None
) -> PieceType | None:
    if piece.piece_type != PieceType.PAWN or to_sq.rank != piece.color.promotion_rank:
        return None
    return requested or PieceType.QUEEN


def _fail(text: str, reason: str) -> DecodeFailure:
    _LOGGER.debug("Move text %r rejected: %s", text, reason)
    return DecodeFailure(text, reason)
