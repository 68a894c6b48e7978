"""Position string (FEN layout) serialization and parsing.

The serialized form is the contract with the move-suggestion provider, so
:func:`position_to_fen` must stay byte-for-byte stable.
"""

from __future__ import annotations

import dataclasses

from chatmate.core.board import Board
from chatmate.core.enums import CastlingRights, Color
from chatmate.core.move_generator import MoveGenerator
from chatmate.core.piece import Piece
from chatmate.core.state import GameState
from chatmate.core.types import Square, is_square_name, make_square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_SIDES: dict[str, Color] = {color.fen_char: color for color in Color}


# -- Encoding ---------------------------------------------------------------


def position_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to its six-field position string."""
    castling = "".join(ch for ch, right in _CASTLING_CHARS if state.castling & right)
    fields = (
        _encode_placement(state.board),
        state.turn.fen_char,
        castling or "-",
        state.en_passant.name if state.en_passant is not None else "-",
        str(state.halfmove_clock),
        str(state.fullmove_number),
    )
    return " ".join(fields)


def _encode_placement(board: Board) -> str:
    rows: list[str] = []
    for rank in reversed(range(8)):
        row = ""
        gap = 0
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                gap += 1
                continue
            if gap:
                row += str(gap)
                gap = 0
            row += str(piece)
        rows.append(row + (str(gap) if gap else ""))
    return "/".join(rows)


# -- Decoding ---------------------------------------------------------------


def position_from_fen(fen: str) -> GameState:
    """Parse a position string into a fresh :class:`GameState`.

    The two clock fields may be omitted. History and capture ledgers start
    empty. ``check`` is computed for the side to move, and a side to move
    with no moves at all yields ``checkmate`` or ``stalemate``. Malformed
    input raises ``ValueError``.
    """
    fields = fen.split()
    if len(fields) not in (4, 5, 6):
        raise ValueError(f"Position string needs 4-6 fields, got {len(fields)}: {fen!r}")

    turn = _SIDES.get(fields[1])
    if turn is None:
        raise ValueError(f"Bad side to move {fields[1]!r} in {fen!r}")

    state = GameState(
        board=_decode_placement(fields[0]),
        turn=turn,
        castling=_decode_castling(fields[2]),
        en_passant=_decode_en_passant(fields[3], turn),
        halfmove_clock=_decode_counter(fields, 4, default=0, minimum=0),
        fullmove_number=_decode_counter(fields, 5, default=1, minimum=1),
    )
    gen = MoveGenerator(state)
    in_check = gen.is_in_check(turn)
    no_moves = not gen.has_any_legal_move()
    return dataclasses.replace(
        state,
        check=in_check,
        checkmate=in_check and no_moves,
        stalemate=no_moves and not in_check,
    )


def _decode_placement(placement: str) -> Board:
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Piece placement needs 8 ranks, got {len(rows)}: {placement!r}")
    changes: dict[Square, Piece | None] = {}
    for rank, row in zip(reversed(range(8)), rows):
        file = 0
        for ch in row:
            if file >= 8:
                raise ValueError(f"Rank {rank + 1} is wider than 8 squares: {row!r}")
            if ch.isdigit():
                if not 1 <= int(ch) <= 8:
                    raise ValueError(f"Bad empty-square count {ch!r} in {row!r}")
                file += int(ch)
                continue
            changes[make_square(file, rank)] = Piece.from_char(ch)
            file += 1
        if file != 8:
            raise ValueError(f"Rank {rank + 1} does not cover 8 squares: {row!r}")
    return Board.empty().replace(changes)


def _decode_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    rights = dict(_CASTLING_CHARS)
    castling = CastlingRights.NONE
    for ch in text:
        right = rights.get(ch)
        if right is None or castling & right:
            raise ValueError(f"Bad castling field {text!r}")
        castling |= right
    return castling


def _decode_en_passant(text: str, turn: Color) -> Square | None:
    if text == "-":
        return None
    if not is_square_name(text):
        raise ValueError(f"Bad en-passant field {text!r}")
    target = parse_square(text)
    # The skipped square sits behind the pawn that just moved.
    if target.rank != turn.opposite.home_rank + 2 * turn.opposite.pawn_direction:
        raise ValueError(f"En-passant target {text!r} does not fit {turn} to move")
    return target


def _decode_counter(fields: list[str], idx: int, *, default: int, minimum: int) -> int:
    if len(fields) <= idx:
        return default
    text = fields[idx]
    if not text.isdigit() or int(text) < minimum:
        raise ValueError(f"Bad move counter {text!r}")
    return int(text)
