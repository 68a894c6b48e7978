"""Pseudo-legal move generation + attack detection.

Moves are reported as destination squares per origin square. Moves that
leave the mover's own king attacked are *not* filtered out: only castling
consults the attack oracle. A king that can be reached is therefore a
capturable target, which ends the game (see :mod:`chatmate.core.transition`).
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, NamedTuple

from chatmate.core.enums import CastleSide, CastlingRights, Color, PieceType
from chatmate.core.piece import Piece
from chatmate.core.types import ALL_SQUARES, Square, make_square

if TYPE_CHECKING:
    from chatmate.core.state import GameState


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


class CastlePath(NamedTuple):
    """Fixed squares involved in one castling move."""

    king_from: Square
    king_to: Square
    transit: Square
    rook_from: Square
    rook_to: Square
    between: tuple[Square, ...]


def _castle_path(color: Color, side: CastleSide) -> CastlePath:
    r = color.home_rank
    if side is CastleSide.KINGSIDE:
        return CastlePath(
            king_from=make_square(4, r),
            king_to=make_square(6, r),
            transit=make_square(5, r),
            rook_from=make_square(7, r),
            rook_to=make_square(5, r),
            between=(make_square(5, r), make_square(6, r)),
        )
    return CastlePath(
        king_from=make_square(4, r),
        king_to=make_square(2, r),
        transit=make_square(3, r),
        rook_from=make_square(0, r),
        rook_to=make_square(3, r),
        between=(make_square(3, r), make_square(2, r), make_square(1, r)),
    )


CASTLE_PATHS: dict[tuple[Color, CastleSide], CastlePath] = {
    (color, side): _castle_path(color, side)
    for color in Color
    for side in CastleSide
}


def castle_side_of(piece: Piece, from_sq: Square, to_sq: Square) -> CastleSide | None:
    """Castling direction when a king move matches a castle pattern."""
    if piece.piece_type != PieceType.KING:
        return None
    for side in CastleSide:
        path = CASTLE_PATHS[(piece.color, side)]
        if from_sq == path.king_from and to_sq == path.king_to:
            return side
    return None


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in ALL_SQUARES:
        moves = [sq.offset(df, dr) for df, dr in offsets]
        targets.append(tuple(m for m in moves if m is not None))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            nxt = sq.offset(df, dr)
            while nxt is not None:
                ray.append(nxt)
                nxt = nxt.offset(df, dr)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _build_rays(BISHOP_DIRS),
    PieceType.ROOK: _build_rays(ROOK_DIRS),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}


class MoveGenerator:
    """Generates destination squares for a given :class:`GameState`.

    The generator never modifies the state; hypothetical positions used for
    castling checks are built as new states.
    """

    __slots__ = ("_state", "_board")

    def __init__(self, state: GameState) -> None:
        self._state = state
        self._board = state.board

    # -- Public API ---------------------------------------------------------

    def legal_destinations(self, sq: Square) -> frozenset[Square]:
        """Destinations for the piece on *sq* if it belongs to the side to move."""
        piece = self._board[sq]
        if piece is None or piece.color != self._state.turn:
            return frozenset()
        return frozenset(self._destinations(sq, piece, ignoring_check=False))

    def pseudo_destinations(
        self, sq: Square, *, ignoring_check: bool = False
    ) -> frozenset[Square]:
        """Destinations for whatever piece stands on *sq*.

        With *ignoring_check* castling is skipped entirely; this is the mode
        used to test whether a square is attacked.
        """
        piece = self._board[sq]
        if piece is None:
            return frozenset()
        return frozenset(self._destinations(sq, piece, ignoring_check=ignoring_check))

    def legal_moves_by_origin(self) -> dict[Square, frozenset[Square]]:
        """Every origin of the side to move with a non-empty destination set."""
        result: dict[Square, frozenset[Square]] = {}
        for sq, piece in self._board:
            if piece.color != self._state.turn:
                continue
            dests = frozenset(self._destinations(sq, piece, ignoring_check=False))
            if dests:
                result[sq] = dests
        return result

    def has_any_legal_move(self) -> bool:
        """Whether the side to move has at least one destination anywhere."""
        color = self._state.turn
        for sq, piece in self._board:
            if piece.color == color and self._destinations(
                sq, piece, ignoring_check=False
            ):
                return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent? No king means no."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* among the ignoring-check destinations of any *by_color* piece?"""
        for origin, piece in self._board:
            if piece.color != by_color:
                continue
            if sq in self._destinations(origin, piece, ignoring_check=True):
                return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _destinations(
        self, sq: Square, piece: Piece, *, ignoring_check: bool
    ) -> list[Square]:
        moves: list[Square] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, _KNIGHT_TARGETS[sq.index], moves)
        elif pt == PieceType.KING:
            self._gen_steps(sq, piece.color, _KING_TARGETS[sq.index], moves)
            if not ignoring_check:
                self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[pt][sq.index], moves)
        return moves

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        step = color.pawn_direction

        one_step = sq.offset(0, step)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)
            start_rank = 1 if color == Color.WHITE else 6
            if sq.rank == start_rank:
                two_step = sq.offset(0, 2 * step)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(two_step)

        for df in (-1, 1):
            cap_sq = sq.offset(df, step)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None and target.is_enemy_of(color):
                moves.append(cap_sq)
            elif cap_sq == self._state.en_passant:
                moves.append(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.is_enemy_of(color):
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.is_enemy_of(color):
                    moves.append(to_sq)
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        for side in CastleSide:
            path = CASTLE_PATHS[(color, side)]
            if king_sq != path.king_from:
                return
            if not self._state.castling & CastlingRights.for_side(color, side):
                continue
            if not all(board.is_empty(s) for s in path.between):
                continue
            if self.is_in_check(color):
                continue
            if self._would_be_in_check(king_sq, path.transit, color):
                continue
            moves.append(path.king_to)

    def _would_be_in_check(self, from_sq: Square, to_sq: Square, color: Color) -> bool:
        """Would *color* be in check after moving *from_sq* to *to_sq*?"""
        hypothetical = dataclasses.replace(
            self._state, board=self._board.move_piece(from_sq, to_sq)
        )
        return MoveGenerator(hypothetical).is_in_check(color)
