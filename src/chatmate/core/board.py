"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chatmate.core.enums import Color, PieceType
from chatmate.core.piece import Piece
from chatmate.core.types import ALL_SQUARES, Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Total mapping of the 64 squares to ``Piece | None``.

    Boards are never modified; :meth:`replace` returns a new board that
    shares nothing mutable with the original.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq.index]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq.index] is None

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, in a1..h8 order."""
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Square]:
        """Squares occupied by *color* (optionally only its *piece_type*)."""
        return [
            sq
            for sq, piece in self
            if piece.color == color
            and (piece_type is None or piece.piece_type == piece_type)
        ]

    def king_square(self, color: Color) -> Square | None:
        """First square holding *color*'s king, or ``None`` if it is gone."""
        for sq, piece in self:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    # -- Copy-on-write ------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied (``None`` empties a square)."""
        if not changes:
            return self
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[sq.index] = piece
        return Board(tuple(squares))

    def move_piece(self, from_sq: Square, to_sq: Square) -> Board:
        """New board with the piece on *from_sq* relocated to *to_sq*."""
        return self.replace({from_sq: None, to_sq: self[from_sq]})

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        placement: dict[Square, Piece | None] = {}
        for f in range(8):
            placement[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            placement[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
        for f, pt in enumerate(_BACK_RANK):
            placement[make_square(f, 0)] = Piece(Color.WHITE, pt)
            placement[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls().replace(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
