"""Move value objects: the requested move and its history record."""

from __future__ import annotations

from dataclasses import dataclass

from chatmate.core.enums import CastleSide, PieceType
from chatmate.core.piece import Piece
from chatmate.core.types import Square


@dataclass(frozen=True, slots=True)
class Move:
    """A structured move request: origin, destination, optional promotion."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += self.promotion.letter.lower()
        return base

    @property
    def uci(self) -> str:
        """Long coordinate notation, e.g. ``e7e8q``."""
        return str(self)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single applied move as kept in the game history."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None
    piece: Piece
    captured_piece: Piece | None
    is_check: bool
    is_checkmate: bool
    is_en_passant: bool
    castle: CastleSide | None
    notation: str

    @property
    def move(self) -> Move:
        return Move(self.from_sq, self.to_sq, self.promotion)

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None
