"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chatmate.core.enums import Color, PieceType


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Position-string letter (uppercase = white, lowercase = black)."""
        letter = self.piece_type.letter
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a position-string letter, e.g. 'n' → black knight."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        try:
            return cls(color, PieceType.from_letter(char))
        except ValueError:
            raise ValueError(f"Invalid piece character: {char!r}") from None

    def is_enemy_of(self, color: Color) -> bool:
        return self.color != color
