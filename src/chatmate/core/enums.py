"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Side-to-move field of the position string."""
        return "w" if self == Color.WHITE else "b"

    @property
    def home_rank(self) -> int:
        return 0 if self == Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def pawn_direction(self) -> int:
        return 1 if self == Color.WHITE else -1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Uppercase letter used in notation and position strings."""
        return _LETTERS[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        try:
            return _FROM_LETTER[letter.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class CastleSide(Enum):
    """Direction of a castling move."""

    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"

    @property
    def symbol(self) -> str:
        return "O-O" if self is CastleSide.KINGSIDE else "O-O-O"


class CastlingRights(IntFlag):
    """Bitmask for castling availability.

    Rights are only ever cleared during a game.
    """

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastleSide) -> CastlingRights:
        if color == Color.WHITE:
            if side is CastleSide.KINGSIDE:
                return cls.WHITE_KINGSIDE
            return cls.WHITE_QUEENSIDE
        if side is CastleSide.KINGSIDE:
            return cls.BLACK_KINGSIDE
        return cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS
