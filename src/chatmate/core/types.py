"""Square value type and coordinate helpers.

Files and ranks are zero-based: file 0 is ``a``, rank 0 is ``1``. The 64
squares are interned, so ``make_square`` and ``Square.parse`` always return
the same instance for the same coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Square:
    """A board address with explicit file and rank indexes."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not (0 <= self.file < 8 and 0 <= self.rank < 8):
            raise ValueError(f"Square out of range: file={self.file}, rank={self.rank}")

    @classmethod
    def parse(cls, name: str) -> Square:
        """Parse a square name, e.g. ``'e4'``."""
        if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return make_square(FILES.index(name[0]), RANKS.index(name[1]))

    @property
    def index(self) -> int:
        """Position in a1, b1, ..., h8 order."""
        return self.rank * 8 + self.file

    @property
    def name(self) -> str:
        return FILES[self.file] + RANKS[self.rank]

    @property
    def file_char(self) -> str:
        return FILES[self.file]

    @property
    def rank_char(self) -> str:
        return RANKS[self.rank]

    def offset(self, df: int, dr: int) -> Square | None:
        """Square shifted by (*df*, *dr*), or ``None`` when off the board."""
        f = self.file + df
        r = self.rank + dr
        if 0 <= f < 8 and 0 <= r < 8:
            return _SQUARES[r * 8 + f]
        return None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Square({self.name})"


_SQUARES: tuple[Square, ...] = tuple(Square(i & 7, i >> 3) for i in range(64))

ALL_SQUARES: tuple[Square, ...] = _SQUARES


def make_square(file: int, rank: int) -> Square:
    """Interned square for file (0–7) and rank (0–7)."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"Square out of range: file={file}, rank={rank}")
    return _SQUARES[rank * 8 + file]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4'."""
    return Square.parse(name)


def is_square_name(name: str) -> bool:
    return len(name) == 2 and name[0] in FILES and name[1] in RANKS


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = _SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = _SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = _SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = _SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = _SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = _SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = _SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = _SQUARES[56:64]
