"""GameState: complete, immutable game state (board + metadata + history)."""

from __future__ import annotations

from dataclasses import dataclass, field

from chatmate.core.board import Board
from chatmate.core.enums import CastlingRights, Color, PieceType
from chatmate.core.move import MoveRecord
from chatmate.core.types import Square


@dataclass(frozen=True, slots=True)
class GameState:
    """Full chess state: board, side to move, rights, clocks and history.

    Every accepted move produces a fresh instance (see
    :func:`chatmate.core.transition.apply_move`); instances are never
    modified. ``captured`` is indexed by :class:`Color` and lists the kinds
    that side has taken, in capture order.
    """

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    check: bool = False
    checkmate: bool = False
    stalemate: bool = False
    history: tuple[MoveRecord, ...] = ()
    captured: tuple[tuple[PieceType, ...], tuple[PieceType, ...]] = ((), ())
    game_over: bool = False
    winner: Color | None = None

    def __post_init__(self) -> None:
        if self.halfmove_clock < 0:
            raise ValueError(f"Halfmove clock must be >= 0, got {self.halfmove_clock}")
        if self.fullmove_number < 1:
            raise ValueError(f"Fullmove number must be >= 1, got {self.fullmove_number}")
        if self.checkmate and self.stalemate:
            raise ValueError("A state cannot be both checkmate and stalemate")

    @classmethod
    def initial(cls) -> GameState:
        """Standard start: all castling rights, empty history."""
        return cls()

    def captured_by(self, color: Color) -> tuple[PieceType, ...]:
        """Piece kinds captured by *color* so far."""
        return self.captured[int(color)]

    def can_castle(self, rights: CastlingRights) -> bool:
        return bool(self.castling & rights)

    @property
    def last_move(self) -> MoveRecord | None:
        return self.history[-1] if self.history else None

    @property
    def is_terminal(self) -> bool:
        """Checkmate, stalemate or a captured king."""
        return self.checkmate or self.stalemate or self.game_over
