"""Tests for the square value type, pieces and the board."""

import pytest

from chatmate.core.board import Board
from chatmate.core.enums import Color, PieceType
from chatmate.core.piece import Piece
from chatmate.core.types import (
    ALL_SQUARES,
    A1,
    D8,
    E1,
    E2,
    E4,
    F5,
    H8,
    Square,
    make_square,
    parse_square,
)


class TestSquare:
    def test_parse_returns_interned_instance(self) -> None:
        assert parse_square("e4") is E4
        assert Square.parse("e4") is make_square(4, 3)

    def test_file_and_rank(self) -> None:
        assert (E4.file, E4.rank) == (4, 3)
        assert E4.name == "e4"
        assert str(E4) == "e4"

    @pytest.mark.parametrize("name", ["e9", "i1", "", "e", "e44", "E4"])
    def test_parse_rejects_bad_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_constructor_validates_range(self) -> None:
        with pytest.raises(ValueError):
            Square(8, 0)
        with pytest.raises(ValueError):
            make_square(0, -1)

    def test_value_equality(self) -> None:
        assert Square(4, 3) == E4
        assert hash(Square(4, 3)) == hash(E4)

    def test_offset(self) -> None:
        assert E4.offset(1, 1) is F5
        assert H8.offset(1, 0) is None
        assert A1.offset(0, -1) is None

    def test_all_squares_in_board_order(self) -> None:
        assert len(ALL_SQUARES) == 64
        assert ALL_SQUARES[0] is A1
        assert ALL_SQUARES[63] is H8
        assert all(sq.index == i for i, sq in enumerate(ALL_SQUARES))


class TestPiece:
    def test_str_is_position_letter(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.QUEEN)) == "Q"
        assert str(Piece(Color.BLACK, PieceType.KNIGHT)) == "n"

    def test_from_char(self) -> None:
        assert Piece.from_char("n") == Piece(Color.BLACK, PieceType.KNIGHT)
        assert Piece.from_char("K") == Piece(Color.WHITE, PieceType.KING)

    @pytest.mark.parametrize("char", ["x", "1", "", "kk"])
    def test_from_char_rejects_garbage(self, char: str) -> None:
        with pytest.raises(ValueError):
            Piece.from_char(char)


class TestBoard:
    def test_initial_placement(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[D8] == Piece(Color.BLACK, PieceType.QUEEN)
        assert len(list(board)) == 32

    def test_replace_is_copy_on_write(self) -> None:
        board = Board.initial()
        moved = board.replace({E2: None, E4: Piece(Color.WHITE, PieceType.PAWN)})
        assert moved is not board
        assert board[E2] == Piece(Color.WHITE, PieceType.PAWN)
        assert board.is_empty(E4)
        assert moved.is_empty(E2)
        assert moved[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_replace_without_changes_returns_same_board(self) -> None:
        board = Board.initial()
        assert board.replace({}) is board

    def test_move_piece(self) -> None:
        board = Board.initial().move_piece(E2, E4)
        assert board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert board[E2] is None

    def test_pieces_filter(self) -> None:
        board = Board.initial()
        assert len(board.pieces(Color.WHITE)) == 16
        assert board.pieces(Color.BLACK, PieceType.QUEEN) == [D8]

    def test_king_square(self) -> None:
        assert Board.initial().king_square(Color.WHITE) is E1
        assert Board.empty().king_square(Color.BLACK) is None

    def test_equality_and_hash(self) -> None:
        assert Board.initial() == Board.initial()
        assert hash(Board.initial()) == hash(Board.initial())
        assert Board.initial() != Board.empty()

    def test_wrong_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            Board((None,) * 63)
