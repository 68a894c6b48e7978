"""Tests for decoding free-form move text."""

import pytest

from chatmate.core.enums import PieceType
from chatmate.core.move import Move
from chatmate.core.move_generator import MoveGenerator
from chatmate.core.notation import (
    DecodeFailure,
    move_to_san,
    parse_move_text,
    position_from_fen,
)
from chatmate.core.notation.san import effective_promotion
from chatmate.core.state import GameState
from chatmate.core.transition import apply_move
from chatmate.core.types import A7, A8, B1, C1, D2, E1, E2, E4, G1, parse_square

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
PROMOTION_FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"
TWIN_KNIGHTS_FEN = "4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1"
F3 = parse_square("f3")


class TestLongForm:
    def test_coordinates(self, initial: GameState) -> None:
        assert parse_move_text(initial, "e2e4") == Move(E2, E4)

    def test_with_dash(self, initial: GameState) -> None:
        assert parse_move_text(initial, "g1-f3") == Move(G1, F3)

    @pytest.mark.parametrize("text", ["e9e4", "e2e5", "e7e5", "e3e4"])
    def test_off_board_or_illegal(self, initial: GameState, text: str) -> None:
        assert isinstance(parse_move_text(initial, text), DecodeFailure)

    def test_promotion_defaults_to_queen(self) -> None:
        state = position_from_fen(PROMOTION_FEN)
        assert parse_move_text(state, "a7a8") == Move(A7, A8, PieceType.QUEEN)

    def test_promotion_letter(self) -> None:
        state = position_from_fen(PROMOTION_FEN)
        assert parse_move_text(state, "a7a8n") == Move(A7, A8, PieceType.KNIGHT)


class TestCastling:
    @pytest.mark.parametrize("text", ["O-O", "0-0", "o-o", "O-O+"])
    def test_kingside(self, text: str) -> None:
        state = position_from_fen(CASTLING_FEN)
        assert parse_move_text(state, text) == Move(E1, G1)

    @pytest.mark.parametrize("text", ["O-O-O", "0-0-0"])
    def test_queenside(self, text: str) -> None:
        state = position_from_fen(CASTLING_FEN)
        assert parse_move_text(state, text) == Move(E1, C1)

    def test_black_side(self) -> None:
        state = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        assert parse_move_text(state, "O-O") == Move(
            parse_square("e8"), parse_square("g8")
        )

    def test_unavailable(self, initial: GameState) -> None:
        failure = parse_move_text(initial, "O-O")
        assert isinstance(failure, DecodeFailure)
        assert "O-O" in failure.reason


class TestShortForm:
    def test_pawn(self, initial: GameState) -> None:
        assert parse_move_text(initial, "e4") == Move(E2, E4)

    def test_piece(self, initial: GameState) -> None:
        assert parse_move_text(initial, "Nf3") == Move(G1, F3)

    def test_lowercase_piece_letter(self, initial: GameState) -> None:
        assert parse_move_text(initial, "nf3") == Move(G1, F3)

    def test_explicit_pawn_letter(self, initial: GameState) -> None:
        assert parse_move_text(initial, "Pe4") == Move(E2, E4)

    @pytest.mark.parametrize(
        "text", ["1. e4", "1.e4", '"e4"', "e4!", "e4?!", "  e4  ", "e4."]
    )
    def test_noise_is_ignored(self, initial: GameState, text: str) -> None:
        assert parse_move_text(initial, text) == Move(E2, E4)

    def test_capture_markers(self, initial: GameState) -> None:
        state = apply_move(initial, Move(E2, E4))
        state = apply_move(state, Move(parse_square("d7"), parse_square("d5")))
        expected = Move(E4, parse_square("d5"))
        assert parse_move_text(state, "exd5") == expected
        assert parse_move_text(state, "e:d5") == expected
        assert parse_move_text(state, "ed5") == expected

    def test_ambiguous(self) -> None:
        state = position_from_fen(TWIN_KNIGHTS_FEN)
        failure = parse_move_text(state, "Nd2")
        assert isinstance(failure, DecodeFailure)
        assert "ambiguous" in failure.reason

    def test_file_hint(self) -> None:
        state = position_from_fen(TWIN_KNIGHTS_FEN)
        assert parse_move_text(state, "Nbd2") == Move(B1, D2)

    def test_square_hint(self) -> None:
        state = position_from_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
        assert parse_move_text(state, "Ra1a3") == Move(
            parse_square("a1"), parse_square("a3")
        )
        assert parse_move_text(state, "R5a3") == Move(
            parse_square("a5"), parse_square("a3")
        )

    def test_no_candidate(self, initial: GameState) -> None:
        failure = parse_move_text(initial, "Nd2")
        assert isinstance(failure, DecodeFailure)
        assert "knight" in failure.reason

    @pytest.mark.parametrize("text", ["a8=N", "a8N", "a8=n"])
    def test_promotion_suffix(self, text: str) -> None:
        state = position_from_fen(PROMOTION_FEN)
        assert parse_move_text(state, text) == Move(A7, A8, PieceType.KNIGHT)

    def test_promotion_without_suffix(self) -> None:
        state = position_from_fen(PROMOTION_FEN)
        assert parse_move_text(state, "a8") == Move(A7, A8, PieceType.QUEEN)


class TestFailures:
    @pytest.mark.parametrize(
        "text", [None, "", "   ", "Zf3", "I think Nf3 is best", "castle", "Ke"]
    )
    def test_garbage(self, initial: GameState, text: str | None) -> None:
        outcome = parse_move_text(initial, text)
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason

    def test_failure_str_names_text(self, initial: GameState) -> None:
        failure = parse_move_text(initial, "e9e4")
        assert isinstance(failure, DecodeFailure)
        assert "'e9e4'" in str(failure)


class TestRoundTrip:
    @pytest.mark.parametrize(
        "fen",
        [
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            CASTLING_FEN,
            TWIN_KNIGHTS_FEN,
            "4k3/8/8/R7/8/8/8/R3K3 w - - 0 1",
            "1n2k3/P7/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/2pPp3/8/8/8/4K3 w - e6 0 1",
            "r1bqkb1r/pppp1ppp/2n2n2/4p2Q/2B1P3/8/PPPP1PPP/RNB1K1NR w KQkq - 4 4",
        ],
    )
    def test_notation_decodes_to_same_move(self, fen: str) -> None:
        state = position_from_fen(fen)
        for origin, dests in MoveGenerator(state).legal_moves_by_origin().items():
            piece = state.board[origin]
            assert piece is not None
            for dest in dests:
                move = Move(origin, dest)
                move = Move(origin, dest, effective_promotion(piece, move))
                san = move_to_san(state, move)
                assert parse_move_text(state, san) == move, san

    def test_decoded_moves_are_accepted(self, initial: GameState) -> None:
        for text in ("e4", "Nf3", "Nc3", "h3", "a2a4"):
            move = parse_move_text(initial, text)
            assert isinstance(move, Move)
            assert apply_move(initial, move) is not initial
