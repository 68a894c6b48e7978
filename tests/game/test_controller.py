"""Tests for GameController, the orchestrator."""

from chatmate.core.enums import Color, GameResult
from chatmate.core.move import Move
from chatmate.core.state import GameState
from chatmate.core.types import E2, E4, E5, E7, parse_square
from chatmate.game.controller import GameController
from chatmate.game.interfaces import GamePhase
from chatmate.game.player import AIPlayer, HumanPlayer

SMOTHERED_MATE_FEN = "5brk/4p1pr/4P2p/4N2P/8/8/8/K7 w - - 0 1"
LOCKED_STALEMATE_FEN = "6bk/1p1p1prp/pPpPpPpP/P1P1P1P1/8/8/8/K7 b - - 0 1"


def _make_hh_controller(fen: str | None = None) -> GameController:
    """Helper: human vs human game."""
    ctrl = GameController()
    ctrl.new_game(HumanPlayer(Color.WHITE, "W"), HumanPlayer(Color.BLACK, "B"), fen=fen)
    return ctrl


class TestNewGame:
    def test_not_started_before_new_game(self) -> None:
        assert GameController().phase == GamePhase.NOT_STARTED

    def test_phase_awaiting(self) -> None:
        assert _make_hh_controller().phase == GamePhase.AWAITING_MOVE

    def test_players_assigned(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.player(Color.WHITE) is not None
        assert ctrl.player(Color.BLACK) is not None

    def test_current_player_is_white(self) -> None:
        cp = _make_hh_controller().current_player
        assert cp is not None and cp.color == Color.WHITE

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert _make_hh_controller(fen=fen).state.turn == Color.BLACK

    def test_default_names(self) -> None:
        assert HumanPlayer(Color.BLACK).name == "Player (black)"


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move(Move(E2, E4))
        assert ctrl.state.turn == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_hh_controller()
        reasons: list[str] = []
        ctrl.events.on_move_rejected.append(reasons.append)
        before = ctrl.state
        assert not ctrl.submit_move(Move(E2, E5))
        assert ctrl.state is before
        assert reasons == ["e2e5: e5 is not reachable from e2"]

    def test_move_event_fires(self) -> None:
        ctrl = _make_hh_controller()
        events: list[tuple[Move, str]] = []
        def on_move(move: Move, state: GameState) -> None:
            assert state.last_move is not None
            events.append((move, state.last_move.notation))

        ctrl.events.on_move.append(on_move)
        ctrl.submit_move(Move(E2, E4))
        assert events == [(Move(E2, E4), "e4")]

    def test_move_text(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move_text("e4")
        assert ctrl.submit_move_text("1... e5")
        assert ctrl.state.board[E5] is not None

    def test_bad_move_text(self) -> None:
        ctrl = _make_hh_controller()
        reasons: list[str] = []
        ctrl.events.on_move_rejected.append(reasons.append)
        assert not ctrl.submit_move_text("I resign")
        assert len(reasons) == 1
        assert reasons[0].startswith("Cannot decode")
        assert ctrl.state.history == ()

    def test_not_started_rejects_moves(self) -> None:
        assert not GameController().submit_move(Move(E2, E4))


class TestGameOver:
    def test_checkmate(self) -> None:
        ctrl = _make_hh_controller(SMOTHERED_MATE_FEN)
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        assert ctrl.submit_move_text("Ng6")
        assert results == [GameResult.WHITE_WINS]
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.result == GameResult.WHITE_WINS

    def test_king_capture(self) -> None:
        ctrl = _make_hh_controller()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        for text in ("f3", "e5", "g4", "Qh4", "a3", "Qxe1"):
            assert ctrl.submit_move_text(text), text
        assert results == [GameResult.BLACK_WINS]
        assert ctrl.state.last_move is not None
        assert ctrl.state.last_move.notation == "a3"

    def test_loaded_stalemate_ends_at_once(self) -> None:
        ctrl = GameController()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.new_game(
            HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK), fen=LOCKED_STALEMATE_FEN
        )
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.result == GameResult.DRAW
        assert results == [GameResult.DRAW]
        assert not ctrl.submit_move_text("Kg7")

    def test_no_moves_after_game_over(self) -> None:
        ctrl = _make_hh_controller(SMOTHERED_MATE_FEN)
        ctrl.submit_move_text("Ng6")
        assert not ctrl.submit_move_text("Kg7")
        assert not ctrl.undo_move()


class TestUndo:
    def test_undo_one_ply(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.submit_move(Move(E2, E4))
        ctrl.submit_move(Move(E7, E5))
        assert ctrl.undo_move()
        assert ctrl.state.turn == Color.BLACK
        assert len(ctrl.state.history) == 1

    def test_undo_two_plies_restores_same_state(self) -> None:
        ctrl = _make_hh_controller()
        start = ctrl.state
        ctrl.submit_move(Move(E2, E4))
        ctrl.submit_move(Move(E7, E5))
        assert ctrl.undo_move(2)
        assert ctrl.state is start

    def test_nothing_to_undo(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.undo_move()
        ctrl.submit_move(Move(E2, E4))
        assert not ctrl.undo_move(2)
        assert not ctrl.undo_move(0)


class TestAIPlayer:
    def test_ai_is_prompted_with_state(self) -> None:
        requests: list[GameState] = []
        ctrl = GameController()
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            AIPlayer(Color.BLACK, on_request_move=requests.append),
        )
        ctrl.submit_move(Move(E2, E4))
        assert ctrl.phase == GamePhase.THINKING
        assert len(requests) == 1
        assert requests[0] is ctrl.state
        assert requests[0].turn == Color.BLACK

    def test_ai_reply_hands_turn_back(self) -> None:
        ctrl = GameController()
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            AIPlayer(Color.BLACK, on_request_move=lambda _state: None),
        )
        ctrl.submit_move(Move(E2, E4))
        assert ctrl.submit_move_text("e5")
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_synchronous_ai(self) -> None:
        ctrl = GameController()

        def reply(_state: GameState) -> None:
            ctrl.submit_move_text("e5")

        ctrl.new_game(HumanPlayer(Color.WHITE), AIPlayer(Color.BLACK, on_request_move=reply))
        ctrl.submit_move_text("e4")
        assert [r.notation for r in ctrl.state.history] == ["e4", "e5"]
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_ai_moves_first_as_white(self) -> None:
        requests: list[GameState] = []
        ctrl = GameController()
        ctrl.new_game(
            AIPlayer(Color.WHITE, on_request_move=requests.append),
            HumanPlayer(Color.BLACK),
        )
        assert ctrl.phase == GamePhase.THINKING
        assert len(requests) == 1

    def test_rejected_ai_text_keeps_thinking(self) -> None:
        ctrl = GameController()
        ctrl.new_game(HumanPlayer(Color.WHITE), AIPlayer(Color.BLACK))
        ctrl.submit_move(Move(E2, E4))
        assert not ctrl.submit_move_text("Qxe1")
        assert ctrl.phase == GamePhase.THINKING
        assert ctrl.state.turn == Color.BLACK

    def test_undo_cancels_pending_request(self) -> None:
        cancels: list[int] = []
        ctrl = GameController()
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            AIPlayer(Color.BLACK, on_cancel=lambda: cancels.append(1)),
        )
        ctrl.submit_move(Move(E2, E4))
        assert ctrl.undo_move()
        assert cancels == [1]
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.board[E2] is not None

    def test_phase_events(self) -> None:
        phases: list[GamePhase] = []
        ctrl = GameController()
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game(HumanPlayer(Color.WHITE), AIPlayer(Color.BLACK))
        ctrl.submit_move(Move(E2, E4))
        ctrl.submit_move(Move(E7, E5))
        assert phases == [
            GamePhase.AWAITING_MOVE,
            GamePhase.THINKING,
            GamePhase.AWAITING_MOVE,
        ]

    def test_player_lookup(self) -> None:
        ai = AIPlayer(Color.BLACK, name="gpt-3.5-turbo")
        ctrl = GameController()
        ctrl.new_game(HumanPlayer(Color.WHITE), ai)
        assert ctrl.player(Color.BLACK) is ai
        assert not ai.is_human
        assert ctrl.state.board[parse_square("e8")] is not None
