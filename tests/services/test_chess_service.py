"""Unit tests for src/services/chess_service.py"""

from typing import Callable

import pytest

from conftest import MATING_PATTERNS, STALEMATE_PATTERN, build_board
from src.api.models import (
    BoardStateRequest,
    BoardStateResponse,
    CheckmateResponse,
    CheckMoveRequest,
    EngineErrorResponse,
    Message,
    MoveInvalidResponse,
    MoveRequest,
    MoveValidResponse,
    QuitRequest,
    StalemateResponse,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.chess.game import Game
from src.chess.square import Square
from src.core.config import STARTING_POSITION_FEN
from src.core.shared_types import Side, Status
from src.services.chess_service import ChessService


@pytest.fixture
def service() -> ChessService:
    """A service owning a fresh game in the standard starting position"""
    return ChessService(Game.new_game())


def service_with(placement: dict[str, str], which_turn: Side = Side.WHITE) -> ChessService:
    return ChessService(Game(board=build_board(placement), which_turn=which_turn))


def move(from_to: str) -> MoveRequest:
    return MoveRequest(from_square=from_to[:2], to_square=from_to[2:])


# --- VALID MOVES ---
def test_valid_moves(service: ChessService) -> None:
    response = service.handle(ValidMovesRequest(square="b1"))
    assert isinstance(response, ValidMovesResponse)
    assert response.square == "b1"
    assert set(response.destinations) == {"a3", "c3"}


@pytest.mark.parametrize("square", ["e4", "e7", "d8"])
def test_no_valid_moves(service: ChessService, square: str) -> None:
    """Empty square, or a piece of the side that is not to move"""
    response = service.handle(ValidMovesRequest(square=square))
    assert isinstance(response, ValidMovesResponse)
    assert response.destinations == []


# --- BOARD STATE ---
def test_board_state(service: ChessService) -> None:
    response = service.handle(BoardStateRequest())
    assert response == BoardStateResponse(
        fen=STARTING_POSITION_FEN, which_turn=Side.WHITE, history=[], move_number=1
    )


# --- MAKING MOVES ---
def test_accepted_move_returns_the_new_board(service: ChessService) -> None:
    response = service.handle(move("e2e4"))
    assert isinstance(response, BoardStateResponse)
    assert response.fen == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
    assert response.which_turn == Side.BLACK
    assert response.history == ["e2e4"]


def test_a_game_of_several_moves(service: ChessService) -> None:
    for uci in ["e2e4", "e7e5", "g1f3", "b8c6", "f1b5"]:
        response = service.handle(move(uci))
        assert isinstance(response, BoardStateResponse)

    assert response.history == ["e2e4", "e7e5", "g1f3", "b8c6", "f1b5"]
    assert response.which_turn == Side.BLACK
    assert response.move_number == 3


@pytest.mark.parametrize("uci", ["e2e5", "e7e5", "e3e4", "d1d3"])
def test_rejected_move(service: ChessService, uci: str) -> None:
    """Anything outside the valid destinations is answered with MoveInvalid and the board does not change"""
    before = service.handle(BoardStateRequest())
    response = service.handle(move(uci))

    assert isinstance(response, MoveInvalidResponse)
    assert response.uci == uci
    assert response.reason
    assert service.handle(BoardStateRequest()) == before


@pytest.mark.parametrize("pattern", MATING_PATTERNS.keys())
def test_checkmate_response(pattern: str) -> None:
    placement, uci = MATING_PATTERNS[pattern]
    service = service_with(placement)
    response = service.handle(move(uci))

    assert isinstance(response, CheckmateResponse)
    assert response.winner == Side.WHITE
    assert response.fen == service.game.board.to_fen()
    assert service.game.status == Status.CHECKMATE


def test_stalemate_response() -> None:
    placement, uci = STALEMATE_PATTERN
    service = service_with(placement)
    response = service.handle(move(uci))

    assert isinstance(response, StalemateResponse)
    assert service.game.status == Status.STALEMATE


def test_moves_after_the_end_are_rejected() -> None:
    placement, uci = STALEMATE_PATTERN
    service = service_with(placement)
    service.handle(move(uci))

    response = service.handle(move("h8h7"))
    assert isinstance(response, MoveInvalidResponse)


# --- CHECK MOVE ---
def test_check_move(service: ChessService) -> None:
    response = service.handle(CheckMoveRequest(from_square="g1", to_square="f3"))
    assert response == MoveValidResponse(from_square="g1", to_square="f3")
    # nothing committed
    assert service.game.history == []
    assert service.game.board.piece(Square.from_algebraic("g1")) is not None


def test_check_move_invalid(service: ChessService) -> None:
    response = service.handle(CheckMoveRequest(from_square="g1", to_square="g3"))
    assert isinstance(response, MoveInvalidResponse)
    assert response.from_square == "g1"
    assert response.to_square == "g3"


# --- QUIT ---
def test_quit_has_no_response(service: ChessService) -> None:
    assert service.handle(QuitRequest()) is None


# --- ENGINE ERRORS ---
def test_broken_board_gives_engine_error(service: ChessService) -> None:
    """A square missing from the board is a bug: reported, not raised"""
    del service.game.board.position[Square.from_algebraic("e3")]

    response = service.handle(move("e2e4"))
    assert isinstance(response, EngineErrorResponse)
    assert response.detail
    # the game is left as it was
    assert service.game.history == []
    assert service.game.which_turn == Side.WHITE


def test_unknown_request_type(service: ChessService) -> None:
    class PingRequest(Message):
        pass

    response = service.handle(PingRequest())  # type: ignore[arg-type]
    assert isinstance(response, EngineErrorResponse)
    assert "PingRequest" in response.detail


def test_malformed_request_gives_engine_error(service: ChessService) -> None:
    """A request that bypassed validation is answered, and the next request is handled as usual"""
    response = service.handle(ValidMovesRequest.model_construct(square=None))
    assert isinstance(response, EngineErrorResponse)
    assert "TypeError" in response.detail

    assert isinstance(service.handle(BoardStateRequest()), BoardStateResponse)
