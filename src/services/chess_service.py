"""Orchestration of requests coming from the presentation layer to the Game (and the responses going back)."""

import logging
from typing import Callable, Optional

from src.api.models import (
    BoardStateRequest,
    BoardStateResponse,
    CheckmateResponse,
    CheckMoveRequest,
    EngineErrorResponse,
    MoveInvalidResponse,
    MoveRequest,
    MoveValidResponse,
    QuitRequest,
    Request,
    Response,
    StalemateResponse,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.square import Square
from src.core.exceptions import BoardInvariantError, GameError, InvalidSquareError
from src.core.shared_types import Status

logger = logging.getLogger(__name__)


class ChessService:
    """
    Turns every request into (at most) one response.

    Owns the Game: whoever owns the service is the only one allowed to touch the board.
    """

    def __init__(self, game: Game) -> None:
        self.game = game
        self._handlers: dict[type, Callable[..., Optional[Response]]] = {
            ValidMovesRequest: self.valid_moves,
            MoveRequest: self.make_move,
            CheckMoveRequest: self.check_move,
            BoardStateRequest: self.board_state,
            QuitRequest: self.quit,
        }

    def handle(self, request: Request) -> Optional[Response]:
        """
        Entry point for the actor loop.
        ----

        Bugs inside the engine (and requests that slipped past validation) are answered with an EngineErrorResponse.
        Only the current request is lost, the game carries on.
        """
        handler = self._handlers.get(type(request))
        if handler is None:
            logger.error("No handler for request %r", request)
            return EngineErrorResponse(detail=f"Unknown request type: {type(request).__name__}")

        try:
            return handler(request)
        except (BoardInvariantError, InvalidSquareError) as exc:
            logger.exception("Engine error while handling %r", request)
            return EngineErrorResponse(detail=str(exc))
        except Exception as exc:
            # a malformed request aborts only itself, never the actor loop
            logger.exception("Unexpected error while handling %r", request)
            return EngineErrorResponse(detail=f"{type(exc).__name__}: {exc}")

    # -- request handlers ---
    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        square = Square.from_algebraic(request.square)
        destinations = self.game.valid_destinations(square)
        return ValidMovesResponse(
            square=request.square,
            destinations=[destination.to_algebraic() for destination in destinations],
        )

    def make_move(self, request: MoveRequest) -> Response:
        """Commit the move if legal. Reports checkmate / stalemate instead of the new board when the game ends."""
        move = Move.from_uci(request.uci)
        try:
            status = self.game.make_move(move)
        except BoardInvariantError:
            raise
        except GameError as exc:
            logger.warning("Rejected move %s: %s", request.uci, exc)
            return MoveInvalidResponse(
                from_square=request.from_square,
                to_square=request.to_square,
                reason=str(exc),
            )

        if status == Status.CHECKMATE:
            assert self.game.winner is not None
            return CheckmateResponse(winner=self.game.winner, fen=self.game.board.to_fen())
        if status == Status.STALEMATE:
            return StalemateResponse(fen=self.game.board.to_fen())
        return self.board_state(BoardStateRequest())

    def check_move(self, request: CheckMoveRequest) -> Response:
        move = Move.from_uci(request.uci)
        try:
            self.game.check_move(move)
        except BoardInvariantError:
            raise
        except GameError as exc:
            return MoveInvalidResponse(
                from_square=request.from_square,
                to_square=request.to_square,
                reason=str(exc),
            )
        return MoveValidResponse(from_square=request.from_square, to_square=request.to_square)

    def board_state(self, request: BoardStateRequest) -> BoardStateResponse:
        return BoardStateResponse(
            fen=self.game.board.to_fen(),
            which_turn=self.game.which_turn,
            history=[move.to_uci() for move in self.game.history],
            move_number=self.game.clock.move_number,
        )

    def quit(self, request: QuitRequest) -> None:
        """Nothing to answer. The actor loop stops on its own."""
        return None
