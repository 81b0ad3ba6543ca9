"""
The Game class is the entrypoint into the domain layer for the service layer.
It owns the one authoritative Board and knows whose turn it is.

Moves are committed in two steps: the move is first simulated on a copy of the board, and only when the copy
turns out to be legal does it replace the board. A rejected move therefore never leaves a trace.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.board import Board
from src.chess.check import (
    all_moves,
    captures_king,
    is_checkmate,
    is_stalemate,
    move_is_self_safe,
    safe_destinations,
    under_attack,
)
from src.chess.legality import legal_moves
from src.chess.moves import Move
from src.chess.square import Square
from src.core.config import EngineSettings
from src.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from src.core.shared_types import Side, Status

logger = logging.getLogger(__name__)


@dataclass
class ChessClock:
    """
    Placeholder for a chess clock: keeps count of the moves each side made. No time control is enforced.
    """

    moves_played: dict[Side, int] = field(
        default_factory=lambda: {Side.WHITE: 0, Side.BLACK: 0}
    )

    def tick(self, side: Side) -> None:
        self.moves_played[side] += 1

    @property
    def move_number(self) -> int:
        """Starts at 1 and increments after every move black makes."""
        return self.moves_played[Side.BLACK] + 1


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    which_turn: Side = Side.WHITE
    history: list[Move] = field(default_factory=list)
    clock: ChessClock = field(default_factory=ChessClock)
    status: Status = Status.IN_PROGRESS

    @classmethod
    def new_game(cls, settings: Optional[EngineSettings] = None) -> Self:
        """Start a game from the configured position (the standard starting position unless told otherwise)"""
        settings = settings or EngineSettings()
        board = Board.from_fen(settings.starting_fen)
        return cls(board=board, which_turn=settings.first_to_move)

    @classmethod
    def from_fen(cls, fen: str, which_turn: Side = Side.WHITE) -> Self:
        """Convenience method: start from any piece placement"""
        return cls(board=Board.from_fen(fen), which_turn=which_turn)

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def winner(self) -> Optional[Side]:
        """
        Only defined for checkmate. The turn has already been passed to the side that got mated,
        so the winner is the opponent of the side to move.
        """
        if self.status != Status.CHECKMATE:
            return None
        return self.which_turn.flipped()

    def valid_destinations(self, square: Square) -> list[Square]:
        """
        Squares the piece on `square` can move to right now.
        ----

        Empty squares, pieces of the side that is waiting, and any piece once the game is over: no destinations.
        Otherwise: the legal moves that keep your own king safe (and never the square of a king).
        """
        piece = self.board.piece(square)
        if piece is None or piece.side != self.which_turn or self.is_over:
            return []
        return safe_destinations(piece, self.board)

    def check_move(self, move: Move) -> Board:
        """
        Validate a move without committing it
        -----

        1. The game must still be in progress
        2. There must be a piece on the starting square, and it must be your turn
        3. The destination must be one of the piece's legal moves
        4. The move may not capture a king, nor leave your own king attacked

        Returns the simulated board (a copy) with the move made. Raises IllegalMoveError otherwise.
        """
        if self.is_over:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

        piece = self.board.piece(move.from_square)
        if piece is None:
            raise IllegalMoveError(f"There is no piece on {move.from_square.to_algebraic()}")

        if piece.side != self.which_turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.which_turn} to make a move first."
            )

        if move.to_square not in legal_moves(piece, self.board):
            raise IllegalMoveError(f"Move not allowed: {move.to_uci()}")

        if captures_king(move, self.board):
            raise IllegalMoveError(f"Kings cannot be captured: {move.to_uci()}")

        simulated = self.board.with_move(move)
        if not move_is_self_safe(piece.side, simulated):
            raise IllegalMoveError(f"Move leaves your king in check: {move.to_uci()}")
        return simulated

    def make_move(self, move: Move) -> Status:
        """
        Attempt to make a move
        -----

        1. validate the move on a copy of the board (see `check_move`). Illegal? The board is left untouched.
        2. the copy replaces the board
        3. update the history of moves and the clock
        4. pass the turn to the opponent
        5. update game status: did the opponent just get mated or stalemated?
        """
        simulated = self.check_move(move)
        mover = self.which_turn

        self.board = simulated
        self.history.append(move)
        self.clock.tick(mover)
        self.which_turn = mover.flipped()
        logger.info("%s played %s", mover, move.to_uci())

        self._update_game_status()
        return self.status

    # -- PRIVATE HELPERS ---
    def _update_game_status(self) -> None:
        """
        Performs checks to see if game has ended and changes status accordingly.

        NOTE the turn has already been passed on. At this point the side to move is the opponent of the side that made the move.
        """
        defender = self.which_turn
        moves = all_moves(self.board)
        king = self.board.king(defender)

        if king is not None and under_attack(king, moves):
            if is_checkmate(self.board, moves, defender):
                logger.info("Checkmate: %s wins", defender.flipped())
                self._change_status(Status.CHECKMATE)
            return

        if is_stalemate(self.board, moves, defender):
            logger.info("Stalemate: %s has no safe moves", defender)
            self._change_status(Status.STALEMATE)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
