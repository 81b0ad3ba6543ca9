"""The Board holds the `position` (in chess: the configuration of pieces on the board)"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import Move
from src.chess.pieces import Piece
from src.chess.square import ALL_SQUARES, BOARD_DIMENSIONS, Square
from src.core.config import STARTING_POSITION_FEN
from src.core.exceptions import BoardInvariantError, EmptySquareError, InvalidFENError
from src.core.shared_types import PieceType, Side

logger = logging.getLogger(__name__)


@dataclass
class Board:
    """
    Every square of the board has an entry: either the piece standing on it, or None.
    A missing entry is a bug, not an 'off-board' square.
    """

    position: dict[Square, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({square: None for square in ALL_SQUARES})

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.
        """
        board = cls.empty()
        fen_by_ranks = fen_str.strip().split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(
                f"Expected {BOARD_DIMENSIONS[1]} ranks in {fen_str!r}, found {len(fen_by_ranks)}"
            )

        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 1
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                if file > BOARD_DIMENSIONS[0]:
                    raise InvalidFENError(f"Rank {rank} overflows the board: {fen_one_rank!r}")
                square = Square(file, rank)
                board.position[square] = Piece.from_fen(character, square)
                file += 1

            if file != BOARD_DIMENSIONS[0] + 1:
                raise InvalidFENError(
                    f"Rank {rank} should describe {BOARD_DIMENSIONS[0]} squares: {fen_one_rank!r}"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1], 0, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            piece = self.piece(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        try:
            return self.position[square]
        except KeyError as exc:
            raise BoardInvariantError(f"Board has no entry for {square}") from exc

    def is_occupied(self, square: Square) -> bool:
        return self.piece(square) is not None

    def is_occupied_by(self, square: Square, side: Side) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.side == side

    def pieces(self, side: Optional[Side] = None) -> list[Piece]:
        """All pieces (of one side, if given) in board order: a1, b1, ..., h8"""
        return [
            piece
            for piece in self.position.values()
            if piece is not None and (side is None or piece.side == side)
        ]

    def king(self, side: Side) -> Optional[Piece]:
        return next(
            (piece for piece in self.pieces(side) if piece.type == PieceType.KING),
            None,
        )

    def place_piece(self, piece: Piece) -> None:
        """Put a piece on the square it says it stands on (overwriting whatever was there)"""
        self.position[piece.position] = piece

    def move_piece(self, move: Move) -> None:
        """
        Update the position on the board.

        The piece leaves its square, is marked as moved, and captures whatever stood on the target square by overwriting it.
        """
        piece_that_moved = self.piece(move.from_square)
        if piece_that_moved is None:
            raise EmptySquareError(f"No piece on {move.from_square} to move.")
        self.position[move.from_square] = None
        self.position[move.to_square] = piece_that_moved.relocated(move.to_square)

    def copy(self) -> Self:
        """Pieces are immutable values, so copying the mapping is enough to get a fully independent board"""
        return type(self)(dict(self.position))

    def with_move(self, move: Move) -> Self:
        """Simulate a move: a copy of this board with the move applied. This board stays untouched."""
        simulated = self.copy()
        simulated.move_piece(move)
        return simulated
