"""Defines the chess pieces"""

from dataclasses import dataclass, replace
from typing import Self

from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidFENError
from src.core.shared_types import PieceType, Side

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# White pawns start on the 2nd rank, black pawns on the 7th
PAWN_HOME_RANK: dict[Side, int] = {
    Side.WHITE: 2,
    Side.BLACK: BOARD_DIMENSIONS[1] - 1,
}

# White pawns move UP the board, black pawns move DOWN
PAWN_DIRECTION: dict[Side, int] = {
    Side.WHITE: 1,
    Side.BLACK: -1,
}


@dataclass(frozen=True)
class Piece:
    """
    A piece is a plain value: it has no identity beyond the square it stands on.
    Moving it produces a new Piece (see `relocated`), so boards can be copied freely for simulations.
    """

    type: PieceType
    side: Side
    position: Square
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str, position: Square) -> Self:
        """
        lower case: Black pieces, upper case: White pieces

        NOTE: A FEN string does not record which pieces moved. Only pawns can be judged from their rank.
        """
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidFENError(f"Unknown piece character: {character!r}")
        side = Side.WHITE if character.isupper() else Side.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        has_moved = (
            piece_type == PieceType.PAWN and position.rank != PAWN_HOME_RANK[side]
        )
        return cls(piece_type, side, position, has_moved)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.side == Side.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def relocated(self, to: Square) -> Self:
        """Copy of this piece standing on a new square. Any piece that moved once, has moved."""
        return replace(self, position=to, has_moved=True)

    def is_opponent_of(self, other: "Piece") -> bool:
        return self.side != other.side
