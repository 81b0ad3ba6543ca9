"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Self


class Side(StrEnum):
    WHITE = "white"
    BLACK = "black"

    def flipped(self) -> Self:
        """The opposing side. Enum members are immutable, so 'flipping' a turn means reassigning this value."""
        return Side.BLACK if self == Side.WHITE else Side.WHITE


class PieceType(StrEnum):
    KING = "king"
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
    PAWN = "pawn"


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
