"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the pseudo-legal destinations for each piece type.
These only look at the geometry of a piece (the board is consulted for pawn captures only).

Blocking and friendly fire are filtered out later (see legality.py), check safety later still (see check.py).
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import PAWN_DIRECTION, Piece
from src.chess.square import Square
from src.core.exceptions import InvalidSquareError
from src.core.shared_types import PieceType

logger = logging.getLogger(__name__)


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_occupied(self, square: Square) -> bool: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made: a pair of squares"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Plain position pair, as used by the Universal Chess Interface:

        * "e2e4": move the piece that was on e2 to e4
        """
        if len(uci) != 4:
            raise InvalidSquareError(f"Cannot interpret {uci!r} as a pair of squares.")
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    def inverse(self) -> Self:
        """The move that takes the piece straight back"""
        return type(self)(self.to_square, self.from_square)


def _unique(squares: list[Square]) -> list[Square]:
    """Drop duplicates but keep the order (results must be deterministic)"""
    return list(dict.fromkeys(squares))


# --- MOVEMENT RULES ---
def castle_squares(piece: Piece, board: Board) -> list[Square]:
    """Castling is not supported: the king never has a castling destination."""
    return []


def pseudo_king_moves(piece: Piece, board: Board) -> list[Square]:
    """The king can move by a single square at the time."""
    return _unique(piece.position.adjacent() + castle_squares(piece, board))


def pseudo_queen_moves(piece: Piece, board: Board) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    square = piece.position
    return square.horizontal() + square.vertical() + square.diagonals()


def pseudo_rook_moves(piece: Piece, board: Board) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return piece.position.horizontal() + piece.position.vertical()


def pseudo_bishop_moves(piece: Piece, board: Board) -> list[Square]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return piece.position.diagonals()


def pseudo_knight_moves(piece: Piece, board: Board) -> list[Square]:
    return piece.position.knight_jumps()


def pawn_forward_squares(piece: Piece) -> list[Square]:
    """Single step forward, and a double step if the pawn has not moved yet (only if still on the board)"""
    direction = PAWN_DIRECTION[piece.side]
    steps = [(0, direction)]
    if not piece.has_moved:
        steps.append((0, 2 * direction))
    return piece.position.offsets(steps)


def pawn_diagonal_squares(piece: Piece) -> list[Square]:
    """The two squares a pawn could capture on"""
    direction = PAWN_DIRECTION[piece.side]
    return piece.position.offsets([(-1, direction), (1, direction)])


def pseudo_pawn_moves(piece: Piece, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move
    - takes diagonally. At this stage any occupied diagonal counts, whoever's piece is standing there.
    """
    diagonals = [square for square in pawn_diagonal_squares(piece) if board.is_occupied(square)]
    return pawn_forward_squares(piece) + diagonals


# -- STRATEGY PATTERN: MOVEMENT RULES ---
PseudoMovesFn = Callable[[Piece, Board], list[Square]]
MOVEMENT_RULES: dict[PieceType, PseudoMovesFn] = {
    PieceType.KING: pseudo_king_moves,
    PieceType.QUEEN: pseudo_queen_moves,
    PieceType.ROOK: pseudo_rook_moves,
    PieceType.BISHOP: pseudo_bishop_moves,
    PieceType.KNIGHT: pseudo_knight_moves,
    PieceType.PAWN: pseudo_pawn_moves,
}


def pseudo_moves(piece: Piece, board: Board) -> list[Square]:
    """Destinations allowed by the geometry of the piece, ignoring what stands in the way."""
    movement_rule = MOVEMENT_RULES[piece.type]
    moves = movement_rule(piece, board)
    logger.debug("pseudo moves %s %s on %s: %s", piece.side, piece.type, piece.position, moves)
    return moves
