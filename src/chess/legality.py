"""
Legality filter: take the pseudo-legal destinations of a piece and remove what the position does not allow.

* sliding pieces (queen, rook, bishop) cannot look past the first piece on each ray
* nobody can land on a square occupied by a piece of their own side
* pawns only advance onto empty squares, and only capture enemy pieces

Whether a move leaves your own king in check is NOT decided here (see check.py).
"""

import logging
from typing import Callable

from src.chess.moves import (
    Board,
    pawn_diagonal_squares,
    pawn_forward_squares,
    pseudo_moves,
)
from src.chess.pieces import Piece
from src.chess.square import Direction, Square, distance, relative_direction
from src.core.shared_types import PieceType

logger = logging.getLogger(__name__)


def remove_friendly_squares(piece: Piece, board: Board, squares: list[Square]) -> list[Square]:
    """You cannot take your own pieces"""
    return [
        square
        for square in squares
        if (occupant := board.piece(square)) is None or occupant.is_opponent_of(piece)
    ]


def remove_blocked_squares(piece: Piece, board: Board, squares: list[Square]) -> list[Square]:
    """
    Line of sight of a sliding piece
    ----

    Sort the candidates by the direction they lie in. Along every direction, the occupied square closest to the piece is the blocker:
    every square further away is out of sight. The blocker itself stays a candidate (it might be captured).
    """
    origin = piece.position
    by_direction: dict[Direction, list[Square]] = {}
    for square in squares:
        by_direction.setdefault(relative_direction(origin, square), []).append(square)

    visible: list[Square] = []
    for direction, candidates in by_direction.items():
        occupied = [square for square in candidates if board.is_occupied(square)]
        if not occupied:
            visible.extend(candidates)
            continue

        blocker = min(occupied, key=lambda square: distance(origin, square))
        reach = distance(origin, blocker)
        logger.debug("%s from %s is blocked on %s", direction.name, origin, blocker)
        visible.extend(square for square in candidates if distance(origin, square) <= reach)
    return visible


def legal_sliding_moves(piece: Piece, board: Board) -> list[Square]:
    candidates = remove_blocked_squares(piece, board, pseudo_moves(piece, board))
    return remove_friendly_squares(piece, board, candidates)


def legal_stepping_moves(piece: Piece, board: Board) -> list[Square]:
    """Knights and kings do not move along a path: nothing in between can block them"""
    return remove_friendly_squares(piece, board, pseudo_moves(piece, board))


def legal_pawn_moves(piece: Piece, board: Board) -> list[Square]:
    """
    Pawns
    ----

    * can only push onto empty squares. A double step is blocked as soon as the first square is occupied.
    * can only move diagonally to capture a piece of the opponent.
    """
    candidates = pseudo_moves(piece, board)

    unblocked_pushes: list[Square] = []
    for square in pawn_forward_squares(piece):
        if board.is_occupied(square):
            break
        unblocked_pushes.append(square)

    moves = [square for square in candidates if square in unblocked_pushes]
    for square in pawn_diagonal_squares(piece):
        occupant = board.piece(square)
        if occupant is not None and occupant.is_opponent_of(piece):
            moves.append(square)
    return moves


# --- STRATEGY PATTERN: LEGALITY RULES ---
LegalMovesFn = Callable[[Piece, Board], list[Square]]
LEGALITY_RULES: dict[PieceType, LegalMovesFn] = {
    PieceType.KING: legal_stepping_moves,
    PieceType.QUEEN: legal_sliding_moves,
    PieceType.ROOK: legal_sliding_moves,
    PieceType.BISHOP: legal_sliding_moves,
    PieceType.KNIGHT: legal_stepping_moves,
    PieceType.PAWN: legal_pawn_moves,
}


def legal_moves(piece: Piece, board: Board) -> list[Square]:
    """
    Destinations a piece can reach in the current position (blocking and own pieces taken into account).

    NOTE: this may contain the square of the opponent's king: the legal moves double as the squares a piece attacks.
    """
    legality_rule = LEGALITY_RULES.get(piece.type, legal_stepping_moves)
    return legality_rule(piece, board)
