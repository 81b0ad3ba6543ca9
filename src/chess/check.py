"""
Check, checkmate and stalemate detection.

Everything here works on copies of the board: a candidate move is simulated on a clone, judged, and the clone is discarded.
The board that is passed in is never modified.

The legal moves of every piece on the board double as the 'attack map' of the position:
a piece is under attack when any other piece could move onto its square.
"""

import logging

from src.chess.board import Board
from src.chess.legality import legal_moves
from src.chess.moves import Move
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import PieceType, Side

logger = logging.getLogger(__name__)

PieceMove = tuple[Piece, Square]


def all_moves(board: Board) -> list[PieceMove]:
    """The legal moves of every piece on the board (both sides), flattened"""
    return [
        (piece, destination)
        for piece in board.pieces()
        for destination in legal_moves(piece, board)
    ]


def moves_of(side: Side, moves: list[PieceMove]) -> list[PieceMove]:
    return [(piece, destination) for piece, destination in moves if piece.side == side]


def under_attack(piece: Piece, moves: list[PieceMove]) -> bool:
    """Can any piece move onto the square this piece is standing on?"""
    return any(destination == piece.position for _, destination in moves)


def captures_king(move: Move, board: Board) -> bool:
    """Kings are never captured. A move landing on the opponent's king is never allowed to be committed."""
    target = board.piece(move.to_square)
    return target is not None and target.type == PieceType.KING


def is_check(board: Board, side: Side) -> bool:
    """Is the king of this side attacked in the given position?"""
    king = board.king(side)
    if king is None:
        return False
    return under_attack(king, all_moves(board))


def move_is_self_safe(side: Side, board_after_move: Board) -> bool:
    """
    After making a move, your own king cannot be attacked.
    ---

    NOTE: A side without a king on the board (only happens on hand-crafted boards) has nothing to protect.
    """
    king = board_after_move.king(side)
    if king is None:
        return True
    return not under_attack(king, all_moves(board_after_move))


def _leaves_king_safe(board: Board, piece: Piece, destination: Square) -> bool:
    """Simulate the move on a copy of the board and see if the mover's king survives it"""
    move = Move(piece.position, destination)
    if captures_king(move, board):
        return False
    simulated = board.with_move(move)
    return move_is_self_safe(piece.side, simulated)


def safe_destinations(piece: Piece, board: Board) -> list[Square]:
    """The legal moves of a piece that do not put (or leave) its own king in check"""
    return [
        destination
        for destination in legal_moves(piece, board)
        if _leaves_king_safe(board, piece, destination)
    ]


def can_king_move(board: Board, moves: list[PieceMove], side: Side) -> bool:
    """Can the king of `side` walk to a square where it is not attacked?"""
    king_moves = [
        (piece, destination)
        for piece, destination in moves_of(side, moves)
        if piece.type == PieceType.KING
    ]
    for king, destination in king_moves:
        if _leaves_king_safe(board, king, destination):
            logger.debug("king of %s escapes to %s", side, destination)
            return True
    return False


def is_checkmate(board: Board, moves: list[PieceMove], side: Side) -> bool:
    """
    Brute force search: is the (attacked) king of `side` mated?
    ---

    1. Can the king step out of the attack? Not mate.
    2. Otherwise try every other move of the defending side (blocking, capturing the attacker, ...).
       If any of them leaves the king safe, not mate.
    3. Nothing helps: checkmate.

    Only meaningful if the king is actually under attack (see `is_check`).
    """
    if can_king_move(board, moves, side):
        return False

    for piece, destination in moves_of(side, moves):
        if piece.type == PieceType.KING:
            continue
        if _leaves_king_safe(board, piece, destination):
            logger.debug("%s %s to %s saves the king of %s", piece.type, piece.position, destination, side)
            return False
    return True


def is_stalemate(board: Board, moves: list[PieceMove], side: Side) -> bool:
    """
    The king of `side` is not attacked, yet every move it has would put its own king in check (or it has no moves at all).
    A side without a king cannot be stalemated.
    """
    king = board.king(side)
    if king is None or under_attack(king, moves):
        return False

    own_moves = moves_of(side, moves)
    if not own_moves:
        return True
    return not any(
        _leaves_king_safe(board, piece, destination) for piece, destination in own_moves
    )
