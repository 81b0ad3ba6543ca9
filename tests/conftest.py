"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.game import Game
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import Side

# square name -> FEN character of the piece standing there, ex. {"e1": "K", "e8": "k"}
PiecePlacement = dict[str, str]


def build_board(placement: PiecePlacement) -> Board:
    """An otherwise empty board with exactly the given pieces on it"""
    board = Board.empty()
    for square_name, character in placement.items():
        board.place_piece(Piece.from_fen(character, Square.from_algebraic(square_name)))
    return board


@pytest.fixture
def board_with() -> Callable[[PiecePlacement], Board]:
    """Call the returned function with the pieces you want on the board"""
    return build_board


@pytest.fixture
def game_with() -> Callable[..., Game]:
    """Call the returned function with the pieces you want on the board (and optionally the side to move)"""

    def _create_game(placement: PiecePlacement, which_turn: Side = Side.WHITE) -> Game:
        return Game(board=build_board(placement), which_turn=which_turn)

    return _create_game


# --- Known checkmate patterns: pieces on the board + the mating move (white to play) ---
ANASTASIA_MATE = ({"g1": "K", "e3": "R", "e7": "N", "g7": "p", "h8": "k"}, "e3h3")
ANDERSSEN_MATE = ({"g8": "k", "f6": "K", "g7": "P", "h2": "R"}, "h2h8")
ARABIAN_MATE = ({"b7": "R", "f6": "N", "g1": "K", "h8": "k"}, "b7h7")
BALESTRA_MATE = ({"g1": "K", "f3": "B", "f6": "Q", "e8": "k"}, "f3c6")

MATING_PATTERNS = {
    "anastasia": ANASTASIA_MATE,
    "anderssen": ANDERSSEN_MATE,
    "arabian": ARABIAN_MATE,
    "balestra": BALESTRA_MATE,
}

# White plays Qg5-g6: black king on h8 is not attacked, but has nowhere to go
STALEMATE_PATTERN = ({"a1": "K", "g5": "Q", "h8": "k"}, "g5g6")
