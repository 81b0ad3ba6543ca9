"""
Custom exceptions.

Everything the engine raises on purpose derives from GameError, so the service layer can catch the whole family at once.
"""


class GameError(Exception):
    """Top level exception for anything going wrong while playing a game"""


class InvalidSquareError(GameError):
    """A square outside of the board was requested"""


class InvalidFENError(GameError):
    """Could not parse a (piece placement) FEN string"""


class InvalidRequestError(GameError):
    """A message sent to the engine could not be interpreted"""


class IllegalMoveError(GameError):
    """The requested move breaks the rules of chess. Recoverable: the board stays untouched."""


class NotYourTurnError(IllegalMoveError):
    """The piece requested to move belongs to the side that is waiting"""


class GameStateError(GameError):
    """The game is not in a state that accepts the request (ex. it already ended)"""


class BoardInvariantError(GameError):
    """
    Should never happen if the engine is written correctly.
    ex. a board missing an entry for one of its squares, or committing a move from an empty square after validating it.
    """


class EmptySquareError(BoardInvariantError):
    """Asked the board to move a piece from a square that holds none"""
