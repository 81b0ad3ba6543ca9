"""
Request and Response messages exchanged with the game actor.

The presentation layer only ever sends Requests and reads Responses: these models are the whole boundary contract.
Messages carry plain strings and enums, so nothing mutable is ever shared between the two threads.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side

SquareName = str
MoveName = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False

    first_character = value[0]
    second_character = value[1]
    return first_character in "abcdefgh" and second_character in "12345678"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- REQUEST MODELS ---
class ValidMovesRequest(Message):
    """Which squares can the piece on `square` move to?"""

    kind: Literal["valid_moves"] = "valid_moves"
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(f"Cannot interpret square: {value!r} as a valid square name.")
        return value


class _MoveMessage(Message):
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(f"Cannot interpret square: {value!r} as a valid square name.")
        return value

    @property
    def uci(self) -> MoveName:
        return f"{self.from_square}{self.to_square}"


class MoveRequest(_MoveMessage):
    """Make the move (commit it if legal)"""

    kind: Literal["move"] = "move"


class CheckMoveRequest(_MoveMessage):
    """Would this move be legal? Nothing gets committed."""

    kind: Literal["check_move"] = "check_move"


class BoardStateRequest(Message):
    kind: Literal["board_state"] = "board_state"


class QuitRequest(Message):
    """Stop the actor. No response is sent."""

    kind: Literal["quit"] = "quit"


Request = Union[
    ValidMovesRequest, MoveRequest, CheckMoveRequest, BoardStateRequest, QuitRequest
]


# --- RESPONSE MODELS ---
class ValidMovesResponse(Message):
    kind: Literal["valid_moves"] = "valid_moves"
    square: SquareName
    destinations: list[SquareName]


class BoardStateResponse(Message):
    """
    Snapshot of the game. Also the answer to a move that got accepted.

    fen: piece placement part of a FEN string. history: the moves played so far as position pairs ('e2e4').
    """

    kind: Literal["board_state"] = "board_state"
    fen: str
    which_turn: Side
    history: list[MoveName]
    move_number: int


class MoveValidResponse(_MoveMessage):
    kind: Literal["move_valid"] = "move_valid"


class MoveInvalidResponse(_MoveMessage):
    kind: Literal["move_invalid"] = "move_invalid"
    reason: str


class StalemateResponse(Message):
    kind: Literal["stalemate"] = "stalemate"
    fen: str


class CheckmateResponse(Message):
    """`winner` is the side that delivered the mate (the side that just moved)."""

    kind: Literal["checkmate"] = "checkmate"
    winner: Side
    fen: str


class EngineErrorResponse(Message):
    """The engine hit a bug while handling the request. The game itself is left as it was."""

    kind: Literal["engine_error"] = "engine_error"
    detail: str


Response = Union[
    ValidMovesResponse,
    BoardStateResponse,
    MoveValidResponse,
    MoveInvalidResponse,
    StalemateResponse,
    CheckmateResponse,
    EngineErrorResponse,
]
