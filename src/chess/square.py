"""
A square on the board, and the geometry built on top of it (rays, offsets, directions)

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.exceptions import InvalidSquareError

logger = logging.getLogger(__name__)

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)

Vector = tuple[int, int]


def in_bounds(file: int, rank: int) -> bool:
    return (1 <= file <= BOARD_DIMENSIONS[0]) and (1 <= rank <= BOARD_DIMENSIONS[1])


class Direction(Enum):
    """The eight compass directions. Values are the (file, rank) step taken when moving one square that way."""

    NORTH = (0, 1)
    NORTH_EAST = (1, 1)
    EAST = (1, 0)
    SOUTH_EAST = (1, -1)
    SOUTH = (0, -1)
    SOUTH_WEST = (-1, -1)
    WEST = (-1, 0)
    NORTH_WEST = (-1, 1)

    @property
    def vector(self) -> Vector:
        return self.value


STRAIGHTS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)
DIAGONALS: tuple[Direction, ...] = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)

KING_DELTAS: list[Vector] = [direction.vector for direction in Direction]
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
]


@dataclass(frozen=True)
class Square:
    """
    file: a-h stored as 1-8, rank: 1-8.

    A Square can only be constructed within the board. Helpers that step off the board return None instead.
    """

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not in_bounds(self.file, self.rank):
            raise InvalidSquareError(
                f"Square (file={self.file}, rank={self.rank}) is not on a {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
            )

    def __repr__(self) -> str:
        return f"Square({self.to_algebraic()})"

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        file = ord(sq[0].lower()) - ord("a") + 1
        rank = int(sq[1])
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{self.file_letter}{self.rank}"

    @property
    def file_letter(self) -> str:
        return chr(self.file + ord("a") - 1)

    def offset(self, df: int, dr: int) -> Optional[Square]:
        """The square df files and dr ranks away, or None if that falls off the board"""
        file = self.file + df
        rank = self.rank + dr
        if not in_bounds(file, rank):
            logger.debug("offset (%d, %d) from %s leaves the board", df, dr, self)
            return None
        return Square(file, rank)

    def offsets(self, deltas: list[Vector]) -> list[Square]:
        """Apply every delta, silently skipping the ones that leave the board"""
        squares = [self.offset(df, dr) for df, dr in deltas]
        return [square for square in squares if square is not None]

    def adjacent(self) -> list[Square]:
        """The (up to) 8 squares touching this one"""
        return self.offsets(KING_DELTAS)

    def knight_jumps(self) -> list[Square]:
        """Knights always jump such that |delta_rank| + |delta_file| = 3 (and neither is zero)"""
        return self.offsets(KNIGHT_DELTAS)

    def beyond(self, direction: Direction) -> list[Square]:
        """
        The ray from this square towards the edge of the board, nearest square first.
        The square itself is not part of the ray.
        """
        df, dr = direction.vector
        ray: list[Square] = []
        current = self.offset(df, dr)
        while current is not None:
            ray.append(current)
            current = current.offset(df, dr)
        return ray

    def rays(self, directions: tuple[Direction, ...]) -> list[Square]:
        return [square for direction in directions for square in self.beyond(direction)]

    def horizontal(self) -> list[Square]:
        return self.rays((Direction.EAST, Direction.WEST))

    def vertical(self) -> list[Square]:
        return self.rays((Direction.NORTH, Direction.SOUTH))

    def diagonals(self) -> list[Square]:
        return self.rays(DIAGONALS)


def relative_direction(anchor: Square, other: Square) -> Direction:
    """
    Which compass direction `other` lies in, seen from `anchor`.

    Squares that are not on a straight line or diagonal get assigned to the quadrant they are in (ex. a knight jump up and right is NORTH_EAST).
    Undefined for two equal squares.
    """
    if anchor == other:
        raise ValueError(f"relative_direction requires two different squares, got {anchor} twice.")

    df = (other.file > anchor.file) - (other.file < anchor.file)
    dr = (other.rank > anchor.rank) - (other.rank < anchor.rank)
    return Direction((df, dr))


def distance(a: Square, b: Square) -> int:
    """Manhattan distance. Only used to find the nearest piece along a single ray, not as a chess distance."""
    return abs(a.file - b.file) + abs(a.rank - b.rank)


# Every square of the board, ordered a1, b1, ..., h1, a2, ..., h8
ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(file, rank)
    for rank in range(1, BOARD_DIMENSIONS[1] + 1)
    for file in range(1, BOARD_DIMENSIONS[0] + 1)
)
