"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import (
    ALL_SQUARES,
    BOARD_DIMENSIONS,
    DIAGONALS,
    STRAIGHTS,
    Direction,
    Square,
    distance,
    relative_direction,
)
from src.core.exceptions import InvalidSquareError


def squares(*names: str) -> set[Square]:
    return {Square.from_algebraic(name) for name in names}


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file - 1]}{rank}")
        for file in range(1, 9)
        for rank in range(1, 9)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 1, rank 1, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_algebraic() == notation


@pytest.mark.parametrize("file, rank", [(0, 1), (1, 0), (9, 1), (1, 9), (-1, -1)])
def test_square_out_of_bounds(file: int, rank: int) -> None:
    """A square can only exist on the board"""
    with pytest.raises(InvalidSquareError):
        Square(file, rank)


@pytest.mark.parametrize("name", ["i1", "a9", "a0", "e", "e44", "11"])
def test_invalid_square_names(name: str) -> None:
    with pytest.raises(InvalidSquareError):
        Square.from_algebraic(name)


def test_all_squares() -> None:
    assert len(ALL_SQUARES) == BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]
    assert len(set(ALL_SQUARES)) == len(ALL_SQUARES)
    assert ALL_SQUARES[0] == Square.from_algebraic("a1")
    assert ALL_SQUARES[1] == Square.from_algebraic("b1")
    assert ALL_SQUARES[-1] == Square.from_algebraic("h8")


# -- OFFSETS ---
def test_offset_within_board() -> None:
    assert Square.from_algebraic("e4").offset(1, 2) == Square.from_algebraic("f6")
    assert Square.from_algebraic("e4").offset(-4, -3) == Square.from_algebraic("a1")


@pytest.mark.parametrize("name, df, dr", [("a1", -1, 0), ("a1", 0, -1), ("h8", 1, 0), ("h8", 0, 1), ("g7", 2, 2)])
def test_offset_leaving_the_board(name: str, df: int, dr: int) -> None:
    """No out-of-range squares: just nothing"""
    assert Square.from_algebraic(name).offset(df, dr) is None


def test_adjacent_squares() -> None:
    assert set(Square.from_algebraic("a1").adjacent()) == squares("a2", "b2", "b1")
    assert set(Square.from_algebraic("e4").adjacent()) == squares(
        "d3", "d4", "d5", "e3", "e5", "f3", "f4", "f5"
    )


def test_knight_jumps() -> None:
    assert set(Square.from_algebraic("a1").knight_jumps()) == squares("b3", "c2")
    assert set(Square.from_algebraic("d4").knight_jumps()) == squares(
        "b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"
    )


# -- RAYS ---
def test_ray_is_ordered_nearest_first() -> None:
    ray = Square.from_algebraic("a1").beyond(Direction.NORTH)
    assert [square.to_algebraic() for square in ray] == ["a2", "a3", "a4", "a5", "a6", "a7", "a8"]

    ray = Square.from_algebraic("c1").beyond(Direction.NORTH_EAST)
    assert [square.to_algebraic() for square in ray] == ["d2", "e3", "f4", "g5", "h6"]


def test_ray_from_the_edge_is_empty() -> None:
    assert Square.from_algebraic("h4").beyond(Direction.EAST) == []
    assert Square.from_algebraic("a8").beyond(Direction.NORTH_WEST) == []


def test_lines_through_a_square() -> None:
    d4 = Square.from_algebraic("d4")
    assert len(d4.horizontal()) == BOARD_DIMENSIONS[0] - 1
    assert len(d4.vertical()) == BOARD_DIMENSIONS[1] - 1
    assert len(d4.diagonals()) == 13
    assert d4 not in d4.horizontal() + d4.vertical() + d4.diagonals()


@pytest.mark.parametrize("square", ALL_SQUARES)
def test_geometry_never_leaves_the_board(square: Square) -> None:
    """Whatever helper is used, every square produced lies within a-h / 1-8"""
    produced = square.adjacent() + square.knight_jumps()
    for direction in Direction:
        produced += square.beyond(direction)

    for other in produced:
        assert 1 <= other.file <= BOARD_DIMENSIONS[0]
        assert 1 <= other.rank <= BOARD_DIMENSIONS[1]
        assert other.file_letter in "abcdefgh"


# -- DIRECTIONS & DISTANCE ---
@pytest.mark.parametrize(
    "other, direction",
    [
        ("d8", Direction.NORTH),
        ("h8", Direction.NORTH_EAST),
        ("h4", Direction.EAST),
        ("g1", Direction.SOUTH_EAST),
        ("d1", Direction.SOUTH),
        ("a1", Direction.SOUTH_WEST),
        ("a4", Direction.WEST),
        ("a7", Direction.NORTH_WEST),
        ("e6", Direction.NORTH_EAST),  # not on a line: falls in the north-east quadrant
    ],
)
def test_relative_direction(other: str, direction: Direction) -> None:
    anchor = Square.from_algebraic("d4")
    assert relative_direction(anchor, Square.from_algebraic(other)) == direction


def test_relative_direction_of_equal_squares() -> None:
    d4 = Square.from_algebraic("d4")
    with pytest.raises(ValueError):
        relative_direction(d4, d4)


def test_direction_groups() -> None:
    assert set(STRAIGHTS) | set(DIAGONALS) == set(Direction)
    assert all(0 in direction.vector for direction in STRAIGHTS)
    assert all(0 not in direction.vector for direction in DIAGONALS)


def test_manhattan_distance() -> None:
    assert distance(Square.from_algebraic("a1"), Square.from_algebraic("h8")) == 14
    assert distance(Square.from_algebraic("d4"), Square.from_algebraic("d4")) == 0
    assert distance(Square.from_algebraic("d4"), Square.from_algebraic("b5")) == 3
