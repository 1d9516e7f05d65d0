"""Unit tests for jokerchess/chess/square.py"""

from string import ascii_lowercase

import pytest

from jokerchess.chess.square import BOARD_DIMENSIONS, Square, all_squares
from jokerchess.core.exceptions import InvalidRequestError


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 0, rank 0, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_algebraic() == notation


@pytest.mark.parametrize(
    "notation", ["", "a", "a9", "i1", "a0", "1a", "e10", "E4", "e\u00b2", "e\u0663"]
)
def test_invalid_algebraic(notation: str) -> None:
    with pytest.raises(InvalidRequestError):
        Square.from_algebraic(notation)


def test_parse_accepts_square_or_name() -> None:
    square = Square(4, 3)
    assert Square.parse(square) is square
    assert Square.parse("e4") == square


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert Square(file, rank).is_within_bounds()


def test_square_out_of_bounds() -> None:
    assert not Square(BOARD_DIMENSIONS[0], BOARD_DIMENSIONS[1]).is_within_bounds()
    assert not Square(-1, 0).is_within_bounds()


def test_squares_are_hashable_values() -> None:
    """Used as dictionary keys by the board, so two equal squares must be interchangeable"""
    assert {Square(0, 0): "a1"}[Square.from_algebraic("a1")] == "a1"


def test_all_squares() -> None:
    squares = all_squares()
    assert len(squares) == 64
    assert len(set(squares)) == 64
