"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from jokerchess.core.exceptions import InvalidRequestError

# Chess board is always 8x8. Files and ranks are zero-based: (0, 0) is a1, (7, 7) is h8
BOARD_DIMENSIONS = (8, 8)
FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or sq[0] not in FILES or sq[1] not in RANKS:
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")
        return cls(FILES.index(sq[0]), RANKS.index(sq[1]))

    @classmethod
    def parse(cls, square: Square | str) -> Square:
        """Callers at the boundary may use either a Square or its name"""
        return square if isinstance(square, Square) else cls.from_algebraic(square)

    def to_algebraic(self) -> str:
        return f"{FILES[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def __str__(self) -> str:
        return self.to_algebraic()


def all_squares() -> list[Square]:
    return [
        Square(file, rank)
        for rank in range(BOARD_DIMENSIONS[1])
        for file in range(BOARD_DIMENSIONS[0])
    ]
