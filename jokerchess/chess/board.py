"""The Game board: where the pieces stand. Pure data, the rules live in moves.py / analyzer.py"""

from dataclasses import dataclass, field, replace
from typing import Optional, Self

from jokerchess.chess.pieces import Piece
from jokerchess.chess.square import BOARD_DIMENSIONS, Square
from jokerchess.core.shared_types import Color, PieceType


@dataclass
class Board:
    # only occupied squares are keys
    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def from_symbols(cls, layout: dict[str, str]) -> Self:
        """Construct a board from square names and piece letters.

        ex. {"e1": "K", "e8": "k", "e7": "q"}: white king on e1, black king on e8 and a black queen on e7.
        Capital letters are white pieces, small letters are black pieces.
        """
        position = {
            Square.from_algebraic(name): Piece.from_symbol(symbol)
            for name, symbol in layout.items()
        }
        return cls(position)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_occupied(self, square: Square) -> bool:
        return square in self.position

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        return self.position.pop(square, None)

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Relocate a piece (as a fresh copy) and return whatever stood on the target square"""
        moving_piece = self.position.pop(from_square)
        captured = self.position.pop(to_square, None)
        self.position[to_square] = replace(moving_piece, has_moved=True)
        return captured

    def clone(self) -> Self:
        """Deep copy: speculative moves and undo snapshots must never touch the live board"""
        return type(self)(
            {square: replace(piece) for square, piece in self.position.items()}
        )

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece.type == piece_type and piece.color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        kings = self.locate_pieces(PieceType.KING, color)
        return kings[0] if kings else None

    def __str__(self) -> str:
        """Plain text diagram, 8th rank on top. Handy when a test fails."""
        rows: list[str] = []
        for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1):
            row = ""
            for file in range(BOARD_DIMENSIONS[0]):
                piece = self.piece(Square(file, rank))
                row += piece.to_symbol() if piece else "."
            rows.append(row)
        return "\n".join(rows)
