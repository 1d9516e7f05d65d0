"""Defines the chess pieces"""

from dataclasses import dataclass
from typing import Self

from jokerchess.core.shared_types import Color, PieceType

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}

# Seconds added to the capturing player's clock. The king can never be captured.
TIME_BONUS_SECONDS: dict[PieceType, int] = {
    PieceType.PAWN: 30,
    PieceType.KNIGHT: 60,
    PieceType.BISHOP: 60,
    PieceType.ROOK: 90,
    PieceType.QUEEN: 120,
}

PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
]


@dataclass
class Piece:
    type: PieceType
    color: Color
    has_moved: bool = False
    is_joker: bool = False

    @classmethod
    def from_symbol(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = SYMBOL_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_symbol(self) -> str:
        symbol = PIECE_TO_SYMBOL[self.type]
        return symbol.upper() if self.color == Color.WHITE else symbol

    @property
    def is_live_joker(self) -> bool:
        """Only an unpromoted joker pawn makes its capturer lose"""
        return self.is_joker and self.type == PieceType.PAWN

    @property
    def time_bonus(self) -> int:
        return TIME_BONUS_SECONDS.get(self.type, 0)

    def promote_to(self, new_type: PieceType) -> None:
        # a promoted joker loses its secret for good
        self.type = new_type
        self.is_joker = False
