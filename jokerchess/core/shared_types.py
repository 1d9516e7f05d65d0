"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class GameMode(StrEnum):
    """standard: classical back rank. shuffle: random back rank. joker: random back rank + joker pawns."""

    STANDARD = "standard"
    SHUFFLE = "shuffle"
    JOKER = "joker"


class Status(StrEnum):
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


class EndReason(StrEnum):
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    TIMEOUT = "timeout"
    JOKER = "joker"
    RESIGNATION = "resignation"
    DRAW = "draw"


class MoveOutcome(StrEnum):
    ACCEPTED = "accepted"
    REJECTED_ILLEGAL = "rejected illegal"
    AWAITING_PROMOTION = "awaiting promotion"
    GAME_ENDED = "game ended"
