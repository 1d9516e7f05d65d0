"""
Boundary layer data model(s).

These objects are what leaves (and re-enters) the engine: the UI reads them, the storage collaborator persists them.
(Decouples the in-memory domain objects from whatever medium ends up storing a game.)
Everything is plain JSON after `model_dump(mode="json")`.
"""

from datetime import datetime
from typing import Annotated, Optional, Self

from pydantic import BaseModel, Field, NonNegativeInt, model_validator

from jokerchess.core.shared_types import Color, EndReason, GameMode, PieceType, Status

SNAPSHOT_VERSION = 1

# 'a1' - 'h8'
SquareName = Annotated[str, Field(pattern=r"^[a-h][1-8]$")]


class PlayerInfo(BaseModel):
    name: str
    theme: str = ""


class PieceModel(BaseModel):
    type: PieceType
    color: Color
    has_moved: bool = False
    is_joker: bool = False

    @model_validator(mode="after")
    def only_pawns_are_jokers(self) -> Self:
        if self.is_joker and self.type != PieceType.PAWN:
            raise ValueError(f"Only a pawn can be a joker, not a {self.type}.")
        return self


class PlacedPieceModel(PieceModel):
    square: SquareName


class MoveModel(BaseModel):
    from_square: SquareName
    to_square: SquareName
    piece: PieceModel
    captured_piece: Optional[PieceModel] = None
    is_capture: bool = False
    promotion_piece: Optional[PieceType] = None
    timestamp: datetime


class GameSnapshot(BaseModel):
    """Serializable snapshot of a full game session (without its undo history)."""

    version: int = SNAPSHOT_VERSION
    mode: GameMode
    status: Status
    current_player: Color
    board: list[PlacedPieceModel]
    moves: list[MoveModel] = []
    white_clock: NonNegativeInt
    black_clock: NonNegativeInt
    joker_squares: Optional[dict[Color, SquareName]] = None
    winner: Optional[Color] = None
    end_reason: Optional[EndReason] = None
    players: dict[Color, PlayerInfo] = {}
    paused: bool = False
    pending_draw_offer: Optional[Color] = None

    @model_validator(mode="after")
    def check_consistency(self) -> Self:
        if self.version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version {self.version}.")

        squares = [placed.square for placed in self.board]
        if len(squares) != len(set(squares)):
            raise ValueError("Two pieces cannot stand on the same square.")

        if self.status == Status.ENDED and self.end_reason is None:
            raise ValueError("An ended game must record why it ended.")
        if self.status != Status.ENDED and (
            self.end_reason is not None or self.winner is not None
        ):
            raise ValueError(f"A game in status {self.status!r} cannot have a result.")

        if self.status == Status.PLAYING:
            for color in Color:
                kings = [
                    p
                    for p in self.board
                    if p.type == PieceType.KING and p.color == color
                ]
                if len(kings) != 1:
                    raise ValueError(f"A game in progress needs exactly one {color} king.")
        return self
