"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from jokerchess.core.exceptions import InvalidRequestError
from jokerchess.core.models import GameSnapshot, MoveModel, PlayerInfo
from jokerchess.core.shared_types import Color, EndReason, MoveOutcome, PieceType


# --- REQUEST MODELS ---
class StartGameRequest(BaseModel):
    white: PlayerInfo
    black: PlayerInfo
    # None: use the configured default
    time_control_seconds: Optional[int] = None

    @field_validator("time_control_seconds")
    @classmethod
    def validate_time_control(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise InvalidRequestError(
                f"Time control must be a positive number of seconds, got {value}."
            )
        return value


class MoveRequest(BaseModel):
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        def _is_algebraic_notation(value: str) -> bool:
            if len(value) != 2:
                return False

            first_character = value[0]
            second_character = value[1]
            return first_character in "abcdefgh" and second_character in "12345678"

        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class SaveGameRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidRequestError("A saved game needs a name.")
        return value


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    outcome: MoveOutcome
    move: Optional[MoveModel] = None
    winner: Optional[Color] = None
    end_reason: Optional[EndReason] = None
    # why the move got rejected
    message: Optional[str] = None
    game: GameSnapshot
