import pytest
from pydantic import ValidationError

from jokerchess.api.models import MoveRequest, SaveGameRequest, StartGameRequest
from jokerchess.core.exceptions import InvalidRequestError
from jokerchess.core.models import PlayerInfo
from jokerchess.core.shared_types import PieceType


@pytest.fixture
def white() -> PlayerInfo:
    return PlayerInfo(name="don't hate the player, hate the name.", theme="Forest Green")


@pytest.fixture
def black() -> PlayerInfo:
    return PlayerInfo(name="bladiblidiboo")


# -- Validation - StartGameRequest --
def test_time_control_is_optional(white: PlayerInfo, black: PlayerInfo) -> None:
    """No time control supplied: validator just returns None (the service picks the default)."""
    request = StartGameRequest(white=white, black=black)
    assert request.time_control_seconds is None


def test_valid_time_control(white: PlayerInfo, black: PlayerInfo) -> None:
    request = StartGameRequest(white=white, black=black, time_control_seconds=180)
    assert request.time_control_seconds == 180


@pytest.mark.parametrize("seconds", [0, -1, -600])
def test_invalid_time_control(white: PlayerInfo, black: PlayerInfo, seconds: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = StartGameRequest(white=white, black=black, time_control_seconds=seconds)


def test_players_from_plain_data() -> None:
    request = StartGameRequest.model_validate(
        {"white": {"name": "W"}, "black": {"name": "B", "theme": "Ocean Blue"}}
    )
    assert request.white.theme == ""
    assert request.black.theme == "Ocean Blue"


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"
    assert request.promote_to is None


def test_promotion_choice() -> None:
    request = MoveRequest(from_square="b7", to_square="b8", promote_to="rook")
    assert request.promote_to == PieceType.ROOK


def test_unknown_promotion_choice() -> None:
    with pytest.raises(ValidationError):
        _ = MoveRequest(from_square="b7", to_square="b8", promote_to="wizard")


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # off the board
        "a9",  # off the board
    ],
)
def test_invalid_from_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square=square, to_square="e2")


@pytest.mark.parametrize("square", ["nonsense", "11", "aa", "h0"])
def test_invalid_to_square(square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square="e2", to_square=square)


# -- Validation - SaveGameRequest --
def test_save_name_is_stripped() -> None:
    assert SaveGameRequest(name="  friday night  ").name == "friday night"


@pytest.mark.parametrize("name", ["", "   "])
def test_save_name_required(name: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SaveGameRequest(name=name)
