"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timezone
from typing import Callable, Generator, Optional

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from jokerchess.chess.board import Board
from jokerchess.chess.game import GameSession
from jokerchess.chess.square import Square
from jokerchess.core.models import PlayerInfo
from jokerchess.core.shared_types import Color, GameMode, Status
from jokerchess.db.schema import Base

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

SessionFactory = Callable[..., GameSession]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def players() -> tuple[PlayerInfo, PlayerInfo]:
    return PlayerInfo(name="Alice", theme="Princess Pink"), PlayerInfo(
        name="Bob", theme="Ocean Blue"
    )


@pytest.fixture
def session_from_layout() -> SessionFactory:
    """Call the inner function with a layout like {"e1": "K", "e8": "k"} to get a game in progress in that position"""

    def _create_session(
        layout: dict[str, str],
        to_move: Color = Color.WHITE,
        white_clock: int = 600,
        black_clock: int = 600,
        jokers: tuple[str, ...] = (),
        mode: GameMode = GameMode.STANDARD,
        joker_squares: Optional[dict[Color, Square]] = None,
    ) -> GameSession:
        board = Board.from_symbols(layout)
        for name in jokers:
            piece = board.piece(Square.from_algebraic(name))
            assert piece is not None
            piece.is_joker = True
        return GameSession(
            mode=mode,
            board=board,
            current_player=to_move,
            moves=[],
            status=Status.PLAYING,
            white_clock=white_clock,
            black_clock=black_clock,
            players={
                Color.WHITE: PlayerInfo(name="white player"),
                Color.BLACK: PlayerInfo(name="black player"),
            },
            joker_squares=joker_squares,
            now=lambda: FIXED_NOW,
        )

    return _create_session
