"""Orchestration between the UI-facing boundary, the game sessions (domain layer) and the storage collaborator."""

import logging
import random
from typing import Optional

from jokerchess.api.models import (
    MoveRequest,
    MoveResponse,
    SaveGameRequest,
    StartGameRequest,
)
from jokerchess.chess.game import GameSession, MoveResult, move_to_model
from jokerchess.core.config import Settings, get_settings
from jokerchess.core.exceptions import IllegalMoveError, RepositoryError
from jokerchess.core.models import GameSnapshot
from jokerchess.core.shared_types import GameMode, MoveOutcome
from jokerchess.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for the chess game."""

    def __init__(
        self,
        repository: GameRepository,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()
        self.rng = rng

    # -- session lifecycle --
    def create_session(self, mode: GameMode = GameMode.JOKER) -> GameSession:
        return GameSession.create(
            mode,
            rng=self.rng,
            clock_period_seconds=self.settings.clock_period_seconds,
        )

    def start_game(self, session: GameSession, request: StartGameRequest) -> GameSnapshot:
        time_control = (
            request.time_control_seconds
            or self.settings.default_time_control_seconds
        )
        session.start_game(request.white, request.black, time_control)
        return session.serialize()

    def submit_move(self, session: GameSession, request: MoveRequest) -> MoveResponse:
        """
        Illegal moves come back as a rejected outcome instead of an exception: the UI simply re-prompts.
        Any other error (e.g. game already over) is propagated.
        """
        try:
            result = session.submit_move(
                request.from_square, request.to_square, request.promote_to
            )
        except IllegalMoveError as exc:
            logger.debug("Rejected move %s%s: %s", request.from_square, request.to_square, exc)
            return MoveResponse(
                outcome=MoveOutcome.REJECTED_ILLEGAL,
                message=str(exc),
                game=session.serialize(),
            )
        return self._create_move_response(session, result)

    # -- persistence --
    def save_game(self, session: GameSession, request: SaveGameRequest) -> GameSnapshot:
        stored = self.repo.save_game(request.name, session.serialize())
        logger.info("Saved game %r", request.name)
        return stored

    def load_game(self, name: str) -> GameSession:
        snapshot = self._fetch_game(name)
        session = GameSession.deserialize(
            snapshot,
            rng=self.rng,
            clock_period_seconds=self.settings.clock_period_seconds,
        )
        logger.info("Loaded game %r", name)
        return session

    def list_saved_games(self) -> list[str]:
        return self.repo.list_games()

    def delete_saved_game(self, name: str) -> None:
        """Handle a request to delete a saved game."""
        if not self.repo.delete_game(name):
            raise RepositoryError(f"No saved game with {name=}.")

    # -- Internal helpers --
    def _create_move_response(
        self, session: GameSession, result: MoveResult
    ) -> MoveResponse:
        return MoveResponse(
            outcome=result.outcome,
            move=move_to_model(result.move) if result.move is not None else None,
            winner=result.winner,
            end_reason=result.end_reason,
            game=session.serialize(),
        )

    def _fetch_game(self, name: str) -> GameSnapshot:
        """Attempt to find the game in the repository and raise error if it fails."""
        snapshot = self.repo.get_game(name)
        if snapshot is None:
            raise RepositoryError(f"Saved game with {name=} not found.")
        return snapshot
