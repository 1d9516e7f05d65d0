"""Implementation of (Game)Repository using SQLAlchemy"""

import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from jokerchess.core.exceptions import CorruptSnapshotError
from jokerchess.core.models import GameSnapshot
from jokerchess.db.schema import DBSavedGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, name: str) -> GameSnapshot | None:
        """Get the saved game, if a record with that name exists."""
        game_db = self._fetch_game(name)
        if game_db:
            return self._to_model(game_db)
        return None

    def save_game(self, name: str, snapshot: GameSnapshot) -> GameSnapshot:
        """Create a new record, or overwrite the one with the same name."""
        data = snapshot.model_dump(mode="json")
        game_db = self._fetch_game(name)
        if game_db is None:
            game_db = DBSavedGame(name=name, snapshot=data, status=snapshot.status)
            self.db.add(game_db)
        else:
            game_db.snapshot = data
            game_db.status = snapshot.status
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug("Stored game %r", name)
        return self._to_model(game_db)

    def list_games(self) -> list[str]:
        query = select(DBSavedGame.name).order_by(DBSavedGame.name)
        return list(self.db.scalars(query))

    def delete_game(self, name: str) -> bool:
        """Remove a saved game's record. The stored JSON is not validated: a corrupt save can still be deleted."""
        game_db = self._fetch_game(name)
        if not game_db:
            return False
        self.db.delete(game_db)
        self.db.commit()
        logger.debug("Deleted game %r", name)
        return True

    def _fetch_game(self, name: str) -> DBSavedGame | None:
        query = select(DBSavedGame).where(DBSavedGame.name == name)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBSavedGame) -> GameSnapshot:
        """Convert SQLAlchemy model to data transfer model."""
        try:
            return GameSnapshot.model_validate(game_db.snapshot)
        except ValidationError as exc:
            raise CorruptSnapshotError(
                f"Saved game {game_db.name!r} is corrupt: {exc}"
            ) from exc
