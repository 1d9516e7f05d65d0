"""Protocol repository: the storage collaborator the service is handed (SQLAlchemy, a dict in tests, ...)"""

from typing import Protocol

from jokerchess.core.models import GameSnapshot


class GameRepository(Protocol):
    """Persistence layer orchestration. Saved games are addressed by a user-chosen name."""

    def get_game(self, name: str) -> GameSnapshot | None:
        """Get the saved game, if a record with that name exists."""
        ...

    def save_game(self, name: str, snapshot: GameSnapshot) -> GameSnapshot:
        """Store the snapshot under the name (overwrites an earlier save with the same name)."""
        ...

    def list_games(self) -> list[str]:
        """Names of all saved games."""
        ...

    def delete_game(self, name: str) -> bool:
        """Remove a saved game's record, whether or not its snapshot is still valid. False if there was none."""
        ...
