"""
Storage contract for game snapshots.

SQLGameRepository (sql_repository.py) implements it with SQLAlchemy. The service tests use a dictionary.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from src.core.models import GameModel


@runtime_checkable
class GameRepository(Protocol):
    """Keeps the latest GameModel snapshot of every game, keyed by a generated UUID"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """The stored snapshot, or None for an unknown ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store the first snapshot of a game. Returns it as stored, together with the new ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the snapshot. None if there is nothing to replace."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Forget a game. Returns the last snapshot, or None for an unknown ID."""
        ...
