"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame

_log = logging.getLogger(__name__)

# Snapshot fields copied one-to-one between GameModel and DBGame
SNAPSHOT_FIELDS: tuple[str, ...] = (
    "board_fen",
    "moved_squares",
    "current_turn",
    "status",
    "move_history",
    "last_pawn_move",
    "pending_promotion",
    "white_player",
    "black_player",
    "result",
    "difficulty",
)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        game_db = DBGame(id=new_id, **{name: getattr(game, name) for name in SNAPSHOT_FIELDS})
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        _log.info("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        for name in SNAPSHOT_FIELDS:
            setattr(game_db, name, getattr(game, name))
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        _log.info("Deleted game %s", game_id)
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(**{name: getattr(game_db, name) for name in SNAPSHOT_FIELDS})
