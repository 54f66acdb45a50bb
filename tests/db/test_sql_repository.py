"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.chess.board import Board
from src.chess.game import GameState, apply_move, new_game
from src.chess.square import from_algebraic as sq
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository


def snapshot_after(*moves: str) -> GameModel:
    """Snapshot of a real game after playing the moves (written as '<from><to>')"""
    state: GameState = new_game("player_white", "player_black")
    for uci in moves:
        state = apply_move(state, sq(uci[:2]), sq(uci[2:])).state
    return state.to_model()


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = snapshot_after("e2e4", "e7e5")

    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    model = snapshot_after("d2d4")
    model.difficulty = "hard"

    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game
    assert game_found.difficulty == "hard"


def test_json_columns_survive_storage(db_session_repo: Session) -> None:
    """Move records, the last pawn move, and moved squares are stored as JSON and must come back unchanged"""
    model = snapshot_after("e2e4", "a7a6", "e4e5", "d7d5", "e5d6")
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)

    found = repo.get_game(game_id)
    assert found is not None
    assert found.move_history == model.move_history
    assert found.last_pawn_move == model.last_pawn_move
    assert sorted(found.moved_squares) == sorted(model.moved_squares)
    # and the game can be picked up where it was left
    state = GameState.from_model(found)
    assert state.board.is_empty(sq("d5"))


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(snapshot_after())
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session) -> None:
    """Update an earlier created record."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(snapshot_after())

    after = snapshot_after("g1f3")
    updated_game = repo.update_game(game_id, after)
    assert updated_game is not None
    assert updated_game == after


def test_consecutive_game_updates(db_session_repo: Session) -> None:
    """Tests that we can successfully make multiple updates to the same game."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(snapshot_after())

    # "loosely simulate real scenario"
    repo.update_game(game_id, snapshot_after("e2e4"))
    repo.update_game(game_id, snapshot_after("e2e4", "c7c5"))
    third_update = snapshot_after("e2e4", "c7c5", "g1f3")
    repo.update_game(game_id, third_update)

    after_all_updates = repo.get_game(game_id)
    assert after_all_updates is not None
    assert after_all_updates == third_update
    assert len(after_all_updates.move_history) == 3


def test_pending_promotion_is_stored(db_session_repo: Session) -> None:
    state = GameState(board=Board.from_fen("4k3/P7/8/8/8/8/8/4K3"))
    pending = apply_move(state, sq("a7"), sq("a8")).state
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(pending.to_model())

    found = repo.get_game(game_id)
    assert found is not None
    assert found.pending_promotion == pending.to_model().pending_promotion
    assert GameState.from_model(found).pending_promotion == pending.pending_promotion


def test_attempt_updating_unknown_game(db_session_repo: Session) -> None:
    """the update_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), snapshot_after("e2e4")) is None


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(snapshot_after("e2e4"))
    deleted_game = repo.delete_game(game_id)

    # the correct game should be deleted
    assert deleted_game == created_game

    # The game should no longer be available in db
    assert repo.get_game(game_id) is None


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    """the delete_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.delete_game(uuid4()) is None


def test_implements_repository_protocol(db_session_repo: Session) -> None:
    assert isinstance(SQLGameRepository(db_session_repo), GameRepository)
