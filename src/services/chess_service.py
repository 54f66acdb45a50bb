"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from dataclasses import replace
from typing import Optional
from uuid import UUID

from src.api.models import (
    ComputerMoveRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    PromotionRequest,
    ResetGameRequest,
)
from src.chess.events import GameEvent, classify_events
from src.chess.game import (
    GameState,
    MoveApplied,
    MoveRejected,
    MoveResult,
    PromotionPending,
    apply_move,
    apply_promotion,
    new_game,
    reset_game,
)
from src.chess.moves import get_valid_attacks, get_valid_moves
from src.chess.notation import move_notation
from src.chess.square import from_algebraic, to_algebraic
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    PromotionPendingError,
    RepositoryError,
)
from src.core.models import GameModel
from src.core.shared_types import Difficulty, PieceType
from src.db.repository import GameRepository
from src.engine.search import get_computer_move

_log = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self,
        repository: GameRepository,
        default_difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.default_difficulty = default_difficulty
        self.rng = rng

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a new game in the starting position and persist it."""
        state = new_game(request.white_player, request.black_player)
        model = state.to_model()
        model.difficulty = (request.difficulty or self.default_difficulty).value

        stored_game, game_id = self.repo.create_game(model)
        _log.info("Created game %s (%s vs %s)", game_id, state.white_player, state.black_player)
        return self._create_game_response(game_id, GameState.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        state, _ = self._load(request.game_id)
        return self._create_game_response(request.game_id, state)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Valid destinations (and the subset that captures) for the piece on the requested square."""
        state, _ = self._load(request.game_id)
        pos = from_algebraic(request.square)
        piece = state.board.piece(pos)

        moves: list[int] = []
        attacks: list[int] = []
        if piece is not None and state.pending_promotion is None and not state.is_over:
            moves = get_valid_moves(state.board, pos, piece.color, state.last_pawn_move)
            attacks = get_valid_attacks(state.board, pos, piece.color, state.last_pawn_move)

        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            color=piece.color if piece else None,
            moves=[to_algebraic(to_pos) for to_pos in moves],
            attacks=[to_algebraic(to_pos) for to_pos in attacks],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.

        If the pawn reaches the last rank and the request already names a piece type, the promotion is
        applied straight away. Otherwise the game waits for a PromotionRequest.
        """
        state, model = self._load(request.game_id)
        from_pos = from_algebraic(request.from_square)
        to_pos = from_algebraic(request.to_square)
        self._assert_can_move(state, from_pos)

        result = apply_move(state, from_pos, to_pos)
        if isinstance(result, PromotionPending) and request.promote_to is not None:
            result = apply_promotion(result.state, request.promote_to)

        return self._commit(request.game_id, model, result)

    def promote(self, request: PromotionRequest) -> GameResponse:
        """Finish a pending promotion."""
        state, model = self._load(request.game_id)
        if state.pending_promotion is None:
            raise GameStateError("There is no pawn waiting to be promoted.")
        result = apply_promotion(state, request.piece_type)
        return self._commit(request.game_id, model, result)

    def computer_move(self, request: ComputerMoveRequest) -> GameResponse:
        """Let the bot play for the side to move. Bot promotions are always to a queen."""
        state, model = self._load(request.game_id)
        if state.is_over:
            raise GameStateError(f"Game is over. status: {state.status}")
        if state.pending_promotion is not None:
            raise PromotionPendingError("A promotion piece must be chosen first.")

        difficulty = request.difficulty or Difficulty(model.difficulty)
        choice = get_computer_move(
            state.board, state.current_turn, state, difficulty, self.rng
        )
        if choice is None:
            raise GameStateError(f"No legal move for {state.current_turn}.")

        from_pos, to_pos = choice
        result = apply_move(state, from_pos, to_pos)
        if isinstance(result, PromotionPending):
            result = apply_promotion(result.state, PieceType.QUEEN)
        return self._commit(request.game_id, model, result)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Start over with the same players."""
        state, model = self._load(request.game_id)
        fresh = reset_game(state)
        self._store(request.game_id, fresh, model.difficulty)
        return self._create_game_response(request.game_id, fresh)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")

    # -- Internal helpers --
    def _assert_can_move(self, state: GameState, from_pos: int) -> None:
        """Turn the rule-level rejections that have a dedicated error into that error"""
        if state.pending_promotion is not None:
            raise PromotionPendingError("A promotion piece must be chosen first.")
        if state.is_over:
            raise GameStateError(f"Game is over. status: {state.status}")
        piece = state.board.piece(from_pos)
        if piece is not None and piece.color != state.current_turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {state.current_turn} to make a move first."
            )

    def _commit(self, game_id: UUID, model: GameModel, result: MoveResult) -> GameResponse:
        """Store the state after a move attempt and build the response (or raise if rejected)."""
        if isinstance(result, MoveRejected):
            raise IllegalMoveError(f"Move not allowed: {result.reason}")

        self._store(game_id, result.state, model.difficulty)
        events: list[GameEvent] = []
        if isinstance(result, MoveApplied):
            events = classify_events(result.move, result.state.status)
        return self._create_game_response(game_id, result.state, events)

    def _store(self, game_id: UUID, state: GameState, difficulty: str) -> None:
        model = replace(state.to_model(), difficulty=difficulty)
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _create_game_response(
        self, game_id: UUID, state: GameState, events: Optional[list[GameEvent]] = None
    ) -> GameResponse:
        """Convert a GameState to a GameResponse (for game with given ID.)"""
        pending = state.pending_promotion
        return GameResponse(
            game_id=game_id,
            white_player=state.white_player,
            black_player=state.black_player,
            board_fen=state.board.to_fen(),
            current_turn=state.current_turn,
            status=state.status,
            result=state.result,
            move_history=[move_notation(move) for move in state.move_history],
            pending_promotion=to_algebraic(pending.to_square) if pending else None,
            events=[event.value for event in events or []],
        )

    def _load(self, game_id: UUID) -> tuple[GameState, GameModel]:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return GameState.from_model(game_model), game_model
