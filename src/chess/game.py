"""
The game state machine is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the rules required to play a turn -->
passes the outcome to the service layer, which can then pass it onwards to the API layer.

Every operation takes a GameState and returns a result wrapping a NEW GameState.
Nothing is raised for a move that is not allowed: the result says it was rejected and carries the unchanged state.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Optional, Self

from src.chess.board import Board, create_initial_board
from src.chess.moves import Move, get_valid_moves
from src.chess.special_moves import (
    PROMOTION_OPTIONS,
    LastPawnMove,
    is_promotion_move,
    next_last_pawn_move,
    perform_move,
    promote_pawn,
)
from src.chess.square import to_algebraic
from src.chess.status import classify_status
from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import TERMINAL_STATUSES, Color, PieceType, Status

_log = logging.getLogger(__name__)

DEFAULT_WHITE_PLAYER = "Player"
DEFAULT_BLACK_PLAYER = "Computer"
UNFINISHED_RESULT = "*"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class GameState:
    board: Board
    current_turn: Color = Color.WHITE
    status: Status = Status.PLAYING
    move_history: tuple[Move, ...] = ()
    last_pawn_move: Optional[LastPawnMove] = None
    white_player: str = DEFAULT_WHITE_PLAYER
    black_player: str = DEFAULT_BLACK_PLAYER
    result: str = UNFINISHED_RESULT
    # UI-facing only, the rules never look at it
    selected_piece: Optional[int] = None
    # A pawn reached the last rank: the move is on the board, but not finished yet
    pending_promotion: Optional[Move] = None

    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def winner(self) -> Optional[str]:
        """
        For now only works for checkmate.
        Given we know it is checkmate, the player who is to move just got mated and the opponent must be the winner
        """
        if self.status != Status.CHECKMATE:
            return None
        return self.black_player if self.current_turn == Color.WHITE else self.white_player

    def player(self, color: Color) -> str:
        return self.white_player if color == Color.WHITE else self.black_player

    # --- SNAPSHOT (persistence shim) ---
    def to_model(self) -> GameModel:
        """Encode into the format the Service layer uses"""
        return GameModel(
            board_fen=self.board.to_fen(),
            moved_squares=[
                pos for pos, piece in enumerate(self.board) if piece and piece.has_moved
            ],
            current_turn=self.current_turn.value,
            status=self.status.value,
            move_history=[move.to_record() for move in self.move_history],
            white_player=self.white_player,
            black_player=self.black_player,
            result=self.result,
            last_pawn_move=self.last_pawn_move.to_record() if self.last_pawn_move else None,
            pending_promotion=(
                self.pending_promotion.to_record() if self.pending_promotion else None
            ),
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""
        if model.status not in Status._value2member_map_:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        if model.current_turn not in Color._value2member_map_:
            raise GameStateError(f"Invalid color to move: {model.current_turn!r}")

        board = Board.from_fen(model.board_fen)
        for pos in model.moved_squares:
            piece = board.piece(pos)
            if piece is not None:
                board = board.place_piece(replace(piece, has_moved=True))

        return cls(
            board=board,
            current_turn=Color(model.current_turn),
            status=Status(model.status),
            move_history=tuple(Move.from_record(record) for record in model.move_history),
            last_pawn_move=(
                LastPawnMove.from_record(model.last_pawn_move) if model.last_pawn_move else None
            ),
            white_player=model.white_player,
            black_player=model.black_player,
            result=model.result,
            pending_promotion=(
                Move.from_record(model.pending_promotion) if model.pending_promotion else None
            ),
        )


# --- RESULTS: what happened to a move attempt ---
@dataclass(frozen=True)
class MoveApplied:
    state: GameState
    move: Move


@dataclass(frozen=True)
class PromotionPending:
    """The pawn stands on the last rank. Call apply_promotion() with a piece type to finish the move."""

    state: GameState
    square: int


@dataclass(frozen=True)
class MoveRejected:
    state: GameState
    reason: str = field(default="")


MoveResult = MoveApplied | PromotionPending | MoveRejected


# --- DOMAIN LAYER API CALLED BY SERVICE ---
def new_game(
    white_player: str = DEFAULT_WHITE_PLAYER, black_player: str = DEFAULT_BLACK_PLAYER
) -> GameState:
    """Standard starting position, white to move"""
    return GameState(
        board=create_initial_board(),
        white_player=white_player,
        black_player=black_player,
    )


def reset_game(state: Optional[GameState] = None) -> GameState:
    """Full replacement with a fresh game. Player labels are kept if a previous state is given."""
    if state is None:
        return new_game()
    return new_game(state.white_player, state.black_player)


def apply_move(state: GameState, from_pos: int, to_pos: int) -> MoveResult:
    """
    Attempt to make a move
    -----

    1. reject if there is no piece of the color to move on `from_pos`
    2. reject if `to_pos` is not one of its valid moves
    3. update the board (castling moves the rook too, en passant removes the pawn beside you)
    4. pawn on the last rank? hold the turn and wait for apply_promotion()
    5. otherwise: record the move, remember pawn moves, flip the turn, update status
    """
    if state.pending_promotion is not None:
        return MoveRejected(state, "a promotion piece must be chosen first")

    if state.is_over:
        return MoveRejected(state, f"game is over: {state.status}")

    piece = state.board.piece(from_pos)
    if piece is None:
        return MoveRejected(state, f"no piece on {to_algebraic(from_pos)}")
    if piece.color != state.current_turn:
        return MoveRejected(state, f"it is {state.current_turn}'s turn")

    legal_destinations = get_valid_moves(
        state.board, from_pos, state.current_turn, state.last_pawn_move
    )
    if to_pos not in legal_destinations:
        return MoveRejected(
            state, f"move not allowed: {to_algebraic(from_pos)}{to_algebraic(to_pos)}"
        )

    timestamp = now_ms()
    is_promotion = is_promotion_move(state.board, from_pos, to_pos)
    execution = perform_move(state.board, from_pos, to_pos, state.last_pawn_move)
    move = Move(
        piece=piece,
        from_square=from_pos,
        to_square=to_pos,
        captured=execution.captured,
        timestamp=timestamp,
    )
    last_pawn_move = next_last_pawn_move(piece, from_pos, to_pos, timestamp)

    if is_promotion:
        pending = replace(
            state,
            board=execution.board,
            last_pawn_move=last_pawn_move,
            selected_piece=None,
            pending_promotion=move,
        )
        _log.debug("Promotion pending on %s", to_algebraic(to_pos))
        return PromotionPending(pending, to_pos)

    return _finish_move(state, execution.board, move, last_pawn_move)


def apply_promotion(state: GameState, piece_type: PieceType) -> MoveResult:
    """Rewrite the pawn on the pending square into `piece_type`, then finish the move as any other move."""
    pending = state.pending_promotion
    if pending is None:
        return MoveRejected(state, "no promotion pending")
    if piece_type not in PROMOTION_OPTIONS:
        return MoveRejected(state, f"cannot promote to {piece_type}")

    board = promote_pawn(state.board, pending.to_square, piece_type)
    move = replace(pending, promotion=piece_type)
    return _finish_move(state, board, move, state.last_pawn_move)


# -- PRIVATE HELPERS ---
def _finish_move(
    state: GameState,
    board: Board,
    move: Move,
    last_pawn_move: Optional[LastPawnMove],
) -> MoveApplied:
    """Append to history, flip the turn and classify the position for the side now to move."""
    next_turn = state.current_turn.opponent
    status = classify_status(board, next_turn, last_pawn_move)
    new_state = replace(
        state,
        board=board,
        current_turn=next_turn,
        status=status,
        move_history=state.move_history + (move,),
        last_pawn_move=last_pawn_move,
        result=_result_for(status, next_turn),
        selected_piece=None,
        pending_promotion=None,
    )
    _log.debug("%s played %s -> %s", state.current_turn, move.to_uci(), status)
    if new_state.is_over:
        _log.info("Game finished: %s (%s)", status, new_state.result)
    return MoveApplied(new_state, move)


def _result_for(status: Status, side_to_move: Color) -> str:
    if status == Status.CHECKMATE:
        return "0-1" if side_to_move == Color.WHITE else "1-0"
    if status == Status.STALEMATE:
        return "1/2-1/2"
    return UNFINISHED_RESULT
