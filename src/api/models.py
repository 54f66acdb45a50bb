"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.square import is_valid_algebraic
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Difficulty, PieceType, Status

PlayerName = str


def _validate_square(value: str) -> str:
    if not is_valid_algebraic(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value.lower()


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    white_player: PlayerName = "Player"
    black_player: PlayerName = "Computer"
    difficulty: Optional[Difficulty] = None


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class PromotionRequest(BaseModel):
    game_id: UUID
    piece_type: PieceType

    @field_validator("piece_type")
    @classmethod
    def validate_piece_type(cls, value: PieceType) -> PieceType:
        if value in (PieceType.PAWN, PieceType.KING):
            raise InvalidRequestError(f"A pawn cannot promote to a {value}.")
        return value


class ComputerMoveRequest(BaseModel):
    game_id: UUID
    difficulty: Optional[Difficulty] = None


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    white_player: PlayerName
    black_player: PlayerName
    board_fen: str
    current_turn: Color
    status: Status
    result: str
    move_history: list[str]
    pending_promotion: Optional[str] = None
    events: list[str] = []


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    color: Optional[Color]
    moves: list[str]
    attacks: list[str]
