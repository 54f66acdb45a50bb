"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any, Optional

# Type aliases to make GameModel easier to read
MoveRecord = dict[str, Any]
LastPawnMoveRecord = dict[str, int]


@dataclass
class GameModel:
    """Transport-safe snapshot of a chess game used between Service, DB, and Game layers."""

    board_fen: str
    moved_squares: list[int]
    current_turn: str
    status: str
    move_history: list[MoveRecord]
    white_player: str
    black_player: str
    result: str = "*"
    last_pawn_move: Optional[LastPawnMoveRecord] = None
    pending_promotion: Optional[MoveRecord] = None
    difficulty: str = "medium"
