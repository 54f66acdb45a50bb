"""
Which feedback events a move triggered.

The host decides what to do with them (play a sound, show a notification). The core only reports them.
"""

from enum import StrEnum

from src.chess.moves import Move
from src.core.shared_types import Status


class GameEvent(StrEnum):
    MOVE = "move"
    CAPTURE = "capture"
    CASTLE = "castle"
    PROMOTION = "promotion"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


STATUS_EVENTS: dict[Status, GameEvent] = {
    Status.CHECK: GameEvent.CHECK,
    Status.CHECKMATE: GameEvent.CHECKMATE,
    Status.STALEMATE: GameEvent.STALEMATE,
}


def classify_events(move: Move, status: Status) -> list[GameEvent]:
    """
    First the kind of move (castle, capture or a plain move), then promotion, then the resulting status.

    ex. a capture that promotes and gives mate -> [CAPTURE, PROMOTION, CHECKMATE]
    """
    if move.is_castling:
        events = [GameEvent.CASTLE]
    elif move.is_capture:
        events = [GameEvent.CAPTURE]
    else:
        events = [GameEvent.MOVE]

    if move.promotion is not None:
        events.append(GameEvent.PROMOTION)

    if status in STATUS_EVENTS:
        events.append(STATUS_EVENTS[status])
    return events
