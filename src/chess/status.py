"""Checks for ending the game"""

from typing import Optional

from src.chess.board import Board
from src.chess.check import is_in_check
from src.chess.moves import has_legal_move
from src.chess.special_moves import LastPawnMove
from src.core.shared_types import Color, Status


def is_in_checkmate(
    board: Board, color: Color, last_pawn_move: Optional[LastPawnMove] = None
) -> bool:
    """In check, and no move gets you out of it"""
    return is_in_check(board, color) and not has_legal_move(board, color, last_pawn_move)


def is_stalemate(
    board: Board, color: Color, last_pawn_move: Optional[LastPawnMove] = None
) -> bool:
    """Not in check, but there is no legal move either"""
    return not is_in_check(board, color) and not has_legal_move(
        board, color, last_pawn_move
    )


def classify_status(
    board: Board, color: Color, last_pawn_move: Optional[LastPawnMove] = None
) -> Status:
    """
    Status for the side to move. Priority: checkmate > check > stalemate > playing.

    Checking for legal moves is the expensive part, so it is done once.
    """
    in_check = is_in_check(board, color)
    can_move = has_legal_move(board, color, last_pawn_move)
    if in_check:
        return Status.CHECK if can_move else Status.CHECKMATE
    return Status.PLAYING if can_move else Status.STALEMATE
