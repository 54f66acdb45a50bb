"""Castling rule. Needs attack detection, so it sits on top of check.py"""

from src.chess.board import Board
from src.chess.check import is_square_under_attack
from src.chess.special_moves import castling_rook_squares
from src.chess.square import col, row
from src.core.shared_types import Color, PieceType


def squares_between_on_row(from_pos: int, to_pos: int) -> list[int]:
    """
    Find the squares strictly between two squares on the same row

    Needed for checking if you can still castle (all of them must be empty)
    """
    if row(from_pos) != row(to_pos):
        raise ValueError(
            f"squares_between_on_row requires both squares to lie on the same row. \n from: {from_pos}\n to:{to_pos}"
        )
    step = 1 if to_pos > from_pos else -1
    return list(range(from_pos + step, to_pos, step))


def is_valid_castling(board: Board, from_pos: int, to_pos: int, color: Color) -> bool:
    """
    **you are allowed to castle if**

    * the king has not moved before
    * the rook on that side (3 cells towards the edge on the king side, 4 on the queen side) is there and has not moved
    * all squares in between the king and the rook are empty
    * the king does not stand on, pass through, or land on a square attacked by the opponent
      (so you cannot castle out of, through, or into check)
    """
    king = board.piece(from_pos)
    if king is None or king.type != PieceType.KING or king.has_moved:
        return False

    if row(from_pos) != row(to_pos) or abs(col(to_pos) - col(from_pos)) != 2:
        return False

    rook_squares = castling_rook_squares(from_pos, to_pos)
    if rook_squares is None:
        return False
    rook_from, passed_square = rook_squares

    rook = board.piece(rook_from)
    if rook is None or rook.type != PieceType.ROOK or rook.has_moved or rook.color != color:
        return False

    # Cannot castle if any of the squares is occupied
    if any(not board.is_empty(pos) for pos in squares_between_on_row(from_pos, rook_from)):
        return False

    # Cannot castle if any of the king's squares is under attack
    opponent_color = color.opponent
    return not any(
        is_square_under_attack(board, pos, opponent_color)
        for pos in (from_pos, passed_square, to_pos)
    )
