"""
Attack detection and check simulation
----

Capturing/attacking rules are derived separately from the movement rules in moves.py.
For a pawn "can move here" and "attacks here" differ (pushes vs. diagonal takes), so the castling
rule (are the squares the king passes through attacked?) needs real attack patterns.

Key idea: look outwards from the target square with every piece's movement pattern and check
whether the first piece met along that pattern is an attacker of the right type.
"""

from typing import Callable, Optional

from src.chess.board import Board
from src.chess.special_moves import LastPawnMove, perform_move
from src.chess.square import col, index, is_on_board, row
from src.core.shared_types import Color, PieceType

Vector = tuple[int, int]  # (delta row, delta col)

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def raycasting_attack(
    pos: int,
    by_color: Color,
    by_piece_types: tuple[PieceType, ...],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Is the square in the line-of-sight of a sliding piece of the specified color and types?

    Move along each direction until we hit another piece or the edge of the board.
    Only the first occupied square matters.
    """
    for dr, dc in directions:
        r, c = row(pos) + dr, col(pos) + dc
        while is_on_board(r, c):
            piece = board.piece(index(r, c))
            if piece is not None:
                if piece.color == by_color and piece.type in by_piece_types:
                    return True
                break
            r += dr
            c += dc
    return False


def single_step_attack(
    pos: int,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """Equivalent of raycasting for pawns, kings, and knights that only reach a single step along a direction."""
    for dr, dc in deltas:
        r, c = row(pos) + dr, col(pos) + dc
        if not is_on_board(r, c):
            continue
        piece = board.piece(index(r, c))
        if piece is not None and piece.color == by_color and piece.type == by_piece_type:
            return True
    return False


def is_attacked_by_pawn(pos: int, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric. A white pawn moves UP the board (to lower rows), so to find a
    white pawn attacking this square you must look one row DOWN (higher row index). Hence the vectors
    are exactly opposite to the pawn's own capture direction.
    """
    behind = 1 if by_color == Color.WHITE else -1
    return single_step_attack(
        pos, by_color, PieceType.PAWN, board, [(behind, 1), (behind, -1)]
    )


def is_attacked_by_knight(pos: int, by_color: Color, board: Board) -> bool:
    return single_step_attack(pos, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_king(pos: int, by_color: Color, board: Board) -> bool:
    return single_step_attack(pos, by_color, PieceType.KING, board, KING_DELTAS)


def is_attacked_on_straights(pos: int, by_color: Color, board: Board) -> bool:
    """Rooks and the queen"""
    return raycasting_attack(
        pos, by_color, (PieceType.ROOK, PieceType.QUEEN), board, STRAIGHTS
    )


def is_attacked_on_diagonals(pos: int, by_color: Color, board: Board) -> bool:
    """Bishops and the queen"""
    return raycasting_attack(
        pos, by_color, (PieceType.BISHOP, PieceType.QUEEN), board, DIAGONALS
    )


IsAttackedFn = Callable[[int, Color, Board], bool]
ATTACK_RULES: tuple[IsAttackedFn, ...] = (
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_on_diagonals,
    is_attacked_on_straights,
    is_attacked_by_king,
)


def is_square_under_attack(board: Board, pos: int, attacking_color: Color) -> bool:
    return any(rule(pos, attacking_color, board) for rule in ATTACK_RULES)


def is_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of the given color attacked?

    NOTE: Assumes the king is on the board. Without it there is no meaningful answer (returns False).
    """
    king_pos = board.find_king(color)
    if king_pos < 0:
        return False
    return is_square_under_attack(board, king_pos, color.opponent)


def would_move_result_in_check(
    board: Board,
    from_pos: int,
    to_pos: int,
    color: Color,
    last_pawn_move: Optional[LastPawnMove] = None,
) -> bool:
    """Return True if the move puts (or leaves) your own king in check

    plan:
    1. make the candidate move on a scratch copy (including an en passant capture)
    2. determine if the king is in check on the new board
    The board passed in is never touched.
    """
    scratch = perform_move(board, from_pos, to_pos, last_pawn_move).board
    return is_in_check(scratch, color)
