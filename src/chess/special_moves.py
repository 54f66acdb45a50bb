"""
Helpers for the special moves: en passant, promotion and the board update for castling.

Castling *legality* needs attack detection and lives in castling.py.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import BOARD_SIZE, col, index, row
from src.core.shared_types import Color, PieceType


@dataclass(frozen=True, slots=True)
class LastPawnMove:
    """Set only when the most recent move was a pawn move. Needed to recognise en passant captures."""

    from_square: int
    to_square: int
    timestamp: int

    @property
    def was_double_step(self) -> bool:
        return abs(row(self.to_square) - row(self.from_square)) == 2

    def to_record(self) -> dict[str, int]:
        return {"from": self.from_square, "to": self.to_square, "timestamp": self.timestamp}

    @classmethod
    def from_record(cls, record: dict[str, int]) -> Self:
        return cls(record["from"], record["to"], record["timestamp"])


@dataclass(frozen=True, slots=True)
class MoveExecution:
    """Outcome of applying a move to a copy of the board"""

    board: Board
    captured: Optional[Piece] = None
    is_castling: bool = False
    is_en_passant: bool = False


# -- PAWN GEOMETRY --
def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN"""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return BOARD_SIZE - 2 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else BOARD_SIZE - 1


# Rank a pawn must stand on to take en passant (the rank the enemy double step lands on)
EN_PASSANT_ROWS: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}


# -- EN PASSANT MOVES ---
def is_en_passant_move(
    board: Board, from_pos: int, to_pos: int, last_pawn_move: Optional[LastPawnMove]
) -> bool:
    """
    Diagonal pawn step behind an enemy pawn that just advanced two squares.

    * the last move must have been a double step of an enemy pawn
    * our pawn stands next to it (rank index 3 for white, 4 for black)
    * we move one row forward and one column sideways, onto the column the enemy pawn landed on
    """
    if last_pawn_move is None:
        return False

    piece = board.piece(from_pos)
    if piece is None or piece.type != PieceType.PAWN:
        return False

    if row(from_pos) != EN_PASSANT_ROWS[piece.color]:
        return False

    if row(to_pos) != row(from_pos) + pawn_direction(piece.color):
        return False
    if abs(col(to_pos) - col(from_pos)) != 1:
        return False

    captured_pawn = board.piece(last_pawn_move.to_square)
    if (
        captured_pawn is None
        or captured_pawn.type != PieceType.PAWN
        or captured_pawn.color == piece.color
    ):
        return False

    if not last_pawn_move.was_double_step:
        return False

    return col(to_pos) == col(last_pawn_move.to_square)


def en_passant_capture_square(from_pos: int, to_pos: int) -> int:
    """The pawn taken en passant stands on the capturing pawn's row, in the destination's column"""
    return index(row(from_pos), col(to_pos))


def next_last_pawn_move(
    piece: Piece, from_pos: int, to_pos: int, timestamp: int
) -> Optional[LastPawnMove]:
    """Only pawn moves are remembered. Any other move clears the record."""
    if piece.type != PieceType.PAWN:
        return None
    return LastPawnMove(from_pos, to_pos, timestamp)


# -- PAWN PROMOTION MOVES --
PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def is_promotion_move(board: Board, from_pos: int, to_pos: int) -> bool:
    """check if the move is a pawn move reaching the farthest rank from its start"""
    piece = board.piece(from_pos)
    if piece is None or piece.type != PieceType.PAWN:
        return False
    return row(to_pos) == promotion_row(piece.color)


def can_promote(board: Board, pos: int) -> bool:
    """A pawn standing on its last rank, waiting to be promoted"""
    piece = board.piece(pos)
    return (
        piece is not None
        and piece.type == PieceType.PAWN
        and row(pos) == promotion_row(piece.color)
    )


def promote_pawn(board: Board, pos: int, new_type: PieceType) -> Board:
    """Rewrite the piece type of the pawn on pos. Anything else is left untouched."""
    piece = board.piece(pos)
    if piece is None or piece.type != PieceType.PAWN:
        return board
    return board.place_piece(piece.promoted_to(new_type))


# -- CASTLING MOVES ---
KING_SIDE_ROOK_OFFSET = 3
QUEEN_SIDE_ROOK_OFFSET = -4


def is_castling_pattern(board: Board, from_pos: int, to_pos: int) -> bool:
    """The king moves two columns along its row"""
    piece = board.piece(from_pos)
    return (
        piece is not None
        and piece.type == PieceType.KING
        and row(from_pos) == row(to_pos)
        and abs(col(to_pos) - col(from_pos)) == 2
    )


def castling_rook_squares(king_from: int, king_to: int) -> Optional[tuple[int, int]]:
    """
    Where the rook starts and where it ends up (the square the king passed through).
    None if the rook would have to come from off the board.
    """
    offset = KING_SIDE_ROOK_OFFSET if king_to > king_from else QUEEN_SIDE_ROOK_OFFSET
    rook_col = col(king_from) + offset
    if not 0 <= rook_col < BOARD_SIZE:
        return None
    step = 1 if offset > 0 else -1
    return index(row(king_from), rook_col), king_from + step


# -- APPLYING MOVES --
def perform_move(
    board: Board,
    from_pos: int,
    to_pos: int,
    last_pawn_move: Optional[LastPawnMove] = None,
) -> MoveExecution:
    """
    Apply a (pattern-legal) move to a copy of the board
    ----

    1. Castling: move the king and relocate the rook in one go
    2. En passant: move the pawn, take the enemy pawn from its actual square (not the destination)
    3. Anything else: standard relocation. Whatever stood on the destination is captured.

    Promotion is not resolved here: the pawn lands on the last rank as a pawn.
    """
    if is_castling_pattern(board, from_pos, to_pos):
        rook_squares = castling_rook_squares(from_pos, to_pos)
        new_board = board.move_piece(from_pos, to_pos)
        if rook_squares is not None:
            rook_from, rook_to = rook_squares
            new_board = new_board.move_piece(rook_from, rook_to)
        return MoveExecution(new_board, is_castling=True)

    if is_en_passant_move(board, from_pos, to_pos, last_pawn_move):
        take_square = en_passant_capture_square(from_pos, to_pos)
        captured = board.piece(take_square)
        new_board = board.remove_piece(take_square).move_piece(from_pos, to_pos)
        return MoveExecution(new_board, captured=captured, is_en_passant=True)

    captured = board.piece(to_pos)
    return MoveExecution(board.move_piece(from_pos, to_pos), captured=captured)
