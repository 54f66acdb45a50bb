"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the movement rule for each piece type.
Every rule is a pure function (board, from, to) -> bool, dispatched on the piece type.

These rules ignore whether the move leaves your own king in check. That is layered on top in
get_valid_moves() (self-check exclusion).
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Self

from src.chess.board import Board
from src.chess.castling import is_valid_castling
from src.chess.check import (
    DIAGONALS,
    KING_DELTAS,
    KNIGHT_DELTAS,
    STRAIGHTS,
    Vector,
    would_move_result_in_check,
)
from src.chess.pieces import PIECE_TO_FEN, Piece
from src.chess.special_moves import (
    LastPawnMove,
    is_en_passant_move,
    pawn_direction,
    pawn_start_row,
)
from src.chess.square import col, index, is_on_board, row, to_algebraic
from src.core.shared_types import Color, PieceType


@dataclass(frozen=True)
class Move:
    """A move as it was played. Immutable once appended to the history."""

    piece: Piece  # snapshot before moving
    from_square: int
    to_square: int
    captured: Optional[Piece] = None
    promotion: Optional[PieceType] = None
    timestamp: int = 0

    @property
    def is_castling(self) -> bool:
        return (
            self.piece.type == PieceType.KING
            and abs(col(self.to_square) - col(self.from_square)) == 2
        )

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def to_uci(self) -> str:
        """
        ex.
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        """
        piece_char = PIECE_TO_FEN[self.promotion] if self.promotion else ""
        return f"{to_algebraic(self.from_square)}{to_algebraic(self.to_square)}{piece_char}"

    def to_record(self) -> dict[str, object]:
        return {
            "piece": self.piece.to_record(),
            "from": self.from_square,
            "to": self.to_square,
            "captured": self.captured.to_record() if self.captured else None,
            "promotion": self.promotion.value if self.promotion else None,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_record(cls, record: dict) -> Self:
        return cls(
            piece=Piece.from_record(record["piece"]),
            from_square=record["from"],
            to_square=record["to"],
            captured=Piece.from_record(record["captured"]) if record.get("captured") else None,
            promotion=PieceType(record["promotion"]) if record.get("promotion") else None,
            timestamp=record.get("timestamp", 0),
        )


# --- MOVEMENT RULES ---
def is_path_clear(board: Board, from_pos: int, to_pos: int) -> bool:
    """
    Walk cell by cell from just after `from_pos` to just before `to_pos` along a straight or diagonal line.
    Any occupied square in between blocks the move.
    """
    row_step = (row(to_pos) > row(from_pos)) - (row(to_pos) < row(from_pos))
    col_step = (col(to_pos) > col(from_pos)) - (col(to_pos) < col(from_pos))

    r, c = row(from_pos) + row_step, col(from_pos) + col_step
    while (r, c) != (row(to_pos), col(to_pos)):
        if not board.is_empty(index(r, c)):
            return False
        r += row_step
        c += col_step
    return True


def is_valid_pawn_move(
    board: Board, from_pos: int, to_pos: int, last_pawn_move: Optional[LastPawnMove] = None
) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square
    - can move by two from its starting rank if both squares are empty
    - takes diagonally, only onto an enemy piece
    - or takes en passant
    """
    piece = board.piece(from_pos)
    if piece is None:
        return False

    direction = pawn_direction(piece.color)
    d_row = row(to_pos) - row(from_pos)
    d_col = col(to_pos) - col(from_pos)

    # Basic forward move
    if d_col == 0 and d_row == direction and board.is_empty(to_pos):
        return True

    # Initial two-square move
    if (
        d_col == 0
        and row(from_pos) == pawn_start_row(piece.color)
        and d_row == 2 * direction
        and board.is_empty(to_pos)
        and board.is_empty(from_pos + direction * 8)
    ):
        return True

    # Regular capture
    target = board.piece(to_pos)
    if abs(d_col) == 1 and d_row == direction and target is not None:
        return target.color != piece.color

    return is_en_passant_move(board, from_pos, to_pos, last_pawn_move)


def is_valid_knight_move(board: Board, from_pos: int, to_pos: int) -> bool:
    """Knights always move such that (|delta_row|, |delta_col|) is (2, 1) or (1, 2), jumping over anything"""
    deltas = (abs(row(to_pos) - row(from_pos)), abs(col(to_pos) - col(from_pos)))
    return deltas in {(2, 1), (1, 2)}


def is_valid_bishop_move(board: Board, from_pos: int, to_pos: int) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    d_row = abs(row(to_pos) - row(from_pos))
    d_col = abs(col(to_pos) - col(from_pos))
    if d_row != d_col or d_row == 0:
        return False
    return is_path_clear(board, from_pos, to_pos)


def is_valid_rook_move(board: Board, from_pos: int, to_pos: int) -> bool:
    """Rooks move either horizontally or vertically"""
    if from_pos == to_pos:
        return False
    if row(from_pos) != row(to_pos) and col(from_pos) != col(to_pos):
        return False
    return is_path_clear(board, from_pos, to_pos)


def is_valid_queen_move(board: Board, from_pos: int, to_pos: int) -> bool:
    """The Queen combines the rook moves and bishop moves"""
    return is_valid_rook_move(board, from_pos, to_pos) or is_valid_bishop_move(
        board, from_pos, to_pos
    )


def is_valid_king_move(board: Board, from_pos: int, to_pos: int) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move: two columns along the row.
    """
    piece = board.piece(from_pos)
    if piece is None or from_pos == to_pos:
        return False

    d_row = abs(row(to_pos) - row(from_pos))
    d_col = abs(col(to_pos) - col(from_pos))
    if d_row <= 1 and d_col <= 1:
        return True

    if d_row == 0 and d_col == 2:
        return is_valid_castling(board, from_pos, to_pos, piece.color)
    return False


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Board, int, int], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.KNIGHT: is_valid_knight_move,
    PieceType.BISHOP: is_valid_bishop_move,
    PieceType.ROOK: is_valid_rook_move,
    PieceType.QUEEN: is_valid_queen_move,
    PieceType.KING: is_valid_king_move,
}


def is_valid_move(
    board: Board,
    from_pos: int,
    to_pos: int,
    last_pawn_move: Optional[LastPawnMove] = None,
) -> bool:
    """
    Is the move allowed by the movement rules of the piece on `from_pos`?

    Fails closed: False if there is no piece to move, or the destination holds a piece of the same color.
    Does NOT check whether your own king ends up in check.
    """
    piece = board.piece(from_pos)
    if piece is None:
        return False

    target = board.piece(to_pos)
    if target is not None and target.color == piece.color:
        return False

    # only the pawn rule needs to know about the previous move
    if piece.type == PieceType.PAWN:
        return is_valid_pawn_move(board, from_pos, to_pos, last_pawn_move)
    return MOVEMENT_RULES[piece.type](board, from_pos, to_pos)


# --- CANDIDATE DESTINATIONS ---
def _rays(pos: int, board: Board, directions: list[Vector]) -> Iterator[int]:
    """
    Raycasting: move along each direction until we hit a piece (included) or the edge of the board.
    """
    for dr, dc in directions:
        r, c = row(pos) + dr, col(pos) + dc
        while is_on_board(r, c):
            target = index(r, c)
            yield target
            if not board.is_empty(target):
                break
            r += dr
            c += dc


def _steps(pos: int, deltas: list[Vector]) -> Iterator[int]:
    for dr, dc in deltas:
        r, c = row(pos) + dr, col(pos) + dc
        if is_on_board(r, c):
            yield index(r, c)


def candidate_destinations(board: Board, pos: int) -> list[int]:
    """
    Superset of the cells `is_valid_move` can accept for the piece on `pos`.

    Scanning all 64 cells gives the same result, this just skips the cells a piece can never reach.
    """
    piece = board.piece(pos)
    if piece is None:
        return []

    match piece.type:
        case PieceType.PAWN:
            direction = pawn_direction(piece.color)
            deltas = [(direction, 0), (2 * direction, 0), (direction, 1), (direction, -1)]
            return list(_steps(pos, deltas))
        case PieceType.KNIGHT:
            return list(_steps(pos, KNIGHT_DELTAS))
        case PieceType.BISHOP:
            return list(_rays(pos, board, DIAGONALS))
        case PieceType.ROOK:
            return list(_rays(pos, board, STRAIGHTS))
        case PieceType.QUEEN:
            return list(_rays(pos, board, STRAIGHTS + DIAGONALS))
        case PieceType.KING:
            return list(_steps(pos, KING_DELTAS + [(0, 2), (0, -2)]))
    return []


# --- MOVE ENUMERATION (with self-check exclusion) ---
def get_valid_moves(
    board: Board,
    pos: int,
    color: Color,
    last_pawn_move: Optional[LastPawnMove] = None,
) -> list[int]:
    """Every destination the piece on `pos` may legally move to, for the player with the `color` pieces."""
    piece = board.piece(pos)
    if piece is None or piece.color != color:
        return []

    return sorted(
        to_pos
        for to_pos in candidate_destinations(board, pos)
        if is_valid_move(board, pos, to_pos, last_pawn_move)
        and not would_move_result_in_check(board, pos, to_pos, color, last_pawn_move)
    )


def get_valid_attacks(
    board: Board,
    pos: int,
    color: Color,
    last_pawn_move: Optional[LastPawnMove] = None,
) -> list[int]:
    """The legal destinations that capture something: an enemy piece on the square, or an en passant take."""
    return [
        to_pos
        for to_pos in get_valid_moves(board, pos, color, last_pawn_move)
        if not board.is_empty(to_pos) or is_en_passant_move(board, pos, to_pos, last_pawn_move)
    ]


def generate_legal_moves(
    board: Board, color: Color, last_pawn_move: Optional[LastPawnMove] = None
) -> list[tuple[int, int]]:
    """All (from, to) pairs the player with the `color` pieces can play."""
    return [
        (from_pos, to_pos)
        for from_pos in board.locate_color(color)
        for to_pos in get_valid_moves(board, from_pos, color, last_pawn_move)
    ]


def has_legal_move(
    board: Board, color: Color, last_pawn_move: Optional[LastPawnMove] = None
) -> bool:
    """Stops at the first legal move found"""
    return any(
        get_valid_moves(board, from_pos, color, last_pawn_move)
        for from_pos in board.locate_color(color)
    )
