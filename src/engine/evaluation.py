"""
Static board evaluation.

Score is from White's point of view in centipawns: positive is good for white, negative good for black.
Lower difficulties blur the picture (scaled-down terms plus random jitter) to emulate imperfect play.
"""

import random
from typing import Optional

from src.chess.board import Board
from src.chess.check import KING_DELTAS, Vector, is_in_check
from src.chess.square import col, index, is_on_board, row
from src.core.shared_types import Color, Difficulty, PieceType

# Material values in centipawns.
PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

# Per-square bonus tables, written from White's side (row 0 = 8th rank).
# Black looks them up with the mirrored index 63 - pos.
# fmt: off
POSITION_BONUSES: dict[PieceType, tuple[int, ...]] = {
    PieceType.PAWN: (
        0,  0,  0,  0,  0,  0,  0,  0,
        50, 50, 50, 50, 50, 50, 50, 50,
        10, 10, 20, 30, 30, 20, 10, 10,
        5,  5, 10, 25, 25, 10,  5,  5,
        0,  0,  0, 20, 20,  0,  0,  0,
        5, -5,-10,  0,  0,-10, -5,  5,
        5, 10, 10,-20,-20, 10, 10,  5,
        0,  0,  0,  0,  0,  0,  0,  0,
    ),
    PieceType.KNIGHT: (
        -50,-40,-30,-30,-30,-30,-40,-50,
        -40,-20,  0,  0,  0,  0,-20,-40,
        -30,  0, 10, 15, 15, 10,  0,-30,
        -30,  5, 15, 20, 20, 15,  5,-30,
        -30,  0, 15, 20, 20, 15,  0,-30,
        -30,  5, 10, 15, 15, 10,  5,-30,
        -40,-20,  0,  5,  5,  0,-20,-40,
        -50,-40,-30,-30,-30,-30,-40,-50,
    ),
    PieceType.BISHOP: (
        -20,-10,-10,-10,-10,-10,-10,-20,
        -10,  0,  0,  0,  0,  0,  0,-10,
        -10,  0,  5, 10, 10,  5,  0,-10,
        -10,  5,  5, 10, 10,  5,  5,-10,
        -10,  0, 10, 10, 10, 10,  0,-10,
        -10, 10, 10, 10, 10, 10, 10,-10,
        -10,  5,  0,  0,  0,  0,  5,-10,
        -20,-10,-10,-10,-10,-10,-10,-20,
    ),
    PieceType.ROOK: (
        0,  0,  0,  0,  0,  0,  0,  0,
        5, 10, 10, 10, 10, 10, 10,  5,
        -5,  0,  0,  0,  0,  0,  0, -5,
        -5,  0,  0,  0,  0,  0,  0, -5,
        -5,  0,  0,  0,  0,  0,  0, -5,
        -5,  0,  0,  0,  0,  0,  0, -5,
        -5,  0,  0,  0,  0,  0,  0, -5,
        0,  0,  0,  5,  5,  0,  0,  0,
    ),
    PieceType.QUEEN: (
        -20,-10,-10, -5, -5,-10,-10,-20,
        -10,  0,  0,  0,  0,  0,  0,-10,
        -10,  0,  5,  5,  5,  5,  0,-10,
        -5,  0,  5,  5,  5,  5,  0, -5,
        0,  0,  5,  5,  5,  5,  0, -5,
        -10,  5,  5,  5,  5,  5,  0,-10,
        -10,  0,  5,  0,  0,  0,  0,-10,
        -20,-10,-10, -5, -5,-10,-10,-20,
    ),
    PieceType.KING: (
        -30,-40,-40,-50,-50,-40,-40,-30,
        -30,-40,-40,-50,-50,-40,-40,-30,
        -30,-40,-40,-50,-50,-40,-40,-30,
        -30,-40,-40,-50,-50,-40,-40,-30,
        -20,-30,-30,-40,-40,-30,-30,-20,
        -10,-20,-20,-20,-20,-20,-20,-10,
        20, 20,  0,  0,  0,  0, 20, 20,
        20, 30, 10,  0,  0, 10, 30, 20,
    ),
}
# fmt: on

# --- DIFFICULTY WEIGHTING ---
MATERIAL_MULTIPLIER: dict[Difficulty, float] = {
    Difficulty.BEGINNER: 0.5,
    Difficulty.EASY: 0.7,
    Difficulty.MEDIUM: 0.9,
    Difficulty.HARD: 1.0,
    Difficulty.EXTREME: 1.2,
}

POSITIONAL_MULTIPLIER: dict[Difficulty, float] = {
    Difficulty.BEGINNER: 0.2,
    Difficulty.EASY: 0.4,
    Difficulty.MEDIUM: 0.8,
    Difficulty.HARD: 1.0,
    Difficulty.EXTREME: 1.3,
}

KING_SAFETY_MULTIPLIER: dict[Difficulty, float] = {
    Difficulty.BEGINNER: 0.3,
    Difficulty.EASY: 0.5,
    Difficulty.MEDIUM: 0.8,
    Difficulty.HARD: 1.0,
    Difficulty.EXTREME: 1.5,
}

# Half-width of the uniform random jitter added to every evaluation
JITTER: dict[Difficulty, float] = {
    Difficulty.BEGINNER: 200,
    Difficulty.EASY: 100,
    Difficulty.MEDIUM: 50,
    Difficulty.HARD: 10,
    Difficulty.EXTREME: 0,
}

CHECK_PENALTY: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 300,
    Difficulty.EASY: 400,
    Difficulty.MEDIUM: 500,
    Difficulty.HARD: 600,
    Difficulty.EXTREME: 800,
}

# --- CENTER CONTROL (hard and extreme only) ---
CENTER_SQUARES: tuple[int, ...] = (27, 28, 35, 36)
EXTENDED_CENTER_SQUARES: tuple[int, ...] = (18, 19, 20, 21, 26, 29, 34, 37, 42, 43, 44, 45)
CENTER_BONUS: dict[Difficulty, int] = {Difficulty.HARD: 25, Difficulty.EXTREME: 40}
EXTENDED_CENTER_BONUS = 15

# --- KING SAFETY ---
EXPOSED_KING_PENALTY = 80
# (delta row, delta col) in front of a white king. Black flips the rows.
# The first three are the adjacent shield, the other three one row further out.
PAWN_SHIELD_DELTAS: tuple[Vector, ...] = ((-1, 0), (-1, 1), (-1, -1), (-2, 0), (-2, 1), (-2, -1))
CLOSE_SHIELD_BONUS = 40
FAR_SHIELD_BONUS = 20
DEFENDER_BONUS = 15


def _sign(color: Color) -> int:
    return 1 if color == Color.WHITE else -1


def _table_index(pos: int, color: Color) -> int:
    return pos if color == Color.WHITE else 63 - pos


def evaluate_king_safety(board: Board, king_pos: int, color: Color) -> float:
    """
    Pawn shield in front of the king + friendly pieces next to it.
    A king stranded on the central files (d, e, f) is penalised.
    """
    safety = 0.0
    king_row, king_col = row(king_pos), col(king_pos)

    if 2 < king_col < 6:
        safety -= EXPOSED_KING_PENALTY

    forward = 1 if color == Color.WHITE else -1
    for i, (dr, dc) in enumerate(PAWN_SHIELD_DELTAS):
        r, c = king_row + dr * forward, king_col + dc
        if not is_on_board(r, c):
            continue
        piece = board.piece(index(r, c))
        if piece and piece.type == PieceType.PAWN and piece.color == color:
            safety += CLOSE_SHIELD_BONUS if i < 3 else FAR_SHIELD_BONUS

    for dr, dc in KING_DELTAS:
        r, c = king_row + dr, king_col + dc
        if not is_on_board(r, c):
            continue
        piece = board.piece(index(r, c))
        if piece and piece.color == color:
            safety += DEFENDER_BONUS

    return safety


def evaluate_position(
    board: Board,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> float:
    """
    Weighted sum of
    ----

    1. material (signed by color)
    2. per-square positional bonus
    3. center control (hard / extreme), extended center ring (extreme)
    4. king safety for both sides
    5. penalty for a side being in check
    6. random jitter (none at extreme)
    """
    score = 0.0

    for pos, piece in enumerate(board):
        if piece is None:
            continue
        sign = _sign(piece.color)
        bonus = POSITION_BONUSES[piece.type][_table_index(pos, piece.color)]
        score += PIECE_VALUES[piece.type] * sign * MATERIAL_MULTIPLIER[difficulty]
        score += bonus * sign * POSITIONAL_MULTIPLIER[difficulty]

    jitter = JITTER[difficulty]
    if jitter:
        score += (rng or random).uniform(-jitter, jitter)

    if difficulty in CENTER_BONUS:
        for pos in CENTER_SQUARES:
            piece = board.piece(pos)
            if piece:
                score += CENTER_BONUS[difficulty] * _sign(piece.color)

        if difficulty == Difficulty.EXTREME:
            for pos in EXTENDED_CENTER_SQUARES:
                piece = board.piece(pos)
                if piece:
                    score += EXTENDED_CENTER_BONUS * _sign(piece.color)

    white_king = board.find_king(Color.WHITE)
    black_king = board.find_king(Color.BLACK)
    if white_king >= 0 and black_king >= 0:
        multiplier = KING_SAFETY_MULTIPLIER[difficulty]
        score += evaluate_king_safety(board, white_king, Color.WHITE) * multiplier
        score -= evaluate_king_safety(board, black_king, Color.BLACK) * multiplier

    if is_in_check(board, Color.WHITE):
        score -= CHECK_PENALTY[difficulty]
    if is_in_check(board, Color.BLACK):
        score += CHECK_PENALTY[difficulty]

    return score
