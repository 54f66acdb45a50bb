"""Unit tests for /src/chess/notation.py"""

from datetime import date

import pytest

from src.chess.board import Board
from src.chess.game import GameState, apply_move, apply_promotion, new_game
from src.chess.moves import Move
from src.chess.notation import export_pgn, format_moves, move_notation
from src.chess.pieces import Piece
from src.chess.square import from_algebraic as sq
from src.core.shared_types import Color, PieceType


def make_move(
    piece_type: PieceType,
    from_square: str,
    to_square: str,
    captured: bool = False,
    promotion: PieceType | None = None,
) -> Move:
    piece = Piece(piece_type, Color.WHITE, sq(from_square))
    taken = Piece(PieceType.PAWN, Color.BLACK, sq(to_square)) if captured else None
    return Move(piece, sq(from_square), sq(to_square), captured=taken, promotion=promotion)


@pytest.mark.parametrize(
    "move, expected",
    [
        (make_move(PieceType.PAWN, "e2", "e4"), "e4"),
        (make_move(PieceType.PAWN, "e4", "d5", captured=True), "exd5"),
        (make_move(PieceType.KNIGHT, "g1", "f3"), "Ng1f3"),
        (make_move(PieceType.BISHOP, "c4", "f7", captured=True), "Bc4xf7"),
        (make_move(PieceType.KING, "e1", "g1"), "O-O"),
        (make_move(PieceType.KING, "e1", "c1"), "O-O-O"),
        (make_move(PieceType.KING, "e1", "f1"), "Ke1f1"),
        (make_move(PieceType.PAWN, "e7", "e8", promotion=PieceType.QUEEN), "e8=Q"),
        (make_move(PieceType.PAWN, "e7", "d8", captured=True, promotion=PieceType.KNIGHT), "exd8=N"),
    ],
)
def test_move_notation(move: Move, expected: str) -> None:
    assert move_notation(move) == expected


def test_format_moves_numbers_full_moves() -> None:
    moves = [
        make_move(PieceType.PAWN, "e2", "e4"),
        make_move(PieceType.PAWN, "e7", "e5"),
        make_move(PieceType.KNIGHT, "g1", "f3"),
    ]
    assert format_moves(moves) == "1. e4 e5 2. Ng1f3"
    assert format_moves([]) == ""


def test_export_pgn_finished_game() -> None:
    state = new_game("Alice", "Bob")
    for from_square, to_square in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        state = apply_move(state, sq(from_square), sq(to_square)).state

    pgn = export_pgn(state, played_on=date(2024, 3, 9))
    assert pgn == (
        '[White "Alice"]\n'
        '[Black "Bob"]\n'
        '[Date "2024.03.09"]\n'
        '[Result "0-1"]\n'
        "\n"
        "1. f3 e5 2. g4 Qd8h4 0-1"
    )


def test_export_pgn_without_moves() -> None:
    pgn = export_pgn(new_game(), played_on=date(2024, 1, 1))
    assert pgn.endswith("\n\n*")
    assert '[Result "*"]' in pgn


def test_export_pgn_with_promotion() -> None:
    state = GameState(board=Board.from_fen("4k3/P7/8/8/8/8/8/4K3"))
    pending = apply_move(state, sq("a7"), sq("a8"))
    state = apply_promotion(pending.state, PieceType.ROOK).state
    assert export_pgn(state, played_on=date(2024, 1, 1)).endswith("1. a8=R *")
