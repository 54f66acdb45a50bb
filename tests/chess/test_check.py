"""Unit tests for /src/chess/check.py"""

import pytest

from src.chess.board import Board, create_initial_board
from src.chess.check import (
    is_attacked_by_king,
    is_attacked_by_knight,
    is_attacked_by_pawn,
    is_attacked_on_diagonals,
    is_attacked_on_straights,
    is_in_check,
    is_square_under_attack,
    would_move_result_in_check,
)
from src.chess.special_moves import LastPawnMove
from src.chess.square import from_algebraic as sq
from src.core.shared_types import Color

PINNED_BISHOP_FEN = "k3r3/8/8/8/8/8/4B3/4K3"


def test_no_check_in_starting_position() -> None:
    board = create_initial_board()
    assert not is_in_check(board, Color.WHITE)
    assert not is_in_check(board, Color.BLACK)


@pytest.mark.parametrize(
    "fen, color",
    [
        ("4k3/8/8/8/8/8/8/4R1K1", Color.BLACK),  # rook on the e-file
        ("4k3/8/8/8/B7/8/8/6K1", Color.BLACK),  # bishop on the a4-e8 diagonal
        ("4k3/8/3N4/8/8/8/8/6K1", Color.BLACK),  # knight d6
        ("4k3/3P4/8/8/8/8/8/6K1", Color.BLACK),  # pawn d7 takes diagonally
        ("4k3/8/8/8/8/8/5p2/4K3", Color.WHITE),  # black pawn f2 takes towards e1
        ("4k3/8/8/8/8/8/8/q3K3", Color.WHITE),  # queen along the rank
    ],
)
def test_in_check(fen: str, color: Color) -> None:
    assert is_in_check(Board.from_fen(fen), color)


@pytest.mark.parametrize(
    "fen, color",
    [
        ("4k3/4p3/8/8/8/8/8/4R1K1", Color.BLACK),  # rook blocked by own pawn
        ("4k3/4P3/8/8/8/8/8/6K1", Color.BLACK),  # pawn right in front does not attack
        ("4k3/8/8/8/8/8/4p3/4K3", Color.WHITE),  # same for black
        ("4k3/8/8/8/8/8/5P2/4K3", Color.WHITE),  # own pawn
    ],
)
def test_not_in_check(fen: str, color: Color) -> None:
    assert not is_in_check(Board.from_fen(fen), color)


def test_pawn_attacks_diagonal_squares_only() -> None:
    """A white pawn on e4 covers d5 and f5 (even when empty), but not e5"""
    board = Board.from_fen("4k3/8/8/8/4P3/8/8/4K3")
    assert is_attacked_by_pawn(sq("d5"), Color.WHITE, board)
    assert is_attacked_by_pawn(sq("f5"), Color.WHITE, board)
    assert not is_attacked_by_pawn(sq("e5"), Color.WHITE, board)
    assert not is_attacked_by_pawn(sq("d3"), Color.WHITE, board)


def test_attack_rules_per_piece() -> None:
    board = Board.from_fen("4k3/8/8/3N4/8/8/1B6/R3K3")
    assert is_attacked_by_knight(sq("e7"), Color.WHITE, board)
    assert is_attacked_on_diagonals(sq("h8"), Color.WHITE, board)
    assert is_attacked_on_straights(sq("a8"), Color.WHITE, board)
    assert is_attacked_by_king(sq("d2"), Color.WHITE, board)
    assert not is_attacked_by_king(sq("e3"), Color.WHITE, board)


def test_slider_blocked_by_any_piece() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/R1n1K3")
    assert is_attacked_on_straights(sq("b1"), Color.WHITE, board)
    assert is_attacked_on_straights(sq("c1"), Color.WHITE, board)
    assert not is_attacked_on_straights(sq("d1"), Color.WHITE, board)


def test_attack_on_empty_square() -> None:
    board = create_initial_board()
    # f3 is covered by the g1 knight and the e2/g2 pawns
    assert is_square_under_attack(board, sq("f3"), Color.WHITE)
    assert not is_square_under_attack(board, sq("e4"), Color.WHITE)
    assert is_square_under_attack(board, sq("f6"), Color.BLACK)


# -- SELF-CHECK SIMULATION --
def test_moving_pinned_piece_results_in_check() -> None:
    board = Board.from_fen(PINNED_BISHOP_FEN)
    assert would_move_result_in_check(board, sq("e2"), sq("d3"), Color.WHITE)


def test_king_step_out_of_line() -> None:
    board = Board.from_fen(PINNED_BISHOP_FEN)
    assert not would_move_result_in_check(board, sq("e1"), sq("d1"), Color.WHITE)


def test_simulation_does_not_mutate_board() -> None:
    board = Board.from_fen(PINNED_BISHOP_FEN)
    snapshot = board.cells
    would_move_result_in_check(board, sq("e2"), sq("d3"), Color.WHITE)
    would_move_result_in_check(board, sq("e1"), sq("d1"), Color.WHITE)
    assert board.cells is snapshot
    assert board == Board.from_fen(PINNED_BISHOP_FEN)


def test_en_passant_discovered_check() -> None:
    """
    Taking en passant removes both pawns from the 5th rank, opening the line between
    the rook on a5 and the king on h5.
    """
    board = Board.from_fen("4k3/8/8/r2pP2K/8/8/8/8")
    last = LastPawnMove(sq("d7"), sq("d5"), timestamp=1)
    assert would_move_result_in_check(board, sq("e5"), sq("d6"), Color.WHITE, last)
    assert not would_move_result_in_check(board, sq("e5"), sq("e6"), Color.WHITE, last)
