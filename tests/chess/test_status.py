"""Unit tests for /src/chess/status.py"""

import pytest

from src.chess.board import Board, create_initial_board
from src.chess.status import classify_status, is_in_checkmate, is_stalemate
from src.core.shared_types import Color, Status

# after 1. f3 e5 2. g4 Qh4#
FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR"
# black to move, no legal move, not in check
STALEMATE_FEN = "k7/2Q5/1K6/8/8/8/8/8"
# back rank mate
BACK_RANK_MATE_FEN = "3R2k1/5ppp/8/8/8/8/8/6K1"


def test_fools_mate_is_checkmate() -> None:
    board = Board.from_fen(FOOLS_MATE_FEN)
    assert is_in_checkmate(board, Color.WHITE)
    assert not is_stalemate(board, Color.WHITE)
    assert not is_in_checkmate(board, Color.BLACK)


def test_stalemate() -> None:
    board = Board.from_fen(STALEMATE_FEN)
    assert is_stalemate(board, Color.BLACK)
    assert not is_in_checkmate(board, Color.BLACK)


def test_stalemate_with_king_in_the_corner() -> None:
    board = Board.from_fen("8/8/8/8/8/1q6/2k5/K7")
    assert is_stalemate(board, Color.WHITE)


@pytest.mark.parametrize(
    "fen, color, expected",
    [
        (FOOLS_MATE_FEN, Color.WHITE, Status.CHECKMATE),
        (BACK_RANK_MATE_FEN, Color.BLACK, Status.CHECKMATE),
        (STALEMATE_FEN, Color.BLACK, Status.STALEMATE),
        ("4k3/8/8/8/8/8/8/4R1K1", Color.BLACK, Status.CHECK),
        ("4k3/8/8/8/8/8/8/4K3", Color.WHITE, Status.PLAYING),
    ],
)
def test_classify_status(fen: str, color: Color, expected: Status) -> None:
    assert classify_status(Board.from_fen(fen), color) == expected


def test_starting_position_is_playing() -> None:
    assert classify_status(create_initial_board(), Color.WHITE) == Status.PLAYING
