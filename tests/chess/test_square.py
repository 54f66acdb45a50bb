"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import (
    BOARD_SIZE,
    NUM_CELLS,
    col,
    from_algebraic,
    index,
    is_on_board,
    is_valid_algebraic,
    row,
    to_algebraic,
)


@pytest.mark.parametrize("pos", range(NUM_CELLS))
def test_row_and_col_invert_index(pos: int) -> None:
    """row/col are the inverse of index over the whole board"""
    assert index(row(pos), col(pos)) == pos


@pytest.mark.parametrize(
    "pos, notation",
    [(0, "a8"), (7, "h8"), (56, "a1"), (63, "h1"), (36, "e4"), (12, "e7")],
)
def test_to_algebraic(pos: int, notation: str) -> None:
    """Index 0 is the top-left corner seen from white: a8"""
    assert to_algebraic(pos) == notation


@pytest.mark.parametrize(
    "file, rank",
    [(file, rank) for file in range(BOARD_SIZE) for rank in range(1, BOARD_SIZE + 1)],
)
def test_from_algebraic_roundtrip(file: int, rank: int) -> None:
    notation = f"{ascii_lowercase[file]}{rank}"
    pos = from_algebraic(notation)
    assert col(pos) == file
    assert row(pos) == BOARD_SIZE - rank
    assert to_algebraic(pos) == notation


def test_is_on_board() -> None:
    assert is_on_board(0, 0)
    assert is_on_board(7, 7)
    assert not is_on_board(-1, 3)
    assert not is_on_board(3, 8)


@pytest.mark.parametrize("notation", ["a1", "h8", "E4"])
def test_valid_algebraic(notation: str) -> None:
    assert is_valid_algebraic(notation)


@pytest.mark.parametrize("notation", ["", "a", "i1", "a9", "a0", "11", "e44"])
def test_invalid_algebraic(notation: str) -> None:
    assert not is_valid_algebraic(notation)
