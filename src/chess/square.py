"""
Cell index arithmetic

(placed in its own module as multiple other modules need to import it)

Cells are indexed 0..63, row-major. Index 0 is the top-left corner seen from White's side (a8), index 63 is h1.
So row 0 is the 8th rank and row 7 is the 1st rank.
"""

BOARD_SIZE = 8
NUM_CELLS = BOARD_SIZE * BOARD_SIZE
FILE_NAMES = "abcdefgh"


def row(pos: int) -> int:
    return pos // BOARD_SIZE


def col(pos: int) -> int:
    return pos % BOARD_SIZE


def index(row: int, col: int) -> int:
    # NOTE: no bounds check. Callers stepping near the edges must use is_on_board() first
    return row * BOARD_SIZE + col


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_valid_index(pos: int) -> bool:
    return 0 <= pos < NUM_CELLS


def to_algebraic(pos: int) -> str:
    """0 -> 'a8', 63 -> 'h1'"""
    return f"{FILE_NAMES[col(pos)]}{BOARD_SIZE - row(pos)}"


def from_algebraic(notation: str) -> int:
    """Algebraic notation: 'a8' - 'h1' get converted to 0 - 63"""
    file = ord(notation[0].lower()) - ord("a")
    rank = int(notation[1])
    return index(BOARD_SIZE - rank, file)


def is_valid_algebraic(notation: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    if len(notation) != 2:
        return False
    file_char, rank_char = notation[0].lower(), notation[1]
    return (
        file_char in FILE_NAMES
        and rank_char.isdigit()
        and 1 <= int(rank_char) <= BOARD_SIZE
    )
