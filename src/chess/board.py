"""The Game board: 64 cells holding the `position` (in chess: the configuration of pieces on the board)"""

from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.chess.pieces import BACK_ROW, FEN_TO_PIECE, Piece
from src.chess.square import BOARD_SIZE, NUM_CELLS, index
from src.core.exceptions import InvalidFENError
from src.core.shared_types import Color, PieceType

Cell = Optional[Piece]


@dataclass(frozen=True, slots=True)
class Board:
    """
    Immutable board value.

    Every update (moving, placing, removing a piece) returns a new Board, so a board handed to exploratory code
    (check simulation, search) can never be changed from under the caller.
    """

    cells: tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != NUM_CELLS:
            raise ValueError(f"A board has {NUM_CELLS} cells, got {len(self.cells)}")

    @classmethod
    def empty(cls) -> Self:
        return cls((None,) * NUM_CELLS)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0, cells 0-7), starting with rook on a8
        * black pawns cover the 7th rank entirely (cells 8-15)
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters, cells 48-55)
        * 1st rank are the white pieces (cells 56-63)

        The FEN rank order coincides with our row order, so cells are filled front to back.
        None of the pieces are marked as moved.
        """
        if not is_valid_position(fen_str):
            raise InvalidFENError(f"Cannot interpret supplied string as board placement: {fen_str!r}")

        cells: list[Cell] = []
        for character in fen_str.replace("/", ""):
            if character.isdigit():
                # A number denotes the amount of empty squares after each other
                cells.extend([None] * int(character))
            else:
                cells.append(Piece.from_fen(character, len(cells)))
        return cls(tuple(cells))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(r) for r in range(BOARD_SIZE))

    def _row_to_fen(self, row: int) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for c in range(BOARD_SIZE):
            piece = self.cells[index(row, c)]
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def piece(self, pos: int) -> Cell:
        return self.cells[pos]

    def is_empty(self, pos: int) -> bool:
        return self.cells[pos] is None

    def locate_color(self, color: Color) -> list[int]:
        return [pos for pos, piece in enumerate(self.cells) if piece and piece.color == color]

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[int]:
        return [
            pos
            for pos, piece in enumerate(self.cells)
            if piece and piece.type == piece_type and piece.color == color
        ]

    def find_king(self, color: Color) -> int:
        """Cell of the king, or -1. A board without both kings is outside what the analyzer supports."""
        kings = self.locate_pieces(PieceType.KING, color)
        return kings[0] if kings else -1

    def place_piece(self, piece: Piece) -> Self:
        """Put the piece on the cell stored in piece.position (replacing whatever stood there)"""
        return self._with({piece.position: piece})

    def remove_piece(self, pos: int) -> Self:
        return self._with({pos: None})

    def move_piece(self, from_pos: int, to_pos: int) -> Self:
        """Relocate the piece on from_pos. Anything on to_pos is taken off the board."""
        piece = self.cells[from_pos]
        if piece is None:
            return self
        return self._with({from_pos: None, to_pos: piece.moved_to(to_pos)})

    def count_material(self, values: dict[PieceType, int]) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        totals = {Color.WHITE: 0, Color.BLACK: 0}
        for piece in self.cells:
            if piece:
                totals[piece.color] += values.get(piece.type, 0)
        return totals

    def _with(self, updates: dict[int, Cell]) -> Self:
        cells = list(self.cells)
        for pos, cell in updates.items():
            cells[pos] = cell
        return type(self)(tuple(cells))


def create_initial_board() -> Board:
    """Standard starting layout: black on cells 0-15, white on 48-63."""
    cells: list[Cell] = [None] * NUM_CELLS
    for c, piece_type in enumerate(BACK_ROW):
        cells[index(0, c)] = Piece(piece_type, Color.BLACK, index(0, c))
        cells[index(1, c)] = Piece(PieceType.PAWN, Color.BLACK, index(1, c))
        cells[index(6, c)] = Piece(PieceType.PAWN, Color.WHITE, index(6, c))
        cells[index(7, c)] = Piece(piece_type, Color.WHITE, index(7, c))
    return Board(tuple(cells))


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    rank_fens = position.split("/")
    if len(rank_fens) != BOARD_SIZE:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != BOARD_SIZE:
            return False
    return True
