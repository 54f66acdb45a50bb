"""Defines the chess pieces"""

from dataclasses import dataclass, replace
from typing import Self

from src.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Letters used in move notation. Pawns have none.
PIECE_SYMBOLS: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
    PieceType.PAWN: "",
}

BACK_ROW: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class Piece:
    """
    Value record for a piece standing on the board.

    Never shared between two board snapshots in a meaningful way: moving a piece creates an updated copy.
    """

    type: PieceType
    color: Color
    position: int
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str, position: int) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color, position)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def moved_to(self, position: int) -> Self:
        return replace(self, position=position, has_moved=True)

    def promoted_to(self, new_type: PieceType) -> Self:
        return replace(self, type=new_type)

    def to_record(self) -> dict[str, object]:
        return {
            "type": self.type.value,
            "color": self.color.value,
            "position": self.position,
            "has_moved": self.has_moved,
        }

    @classmethod
    def from_record(cls, record: dict[str, object]) -> Self:
        return cls(
            type=PieceType(record["type"]),
            color=Color(record["color"]),
            position=int(record["position"]),  # type: ignore[call-overload]
            has_moved=bool(record.get("has_moved", False)),
        )
