"""Human readable move text: notation for a single move, the move list, and a PGN document."""

from datetime import date
from typing import Iterable, Optional

from src.chess.game import GameState
from src.chess.moves import Move
from src.chess.pieces import PIECE_SYMBOLS
from src.chess.square import col, to_algebraic


def move_notation(move: Move) -> str:
    """
    Algebraic-like text for a move
    ----

    * castling: "O-O" (king side) or "O-O-O" (queen side)
    * pawn push: destination only ("e4"), pawn capture: file + "x" + destination ("exd5")
    * other pieces: letter + from square + optional "x" + destination ("Ng1f3", "Bc4xf7")
    * promotion adds "=<letter>" ("e8=Q")
    """
    if move.is_castling:
        return "O-O" if col(move.to_square) > col(move.from_square) else "O-O-O"

    from_square = to_algebraic(move.from_square)
    to_square = to_algebraic(move.to_square)
    capture = "x" if move.is_capture else ""
    promotion = f"={PIECE_SYMBOLS[move.promotion]}" if move.promotion else ""

    piece_symbol = PIECE_SYMBOLS[move.piece.type]
    if piece_symbol:
        return f"{piece_symbol}{from_square}{capture}{to_square}"

    # Pawns only show the file when capturing
    if move.is_capture:
        return f"{from_square[0]}x{to_square}{promotion}"
    return f"{to_square}{promotion}"


def format_moves(move_history: Iterable[Move]) -> str:
    """Numbered move list: '1. e4 e5 2. Ng1f3'"""
    parts: list[str] = []
    for i, move in enumerate(move_history):
        if i % 2 == 0:
            parts.append(f"{i // 2 + 1}.")
        parts.append(move_notation(move))
    return " ".join(parts)


def export_pgn(state: GameState, played_on: Optional[date] = None) -> str:
    """PGN text: tag pairs, a blank line, then the moves followed by the result"""
    played_on = played_on or date.today()
    result = state.result or "*"
    tags = "\n".join(
        [
            f'[White "{state.white_player}"]',
            f'[Black "{state.black_player}"]',
            f'[Date "{played_on.strftime("%Y.%m.%d")}"]',
            f'[Result "{result}"]',
        ]
    )
    moves = format_moves(state.move_history)
    movetext = f"{moves} {result}" if moves else result
    return f"{tags}\n\n{movetext}"
