"""Fixed-depth minimax search with alpha-beta pruning. White maximises, black minimises."""

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from src.chess.board import Board
from src.chess.game import GameState
from src.chess.moves import generate_legal_moves
from src.chess.special_moves import (
    LastPawnMove,
    is_promotion_move,
    next_last_pawn_move,
    perform_move,
    promote_pawn,
)
from src.core.shared_types import Color, Difficulty, PieceType
from src.engine.evaluation import evaluate_position

_log = logging.getLogger(__name__)

Candidate = tuple[int, int]  # (from, to)

# One ply per level. Cost grows as branching factor ** depth, 5 is the practical ceiling.
SEARCH_DEPTHS: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 1,
    Difficulty.EASY: 2,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 4,
    Difficulty.EXTREME: 5,
}


@dataclass(slots=True)
class SearchResult:
    move: Optional[Candidate]
    score: float
    depth: int
    nodes: int


@dataclass(frozen=True, slots=True)
class Position:
    """A hypothetical position inside the search tree. Never the real game state."""

    board: Board
    last_pawn_move: Optional[LastPawnMove] = None


def make_move(position: Position, move: Candidate) -> Position:
    """
    Play a candidate move on a copy of the board.
    In hypothetical lines a pawn reaching the last rank always becomes a queen.
    """
    from_pos, to_pos = move
    piece = position.board.piece(from_pos)
    assert piece is not None
    board = perform_move(position.board, from_pos, to_pos, position.last_pawn_move).board
    if is_promotion_move(position.board, from_pos, to_pos):
        board = promote_pawn(board, to_pos, PieceType.QUEEN)
    return Position(board, next_last_pawn_move(piece, from_pos, to_pos, timestamp=0))


def _move_order_key(board: Board, move: Candidate) -> int:
    """Captures first, then promotions: good moves early means more pruning"""
    from_pos, to_pos = move
    score = 0
    if not board.is_empty(to_pos):
        score += 10_000
    if is_promotion_move(board, from_pos, to_pos):
        score += 8_000
    return score


class SearchEngine:
    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = difficulty
        self.rng = rng
        self.nodes = 0

    def search(
        self,
        board: Board,
        color: Color,
        last_pawn_move: Optional[LastPawnMove] = None,
        depth: Optional[int] = None,
    ) -> SearchResult:
        """Pick a move for `color`. Depth defaults to the one belonging to the difficulty."""
        depth = SEARCH_DEPTHS[self.difficulty] if depth is None else depth
        if depth < 1:
            raise ValueError("depth must be >= 1")

        self.nodes = 0
        moves = generate_legal_moves(board, color, last_pawn_move)
        if not moves:
            lost = -math.inf if color == Color.WHITE else math.inf
            return SearchResult(move=None, score=lost, depth=depth, nodes=0)

        # Nothing to think about
        if len(moves) == 1:
            return SearchResult(move=moves[0], score=0.0, depth=0, nodes=0)

        score, move = self.minimax(
            board,
            depth,
            -math.inf,
            math.inf,
            color == Color.WHITE,
            last_pawn_move,
        )
        _log.debug(
            "%s search depth=%d nodes=%d best=%s score=%s",
            self.difficulty,
            depth,
            self.nodes,
            move,
            score,
        )
        return SearchResult(move=move, score=score, depth=depth, nodes=self.nodes)

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        last_pawn_move: Optional[LastPawnMove] = None,
    ) -> tuple[float, Optional[Candidate]]:
        """
        Standard alpha-beta search
        ----

        * depth 0: static evaluation
        * no legal moves: -inf for white / +inf for black (does not tell mate from stalemate apart)
        * otherwise recurse, tighten alpha/beta, and stop once beta <= alpha

        Returns the best score and the move reaching it.
        """
        self.nodes += 1
        if depth == 0:
            return evaluate_position(board, self.difficulty, self.rng), None

        color = Color.WHITE if maximizing else Color.BLACK
        moves = generate_legal_moves(board, color, last_pawn_move)
        if not moves:
            return (-math.inf if maximizing else math.inf), None

        moves.sort(key=lambda move: _move_order_key(board, move), reverse=True)
        position = Position(board, last_pawn_move)

        # start from the first move, so a lost position still returns something playable
        best_move: Candidate = moves[0]
        best_score = -math.inf if maximizing else math.inf

        for move in moves:
            child = make_move(position, move)
            score, _ = self.minimax(
                child.board, depth - 1, alpha, beta, not maximizing, child.last_pawn_move
            )

            if maximizing:
                if score > best_score:
                    best_score, best_move = score, move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score, best_move = score, move
                beta = min(beta, best_score)

            if beta <= alpha:
                break

        return best_score, best_move


def get_computer_move(
    board: Board,
    color: Color,
    state: Optional[GameState] = None,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> Optional[Candidate]:
    """
    Main entry for the bot: the (from, to) to play for `color`, or None without a legal move
    (checkmate / stalemate already reached).

    Blocking. A responsive host should run this off its main interaction path.
    """
    last_pawn_move = state.last_pawn_move if state is not None else None
    engine = SearchEngine(difficulty, rng)
    return engine.search(board, color, last_pawn_move).move
