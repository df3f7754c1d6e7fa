from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .board import Board, Move
from .evaluator import Evaluator

_log = logging.getLogger(__name__)


@dataclass
class ScoredMove:
    move: Move
    score: float


class AIPlayer:
    """Single-ply heuristic player with a randomized tie-break.

    Every legal move is scored on a cloned board by :class:`Evaluator`. The
    move is picked among the best-scoring moves of the top three, so equal
    candidates do not always produce the same reply. Pass a seeded
    ``random.Random`` to make the choice reproducible.
    """

    TOP_K = 3

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def evaluate_moves(self, board: Board, ai_color: str) -> List[ScoredMove]:
        scored = [
            ScoredMove(move, Evaluator.score_move(board, move, ai_color))
            for move in board.get_all_valid_moves(ai_color)
        ]
        # Stable sort keeps generation order among equal scores
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored

    def choose_move(self, board: Board, ai_color: str) -> Optional[Move]:
        """Pick a move for ``ai_color`` without changing ``board``.

        Returns None when the side has no legal move; the caller is expected
        to have classified the position as checkmate or stalemate already.
        """
        scored = self.evaluate_moves(board, ai_color)
        if not scored:
            _log.debug("No legal moves for %s", ai_color)
            return None

        best_score = scored[0].score
        tied = [s for s in scored[: self.TOP_K] if s.score == best_score]
        choice = self.rng.choice(tied)
        _log.debug(
            "%s picked %s -> %s (score=%.2f, candidates=%d, tied=%d)",
            ai_color,
            choice.move.from_pos,
            choice.move.to_pos,
            choice.score,
            len(scored),
            len(tied),
        )
        return choice.move

    def play(self, board: Board, ai_color: str) -> Optional[Move]:
        """Choose a move and commit it on ``board``, flipping the turn."""
        move = self.choose_move(board, ai_color)
        if move is None:
            return None
        board.move_piece(move.from_pos, move.to_pos)
        board.switch_turn()
        return move
