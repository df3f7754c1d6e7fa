"""Chess rules engine with a single-ply heuristic AI.

Modules:
- pieces: Piece model, colours, piece types and material values
- board: Board state, move generation and attack detection
- rules: Check, checkmate and stalemate queries
- evaluator: Heuristic scoring of a candidate move
- ai: Move selection with a randomized tie-break
- game: Narrow interface for a presentation layer and the Game context
"""

from .board import Board, Move
from .pieces import Piece, WHITE, BLACK
from .rules import GameStatus
from .evaluator import Evaluator
from .ai import AIPlayer, ScoredMove
from .game import Game, new_game, legal_moves, apply_move, classify, choose_ai_move

__all__ = [
    "Board",
    "Move",
    "Piece",
    "WHITE",
    "BLACK",
    "GameStatus",
    "Evaluator",
    "AIPlayer",
    "ScoredMove",
    "Game",
    "new_game",
    "legal_moves",
    "apply_move",
    "classify",
    "choose_ai_move",
]
