from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

from .ai import AIPlayer
from .board import Board, Move
from .pieces import BLACK, COLORS, Position, opponent
from .rules import GameStatus, classify as classify_position


def new_game() -> Board:
    return Board()


def legal_moves(board: Board, position: Sequence[int]) -> List[Position]:
    piece = board.piece_at(position)
    if piece is None:
        return []
    return board.get_valid_moves(piece)


def apply_move(board: Board, from_pos: Sequence[int], to_pos: Sequence[int]) -> bool:
    """Commit an already validated move and hand the turn to the other side."""
    if not board.move_piece(from_pos, to_pos):
        return False
    board.switch_turn()
    return True


def classify(board: Board, color: str) -> GameStatus:
    return classify_position(board, color)


def choose_ai_move(board: Board, ai_color: str, rng: Optional[random.Random] = None) -> Optional[Move]:
    return AIPlayer(rng).choose_move(board, ai_color)


class Game:
    """Holds one game: the board, which side the AI plays, and its random source.

    This class owns the mutable game state and is what a presentation layer
    talks to. Moves submitted through :meth:`make_move` are checked against the
    legal move list; the module-level helpers above trust their caller.
    """

    def __init__(self, ai_color: str = BLACK, rng: Optional[random.Random] = None) -> None:
        if ai_color not in COLORS:
            raise ValueError(f"Unknown color: {ai_color}")
        self.ai_color = ai_color
        self.ai = AIPlayer(rng)
        self.board = new_game()
        self.game_over = False
        self.last_move: Optional[Move] = None

    def reset(self, ai_color: Optional[str] = None) -> None:
        if ai_color is not None:
            if ai_color not in COLORS:
                raise ValueError(f"Unknown color: {ai_color}")
            self.ai_color = ai_color
        self.board = new_game()
        self.game_over = False
        self.last_move = None

    @property
    def human_color(self) -> str:
        return opponent(self.ai_color)

    def is_ai_turn(self) -> bool:
        return not self.game_over and self.board.current_turn == self.ai_color

    def legal_moves(self, position: Sequence[int]) -> List[Position]:
        piece = self.board.piece_at(position)
        if piece is None or piece.color != self.board.current_turn:
            return []
        return legal_moves(self.board, position)

    def status(self) -> GameStatus:
        return classify(self.board, self.board.current_turn)

    def make_move(self, from_pos: Sequence[int], to_pos: Sequence[int]) -> bool:
        if self.game_over or self.is_ai_turn():
            return False
        target = (to_pos[0], to_pos[1])
        if target not in self.legal_moves(from_pos):
            return False
        apply_move(self.board, from_pos, target)
        self.last_move = Move((from_pos[0], from_pos[1]), target)
        self._update_game_over()
        return True

    def ai_move(self) -> Optional[Move]:
        if not self.is_ai_turn():
            return None
        move = self.ai.play(self.board, self.ai_color)
        if move is not None:
            self.last_move = move
        self._update_game_over()
        return move

    def _update_game_over(self) -> None:
        if self.status() in (GameStatus.CHECKMATE, GameStatus.STALEMATE):
            self.game_over = True

    def snapshot(self) -> Dict[str, object]:
        status = self.status()
        check_square: Optional[List[int]] = None
        if status in (GameStatus.CHECK, GameStatus.CHECKMATE):
            king_pos = self.board.get_king_position(self.board.current_turn)
            if king_pos is not None:
                check_square = list(king_pos)

        last_move: Optional[Dict[str, List[int]]] = None
        if self.last_move is not None:
            last_move = {
                "from": list(self.last_move.from_pos),
                "to": list(self.last_move.to_pos),
            }

        return {
            "turn": self.board.current_turn,
            "ai_color": self.ai_color,
            "status": status.value,
            "game_over": self.game_over,
            "in_check": status in (GameStatus.CHECK, GameStatus.CHECKMATE),
            "check_square": check_square,
            "last_move": last_move,
            "board": [
                [piece.symbol if piece is not None else None for piece in row]
                for row in self.board.squares
            ],
            "pieces": [
                {
                    "type": piece.type,
                    "color": piece.color,
                    "position": list(piece.position),
                    "has_moved": piece.has_moved,
                }
                for piece in self.board.pieces()
            ],
        }
