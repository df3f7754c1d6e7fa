from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

Position = Tuple[int, int]

WHITE = "white"
BLACK = "black"
COLORS = (WHITE, BLACK)

PAWN = "pawn"
KNIGHT = "knight"
BISHOP = "bishop"
ROOK = "rook"
QUEEN = "queen"
KING = "king"

# Material values used by the move scorer
PIECE_VALUES: Dict[str, int] = {
    PAWN: 1,
    KNIGHT: 3,
    BISHOP: 3,
    ROOK: 5,
    QUEEN: 9,
    KING: 0,
}

_SYMBOLS: Dict[Tuple[str, str], str] = {
    (KING, WHITE): "♔",
    (QUEEN, WHITE): "♕",
    (ROOK, WHITE): "♖",
    (BISHOP, WHITE): "♗",
    (KNIGHT, WHITE): "♘",
    (PAWN, WHITE): "♙",
    (KING, BLACK): "♚",
    (QUEEN, BLACK): "♛",
    (ROOK, BLACK): "♜",
    (BISHOP, BLACK): "♝",
    (KNIGHT, BLACK): "♞",
    (PAWN, BLACK): "♟",
}


def opponent(color: str) -> str:
    return BLACK if color == WHITE else WHITE


@dataclass(eq=False)
class Piece:
    """A single chess piece as stored in one board cell.

    Pieces are compared by identity: two pieces with the same type, colour and
    square are still different pieces. Promotion changes ``type`` in place so
    the piece keeps its identity and ``has_moved`` flag.
    """

    type: str
    color: str
    position: Position
    has_moved: bool = False

    @property
    def symbol(self) -> str:
        return _SYMBOLS[(self.type, self.color)]

    def copy(self) -> "Piece":
        row, col = self.position
        return Piece(self.type, self.color, (row, col), self.has_moved)
