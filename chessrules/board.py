from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .pieces import (
    BISHOP,
    BLACK,
    KING,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE,
    Piece,
    Position,
    opponent,
)

BOARD_SIZE = 8

BACK_RANK: Tuple[str, ...] = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)

KNIGHT_OFFSETS: Tuple[Position, ...] = (
    (2, 1), (2, -1), (-2, 1), (-2, -1),
    (1, 2), (1, -2), (-1, 2), (-1, -2),
)
KING_OFFSETS: Tuple[Position, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)
ROOK_DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_DIRECTIONS: Tuple[Position, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
QUEEN_DIRECTIONS: Tuple[Position, ...] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS


def pawn_direction(color: str) -> int:
    """Row step of a pawn moving forward: white climbs towards row 0."""
    return -1 if color == WHITE else 1


def pawn_start_row(color: str) -> int:
    return 6 if color == WHITE else 1


def promotion_row(color: str) -> int:
    return 0 if color == WHITE else 7


@dataclass(frozen=True)
class Move:
    from_pos: Position
    to_pos: Position


class Board:
    """8x8 grid of optional pieces plus the side to move.

    Row 0 is black's back rank and row 7 is white's. The grid owns every piece
    it stores and a piece's ``position`` always matches the cell holding it.
    Move generation, attack detection and king lookup all live here; game
    status queries are in :mod:`chessrules.rules`.
    """

    def __init__(self, setup: bool = True) -> None:
        self.squares: List[List[Optional[Piece]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.current_turn: str = WHITE
        if setup:
            self._init_board()

    @classmethod
    def empty(cls, current_turn: str = WHITE) -> "Board":
        board = cls(setup=False)
        board.current_turn = current_turn
        return board

    def _init_board(self) -> None:
        for col in range(BOARD_SIZE):
            self.squares[1][col] = Piece(PAWN, BLACK, (1, col))
            self.squares[6][col] = Piece(PAWN, WHITE, (6, col))
        for col, piece_type in enumerate(BACK_RANK):
            self.squares[0][col] = Piece(piece_type, BLACK, (0, col))
            self.squares[7][col] = Piece(piece_type, WHITE, (7, col))

    # -- grid access -------------------------------------------------------

    @staticmethod
    def is_valid_square(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def piece_at(self, position: Sequence[int]) -> Optional[Piece]:
        row, col = position
        if not self.is_valid_square(row, col):
            return None
        return self.squares[row][col]

    def place(self, piece_type: str, color: str, position: Position, has_moved: bool = False) -> Piece:
        """Put a new piece on ``position``, replacing whatever stood there."""
        row, col = position
        piece = Piece(piece_type, color, (row, col), has_moved)
        self.squares[row][col] = piece
        return piece

    def pieces(self, color: Optional[str] = None) -> Iterator[Piece]:
        for row in self.squares:
            for piece in row:
                if piece is not None and (color is None or piece.color == color):
                    yield piece

    def get_king_position(self, color: str) -> Optional[Position]:
        for piece in self.pieces(color):
            if piece.type == KING:
                return piece.position
        return None

    # -- mutation ----------------------------------------------------------

    def move_piece(self, from_pos: Sequence[int], to_pos: Sequence[int]) -> bool:
        """Relocate the piece on ``from_pos`` without any legality check.

        Returns False and leaves the board untouched when the source square is
        empty. A pawn reaching its last row becomes a queen.
        """
        piece = self.piece_at(from_pos)
        if piece is None:
            return False
        from_row, from_col = from_pos
        to_row, to_col = to_pos

        if piece.type == PAWN and to_row == promotion_row(piece.color):
            piece.type = QUEEN

        self.squares[to_row][to_col] = piece
        self.squares[from_row][from_col] = None
        piece.position = (to_row, to_col)
        piece.has_moved = True
        return True

    def switch_turn(self) -> None:
        self.current_turn = opponent(self.current_turn)

    def clone(self) -> "Board":
        copy = Board.empty(self.current_turn)
        copy.squares = [
            [piece.copy() if piece is not None else None for piece in row]
            for row in self.squares
        ]
        return copy

    # -- move generation ---------------------------------------------------

    def get_possible_moves(self, piece: Piece, check_king_safety: bool = True) -> List[Position]:
        """Destinations reachable by ``piece``'s movement pattern.

        With ``check_king_safety`` the list is reduced to legal moves by playing
        each one on a clone. Attack detection calls this with the flag off so
        that it never recurses into legality checking.
        """
        if piece.type == PAWN:
            moves = self._pawn_moves(piece)
        elif piece.type == KNIGHT:
            moves = self._step_moves(piece, KNIGHT_OFFSETS)
        elif piece.type == BISHOP:
            moves = self._ray_moves(piece, BISHOP_DIRECTIONS)
        elif piece.type == ROOK:
            moves = self._ray_moves(piece, ROOK_DIRECTIONS)
        elif piece.type == QUEEN:
            moves = self._ray_moves(piece, QUEEN_DIRECTIONS)
        else:
            moves = self._step_moves(piece, KING_OFFSETS)

        if not check_king_safety:
            return moves
        return [to_pos for to_pos in moves if not self._leaves_king_attacked(piece, to_pos)]

    def get_valid_moves(self, piece: Piece) -> List[Position]:
        return self.get_possible_moves(piece, check_king_safety=True)

    def get_all_valid_moves(self, color: str) -> List[Move]:
        moves: List[Move] = []
        for piece in list(self.pieces(color)):
            origin = piece.position
            moves.extend(Move(origin, to_pos) for to_pos in self.get_valid_moves(piece))
        return moves

    def _leaves_king_attacked(self, piece: Piece, to_pos: Position) -> bool:
        trial = self.clone()
        trial.move_piece(piece.position, to_pos)
        king_pos = trial.get_king_position(piece.color)
        if king_pos is None:
            return False
        return trial.is_square_attacked(king_pos, piece.color)

    def _pawn_moves(self, piece: Piece) -> List[Position]:
        moves: List[Position] = []
        row, col = piece.position
        direction = pawn_direction(piece.color)

        one_ahead = row + direction
        if self.is_valid_square(one_ahead, col) and self.squares[one_ahead][col] is None:
            moves.append((one_ahead, col))
            two_ahead = row + 2 * direction
            if row == pawn_start_row(piece.color) and self.squares[two_ahead][col] is None:
                moves.append((two_ahead, col))

        for dc in (-1, 1):
            new_row, new_col = row + direction, col + dc
            if self.is_valid_square(new_row, new_col):
                target = self.squares[new_row][new_col]
                if target is not None and target.color != piece.color:
                    moves.append((new_row, new_col))
        return moves

    def _step_moves(self, piece: Piece, offsets: Sequence[Position]) -> List[Position]:
        moves: List[Position] = []
        row, col = piece.position
        for dr, dc in offsets:
            new_row, new_col = row + dr, col + dc
            if not self.is_valid_square(new_row, new_col):
                continue
            target = self.squares[new_row][new_col]
            if target is None or target.color != piece.color:
                moves.append((new_row, new_col))
        return moves

    def _ray_moves(self, piece: Piece, directions: Sequence[Position]) -> List[Position]:
        moves: List[Position] = []
        row, col = piece.position
        for dr, dc in directions:
            new_row, new_col = row + dr, col + dc
            while self.is_valid_square(new_row, new_col):
                target = self.squares[new_row][new_col]
                if target is None:
                    moves.append((new_row, new_col))
                else:
                    if target.color != piece.color:
                        moves.append((new_row, new_col))
                    break
                new_row += dr
                new_col += dc
        return moves

    # -- attack detection --------------------------------------------------

    def is_square_attacked(self, position: Sequence[int], defender_color: str) -> bool:
        target = (position[0], position[1])
        attacker_color = opponent(defender_color)
        for piece in list(self.pieces(attacker_color)):
            if target in self.get_possible_moves(piece, check_king_safety=False):
                return True
        return False
