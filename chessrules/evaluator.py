from __future__ import annotations

from typing import Dict

from .board import KING_OFFSETS, Board, Move, pawn_direction, pawn_start_row
from .pieces import BISHOP, KNIGHT, PAWN, PIECE_VALUES, ROOK, Piece, opponent
from .rules import is_check, is_checkmate


class Evaluator:
    """Single-ply heuristic scoring of a candidate move.

    The move is played on a clone of the board and the resulting position is
    scored from the mover's point of view. Higher is better. Units are pawns.
    """

    MATERIAL_VALUES: Dict[str, int] = PIECE_VALUES

    CHECKMATE_BONUS = 1000
    CHECK_BONUS = 100
    PAWN_ADVANCE_WEIGHT = 0.3
    THREAT_WEIGHT = 0.4
    KING_ZONE_PENALTY = 0.6
    BISHOP_MOBILITY_WEIGHT = 0.15
    ROOK_OPEN_FILE_BONUS = 0.8
    KNIGHT_OUTPOST_BONUS = 0.6

    @classmethod
    def score_move(cls, board: Board, move: Move, ai_color: str) -> float:
        after = board.clone()
        target = after.piece_at(move.to_pos)
        captured_value = cls.MATERIAL_VALUES[target.type] if target is not None else 0

        after.move_piece(move.from_pos, move.to_pos)
        # Looked up after the move, so a promoted pawn is already a queen here
        moved = after.piece_at(move.to_pos)
        enemy = opponent(moved.color)
        # The reply belongs to the mover's opponent whatever turn the board held
        after.current_turn = enemy

        score = 0.0
        if is_checkmate(after, enemy):
            score += cls.CHECKMATE_BONUS
        elif is_check(after, enemy):
            score += cls.CHECK_BONUS

        score += captured_value

        # Only the mover's own value is lost, recaptures are not weighed
        if after.is_square_attacked(move.to_pos, moved.color):
            score -= cls.MATERIAL_VALUES[moved.type]

        if moved.type == PAWN:
            advancement = abs(move.to_pos[0] - pawn_start_row(moved.color))
            score += advancement * cls.PAWN_ADVANCE_WEIGHT

        score += cls._threat_score(after, moved)
        score += cls._king_safety_score(after, ai_color)

        if moved.type == BISHOP:
            score += len(after.get_possible_moves(moved)) * cls.BISHOP_MOBILITY_WEIGHT
        elif moved.type == ROOK and cls._is_open_file(after, move.to_pos[1]):
            score += cls.ROOK_OPEN_FILE_BONUS
        elif moved.type == KNIGHT and cls._is_outpost(after, moved):
            score += cls.KNIGHT_OUTPOST_BONUS

        return score

    @classmethod
    def _threat_score(cls, board: Board, moved: Piece) -> float:
        threat = 0.0
        for square in board.get_possible_moves(moved, check_king_safety=False):
            victim = board.piece_at(square)
            if victim is not None and victim.color != moved.color:
                threat += cls.MATERIAL_VALUES[victim.type] * cls.THREAT_WEIGHT
        return threat

    @classmethod
    def _king_safety_score(cls, board: Board, color: str) -> float:
        king_pos = board.get_king_position(color)
        if king_pos is None:
            return 0.0
        penalty = 0.0
        for dr, dc in KING_OFFSETS:
            row, col = king_pos[0] + dr, king_pos[1] + dc
            if board.is_valid_square(row, col) and board.is_square_attacked((row, col), color):
                penalty -= cls.KING_ZONE_PENALTY
        return penalty

    @staticmethod
    def _is_open_file(board: Board, col: int) -> bool:
        return all(
            board.squares[row][col] is None or board.squares[row][col].type != PAWN
            for row in range(len(board.squares))
        )

    @staticmethod
    def _is_outpost(board: Board, knight: Piece) -> bool:
        # Looks one row behind the knight, from the knight owner's side
        row, col = knight.position
        step = pawn_direction(opponent(knight.color))
        for dc in (-1, 1):
            pawn = board.piece_at((row + step, col + dc))
            if pawn is not None and pawn.type == PAWN and pawn.color != knight.color:
                return False
        return True
