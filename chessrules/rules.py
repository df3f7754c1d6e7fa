"""Game status queries: check, checkmate and stalemate.

All functions here are read-only over the board they receive.
"""

from __future__ import annotations

from enum import Enum

from .board import Board


class GameStatus(str, Enum):
    NORMAL = "normal"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


def is_check(board: Board, color: str) -> bool:
    king_pos = board.get_king_position(color)
    if king_pos is None:
        return False
    return board.is_square_attacked(king_pos, color)


def is_checkmate(board: Board, color: str) -> bool:
    if not is_check(board, color):
        return False
    return len(board.get_all_valid_moves(color)) == 0


def is_stalemate(board: Board, color: str) -> bool:
    if is_check(board, color):
        return False
    return len(board.get_all_valid_moves(color)) == 0


def classify(board: Board, color: str) -> GameStatus:
    in_check = is_check(board, color)
    has_moves = len(board.get_all_valid_moves(color)) > 0
    if in_check:
        return GameStatus.CHECK if has_moves else GameStatus.CHECKMATE
    return GameStatus.NORMAL if has_moves else GameStatus.STALEMATE
