from __future__ import annotations

import random

import pytest

from chessrules import AIPlayer, Board, Evaluator, Move, WHITE, BLACK
from chessrules.game import choose_ai_move, new_game
from chessrules.pieces import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK


def _back_rank_position() -> Board:
    board = Board.empty()
    board.place(KING, BLACK, (0, 6))
    for col in (5, 6, 7):
        board.place(PAWN, BLACK, (1, col))
    board.place(ROOK, WHITE, (7, 0))
    board.place(KING, WHITE, (7, 6))
    return board


def _placement(board: Board):
    return [(p.type, p.color, p.position, p.has_moved) for p in board.pieces()]


@pytest.mark.parametrize("seed", range(8))
def test_single_mating_move_is_always_chosen(seed):
    board = _back_rank_position()
    move = choose_ai_move(board, WHITE, random.Random(seed))
    assert move == Move((7, 0), (0, 0))


def test_mating_move_scores_above_everything_else():
    board = _back_rank_position()
    scored = AIPlayer(random.Random(0)).evaluate_moves(board, WHITE)
    assert scored[0].move == Move((7, 0), (0, 0))
    assert scored[0].score >= Evaluator.CHECKMATE_BONUS
    assert all(s.score < Evaluator.CHECK_BONUS for s in scored[1:])
    assert [s.score for s in scored] == sorted((s.score for s in scored), reverse=True)


def test_choose_move_does_not_mutate_board():
    board = new_game()
    before = _placement(board)
    move = AIPlayer(random.Random(3)).choose_move(board, WHITE)
    assert move is not None
    assert _placement(board) == before
    assert board.current_turn == WHITE


def test_no_move_when_side_has_no_legal_moves():
    board = Board.empty(current_turn=BLACK)
    board.place(KING, BLACK, (0, 0))
    board.place(QUEEN, WHITE, (2, 1))
    board.place(KING, WHITE, (7, 7))
    ai = AIPlayer(random.Random(0))
    assert ai.choose_move(board, BLACK) is None
    assert ai.play(board, BLACK) is None
    assert board.current_turn == BLACK


def test_play_commits_move_and_flips_turn():
    board = new_game()
    move = AIPlayer(random.Random(5)).play(board, WHITE)
    assert move is not None
    assert board.piece_at(move.from_pos) is None
    assert board.piece_at(move.to_pos).color == WHITE
    assert board.current_turn == BLACK


def test_tie_break_only_picks_best_scores():
    board = new_game()
    ai = AIPlayer(random.Random(11))
    scored = ai.evaluate_moves(board, WHITE)
    best = scored[0].score
    allowed = {s.move for s in scored[:3] if s.score == best}
    for _ in range(10):
        assert ai.choose_move(board, WHITE) in allowed


def test_same_seed_same_choice():
    board = new_game()
    first = [AIPlayer(random.Random(42)).choose_move(board, WHITE) for _ in range(3)]
    assert first[0] == first[1] == first[2]


def test_pawn_advance_score():
    board = new_game()
    score = Evaluator.score_move(board, Move((6, 4), (4, 4)), WHITE)
    assert score == pytest.approx(0.6)


def test_capture_with_rook_onto_open_file():
    board = Board.empty()
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 0))
    board.place(ROOK, WHITE, (4, 0))
    board.place(KNIGHT, BLACK, (4, 5))
    score = Evaluator.score_move(board, Move((4, 0), (4, 5)), WHITE)
    # knight captured (3) plus open file bonus (0.8)
    assert score == pytest.approx(3.8)


def test_hanging_piece_penalty_uses_movers_value():
    board = Board.empty()
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 0))
    board.place(PAWN, BLACK, (2, 3))
    board.place(QUEEN, WHITE, (5, 4))
    score = Evaluator.score_move(board, Move((5, 4), (3, 4)), WHITE)
    # queen lost to the pawn (-9), queen now eyes that pawn (+0.4)
    assert score == pytest.approx(-8.6)


def test_check_bonus():
    board = Board.empty()
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 0))
    board.place(ROOK, WHITE, (4, 4))
    score = Evaluator.score_move(board, Move((4, 4), (4, 0)), WHITE)
    assert score >= Evaluator.CHECK_BONUS
    assert score < Evaluator.CHECKMATE_BONUS


def test_king_zone_penalty():
    board = Board.empty()
    board.place(KING, WHITE, (7, 4))
    board.place(KING, BLACK, (0, 0))
    board.place(ROOK, BLACK, (6, 0))
    board.place(PAWN, WHITE, (5, 7), has_moved=True)
    score = Evaluator.score_move(board, Move((5, 7), (4, 7)), WHITE)
    # (6,3) (6,4) (6,5) are covered by the rook; pawn advanced 2 rows
    assert score == pytest.approx(2 * Evaluator.PAWN_ADVANCE_WEIGHT - 3 * Evaluator.KING_ZONE_PENALTY)


def test_knight_outpost_looks_one_row_behind_knight():
    board = Board.empty()
    knight = board.place(KNIGHT, WHITE, (3, 3))
    assert Evaluator._is_outpost(board, knight)
    board.place(PAWN, BLACK, (4, 2))
    assert not Evaluator._is_outpost(board, knight)


def test_rook_file_with_pawn_is_not_open():
    board = Board.empty()
    board.place(PAWN, BLACK, (1, 2))
    assert not Evaluator._is_open_file(board, 2)
    assert Evaluator._is_open_file(board, 3)


def test_scores_follow_the_mover_not_the_board_turn():
    board = _back_rank_position()
    board.current_turn = BLACK
    score = Evaluator.score_move(board, Move((7, 0), (0, 0)), WHITE)
    # mate (1000) plus the open a-file (0.8)
    assert score == pytest.approx(1000.8)
    assert choose_ai_move(board, WHITE, random.Random(0)) == Move((7, 0), (0, 0))


def test_hanging_penalty_for_black_mover_on_white_turn():
    board = Board.empty(current_turn=WHITE)
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 0))
    board.place(PAWN, WHITE, (5, 3), has_moved=True)
    board.place(KNIGHT, BLACK, (2, 3))
    score = Evaluator.score_move(board, Move((2, 3), (4, 4)), BLACK)
    # knight lost to the pawn (-3); outpost square since no white pawn at (3,3)/(3,5)
    assert score == pytest.approx(-3 + Evaluator.KNIGHT_OUTPOST_BONUS)


def test_bishop_mobility_score():
    board = Board.empty()
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 0))
    board.place(BISHOP, WHITE, (7, 2))
    score = Evaluator.score_move(board, Move((7, 2), (5, 4)), WHITE)
    # eleven legal destinations from the new square
    assert score == pytest.approx(11 * Evaluator.BISHOP_MOBILITY_WEIGHT)


def test_threat_creation_score():
    board = Board.empty()
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 7))
    board.place(QUEEN, WHITE, (7, 4))
    board.place(KNIGHT, BLACK, (4, 1))
    board.place(BISHOP, BLACK, (1, 4))
    score = Evaluator.score_move(board, Move((7, 4), (4, 4)), WHITE)
    # queen now eyes a knight and a bishop, 3 each
    assert score == pytest.approx(2 * 3 * Evaluator.THREAT_WEIGHT)


def test_knight_outpost_score():
    board = Board.empty()
    board.place(KING, WHITE, (7, 7))
    board.place(KING, BLACK, (0, 7))
    board.place(KNIGHT, WHITE, (7, 1))
    assert Evaluator.score_move(board, Move((7, 1), (5, 2)), WHITE) == pytest.approx(
        Evaluator.KNIGHT_OUTPOST_BONUS
    )

    board.place(PAWN, BLACK, (6, 1), has_moved=True)
    assert Evaluator.score_move(board, Move((7, 1), (5, 2)), WHITE) == pytest.approx(0.0)
