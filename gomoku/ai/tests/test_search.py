"""
Tests for the alpha-beta move search.

Tests minimax and move selection for:
- Locality filtering of candidate moves
- Sentinel bounds on search values
- Preference for immediate wins and avoidance of immediate losses
- Committing moves onto the board
"""
import pytest

from gomoku.ai.evaluation import neighbor_density
from gomoku.ai.search import (
    LOSE_SCORE,
    WIN_SCORE,
    SearchStats,
    candidate_states,
    choose_move,
    has_neighbor,
    minimax,
    place_ai_move,
)
from gomoku.game.board import BoardState, Piece


def zero(state):
    return 0.0


def full_small_board():
    """3x3 board filled without a winner, NOUGHT to move."""
    state = BoardState(size=3)
    for x in range(3):
        for y in range(3):
            state.place(x, y, state.turn)
    return state


class TestCandidates:
    """Tests for the locality filter."""

    def test_empty_board_has_no_candidates(self):
        assert list(candidate_states(BoardState())) == []

    def test_candidates_surround_single_stone(self, opened_state):
        moves = {child.last_move for child in candidate_states(opened_state)}

        assert len(moves) == 8
        assert all(max(abs(x - 7), abs(y - 7)) == 1 for x, y in moves)

    def test_has_neighbor_at_corner(self):
        state = BoardState()
        state.place(0, 0, Piece.CROSS)

        assert has_neighbor(state, 1, 1)
        assert not has_neighbor(state, 2, 2)
        assert not has_neighbor(state, 0, 0)

    def test_candidates_do_not_modify_state(self, opened_state):
        before = opened_state.copy()

        list(candidate_states(opened_state))

        assert opened_state == before


class TestMinimax:
    """Tests for minimax values."""

    def test_depth_zero_calls_evaluate(self, opened_state):
        stats = SearchStats()

        value = minimax(opened_state, 0, LOSE_SCORE, WIN_SCORE, Piece.NOUGHT, lambda s: 3.5, stats)

        assert value == 3.5
        assert stats.evaluations == 1

    def test_decided_position_returns_sentinel(self):
        state = BoardState()
        for y in range(5):
            state.place(3, y, Piece.CROSS)

        assert minimax(state, 2, LOSE_SCORE, WIN_SCORE, Piece.CROSS, zero) == WIN_SCORE
        assert minimax(state, 2, LOSE_SCORE, WIN_SCORE, Piece.NOUGHT, zero) == LOSE_SCORE

    @pytest.mark.parametrize('depth', [1, 2])
    def test_values_within_sentinels(self, opened_state, depth):
        for child in candidate_states(opened_state):
            value = minimax(child, depth - 1, LOSE_SCORE, WIN_SCORE, Piece.NOUGHT, neighbor_density)
            assert LOSE_SCORE <= value <= WIN_SCORE

    def test_full_board_returns_bounds(self):
        """No candidates: max nodes keep alpha, min nodes keep beta."""
        state = full_small_board()
        stats = SearchStats()

        assert state.winner() is None
        assert minimax(state, 2, -7.0, 9.0, Piece.NOUGHT, zero, stats) == -7.0
        assert minimax(state, 2, -7.0, 9.0, Piece.CROSS, zero, stats) == 9.0
        assert stats.evaluations == 0

    def test_pruning_happens(self, opened_state):
        stats = SearchStats()
        opened_state.place(7, 8, Piece.NOUGHT)

        choose_move(opened_state, neighbor_density, depth=3, stats=stats)

        assert stats.nodes > 0
        assert stats.cutoffs > 0


class TestChooseMove:
    """Tests for root move selection."""

    def test_single_stone_depth_one_stays_adjacent(self, opened_state):
        """With one stone at (7, 7) the move is in its 8-neighbourhood."""
        x, y = place_ai_move(opened_state, neighbor_density, depth=1)

        assert max(abs(x - 7), abs(y - 7)) == 1
        assert opened_state.piece_at(x, y) == Piece.NOUGHT
        assert opened_state.stone_count() == 2

    def test_immediate_win_preferred(self, cross_to_win_state):
        move = choose_move(cross_to_win_state, zero, depth=1)

        assert move in [(7, 4), (7, 9)]

    def test_immediate_win_preferred_at_depth_two(self, cross_to_win_state):
        move = choose_move(cross_to_win_state, neighbor_density, depth=2)

        assert move in [(7, 4), (7, 9)]

    def test_blocks_immediate_loss(self):
        """NOUGHT must block the open end of CROSS's four."""
        state = BoardState()
        for y in range(0, 4):
            state.place(7, y, Piece.CROSS)
            state.place(10, y * 3, Piece.NOUGHT)
        # CROSS four at (7,0)-(7,3); only (7,4) completes it
        state.place(12, 12, Piece.CROSS)

        assert state.turn == Piece.NOUGHT
        assert choose_move(state, zero, depth=2) == (7, 4)

    def test_ties_keep_first_in_scan_order(self, opened_state):
        assert choose_move(opened_state, zero, depth=1) == (6, 6)

    def test_no_candidates_returns_none(self):
        state = BoardState()

        assert choose_move(state, zero, depth=1) is None
        assert place_ai_move(state, zero, depth=1) is None
        assert state.stone_count() == 0

    def test_full_board_returns_none(self):
        state = full_small_board()

        assert choose_move(state, zero, depth=2) is None
        assert place_ai_move(state, zero, depth=1) is None

    def test_depth_below_one_raises(self, opened_state):
        with pytest.raises(ValueError):
            choose_move(opened_state, zero, depth=0)

    def test_choose_move_does_not_modify_state(self, opened_state):
        before = opened_state.copy()

        choose_move(opened_state, neighbor_density, depth=2)

        assert opened_state == before
