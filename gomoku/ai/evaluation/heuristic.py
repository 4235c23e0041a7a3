"""
Non-neural position evaluation.

A deliberately simple heuristic used to check the search itself: it
scores the neighbourhood of the last placed stone, counting occupied
orthogonal neighbours once and occupied diagonal neighbours twice.
"""
from typing import TYPE_CHECKING

from gomoku.game.board import Piece

if TYPE_CHECKING:
    from gomoku.game.board import BoardState

ORTHOGONAL_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL_OFFSETS = ((1, 1), (-1, 1), (1, -1), (-1, -1))

ORTHOGONAL_WEIGHT = 1
DIAGONAL_WEIGHT = 2


def neighbor_density(state: 'BoardState') -> float:
    """
    Score the cells around ``state.last_move``.

    Args:
        state: Board state to evaluate.

    Returns:
        Weighted count of occupied neighbours; 0 before the first move.
    """
    if state.last_move is None:
        return 0.0

    x, y = state.last_move
    score = 0
    for offsets, weight in (
        (ORTHOGONAL_OFFSETS, ORTHOGONAL_WEIGHT),
        (DIAGONAL_OFFSETS, DIAGONAL_WEIGHT),
    ):
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if 0 <= nx < state.size and 0 <= ny < state.size \
                    and state.cells[nx, ny] != Piece.EMPTY:
                score += weight

    return float(score)
