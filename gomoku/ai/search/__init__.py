"""
Move search for five-in-a-row.

Example usage:
    from gomoku.ai.search import place_ai_move
    from gomoku.ai.evaluation import neighbor_density

    move = place_ai_move(state, neighbor_density, depth=2)
"""
from .minimax import (
    WIN_SCORE,
    LOSE_SCORE,
    SearchStats,
    has_neighbor,
    candidate_states,
    minimax,
    choose_move,
    place_ai_move,
)

__all__ = [
    'WIN_SCORE',
    'LOSE_SCORE',
    'SearchStats',
    'has_neighbor',
    'candidate_states',
    'minimax',
    'choose_move',
    'place_ai_move',
]
