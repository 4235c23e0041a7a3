"""
Game rules for five-in-a-row.

Exposes the board model used by the search engine and the trainer.
"""
from .board import BoardState, Piece, other, LINE_DIRECTIONS

__all__ = [
    'BoardState',
    'Piece',
    'other',
    'LINE_DIRECTIONS',
]
