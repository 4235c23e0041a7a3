"""
Gomoku board encoder.

Encoding scheme (one feature per cell, row-major):
    +1  stone of the side to move
    -1  stone of the opponent
     0  empty cell

The encoding is relative to ``state.turn`` so the same network can
evaluate positions for either colour.
"""
from typing import List, TYPE_CHECKING

import numpy as np

from gomoku import settings
from gomoku.game.board import Piece
from .base import BaseEncoder

if TYPE_CHECKING:
    from gomoku.game.board import BoardState


class GomokuEncoder(BaseEncoder):
    """
    Encode a Gomoku position from the perspective of the side to move.

    Example:
        encoder = GomokuEncoder()
        features = encoder.encode(state)
        assert features.shape == (225,)
    """

    game_type = 'gomoku'

    def __init__(self, board_size: int = settings.BOARD_SIZE):
        self.board_size = board_size
        self.input_size = board_size * board_size

    def encode(self, state: 'BoardState') -> np.ndarray:
        if state.size != self.board_size:
            raise ValueError(
                f"Encoder expects a {self.board_size}x{self.board_size} board, "
                f"got {state.size}x{state.size}"
            )

        cells = state.cells
        features = np.zeros(cells.shape, dtype=np.float64)
        features[cells == state.turn] = 1.0
        features[(cells != state.turn) & (cells != Piece.EMPTY)] = -1.0
        return features.reshape(-1)

    def get_feature_names(self) -> List[str]:
        return [
            f'cell_{x}_{y}'
            for x in range(self.board_size)
            for y in range(self.board_size)
        ]
