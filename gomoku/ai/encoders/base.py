"""
Base encoder abstraction for board state encoding.

Encoders transform board states into fixed-size numerical feature
vectors suitable for neural network input.
"""
from abc import ABC, abstractmethod
from typing import List, TYPE_CHECKING

import numpy as np
import torch

if TYPE_CHECKING:
    from gomoku.game.board import BoardState


class BaseEncoder(ABC):
    """
    Abstract base class for board state encoders.

    Attributes:
        input_size: The size of the output feature vector.
        game_type: The game type this encoder is designed for.

    Example:
        encoder = GomokuEncoder()
        features = encoder.encode(state)          # numpy array
        tensor = encoder.encode_tensor(state)     # torch tensor
    """

    input_size: int = 0
    game_type: str = ''

    @abstractmethod
    def encode(self, state: 'BoardState') -> np.ndarray:
        """
        Encode a board state into a feature vector.

        Args:
            state: The board state.

        Returns:
            A float64 numpy array of shape (input_size,).
        """
        pass

    def encode_tensor(self, state: 'BoardState') -> torch.Tensor:
        """Encode a board state into a float64 tensor."""
        return torch.from_numpy(self.encode(state))

    def encode_batch(self, states: List['BoardState']) -> np.ndarray:
        """Encode several states into a ``(batch, input_size)`` array."""
        return np.stack([self.encode(state) for state in states])

    @abstractmethod
    def get_feature_names(self) -> List[str]:
        """Return human-readable names for each feature."""
        pass

