"""
Neural network position evaluation.

Wraps an evaluator network and an encoder into the plain
``(BoardState) -> float`` callable the search engine expects.
"""
from typing import Optional, TYPE_CHECKING

import torch

from ..encoders import GomokuEncoder

if TYPE_CHECKING:
    from gomoku.game.board import BoardState
    from ..encoders.base import BaseEncoder
    from ..networks.builder import ActivationNetwork


class NeuralEvaluator:
    """
    Evaluate positions with a feed-forward network.

    The board is encoded from the perspective of the side to move and
    fed through the network; the single output is the position value.

    Example:
        evaluate = NeuralEvaluator(network)
        move = place_ai_move(state, evaluate)
    """

    def __init__(
        self,
        network: 'ActivationNetwork',
        encoder: Optional['BaseEncoder'] = None,
    ):
        self.network = network
        self.encoder = encoder or GomokuEncoder()

        if self.encoder.input_size != network.inputs_count:
            raise ValueError(
                f"Encoder produces {self.encoder.input_size} features, "
                f"network expects {network.inputs_count}"
            )

    def __call__(self, state: 'BoardState') -> float:
        features = self.encoder.encode_tensor(state)
        with torch.no_grad():
            return float(self.network(features)[0])

    evaluate = __call__

    def __repr__(self) -> str:
        return f"NeuralEvaluator(layers={self.network.neurons_count})"
