"""
Position evaluation functions for the search engine.

Any callable taking a BoardState and returning a float can be used as
an evaluation function:
- neighbor_density: trivial heuristic used to test the search
- NeuralEvaluator: forward pass of an evolved network
"""
from typing import Callable, TYPE_CHECKING

from .heuristic import neighbor_density
from .neural import NeuralEvaluator

if TYPE_CHECKING:
    from gomoku.game.board import BoardState

EvaluateFunction = Callable[['BoardState'], float]

__all__ = [
    'EvaluateFunction',
    'neighbor_density',
    'NeuralEvaluator',
]
