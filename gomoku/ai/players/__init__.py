"""
Player implementations for Gomoku.

Every player implements select_move(state) and can be pitted against
any other through MatchRunner.
"""
from .base import BasePlayer
from .random_player import RandomPlayer
from .search import SearchPlayer, HeuristicPlayer, NeuralPlayer

__all__ = [
    'BasePlayer',
    'RandomPlayer',
    'SearchPlayer',
    'HeuristicPlayer',
    'NeuralPlayer',
]
