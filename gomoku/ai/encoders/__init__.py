"""
Board state encoders for neural network input.
"""
from .base import BaseEncoder
from .gomoku import GomokuEncoder

__all__ = [
    'BaseEncoder',
    'GomokuEncoder',
]
