"""
Pytest fixtures for AI package tests.

Provides fixtures for:
- Random sources
- Network architectures and built networks
- Sample board states
"""
import pytest
from typing import Any, Dict

from gomoku.ai.networks import NetworkBuilder, create_evaluator_architecture
from gomoku.ai.rng import RandomSource
from gomoku.game.board import BoardState, Piece


@pytest.fixture
def rng() -> RandomSource:
    """Seeded random source so tests are repeatable."""
    return RandomSource(seed=1234)


@pytest.fixture
def builder() -> NetworkBuilder:
    return NetworkBuilder()


@pytest.fixture
def tiny_architecture() -> Dict[str, Any]:
    """Full-board input, two hidden neurons, one output."""
    return create_evaluator_architecture(neurons_count=[2, 1], activation='linear')


@pytest.fixture
def small_architecture() -> Dict[str, Any]:
    """Three inputs, two hidden neurons, one output."""
    return create_evaluator_architecture(
        input_size=3,
        neurons_count=[2, 1],
        activation='linear',
    )


@pytest.fixture
def tiny_network(builder, tiny_architecture, rng):
    return builder.from_json(tiny_architecture, rng=rng)


@pytest.fixture
def small_network(builder, small_architecture, rng):
    return builder.from_json(small_architecture, rng=rng)


@pytest.fixture
def opened_state() -> BoardState:
    """CROSS on the centre, NOUGHT to move."""
    state = BoardState()
    state.place_center()
    return state


@pytest.fixture
def cross_to_win_state() -> BoardState:
    """CROSS has four in a row on row 7 with both ends open, CROSS to move."""
    state = BoardState()
    for y in range(5, 9):
        state.place(7, y, Piece.CROSS)
        state.place(0, y * 2 - 10, Piece.NOUGHT)
    return state
