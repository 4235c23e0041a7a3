"""
Preset evaluator architectures.
"""
from typing import Any, Dict, Optional, Sequence

from gomoku import settings


def create_evaluator_architecture(
    input_size: int = settings.MAX_CHESSES,
    neurons_count: Optional[Sequence[int]] = None,
    activation: str = settings.ACTIVATION,
    activation_param: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Build a fully connected evaluator architecture.

    Architecture:
        Input (225) -> Dense (64, act) -> Dense (1, act)

    Every layer applies the same activation function, including the
    output layer, whose single neuron is the position value.

    Args:
        input_size: Input feature dimension (one per board cell).
        neurons_count: Neurons per layer. Default settings.NETWORK_STRUCT.
        activation: 'linear', 'sigmoid' or 'bipolar_sigmoid'.
        activation_param: Gradient or alpha; None uses the default.

    Returns:
        JSON architecture specification.
    """
    if neurons_count is None:
        neurons_count = settings.NETWORK_STRUCT

    layers = []
    prev_size = input_size
    for i, size in enumerate(neurons_count):
        layers.append({
            'id': f'layer_{i}',
            'type': 'dense',
            'in': prev_size,
            'out': int(size),
        })
        prev_size = int(size)

    activation_spec = {'fn': activation}
    if activation_param is not None:
        activation_spec['param'] = float(activation_param)

    return {
        'name': 'Gomoku evaluator',
        'input_size': input_size,
        'output_size': prev_size,
        'activation': activation_spec,
        'layers': layers,
    }


def minimal_architecture(input_size: int = settings.MAX_CHESSES) -> Dict[str, Any]:
    """Tiny network for tests and quick experiments."""
    return create_evaluator_architecture(
        input_size=input_size,
        neurons_count=[4, 1],
        activation='linear',
    )
