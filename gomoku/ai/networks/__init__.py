"""
Neural network infrastructure for the position evaluator.

This module provides:
- NetworkBuilder: Convert between JSON architecture and PyTorch models
- Flat weight vectors for the genetic operators
- Activation functions (linear, sigmoid, bipolar sigmoid)
"""
from .activations import (
    ActivationFunction,
    LinearFunction,
    SigmoidFunction,
    BipolarSigmoidFunction,
    get_activation,
)
from .builder import NetworkBuilder, ActivationNetwork, ActivationLayer, Neuron
from .architectures import create_evaluator_architecture, minimal_architecture

__all__ = [
    # Activations
    'ActivationFunction',
    'LinearFunction',
    'SigmoidFunction',
    'BipolarSigmoidFunction',
    'get_activation',

    # Builder
    'NetworkBuilder',
    'ActivationNetwork',
    'ActivationLayer',
    'Neuron',

    # Architectures
    'create_evaluator_architecture',
    'minimal_architecture',
]
