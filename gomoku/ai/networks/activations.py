"""
Activation functions for the neural evaluator.

A closed set of three functions, each parameterised by one scalar:
- linear:           f(x) = g * x
- sigmoid:          f(x) = 1 / (1 + exp(-alpha * x))
- bipolar_sigmoid:  f(x) = 2 / (1 + exp(-alpha * x)) - 1

Every function also exposes its first derivative, both in terms of
the input (``derivative``) and in terms of an already computed output
(``derivative2``). The genetic trainer only uses ``function``.
"""
from typing import Any, Dict, Optional, Union

import torch
import torch.nn as nn

Number = Union[float, torch.Tensor]


class ActivationFunction(nn.Module):
    """Base class; ``forward`` is the activation itself."""

    name: str = ''
    default_param: float = 1.0

    def __init__(self, param: float = None):
        super().__init__()
        self.param = float(self.default_param if param is None else param)

    def function(self, x: Number) -> Number:
        raise NotImplementedError

    def derivative(self, x: Number) -> Number:
        raise NotImplementedError

    def derivative2(self, y: Number) -> Number:
        raise NotImplementedError

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.function(x)

    def to_json(self) -> Dict[str, Any]:
        return {'fn': self.name, 'param': self.param}

    def extra_repr(self) -> str:
        return f'param={self.param}'


class LinearFunction(ActivationFunction):
    """f(x) = g * x with gradient g."""

    name = 'linear'
    default_param = 1.0

    def function(self, x: Number) -> Number:
        return x * self.param

    def derivative(self, x: Number) -> Number:
        return self.param if not isinstance(x, torch.Tensor) else torch.full_like(x, self.param)

    def derivative2(self, y: Number) -> Number:
        return self.derivative(y)


class SigmoidFunction(ActivationFunction):
    """Unipolar sigmoid with output range (0, 1)."""

    name = 'sigmoid'
    default_param = 2.0

    def function(self, x: Number) -> Number:
        return 1.0 / (1.0 + _exp(-self.param * x))

    def derivative(self, x: Number) -> Number:
        return self.derivative2(self.function(x))

    def derivative2(self, y: Number) -> Number:
        return self.param * y * (1 - y)


class BipolarSigmoidFunction(ActivationFunction):
    """Bipolar sigmoid with output range (-1, 1)."""

    name = 'bipolar_sigmoid'
    default_param = 2.0

    def function(self, x: Number) -> Number:
        return 2.0 / (1.0 + _exp(-self.param * x)) - 1.0

    def derivative(self, x: Number) -> Number:
        return self.derivative2(self.function(x))

    def derivative2(self, y: Number) -> Number:
        return self.param * (1 - y * y) / 2


def _exp(x: Number) -> Number:
    if isinstance(x, torch.Tensor):
        return torch.exp(x)
    return torch.exp(torch.tensor(float(x), dtype=torch.float64)).item()


ACTIVATIONS = {
    'linear': LinearFunction,
    'sigmoid': SigmoidFunction,
    'bipolar_sigmoid': BipolarSigmoidFunction,
}


def get_activation(name: str, param: Optional[float] = None) -> ActivationFunction:
    """
    Build an activation function by name.

    Args:
        name: One of 'linear', 'sigmoid', 'bipolar_sigmoid'.
        param: Gradient (linear) or alpha (sigmoids). Uses the
               function's default when None.

    Raises:
        ValueError: If the name is unknown.
    """
    if name not in ACTIVATIONS:
        raise ValueError(f"Unknown activation function: {name}")
    return ACTIVATIONS[name](param)
