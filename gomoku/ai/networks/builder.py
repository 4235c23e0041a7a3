"""
Network builder for converting between JSON and PyTorch models.

This module provides the core infrastructure for:
- Building feed-forward evaluator networks from JSON architecture specs
- Converting networks back to JSON
- Flattening weights into a gene vector and loading them back
- Cloning networks for the genetic operators

A network is an ordered list of activation layers. Each layer is a
``nn.Linear`` whose rows are neurons (weights plus one threshold) and a
shared activation function. Parameters are float64 so that gene
vectors round-trip without loss.
"""
import copy
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING, Union

import numpy as np
import torch
import torch.nn as nn

from .activations import ActivationFunction, get_activation

if TYPE_CHECKING:
    from ..rng import RandomSource

VectorLike = Union[Sequence[float], np.ndarray, torch.Tensor]

DTYPE = torch.float64


def _as_vector(values: VectorLike) -> torch.Tensor:
    if isinstance(values, torch.Tensor):
        return values.to(DTYPE).reshape(-1)
    return torch.as_tensor(np.asarray(values, dtype=np.float64)).reshape(-1)


class Neuron:
    """
    View of a single neuron inside an activation layer.

    The weights and threshold live in the layer's ``nn.Linear``; this
    object only indexes into them, so writes go straight to the layer.
    """

    def __init__(self, layer: 'ActivationLayer', index: int):
        self.layer = layer
        self.index = index

    @property
    def inputs_count(self) -> int:
        return self.layer.inputs_count

    @property
    def weights(self) -> torch.Tensor:
        return self.layer.linear.weight[self.index]

    @property
    def threshold(self) -> float:
        return float(self.layer.linear.bias[self.index])

    @threshold.setter
    def threshold(self, value: float) -> None:
        with torch.no_grad():
            self.layer.linear.bias[self.index] = value

    def compute(self, input: VectorLike) -> float:
        """
        Compute the neuron output for an input vector.

        Raises:
            ValueError: If the input length differs from inputs_count.
        """
        x = _as_vector(input)
        if x.numel() != self.inputs_count:
            raise ValueError("Wrong length of the input vector.")

        with torch.no_grad():
            total = torch.dot(self.weights, x) + self.layer.linear.bias[self.index]
            return float(self.layer.activation(total))


class ActivationLayer(nn.Module):
    """A fully connected layer followed by the shared activation."""

    def __init__(
        self,
        neurons_count: int,
        inputs_count: int,
        activation: ActivationFunction,
    ):
        super().__init__()
        self.linear = nn.Linear(inputs_count, neurons_count, dtype=DTYPE)
        self.activation = activation

    @property
    def inputs_count(self) -> int:
        return self.linear.in_features

    @property
    def neurons_count(self) -> int:
        return self.linear.out_features

    @property
    def neurons(self) -> List[Neuron]:
        return [Neuron(self, i) for i in range(self.neurons_count)]

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.activation(self.linear(x))

    def compute(self, input: VectorLike) -> np.ndarray:
        """Apply every neuron to the same input, one output per neuron."""
        x = _as_vector(input)
        if x.numel() != self.inputs_count:
            raise ValueError("Wrong length of the input vector.")

        with torch.no_grad():
            return self.forward(x).numpy()


class ActivationNetwork(nn.Module):
    """
    A feed-forward network built from a JSON architecture specification.

    Attributes:
        architecture: The JSON architecture this network was built from.
        activation: The activation function shared by every neuron.
    """

    def __init__(
        self,
        layers: 'OrderedDict[str, ActivationLayer]',
        activation: ActivationFunction,
        architecture: Dict[str, Any],
    ):
        super().__init__()
        self.architecture = architecture
        self.activation = activation
        self._layers = nn.ModuleDict(layers)
        self._layer_order = list(layers.keys())

    @property
    def layers(self) -> List[ActivationLayer]:
        return [self._layers[layer_id] for layer_id in self._layer_order]

    @property
    def inputs_count(self) -> int:
        return self.layers[0].inputs_count

    @property
    def neurons_count(self) -> List[int]:
        return [layer.neurons_count for layer in self.layers]

    def layer_ids(self) -> List[str]:
        return self._layer_order.copy()

    def get_layer(self, layer_id: str) -> Optional[ActivationLayer]:
        return self._layers[layer_id] if layer_id in self._layers else None

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """Forward pass through all layers in order."""
        for layer_id in self._layer_order:
            x = self._layers[layer_id](x)
        return x

    def compute(self, input: VectorLike) -> np.ndarray:
        """
        Feed an input vector through every layer.

        Raises:
            ValueError: If the input length differs from the network's
                        input count.
        """
        x = _as_vector(input)
        if x.numel() != self.inputs_count:
            raise ValueError("Wrong length of the input vector.")

        with torch.no_grad():
            return self.forward(x).numpy()


class NetworkBuilder:
    """
    Build evaluator networks from JSON architecture specifications.

    Architecture Format:
        {
            "input_size": 225,
            "output_size": 1,
            "activation": {"fn": "linear", "param": 1.0},
            "layers": [
                {"id": "layer_0", "type": "dense", "in": 225, "out": 64},
                {"id": "layer_1", "type": "dense", "in": 64, "out": 1}
            ]
        }

    Example:
        builder = NetworkBuilder()
        network = builder.from_json(architecture, rng=rng)
        genes = builder.flatten_weights(network)
        builder.load_flat_weights(network, genes)
    """

    # Neuron weights and thresholds start uniform in [low, high)
    INIT_RANGE = (0.0, 1.0)

    def from_json(
        self,
        architecture: Dict[str, Any],
        rng: Optional['RandomSource'] = None,
        randomize: bool = True,
    ) -> ActivationNetwork:
        """
        Build a network from a JSON architecture specification.

        Args:
            architecture: Dictionary with 'input_size', 'activation' and 'layers'.
            rng: Random source used to initialise weights.
            randomize: If False, keep PyTorch's default initialisation
                       (used when the weights are overwritten right away).

        Returns:
            An ActivationNetwork instance.

        Raises:
            ValueError: If the architecture is invalid.
        """
        self._validate_architecture(architecture)

        activation_spec = architecture.get('activation', {})
        activation = get_activation(
            activation_spec.get('fn', 'linear'),
            activation_spec.get('param'),
        )

        layers = OrderedDict()
        for i, layer_spec in enumerate(architecture['layers']):
            layer_id = layer_spec.get('id', f'layer_{i}')
            layers[layer_id] = ActivationLayer(
                neurons_count=layer_spec['out'],
                inputs_count=layer_spec['in'],
                activation=activation,
            )

        network = ActivationNetwork(layers, activation, copy.deepcopy(architecture))
        network.eval()

        if randomize:
            self.randomize(network, rng)

        return network

    def _validate_architecture(self, architecture: Dict[str, Any]) -> None:
        """Validate that an architecture specification is well-formed."""
        if not isinstance(architecture, dict):
            raise ValueError("Architecture must be a dictionary")

        if 'layers' not in architecture:
            raise ValueError("Architecture must have 'layers' key")

        layers = architecture['layers']
        if not isinstance(layers, list) or not layers:
            raise ValueError("'layers' must be a non-empty list")

        expected_in = architecture.get('input_size')
        for i, layer in enumerate(layers):
            if not isinstance(layer, dict):
                raise ValueError(f"Layer {i} must be a dictionary")
            if layer.get('type') != 'dense':
                raise ValueError(f"Unknown layer type: {layer.get('type')}")
            if layer.get('in', 0) < 1 or layer.get('out', 0) < 1:
                raise ValueError(f"Layer {i} must have positive 'in' and 'out'")
            if expected_in is not None and layer['in'] != expected_in:
                raise ValueError(
                    f"Layer {i} expects {layer['in']} inputs, "
                    f"previous layer provides {expected_in}"
                )
            expected_in = layer['out']

        output_size = architecture.get('output_size')
        if output_size is not None and output_size != expected_in:
            raise ValueError(
                f"Output size {output_size} does not match last layer ({expected_in})"
            )

    def to_json(self, network: ActivationNetwork) -> Dict[str, Any]:
        """Return a copy of the architecture a network was built from."""
        return copy.deepcopy(network.architecture)

    def randomize(
        self,
        network: ActivationNetwork,
        rng: Optional['RandomSource'] = None,
    ) -> None:
        """Draw fresh weights and thresholds uniformly from INIT_RANGE."""
        from ..rng import RandomSource

        rng = rng or RandomSource()
        low, high = self.INIT_RANGE

        with torch.no_grad():
            for layer in network.layers:
                weight = rng.uniform(low, high, size=tuple(layer.linear.weight.shape))
                bias = rng.uniform(low, high, size=tuple(layer.linear.bias.shape))
                layer.linear.weight.copy_(torch.from_numpy(weight))
                layer.linear.bias.copy_(torch.from_numpy(bias))

    def flatten_weights(self, network: ActivationNetwork) -> np.ndarray:
        """
        Flatten all weights and thresholds into one float64 vector.

        Order: layer by layer, neuron by neuron, the neuron's weights
        followed by its threshold.
        """
        parts = []
        for layer in network.layers:
            weight = layer.linear.weight.detach().cpu().numpy()
            bias = layer.linear.bias.detach().cpu().numpy()
            parts.append(np.concatenate([weight, bias[:, None]], axis=1).reshape(-1))
        return np.concatenate(parts).astype(np.float64)

    def load_flat_weights(self, network: ActivationNetwork, genes: VectorLike) -> None:
        """
        Overwrite every weight and threshold from a flat vector.

        The vector must use the order produced by flatten_weights().
        The length is checked before anything is written.

        Raises:
            ValueError: If the vector length does not match the network.
        """
        values = np.asarray(genes, dtype=np.float64).reshape(-1)
        expected = self.get_parameter_count(network)
        if values.size != expected:
            raise ValueError(
                f"Gene vector has {values.size} values, network needs {expected}"
            )

        offset = 0
        with torch.no_grad():
            for layer in network.layers:
                rows, cols = layer.neurons_count, layer.inputs_count + 1
                block = values[offset:offset + rows * cols].reshape(rows, cols)
                layer.linear.weight.copy_(torch.from_numpy(np.ascontiguousarray(block[:, :-1])))
                layer.linear.bias.copy_(torch.from_numpy(np.ascontiguousarray(block[:, -1])))
                offset += rows * cols

    def clone_network(self, network: ActivationNetwork) -> ActivationNetwork:
        """Create a copy of a network with the same weights."""
        new_network = self.from_json(network.architecture, randomize=False)
        self.load_flat_weights(new_network, self.flatten_weights(network))
        return new_network

    def get_parameter_count(self, network: ActivationNetwork) -> int:
        """Total number of weights plus thresholds."""
        return sum(
            layer.neurons_count * (layer.inputs_count + 1)
            for layer in network.layers
        )

    def get_layer_info(self, network: ActivationNetwork) -> List[Dict[str, Any]]:
        """Get information about each layer in the network."""
        return [
            {
                'id': layer_id,
                'in_features': layer.inputs_count,
                'out_features': layer.neurons_count,
                'parameters': layer.neurons_count * (layer.inputs_count + 1),
            }
            for layer_id, layer in zip(network.layer_ids(), network.layers)
        ]
