"""
Persistence for evolved evaluators.

An evaluator is stored as gzip-compressed JSON with an explicit schema:

    {
        "format": "gomoku-evaluator",
        "version": 1,
        "input_size": 225,
        "neurons": [64, 1],
        "activation": {"fn": "linear", "param": 1.0},
        "genes": [...]
    }

``genes`` holds every weight and threshold in the flatten order used
by the chromosome, so a saved file is also a saved chromosome.

Checkpoints let a long training run:
- Resume after interruption
- Compare evaluators from different generations
"""
import gzip
import json
import logging
import math
import zlib
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union, TYPE_CHECKING

from ..networks import NetworkBuilder, create_evaluator_architecture
from ..networks.activations import ACTIVATIONS

if TYPE_CHECKING:
    from ..networks.builder import ActivationNetwork

logger = logging.getLogger(__name__)

FORMAT_TAG = 'gomoku-evaluator'
FORMAT_VERSION = 1


class EvaluatorFormatError(ValueError):
    """Raised when saved evaluator data is corrupt or incompatible."""
    pass


def evaluator_to_dict(network: 'ActivationNetwork') -> Dict[str, Any]:
    """Describe an evaluator with the persisted schema."""
    activation = network.activation
    return {
        'format': FORMAT_TAG,
        'version': FORMAT_VERSION,
        'input_size': network.inputs_count,
        'neurons': network.neurons_count,
        'activation': activation.to_json(),
        'genes': NetworkBuilder().flatten_weights(network).tolist(),
    }


def evaluator_from_dict(data: Dict[str, Any]) -> 'ActivationNetwork':
    """
    Build an evaluator from the persisted schema.

    Everything is validated before the network is built.

    Raises:
        EvaluatorFormatError: If any field is missing or inconsistent.
    """
    if not isinstance(data, dict):
        raise EvaluatorFormatError("Evaluator data must be a JSON object")
    if data.get('format') != FORMAT_TAG:
        raise EvaluatorFormatError(f"Unknown format tag: {data.get('format')!r}")
    if data.get('version') != FORMAT_VERSION:
        raise EvaluatorFormatError(f"Unsupported version: {data.get('version')!r}")

    input_size = data.get('input_size')
    neurons = data.get('neurons')
    if not _is_count(input_size):
        raise EvaluatorFormatError(f"Invalid input size: {input_size!r}")
    if not isinstance(neurons, list) or not neurons \
            or not all(_is_count(n) for n in neurons):
        raise EvaluatorFormatError(f"Invalid neuron counts: {neurons!r}")

    activation = data.get('activation')
    if not isinstance(activation, dict) or activation.get('fn') not in ACTIVATIONS:
        raise EvaluatorFormatError(f"Invalid activation: {activation!r}")
    param = activation.get('param')
    if param is not None and not _is_finite_number(param):
        raise EvaluatorFormatError(f"Invalid activation parameter: {param!r}")

    genes = data.get('genes')
    expected, prev = 0, input_size
    for count in neurons:
        expected += count * (prev + 1)
        prev = count
    if not isinstance(genes, list) or len(genes) != expected:
        raise EvaluatorFormatError(
            f"Expected {expected} genes, got "
            f"{len(genes) if isinstance(genes, list) else type(genes).__name__}"
        )
    if not all(_is_finite_number(g) for g in genes):
        raise EvaluatorFormatError("Genes must be finite numbers")

    builder = NetworkBuilder()
    architecture = create_evaluator_architecture(
        input_size=input_size,
        neurons_count=neurons,
        activation=activation['fn'],
        activation_param=param,
    )
    network = builder.from_json(architecture, randomize=False)
    builder.load_flat_weights(network, genes)
    return network


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def serialize_evaluator(network: 'ActivationNetwork') -> bytes:
    """Encode an evaluator as gzip-compressed JSON."""
    payload = json.dumps(evaluator_to_dict(network)).encode('utf-8')
    return gzip.compress(payload)


def deserialize_evaluator(data: bytes) -> 'ActivationNetwork':
    """
    Decode an evaluator produced by serialize_evaluator().

    Raises:
        EvaluatorFormatError: If the data is not valid compressed JSON
                              or does not describe a valid evaluator.
    """
    try:
        text = gzip.decompress(data).decode('utf-8')
        decoded = json.loads(text)
    except (OSError, EOFError, zlib.error, UnicodeDecodeError, ValueError) as e:
        raise EvaluatorFormatError(f"Could not decode evaluator data: {e}") from e
    return evaluator_from_dict(decoded)


def save_evaluator(network: 'ActivationNetwork', path: Union[str, Path]) -> Path:
    """Write an evaluator to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(serialize_evaluator(network))
    logger.info(f"Saved evaluator to {path}")
    return path


def load_evaluator(path: Union[str, Path]) -> 'ActivationNetwork':
    """
    Read an evaluator from ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        EvaluatorFormatError: If the contents are invalid.
    """
    network = deserialize_evaluator(Path(path).read_bytes())
    logger.info(f"Loaded evaluator from {path}")
    return network


class CheckpointManager:
    """
    Manage per-generation evaluator checkpoints.

    Each checkpoint is the best evaluator of one generation, stored as
    ``checkpoint_<generation>.json.gz`` in the evaluator format.

    Attributes:
        checkpoint_dir: Directory for storing checkpoints.
        max_checkpoints: Maximum number of checkpoints to keep.

    Example:
        manager = CheckpointManager('./evolution_checkpoints')
        manager.save(population.get_best().network, generation=4)

        # Resume later
        generation, network = manager.load_latest()
    """

    PATTERN = 'checkpoint_*.json.gz'

    def __init__(
        self,
        checkpoint_dir: Union[str, Path],
        max_checkpoints: int = 10,
    ):
        """
        Initialize the checkpoint manager.

        Args:
            checkpoint_dir: Directory to store checkpoints.
            max_checkpoints: Maximum checkpoints to keep (0 = unlimited).
        """
        self.checkpoint_dir = Path(checkpoint_dir)
        self.max_checkpoints = max_checkpoints
        self.checkpoint_dir.mkdir(parents=True, exist_ok=True)

    def save(self, network: 'ActivationNetwork', generation: int) -> Path:
        """
        Save the evaluator for a generation.

        Returns:
            Path to the saved checkpoint file.
        """
        filepath = self.checkpoint_dir / f'checkpoint_{generation:05d}.json.gz'
        filepath.write_bytes(serialize_evaluator(network))
        logger.debug(f"Checkpoint for generation {generation} written to {filepath}")

        self._cleanup_old_checkpoints()
        return filepath

    def load(self, filepath: Union[str, Path]) -> 'ActivationNetwork':
        return load_evaluator(filepath)

    def load_latest(self) -> Optional[Tuple[int, 'ActivationNetwork']]:
        """
        Load the most recent checkpoint.

        Returns:
            ``(generation, network)`` or None if no checkpoints exist.
        """
        checkpoints = self.list_checkpoints()
        if not checkpoints:
            return None
        latest = checkpoints[-1]
        return self._generation_of(latest), self.load(latest)

    def list_checkpoints(self) -> List[Path]:
        """List checkpoint files sorted by generation."""
        checkpoints = list(self.checkpoint_dir.glob(self.PATTERN))
        checkpoints.sort(key=self._generation_of)
        return checkpoints

    @staticmethod
    def _generation_of(path: Path) -> int:
        return int(path.name.split('_')[1].split('.')[0])

    def _cleanup_old_checkpoints(self) -> None:
        """Remove old checkpoints if over the limit."""
        if self.max_checkpoints <= 0:
            return

        checkpoints = self.list_checkpoints()
        while len(checkpoints) > self.max_checkpoints:
            oldest = checkpoints.pop(0)
            oldest.unlink()


class TrainingLogger:
    """
    Log per-generation statistics as JSON lines.

    Example:
        log = TrainingLogger('./logs', 'run_1')
        log.log(stats.generation, {'best_fitness': stats.best_fitness})
    """

    def __init__(self, log_dir: Union[str, Path], experiment_name: str = 'evolution'):
        self.log_dir = Path(log_dir)
        self.experiment_name = experiment_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / f'{experiment_name}.jsonl'
        self.entries: List[Dict[str, Any]] = []

    def log(self, step: int, metrics: Dict[str, float]) -> None:
        """Record metrics for one generation and append them to the file."""
        entry = {
            'step': step,
            'timestamp': datetime.now().isoformat(),
            'metrics': metrics,
        }
        self.entries.append(entry)

        with open(self.log_file, 'a') as f:
            f.write(json.dumps(entry) + '\n')

    def load(self) -> None:
        """Load entries from the log file."""
        if not self.log_file.exists():
            return

        self.entries = []
        with open(self.log_file, 'r') as f:
            for line in f:
                if line.strip():
                    self.entries.append(json.loads(line))

    def get_metric_history(self, metric: str) -> Tuple[List[int], List[float]]:
        steps, values = [], []
        for entry in self.entries:
            if metric in entry.get('metrics', {}):
                steps.append(entry['step'])
                values.append(entry['metrics'][metric])
        return steps, values
