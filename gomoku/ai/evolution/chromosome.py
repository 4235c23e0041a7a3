"""
Real-valued chromosome for evolving evaluator weights.

A chromosome is a vector of float genes plus the operators the
genetic algorithm applies to it:
- mutate: change exactly one gene, either scaling it or shifting it
- crossover: segment swap or blend/extrapolation with a partner

Two balancer probabilities pick between the two variants of each
operator every time it runs. Genes map one-to-one onto an evaluator's
weights and thresholds (see NetworkBuilder.flatten_weights).
"""
import logging
from typing import Callable, Optional, Sequence, TYPE_CHECKING

import numpy as np

from ..networks import NetworkBuilder
from ..rng import RandomSource
from .generators import ExponentialGenerator, UniformGenerator

if TYPE_CHECKING:
    from ..networks.builder import ActivationNetwork

logger = logging.getLogger(__name__)

Generator = Callable[[], float]


class DoubleArrayChromosome:
    """
    Chromosome holding an array of float genes.

    Attributes:
        genes: float64 numpy array, length in [2, MAX_LENGTH].
        chromosome_generator: Draws initial gene values.
        multiplier_generator: Draws multiplicative mutation factors.
        addition_generator: Draws additive mutation offsets.
        fitness: Fitness of the evaluator this chromosome came from.

    Example:
        a = DoubleArrayChromosome(length=10, rng=rng)
        b = a.create_new()
        a.crossover(b)
        a.mutate()
    """

    MAX_LENGTH = 65536 * 2

    def __init__(
        self,
        length: Optional[int] = None,
        values: Optional[Sequence[float]] = None,
        chromosome_generator: Optional[Generator] = None,
        multiplier_generator: Optional[Generator] = None,
        addition_generator: Optional[Generator] = None,
        rng: Optional[RandomSource] = None,
        mutation_balancer: float = 0.5,
        crossover_balancer: float = 0.5,
    ):
        """
        Create a chromosome from explicit values or a random fill.

        Args:
            length: Number of genes for a random chromosome; clamped to
                    [2, MAX_LENGTH].
            values: Explicit gene values (copied).
            chromosome_generator: Initial value generator, default Uniform(-1, 1).
            multiplier_generator: Mutation factor generator, default Exponential(1).
            addition_generator: Mutation offset generator, default Uniform(-0.5, 0.5).
            rng: Random source for gene selection and balancers.
            mutation_balancer: Probability of a multiplicative mutation.
            crossover_balancer: Probability of a segment-swap crossover.

        Raises:
            ValueError: If neither or both of length/values are given, or
                        if values has an invalid length.
        """
        if (length is None) == (values is None):
            raise ValueError("Specify exactly one of 'length' or 'values'")

        self.rng = rng or RandomSource()
        self.chromosome_generator = chromosome_generator or UniformGenerator(-1.0, 1.0, self.rng)
        self.multiplier_generator = multiplier_generator or ExponentialGenerator(1.0, self.rng)
        self.addition_generator = addition_generator or UniformGenerator(-0.5, 0.5, self.rng)
        self.mutation_balancer = mutation_balancer
        self.crossover_balancer = crossover_balancer
        self.fitness = 0.0

        if values is not None:
            genes = np.array(values, dtype=np.float64).reshape(-1)
            if genes.size < 2 or genes.size > self.MAX_LENGTH:
                raise ValueError("Invalid length of values array.")
            self.genes = genes
        else:
            length = max(2, min(self.MAX_LENGTH, int(length)))
            self.genes = np.zeros(length, dtype=np.float64)
            self.generate()

    @property
    def length(self) -> int:
        return int(self.genes.size)

    def __len__(self) -> int:
        return self.length

    @property
    def mutation_balancer(self) -> float:
        return self._mutation_balancer

    @mutation_balancer.setter
    def mutation_balancer(self, value: float) -> None:
        self._mutation_balancer = max(0.0, min(1.0, value))

    @property
    def crossover_balancer(self) -> float:
        return self._crossover_balancer

    @crossover_balancer.setter
    def crossover_balancer(self, value: float) -> None:
        self._crossover_balancer = max(0.0, min(1.0, value))

    def generate(self) -> None:
        """Fill every gene from the chromosome generator."""
        for i in range(self.length):
            self.genes[i] = self.chromosome_generator()

    randomize = generate

    def create_new(self) -> 'DoubleArrayChromosome':
        """New random chromosome of the same length and generators."""
        return DoubleArrayChromosome(
            length=self.length,
            chromosome_generator=self.chromosome_generator,
            multiplier_generator=self.multiplier_generator,
            addition_generator=self.addition_generator,
            rng=self.rng,
            mutation_balancer=self.mutation_balancer,
            crossover_balancer=self.crossover_balancer,
        )

    def clone(self) -> 'DoubleArrayChromosome':
        """Exact copy with independent genes."""
        clone = DoubleArrayChromosome(
            values=self.genes,
            chromosome_generator=self.chromosome_generator,
            multiplier_generator=self.multiplier_generator,
            addition_generator=self.addition_generator,
            rng=self.rng,
            mutation_balancer=self.mutation_balancer,
            crossover_balancer=self.crossover_balancer,
        )
        clone.fitness = self.fitness
        return clone

    def mutate(self) -> int:
        """
        Mutate one gene picked uniformly at random.

        With probability mutation_balancer the gene is multiplied by a
        value from the multiplier generator, otherwise a value from the
        addition generator is added.

        Returns:
            Index of the mutated gene.
        """
        index = self.rng.integers(self.length)

        if self.rng.random() < self.mutation_balancer:
            self.genes[index] *= self.multiplier_generator()
        else:
            self.genes[index] += self.addition_generator()

        return index

    def crossover(self, pair: 'DoubleArrayChromosome') -> bool:
        """
        Recombine this chromosome with ``pair``, changing both in place.

        With probability crossover_balancer a segment swap is done at a
        random point in [1, length - 1]; otherwise both chromosomes are
        blended with one random factor in [-1, 1].

        Returns:
            False (and nothing changes) when the lengths differ.
        """
        if pair is None or pair.length != self.length:
            logger.debug(
                f"Skipping crossover of chromosomes with lengths "
                f"{self.length} and {getattr(pair, 'length', None)}"
            )
            return False

        if self.rng.random() < self.crossover_balancer:
            point = self.rng.integers(1, self.length)
            self.segment_swap(pair, point)
        else:
            factor = self.rng.random()
            if self.rng.integers(2) == 0:
                factor = -factor
            self.blend(pair, factor)

        return True

    def segment_swap(self, pair: 'DoubleArrayChromosome', point: int) -> None:
        """Swap the genes at and after ``point`` between both chromosomes."""
        tail = self.genes[point:].copy()
        self.genes[point:] = pair.genes[point:]
        pair.genes[point:] = tail

    def blend(self, pair: 'DoubleArrayChromosome', factor: float) -> None:
        """
        Move both chromosomes along the line through them.

        For every gene, ``portion = (a - b) * factor`` is subtracted from
        this chromosome and added to the pair, so ``a + b`` is preserved.
        A positive factor pulls the genes towards each other, a negative
        one pushes them apart.
        """
        portion = (self.genes - pair.genes) * factor
        self.genes -= portion
        pair.genes += portion

    @classmethod
    def from_network(
        cls,
        network: 'ActivationNetwork',
        rng: Optional[RandomSource] = None,
        **kwargs,
    ) -> 'DoubleArrayChromosome':
        """Build a chromosome from a network's weights and thresholds."""
        return cls(values=to_genes(network), rng=rng, **kwargs)

    def apply_to(self, network: 'ActivationNetwork') -> None:
        """Overwrite a network's weights and thresholds with these genes."""
        from_genes(network, self.genes)

    def __str__(self) -> str:
        return ' '.join(repr(float(v)) for v in self.genes)

    def __repr__(self) -> str:
        return f"DoubleArrayChromosome(length={self.length}, fitness={self.fitness})"


def to_genes(network: 'ActivationNetwork') -> np.ndarray:
    """Flatten an evaluator into its gene vector."""
    return NetworkBuilder().flatten_weights(network)


def from_genes(network: 'ActivationNetwork', genes: Sequence[float]) -> None:
    """Write a gene vector back into an evaluator, replacing every weight."""
    NetworkBuilder().load_flat_weights(network, genes)
