"""
Population management for the neuro-evolutionary trainer.

Handles the lifecycle of a population of evaluator networks:
- Initialization (random, or seeded from a saved evaluator)
- Crossover and mutation (offspring appended to the population)
- Evaluation (fitness from self-play games)
- Truncation selection back to the target size

One generation is crossover -> mutate -> evaluate -> select, optionally
followed by a shuffle.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

import numpy as np

from gomoku import settings
from ..encoders import GomokuEncoder
from ..evaluation import NeuralEvaluator
from ..matches.runner import play_game
from ..networks import NetworkBuilder, create_evaluator_architecture
from ..rng import RandomSource
from .chromosome import DoubleArrayChromosome
from .selection import Individual, TruncationSelection

if TYPE_CHECKING:
    from ..networks.builder import ActivationNetwork
    from ..training.checkpoints import CheckpointManager

logger = logging.getLogger(__name__)


@dataclass
class EvolutionConfig:
    """Configuration for an evolution run."""

    # Population
    population_size: int = settings.POPULATION
    crossover_rate: float = settings.CROSSOVER_RATE
    mutation_rate: float = settings.MUTATION_RATE
    generations: int = settings.EPOCH
    auto_shuffle: bool = False

    # Fitness evaluation
    games_per_evaluation: int = settings.GAME_MATCHES
    search_depth: int = settings.SEARCH_DEPTH
    draw_steps: int = settings.DRAW_STEPS
    board_size: int = settings.BOARD_SIZE

    # Network topology
    input_size: int = settings.MAX_CHESSES
    neurons_count: List[int] = field(default_factory=lambda: list(settings.NETWORK_STRUCT))
    activation: str = settings.ACTIVATION
    activation_param: Optional[float] = None

    # Reproducibility
    seed: Optional[int] = None

    # Persistence
    checkpoint_dir: str = settings.CHECKPOINT_DIR
    checkpoint_interval: int = 1

    def architecture(self) -> Dict[str, Any]:
        """JSON architecture for the configured topology."""
        return create_evaluator_architecture(
            input_size=self.input_size,
            neurons_count=self.neurons_count,
            activation=self.activation,
            activation_param=self.activation_param,
        )


@dataclass
class GenerationStats:
    """Statistics for a generation."""
    generation: int = 0
    best_fitness: float = 0.0
    avg_fitness: float = 0.0
    min_fitness: float = 0.0
    fitness_std: float = 0.0
    num_crossovers: int = 0
    num_mutations: int = 0
    evaluated_size: int = 0


class Population:
    """
    Manages a population of evolving evaluator networks.

    Handles the complete evolutionary cycle:
    1. Initialize population (random networks or from a saved evaluator)
    2. Crossover adjacent pairs and mutate members, appending offspring
    3. Evaluate fitness of every member by self-play
    4. Keep the fittest ``population_size`` members
    5. Repeat

    Example:
        config = EvolutionConfig(population_size=15, seed=1)
        pop = Population(config)
        pop.initialize_random()

        for gen in range(10):
            stats = pop.run_generation()
            print(f"Gen {gen}: best={stats.best_fitness}")

        save_evaluator(pop.get_best().network, 'data.json.gz')
    """

    def __init__(
        self,
        config: EvolutionConfig,
        rng: Optional[RandomSource] = None,
        fitness_function: Optional[Callable[[Individual, List[Individual]], float]] = None,
    ):
        """
        Initialize the population manager.

        Args:
            config: Evolution configuration.
            rng: Random source shared by every operator. Defaults to one
                 seeded with ``config.seed``.
            fitness_function: Optional custom fitness function taking the
                              individual and the whole population. If
                              None, self-play against random members.
        """
        self.config = config
        self.rng = rng or RandomSource(config.seed)
        self.fitness_function = fitness_function

        self.individuals: List[Individual] = []
        self.best: Optional[Individual] = None
        self.generation = 0
        self.stats_history: List[GenerationStats] = []

        self.builder = NetworkBuilder()
        self.selection = TruncationSelection()
        self.encoder = GomokuEncoder(board_size=config.board_size)

    @property
    def size(self) -> int:
        """Target population size after selection."""
        return self.config.population_size

    def _new_individual(
        self,
        network: 'ActivationNetwork',
        parent_ids: Optional[List[str]] = None,
        history: Optional[List[str]] = None,
    ) -> Individual:
        return Individual(
            network=network,
            generation=self.generation,
            parent_ids=parent_ids or [],
            mutation_history=history or [],
        )

    def _random_network(self, architecture: Dict[str, Any]) -> 'ActivationNetwork':
        return self.builder.from_json(architecture, rng=self.rng)

    def initialize_random(self) -> None:
        """Fill the population with randomly initialised networks."""
        architecture = self.config.architecture()
        self.individuals = [
            self._new_individual(self._random_network(architecture))
            for _ in range(self.size)
        ]
        self.best = None
        self.generation = 0

        logger.info(
            f"Initialized {self.size} random evaluators "
            f"({self.builder.get_parameter_count(self.individuals[0].network)} genes each)"
        )

    def initialize_from_network(self, network: 'ActivationNetwork') -> None:
        """
        Seed the population with an existing evaluator.

        The evaluator takes the first slot; the remaining slots get fresh
        random networks of the same topology.

        Args:
            network: Evaluator to resume training from.
        """
        architecture = network.architecture
        self.individuals = [self._new_individual(network, history=['loaded'])]
        while len(self.individuals) < self.size:
            self.individuals.append(self._new_individual(self._random_network(architecture)))
        self.best = None
        self.generation = 0

        logger.info(f"Initialized population of {self.size} from a saved evaluator")

    def crossover(self) -> int:
        """
        Recombine disjoint adjacent pairs of the first ``size`` members.

        For pairs (0, 1), (2, 3), ... each pair is crossed with probability
        ``crossover_rate``: both networks are cloned, their chromosomes are
        recombined, and both offspring are appended.

        Returns:
            Number of pairs crossed.
        """
        count = 0
        for i in range(1, self.size, 2):
            if self.rng.random() >= self.config.crossover_rate:
                continue

            parent_a = self.individuals[i - 1]
            parent_b = self.individuals[i]
            chromosome_a = DoubleArrayChromosome.from_network(parent_a.network, rng=self.rng)
            chromosome_b = DoubleArrayChromosome.from_network(parent_b.network, rng=self.rng)
            if not chromosome_a.crossover(chromosome_b):
                continue

            parent_ids = [parent_a.id, parent_b.id]
            for chromosome, parent in ((chromosome_a, parent_a), (chromosome_b, parent_b)):
                child = self.builder.clone_network(parent.network)
                chromosome.apply_to(child)
                self.individuals.append(
                    self._new_individual(child, parent_ids=parent_ids, history=['crossover'])
                )
            count += 1

        return count

    def mutate(self) -> int:
        """
        Mutate clones of the first ``size`` members.

        Each member is cloned and mutated with probability
        ``mutation_rate``; the mutant is appended.

        Returns:
            Number of mutants added.
        """
        count = 0
        for i in range(self.size):
            if self.rng.random() >= self.config.mutation_rate:
                continue

            parent = self.individuals[i]
            chromosome = DoubleArrayChromosome.from_network(parent.network, rng=self.rng)
            index = chromosome.mutate()

            child = self.builder.clone_network(parent.network)
            chromosome.apply_to(child)
            self.individuals.append(
                self._new_individual(child, parent_ids=[parent.id], history=[f'mutate:{index}'])
            )
            count += 1

        return count

    def evaluate_all(self) -> GenerationStats:
        """
        Evaluate fitness for every member, offspring included.

        Returns:
            Fitness statistics for the evaluated population.
        """
        evaluators = [NeuralEvaluator(ind.network, self.encoder) for ind in self.individuals]

        for i, ind in enumerate(self.individuals):
            if self.fitness_function:
                ind.fitness = self.fitness_function(ind, self.individuals)
            else:
                ind.fitness = self._self_play_fitness(i, evaluators)

        fitnesses = np.array([ind.fitness for ind in self.individuals], dtype=np.float64)
        return GenerationStats(
            generation=self.generation,
            best_fitness=float(fitnesses.max()),
            avg_fitness=float(fitnesses.mean()),
            min_fitness=float(fitnesses.min()),
            fitness_std=float(fitnesses.std()),
            evaluated_size=len(self.individuals),
        )

    def _self_play_fitness(self, index: int, evaluators: List[NeuralEvaluator]) -> float:
        """
        Sum of game results against uniformly drawn members.

        Even-numbered games are played as CROSS, odd ones as NOUGHT, and
        each result is counted from the member's point of view.
        """
        fitness = 0
        for game in range(self.config.games_per_evaluation):
            opponent = evaluators[self.rng.integers(len(evaluators))]
            if game % 2 == 0:
                fitness += play_game(
                    evaluators[index], opponent,
                    depth=self.config.search_depth,
                    draw_steps=self.config.draw_steps,
                    board_size=self.config.board_size,
                )
            else:
                fitness -= play_game(
                    opponent, evaluators[index],
                    depth=self.config.search_depth,
                    draw_steps=self.config.draw_steps,
                    board_size=self.config.board_size,
                )
        return float(fitness)

    def select(self) -> None:
        """Rank by fitness, truncate to ``size`` and record the best member."""
        self.individuals = self.selection.select(self.individuals, self.size)
        self.best = self.individuals[0] if self.individuals else None

    def shuffle(self) -> None:
        """Randomly reorder the population, changing crossover pairings."""
        self.rng.shuffle(self.individuals)

    def regenerate(self) -> GenerationStats:
        """
        Replace every member with a fresh random network.

        The topology of the current first member is kept. The new
        population is evaluated straight away.
        """
        architecture = (
            self.individuals[0].network.architecture
            if self.individuals else self.config.architecture()
        )
        self.individuals = [
            self._new_individual(self._random_network(architecture))
            for _ in range(self.size)
        ]
        logger.info(f"Regenerated population at generation {self.generation}")
        return self.evaluate_all()

    def run_generation(self) -> GenerationStats:
        """
        Run one full generation.

        Returns:
            Statistics of the evaluated (pre-selection) population.
        """
        if not self.individuals:
            raise RuntimeError("Population is empty; initialize it first")

        num_crossovers = self.crossover()
        num_mutations = self.mutate()

        stats = self.evaluate_all()
        stats.num_crossovers = num_crossovers
        stats.num_mutations = num_mutations

        self.select()
        if self.config.auto_shuffle:
            self.shuffle()

        self.stats_history.append(stats)
        self.generation += 1

        logger.info(
            f"Generation {stats.generation}: best={stats.best_fitness:.1f} "
            f"avg={stats.avg_fitness:.2f} crossovers={num_crossovers} "
            f"mutations={num_mutations} evaluated={stats.evaluated_size}"
        )
        return stats

    def evolve(
        self,
        generations: Optional[int] = None,
        progress_callback: Optional[Callable[[int, GenerationStats], None]] = None,
        checkpoint_manager: Optional['CheckpointManager'] = None,
    ) -> List[GenerationStats]:
        """
        Run the evolution loop.

        Args:
            generations: Number of generations (uses config if None).
            progress_callback: Called with (generation, stats) each gen.
            checkpoint_manager: If given, the best evaluator is saved
                                every ``checkpoint_interval`` generations.

        Returns:
            List of generation statistics.
        """
        if generations is None:
            generations = self.config.generations
        all_stats = []

        for gen in range(generations):
            stats = self.run_generation()
            all_stats.append(stats)

            if progress_callback:
                progress_callback(gen, stats)

            interval = self.config.checkpoint_interval
            if checkpoint_manager is not None and interval > 0 and (gen + 1) % interval == 0:
                checkpoint_manager.save(self.best.network, stats.generation)

        return all_stats

    def get_best(self) -> Individual:
        """Best member after the last selection, or the fittest member."""
        if self.best is not None:
            return self.best
        return max(self.individuals, key=lambda x: x.fitness)

    def get_top_n(self, n: int) -> List[Individual]:
        """Get the top n individuals by fitness."""
        return self.selection.rank(self.individuals)[:n]

    @property
    def best_fitness(self) -> float:
        return max(ind.fitness for ind in self.individuals) if self.individuals else 0.0

    @property
    def avg_fitness(self) -> float:
        if not self.individuals:
            return 0.0
        return sum(ind.fitness for ind in self.individuals) / len(self.individuals)
