"""
Main training orchestration module.

Ties the evolutionary population, checkpoint management and metric
logging into one workflow:

    Initialize -> run generations -> Finalize (save the best evaluator)
"""
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from gomoku import settings
from ..evolution import EvolutionConfig, GenerationStats, Population
from ..rng import RandomSource
from .checkpoints import CheckpointManager, TrainingLogger, load_evaluator, save_evaluator

logger = logging.getLogger(__name__)


@dataclass
class TrainingResult:
    """Results from a training run."""
    generations: int = 0
    best_fitness: float = 0.0
    best_generation: int = 0
    training_time_seconds: float = 0.0
    output_path: Optional[str] = None
    history: List[Dict[str, Any]] = field(default_factory=list)


class EvolutionTrainer:
    """
    High-level interface for evolving an evaluator.

    Example:
        config = EvolutionConfig(population_size=15, generations=10)
        trainer = EvolutionTrainer(config, output_path='data.json.gz')
        result = trainer.train()

        print(f"Best fitness: {result.best_fitness}")
    """

    def __init__(
        self,
        config: EvolutionConfig,
        output_path: Union[str, Path] = settings.DATA_FILENAME,
        log_dir: Optional[Union[str, Path]] = None,
        experiment_name: str = 'evolution',
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize the trainer.

        Args:
            config: Evolution configuration.
            output_path: Where the best evaluator is written at the end.
            log_dir: Directory for the JSONL metric log (None disables it).
            experiment_name: Name of the metric log file.
            rng: Shared random source; defaults to one seeded from config.
        """
        self.config = config
        self.output_path = Path(output_path)
        self.population = Population(config, rng=rng)

        self.checkpoint_manager = None
        if config.checkpoint_interval > 0 and config.checkpoint_dir:
            self.checkpoint_manager = CheckpointManager(config.checkpoint_dir)

        self.metrics = None
        if log_dir is not None:
            self.metrics = TrainingLogger(log_dir, experiment_name)

    def train(
        self,
        resume_from: Optional[Union[str, Path]] = None,
        progress_callback: Optional[Callable[[int, GenerationStats], None]] = None,
    ) -> TrainingResult:
        """
        Run the full training loop and save the best evaluator.

        Args:
            resume_from: Saved evaluator to seed the population with.
            progress_callback: Called with (generation, stats) each generation.

        Returns:
            Training results.
        """
        if resume_from:
            self.population.initialize_from_network(load_evaluator(resume_from))
        else:
            self.population.initialize_random()

        result = TrainingResult()
        start_time = time.time()

        def on_generation(gen: int, stats: GenerationStats) -> None:
            if self.metrics is not None:
                self.metrics.log(step=stats.generation, metrics={
                    'best_fitness': stats.best_fitness,
                    'avg_fitness': stats.avg_fitness,
                    'min_fitness': stats.min_fitness,
                    'fitness_std': stats.fitness_std,
                })

            if gen == 0 or stats.best_fitness > result.best_fitness:
                result.best_fitness = stats.best_fitness
                result.best_generation = stats.generation

            result.history.append({
                'generation': stats.generation,
                'best_fitness': stats.best_fitness,
                'avg_fitness': stats.avg_fitness,
            })

            if progress_callback:
                progress_callback(gen, stats)

        all_stats = self.population.evolve(
            generations=self.config.generations,
            progress_callback=on_generation,
            checkpoint_manager=self.checkpoint_manager,
        )

        result.generations = len(all_stats)
        result.training_time_seconds = time.time() - start_time
        result.output_path = str(self.finalize())

        logger.info(
            f"Training finished: {result.generations} generations in "
            f"{result.training_time_seconds:.1f}s, best fitness {result.best_fitness}"
        )
        return result

    def finalize(self) -> Path:
        """Save the best evaluator to the output path."""
        return save_evaluator(self.population.get_best().network, self.output_path)


def quick_train(
    generations: int = 2,
    population_size: int = 4,
    output_path: Union[str, Path] = settings.DATA_FILENAME,
    verbose: bool = True,
    **config_overrides: Any,
) -> TrainingResult:
    """
    Short training run with a small population, for experimentation.

    Extra keyword arguments override fields of EvolutionConfig, e.g.
    ``quick_train(neurons_count=[8, 1], search_depth=1)``.
    """
    config = EvolutionConfig(
        population_size=population_size,
        generations=generations,
        checkpoint_interval=0,
        **config_overrides,
    )
    trainer = EvolutionTrainer(config, output_path=output_path)

    def progress(gen: int, stats: GenerationStats) -> None:
        if verbose:
            print(f"Generation {gen}: best={stats.best_fitness} avg={stats.avg_fitness:.2f}")

    return trainer.train(progress_callback=progress)
