"""
Command line interface.

Usage:
    gomoku train [--population 15] [--generations 10] [--output data.json.gz]
    gomoku match data.json.gz [--opponent heuristic] [--games 10]

``train`` evolves an evaluator and saves the best one. ``match`` plays
a saved evaluator against a heuristic, random or other saved player.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gomoku import settings
from gomoku.ai.networks.activations import ACTIVATIONS

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised by a command to report a user-facing failure."""
    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gomoku',
        description='Gomoku search engine and neuro-evolutionary trainer',
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    train = subparsers.add_parser('train', parents=[common], help='Evolve an evaluator network')
    train.add_argument(
        '--population',
        type=int,
        default=settings.POPULATION,
        help=f'Population size (default: {settings.POPULATION})',
    )
    train.add_argument(
        '--generations',
        type=int,
        default=settings.EPOCH,
        help=f'Number of generations (default: {settings.EPOCH})',
    )
    train.add_argument(
        '--crossover-rate',
        type=float,
        default=settings.CROSSOVER_RATE,
        help=f'Crossover probability per pair (default: {settings.CROSSOVER_RATE})',
    )
    train.add_argument(
        '--mutation-rate',
        type=float,
        default=settings.MUTATION_RATE,
        help=f'Mutation probability per member (default: {settings.MUTATION_RATE})',
    )
    train.add_argument(
        '--matches',
        type=int,
        default=settings.GAME_MATCHES,
        help=f'Games per fitness evaluation (default: {settings.GAME_MATCHES})',
    )
    train.add_argument(
        '--depth',
        type=int,
        default=settings.SEARCH_DEPTH,
        help=f'Search depth (default: {settings.SEARCH_DEPTH})',
    )
    train.add_argument(
        '--draw-steps',
        type=int,
        default=settings.DRAW_STEPS,
        help=f'Moves before a game is a draw (default: {settings.DRAW_STEPS})',
    )
    train.add_argument(
        '--hidden',
        type=int,
        nargs='+',
        default=list(settings.NETWORK_STRUCT),
        help='Neurons per layer, output layer last (default: 64 1)',
    )
    train.add_argument(
        '--activation',
        choices=sorted(ACTIVATIONS),
        default=settings.ACTIVATION,
        help=f'Activation function (default: {settings.ACTIVATION})',
    )
    train.add_argument(
        '--activation-param',
        type=float,
        default=None,
        help='Gradient or alpha of the activation function',
    )
    train.add_argument(
        '--shuffle',
        action='store_true',
        help='Shuffle the population after every selection',
    )
    train.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed',
    )
    train.add_argument(
        '--resume',
        type=str,
        default=None,
        help='Saved evaluator to seed the population with',
    )
    train.add_argument(
        '--output',
        type=str,
        default=settings.DATA_FILENAME,
        help=f'Where to save the best evaluator (default: {settings.DATA_FILENAME})',
    )
    train.add_argument(
        '--checkpoint-dir',
        type=str,
        default=None,
        help='Save the best evaluator of every generation here',
    )
    train.add_argument(
        '--log-dir',
        type=str,
        default=None,
        help='Write per-generation metrics as JSON lines here',
    )

    match = subparsers.add_parser('match', parents=[common], help='Play a saved evaluator against an opponent')
    match.add_argument('evaluator', type=str, help='Saved evaluator file')
    match.add_argument(
        '--opponent',
        type=str,
        default='heuristic',
        help="'heuristic', 'random' or a path to another saved evaluator",
    )
    match.add_argument(
        '--games',
        type=int,
        default=10,
        help='Number of games, colours alternate (default: 10)',
    )
    match.add_argument(
        '--depth',
        type=int,
        default=settings.SEARCH_DEPTH,
        help=f'Search depth (default: {settings.SEARCH_DEPTH})',
    )
    match.add_argument(
        '--draw-steps',
        type=int,
        default=settings.DRAW_STEPS,
        help=f'Moves before a game is a draw (default: {settings.DRAW_STEPS})',
    )

    return parser


def handle_train(options: argparse.Namespace) -> None:
    from gomoku.ai.evolution import EvolutionConfig
    from gomoku.ai.training import EvaluatorFormatError, EvolutionTrainer

    if options.population < 2:
        raise CommandError("Population size must be at least 2")
    if options.depth < 1:
        raise CommandError("Search depth must be at least 1")
    if options.hidden[-1] != 1:
        raise CommandError("The last layer must have exactly one neuron")

    config = EvolutionConfig(
        population_size=options.population,
        crossover_rate=options.crossover_rate,
        mutation_rate=options.mutation_rate,
        generations=options.generations,
        auto_shuffle=options.shuffle,
        games_per_evaluation=options.matches,
        search_depth=options.depth,
        draw_steps=options.draw_steps,
        neurons_count=options.hidden,
        activation=options.activation,
        activation_param=options.activation_param,
        seed=options.seed,
        checkpoint_dir=options.checkpoint_dir or '',
        checkpoint_interval=1 if options.checkpoint_dir else 0,
    )
    logger.debug(f"Training with {config}")
    trainer = EvolutionTrainer(config, output_path=options.output, log_dir=options.log_dir)

    def progress(gen: int, stats) -> None:
        print(
            f"Generation {stats.generation}: best={stats.best_fitness:.0f} "
            f"avg={stats.avg_fitness:.2f} evaluated={stats.evaluated_size}"
        )

    try:
        result = trainer.train(resume_from=options.resume, progress_callback=progress)
    except FileNotFoundError as e:
        raise CommandError(f"Evaluator file not found: {e.filename}")
    except EvaluatorFormatError as e:
        raise CommandError(f"Cannot resume: {e}")

    print(
        f"\nTraining completed!"
        f"\n  Generations: {result.generations}"
        f"\n  Best fitness: {result.best_fitness:.0f} (generation {result.best_generation})"
        f"\n  Time: {result.training_time_seconds:.1f}s"
        f"\n  Evaluator saved to: {result.output_path}"
    )


def handle_match(options: argparse.Namespace) -> None:
    from gomoku.ai.matches import run_benchmark
    from gomoku.ai.players import HeuristicPlayer, NeuralPlayer, RandomPlayer
    from gomoku.ai.training import EvaluatorFormatError

    try:
        player = NeuralPlayer.from_file('evaluator', options.evaluator, depth=options.depth)
        if options.opponent == 'heuristic':
            opponent = HeuristicPlayer('heuristic', depth=options.depth)
        elif options.opponent == 'random':
            opponent = RandomPlayer('random')
        else:
            opponent = NeuralPlayer.from_file('opponent', options.opponent, depth=options.depth)
    except FileNotFoundError as e:
        raise CommandError(f"Evaluator file not found: {e.filename}")
    except EvaluatorFormatError as e:
        raise CommandError(str(e))

    stats = run_benchmark(
        player,
        num_games=options.games,
        opponent=opponent,
        max_moves_per_game=options.draw_steps,
    )

    print(
        f"{Path(options.evaluator).name} vs {opponent}"
        f"\n  Wins: {stats['wins']}"
        f"\n  Losses: {stats['losses']}"
        f"\n  Draws: {stats['draws']}"
        f"\n  Score: {stats['score']:.2%}"
    )


COMMANDS = {
    'train': handle_train,
    'match': handle_match,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    options = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        COMMANDS[options.command](options)
    except CommandError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
