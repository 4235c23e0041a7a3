"""
Neuro-evolution of evaluator networks.

Components:
- DoubleArrayChromosome: float genes with mutation and crossover
- Random value generators for the chromosome operators
- TruncationSelection: keep the fittest members
- Population: runs generations of crossover, mutation, self-play
  evaluation and selection
"""
from .generators import RandomGenerator, UniformGenerator, ExponentialGenerator, GaussianGenerator
from .chromosome import DoubleArrayChromosome, to_genes, from_genes
from .selection import Individual, TruncationSelection
from .population import EvolutionConfig, GenerationStats, Population

__all__ = [
    # Generators
    'RandomGenerator',
    'UniformGenerator',
    'ExponentialGenerator',
    'GaussianGenerator',

    # Chromosome
    'DoubleArrayChromosome',
    'to_genes',
    'from_genes',

    # Selection
    'Individual',
    'TruncationSelection',

    # Population
    'EvolutionConfig',
    'GenerationStats',
    'Population',
]
