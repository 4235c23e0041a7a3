"""
Tests for the evolutionary trainer.

Tests selection and the Population for:
- Initialization
- Population growth from crossover and mutation
- Self-play fitness evaluation
- Truncation selection and best tracking
- Whole generations and the evolve loop
"""
import pytest
import numpy as np

from gomoku.ai.evolution import (
    Individual,
    Population,
    TruncationSelection,
)
from gomoku.ai.networks import NetworkBuilder
from .factories import EvolutionConfigFactory, IndividualFactory


def constant_fitness(values):
    """Fitness function returning preset values by position."""
    lookup = {}

    def fitness(ind, population):
        if ind.id not in lookup:
            lookup[ind.id] = values[len(lookup) % len(values)]
        return lookup[ind.id]

    return fitness


class TestTruncationSelection:
    """Tests for TruncationSelection."""

    def test_keeps_fittest(self):
        individuals = [IndividualFactory(fitness=f) for f in [1, 5, -2, 3]]

        survivors = TruncationSelection().select(individuals, 2)

        assert [ind.fitness for ind in survivors] == [5, 3]

    def test_stable_for_equal_fitness(self):
        individuals = [IndividualFactory(fitness=0) for _ in range(4)]

        ranked = TruncationSelection().rank(individuals)

        assert [ind.id for ind in ranked] == [ind.id for ind in individuals]

    def test_empty_population(self):
        assert TruncationSelection().select([], 3) == []

    def test_individual_gets_id(self):
        ind = Individual(network=None)

        assert len(ind.id) == 8
        assert ind.parent_ids == []
        assert ind.mutation_history == []


class TestPopulationInitialization:
    """Tests for filling a population."""

    def test_initialize_random(self):
        config = EvolutionConfigFactory(population_size=5)
        pop = Population(config)

        pop.initialize_random()

        assert len(pop.individuals) == 5
        assert pop.generation == 0
        assert all(ind.network.neurons_count == [2, 1] for ind in pop.individuals)

    def test_members_differ(self):
        pop = Population(EvolutionConfigFactory())
        pop.initialize_random()
        builder = NetworkBuilder()

        first = builder.flatten_weights(pop.individuals[0].network)
        second = builder.flatten_weights(pop.individuals[1].network)

        assert not np.array_equal(first, second)

    def test_initialize_from_network(self, tiny_network):
        pop = Population(EvolutionConfigFactory(population_size=3))

        pop.initialize_from_network(tiny_network)

        assert len(pop.individuals) == 3
        assert pop.individuals[0].network is tiny_network
        assert all(
            ind.network.architecture == tiny_network.architecture
            for ind in pop.individuals
        )

    def test_same_seed_same_population(self):
        builder = NetworkBuilder()
        a = Population(EvolutionConfigFactory(seed=11))
        b = Population(EvolutionConfigFactory(seed=11))
        a.initialize_random()
        b.initialize_random()

        for x, y in zip(a.individuals, b.individuals):
            assert np.array_equal(builder.flatten_weights(x.network), builder.flatten_weights(y.network))


class TestPopulationOperators:
    """Tests for crossover, mutation and selection steps."""

    @pytest.fixture
    def population(self):
        pop = Population(EvolutionConfigFactory(crossover_rate=1.0, mutation_rate=1.0))
        pop.initialize_random()
        return pop

    def test_crossover_appends_two_offspring_per_pair(self, population):
        originals = list(population.individuals)

        crossed = population.crossover()

        assert crossed == 2
        assert len(population.individuals) == 8
        assert population.individuals[:4] == originals
        offspring = population.individuals[4:]
        assert offspring[0].parent_ids == [originals[0].id, originals[1].id]
        assert offspring[2].parent_ids == [originals[2].id, originals[3].id]

    def test_crossover_leaves_parents_untouched(self, population):
        builder = NetworkBuilder()
        before = [builder.flatten_weights(ind.network) for ind in population.individuals]

        population.crossover()

        for genes, ind in zip(before, population.individuals[:4]):
            assert np.array_equal(genes, builder.flatten_weights(ind.network))

    def test_crossover_offspring_conserve_genes(self, population):
        """Each pair of offspring holds the same gene totals as its parents."""
        builder = NetworkBuilder()
        population.crossover()
        ind = population.individuals
        parents = builder.flatten_weights(ind[0].network) + builder.flatten_weights(ind[1].network)
        children = builder.flatten_weights(ind[4].network) + builder.flatten_weights(ind[5].network)

        assert np.allclose(parents, children)

    def test_crossover_rate_zero(self):
        pop = Population(EvolutionConfigFactory(crossover_rate=0.0))
        pop.initialize_random()

        assert pop.crossover() == 0
        assert len(pop.individuals) == 4

    def test_odd_population_leaves_last_unpaired(self):
        pop = Population(EvolutionConfigFactory(population_size=5, crossover_rate=1.0))
        pop.initialize_random()

        assert pop.crossover() == 2
        assert len(pop.individuals) == 9

    def test_mutate_appends_one_mutant_per_member(self, population):
        builder = NetworkBuilder()

        mutated = population.mutate()

        assert mutated == 4
        assert len(population.individuals) == 8
        for parent, child in zip(population.individuals[:4], population.individuals[4:]):
            diff = builder.flatten_weights(parent.network) != builder.flatten_weights(child.network)
            assert diff.sum() <= 1
            assert child.parent_ids == [parent.id]

    def test_mutation_rate_zero(self):
        pop = Population(EvolutionConfigFactory(mutation_rate=0.0))
        pop.initialize_random()

        assert pop.mutate() == 0

    def test_select_truncates_and_records_best(self, population):
        population.crossover()
        population.fitness_function = constant_fitness([0, 3, -1, 2, 5, 1, 0, 4])

        stats = population.evaluate_all()
        population.select()

        assert stats.evaluated_size == 8
        assert stats.best_fitness == 5
        assert stats.min_fitness == -1
        assert len(population.individuals) == 4
        assert [ind.fitness for ind in population.individuals] == [5, 4, 3, 2]
        assert population.best is population.individuals[0]
        assert population.get_best().fitness == 5

    def test_shuffle_keeps_members(self, population):
        ids = sorted(ind.id for ind in population.individuals)

        population.shuffle()

        assert sorted(ind.id for ind in population.individuals) == ids

    def test_regenerate_replaces_members(self, population):
        population.fitness_function = constant_fitness([1])
        old_ids = {ind.id for ind in population.individuals}

        stats = population.regenerate()

        assert len(population.individuals) == 4
        assert not old_ids & {ind.id for ind in population.individuals}
        assert stats.avg_fitness == 1

    def test_top_n_and_averages(self, population):
        population.fitness_function = constant_fitness([1, 2, 3, 4])
        population.evaluate_all()

        assert [ind.fitness for ind in population.get_top_n(2)] == [4, 3]
        assert population.best_fitness == 4
        assert population.avg_fitness == 2.5


class TestSelfPlayFitness:
    """Tests for fitness from self-play games."""

    def test_fitness_bounded_by_games(self):
        config = EvolutionConfigFactory(games_per_evaluation=2, draw_steps=8)
        pop = Population(config)
        pop.initialize_random()

        stats = pop.evaluate_all()

        for ind in pop.individuals:
            assert -2 <= ind.fitness <= 2
            assert ind.fitness == int(ind.fitness)
        assert stats.evaluated_size == 4


class TestGeneration:
    """Tests for full generations."""

    def test_one_generation_grows_then_truncates(self):
        """Size 4, crossover 1.0, mutation 0.0: 8 evaluated, 4 kept."""
        config = EvolutionConfigFactory(
            population_size=4,
            crossover_rate=1.0,
            mutation_rate=0.0,
        )
        pop = Population(config)
        pop.initialize_random()

        stats = pop.run_generation()

        assert stats.num_crossovers == 2
        assert stats.num_mutations == 0
        assert stats.evaluated_size == 8
        assert len(pop.individuals) == 4
        assert pop.best is not None
        assert pop.generation == 1

    def test_run_generation_requires_members(self):
        pop = Population(EvolutionConfigFactory())

        with pytest.raises(RuntimeError):
            pop.run_generation()

    def test_evolve_reports_progress(self):
        pop = Population(EvolutionConfigFactory(auto_shuffle=True))
        pop.fitness_function = constant_fitness([0, 1, 2])
        pop.initialize_random()
        seen = []

        history = pop.evolve(generations=3, progress_callback=lambda gen, stats: seen.append(gen))

        assert seen == [0, 1, 2]
        assert [s.generation for s in history] == [0, 1, 2]
        assert len(pop.stats_history) == 3
        assert len(pop.individuals) == 4
