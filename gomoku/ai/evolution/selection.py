"""
Selection for the evolutionary trainer.

The trainer uses truncation selection: after offspring have been added
and every member has a fitness, the population is ranked by fitness
and cut back to its target size.
"""
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass
class Individual:
    """Wrapper for an evolved evaluator with its fitness."""
    network: Any  # ActivationNetwork
    fitness: float = 0.0
    generation: int = 0
    parent_ids: Optional[List[str]] = None
    mutation_history: Optional[List[str]] = None
    id: str = ''

    def __post_init__(self):
        if self.parent_ids is None:
            self.parent_ids = []
        if self.mutation_history is None:
            self.mutation_history = []
        if not self.id:
            self.id = str(uuid.uuid4())[:8]


class TruncationSelection:
    """
    Keep only the top-ranked individuals.

    Ranking is a stable sort by descending fitness, so individuals with
    equal fitness keep their current relative order.

    Example:
        selection = TruncationSelection()
        survivors = selection.select(individuals, 15)
    """

    def rank(self, population: List[Individual]) -> List[Individual]:
        """Return the population sorted by descending fitness."""
        return sorted(population, key=lambda ind: ind.fitness, reverse=True)

    def select(
        self,
        population: List[Individual],
        num_to_select: int,
    ) -> List[Individual]:
        """
        Select the ``num_to_select`` fittest individuals.

        Args:
            population: Individuals with evaluated fitness.
            num_to_select: Target size.

        Returns:
            The fittest individuals, best first.
        """
        if not population:
            return []
        return self.rank(population)[:num_to_select]
