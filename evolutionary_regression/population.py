# population.py: individuals, the population container and parallel scoring
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .data_processing import Dataset, mse_fitness
from .expression_tree import Expression


class Individual:
    """One candidate expression plus its lazily computed fitness.

    The expression is never modified after construction, so once the
    fitness cache is filled it stays valid for the individual's lifetime.
    """

    __slots__ = ('expression', '_fitness')

    def __init__(self, expression: Expression, fitness: Optional[float] = None):
        self.expression = expression
        self._fitness = fitness

    @property
    def fitness(self) -> Optional[float]:
        """Cached fitness, None until evaluated"""
        return self._fitness

    @property
    def is_evaluated(self) -> bool:
        return self._fitness is not None

    def evaluate(self, dataset: Dataset, parsimony_coefficient: float = 0.0) -> float:
        """Compute (once) and return the fitness against ``dataset``"""
        if self._fitness is None:
            self._fitness = mse_fitness(self.expression, dataset, parsimony_coefficient)
        return self._fitness

    def clone(self) -> 'Individual':
        """Standalone copy with its own tree and the same cached fitness"""
        return Individual(self.expression.copy(), self._fitness)

    def __repr__(self) -> str:
        return f"Individual({self.expression.to_string()!r}, fitness={self._fitness!r})"


class Population:
    """Ordered collection of the individuals of one generation"""

    __slots__ = ('individuals',)

    def __init__(self, individuals: Sequence[Individual]):
        self.individuals: List[Individual] = list(individuals)

    @classmethod
    def from_expressions(cls, expressions: Sequence[Expression]) -> 'Population':
        return cls([Individual(expr) for expr in expressions])

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def fitness_scores(self) -> np.ndarray:
        """Fitness of every individual, in population order (all must be evaluated)"""
        return np.array([ind.fitness for ind in self.individuals], dtype=np.float64)

    def best(self) -> Individual:
        """Lowest-fitness individual; ties resolve to the earliest one"""
        return self.individuals[int(np.argmin(self.fitness_scores()))]

    def sizes(self) -> List[int]:
        return [ind.expression.size() for ind in self.individuals]


def evaluate_population(population: Population, dataset: Dataset,
                        parsimony_coefficient: float = 0.0, n_jobs: int = 1) -> int:
    """
    Fill the fitness cache of every unevaluated individual.

    Each score depends only on its own tree and the shared read-only
    dataset, so the work is mapped over a thread pool when ``n_jobs > 1``.
    Results are written back in population order once all are gathered.

    Returns:
        Number of individuals that were scored
    """
    pending = [ind for ind in population if not ind.is_evaluated]
    if not pending:
        return 0

    def score(individual: Individual) -> float:
        return mse_fitness(individual.expression, dataset, parsimony_coefficient)

    if n_jobs > 1 and len(pending) > 1:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            scores = list(executor.map(score, pending))
    else:
        scores = [score(ind) for ind in pending]

    for individual, fitness in zip(pending, scores):
        individual._fitness = fitness
    return len(pending)
