"""
Evolution Module
This module contains the evolution state and the engine that advances it
generation by generation.
"""

import numbers
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import EvolutionConfig
from .data_processing import Dataset, UNSCORED_FITNESS
from .exceptions import InvalidInput
from .expression_tree import ConstantNode, Expression
from .generator import ExpressionGenerator
from .genetic_ops import GeneticOperations
from .logging_system import log_debug, log_evolution_step, log_milestone, log_progress
from .population import Individual, Population, evaluate_population


def placeholder_individual() -> Individual:
    """Best-ever stand-in before any generation is scored: constant 0, unscored"""
    return Individual(Expression(ConstantNode(0.0)), fitness=UNSCORED_FITNESS)


@dataclass
class EvolutionState:
    """Everything one engine owns between calls to ``step``"""

    population: Population
    dataset: Dataset
    rng: np.random.Generator
    generation: int = 0
    best_ever: Individual = field(default_factory=placeholder_individual)
    generation_of_best: Optional[int] = None
    best_fitness_history: List[float] = field(default_factory=list)
    mean_fitness_history: List[float] = field(default_factory=list)


class EvolutionEngine:
    """
    Main evolution engine that drives the generational loop for one
    population: score, track the best-ever individual, breed the next
    generation.
    """

    def __init__(self, dataset: Dataset, config: EvolutionConfig):
        self.config = config
        rng = np.random.default_rng(config.seed)
        self.generator = ExpressionGenerator.from_config(config, rng)
        self.genetic_ops = GeneticOperations.from_config(config, self.generator, rng)

        population = Population.from_expressions(
            self.generator.generate_population(config.population_size))
        self.state = EvolutionState(population=population, dataset=dataset, rng=rng)

    def step(self, n: int = 1):
        """Advance ``n`` generations; ``step(0)`` does nothing"""
        if not isinstance(n, numbers.Integral) or isinstance(n, bool):
            raise InvalidInput(f"number of generations must be an integer, got {n!r}")
        if n < 0:
            raise InvalidInput(f"number of generations must be non-negative, got {n}")

        for i in range(int(n)):
            self.run_generation()
            if n > 1:
                log_progress(f"{i + 1}/{n} generations, best fitness {self.state.best_ever.fitness:.6g}")

    def run_generation(self):
        """Score the current population, update best-ever and replace the population"""
        state = self.state
        evaluate_population(state.population, state.dataset,
                            parsimony_coefficient=self.config.parsimony_coefficient,
                            n_jobs=self.config.n_jobs)

        fitness_scores = state.population.fitness_scores()
        best = state.population.best()

        # Strict improvement only: a tie keeps the older best-ever
        if best.fitness < state.best_ever.fitness:
            state.best_ever = best.clone()
            state.generation_of_best = state.generation
            log_debug(f"New best at generation {state.generation}: "
                      f"{best.expression.to_string()} (fitness={best.fitness:.6g})")
            if best.fitness == 0.0:
                log_milestone(f"Exact fit at generation {state.generation}: {best.expression.to_string()}")

        state.best_fitness_history.append(float(best.fitness))
        state.mean_fitness_history.append(float(np.mean(fitness_scores)))
        log_evolution_step(state.generation, best.fitness,
                           state.mean_fitness_history[-1], best.expression.size())

        state.population = self.genetic_ops.next_generation(state.population)
        state.generation += 1

    @property
    def best_ever(self) -> Individual:
        return self.state.best_ever

    @property
    def generation(self) -> int:
        return self.state.generation
