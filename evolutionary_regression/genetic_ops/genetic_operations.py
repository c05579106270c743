"""
Genetic Operations

Combines selection, crossover and mutation into the production of a whole
next generation: the elite is carried over unchanged, optional immigrants are
grown from scratch and the rest of the population is bred from
tournament-selected parents.
"""

import numpy as np

from ..expression_tree import Expression
from ..generator import ExpressionGenerator
from ..population import Individual, Population
from ..selection import tournament_selection
from .crossover_operations import CrossoverOperations
from .mutation_strategies import MutationStrategies


class GeneticOperations:
    """Breeding pipeline shared by one evolution engine"""

    def __init__(self, generator: ExpressionGenerator, rng: np.random.Generator,
                 max_depth: int = 6, tournament_size: int = 3, mutation_rate: float = 0.1,
                 subtree_mutation_probability: float = 0.5, mutation_max_depth: int = 3,
                 point_mutation_scale: float = 0.1, crossover_retries: int = 10,
                 simplify_offspring: bool = False, operand_swap_probability: float = 0.0,
                 immigrant_count: int = 0):
        self.rng = rng
        self.generator = generator
        self.immigrant_count = immigrant_count
        self.tournament_size = tournament_size
        self.mutation_rate = mutation_rate
        self.simplify_offspring = simplify_offspring
        self.crossover_ops = CrossoverOperations(rng, max_depth=max_depth, max_retries=crossover_retries)
        self.mutation_strategies = MutationStrategies(
            generator, rng,
            max_depth=max_depth,
            subtree_mutation_probability=subtree_mutation_probability,
            mutation_max_depth=mutation_max_depth,
            point_mutation_scale=point_mutation_scale,
            operand_swap_probability=operand_swap_probability,
        )

    @classmethod
    def from_config(cls, config, generator: ExpressionGenerator,
                    rng: np.random.Generator) -> 'GeneticOperations':
        return cls(
            generator, rng,
            max_depth=config.max_depth,
            tournament_size=config.tournament_size,
            mutation_rate=config.mutation_rate,
            subtree_mutation_probability=config.subtree_mutation_probability,
            mutation_max_depth=config.mutation_max_depth,
            point_mutation_scale=config.point_mutation_scale,
            crossover_retries=config.crossover_retries,
            simplify_offspring=config.simplify_offspring,
            operand_swap_probability=config.operand_swap_probability,
            immigrant_count=config.immigrant_count,
        )

    def crossover(self, parent1: Expression, parent2: Expression) -> Expression:
        return self.crossover_ops.subtree_crossover(parent1, parent2)

    def mutate(self, expression: Expression) -> Expression:
        return self.mutation_strategies.mutate(expression, self.mutation_rate)

    def produce_offspring(self, population: Population, fitness_scores: np.ndarray) -> Individual:
        """Select two parents by tournament, recombine them and mutate the child"""
        parent1 = tournament_selection(population, fitness_scores, self.tournament_size, self.rng)
        parent2 = tournament_selection(population, fitness_scores, self.tournament_size, self.rng)
        child = self.mutate(self.crossover(parent1.expression, parent2.expression))
        if self.simplify_offspring:
            child = child.simplify()
        return Individual(child)

    def next_generation(self, population: Population) -> Population:
        """
        Build the next population from a fully scored one.

        The single best individual is cloned unmutated (keeping its cached
        fitness) into the first slot, followed by ``immigrant_count`` freshly
        generated, unscored expressions. Offspring fill the remaining slots
        until the population is back to its original size.
        """
        fitness_scores = population.fitness_scores()
        elite = population[int(np.argmin(fitness_scores))].clone()

        offspring = [elite]
        immigrants = min(self.immigrant_count, len(population) - 1)
        offspring.extend(Individual(self.generator.generate()) for _ in range(immigrants))
        while len(offspring) < len(population):
            offspring.append(self.produce_offspring(population, fitness_scores))
        return Population(offspring)
