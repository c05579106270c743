import numpy as np
import pytest

from evolutionary_regression.data_processing import Dataset
from evolutionary_regression.expression_tree import (
    Expression, BinaryOpNode, ConstantNode, UnaryOpNode, VariableNode,
)
from evolutionary_regression.generator import ExpressionGenerator
from evolutionary_regression.genetic_ops import (
    CrossoverOperations, GeneticOperations, MutationStrategies,
)
from evolutionary_regression.population import Individual, Population, evaluate_population
from evolutionary_regression.selection import tournament_index, tournament_selection


@pytest.fixture
def rng():
    return np.random.default_rng(123)


@pytest.fixture
def generator(rng):
    return ExpressionGenerator(rng, max_depth=6)


@pytest.mark.parametrize("max_depth", [2, 4, 6])
def test_crossover_never_exceeds_max_depth(rng, max_depth):
    generator = ExpressionGenerator(rng, max_depth=max_depth)
    crossover = CrossoverOperations(rng, max_depth=max_depth)
    parents = generator.generate_population(60)
    for i in range(300):
        parent1 = parents[i % 60]
        parent2 = parents[(i * 7 + 3) % 60]
        assert crossover.subtree_crossover(parent1, parent2).depth() <= max_depth


def test_crossover_leaves_parents_untouched(rng, generator):
    crossover = CrossoverOperations(rng, max_depth=6)
    parents = generator.generate_population(20)
    before = [p.render() for p in parents]
    for i in range(100):
        crossover.subtree_crossover(parents[i % 20], parents[(i + 1) % 20])
    assert [p.render() for p in parents] == before


def test_crossover_of_leaves_stays_a_leaf(rng):
    crossover = CrossoverOperations(rng, max_depth=1, max_retries=3)
    parent1 = Expression(VariableNode())
    parent2 = Expression(ConstantNode(2.0))
    # any leaf-for-leaf swap fits; the child is always a single leaf
    assert crossover.subtree_crossover(parent1, parent2).size() == 1


@pytest.mark.parametrize("max_depth", [2, 3, 6])
def test_mutation_never_exceeds_max_depth(rng, max_depth):
    generator = ExpressionGenerator(rng, max_depth=max_depth)
    mutation = MutationStrategies(generator, rng, max_depth=max_depth, mutation_max_depth=3)
    for expr in generator.generate_population(300):
        assert mutation.mutate(expr, rate=1.0).depth() <= max_depth


def test_point_mutation_jitters_constants(rng, generator):
    mutation = MutationStrategies(generator, rng, subtree_mutation_probability=0.0)
    expr = Expression(ConstantNode(2.0))
    mutated = mutation.mutate(expr, rate=1.0)
    assert isinstance(mutated.root, ConstantNode)
    assert mutated.root.value != 2.0
    assert expr.root.value == 2.0


def test_point_mutation_on_non_constant_returns_copy(rng, generator):
    mutation = MutationStrategies(generator, rng, subtree_mutation_probability=0.0)
    expr = Expression(VariableNode())
    mutated = mutation.point_mutation(expr)
    assert mutated == expr
    assert mutated is not expr


def test_zero_rate_never_mutates(rng, generator):
    mutation = MutationStrategies(generator, rng)
    for expr in generator.generate_population(50):
        assert mutation.mutate(expr, rate=0.0) is expr


def test_tournament_picks_lowest_fitness(rng):
    scores = np.array([5.0, 3.0, 0.5, 9.0, 2.0])
    # a large tournament samples every index with overwhelming probability
    assert tournament_index(scores, 1000, rng) == 2

    population = [Individual(Expression(ConstantNode(float(s))), fitness=s) for s in scores]
    winner = tournament_selection(population, scores, 1000, rng)
    assert winner.fitness == 0.5


def test_tournament_of_one_is_uniform(rng):
    scores = np.arange(4, dtype=np.float64)
    picks = {tournament_index(scores, 1, rng) for _ in range(400)}
    assert picks == {0, 1, 2, 3}


def test_next_generation_keeps_elite_and_size(rng, generator):
    xs = np.linspace(-3, 3, 13)
    dataset = Dataset(xs, xs ** 2)
    population = Population.from_expressions(generator.generate_population(40))
    evaluate_population(population, dataset)
    best = population.best()

    ops = GeneticOperations(generator, rng, max_depth=6, mutation_rate=0.5)
    offspring = ops.next_generation(population)

    assert len(offspring) == len(population)
    assert offspring[0].fitness == best.fitness
    assert offspring[0].expression == best.expression
    assert offspring[0].expression is not best.expression
    assert all(ind.expression.depth() <= 6 for ind in offspring)
    assert not any(ind.is_evaluated for ind in list(offspring)[1:])


def test_operand_swap_reverses_non_commutative_node(rng, generator):
    mutation = MutationStrategies(generator, rng, operand_swap_probability=1.0)
    expr = Expression(BinaryOpNode('-', VariableNode(), ConstantNode(2.0)))
    mutated = mutation.mutate(expr, rate=1.0)
    assert mutated.render() == "(2.0 - x)"
    assert expr.render() == "(x - 2.0)"


def test_operand_swap_only_touches_non_commutative_nodes(rng, generator):
    mutation = MutationStrategies(generator, rng)
    expr = Expression(BinaryOpNode(
        '*', UnaryOpNode('sin', VariableNode()),
        BinaryOpNode('/', ConstantNode(3.0), VariableNode()),
    ))
    swapped = mutation.operand_swap_mutation(expr)
    assert swapped.render() == "(sin(x) * (x / 3.0))"
    assert swapped.depth() == expr.depth()


def test_operand_swap_without_candidates_returns_copy(rng, generator):
    mutation = MutationStrategies(generator, rng)
    expr = Expression(BinaryOpNode('+', VariableNode(), ConstantNode(1.0)))
    swapped = mutation.operand_swap_mutation(expr)
    assert swapped == expr
    assert swapped is not expr


def test_next_generation_inserts_unscored_immigrants(rng, generator):
    xs = np.linspace(-3, 3, 13)
    dataset = Dataset(xs, xs ** 2)
    population = Population.from_expressions(generator.generate_population(20))
    evaluate_population(population, dataset)

    ops = GeneticOperations(generator, rng, max_depth=6, immigrant_count=4)
    offspring = ops.next_generation(population)

    assert len(offspring) == 20
    assert offspring[0].is_evaluated
    assert not any(ind.is_evaluated for ind in list(offspring)[1:])
    assert all(ind.expression.depth() <= 6 for ind in offspring)


def test_immigrants_never_displace_the_elite(rng, generator):
    xs = np.linspace(-3, 3, 13)
    dataset = Dataset(xs, xs ** 2)
    population = Population.from_expressions(generator.generate_population(5))
    evaluate_population(population, dataset)
    best = population.best()

    ops = GeneticOperations(generator, rng, max_depth=6, immigrant_count=10)
    offspring = ops.next_generation(population)

    assert len(offspring) == 5
    assert offspring[0].expression == best.expression
