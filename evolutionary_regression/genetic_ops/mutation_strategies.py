"""
Mutation Strategies Module

Subtree mutation (replace a random subtree with a freshly grown one), point
mutation (Gaussian jitter of a constant) and operand swap (exchange the
operands of a non-commutative binary node). All return new expressions and
leave their input untouched.
"""

import numpy as np

from ..expression_tree import Expression, BinaryOpNode, ConstantNode
from ..expression_tree.utils.tree_utils import get_nodes_with_levels, get_subtree, replace_subtree
from ..generator import ExpressionGenerator

# Lower bound of the magnitude used to scale constant jitter, so that zero
# constants can still move
MIN_JITTER_MAGNITUDE = 1e-4

# Binary operators whose result changes when the operands are exchanged
NON_COMMUTATIVE_OPERATORS = frozenset(['-', '/', '^', 'logb'])


class MutationStrategies:
    """Collection of mutation strategies for genetic programming"""

    def __init__(self, generator: ExpressionGenerator, rng: np.random.Generator,
                 max_depth: int = 6, subtree_mutation_probability: float = 0.5,
                 mutation_max_depth: int = 3, point_mutation_scale: float = 0.1,
                 operand_swap_probability: float = 0.0):
        self.generator = generator
        self.rng = rng
        self.max_depth = max_depth
        self.subtree_mutation_probability = subtree_mutation_probability
        self.mutation_max_depth = mutation_max_depth
        self.point_mutation_scale = point_mutation_scale
        self.operand_swap_probability = operand_swap_probability

    def mutate(self, expression: Expression, rate: float) -> Expression:
        """
        With probability ``rate`` apply exactly one mutation: an operand swap
        with probability ``operand_swap_probability``, otherwise subtree or
        point mutation, split by ``subtree_mutation_probability``.

        When no mutation happens the input expression is returned as is;
        expressions are never edited in place, so sharing it is safe.
        """
        if self.rng.random() >= rate:
            return expression

        # No draw when swapping is disabled, so such runs keep their trajectory
        if self.operand_swap_probability > 0 and self.rng.random() < self.operand_swap_probability:
            return self.operand_swap_mutation(expression)
        if self.rng.random() < self.subtree_mutation_probability:
            return self.subtree_mutation(expression)
        return self.point_mutation(expression)

    def subtree_mutation(self, expression: Expression) -> Expression:
        """Replace a uniformly chosen node's subtree with a random subtree"""
        nodes = get_nodes_with_levels(expression.root)
        index = int(self.rng.integers(len(nodes)))
        _, level = nodes[index]

        # The new subtree starts on ``level``; keep the whole tree within max_depth
        depth_budget = max(1, min(self.mutation_max_depth, self.max_depth - level + 1))
        replacement = self.generator.generate_random_expression(depth_budget)
        return Expression(replace_subtree(expression.root, index, replacement))

    def point_mutation(self, expression: Expression) -> Expression:
        """Jitter a uniformly chosen node if it is a constant.

        The Gaussian noise is relative to the constant's magnitude, so small
        constants are refined finely and large ones move proportionally.
        """
        nodes = get_nodes_with_levels(expression.root)
        index = int(self.rng.integers(len(nodes)))
        node, _ = nodes[index]

        if not isinstance(node, ConstantNode):
            return expression.copy()

        sigma = self.point_mutation_scale * max(abs(node.value), MIN_JITTER_MAGNITUDE)
        jittered = ConstantNode(node.value + float(self.rng.normal(0.0, sigma)))
        return Expression(replace_subtree(expression.root, index, jittered))

    def operand_swap_mutation(self, expression: Expression) -> Expression:
        """Exchange the operands of a uniformly chosen non-commutative binary node.

        Depth is unchanged. Trees without such a node come back as a copy.
        """
        candidates = [index for index, (node, _) in enumerate(get_nodes_with_levels(expression.root))
                      if isinstance(node, BinaryOpNode) and node.operator in NON_COMMUTATIVE_OPERATORS]
        if not candidates:
            return expression.copy()

        index = candidates[int(self.rng.integers(len(candidates)))]
        node = get_subtree(expression.root, index)
        swapped = BinaryOpNode(node.operator, node.right.copy(), node.left.copy())
        return Expression(replace_subtree(expression.root, index, swapped))
