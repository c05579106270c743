import numpy as np
from typing import List, Optional, Tuple
from .expression_tree import Expression, Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode
from .expression_tree.core.operators import binary_symbols_for, unary_symbols_for, DEFAULT_OPERATOR_SET


class ExpressionGenerator:
  """Random expression generator with depth control.

  Every draw goes through the ``rng`` handed in by the owner, so two
  generators built from equally seeded generators grow identical trees.
  """

  def __init__(self, rng: np.random.Generator, max_depth: int = 6,
               operator_set=DEFAULT_OPERATOR_SET,
               constant_range: Tuple[float, float] = (-5.0, 5.0),
               variable_probability: float = 0.5,
               terminal_probability: float = 0.3):
    self.rng = rng
    self.max_depth = max_depth
    self.constant_range = constant_range
    self.variable_probability = variable_probability
    self.terminal_probability = terminal_probability
    self.binary_ops = binary_symbols_for(operator_set)
    self.unary_ops = unary_symbols_for(operator_set)
    # Operators are drawn uniformly from the combined set
    self.operators = [('binary', op) for op in self.binary_ops] + [('unary', op) for op in self.unary_ops]

  @classmethod
  def from_config(cls, config, rng: np.random.Generator) -> 'ExpressionGenerator':
    return cls(
      rng,
      max_depth=config.max_depth,
      operator_set=config.operator_set,
      constant_range=config.constant_range,
      variable_probability=config.variable_probability,
      terminal_probability=config.terminal_probability,
    )

  def generate_random_expression(self, max_depth: Optional[int] = None) -> Node:
    """Grow a random tree whose depth does not exceed ``max_depth``"""
    if max_depth is None:
      max_depth = self.max_depth
    return self._generate_node(0, max(1, max_depth))

  def generate(self, max_depth: Optional[int] = None) -> Expression:
    return Expression(self.generate_random_expression(max_depth))

  def _generate_node(self, depth: int, max_depth: int) -> Node:
    """Top-down growth; the chance of a leaf rises with depth"""
    terminal_prob = self.terminal_probability + (depth / max_depth) * (1.0 - self.terminal_probability)

    if depth >= max_depth - 1 or not self.operators or self.rng.random() < terminal_prob:
      return self.generate_terminal()

    kind, op = self.operators[self.rng.integers(len(self.operators))]
    if kind == 'binary':
      left = self._generate_node(depth + 1, max_depth)
      right = self._generate_node(depth + 1, max_depth)
      return BinaryOpNode(op, left, right)
    operand = self._generate_node(depth + 1, max_depth)
    return UnaryOpNode(op, operand)

  def generate_terminal(self) -> Node:
    if self.rng.random() < self.variable_probability:
      return VariableNode()
    return ConstantNode(self.random_constant())

  def random_constant(self) -> float:
    low, high = self.constant_range
    return float(self.rng.uniform(low, high))

  def generate_population(self, population_size: int) -> List[Expression]:
    """Generate ``population_size`` random expressions"""
    return [self.generate() for _ in range(population_size)]
