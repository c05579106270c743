"""
Crossover Operations Module

Subtree crossover for genetic programming: a child is the first parent
with one of its subtrees swapped for a copy of a subtree of the second
parent, subject to the depth limit.
"""

import numpy as np

from ..expression_tree import Expression
from ..expression_tree.utils.tree_utils import get_subtree, replace_subtree


class CrossoverOperations:
    """Depth-bounded subtree crossover"""

    def __init__(self, rng: np.random.Generator, max_depth: int = 6, max_retries: int = 10):
        self.rng = rng
        self.max_depth = max_depth
        self.max_retries = max_retries

    def subtree_crossover(self, parent1: Expression, parent2: Expression) -> Expression:
        """
        Replace a uniformly chosen subtree of ``parent1`` with a copy of a
        uniformly chosen subtree of ``parent2``.

        Crossover points are resampled while the child would be deeper than
        ``max_depth``; once the retries are used up the child is a plain copy
        of ``parent1``. Neither parent is modified.
        """
        size1 = parent1.size()
        size2 = parent2.size()

        for _ in range(self.max_retries + 1):
            idx1 = int(self.rng.integers(size1))
            idx2 = int(self.rng.integers(size2))

            donor = get_subtree(parent2.root, idx2).copy()
            child_root = replace_subtree(parent1.root, idx1, donor)

            if child_root.depth() <= self.max_depth:
                return Expression(child_root)

        return parent1.copy()
