"""
Data Processing for Evolutionary Regression
This module holds the immutable (x, y) dataset and the fitness function scored against it.
"""

import numpy as np

from .exceptions import InvalidInput
from .expression_tree import Expression

# Ceiling for a single squared error; non-finite errors are replaced by it too
MAX_SQUARED_ERROR = 1e100
# Fitness reported before any generation has been scored
UNSCORED_FITNESS = float('inf')


class Dataset:
    """
    Ordered, read-only (x, y) samples shared by every fitness evaluation.

    Both arrays are float64, one-dimensional, of equal non-zero length and
    flagged non-writeable, so concurrent scorers can share them freely.
    """

    __slots__ = ('xs', 'ys')

    def __init__(self, xs, ys):
        try:
            xs = np.array(xs, dtype=np.float64)
            ys = np.array(ys, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"x and y samples must be numeric: {exc}") from exc

        if xs.ndim != 1 or ys.ndim != 1:
            raise InvalidInput(
                f"x and y samples must be one-dimensional, got shapes {xs.shape} and {ys.shape}")
        if xs.shape[0] != ys.shape[0]:
            raise InvalidInput(
                f"x and y samples must have equal length, got {xs.shape[0]} and {ys.shape[0]}")
        if xs.shape[0] == 0:
            raise InvalidInput("dataset must contain at least one (x, y) sample")
        if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
            raise InvalidInput("x and y samples must be finite numbers")

        xs.flags.writeable = False
        ys.flags.writeable = False
        self.xs = xs
        self.ys = ys

    def __len__(self) -> int:
        return self.xs.shape[0]

    def __iter__(self):
        return zip(self.xs.tolist(), self.ys.tolist())

    def __repr__(self) -> str:
        return f"Dataset(n_samples={len(self)})"


def squared_errors(expression: Expression, dataset: Dataset) -> np.ndarray:
    """
    Per-sample squared errors with every non-finite or oversized value
    replaced by MAX_SQUARED_ERROR.

    Samples where any node of the expression hit a domain error count as
    failures too, even though evaluate() reports the finite sentinel there.
    """
    with np.errstate(all='ignore'):
        predictions, domain_errors = expression.evaluate_checked(dataset.xs)
        errors = (predictions - dataset.ys) ** 2
    errors = np.where(np.isfinite(errors) & ~domain_errors, errors, MAX_SQUARED_ERROR)
    return np.minimum(errors, MAX_SQUARED_ERROR)


def mse_fitness(expression: Expression, dataset: Dataset,
                parsimony_coefficient: float = 0.0) -> float:
    """
    Mean squared error of ``expression`` over ``dataset``; lower is better.

    The result is always a finite, non-negative float, so fitness values are
    totally ordered even for expressions that overflow or divide badly.
    An optional parsimony term penalises large trees.
    """
    fitness = float(np.mean(squared_errors(expression, dataset)))
    if parsimony_coefficient:
        fitness += parsimony_coefficient * expression.size()
    return fitness
