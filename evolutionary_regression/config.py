"""
Evolution Configuration
Recognised options of the evolution engine and their validation.
"""

import numbers
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple

from .exceptions import InvalidInput
from .expression_tree.core.operators import ALL_OPERATORS, DEFAULT_OPERATOR_SET


@dataclass(frozen=True)
class EvolutionConfig:
    """Configuration for the evolution engine"""

    # Population parameters
    population_size: int = 200
    max_depth: int = 6

    # Selection parameters
    tournament_size: int = 3

    # Genetic operators
    mutation_rate: float = 0.1
    subtree_mutation_probability: float = 0.5
    mutation_max_depth: int = 3
    point_mutation_scale: float = 0.1
    crossover_retries: int = 10
    operand_swap_probability: float = 0.0
    immigrant_count: int = 0

    # Tree construction
    constant_range: Tuple[float, float] = (-5.0, 5.0)
    operator_set: FrozenSet[str] = field(default_factory=lambda: DEFAULT_OPERATOR_SET)
    variable_probability: float = 0.5
    terminal_probability: float = 0.3

    # Fitness
    parsimony_coefficient: float = 0.0
    simplify_offspring: bool = False

    # Performance and reproducibility
    n_jobs: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        # Accept any iterable of names / any pair for the convenience of callers
        object.__setattr__(self, 'operator_set', frozenset(self.operator_set))
        object.__setattr__(self, 'constant_range', tuple(float(v) for v in self.constant_range))

    def validate(self) -> 'EvolutionConfig':
        """Validate configuration parameters, raising InvalidInput on the first problem"""
        if not _is_int(self.population_size) or self.population_size < 1:
            raise InvalidInput("population_size must be a positive integer")
        if not _is_int(self.max_depth) or self.max_depth < 1:
            raise InvalidInput("max_depth must be a positive integer")
        if not _is_int(self.tournament_size) or self.tournament_size < 1:
            raise InvalidInput("tournament_size must be a positive integer")
        if not _is_int(self.mutation_max_depth) or self.mutation_max_depth < 1:
            raise InvalidInput("mutation_max_depth must be a positive integer")
        if not _is_int(self.crossover_retries) or self.crossover_retries < 0:
            raise InvalidInput("crossover_retries must be a non-negative integer")
        if not _is_int(self.n_jobs) or self.n_jobs < 1:
            raise InvalidInput("n_jobs must be a positive integer")
        if not _is_int(self.immigrant_count) or not 0 <= self.immigrant_count < self.population_size:
            raise InvalidInput("immigrant_count must be a non-negative integer below population_size")

        for name in ('mutation_rate', 'subtree_mutation_probability',
                     'operand_swap_probability', 'variable_probability', 'terminal_probability'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidInput(f"{name} must be between 0 and 1, got {value}")

        if self.point_mutation_scale < 0:
            raise InvalidInput("point_mutation_scale must be non-negative")
        if self.parsimony_coefficient < 0:
            raise InvalidInput("parsimony_coefficient must be non-negative")

        if len(self.constant_range) != 2:
            raise InvalidInput("constant_range must be a (low, high) pair")
        low, high = self.constant_range
        if not low <= high:
            raise InvalidInput(f"constant_range low must not exceed high, got {self.constant_range}")

        if not self.operator_set:
            raise InvalidInput("operator_set must enable at least one operator")
        unknown = self.operator_set - ALL_OPERATORS
        if unknown:
            raise InvalidInput(f"Unknown operators in operator_set: {sorted(unknown)}")

        if self.seed is not None and not _is_int(self.seed):
            raise InvalidInput("seed must be an integer or None")
        return self

    def replace(self, **changes) -> 'EvolutionConfig':
        """Copy of this configuration with ``changes`` applied"""
        return replace(self, **changes)


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
