"""
Evolutionary Regression Engine
This module contains the EvolutionaryRegressor facade: construct it from
(x, y) samples, advance it with ``step`` and read the best expression found
so far. Evolution logic lives in evolution.py.
"""
from typing import Any, Dict, Optional

import sympy as sp

from .config import EvolutionConfig
from .data_processing import Dataset
from .evolution import EvolutionEngine
from .evolution_stats import format_summary, get_evolution_stats
from .exceptions import InvalidInput
from .expression_tree import Expression
from .logging_system import LogLevel, get_logger, log_info, log_warning


class EvolutionaryRegressor:
    """Genetic programming search for a one-variable expression fitting (x, y) samples"""

    def __init__(self, xs, ys, config: Optional[EvolutionConfig] = None):
        if config is None:
            config = EvolutionConfig()
        elif not isinstance(config, EvolutionConfig):
            raise InvalidInput(f"config must be an EvolutionConfig, got {type(config).__name__}")
        config.validate()

        self.config = config
        self.dataset = Dataset(xs, ys)
        self.engine = EvolutionEngine(self.dataset, config)

        if config.tournament_size > config.population_size:
            log_warning(f"tournament_size {config.tournament_size} exceeds population_size "
                        f"{config.population_size}; selection will nearly always pick the best")
        log_info(f"Engine ready: {len(self.dataset)} samples, population {config.population_size}, "
                 f"max depth {config.max_depth}, operators {sorted(config.operator_set)}",
                 LogLevel.MODERATE)

    @classmethod
    def from_xy(cls, xs, ys, config: Optional[EvolutionConfig] = None) -> 'EvolutionaryRegressor':
        return cls(xs, ys, config)

    def step(self, n: int = 1):
        """Advance evolution by ``n`` generations (``n`` a non-negative integer)"""
        self.engine.step(n)

    @property
    def generation(self) -> int:
        """Number of generations completed"""
        return self.engine.generation

    def best_string(self) -> str:
        """Infix rendering of the best expression seen so far"""
        return self.engine.best_ever.expression.render()

    def best_eval(self, x: float) -> float:
        return self.engine.best_ever.expression.evaluate(x)

    def best_fitness(self) -> float:
        """Fitness of the best expression; ``inf`` before the first generation is scored"""
        return self.engine.best_ever.fitness

    def best_expression(self) -> Expression:
        return self.engine.best_ever.expression.copy()

    def best_sympy(self) -> sp.Expr:
        """Best expression as an algebraically simplified SymPy expression"""
        return self.engine.best_ever.expression.sympy_simplified()

    def generations_to_best(self) -> Optional[int]:
        """Generation at which the current best was found, None before any scoring"""
        return self.engine.state.generation_of_best

    def stats(self) -> Dict[str, Any]:
        state = self.engine.state
        return get_evolution_stats(
            state.generation, state.population, state.best_ever.expression,
            state.best_ever.fitness, state.generation_of_best,
            state.best_fitness_history, state.mean_fitness_history,
        )

    def summary(self) -> str:
        return format_summary(self.stats())

    def log_summary(self):
        """Write the run statistics through the package logger"""
        get_logger().result_summary(self.stats())

    def __repr__(self) -> str:
        return (f"EvolutionaryRegressor(generation={self.generation}, "
                f"best={self.best_string()!r}, fitness={self.best_fitness():.6g})")
