# Python

"""Evolutionary Regression Package

A genetic programming approach to symbolic regression of one variable.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode,
  BinaryOpNode, UnaryOpNode
)
from .config import EvolutionConfig
from .exceptions import InvalidInput
from .data_processing import Dataset, mse_fitness, MAX_SQUARED_ERROR, UNSCORED_FITNESS
from .generator import ExpressionGenerator
from .genetic_ops import GeneticOperations
from .population import Individual, Population, evaluate_population
from .selection import tournament_selection
from .evolution import EvolutionEngine, EvolutionState
from .regressor import EvolutionaryRegressor
from .evolution_stats import get_evolution_stats, get_detailed_expression
from .logging_system import LogLevel, configure_logging, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode",
  "BinaryOpNode", "UnaryOpNode",
  "EvolutionConfig", "InvalidInput",
  "Dataset", "mse_fitness", "MAX_SQUARED_ERROR", "UNSCORED_FITNESS",
  "ExpressionGenerator", "GeneticOperations",
  "Individual", "Population", "evaluate_population",
  "tournament_selection",
  "EvolutionEngine", "EvolutionState", "EvolutionaryRegressor",
  "get_evolution_stats", "get_detailed_expression",
  "LogLevel", "configure_logging", "set_log_level"
]
