"""
Genetic Operations Module for Evolutionary Regression

This module provides crossover, mutation and the breeding pipeline that
turns one scored population into the next.
"""

from .genetic_operations import GeneticOperations
from .mutation_strategies import MutationStrategies
from .crossover_operations import CrossoverOperations

__all__ = [
    'GeneticOperations',
    'MutationStrategies',
    'CrossoverOperations'
]
