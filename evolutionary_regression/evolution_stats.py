# evolution_stats.py
from typing import Any, Dict, List

import numpy as np

from .expression_tree import Expression
from .population import Population


def get_evolution_stats(generation: int, population: Population, best_expression: Expression,
                        best_fitness: float, generation_of_best, best_fitness_history: List[float],
                        mean_fitness_history: List[float]) -> Dict[str, Any]:
  """Get run statistics of an engine"""
  sizes = population.sizes()
  return {
    'generation': generation,
    'population_size': len(population),
    'max_tree_size': int(max(sizes)),
    'mean_tree_size': float(np.mean(sizes)),
    'best_expression': best_expression.to_string(),
    'best_size': best_expression.size(),
    'best_depth': best_expression.depth(),
    'best_fitness': float(best_fitness),
    'generations_to_best': generation_of_best,
    'best_fitness_history': list(best_fitness_history),
    'mean_fitness_history': list(mean_fitness_history),
  }


def get_detailed_expression(expression: Expression, sympy_simplify: bool = False) -> Dict[str, Any]:
  """Get detailed information about an expression"""
  info = {
    'expression': expression.to_string(),
    'size': expression.size(),
    'depth': expression.depth(),
    'simplified': None,
  }
  if sympy_simplify:
    info['simplified'] = str(expression.sympy_simplified())
  return info


def format_summary(stats: Dict[str, Any]) -> str:
  """Multi-line human readable form of ``get_evolution_stats`` output"""
  to_best = stats['generations_to_best']
  lines = [
    f"Generation:          {stats['generation']}",
    f"Population size:     {stats['population_size']}",
    f"Max tree size:       {stats['max_tree_size']}",
    f"Mean tree size:      {stats['mean_tree_size']:.2f}",
    f"Best expression:     {stats['best_expression']}",
    f"Best size / depth:   {stats['best_size']} / {stats['best_depth']}",
    f"Best fitness:        {stats['best_fitness']:.6g}",
    f"Generations to best: {'-' if to_best is None else to_best}",
  ]
  return "\n".join(lines)
