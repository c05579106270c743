import sympy as sp
from typing import Dict, Any

from ..expression import Expression

# Candidate rewrites, tried in order; the first one reaching the lowest
# operation count wins
STRATEGIES = {
  'simplify': sp.simplify,
  'expand': sp.expand,
  'factor': sp.factor,
  'trigsimp': sp.trigsimp,
}


class SymPySimplifier:
  """SymPy-based simplifier for presenting evolved expressions"""

  def __init__(self, strategies=None):
    self.strategies = dict(STRATEGIES if strategies is None else strategies)

  def simplify_expression(self, expression: Expression) -> Dict[str, Any]:
    """
    Rewrite ``expression`` with every strategy and keep the result with the
    fewest operations.

    Returns:
        Dict with the simplified SymPy expression, the winning strategy
        ('none' if nothing helped) and the operation count saved
    """
    original = expression.to_sympy()
    original_ops = count_operations(original)

    winner, winner_ops, winner_name = original, original_ops, 'none'
    for name, rewrite in self.strategies.items():
      try:
        candidate = rewrite(original)
      except (TypeError, ValueError, NotImplementedError, RecursionError):
        continue
      ops = count_operations(candidate)
      if ops < winner_ops:
        winner, winner_ops, winner_name = candidate, ops, name

    return {
      'simplified': winner,
      'strategy_used': winner_name,
      'complexity_reduction': original_ops - winner_ops,
    }


def count_operations(sympy_expr: sp.Expr) -> int:
  return int(sp.count_ops(sympy_expr))
