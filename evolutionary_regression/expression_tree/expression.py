import numpy as np
import sympy as sp
from typing import Optional, Tuple
from .core.node import Node


class Expression:
  """Expression of one variable with a cached infix rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, x: float) -> float:
    """Value of the expression at a single point"""
    return float(self.evaluate_many(np.array([x], dtype=np.float64))[0])

  def evaluate_many(self, xs) -> np.ndarray:
    """Vectorised evaluation over a one-dimensional array of x values"""
    xs = np.ascontiguousarray(xs, dtype=np.float64).reshape(-1)
    return self.root.evaluate(xs)

  def evaluate_checked(self, xs) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorised evaluation plus the mask of samples that hit a domain error"""
    xs = np.ascontiguousarray(xs, dtype=np.float64).reshape(-1)
    return self.root.evaluate_checked(xs)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def render(self) -> str:
    """Infix text exposed to callers as the best expression"""
    return self.to_string()

  def copy(self) -> 'Expression':
    return Expression(self.root.copy())

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return self.root.depth()

  def simplify(self) -> 'Expression':
    """Equivalent expression with constant subtrees folded and identities removed"""
    return Expression(self.root.simplify())

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def sympy_simplified(self) -> sp.Expr:
    """Algebraically simplified SymPy form, for presenting results"""
    from .utils.sympy_utils import SymPySimplifier
    return SymPySimplifier().simplify_expression(self)['simplified']

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"
