import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from .operators import (
  NodeType, BINARY_OP_MAP, UNARY_OP_MAP,
  evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op,
  binary_op_raw, unary_op_raw, replace_nan
)

# Identities removed by simplify(): (operator, side, constant) -> kept side
_IDENTITIES = {
  ('+', 'left', 0.0): 'right',
  ('+', 'right', 0.0): 'left',
  ('-', 'right', 0.0): 'left',
  ('*', 'left', 1.0): 'right',
  ('*', 'right', 1.0): 'left',
  ('/', 'right', 1.0): 'left',
  ('^', 'right', 1.0): 'left',
}

_SYMPY_BINARY = {
  '+': lambda a, b: sp.Add(a, b),
  '-': lambda a, b: sp.Add(a, sp.Mul(-1, b)),
  '*': lambda a, b: sp.Mul(a, b),
  '/': lambda a, b: sp.Mul(a, sp.Pow(b, -1)),
  '^': lambda a, b: sp.Pow(a, b),
  'logb': lambda a, b: sp.log(a, b),
}

_SYMPY_UNARY = {
  'sin': sp.sin,
  'cos': sp.cos,
  'neg': lambda a: -a,
  'exp': sp.exp,
  'log': sp.log,
  'sqrt': sp.sqrt,
  'abs': sp.Abs,
}

X_SYMBOL = sp.Symbol('x')


class Node(ABC):
  """Base node class with size/depth/hash caching.

  Nodes are treated as immutable once they are part of an expression: every
  genetic operator builds new nodes instead of editing existing ones, which
  keeps the caches valid.
  """

  __slots__ = ('_hash_cache', '_size_cache', '_depth_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None
    self._depth_cache: Optional[int] = None

  @abstractmethod
  def evaluate(self, xs: np.ndarray) -> np.ndarray:
    pass

  @abstractmethod
  def evaluate_checked(self, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Values as in evaluate(), plus a mask of the samples where some node
    of the tree hit a domain error"""
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @abstractmethod
  def simplify(self) -> 'Node':
    pass

  def children(self) -> tuple:
    return ()

  def with_children(self, children: tuple) -> 'Node':
    """New node of the same kind over ``children``"""
    return self.copy()

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  def depth(self) -> int:
    """Levels in the tree; a leaf has depth 1"""
    if self._depth_cache is None:
      self._depth_cache = 1 + max((child.depth() for child in self.children()), default=0)
    return self._depth_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return False
    return hash(self) == hash(other) and self.to_string() == other.to_string()

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  def __str__(self) -> str:
    return self.to_string()


class VariableNode(Node):
  __slots__ = ()

  def evaluate(self, xs: np.ndarray) -> np.ndarray:
    return evaluate_variable(xs)

  def evaluate_checked(self, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    return evaluate_variable(xs), np.zeros(xs.shape[0], dtype=np.bool_)

  def to_string(self) -> str:
    return "x"

  def copy(self) -> 'VariableNode':
    return VariableNode()

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE,))

  def simplify(self) -> 'VariableNode':
    return VariableNode()

  def to_sympy(self):
    return X_SYMBOL

  def __repr__(self) -> str:
    return "VariableNode()"


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def evaluate(self, xs: np.ndarray) -> np.ndarray:
    return evaluate_constant(xs.shape[0], self.value)

  def evaluate_checked(self, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    return evaluate_constant(xs.shape[0], self.value), np.zeros(xs.shape[0], dtype=np.bool_)

  def to_string(self) -> str:
    text = repr(self.value)
    if self.value < 0:
      return f"({text})"
    return text

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def _compute_hash(self) -> int:
    return hash((NodeType.CONSTANT, self.value))

  def simplify(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def to_sympy(self):
    return sp.Float(self.value)

  def __repr__(self) -> str:
    return f"ConstantNode({self.value!r})"


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: str, left: Node, right: Node):
    super().__init__()
    if operator not in BINARY_OP_MAP:
      raise ValueError(f"Unknown binary operator: {operator}")
    self.operator = operator
    self.left = left
    self.right = right

  def evaluate(self, xs: np.ndarray) -> np.ndarray:
    left_val = self.left.evaluate(xs)
    right_val = self.right.evaluate(xs)
    return evaluate_binary_op(left_val, right_val, self.operator)

  def evaluate_checked(self, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    left_val, left_bad = self.left.evaluate_checked(xs)
    right_val, right_bad = self.right.evaluate_checked(xs)
    raw = binary_op_raw(left_val, right_val, self.operator)
    return replace_nan(raw), left_bad | right_bad | np.isnan(raw)

  def to_string(self) -> str:
    if self.operator == 'logb':
      return f"log({self.left.to_string()}, {self.right.to_string()})"
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.operator, self.left.copy(), self.right.copy())

  def children(self) -> tuple:
    return (self.left, self.right)

  def with_children(self, children: tuple) -> 'BinaryOpNode':
    left, right = children
    return BinaryOpNode(self.operator, left, right)

  def _compute_hash(self) -> int:
    return hash((NodeType.BINARY_OP, self.operator, hash(self.left), hash(self.right)))

  def simplify(self) -> Node:
    left_s = self.left.simplify()
    right_s = self.right.simplify()

    if isinstance(left_s, ConstantNode) and isinstance(right_s, ConstantNode):
      val = binary_op_raw(np.array([left_s.value]), np.array([right_s.value]), self.operator)[0]
      # Non-finite results (domain errors, overflow) stay unfolded
      if np.isfinite(val):
        return ConstantNode(val)
      return BinaryOpNode(self.operator, left_s, right_s)

    if self.operator == '^' and isinstance(right_s, ConstantNode) and right_s.value == 0.0:
      return ConstantNode(1.0)

    for side, node in (('left', left_s), ('right', right_s)):
      if isinstance(node, ConstantNode):
        kept = _IDENTITIES.get((self.operator, side, node.value))
        if kept is not None:
          return left_s if kept == 'left' else right_s

    return BinaryOpNode(self.operator, left_s, right_s)

  def to_sympy(self):
    return _SYMPY_BINARY[self.operator](self.left.to_sympy(), self.right.to_sympy())

  def __repr__(self) -> str:
    return f"BinaryOpNode({self.operator!r}, {self.left!r}, {self.right!r})"


class UnaryOpNode(Node):
  __slots__ = ('operator', 'operand')

  def __init__(self, operator: str, operand: Node):
    super().__init__()
    if operator not in UNARY_OP_MAP:
      raise ValueError(f"Unknown unary operator: {operator}")
    self.operator = operator
    self.operand = operand

  def evaluate(self, xs: np.ndarray) -> np.ndarray:
    operand_val = self.operand.evaluate(xs)
    return evaluate_unary_op(operand_val, self.operator)

  def evaluate_checked(self, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    operand_val, operand_bad = self.operand.evaluate_checked(xs)
    raw = unary_op_raw(operand_val, self.operator)
    return replace_nan(raw), operand_bad | np.isnan(raw)

  def to_string(self) -> str:
    if self.operator == 'neg':
      return f"(-{self.operand.to_string()})"
    return f"{self.operator}({self.operand.to_string()})"

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.operator, self.operand.copy())

  def children(self) -> tuple:
    return (self.operand,)

  def with_children(self, children: tuple) -> 'UnaryOpNode':
    (operand,) = children
    return UnaryOpNode(self.operator, operand)

  def _compute_hash(self) -> int:
    return hash((NodeType.UNARY_OP, self.operator, hash(self.operand)))

  def simplify(self) -> Node:
    operand_s = self.operand.simplify()
    if isinstance(operand_s, ConstantNode):
      val = unary_op_raw(np.array([operand_s.value]), self.operator)[0]
      if np.isfinite(val):
        return ConstantNode(val)
    return UnaryOpNode(self.operator, operand_s)

  def to_sympy(self):
    return _SYMPY_UNARY[self.operator](self.operand.to_sympy())

  def __repr__(self) -> str:
    return f"UnaryOpNode({self.operator!r}, {self.operand!r})"
