import numpy as np
import numba
from enum import IntEnum

# Value produced by a division whose denominator is exactly zero
DIVISION_BY_ZERO_VALUE = 1.0
# Value returned by evaluate() for NaN results (negative base with fractional
# exponent, log of a negative number, inf - inf, ...). Fitness scoring treats
# such samples as failures instead
DOMAIN_ERROR_VALUE = 0.0

class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  BINARY_OP = 2
  UNARY_OP = 3

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4
  LOGB = 5
  # Unary ops
  SIN = 6
  COS = 7
  NEG = 8
  EXP = 9
  LOG = 10
  SQRT = 11
  ABS = 12

# Operator name (as used in configuration) -> symbol stored on the node
BINARY_OPERATORS = {
    'add': '+', 'sub': '-', 'mul': '*', 'div': '/', 'pow': '^', 'logb': 'logb'
}
UNARY_OPERATORS = {
    'sin': 'sin', 'cos': 'cos', 'neg': 'neg',
    'exp': 'exp', 'log': 'log', 'sqrt': 'sqrt', 'abs': 'abs'
}

# Mapping dictionaries
BINARY_OP_MAP = {
    '+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV,
    '^': OpType.POW, 'logb': OpType.LOGB
}
UNARY_OP_MAP = {
    'sin': OpType.SIN, 'cos': OpType.COS, 'neg': OpType.NEG,
    'exp': OpType.EXP, 'log': OpType.LOG, 'sqrt': OpType.SQRT, 'abs': OpType.ABS
}

DEFAULT_OPERATOR_SET = frozenset(['add', 'sub', 'mul', 'div', 'pow', 'sin', 'cos', 'neg'])
ALL_OPERATORS = frozenset(BINARY_OPERATORS) | frozenset(UNARY_OPERATORS)


@numba.njit(cache=True, nogil=True)
def replace_nan(values):
  out = values.copy()
  out[np.isnan(values)] = DOMAIN_ERROR_VALUE
  return out

def evaluate_variable(xs):
  # Fresh writable copy; dataset arrays are read-only
  return np.array(xs, dtype=np.float64)

def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

@numba.njit(cache=True, nogil=True, error_model='numpy')
def binary_op_raw(left_val, right_val, operator):
  """Binary kernel that leaves domain errors as NaN"""
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    out = np.full(left_val.shape[0], DIVISION_BY_ZERO_VALUE)
    mask = right_val != 0.0
    out[mask] = left_val[mask] / right_val[mask]
    return out
  elif operator == '^':
    return np.power(left_val, right_val)
  elif operator == 'logb':
    return np.log(left_val) / np.log(right_val)
  return np.full(left_val.shape[0], np.nan)

@numba.njit(cache=True, nogil=True, error_model='numpy')
def unary_op_raw(operand_val, operator):
  """Unary kernel that leaves domain errors as NaN"""
  if operator == 'sin':
    return np.sin(operand_val)
  elif operator == 'cos':
    return np.cos(operand_val)
  elif operator == 'neg':
    return -operand_val
  elif operator == 'exp':
    return np.exp(operand_val)
  elif operator == 'log':
    return np.log(operand_val)
  elif operator == 'sqrt':
    return np.sqrt(operand_val)
  elif operator == 'abs':
    return np.abs(operand_val)
  return np.full(operand_val.shape[0], np.nan)

@numba.njit(cache=True, nogil=True, error_model='numpy')
def evaluate_binary_op(left_val, right_val, operator):
  return replace_nan(binary_op_raw(left_val, right_val, operator))

@numba.njit(cache=True, nogil=True, error_model='numpy')
def evaluate_unary_op(operand_val, operator):
  return replace_nan(unary_op_raw(operand_val, operator))

def binary_symbols_for(operator_names):
  """Node symbols for the binary operators enabled in ``operator_names``"""
  return [BINARY_OPERATORS[name] for name in sorted(operator_names) if name in BINARY_OPERATORS]

def unary_symbols_for(operator_names):
  """Node symbols for the unary operators enabled in ``operator_names``"""
  return [UNARY_OPERATORS[name] for name in sorted(operator_names) if name in UNARY_OPERATORS]
