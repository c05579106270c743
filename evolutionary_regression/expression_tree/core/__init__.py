"""Core expression tree components."""

from .node import Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode
from .operators import (
    NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP,
    BINARY_OPERATORS, UNARY_OPERATORS, ALL_OPERATORS, DEFAULT_OPERATOR_SET,
    DIVISION_BY_ZERO_VALUE, DOMAIN_ERROR_VALUE,
    evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op,
    binary_op_raw, unary_op_raw
)

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'UNARY_OP_MAP',
    'BINARY_OPERATORS', 'UNARY_OPERATORS', 'ALL_OPERATORS', 'DEFAULT_OPERATOR_SET',
    'DIVISION_BY_ZERO_VALUE', 'DOMAIN_ERROR_VALUE',
    'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op', 'evaluate_unary_op',
    'binary_op_raw', 'unary_op_raw'
]
