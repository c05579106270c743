"""Expression Tree Module

Core expression tree functionality for evolutionary regression.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    UnaryOpNode
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    ALL_OPERATORS,
    DEFAULT_OPERATOR_SET,
    DIVISION_BY_ZERO_VALUE,
    DOMAIN_ERROR_VALUE,
    evaluate_binary_op,
    evaluate_unary_op
)
from .utils import SymPySimplifier, get_all_nodes, replace_subtree

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode",
    "NodeType", "OpType",
    "BINARY_OP_MAP", "UNARY_OP_MAP", "BINARY_OPERATORS", "UNARY_OPERATORS",
    "ALL_OPERATORS", "DEFAULT_OPERATOR_SET",
    "DIVISION_BY_ZERO_VALUE", "DOMAIN_ERROR_VALUE",
    "evaluate_binary_op", "evaluate_unary_op",
    "SymPySimplifier", "get_all_nodes", "replace_subtree"
]
