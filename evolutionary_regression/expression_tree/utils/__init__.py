"""Expression tree utilities."""

from .tree_utils import (
    get_all_nodes,
    get_nodes_with_levels,
    get_subtree,
    replace_subtree,
    find_nodes_by_type
)
from .sympy_utils import SymPySimplifier

__all__ = [
    'get_all_nodes',
    'get_nodes_with_levels',
    'get_subtree',
    'replace_subtree',
    'find_nodes_by_type',
    'SymPySimplifier'
]
