"""
Tree Utility Functions

Traversal and functional editing helpers for expression trees. Positions in
a tree are addressed by their index in the depth-first (pre-order) node
list, so that crossover and mutation can pick a node uniformly by drawing a
single integer.
"""

from typing import List, Tuple, Type

from ..core.node import Node


def get_all_nodes(node: Node) -> List[Node]:
    """All nodes of the tree in pre-order; index 0 is the root"""
    return [n for n, _ in _depth_first_with_levels(node)]


def get_nodes_with_levels(node: Node) -> List[Tuple[Node, int]]:
    """
    Pre-order list of (node, level) pairs; the root is on level 1.
    """
    return _depth_first_with_levels(node)


def _depth_first_with_levels(node: Node) -> List[Tuple[Node, int]]:
    """Pre-order traversal (iterative, explicit stack)"""
    result = []
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        result.append((current, level))
        # Push children reversed so the left child is visited first
        for child in reversed(current.children()):
            stack.append((child, level + 1))
    return result


def get_subtree(root: Node, index: int) -> Node:
    """Node at pre-order position ``index``"""
    nodes = get_all_nodes(root)
    if not 0 <= index < len(nodes):
        raise IndexError(f"Node index {index} out of range for tree of size {len(nodes)}")
    return nodes[index]


def replace_subtree(root: Node, index: int, replacement: Node) -> Node:
    """
    Build a new tree equal to ``root`` with the subtree at pre-order position
    ``index`` replaced by ``replacement``.

    The original tree is left untouched; every node of the result is freshly
    built, so the result shares nothing with ``root``. ``replacement`` is
    inserted as given, callers pass a copy when it belongs to another tree.

    Args:
        root: Root node of the tree to edit
        index: Pre-order position of the subtree to replace
        replacement: Subtree to insert

    Returns:
        Root of the new tree
    """
    if not 0 <= index < root.size():
        raise IndexError(f"Node index {index} out of range for tree of size {root.size()}")
    return _replace(root, index, replacement)


def _replace(node: Node, index: int, replacement: Node) -> Node:
    if index == 0:
        return replacement

    offset = 1
    new_children = []
    for child in node.children():
        child_size = child.size()
        if offset <= index < offset + child_size:
            new_children.append(_replace(child, index - offset, replacement))
        else:
            new_children.append(child.copy())
        offset += child_size
    return node.with_children(tuple(new_children))


def find_nodes_by_type(node: Node, node_type: Type[Node]) -> List[Node]:
    """
    Find all nodes of a specific type in the tree.

    Args:
        node: Root node of the tree
        node_type: Type of nodes to find (e.g., ConstantNode, VariableNode)

    Returns:
        List of nodes matching the specified type
    """
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]
