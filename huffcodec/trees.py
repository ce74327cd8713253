"""
trees.py

Huffman tree construction and the serialized tree structure.

The serialized form of a node is a dict:

    {"char": str | None, "frequency": int, "left": node | None, "right": node | None}

Leaves carry a symbol and no children, internal nodes carry two children and
no symbol.
"""


import heapq
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidTreeError, TreeConstructionError
from .logger import Logger, TreeConstructionLog
from .models import FrequencyTable, InternalNode, LeafNode, Node, Symbol


def build_tree(table: FrequencyTable, logger: Optional[Logger] = None) -> Node:
    """
    Build a Huffman tree from a frequency table.

    Candidates are ordered by ascending weight. Among equal weights, merged
    nodes come before leaves (the newest merge first) and leaves keep the
    order in which their symbols were first seen. The first node taken out
    becomes the left child, the second the right child.

    Args:
        table (FrequencyTable): Non-empty symbol counts.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        Node: The root. A single distinct symbol yields a lone LeafNode.

    Raises:
        TreeConstructionError: If the table is empty.
    """
    if not isinstance(table, FrequencyTable):
        raise ValueError("Table must be of type FrequencyTable")
    if table.get_size() == 0:
        raise TreeConstructionError("Cannot build a Huffman tree from an empty frequency table")

    heap: List[Tuple[int, int, Node]] = [
        (entry.frequency, order, LeafNode(entry.symbol, entry.frequency))
        for order, entry in enumerate(table.items())
    ]
    heapq.heapify(heap)

    merges = 0
    while len(heap) > 1:
        _, _, left = heapq.heappop(heap)
        _, _, right = heapq.heappop(heap)
        merged = InternalNode(left, right)
        merges += 1
        # negative order puts merged nodes ahead of equal-weight leaves
        heapq.heappush(heap, (merged.weight, -merges, merged))

    if len(heap) != 1:
        raise TreeConstructionError("Huffman tree construction did not converge to a single root")
    root = heap[0][2]

    if logger is not None:
        logger.log(TreeConstructionLog(table.get_size(), root.weight))
    return root


def _node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "char": node.symbol.data if node.is_leaf() else None,
        "frequency": node.weight,
        "left": None,
        "right": None,
    }


def serialize_tree(root: Node) -> Dict[str, Any]:
    """
    Convert a tree into nested dicts that can be dumped as JSON.

    Args:
        root (Node): The tree root.

    Returns:
        Dict[str, Any]: The serialized root node.
    """
    if root is None:
        raise InvalidTreeError("Huffman tree is missing")
    result = _node_to_dict(root)
    stack = [(root, result)]
    while stack:
        node, out = stack.pop()
        if node.is_leaf():
            continue
        left = _node_to_dict(node.left)
        right = _node_to_dict(node.right)
        out["left"] = left
        out["right"] = right
        stack.append((node.right, right))
        stack.append((node.left, left))
    return result


def _read_weight(data: Dict[str, Any]) -> int:
    weight = data.get("frequency", 0)
    if weight is None:
        return 0
    if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
        raise InvalidTreeError(f"Invalid node frequency: {weight!r}")
    return weight


def deserialize_tree(data: Any) -> Node:
    """
    Rebuild a tree from its serialized form.

    Every node is checked before use, so a malformed structure is rejected as
    a whole instead of failing halfway through decoding.

    Args:
        data (Any): The serialized root node.

    Returns:
        Node: The reconstructed root.

    Raises:
        InvalidTreeError: If the tree is missing or malformed.
    """
    if data is None:
        raise InvalidTreeError("Huffman tree is missing")

    seen = set()
    built: List[Node] = []
    stack: List[Tuple[Any, bool]] = [(data, False)]
    while stack:
        item, expanded = stack.pop()
        if expanded:
            right = built.pop()
            left = built.pop()
            built.append(InternalNode(left, right, _read_weight(item)))
            continue

        if not isinstance(item, dict):
            raise InvalidTreeError(f"Tree node must be an object, got {type(item).__name__}")
        if id(item) in seen:
            raise InvalidTreeError("Tree nodes must not be shared or cyclic")
        seen.add(id(item))
        if "char" not in item:
            raise InvalidTreeError("Tree node is missing the 'char' field")

        char = item["char"]
        left = item.get("left")
        right = item.get("right")
        if char is not None:
            if not isinstance(char, str) or len(char) != 1:
                raise InvalidTreeError(f"Leaf symbol must be a single character, got {char!r}")
            if left is not None or right is not None:
                raise InvalidTreeError(f"Leaf {char!r} must not have children")
            built.append(LeafNode(Symbol(char), _read_weight(item)))
        else:
            if left is None or right is None:
                raise InvalidTreeError("Internal node must have both children")
            stack.append((item, True))
            stack.append((right, False))
            stack.append((left, False))

    return built[0]
