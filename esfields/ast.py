"""Dict-based ESTree nodes.

Every node is a dict with "type", "start" and "end" keys plus the fields of
its ESTree interface.
"""

from __future__ import annotations

ASTNode = dict[str, object]


def make_node(type_name: str, start: int, fields: dict[str, object] | None = None) -> ASTNode:
    """Create an AST dict node starting at an offset. end is set by finish_node."""
    result: ASTNode = {"type": type_name, "start": start, "end": start}
    if fields is not None:
        for key in fields:
            result[key] = fields[key]
    return result


def finish_node(node: ASTNode, type_name: str, end: int) -> ASTNode:
    node["type"] = type_name
    node["end"] = end
    return node


def dict_walk(node: ASTNode) -> list[ASTNode]:
    """Walk the tree depth-first in field order, returns list of all nodes."""
    result: list[ASTNode] = [node]
    for key in node:
        value = node[key]
        if isinstance(value, dict) and "type" in value:
            result = result + dict_walk(value)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, dict) and "type" in item:
                    result = result + dict_walk(item)
    return result


def node_type(node: object) -> str:
    """Get node type string, "" for anything that is not a node."""
    if not isinstance(node, dict):
        return ""
    value = node.get("type", "")
    return value if isinstance(value, str) else ""


def is_type(node: object, type_names: list[str]) -> bool:
    """Check if node is one of the given AST types."""
    return node_type(node) in type_names
