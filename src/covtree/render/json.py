from __future__ import annotations

import json
from typing import TYPE_CHECKING

from jsonschema import validate

from covtree.core.config import get_schema
from covtree.core.severity import percentage_to_style_index

if TYPE_CHECKING:
    from covtree.core.pipeline import LoadResult
    from covtree.core.tree import HierarchyNode

SCHEMA_ID = str(get_schema("v1")["$id"])


def node_to_dict(node: HierarchyNode, *, parent: str, depth: int) -> dict[str, object]:
    """Project one node (without its children) onto the v1 schema shape."""
    out: dict[str, object] = {
        "name": node.name,
        "path": node.full_path,
        "parent": parent,
        "depth": depth,
        "coverage": node.coverage_percentage,
        "lines_covered": node.lines_covered,
        "total_lines": node.total_lines,
        "severity": percentage_to_style_index(node.coverage_percentage),
    }
    if node.link_hint:
        out["link"] = node.link_hint
    if node.metrics is not None:
        out["metrics"] = node.metrics.as_dict()
    return out


def flatten_nodes(root: HierarchyNode, *, max_depth: int | None = None) -> list[dict[str, object]]:
    """List every node below *root* in pre-order, each pointing at its parent's path.

    ``parent`` is the path of the node the entry actually hangs under, which is
    the root (``""``) for nodes whose own parent row was missing.
    """
    nodes: list[dict[str, object]] = []
    stack = [(child, root.full_path, 1) for child in reversed(root.children)]
    while stack:
        node, parent, depth = stack.pop()
        nodes.append(node_to_dict(node, parent=parent, depth=depth))
        if max_depth is not None and depth >= max_depth:
            continue
        stack.extend((child, node.full_path, depth + 1) for child in reversed(node.children))
    return nodes


def format_json(result: LoadResult, *, max_depth: int | None = None) -> dict[str, object]:
    data: dict[str, object] = {
        "schema": SCHEMA_ID,
        "root": {"name": result.root.name, "path": result.root.full_path},
        "nodes": flatten_nodes(result.root, max_depth=max_depth),
        "stats": result.stats.as_dict(),
    }
    validate(data, get_schema("v1"))
    return data


def render_json(result: LoadResult, *, max_depth: int | None = None) -> str:
    return json.dumps(format_json(result, max_depth=max_depth), indent=2, sort_keys=False)


__all__ = ["SCHEMA_ID", "flatten_nodes", "format_json", "node_to_dict", "render_json"]
