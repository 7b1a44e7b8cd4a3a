from __future__ import annotations

import sys
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.style import Style
from rich.text import Text
from rich.tree import Tree

from covtree.core.severity import gradient_color, severity_style

if TYPE_CHECKING:
    from covtree.core.tree import HierarchyNode
    from covtree.render.render import RenderOptions

_NO_DATA = "No coverage data."

_METRIC_LABELS = (
    ("line", "line"),
    ("condition", "cond"),
    ("toggle", "toggle"),
    ("fsm", "fsm"),
    ("branch", "branch"),
)


def _node_label(node: HierarchyNode, options: RenderOptions) -> Text:
    label = Text(node.name, style="bold" if node.children else "")
    label.append("  ")
    label.append(f" {node.coverage_percentage:5.1f}% ", style=severity_style(node.coverage_percentage))

    if options.show_metrics and node.metrics is not None:
        values = node.metrics.as_dict()
        for key, short in _METRIC_LABELS:
            label.append(f"  {short} ")
            label.append(f"{values[key]:.1f}", style=Style(color=gradient_color(values[key])))

    if options.show_links and node.link_hint:
        label.append(f"  -> {node.link_hint}", style="dim")
    return label


def build_rich_tree(root: HierarchyNode, options: RenderOptions) -> Tree:
    """Return a Rich tree for *root*, tinting every node by its severity bucket.

    Built with an explicit stack so arbitrarily deep dumps do not hit the
    recursion limit.
    """
    tree = Tree(Text(root.name, style="bold"), guide_style="dim")
    stack: list[tuple[Tree, HierarchyNode, int]] = [(tree, root, 1)]
    while stack:
        branch, node, depth = stack.pop()
        for child in node.children:
            sub = branch.add(_node_label(child, options))
            if options.max_depth is not None and depth >= options.max_depth:
                if child.children:
                    sub.add(Text(f"... {child.count()} more", style="dim"))
                continue
            stack.append((sub, child, depth + 1))
    return tree


def _render_tree(tree: Tree, *, color: bool) -> str:
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        width=sys.maxsize,
        color_system="truecolor" if color else None,
        no_color=not color,
    )
    console.print(tree)
    return "\n".join(line.rstrip() for line in buf.getvalue().splitlines())


def render_human(root: HierarchyNode, options: RenderOptions) -> str:
    if not root.children:
        return _NO_DATA
    return _render_tree(build_rich_tree(root, options), color=options.color)


__all__ = ["build_rich_tree", "render_human"]
