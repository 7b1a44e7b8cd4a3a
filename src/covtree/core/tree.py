"""Assemble resolved records into an ordered hierarchy tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covtree._meta import logger
from covtree.core.config import ROOT_NAME

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from covtree.core.records import CoverageMetrics, CoverageRecord


@dataclass(slots=True)
class HierarchyNode:
    """A node of the coverage hierarchy.

    Children keep the order their rows had in the dump. The root has an empty
    ``full_path`` and no metrics.
    """

    name: str
    full_path: str = ""
    link_hint: str | None = None
    coverage_percentage: float = 0.0
    lines_covered: int = 0
    total_lines: int = 0
    metrics: CoverageMetrics | None = None
    children: list[HierarchyNode] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: CoverageRecord, *, link_hint: str | None = None) -> HierarchyNode:
        return cls(
            name=record.name,
            full_path=record.path,
            link_hint=link_hint,
            coverage_percentage=record.coverage_percentage,
            lines_covered=record.lines_covered,
            total_lines=record.total_lines,
            metrics=record.metrics,
        )

    @property
    def is_root(self) -> bool:
        return self.full_path == ""

    @property
    def display_text(self) -> str:
        if self.total_lines > 0:
            return f"{self.name} ({self.coverage_percentage:.1f}%)"
        return self.name

    def add_child(self, child: HierarchyNode) -> None:
        self.children.append(child)

    def iter_nodes(self) -> Iterator[HierarchyNode]:
        """Yield this node and its descendants depth-first, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, path: str) -> HierarchyNode | None:
        """Return the first node whose full path equals *path*."""
        return next((node for node in self.iter_nodes() if node.full_path == path), None)

    def count(self) -> int:
        """Number of nodes below this one."""
        return sum(1 for _ in self.iter_nodes()) - 1


@dataclass(slots=True)
class BuildResult:
    root: HierarchyNode
    fallbacks: int = 0


def parent_path(path: str) -> str:
    """Drop the last dot-separated segment; top-level paths map to the root (``""``)."""
    if not path:
        return ""
    head, sep, _tail = path.rpartition(".")
    return head if sep else ""


def build_tree(
    records: Iterable[CoverageRecord],
    *,
    link_hint: Callable[[CoverageRecord], str | None] | None = None,
    root_name: str = ROOT_NAME,
) -> BuildResult:
    """Link *records* (already carrying paths) under a synthetic root.

    A record whose parent path was never registered (dropped row, broken
    indentation) is attached to the root instead of being lost. A later record
    with an already registered path replaces the earlier map entry; both nodes
    stay in the tree.
    """
    root = HierarchyNode(name=root_name)
    by_path: dict[str, HierarchyNode] = {"": root}
    fallbacks = 0

    for record in records:
        node = HierarchyNode.from_record(record, link_hint=link_hint(record) if link_hint else None)
        parent = by_path.get(parent_path(record.path))
        if parent is None:
            root.add_child(node)
            fallbacks += 1
            logger.debug("attached %s to root (parent %r missing)", record.path, parent_path(record.path))
        else:
            parent.add_child(node)
            logger.debug("attached %s", record.path)
        by_path[record.path] = node

    logger.debug("hierarchy built with %d top-level nodes", len(root.children))
    return BuildResult(root=root, fallbacks=fallbacks)


def template_link_hint(template: str) -> Callable[[CoverageRecord], str | None]:
    """Return a link-hint factory formatting *template* with ``{name}`` and ``{path}``."""

    def _hint(record: CoverageRecord) -> str | None:
        return template.format(name=record.name, path=record.path)

    return _hint


__all__ = [
    "BuildResult",
    "HierarchyNode",
    "build_tree",
    "parent_path",
    "template_link_hint",
]
