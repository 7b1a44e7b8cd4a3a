"""Infer each record's dotted path from its indentation.

The dump format carries no explicit parent reference. A record at depth ``d``
belongs to the most recently seen record at depth ``d - INDENT_WIDTH``, no
matter how many shallower or deeper rows came in between. This is a last-match
rule over the whole history, not a scope stack: an unusual interleaving of
depths can attach a row to a sibling subtree's last node. That ambiguity comes
with the format and is kept as-is.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from covtree.core.config import INDENT_WIDTH

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covtree.core.records import CoverageRecord


def resolve_path(
    record: CoverageRecord,
    latest_by_depth: dict[int, str],
    *,
    indent_width: int = INDENT_WIDTH,
) -> str:
    """Return the path for *record* given the latest path seen at each depth."""
    if record.indent_depth == 0:
        return record.name
    parent_path = latest_by_depth.get(record.indent_depth - indent_width)
    if parent_path is None:
        return record.name
    return f"{parent_path}.{record.name}"


def resolve_paths(
    records: Iterable[CoverageRecord],
    *,
    indent_width: int = INDENT_WIDTH,
) -> list[CoverageRecord]:
    """Return *records* in the same order with ``path`` filled in.

    ``latest_by_depth`` holds, per indentation depth, the path of the last record
    emitted at that depth, which is exactly what a reverse scan over all earlier
    records would find.
    """
    latest_by_depth: dict[int, str] = {}
    resolved: list[CoverageRecord] = []
    for record in records:
        path = resolve_path(record, latest_by_depth, indent_width=indent_width)
        latest_by_depth[record.indent_depth] = path
        resolved.append(replace(record, path=path))
    return resolved


__all__ = ["resolve_path", "resolve_paths"]
