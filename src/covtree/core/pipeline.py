from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covtree._meta import logger
from covtree.core.config import DEFAULT_TAB_WIDTH, INDENT_WIDTH, ROOT_NAME
from covtree.core.records import parse_lines, split_rows
from covtree.core.resolve import resolve_paths
from covtree.core.tree import build_tree, template_link_hint

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from covtree.core.records import CoverageRecord
    from covtree.core.tree import HierarchyNode


class PipelineError(Exception):
    """Base class for errors emitted by the pipeline."""


class NoInputError(PipelineError):
    """Hierarchy dump was missing or could not be discovered."""


class DataError(PipelineError):
    """Hierarchy dump could not be decoded as text."""


class SystemIOError(PipelineError):
    """Filesystem IO error while reading the dump."""


class UnexpectedError(PipelineError):
    """Unexpected failure while building the hierarchy."""


@dataclass(frozen=True, slots=True)
class LoadStats:
    """How the lines of one dump were handled."""

    lines: int
    blank: int
    too_few_fields: int
    invalid_number: int
    records: int
    fallback_to_root: int

    @property
    def dropped(self) -> int:
        return self.too_few_fields + self.invalid_number

    def as_dict(self) -> dict[str, int]:
        return {
            "lines": self.lines,
            "blank": self.blank,
            "too_few_fields": self.too_few_fields,
            "invalid_number": self.invalid_number,
            "records": self.records,
            "fallback_to_root": self.fallback_to_root,
        }


@dataclass(frozen=True, slots=True)
class LoadResult:
    root: HierarchyNode
    stats: LoadStats


def load_hierarchy(
    lines: Iterable[str],
    *,
    tab_width: int = DEFAULT_TAB_WIDTH,
    indent_width: int = INDENT_WIDTH,
    link_hint: Callable[[CoverageRecord], str | None] | None = None,
    root_name: str = ROOT_NAME,
) -> LoadResult:
    """Parse, resolve and build a hierarchy tree from dump *lines*.

    All intermediate state is local to this call, so concurrent loads never
    share anything. The tree is returned only once it is complete.
    """
    parsed = parse_lines(lines, tab_width=tab_width)
    resolved = resolve_paths(parsed.records, indent_width=indent_width)
    built = build_tree(resolved, link_hint=link_hint, root_name=root_name)

    s = parsed.stats
    stats = LoadStats(
        lines=s.lines,
        blank=s.blank,
        too_few_fields=s.too_few_fields,
        invalid_number=s.invalid_number,
        records=s.records,
        fallback_to_root=built.fallbacks,
    )
    if stats.dropped:
        logger.info("skipped %d malformed line(s) of %d", stats.dropped, stats.lines)
    logger.info("loaded %d node(s), %d top-level", stats.records, len(built.root.children))
    return LoadResult(root=built.root, stats=stats)


def load_hierarchy_text(text: str, *, tab_width: int = DEFAULT_TAB_WIDTH) -> LoadResult:
    """Convenience wrapper around :func:`load_hierarchy` for a whole document."""
    return load_hierarchy(split_rows(text), tab_width=tab_width)


def decode_hierarchy(data: bytes) -> str:
    """Decode a downloaded dump; a UTF-8 BOM is dropped and bad bytes are replaced."""
    return data.decode("utf-8-sig", errors="replace")


def read_hierarchy_file(path: Path) -> str:
    """Read the dump at *path* as text, mapping filesystem failures to pipeline errors."""
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        msg = f"Hierarchy file not found: {path}"
        raise NoInputError(msg) from exc
    except IsADirectoryError as exc:
        msg = f"Hierarchy path is a directory: {path}"
        raise NoInputError(msg) from exc
    except OSError as exc:
        raise SystemIOError(str(exc)) from exc

    if b"\x00" in data:
        msg = f"{path} does not look like a text hierarchy dump"
        raise DataError(msg)
    return decode_hierarchy(data)


def load_hierarchy_file(
    path: Path,
    *,
    tab_width: int = DEFAULT_TAB_WIDTH,
    link_template: str | None = None,
) -> LoadResult:
    """Read and build the hierarchy stored at *path*."""
    text = read_hierarchy_file(path)
    link_hint = template_link_hint(link_template) if link_template else None
    try:
        return load_hierarchy(split_rows(text), tab_width=tab_width, link_hint=link_hint)
    except Exception as exc:
        logger.exception("unexpected failure")
        raise UnexpectedError(str(exc)) from exc


__all__ = [
    "DataError",
    "LoadResult",
    "LoadStats",
    "NoInputError",
    "PipelineError",
    "SystemIOError",
    "UnexpectedError",
    "decode_hierarchy",
    "load_hierarchy",
    "load_hierarchy_file",
    "load_hierarchy_text",
    "read_hierarchy_file",
]
