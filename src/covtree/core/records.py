"""Parse rows of a hierarchy dump into typed coverage records.

A row looks like::

      75.23  82.15  68.90  91.45  88.20  79.60  top

six metrics (overall, line, condition, toggle, fsm, branch) followed by the
instance name. Leading spaces encode nesting. Malformed rows are dropped, never
raised: a partially broken dump still yields a best-effort tree.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covtree._meta import logger
from covtree.core.config import DEFAULT_TAB_WIDTH, LINES_SCALE, METRIC_FIELDS, MIN_FIELDS, TOTAL_LINES

if TYPE_CHECKING:
    from collections.abc import Iterable

# Locale-invariant decimal: no nan/inf, no digit grouping, "." only.
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True, slots=True)
class CoverageMetrics:
    """The six per-instance coverage percentages, in dump column order."""

    overall: float
    line: float
    condition: float
    toggle: float
    fsm: float
    branch: float

    def as_dict(self) -> dict[str, float]:
        return {
            "overall": self.overall,
            "line": self.line,
            "condition": self.condition,
            "toggle": self.toggle,
            "fsm": self.fsm,
            "branch": self.branch,
        }


@dataclass(frozen=True, slots=True)
class CoverageRecord:
    """One parsed dump row. ``path`` stays empty until the resolver assigns it."""

    name: str
    indent_depth: int
    metrics: CoverageMetrics
    path: str = ""
    line_number: int = 0

    @property
    def coverage_percentage(self) -> float:
        return self.metrics.overall

    @property
    def lines_covered(self) -> int:
        return math.floor(self.metrics.line * LINES_SCALE)

    @property
    def total_lines(self) -> int:
        return TOTAL_LINES


@dataclass(slots=True)
class ParseStats:
    """Tally of how each input line was handled."""

    lines: int = 0
    blank: int = 0
    too_few_fields: int = 0
    invalid_number: int = 0
    records: int = 0

    @property
    def dropped(self) -> int:
        return self.too_few_fields + self.invalid_number


@dataclass(slots=True)
class ParseResult:
    records: list[CoverageRecord] = field(default_factory=list)
    stats: ParseStats = field(default_factory=ParseStats)


def parse_decimal(token: str) -> float | None:
    """Return *token* as a float, or ``None`` when it is not a plain decimal."""
    if not _DECIMAL_RE.match(token):
        return None
    value = float(token)
    # "1e999" matches the pattern but overflows.
    return value if math.isfinite(value) else None


def _expand_leading_tabs(line: str, tab_width: int) -> str:
    if tab_width <= 0 or "\t" not in line:
        return line
    body = line.lstrip(" \t")
    lead = line[: len(line) - len(body)]
    return lead.expandtabs(tab_width) + body


def _measure(line: str, tab_width: int) -> tuple[int, list[str]]:
    expanded = _expand_leading_tabs(line, tab_width)
    content = expanded.lstrip(" ")
    depth = len(expanded) - len(content)
    tokens = [tok for tok in re.split(r"\s+", content.strip()) if tok]
    return depth, tokens


def _parse_metrics(tokens: list[str]) -> CoverageMetrics | None:
    values: list[float] = []
    for tok in tokens[:METRIC_FIELDS]:
        value = parse_decimal(tok)
        if value is None:
            return None
        values.append(value)
    metrics = CoverageMetrics(*values)
    # lines_covered scales the line metric; it has to stay a finite integer.
    if not math.isfinite(metrics.line * LINES_SCALE):
        return None
    return metrics


def parse_line(
    line: str,
    *,
    line_number: int = 0,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> CoverageRecord | None:
    """Parse one dump row; blank or malformed rows yield ``None``."""
    record, _reason = _parse_line(line, line_number=line_number, tab_width=tab_width)
    return record


def _parse_line(line: str, *, line_number: int, tab_width: int) -> tuple[CoverageRecord | None, str]:
    if not line.strip():
        return None, "blank"

    depth, tokens = _measure(line.rstrip("\r\n"), tab_width)
    if len(tokens) < MIN_FIELDS:
        logger.debug("line %d: dropped, %d fields (need %d)", line_number, len(tokens), MIN_FIELDS)
        return None, "too_few_fields"

    metrics = _parse_metrics(tokens)
    if metrics is None:
        logger.debug("line %d: dropped, non-numeric metric in %r", line_number, tokens[:METRIC_FIELDS])
        return None, "invalid_number"

    return (
        CoverageRecord(
            name=tokens[-1],
            indent_depth=depth,
            metrics=metrics,
            line_number=line_number,
        ),
        "ok",
    )


def split_rows(text: str) -> list[str]:
    """Split *text* into rows on line feeds only, so stray control characters stay inside their row."""
    rows = text.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    return [r.removesuffix("\r") for r in rows]


def parse_lines(lines: Iterable[str], *, tab_width: int = DEFAULT_TAB_WIDTH) -> ParseResult:
    """Parse every row of a dump, keeping file order and counting what was skipped."""
    result = ParseResult()
    stats = result.stats
    for number, line in enumerate(lines, start=1):
        stats.lines += 1
        record, reason = _parse_line(line, line_number=number, tab_width=tab_width)
        if record is not None:
            result.records.append(record)
            stats.records += 1
        elif reason == "blank":
            stats.blank += 1
        elif reason == "too_few_fields":
            stats.too_few_fields += 1
        else:
            stats.invalid_number += 1
    return result


__all__ = [
    "CoverageMetrics",
    "CoverageRecord",
    "ParseResult",
    "ParseStats",
    "parse_decimal",
    "parse_line",
    "parse_lines",
    "split_rows",
]
