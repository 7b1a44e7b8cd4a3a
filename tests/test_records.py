from __future__ import annotations

import pytest

from covtree.core.config import LINES_SCALE, TOTAL_LINES
from covtree.core.records import CoverageMetrics, parse_decimal, parse_line, parse_lines, split_rows
from tests.conftest import row


def test_parse_line_top_level_row() -> None:
    rec = parse_line("75.23 82.15 68.90 91.45 88.20 79.60 top")
    assert rec is not None
    assert rec.name == "top"
    assert rec.indent_depth == 0
    assert rec.path == ""
    assert rec.metrics == CoverageMetrics(75.23, 82.15, 68.90, 91.45, 88.20, 79.60)
    assert rec.coverage_percentage == 75.23


def test_parse_line_counts_leading_spaces_and_collapses_runs() -> None:
    rec = parse_line("    10.0    20.0  30.0 40.0     50.0 60.0   leaf  ")
    assert rec is not None
    assert rec.indent_depth == 4
    assert rec.name == "leaf"
    assert rec.metrics.branch == 60.0


def test_lines_covered_uses_fixed_scale() -> None:
    rec = parse_line("50.0 82.5 0 0 0 0 top")
    assert rec is not None
    assert rec.lines_covered == 82500
    assert rec.lines_covered == int(82.5 * LINES_SCALE)
    assert rec.total_lines == TOTAL_LINES == 10000


@pytest.mark.parametrize("line", ["", "   ", "\t", "\r\n"])
def test_blank_lines_yield_nothing(line: str) -> None:
    assert parse_line(line) is None


def test_too_few_fields_are_dropped() -> None:
    assert parse_line("1.0 2.0 3.0 4.0 top") is None
    assert parse_line("1.0 2.0 3.0 4.0 5.0 6.0") is None


@pytest.mark.parametrize(
    "line",
    [
        "abc 2.0 3.0 4.0 5.0 6.0 top",
        "1.0 2,5 3.0 4.0 5.0 6.0 top",
        "1.0 2.0 nan 4.0 5.0 6.0 top",
        "1.0 2.0 3.0 inf 5.0 6.0 top",
        "1.0 2.0 3.0 4.0 1_0 6.0 top",
        "1.0 2.0 3.0 4.0 5.0 1e999 top",
    ],
)
def test_unparsable_metric_drops_row(line: str) -> None:
    assert parse_line(line) is None


def test_line_metric_too_large_to_scale_drops_row() -> None:
    assert parse_line("50 1e306 1 1 1 1 bad") is None
    # only the line metric is scaled; a huge overall value is kept and clamped later
    rec = parse_line("1e306 50 1 1 1 1 ok")
    assert rec is not None
    assert rec.coverage_percentage == 1e306


def test_name_is_last_token_when_extra_fields_present() -> None:
    rec = parse_line("1 2 3 4 5 6 extra top.inst")
    assert rec is not None
    assert rec.name == "top.inst"


@pytest.mark.parametrize(
    ("token", "expected"),
    [("75", 75.0), ("75.5", 75.5), (".5", 0.5), ("5.", 5.0), ("-1", -1.0), ("1e2", 100.0), ("x", None)],
)
def test_parse_decimal(token: str, expected: float | None) -> None:
    assert parse_decimal(token) == expected


def test_leading_tabs_expand_to_one_level_by_default() -> None:
    rec = parse_line("\t\t1 2 3 4 5 6 deep")
    assert rec is not None
    assert rec.indent_depth == 4


def test_tab_width_zero_leaves_tabs_uncounted() -> None:
    rec = parse_line("\t1 2 3 4 5 6 flat", tab_width=0)
    assert rec is not None
    assert rec.indent_depth == 0


def test_parse_lines_total_matches_skips() -> None:
    lines = [
        row("top"),
        "",
        "   ",
        "1 2 3 4 5 top",  # 5 tokens
        "x 2 3 4 5 6 bad",
        row("core", indent=2),
    ]
    result = parse_lines(lines)
    stats = result.stats
    assert [r.name for r in result.records] == ["top", "core"]
    assert stats.lines == 6
    assert stats.blank == 2
    assert stats.too_few_fields == 1
    assert stats.invalid_number == 1
    assert stats.records == stats.lines - stats.blank - stats.too_few_fields - stats.invalid_number
    assert stats.dropped == 2


def test_parse_lines_records_source_line_numbers() -> None:
    result = parse_lines(["", row("a"), row("b")])
    assert [r.line_number for r in result.records] == [2, 3]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a\nb\n", ["a", "b"]),
        ("a\r\nb", ["a", "b"]),
        ("a\n\nb", ["a", "", "b"]),
        ("a\x0cb\x1cc\x85d e", ["a\x0cb\x1cc\x85d e"]),
        ("", []),
    ],
)
def test_split_rows_breaks_on_line_feeds_only(text: str, expected: list[str]) -> None:
    assert split_rows(text) == expected
