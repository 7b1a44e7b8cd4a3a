"""Map coverage percentages to discrete display-severity buckets.

Buckets run from 0 (almost nothing covered) to 10 (fully covered). Each bucket
has a fixed ``(foreground, background)`` color pair that renderers use to tint
tree nodes.
"""

from __future__ import annotations

import math

from rich.style import Style

_FULL_PERCENT = 100.0
_MAX_PARTIAL_INDEX = 9
_MIN_RANGED_INDEX = 2

ColorPair = tuple[str, str]

# (foreground, background), indexed by severity bucket.
SEVERITY_STYLES: tuple[ColorPair, ...] = (
    ("#ffffff", "#8b0000"),  # 0: < 5%
    ("#ffffff", "#b22222"),  # 1: < 10%
    ("#ffffff", "#d32f2f"),  # 2
    ("#ffffff", "#e64a19"),  # 3
    ("#000000", "#f57c00"),  # 4
    ("#000000", "#ffa000"),  # 5
    ("#000000", "#ffc107"),  # 6
    ("#000000", "#ffeb3b"),  # 7
    ("#000000", "#cddc39"),  # 8
    ("#000000", "#8bc34a"),  # 9
    ("#ffffff", "#2e7d32"),  # 10: 100%
)


def clamp_percentage(value: float) -> float:
    """Clamp *value* into ``[0, 100]``; NaN counts as 0."""
    if math.isnan(value):
        return 0.0
    return min(_FULL_PERCENT, max(0.0, value))


def percentage_to_style_index(value: float) -> int:
    """Return the severity bucket (0..10) for a coverage percentage.

    Below 10% there are two coarse buckets (split at 5%). From 10% upward each
    10% band yields two buckets split at its midpoint, capped at 9; only full
    coverage reaches 10.
    """
    p = clamp_percentage(value)
    if p < 5:  # noqa: PLR2004
        return 0
    if p < 10:  # noqa: PLR2004
        return 1
    if p >= _FULL_PERCENT:
        return 10

    index = math.floor(p / 10) * 2
    if p % 10 >= 5:  # noqa: PLR2004
        index += 1
    return max(_MIN_RANGED_INDEX, min(_MAX_PARTIAL_INDEX, index))


def style_for_index(index: int) -> ColorPair:
    """Return the color pair for *index*; unknown indices get bucket 0's colors."""
    if 0 <= index < len(SEVERITY_STYLES):
        return SEVERITY_STYLES[index]
    return SEVERITY_STYLES[0]


def severity_colors(value: float) -> ColorPair:
    return style_for_index(percentage_to_style_index(value))


def severity_style(value: float) -> Style:
    """Rich style for a node with coverage *value*."""
    fg, bg = severity_colors(value)
    return Style(color=fg, bgcolor=bg)


def gradient_color(value: float) -> str:
    """Continuous red (0%) → yellow (50%) → green (100%) color as ``#rrggbb``."""
    p = clamp_percentage(value)
    if p <= 50:  # noqa: PLR2004
        red, green = 255, int(255 * (p / 50.0))
    else:
        red, green = int(255 * ((_FULL_PERCENT - p) / 50.0)), 255
    return f"#{red:02x}{green:02x}00"


__all__ = [
    "SEVERITY_STYLES",
    "ColorPair",
    "clamp_percentage",
    "gradient_color",
    "percentage_to_style_index",
    "severity_colors",
    "severity_style",
    "style_for_index",
]
