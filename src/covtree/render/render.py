from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covtree.core.types import OutputFormat
from covtree.render.human import render_human
from covtree.render.json import render_json

if TYPE_CHECKING:
    from covtree.core.pipeline import LoadResult


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options that affect *presentation* only (not tree content)."""

    color: bool = True
    show_metrics: bool = False
    show_links: bool = True
    max_depth: int | None = None


def render(result: LoadResult, *, fmt: OutputFormat | str, options: RenderOptions) -> str:
    """Render a loaded hierarchy to text.

    Parameters
    ----------
    result:
        Fully built hierarchy plus load statistics.
    fmt:
        One of: "human", "json".
    options:
        Presentation options (color, metric columns, depth limit).
    """
    f = str(fmt or "").strip().lower()

    if f == OutputFormat.HUMAN:
        return render_human(result.root, options)
    if f == OutputFormat.JSON:
        return render_json(result, max_depth=options.max_depth)
    msg = f"Unsupported format: {fmt!r}. Expected one of: human, json."
    raise ValueError(msg)


__all__ = ["RenderOptions", "render"]
