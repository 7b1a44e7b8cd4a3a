from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from covtree._meta import logger
from covtree.cli._shared import configure_logging, resolve_use_color
from covtree.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_OK,
)
from covtree.core.config import Settings, determine_hierarchy_file, load_settings
from covtree.core.pipeline import (
    DataError,
    LoadResult,
    NoInputError,
    SystemIOError,
    UnexpectedError,
    load_hierarchy_file,
)
from covtree.core.types import OutputFormat
from covtree.errors import ConfigError, HierarchyFileNotFoundError
from covtree.io import color_allowed, write_output
from covtree.render.render import RenderOptions, render

_BOOL_TRUE = True
_BOOL_FALSE = False


def check_link_template(template: str) -> str:
    """Return *template* if it formats with only ``{name}`` and ``{path}``."""
    try:
        template.format(name="name", path="path")
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        msg = f"invalid link template {template!r}: use only {{name}} and {{path}} fields"
        raise ValueError(msg) from exc
    return template


def _load_settings_or_exit() -> Settings:
    try:
        settings = load_settings()
        if settings.link_template:
            check_link_template(settings.link_template)
    except (ConfigError, ValueError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc
    return settings


def _load_or_exit(path: Path, *, tab_width: int, link_template: str | None) -> LoadResult:
    try:
        return load_hierarchy_file(path, tab_width=tab_width, link_template=link_template)
    except NoInputError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc
    except SystemIOError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc
    except DataError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_DATAERR) from exc
    except UnexpectedError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_GENERIC) from exc


def show_cmd(
    hierarchy: Annotated[
        Path | None,
        typer.Argument(help="Hierarchy dump. If omitted, [tool.covtree].hierarchy or ./hierarchy.txt is used."),
    ] = None,
    format_: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format.", case_sensitive=False),
    ] = OutputFormat.HUMAN,
    depth: Annotated[
        int | None,
        typer.Option("--depth", help="Only expand this many levels below the root.", min=1),
    ] = None,
    metrics: Annotated[
        bool,
        typer.Option("--metrics/--no-metrics", help="Show line/cond/toggle/fsm/branch columns."),
    ] = _BOOL_FALSE,
    stats: Annotated[
        bool,
        typer.Option("--stats/--no-stats", help="Report parsed and skipped line counts on stderr."),
    ] = _BOOL_FALSE,
    tab_width: Annotated[
        int | None,
        typer.Option("--tab-width", help="Columns per leading tab (0 leaves tabs uncounted).", min=0),
    ] = None,
    link_template: Annotated[
        str | None,
        typer.Option("--link-template", help="Per-node link, e.g. 'reports/{path}.html'."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write output to PATH (use '-' for stdout)."),
    ] = None,
    color: Annotated[
        bool,
        typer.Option("--color", help="Force color output"),
    ] = _BOOL_FALSE,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable color output"),
    ] = _BOOL_FALSE,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Emit diagnostic logging"),
    ] = _BOOL_FALSE,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Only log errors"),
    ] = _BOOL_FALSE,
) -> None:
    """Render a hierarchy dump as a coverage tree."""
    configure_logging(quiet=quiet, verbose=verbose)

    if link_template is not None:
        try:
            check_link_template(link_template)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--link-template") from exc

    settings = _load_settings_or_exit()

    try:
        path = determine_hierarchy_file(hierarchy, settings)
    except HierarchyFileNotFoundError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc

    result = _load_or_exit(
        path,
        tab_width=settings.tab_width if tab_width is None else tab_width,
        link_template=link_template or settings.link_template,
    )
    logger.debug("rendering %s as %s", path, format_.value)

    use_color = resolve_use_color(
        color=color,
        no_color=no_color,
        color_allowed=format_ is OutputFormat.HUMAN and color_allowed(output),
    )
    text = render(
        result,
        fmt=format_,
        options=RenderOptions(color=use_color, show_metrics=metrics, max_depth=depth),
    )
    write_output(text, output)

    if stats:
        s = result.stats
        typer.echo(
            f"{s.records} node(s) from {s.lines} line(s); skipped {s.blank} blank, "
            f"{s.too_few_fields} short, {s.invalid_number} non-numeric; "
            f"{s.fallback_to_root} attached to root",
            err=True,
        )
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("show")(show_cmd)


__all__ = ["check_link_template", "register"]
