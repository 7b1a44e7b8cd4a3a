from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from covtree import __version__
from covtree.cli import show


def create_app() -> typer.Typer:
    app = typer.Typer(help="Browse hierarchical coverage dumps as a colored tree.")

    @app.callback(invoke_without_command=True)
    def _root(
        ctx: typer.Context,
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit"),
        ] = False,
    ) -> None:
        if version:
            typer.echo(f"covtree {__version__}")
            raise typer.Exit
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit

    @app.command("version")
    def _version() -> None:
        """Print the version and exit."""
        typer.echo(__version__)

    show.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
