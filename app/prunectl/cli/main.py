"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from prunectl import __version__
from prunectl.cli.commands import init, inventory, prune

# Create main Typer app
app = typer.Typer(
    name="prunectl",
    help="Track applied objects and compute which ones to prune.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"prunectl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """prunectl - Inventory tracking for applied objects.

    Records which objects each apply created, and computes the objects
    that are no longer declared and should be deleted.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(init.app, name="init")
app.add_typer(inventory.app, name="inventory")
app.command(name="prune")(prune.prune_objects)


if __name__ == "__main__":
    app()
