"""Init command implementation.

Creates a config.toml naming the grouping object for this project.
"""

from pathlib import Path
from typing import Annotated

import typer

from prunectl.core.config import (
    DEFAULT_INVENTORY_NAME,
    DEFAULT_INVENTORY_NAMESPACE,
    ConfigError,
    InventoryConfig,
    ProjectConfig,
    config_exists,
    save_config,
)
from prunectl.core.paths import get_config_path
from prunectl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Initialize the prunectl configuration.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    namespace: Annotated[
        str,
        typer.Option("--namespace", help="Namespace of the grouping object."),
    ] = DEFAULT_INVENTORY_NAMESPACE,
    name: Annotated[
        str,
        typer.Option("--name", help="Name of the grouping object."),
    ] = DEFAULT_INVENTORY_NAME,
    inventory_id: Annotated[
        str | None,
        typer.Option("--inventory-id", help="Inventory label value (defaults to the name)."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path for the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config."),
    ] = False,
) -> None:
    """Write a config.toml describing the grouping object.

    Examples:
        prunectl init                              # Defaults
        prunectl init --namespace ops --name app   # Custom grouping object
    """
    if ctx.invoked_subcommand is not None:
        return

    config_path = output or get_config_path()
    if config_exists(config_path) and not force:
        print_error(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        config = ProjectConfig(
            inventory=InventoryConfig(
                namespace=namespace,
                name=name,
                inventory_id=inventory_id or name,
            )
        )
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved = save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
    console.print(
        f"  Grouping object: [info]{config.inventory.namespace}/{config.inventory.name}[/info]"
        f" [muted](id {config.inventory.inventory_id})[/muted]"
    )
