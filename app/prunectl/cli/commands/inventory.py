"""Inventory command implementation.

Shows recorded inventories and decodes inventory tokens.
"""

import json
from typing import Annotated

import typer

from prunectl.core.grouping import read_inventory
from prunectl.core.store import InventoryStore, StoreError
from prunectl.errors import InventoryError
from prunectl.models.identity import parse_identity
from prunectl.utils.formatting import (
    console,
    create_identity_table,
    print_error,
    print_info,
)

app = typer.Typer(
    help="Inspect recorded inventories.",
    no_args_is_help=True,
)


@app.command("show")
def show_inventory(
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for scripting."),
    ] = False,
) -> None:
    """Show the members of the most recently recorded inventory."""
    store = InventoryStore()
    try:
        snapshot = store.latest_snapshot()
        if snapshot is None:
            print_info("No inventory has been recorded yet.")
            return
        inventory = read_inventory(snapshot)
    except (InventoryError, StoreError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps({"name": snapshot.name, "members": inventory.tokens()}))
        return

    title = f"Inventory {snapshot.namespace}/{snapshot.name}"
    console.print(create_identity_table(title, inventory.sorted(), "kept"))
    console.print(f"\n[muted]{len(inventory)} objects[/muted]")


@app.command("decode")
def decode_token(
    token: Annotated[str, typer.Argument(help="Inventory token to decode.")],
) -> None:
    """Decode an inventory token into its fields.

    Example:
        prunectl inventory decode test-namespace_test-name_apps_ReplicaSet
    """
    try:
        identity = parse_identity(token)
    except InventoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    namespace, name, group, kind = identity.canonical_key
    console.print(f"Namespace: [info]{namespace or '-'}[/info]")
    console.print(f"Name:      [info]{name}[/info]")
    console.print(f"Group:     [info]{group or 'core'}[/info]")
    console.print(f"Kind:      [info]{kind}[/info]")
