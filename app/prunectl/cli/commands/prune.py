"""Prune command implementation.

Compares the recorded inventories with the desired objects to show which
objects are no longer declared and should be deleted.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from prunectl.core.config import ConfigError, ProjectConfig, load_config_or_default
from prunectl.core.grouping import (
    add_inventory_to_grouping_object,
    create_grouping_object,
    find_grouping_object,
    inventory_id_of,
)
from prunectl.core.prune import PrunePlan, compute_prune_plan
from prunectl.core.store import InventoryStore, StoreError, load_objects
from prunectl.errors import InventoryError
from prunectl.models.resource import ResourceInfo
from prunectl.utils.formatting import (
    console,
    create_identity_table,
    print_error,
    print_success,
)


def _build_current_grouping_object(
    objects: list[ResourceInfo], config: ProjectConfig
) -> ResourceInfo:
    """Fill in the grouping object for the desired objects.

    A grouping object already present among the objects is used as is;
    otherwise one is created from the config.
    """
    infos: list[ResourceInfo] = list(objects)
    if find_grouping_object(infos) is None:
        settings = config.inventory
        infos.insert(
            0,
            create_grouping_object(settings.namespace, settings.name, settings.inventory_id),
        )
    return add_inventory_to_grouping_object(infos)


def _print_summary(plan: PrunePlan) -> None:
    console.print(
        f"\nSummary: [pruned]{len(plan.prune)} to prune[/pruned], "
        f"[kept]{len(plan.current)} current[/kept] "
        f"[muted]({len(plan.past)} previously applied)[/muted]"
    )


def prune_objects(
    objects_file: Annotated[
        Path,
        typer.Argument(help="JSON file with the desired object manifests."),
    ],
    brief: Annotated[
        bool,
        typer.Option("--brief", "-b", help="Show summary counts only."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for scripting."),
    ] = False,
    record: Annotated[
        bool,
        typer.Option("--record", "-r", help="Record the current inventory afterwards."),
    ] = False,
) -> None:
    """Show objects from previous applies that are no longer declared.

    The prune set is every object recorded in a past snapshot of the same
    inventory id that is missing from the inventory built from OBJECTS_FILE.

    Examples:
        prunectl prune objects.json             # Show objects to prune
        prunectl prune objects.json --json      # JSON output for scripting
        prunectl prune objects.json --record    # Also record this apply
    """
    store = InventoryStore()
    try:
        config = load_config_or_default()
        current = _build_current_grouping_object(load_objects(objects_file), config)
        past = store.get_snapshots(inventory_id=inventory_id_of(current))
        plan = compute_prune_plan(past, current)
    except (ConfigError, InventoryError, StoreError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(plan.to_dict()))
    elif brief:
        _print_summary(plan)
    elif plan.is_empty:
        print_success("Nothing to prune.")
    else:
        console.print(create_identity_table("Objects to Prune", plan.prune.sorted(), "pruned"))
        _print_summary(plan)

    if record:
        try:
            store.record_snapshot(current)
        except (StoreError, RuntimeError) as e:
            print_error(f"Failed to record inventory: {e}")
            raise typer.Exit(code=1) from e
        if not json_output:
            print_success(f"Recorded inventory {current.namespace}/{current.name}.")
