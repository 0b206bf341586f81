"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from prunectl.core.theme import get_theme

if TYPE_CHECKING:
    from prunectl.models.identity import ObjIdentity


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich auto-detect."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_identity_table(title: str, identities: Iterable[ObjIdentity], style: str) -> Table:
    """Create a table listing object identities.

    Args:
        title: Table title.
        identities: Identities to list, in display order.
        style: Theme style for the name column (e.g., "pruned").

    Returns:
        Rich Table with one row per identity.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Namespace", style="muted")
    table.add_column("Name", no_wrap=True)
    table.add_column("Kind", style="kind")
    table.add_column("Group", style="muted")

    for identity in identities:
        namespace, name, group, kind = identity.canonical_key
        table.add_row(namespace or "-", f"[{style}]{name}[/{style}]", kind, group or "core")
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
