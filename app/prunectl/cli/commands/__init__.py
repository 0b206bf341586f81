"""CLI commands for prunectl.

This package contains all subcommand implementations.
"""

from prunectl.cli.commands import init, inventory, prune

__all__ = ["init", "inventory", "prune"]
