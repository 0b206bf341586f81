"""CLI package for prunectl.

This package contains the Typer application and all subcommands.
"""

from prunectl.cli.main import app

__all__ = ["app"]
