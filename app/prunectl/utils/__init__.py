"""Utility modules for prunectl.

This module exports commonly used utility functions.
"""

from prunectl.utils.formatting import (
    console,
    create_identity_table,
    err_console,
    print_error,
    print_info,
    print_success,
)

__all__ = [
    "console",
    "create_identity_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
]
