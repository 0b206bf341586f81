"""prunectl - Inventory tracking and prune-set calculation for applied resources."""

__version__ = "0.1.0"
