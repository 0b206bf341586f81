"""Exception hierarchy for inventory tracking.

All errors raised while building identities, decoding inventory tokens, or
reading grouping objects derive from InventoryError so callers can handle
them in one place.
"""


class InventoryError(Exception):
    """Base exception for inventory-related errors."""


class ValidationError(InventoryError):
    """Raised when an identity has an empty name or an unset GroupKind."""


class DecodeError(InventoryError):
    """Raised when an inventory token does not split into four fields."""


class ExtractionError(InventoryError):
    """Raised when a resource record or its object payload is missing."""


class RetrievalError(InventoryError):
    """Raised when a grouping object cannot yield its membership list."""
