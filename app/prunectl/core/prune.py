"""Prune set calculation.

Compares the inventories recorded by previous applies with the current
grouping object to find objects that are no longer declared and must be
deleted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from prunectl.core.grouping import InventoryContainer, read_inventory
from prunectl.core.inventory import Inventory
from prunectl.models.identity import ObjIdentity
from prunectl.models.resource import ResourceInfo

logger = logging.getLogger(__name__)

# A grouping object record, or anything exposing its membership list
GroupingSource = ResourceInfo | InventoryContainer | None


def union_past_inventory(past_infos: Sequence[GroupingSource]) -> Inventory:
    """Union the inventories of all past grouping objects.

    Args:
        past_infos: Grouping records from previous applies.

    Returns:
        Inventory of every identity recorded in any of them.

    Raises:
        RetrievalError: If any record is malformed. No partial result is
            returned.
    """
    union = Inventory()
    for record in past_infos:
        union = union.union(read_inventory(record))
    logger.debug("Unioned %d past grouping objects into %d entries", len(past_infos), len(union))
    return union


def _prune_difference(past: Inventory, current: Inventory) -> Inventory:
    return Inventory.from_list(identity for identity in past.sorted() if identity not in current)


class PruneCalculator:
    """Computes the set of objects to delete after an apply.

    Attributes:
        current_grouping_object: Grouping record of the current apply, or
            None if there is none (every past object is then a candidate).

    Example:
        >>> calculator = PruneCalculator(current_grouping_object=current)
        >>> for identity in calculator.calc_prune_set(past):
        ...     print(identity)
    """

    def __init__(self, current_grouping_object: GroupingSource = None) -> None:
        self.current_grouping_object = current_grouping_object

    def current_inventory(self) -> Inventory:
        """Inventory of the current grouping object (empty if unset)."""
        if self.current_grouping_object is None:
            return Inventory()
        return read_inventory(self.current_grouping_object)

    def calc_prune_set(self, past_infos: Sequence[GroupingSource]) -> Inventory:
        """Return identities present in some past inventory but not the current one.

        Args:
            past_infos: Grouping records from previous applies.

        Returns:
            Inventory of identities to prune.

        Raises:
            RetrievalError: If any past or current record is malformed.
        """
        return self.plan(past_infos).prune

    def plan(self, past_infos: Sequence[GroupingSource]) -> PrunePlan:
        """Compute the past, current and prune inventories in one pass.

        Raises:
            RetrievalError: If any past or current record is malformed.
        """
        past = union_past_inventory(past_infos)
        current = self.current_inventory()
        prune = _prune_difference(past, current)
        logger.debug(
            "Prune set: %d of %d past entries (current has %d)",
            len(prune),
            len(past),
            len(current),
        )
        return PrunePlan(past=past, current=current, prune=prune)


@dataclass(frozen=True, slots=True)
class PrunePlan:
    """Result of comparing past inventories with the current one.

    Attributes:
        past: Union of all past inventories.
        current: Inventory of the current grouping object.
        prune: Identities to delete.
    """

    past: Inventory
    current: Inventory
    prune: Inventory

    @property
    def is_empty(self) -> bool:
        """True if nothing needs to be pruned."""
        return not self.prune

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "past": len(self.past),
                "current": len(self.current),
                "prune": len(self.prune),
            },
            "prune": [_identity_to_dict(identity) for identity in self.prune.sorted()],
        }


def _identity_to_dict(identity: ObjIdentity) -> dict[str, str]:
    namespace, name, group, kind = identity.canonical_key
    return {
        "token": str(identity),
        "namespace": namespace,
        "name": name,
        "group": group,
        "kind": kind,
    }


def compute_prune_plan(
    past_infos: Sequence[GroupingSource], current: GroupingSource
) -> PrunePlan:
    """Compute the full prune plan for an apply.

    Raises:
        RetrievalError: If any past or current record is malformed.
    """
    return PruneCalculator(current_grouping_object=current).plan(past_infos)
