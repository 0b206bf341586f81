"""Inventory set of object identities.

An Inventory is an immutable set of ObjIdentity values. Membership is by
canonical identity, so duplicates collapse regardless of insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from prunectl.models.identity import ObjIdentity, encode_identity


class Inventory:
    """Immutable set of object identities.

    There is no removal operation; set difference for pruning lives in
    prunectl.core.prune.

    Example:
        >>> inv = Inventory.from_list([pod1, pod1, pod2])
        >>> len(inv)
        2
    """

    __slots__ = ("_members",)

    def __init__(self, identities: Iterable[ObjIdentity] = ()) -> None:
        self._members: frozenset[ObjIdentity] = frozenset(identities)

    @classmethod
    def from_list(cls, identities: Iterable[ObjIdentity]) -> Inventory:
        """Build an inventory from identities, dropping duplicates."""
        return cls(identities)

    def union(self, other: Inventory | ObjIdentity) -> Inventory:
        """Return a new inventory with the members of both.

        Args:
            other: Another inventory or a single identity.

        Returns:
            New Inventory containing every identity present in either input.
        """
        if isinstance(other, ObjIdentity):
            return Inventory(self._members | {other})
        return Inventory(self._members | other._members)

    def __or__(self, other: Inventory | ObjIdentity) -> Inventory:
        if not isinstance(other, Inventory | ObjIdentity):
            return NotImplemented
        return self.union(other)

    def sorted(self) -> list[ObjIdentity]:
        """Members ordered lexicographically by their encoded token."""
        return sorted(self._members, key=encode_identity)

    def tokens(self) -> list[str]:
        """Encoded tokens of all members, sorted."""
        return [encode_identity(identity) for identity in self.sorted()]

    def __contains__(self, item: object) -> bool:
        return item in self._members

    def __iter__(self) -> Iterator[ObjIdentity]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inventory):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __str__(self) -> str:
        return "{" + ", ".join(self.tokens()) + "}"

    def __repr__(self) -> str:
        return f"Inventory({self.tokens()!r})"
