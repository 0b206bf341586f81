"""Grouping objects that persist an inventory.

A grouping object is a ConfigMap carrying the inventory label. The encoded
identities of every applied object are stored as keys of its 'data'
section with empty values, which is why the token separator has to be a
valid ConfigMap key character.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from prunectl.core.inventory import Inventory
from prunectl.errors import DecodeError, RetrievalError, ValidationError
from prunectl.models.identity import ObjIdentity, encode_identity, parse_identity
from prunectl.models.resource import ResourceInfo, info_to_identity

logger = logging.getLogger(__name__)

# Label marking a ConfigMap as a grouping object; value is the inventory id
GROUPING_LABEL = "prunectl.io/inventory-id"

GROUPING_API_VERSION = "v1"
GROUPING_KIND = "ConfigMap"


class InventoryContainer(Protocol):
    """Read interface into a persisted inventory."""

    def membership(self) -> list[str]:
        """Return the encoded identity tokens stored in the container."""
        ...


class GroupingRecord:
    """InventoryContainer backed by a grouping object record.

    Attributes:
        info: The grouping object record.
    """

    def __init__(self, info: ResourceInfo | None) -> None:
        self.info = info

    @property
    def _label(self) -> str:
        if self.info is None:
            return "<none>"
        return f"{self.info.namespace}/{self.info.name}"

    def membership(self) -> list[str]:
        """Return the inventory tokens in storage order.

        Raises:
            RetrievalError: If the record is not a well-formed grouping object.
        """
        if self.info is None or not isinstance(self.info.object, Mapping):
            msg = f"Grouping object {self._label} is not structured as a ConfigMap"
            raise RetrievalError(msg)

        data = self.info.object.get("data")
        if data is None:
            return []
        if not isinstance(data, Mapping):
            msg = f"Grouping object {self._label} has malformed data section"
            raise RetrievalError(msg)
        return [str(key) for key in data]


def read_inventory(record: ResourceInfo | InventoryContainer | None) -> Inventory:
    """Read and decode the membership list of one grouping record.

    Args:
        record: A grouping object record, or any InventoryContainer.

    Returns:
        Inventory of the decoded members.

    Raises:
        RetrievalError: If the record is malformed or holds an invalid token.
    """
    container = (
        GroupingRecord(record) if record is None or isinstance(record, ResourceInfo) else record
    )
    identities: list[ObjIdentity] = []
    for token in container.membership():
        try:
            identities.append(parse_identity(token))
        except (DecodeError, ValidationError) as e:
            msg = f"Invalid inventory entry {token!r}: {e}"
            raise RetrievalError(msg) from e
    return Inventory.from_list(identities)


def is_grouping_object(obj: Mapping[str, Any] | None) -> bool:
    """Check if a manifest is a ConfigMap carrying the inventory label."""
    if not isinstance(obj, Mapping) or obj.get("kind") != GROUPING_KIND:
        return False
    metadata = obj.get("metadata")
    if not isinstance(metadata, Mapping):
        return False
    labels = metadata.get("labels")
    return isinstance(labels, Mapping) and GROUPING_LABEL in labels


def find_grouping_object(infos: Sequence[ResourceInfo | None]) -> ResourceInfo | None:
    """Return the first grouping object among infos, or None."""
    for info in infos:
        if info is not None and is_grouping_object(info.object):
            return info
    return None


def inventory_id_of(info: ResourceInfo | None) -> str | None:
    """Return the inventory label value of a grouping object, or None."""
    if info is None or info.object is None or not is_grouping_object(info.object):
        return None
    value = info.object["metadata"]["labels"][GROUPING_LABEL]
    return str(value) if value is not None else None


def create_grouping_object(namespace: str, name: str, inventory_id: str) -> ResourceInfo:
    """Build an empty grouping object record.

    Args:
        namespace: Namespace to store the grouping object in.
        name: Name of the grouping object.
        inventory_id: Value of the inventory label.

    Returns:
        ResourceInfo wrapping a labelled ConfigMap with no data.
    """
    obj: dict[str, Any] = {
        "apiVersion": GROUPING_API_VERSION,
        "kind": GROUPING_KIND,
        "metadata": {
            "name": name,
            "namespace": namespace,
            "labels": {GROUPING_LABEL: inventory_id},
        },
    }
    return ResourceInfo(namespace=namespace, name=name, object=obj)


def add_inventory_to_grouping_object(infos: Sequence[ResourceInfo | None]) -> ResourceInfo:
    """Store the identities of all other infos in the grouping object.

    The grouping object itself is not part of its own inventory. Its
    'data' section is replaced with one empty-valued key per encoded
    identity.

    Args:
        infos: Applied records, one of which is the grouping object.

    Returns:
        The grouping object record, with its data section filled in.

    Raises:
        RetrievalError: If infos contains no grouping object.
        ExtractionError: If another record has no object payload.
        ValidationError: If another record has an invalid identity.
    """
    grouping_info = find_grouping_object(infos)
    if grouping_info is None or grouping_info.object is None:
        msg = "Grouping object not found among applied objects"
        raise RetrievalError(msg)

    tokens = sorted(
        encode_identity(info_to_identity(info)) for info in infos if info is not grouping_info
    )
    grouping_info.object["data"] = dict.fromkeys(tokens, "")
    logger.debug("Stored %d inventory entries in %s", len(tokens), grouping_info.name)
    return grouping_info


def retrieve_inventory_from_grouping_object(infos: Sequence[ResourceInfo | None]) -> Inventory:
    """Locate the grouping object among infos and decode its inventory.

    Raises:
        RetrievalError: If there is no grouping object or it is malformed.
    """
    grouping_info = find_grouping_object(infos)
    if grouping_info is None:
        msg = "Grouping object not found among applied objects"
        raise RetrievalError(msg)
    return read_inventory(grouping_info)
