"""Resource records for applied objects.

A ResourceInfo pairs an object's namespace and name with its manifest
payload, the same shape the apply layer hands to the inventory code.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from prunectl.errors import ExtractionError
from prunectl.models.identity import GroupKind, ObjIdentity, create_identity


@dataclass(frozen=True, slots=True)
class ResourceInfo:
    """A single object record.

    Attributes:
        namespace: Namespace the object lives in (empty if cluster-scoped).
        name: Object name.
        object: Manifest payload (apiVersion, kind, metadata, ...), or None
            if the record has no payload.
    """

    namespace: str
    name: str
    object: dict[str, Any] | None = None

    @classmethod
    def from_object(cls, obj: Mapping[str, Any]) -> ResourceInfo:
        """Build a ResourceInfo from a manifest dictionary.

        Args:
            obj: Object manifest with a 'metadata' section.

        Returns:
            ResourceInfo holding a copy of the manifest.

        Raises:
            ExtractionError: If the manifest has no usable metadata.
        """
        metadata = obj.get("metadata")
        if not isinstance(metadata, Mapping):
            msg = f"Object has no metadata: kind={obj.get('kind')!r}"
            raise ExtractionError(msg)
        return cls(
            namespace=str(metadata.get("namespace") or ""),
            name=str(metadata.get("name") or ""),
            object=dict(obj),
        )


def group_kind_from_object(obj: Mapping[str, Any]) -> GroupKind:
    """Derive the GroupKind of a manifest from its apiVersion and kind.

    'apps/v1' yields group 'apps'; a bare version such as 'v1' is the
    core group and yields an empty group.
    """
    api_version = str(obj.get("apiVersion") or "")
    group = api_version.rpartition("/")[0]
    return GroupKind(group=group, kind=str(obj.get("kind") or ""))


def info_to_identity(info: ResourceInfo | None) -> ObjIdentity:
    """Extract the identity of a resource record.

    Args:
        info: Record to extract from.

    Returns:
        Validated ObjIdentity for the record.

    Raises:
        ExtractionError: If the record or its object payload is missing.
        ValidationError: If the extracted name or GroupKind is empty.
    """
    if info is None:
        msg = "Empty resource info"
        raise ExtractionError(msg)
    if info.object is None:
        msg = f"Empty object for resource info {info.namespace}/{info.name}"
        raise ExtractionError(msg)

    return create_identity(info.namespace, info.name, group_kind_from_object(info.object))
