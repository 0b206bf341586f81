"""Object identity model for inventory tracking.

An ObjIdentity is the minimal information needed to uniquely identify an
applied object: namespace, name and GroupKind. The version is deliberately
left out because the API server does not treat a version change as a
different resource.

Identities are persisted inside grouping objects as flat tokens:

    test-namespace_test-name_apps_ReplicaSet
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from prunectl.errors import DecodeError, ValidationError

# Separates inventory fields. Allowed in a ConfigMap key, but not in a
# resource name.
FIELD_SEPARATOR = "_"

# Number of fields in an encoded identity token
TOKEN_FIELD_COUNT = 4


@dataclass(frozen=True, slots=True)
class GroupKind:
    """API group and kind of a resource type.

    Attributes:
        group: API group (empty string for the core group).
        kind: Resource kind (e.g., 'Pod', 'Deployment').
    """

    group: str
    kind: str

    @property
    def is_empty(self) -> bool:
        """Check if neither group nor kind is set."""
        return not self.group and not self.kind

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


# GroupKinds that must be normalized from the "extensions" group.
NORMALIZED_GROUP_KINDS: MappingProxyType[GroupKind, GroupKind] = MappingProxyType(
    {
        GroupKind("extensions", "Deployment"): GroupKind("apps", "Deployment"),
        GroupKind("extensions", "DaemonSet"): GroupKind("apps", "DaemonSet"),
        GroupKind("extensions", "ReplicaSet"): GroupKind("apps", "ReplicaSet"),
        GroupKind("extensions", "Ingress"): GroupKind("networking", "Ingress"),
        GroupKind("extensions", "NetworkPolicy"): GroupKind("networking", "NetworkPolicy"),
        GroupKind("extensions", "PodSecurityPolicy"): GroupKind("policy", "PodSecurityPolicy"),
    }
)


def normalize_group_kind(group_kind: GroupKind) -> GroupKind:
    """Map a legacy GroupKind to its current group, if it has one."""
    return NORMALIZED_GROUP_KINDS.get(group_kind, group_kind)


@dataclass(frozen=True, slots=True, eq=False)
class ObjIdentity:
    """Identifying information for an applied object.

    Instances are immutable. Two identities are equal when their normalized
    (namespace, name, group, kind) tuples are equal, so an identity recorded
    with a legacy GroupKind compares equal to one using the current group.

    Use create_identity() or parse_identity() rather than the constructor
    so that fields are trimmed and validated.

    Attributes:
        namespace: Object namespace (empty for cluster-scoped objects).
        name: Object name.
        group_kind: API group and kind of the object.
    """

    namespace: str
    name: str
    group_kind: GroupKind

    @property
    def canonical_key(self) -> tuple[str, str, str, str]:
        """Normalized (namespace, name, group, kind) tuple."""
        gk = normalize_group_kind(self.group_kind)
        return (self.namespace, self.name, gk.group, gk.kind)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjIdentity):
            return NotImplemented
        return self.canonical_key == other.canonical_key

    def __hash__(self) -> int:
        return hash(self.canonical_key)

    def __str__(self) -> str:
        return FIELD_SEPARATOR.join(self.canonical_key)


def create_identity(namespace: str, name: str, group_kind: GroupKind) -> ObjIdentity:
    """Create a validated ObjIdentity.

    Namespace and name are trimmed. Namespace can be empty, name cannot.

    Args:
        namespace: Object namespace.
        name: Object name.
        group_kind: API group and kind.

    Returns:
        New ObjIdentity.

    Raises:
        ValidationError: If the trimmed name is empty or group_kind is empty.
    """
    name = name.strip()
    if not name:
        msg = "Empty name for inventory object"
        raise ValidationError(msg)
    if group_kind.is_empty:
        msg = f"Empty GroupKind for inventory object {name!r}"
        raise ValidationError(msg)

    return ObjIdentity(namespace=namespace.strip(), name=name, group_kind=group_kind)


def encode_identity(identity: ObjIdentity) -> str:
    """Encode an identity as an inventory token.

    Fields are joined in the order namespace, name, group, kind after
    applying the GroupKind normalization table.

    Args:
        identity: The identity to encode.

    Returns:
        Inventory token such as 'default_web__Service'.
    """
    return str(identity)


def parse_identity(token: str) -> ObjIdentity:
    """Decode an inventory token into an ObjIdentity.

    Args:
        token: Inventory token (e.g., 'test-namespace_test-name_apps_ReplicaSet').

    Returns:
        ObjIdentity parsed from the token.

    Raises:
        DecodeError: If the token does not have exactly four fields.
        ValidationError: If the decoded fields are invalid.
    """
    parts = token.split(FIELD_SEPARATOR)
    if len(parts) != TOKEN_FIELD_COUNT:
        msg = f"Unable to decode inventory: {token!r}"
        raise DecodeError(msg)

    namespace, name, group, kind = parts
    return create_identity(namespace, name, GroupKind(group.strip(), kind.strip()))
