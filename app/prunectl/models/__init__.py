"""Data models for prunectl.

This module exports the core data structures used throughout the application.
"""

from prunectl.models.identity import (
    FIELD_SEPARATOR,
    NORMALIZED_GROUP_KINDS,
    GroupKind,
    ObjIdentity,
    create_identity,
    encode_identity,
    normalize_group_kind,
    parse_identity,
)
from prunectl.models.resource import ResourceInfo, group_kind_from_object, info_to_identity

__all__ = [
    "FIELD_SEPARATOR",
    "GroupKind",
    "NORMALIZED_GROUP_KINDS",
    "ObjIdentity",
    "ResourceInfo",
    "create_identity",
    "encode_identity",
    "group_kind_from_object",
    "info_to_identity",
    "normalize_group_kind",
    "parse_identity",
]
