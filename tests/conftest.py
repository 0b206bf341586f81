"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import copy
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from prunectl.core.grouping import add_inventory_to_grouping_object, create_grouping_object
from prunectl.models.identity import GroupKind, ObjIdentity, create_identity
from prunectl.models.resource import ResourceInfo

TEST_NAMESPACE = "test-namespace"
GROUPING_NAME = "test-grouping-obj"


def _pod(name: str) -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {"name": name, "namespace": TEST_NAMESPACE},
    }


@pytest.fixture
def pod1_info() -> ResourceInfo:
    """Record for pod-1."""
    return ResourceInfo(namespace=TEST_NAMESPACE, name="pod-1", object=_pod("pod-1"))


@pytest.fixture
def pod2_info() -> ResourceInfo:
    """Record for pod-2."""
    return ResourceInfo(namespace=TEST_NAMESPACE, name="pod-2", object=_pod("pod-2"))


@pytest.fixture
def pod3_info() -> ResourceInfo:
    """Record for pod-3."""
    return ResourceInfo(namespace=TEST_NAMESPACE, name="pod-3", object=_pod("pod-3"))


@pytest.fixture
def pod1_identity() -> ObjIdentity:
    """Identity of pod-1."""
    return create_identity(TEST_NAMESPACE, "pod-1", GroupKind("", "Pod"))


@pytest.fixture
def pod2_identity() -> ObjIdentity:
    """Identity of pod-2."""
    return create_identity(TEST_NAMESPACE, "pod-2", GroupKind("", "Pod"))


@pytest.fixture
def pod3_identity() -> ObjIdentity:
    """Identity of pod-3."""
    return create_identity(TEST_NAMESPACE, "pod-3", GroupKind("", "Pod"))


@pytest.fixture
def make_grouping_info() -> Callable[..., ResourceInfo]:
    """Factory for grouping objects holding the inventory of the given children."""

    def _make(*children: ResourceInfo, inventory_id: str = "test-1") -> ResourceInfo:
        grouping = create_grouping_object(TEST_NAMESPACE, GROUPING_NAME, inventory_id)
        return add_inventory_to_grouping_object([grouping, *children])

    return _make


@pytest.fixture
def non_configmap_grouping_info() -> ResourceInfo:
    """Grouping record whose payload is missing."""
    return ResourceInfo(namespace=TEST_NAMESPACE, name=GROUPING_NAME, object=None)


@pytest.fixture
def desired_objects() -> list[dict[str, Any]]:
    """Desired object manifests as written to an objects file."""
    return [
        copy.deepcopy(_pod("pod-1")),
        {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {"name": "web", "namespace": TEST_NAMESPACE},
        },
        {
            "apiVersion": "v1",
            "kind": "Namespace",
            "metadata": {"name": TEST_NAMESPACE},
        },
    ]


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories at a temporary location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path
