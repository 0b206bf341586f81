"""Unit tests for grouping objects.

Tests for storing inventories in, and reading them from, grouping objects.
"""

from collections.abc import Callable

import pytest
from prunectl.core.grouping import (
    GROUPING_LABEL,
    GroupingRecord,
    add_inventory_to_grouping_object,
    create_grouping_object,
    find_grouping_object,
    inventory_id_of,
    is_grouping_object,
    read_inventory,
    retrieve_inventory_from_grouping_object,
)
from prunectl.core.inventory import Inventory
from prunectl.errors import ExtractionError, RetrievalError
from prunectl.models.identity import ObjIdentity
from prunectl.models.resource import ResourceInfo


class TestCreateGroupingObject:
    """Tests for create_grouping_object function."""

    def test_creates_labelled_configmap(self) -> None:
        """The grouping object is a ConfigMap with the inventory label."""
        info = create_grouping_object("ns", "inventory", "app-1")

        assert info.namespace == "ns"
        assert info.name == "inventory"
        assert info.object is not None
        assert info.object["kind"] == "ConfigMap"
        assert info.object["metadata"]["labels"] == {GROUPING_LABEL: "app-1"}
        assert "data" not in info.object


class TestIsGroupingObject:
    """Tests for is_grouping_object function."""

    def test_labelled_configmap(self) -> None:
        """A labelled ConfigMap is a grouping object."""
        assert is_grouping_object(create_grouping_object("ns", "inv", "id").object) is True

    def test_unlabelled_configmap(self) -> None:
        """A plain ConfigMap is not a grouping object."""
        obj = {"kind": "ConfigMap", "metadata": {"name": "settings"}}

        assert is_grouping_object(obj) is False

    def test_other_kind(self, pod1_info: ResourceInfo) -> None:
        """Other kinds are never grouping objects."""
        assert is_grouping_object(pod1_info.object) is False

    def test_none(self) -> None:
        """A missing payload is not a grouping object."""
        assert is_grouping_object(None) is False


class TestFindGroupingObject:
    """Tests for find_grouping_object function."""

    def test_finds_grouping_object(self, pod1_info: ResourceInfo) -> None:
        """The grouping object is found regardless of position."""
        grouping = create_grouping_object("ns", "inv", "id")

        assert find_grouping_object([pod1_info, None, grouping]) is grouping

    def test_none_when_absent(self, pod1_info: ResourceInfo) -> None:
        """None is returned when there is no grouping object."""
        assert find_grouping_object([pod1_info]) is None


class TestInventoryIdOf:
    """Tests for inventory_id_of function."""

    def test_grouping_object(self) -> None:
        """The inventory label value is returned."""
        assert inventory_id_of(create_grouping_object("ns", "inv", "app-1")) == "app-1"

    def test_not_grouping_object(self, pod1_info: ResourceInfo) -> None:
        """Records without the inventory label have no inventory id."""
        assert inventory_id_of(pod1_info) is None
        assert inventory_id_of(None) is None


class TestAddInventoryToGroupingObject:
    """Tests for add_inventory_to_grouping_object function."""

    def test_stores_children(self, pod1_info: ResourceInfo, pod2_info: ResourceInfo) -> None:
        """Every other record is stored as an empty-valued data key."""
        grouping = create_grouping_object("test-namespace", "inv", "id")

        result = add_inventory_to_grouping_object([pod2_info, grouping, pod1_info])

        assert result is grouping
        assert grouping.object is not None
        assert grouping.object["data"] == {
            "test-namespace_pod-1__Pod": "",
            "test-namespace_pod-2__Pod": "",
        }

    def test_no_children(self) -> None:
        """A grouping object alone stores an empty inventory."""
        grouping = create_grouping_object("ns", "inv", "id")

        add_inventory_to_grouping_object([grouping])

        assert grouping.object is not None
        assert grouping.object["data"] == {}

    def test_missing_grouping_object(self, pod1_info: ResourceInfo) -> None:
        """Without a grouping object there is nowhere to store the inventory."""
        with pytest.raises(RetrievalError, match="Grouping object not found"):
            add_inventory_to_grouping_object([pod1_info])

    def test_bad_child(self) -> None:
        """A child record without payload cannot be stored."""
        grouping = create_grouping_object("ns", "inv", "id")
        bad = ResourceInfo(namespace="ns", name="x", object=None)

        with pytest.raises(ExtractionError):
            add_inventory_to_grouping_object([grouping, bad])


class TestGroupingRecord:
    """Tests for GroupingRecord.membership."""

    def test_membership(
        self, make_grouping_info: Callable[..., ResourceInfo], pod1_info: ResourceInfo
    ) -> None:
        """Membership lists the stored tokens."""
        record = GroupingRecord(make_grouping_info(pod1_info))

        assert record.membership() == ["test-namespace_pod-1__Pod"]

    def test_no_data_section(self) -> None:
        """A grouping object without data has an empty membership."""
        record = GroupingRecord(create_grouping_object("ns", "inv", "id"))

        assert record.membership() == []

    def test_missing_payload(self, non_configmap_grouping_info: ResourceInfo) -> None:
        """A record without payload is not a well-formed grouping object."""
        with pytest.raises(RetrievalError, match="not structured as a ConfigMap"):
            GroupingRecord(non_configmap_grouping_info).membership()

    def test_missing_record(self) -> None:
        """A missing record is not a well-formed grouping object."""
        with pytest.raises(RetrievalError):
            GroupingRecord(None).membership()

    def test_malformed_data(self) -> None:
        """A data section that is not a mapping is rejected."""
        info = create_grouping_object("ns", "inv", "id")
        assert info.object is not None
        info.object["data"] = ["ns_pod-1__Pod"]

        with pytest.raises(RetrievalError, match="malformed data"):
            GroupingRecord(info).membership()


class TestReadInventory:
    """Tests for read_inventory and retrieve_inventory_from_grouping_object."""

    def test_read_inventory(
        self,
        make_grouping_info: Callable[..., ResourceInfo],
        pod1_info: ResourceInfo,
        pod2_info: ResourceInfo,
        pod1_identity: ObjIdentity,
        pod2_identity: ObjIdentity,
    ) -> None:
        """Stored tokens decode back into identities."""
        inventory = read_inventory(make_grouping_info(pod1_info, pod2_info))

        assert inventory == Inventory.from_list([pod1_identity, pod2_identity])

    def test_read_inventory_bad_token(self) -> None:
        """An undecodable token aborts with RetrievalError."""
        info = create_grouping_object("ns", "inv", "id")
        assert info.object is not None
        info.object["data"] = {"ns_pod-1__Pod": "", "not_a_token": ""}

        with pytest.raises(RetrievalError, match="not_a_token") as exc_info:
            read_inventory(info)

        assert exc_info.value.__cause__ is not None

    def test_read_inventory_custom_container(self, pod1_identity: ObjIdentity) -> None:
        """Any object with a membership() method can be read."""

        class StaticContainer:
            def membership(self) -> list[str]:
                return [str(pod1_identity)]

        assert read_inventory(StaticContainer()) == Inventory.from_list([pod1_identity])

    def test_retrieve_from_infos(
        self,
        make_grouping_info: Callable[..., ResourceInfo],
        pod1_info: ResourceInfo,
        pod1_identity: ObjIdentity,
    ) -> None:
        """The grouping object is located among infos and decoded."""
        grouping = make_grouping_info(pod1_info)

        inventory = retrieve_inventory_from_grouping_object([pod1_info, grouping])

        assert inventory == Inventory.from_list([pod1_identity])

    def test_retrieve_without_grouping_object(self, pod1_info: ResourceInfo) -> None:
        """Retrieval fails when there is no grouping object."""
        with pytest.raises(RetrievalError):
            retrieve_inventory_from_grouping_object([pod1_info])
