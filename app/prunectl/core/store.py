"""Inventory snapshot storage.

This module provides the InventoryStore class for persisting grouping
objects recorded by past applies, and a loader for desired-object files.
"""

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from prunectl.core.grouping import inventory_id_of
from prunectl.core.paths import ensure_state_dir, get_inventory_path
from prunectl.errors import ExtractionError, RetrievalError
from prunectl.models.resource import ResourceInfo

logger = logging.getLogger(__name__)

RECORDED_AT_ANNOTATION = "prunectl.io/recorded-at"


class StoreError(Exception):
    """Raised when snapshot or object files cannot be read or written."""


class InventoryStore:
    """Manages recorded grouping objects in a JSONL file.

    Storage location: ~/.local/state/prunectl/inventory.jsonl

    Each line is one grouping object (a ConfigMap manifest) as it was
    recorded after an apply. Lines are appended in chronological order.

    Attributes:
        state_dir: Directory containing the inventory file.
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize InventoryStore.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/prunectl
        """
        self._state_dir = state_dir

    @property
    def inventory_path(self) -> Path:
        """Path to the inventory.jsonl file."""
        if self._state_dir is None:
            return get_inventory_path()
        return self._state_dir / "inventory.jsonl"

    def record_snapshot(self, info: ResourceInfo) -> None:
        """Append a grouping object to the inventory file.

        The recorded copy is stamped with a recorded-at annotation; the
        passed record is left untouched.

        Args:
            info: Grouping object record to store.

        Raises:
            StoreError: If the record has no payload or cannot be written.
            RuntimeError: If the state directory cannot be created.
        """
        if info.object is None:
            msg = f"Cannot record grouping object {info.namespace}/{info.name} without payload"
            raise StoreError(msg)

        if self._state_dir is None:
            ensure_state_dir()
        else:
            self._state_dir.mkdir(parents=True, exist_ok=True)

        obj = dict(info.object)
        metadata = dict(obj.get("metadata") or {})
        annotations = dict(metadata.get("annotations") or {})
        annotations[RECORDED_AT_ANNOTATION] = datetime.now(UTC).isoformat()
        metadata["annotations"] = annotations
        obj["metadata"] = metadata

        line = json.dumps(obj, separators=(",", ":"), sort_keys=True)
        try:
            with self.inventory_path.open(mode="a", encoding="utf-8") as f:
                f.write(line + "\n")
                f.flush()
        except OSError as e:
            raise StoreError(f"Failed to write inventory snapshot: {e}") from e
        logger.debug("Recorded grouping object %s/%s", info.namespace, info.name)

    def get_snapshots(
        self, limit: int | None = None, inventory_id: str | None = None
    ) -> list[ResourceInfo]:
        """Read recorded grouping objects, oldest first.

        A corrupt line is never skipped: a missing snapshot would shrink
        the prune set and leave orphaned objects behind.

        Args:
            limit: Maximum number of most recent snapshots to return.
                  If None, returns all snapshots.
            inventory_id: Only return snapshots whose inventory label has
                  this value. If None, returns snapshots of every inventory.

        Returns:
            List of grouping object records, oldest first.
            Returns empty list if the file doesn't exist.

        Raises:
            RetrievalError: If a line is not a JSON object.
            StoreError: If the file cannot be read.
        """
        if not self.inventory_path.exists():
            return []

        snapshots: list[ResourceInfo] = []
        try:
            with self.inventory_path.open(encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    snapshot = self._parse_line(line, line_num)
                    if inventory_id is None or inventory_id_of(snapshot) == inventory_id:
                        snapshots.append(snapshot)
        except OSError as e:
            raise StoreError(f"Failed to read inventory snapshots: {e}") from e

        logger.debug("Loaded %d inventory snapshots", len(snapshots))
        if limit is not None:
            return snapshots[-limit:] if limit > 0 else []
        return snapshots

    def latest_snapshot(self) -> ResourceInfo | None:
        """Return the most recently recorded grouping object, or None."""
        snapshots = self.get_snapshots(limit=1)
        return snapshots[0] if snapshots else None

    def _parse_line(self, line: str, line_num: int) -> ResourceInfo:
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            msg = f"Corrupt inventory snapshot on line {line_num}: {e}"
            raise RetrievalError(msg) from e
        if not isinstance(obj, dict):
            msg = f"Inventory snapshot on line {line_num} is not an object"
            raise RetrievalError(msg)
        try:
            return ResourceInfo.from_object(obj)
        except ExtractionError as e:
            msg = f"Inventory snapshot on line {line_num} is malformed: {e}"
            raise RetrievalError(msg) from e


def load_objects(path: Path) -> list[ResourceInfo]:
    """Load desired object manifests from a JSON file.

    The file holds either a list of manifests or a list object with an
    'items' array.

    Args:
        path: Path to the JSON file.

    Returns:
        One ResourceInfo per manifest, in file order.

    Raises:
        StoreError: If the file cannot be read or has the wrong structure.
        ExtractionError: If a manifest has no metadata section.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data: Any = json.load(f)
    except FileNotFoundError as e:
        raise StoreError(f"Objects file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise StoreError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise StoreError(f"Failed to read {path}: {e}") from e

    if isinstance(data, Mapping):
        data = data.get("items")
    if not isinstance(data, list):
        raise StoreError(f"Expected a list of objects in {path}")

    infos: list[ResourceInfo] = []
    for index, obj in enumerate(data):
        if not isinstance(obj, Mapping):
            raise StoreError(f"Item {index} in {path} is not an object")
        infos.append(ResourceInfo.from_object(obj))
    return infos
