"""Tree snapshot store - the current UI hierarchy and its revision."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

import structlog

from android_ui_bridge.platform.base import HierarchyNode

logger = structlog.get_logger()


@dataclass(frozen=True)
class Snapshot:
    """A hierarchy root as published at a point in time."""

    root: HierarchyNode
    revision: int
    package_id: str | None
    timestamp_ms: int


class TreeSnapshotStore:
    """Holds the most recent snapshot.

    Publishing builds a new immutable Snapshot and swaps a single reference, so
    readers never lock and always see a complete snapshot. The writer lock only
    orders concurrent publishers; it is never taken by readers.
    """

    def __init__(self) -> None:
        self._current: Snapshot | None = None
        self._revision = 0
        self._write_lock = threading.Lock()

    @property
    def revision(self) -> int:
        """Revision of the latest publish, 0 before the first one."""
        return self._revision

    def current(self) -> Snapshot | None:
        """Return the snapshot in effect, or None before the first event."""
        return self._current

    def publish(self, root: HierarchyNode, package_id: str | None) -> Snapshot:
        """Replace the current snapshot and release the previous root."""
        with self._write_lock:
            self._revision += 1
            snapshot = Snapshot(
                root=root,
                revision=self._revision,
                package_id=package_id,
                timestamp_ms=int(time.time() * 1000),
            )
            previous, self._current = self._current, snapshot

        if previous is not None and previous.root is not root:
            self._release(previous.root)
        logger.debug("snapshot_published", revision=snapshot.revision, package=package_id)
        return snapshot

    def close(self) -> None:
        """Drop and release the held root; the revision counter is kept."""
        with self._write_lock:
            previous, self._current = self._current, None
        if previous is not None:
            self._release(previous.root)
        logger.info("snapshot_store_closed", revision=self._revision)

    def _release(self, root: HierarchyNode) -> None:
        try:
            root.recycle()
        except Exception:
            logger.warning("snapshot_release_failed", exc_info=True)
