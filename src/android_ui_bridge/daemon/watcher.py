"""Hierarchy watcher - polls the device hierarchy and publishes changes."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from hashlib import md5

import structlog

from android_ui_bridge.platform.uiautomator import (
    Activator,
    XmlHierarchyNode,
    parse_hierarchy_xml,
)
from android_ui_bridge.ui.store import TreeSnapshotStore

logger = structlog.get_logger()

HierarchyDump = Callable[[], str | bytes]


class HierarchyWatcher:
    """Feeds the snapshot store from periodic hierarchy dumps.

    A dump that is byte-identical to the previous one is not a change and is
    not published, so revisions track actual hierarchy changes.
    """

    def __init__(
        self,
        store: TreeSnapshotStore,
        dump: HierarchyDump,
        *,
        activator: Activator | None = None,
        poll_interval: float = 0.5,
    ) -> None:
        self._store = store
        self._dump = dump
        self._activator = activator
        self._poll_interval = poll_interval
        self._last_digest: str | None = None
        self._task: asyncio.Task[None] | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def poll_once(self) -> bool:
        """Take one dump and publish it if it changed. Returns whether it published."""
        changed, digest, root = await asyncio.to_thread(self._read_dump)
        if not changed:
            return False
        if root is None:
            logger.debug("hierarchy_empty")
            return False

        self._last_digest = digest
        snapshot = self._store.publish(root, root.package_name)
        logger.debug("hierarchy_changed", revision=snapshot.revision, package=snapshot.package_id)
        return True

    def _read_dump(self) -> tuple[bool, str, XmlHierarchyNode | None]:
        # Dumping and parsing both run off the event loop.
        raw = self._dump()
        content = raw.encode() if isinstance(raw, str) else raw
        digest = md5(content).hexdigest()
        if digest == self._last_digest:
            return False, digest, None
        return True, digest, parse_hierarchy_xml(content, self._activator)

    async def start(self) -> None:
        """Start the polling loop."""
        logger.info("hierarchy_watcher_starting", poll_interval=self._poll_interval)
        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info("hierarchy_watcher_started")

    async def stop(self) -> None:
        """Stop the polling loop."""
        logger.info("hierarchy_watcher_stopping")
        self._running = False
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        logger.info("hierarchy_watcher_stopped")

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("hierarchy_poll_error")
            await asyncio.sleep(self._poll_interval)
