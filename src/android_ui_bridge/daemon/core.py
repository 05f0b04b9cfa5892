"""Bridge core - lifecycle and wiring of the snapshot, matcher and executor."""

from __future__ import annotations

import structlog

from android_ui_bridge.actions.executor import ActionExecutor
from android_ui_bridge.config import BridgeConfig, load_config
from android_ui_bridge.daemon.watcher import HierarchyWatcher
from android_ui_bridge.device.connection import DeviceConnection
from android_ui_bridge.platform.base import PrivilegedChannel
from android_ui_bridge.platform.shell import AdbSuChannel, LocalSuChannel
from android_ui_bridge.platform.uiautomator import (
    Uiautomator2GestureInjector,
    Uiautomator2GlobalActions,
    make_click_activator,
)
from android_ui_bridge.ui.matcher import ElementMatcher
from android_ui_bridge.ui.serializer import TreeSerializer
from android_ui_bridge.ui.store import TreeSnapshotStore

logger = structlog.get_logger()


class BridgeCore:
    """Central coordinator owning every bridge component.

    Until ``start()`` connects to the device the executor has no collaborators,
    so every action reports False and /screen serves the empty state.
    """

    def __init__(self, config: BridgeConfig | None = None) -> None:
        self.config = config or load_config()
        self.store = TreeSnapshotStore()
        self.serializer = TreeSerializer()
        self.matcher = ElementMatcher()
        self.action_executor = ActionExecutor()
        self.connection = DeviceConnection(self.config.serial)
        self.watcher: HierarchyWatcher | None = None
        self._running = False

    async def start(self) -> None:
        """Connect to the device and start the hierarchy feed."""
        logger.info("bridge_core_starting", serial=self.config.serial)
        try:
            await self._connect()
        except Exception:
            logger.exception("device_connect_failed", serial=self.config.serial)
        if self.watcher is not None:
            await self.watcher.start()
        self._running = True
        logger.info("bridge_core_started", privileged=self.config.privileged)

    async def stop(self) -> None:
        """Stop the feed and release the held hierarchy."""
        logger.info("bridge_core_stopping")
        self._running = False
        if self.watcher is not None:
            await self.watcher.stop()
        self.store.close()
        self.connection.close()
        logger.info("bridge_core_stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    async def _connect(self) -> None:
        device = await self.connection.get_u2_device()

        privileged: PrivilegedChannel | None = None
        if self.config.privileged == "adb":
            privileged = AdbSuChannel(await self.connection.get_adb_device())
        elif self.config.privileged == "local":
            privileged = LocalSuChannel()

        self.action_executor = ActionExecutor(
            privileged=privileged,
            gestures=Uiautomator2GestureInjector(device),
            global_actions=Uiautomator2GlobalActions(device),
        )
        if self.config.watch:
            self.watcher = HierarchyWatcher(
                self.store,
                lambda: device.dump_hierarchy(compressed=False, pretty=False),
                activator=make_click_activator(device),
                poll_interval=self.config.poll_interval,
            )
