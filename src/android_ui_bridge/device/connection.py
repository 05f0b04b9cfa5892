"""Device connection - adb and uiautomator2 handles for one device."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    import uiautomator2 as u2
    from adbutils import AdbDevice

logger = structlog.get_logger()


class DeviceConnection:
    """Lazily opened adbutils and uiautomator2 connections to a single device.

    With no serial the default adb device is used, which requires exactly one
    device to be attached.
    """

    def __init__(self, serial: str | None = None) -> None:
        self.serial = serial
        self._adb_device: AdbDevice | None = None
        self._u2_device: u2.Device | None = None

    async def get_adb_device(self) -> AdbDevice:
        """Get or create the adbutils device connection."""
        if self._adb_device is not None:
            return self._adb_device

        from adbutils import adb

        def _connect() -> AdbDevice:
            return adb.device(serial=self.serial)

        self._adb_device = await asyncio.to_thread(_connect)
        logger.info("adb_connected", serial=self._adb_device.serial)
        return self._adb_device

    async def get_u2_device(self) -> u2.Device:
        """Get or create the uiautomator2 device connection."""
        if self._u2_device is not None:
            return self._u2_device

        import uiautomator2 as u2

        def _connect() -> u2.Device:
            return u2.connect(self.serial)

        self._u2_device = await asyncio.to_thread(_connect)
        logger.info("u2_connected", serial=self.serial)
        return self._u2_device

    def close(self) -> None:
        """Forget cached connections."""
        self._adb_device = None
        self._u2_device = None
