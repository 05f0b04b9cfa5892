"""Configuration loaded from environment variables."""

from __future__ import annotations

import ipaddress
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from android_ui_bridge.errors import invalid_config_error

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7333
DEFAULT_POLL_INTERVAL = 0.5

PrivilegedMode = Literal["adb", "local", "off"]
PRIVILEGED_MODES: tuple[PrivilegedMode, ...] = ("adb", "local", "off")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

_FALSE_VALUES = {"0", "false", "off", "no"}


@dataclass(frozen=True)
class BridgeConfig:
    """Runtime settings for the bridge service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    serial: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    privileged: PrivilegedMode = "adb"
    watch: bool = True
    log_level: str = "info"

    @property
    def is_loopback(self) -> bool:
        """Whether the bind address only accepts device-local connections."""
        if self.host == "localhost":
            return True
        try:
            return ipaddress.ip_address(self.host).is_loopback
        except ValueError:
            return False


def load_config(environ: Mapping[str, str] | None = None) -> BridgeConfig:
    """Build a BridgeConfig from UI_BRIDGE_* environment variables.

    Raises:
        BridgeError: If a value cannot be parsed
    """
    env = os.environ if environ is None else environ

    port_raw = env.get("UI_BRIDGE_PORT", str(DEFAULT_PORT))
    try:
        port = int(port_raw)
    except ValueError as err:
        raise invalid_config_error("UI_BRIDGE_PORT", port_raw, "an integer port") from err
    if not 0 < port < 65536:
        raise invalid_config_error("UI_BRIDGE_PORT", port_raw, "a port between 1 and 65535")

    interval_raw = env.get("UI_BRIDGE_POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL))
    try:
        poll_interval = float(interval_raw)
    except ValueError as err:
        raise invalid_config_error(
            "UI_BRIDGE_POLL_INTERVAL", interval_raw, "a number of seconds"
        ) from err
    if poll_interval <= 0:
        raise invalid_config_error(
            "UI_BRIDGE_POLL_INTERVAL", interval_raw, "a positive number of seconds"
        )

    privileged = env.get("UI_BRIDGE_PRIVILEGED", "adb").strip().lower()
    if privileged not in PRIVILEGED_MODES:
        raise invalid_config_error(
            "UI_BRIDGE_PRIVILEGED", privileged, "one of: " + ", ".join(PRIVILEGED_MODES)
        )

    log_level = env.get("UI_BRIDGE_LOG_LEVEL", "info").strip().lower()
    if log_level not in LOG_LEVELS:
        raise invalid_config_error(
            "UI_BRIDGE_LOG_LEVEL", log_level, "one of: " + ", ".join(LOG_LEVELS)
        )

    return BridgeConfig(
        host=env.get("UI_BRIDGE_HOST", DEFAULT_HOST),
        port=port,
        serial=env.get("UI_BRIDGE_SERIAL") or None,
        poll_interval=poll_interval,
        privileged=privileged,  # type: ignore[arg-type]
        watch=env.get("UI_BRIDGE_WATCH", "on").strip().lower() not in _FALSE_VALUES,
        log_level=log_level,
    )
