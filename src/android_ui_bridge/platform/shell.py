"""Privileged command channels built on ``su -c``."""

from __future__ import annotations

import shlex
import subprocess
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from adbutils import AdbDevice

logger = structlog.get_logger()

SHELL_TIMEOUT_S = 15.0


class AdbSuChannel:
    """Runs ``su -c <command>`` on a device over adb."""

    def __init__(self, device: AdbDevice, timeout: float = SHELL_TIMEOUT_S) -> None:
        self._device = device
        self._timeout = timeout

    def run(self, command: str) -> int:
        result = self._device.shell2(f"su -c {shlex.quote(command)}", timeout=self._timeout)
        if result.returncode != 0:
            logger.debug(
                "privileged_command_failed",
                command=command,
                returncode=result.returncode,
                output=result.output.strip()[:200],
            )
        return int(result.returncode)


class LocalSuChannel:
    """Runs ``su -c <command>`` on the local machine, e.g. on the device itself."""

    def __init__(self, su_path: str = "su", timeout: float = SHELL_TIMEOUT_S) -> None:
        self._su_path = su_path
        self._timeout = timeout

    def run(self, command: str) -> int:
        proc = subprocess.run(
            [self._su_path, "-c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=self._timeout,
            check=False,
        )
        if proc.returncode != 0:
            logger.debug(
                "privileged_command_failed",
                command=command,
                returncode=proc.returncode,
                output=(proc.stdout or "").strip()[:200],
            )
        return proc.returncode
