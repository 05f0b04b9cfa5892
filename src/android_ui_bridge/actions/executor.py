"""Action executor - privileged shell first, gesture/global-action fallback."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from enum import Enum

import structlog

from android_ui_bridge.platform.base import (
    GestureInjector,
    GlobalAction,
    GlobalActions,
    PrivilegedChannel,
    Stroke,
)

logger = structlog.get_logger()

MIN_SWIPE_MS = 50
MAX_SWIPE_MS = 10_000
DEFAULT_SWIPE_MS = 300
TAP_STROKE_MS = 1
GESTURE_GRACE_MS = 1500

Strategy = tuple[str, Callable[[], bool]]


class KeyName(Enum):
    """Keys accepted by /key."""

    HOME = "home"
    BACK = "back"
    ENTER = "enter"
    MENU = "menu"


KEYCODES = {
    KeyName.HOME: "KEYCODE_HOME",
    KeyName.BACK: "KEYCODE_BACK",
    KeyName.ENTER: "KEYCODE_ENTER",
    KeyName.MENU: "KEYCODE_MENU",
}

# ENTER has no unprivileged equivalent; MENU only approximates via recents.
KEY_FALLBACKS = {
    KeyName.HOME: GlobalAction.HOME,
    KeyName.BACK: GlobalAction.BACK,
    KeyName.MENU: GlobalAction.RECENTS,
}


def clamp_duration(duration_ms: int) -> int:
    """Clamp a swipe duration to [MIN_SWIPE_MS, MAX_SWIPE_MS]."""
    return max(MIN_SWIPE_MS, min(MAX_SWIPE_MS, int(duration_ms)))


def parse_key_name(name: str | None) -> KeyName | None:
    """Map a loosely formatted key name to KeyName, or None if unknown."""
    if name is None:
        return None
    try:
        return KeyName(name.strip().lower())
    except ValueError:
        return None


class ActionExecutor:
    """Executes device input through an ordered list of strategies.

    Every action is attempted through the privileged channel first and, only
    if that fails or is unavailable, through the unprivileged primitive. Each
    strategy runs at most once. Faults from either path are logged and count
    as failure; callers only ever see a bool.
    """

    def __init__(
        self,
        privileged: PrivilegedChannel | None = None,
        gestures: GestureInjector | None = None,
        global_actions: GlobalActions | None = None,
        gesture_grace_ms: int = GESTURE_GRACE_MS,
    ) -> None:
        self._privileged = privileged
        self._gestures = gestures
        self._global_actions = global_actions
        self._gesture_grace_ms = gesture_grace_ms

    @property
    def has_privileged_channel(self) -> bool:
        return self._privileged is not None

    def tap(self, x: int, y: int) -> bool:
        """Tap at screen coordinates."""
        stroke = Stroke(start=(x, y), end=(x, y), duration_ms=TAP_STROKE_MS)
        return self._run(
            "tap",
            [
                *self._shell_strategy(f"input tap {x} {y}"),
                *self._gesture_strategy(stroke),
            ],
        )

    def swipe(self, x1: int, y1: int, x2: int, y2: int, duration_ms: int = DEFAULT_SWIPE_MS) -> bool:
        """Swipe between two points; duration is clamped first."""
        duration = clamp_duration(duration_ms)
        stroke = Stroke(start=(x1, y1), end=(x2, y2), duration_ms=duration)
        return self._run(
            "swipe",
            [
                *self._shell_strategy(f"input swipe {x1} {y1} {x2} {y2} {duration}"),
                *self._gesture_strategy(stroke),
            ],
        )

    def key(self, name: str | None) -> bool:
        """Press a named key; unknown names are a plain False."""
        key = parse_key_name(name)
        if key is None:
            logger.info("key_unrecognized", name=name)
            return False

        strategies = self._shell_strategy(f"input keyevent {KEYCODES[key]}")
        fallback = KEY_FALLBACKS.get(key)
        if fallback is not None and self._global_actions is not None:
            global_actions = self._global_actions
            strategies.append(("global_action", lambda: global_actions.perform(fallback)))
        return self._run(f"key_{key.value}", strategies)

    def _shell_strategy(self, command: str) -> list[Strategy]:
        if self._privileged is None:
            return []
        channel = self._privileged
        return [("privileged", lambda: channel.run(command) == 0)]

    def _gesture_strategy(self, stroke: Stroke) -> list[Strategy]:
        if self._gestures is None:
            return []
        return [("gesture", lambda: self._dispatch_and_wait(stroke))]

    def _run(self, action: str, strategies: list[Strategy]) -> bool:
        start = time.time()
        for path, attempt in strategies:
            try:
                ok = bool(attempt())
            except Exception:
                logger.warning("action_path_error", action=action, path=path, exc_info=True)
                ok = False
            if ok:
                elapsed = (time.time() - start) * 1000
                logger.info("action_executed", action=action, path=path, elapsed_ms=round(elapsed, 2))
                return True
            logger.info("action_path_failed", action=action, path=path)

        logger.warning("action_failed", action=action, attempted=[path for path, _ in strategies])
        return False

    def _dispatch_and_wait(self, stroke: Stroke) -> bool:
        """Submit a stroke and block until it completes, is cancelled, or times out."""
        done = threading.Event()
        outcome: list[bool] = []

        def on_completed(_: Stroke) -> None:
            outcome.append(True)
            done.set()

        def on_cancelled(_: Stroke) -> None:
            outcome.append(False)
            done.set()

        if not self._gestures or not self._gestures.dispatch(stroke, on_completed, on_cancelled):
            logger.info("gesture_rejected", stroke=stroke)
            return False

        timeout_ms = stroke.duration_ms + self._gesture_grace_ms
        if not done.wait(timeout_ms / 1000):
            logger.warning("gesture_timeout", stroke=stroke, timeout_ms=timeout_ms)
            return False
        return outcome[0]
