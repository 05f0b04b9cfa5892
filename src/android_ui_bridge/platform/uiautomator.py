"""uiautomator2-backed adapters: XML hierarchy nodes, gestures and global actions."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog
from lxml import etree

from android_ui_bridge.platform.base import GestureCallback, GlobalAction, Stroke

if TYPE_CHECKING:
    import uiautomator2 as u2

logger = structlog.get_logger()

Activator = Callable[[int, int], bool]

GLOBAL_ACTION_KEYS = {
    GlobalAction.HOME: "home",
    GlobalAction.BACK: "back",
    GlobalAction.RECENTS: "recent",
}


def parse_bounds(bounds_str: str) -> tuple[int, int, int, int]:
    """Parse bounds string '[left,top][right,bottom]' to a tuple."""
    try:
        clean = bounds_str.replace("][", ",").strip("[]")
        left, top, right, bottom = (int(p) for p in clean.split(",")[:4])
        return left, top, right, bottom
    except ValueError:
        return 0, 0, 0, 0


class XmlHierarchyNode:
    """HierarchyNode over one ``<node>`` element of a uiautomator dump.

    The dump writes empty attributes where the platform had no value, so an
    empty text, content-desc or resource-id is reported as absent.
    """

    def __init__(self, element: etree._Element, activator: Activator | None = None) -> None:
        self._element = element
        self._activator = activator
        self._children: list[etree._Element] | None = None

    def __repr__(self) -> str:
        return f"XmlHierarchyNode(class={self._element.get('class')!r}, text={self.text!r})"

    def _attr(self, name: str) -> str | None:
        return self._element.get(name) or None

    @property
    def text(self) -> str | None:
        return self._attr("text")

    @property
    def content_desc(self) -> str | None:
        return self._attr("content-desc")

    @property
    def view_id(self) -> str | None:
        return self._attr("resource-id")

    @property
    def clickable(self) -> bool:
        return self._element.get("clickable") == "true"

    @property
    def enabled(self) -> bool:
        return self._element.get("enabled") != "false"

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return parse_bounds(self._element.get("bounds", "[0,0][0,0]"))

    @property
    def package_name(self) -> str | None:
        return self._attr("package")

    @property
    def parent(self) -> XmlHierarchyNode | None:
        parent = self._element.getparent()
        if parent is None or parent.tag != "node":
            return None
        return XmlHierarchyNode(parent, self._activator)

    def _child_elements(self) -> list[etree._Element]:
        if self._children is None:
            self._children = [child for child in self._element if child.tag == "node"]
        return self._children

    @property
    def child_count(self) -> int:
        return len(self._child_elements())

    def get_child(self, index: int) -> XmlHierarchyNode | None:
        children = self._child_elements()
        if not 0 <= index < len(children):
            return None
        return XmlHierarchyNode(children[index], self._activator)

    def perform_click(self) -> bool:
        """Click the center of the node's bounds through the activator."""
        if self._activator is None:
            return False
        left, top, right, bottom = self.bounds
        return self._activator((left + right) // 2, (top + bottom) // 2)

    def recycle(self) -> None:
        # Parsed XML is garbage collected; nothing to hand back.
        return None


def parse_hierarchy_xml(
    xml_content: bytes | str, activator: Activator | None = None
) -> XmlHierarchyNode | None:
    """Parse a uiautomator dump and return its first top-level node."""
    if isinstance(xml_content, str):
        xml_content = xml_content.encode()
    tree = etree.fromstring(xml_content)
    if tree.tag == "node":
        return XmlHierarchyNode(tree, activator)
    for child in tree:
        if child.tag == "node":
            return XmlHierarchyNode(child, activator)
    return None


def make_click_activator(device: u2.Device) -> Activator:
    """Activator that clicks coordinates through uiautomator2."""

    def _click(x: int, y: int) -> bool:
        device.click(x, y)
        return True

    return _click


class Uiautomator2GestureInjector:
    """Runs strokes through uiautomator2 on a worker thread.

    The stroke finishes asynchronously; a failure on the device side is
    reported through the cancellation callback.

    A uiautomator2 call already in flight cannot be aborted. If the caller
    stops waiting, the worker may still land the stroke on the device after
    the action was reported as failed.
    """

    def __init__(self, device: u2.Device) -> None:
        self._device = device

    def dispatch(
        self,
        stroke: Stroke,
        on_completed: GestureCallback,
        on_cancelled: GestureCallback,
    ) -> bool:
        thread = threading.Thread(
            target=self._perform,
            args=(stroke, on_completed, on_cancelled),
            name="gesture-dispatch",
            daemon=True,
        )
        thread.start()
        return True

    def _perform(
        self,
        stroke: Stroke,
        on_completed: GestureCallback,
        on_cancelled: GestureCallback,
    ) -> None:
        try:
            if stroke.is_tap:
                self._device.click(*stroke.start)
            else:
                self._device.swipe(
                    stroke.start[0],
                    stroke.start[1],
                    stroke.end[0],
                    stroke.end[1],
                    duration=stroke.duration_ms / 1000,
                )
        except Exception:
            logger.warning("gesture_cancelled", stroke=stroke, exc_info=True)
            on_cancelled(stroke)
            return
        on_completed(stroke)


class Uiautomator2GlobalActions:
    """Global actions mapped onto uiautomator2 key presses."""

    def __init__(self, device: u2.Device) -> None:
        self._device = device

    def perform(self, action: GlobalAction) -> bool:
        result = self._device.press(GLOBAL_ACTION_KEYS[action])
        return result is not False
