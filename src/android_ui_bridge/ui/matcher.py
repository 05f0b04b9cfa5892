"""Element matcher - click-by-label over the current hierarchy."""

from __future__ import annotations

import structlog

from android_ui_bridge.platform.base import HierarchyNode
from android_ui_bridge.ui.traversal import breadth_first

logger = structlog.get_logger()


class ElementMatcher:
    """Finds the first node labelled with a target string and activates it."""

    def find(self, root: HierarchyNode | None, label: str) -> HierarchyNode | None:
        """Return the first node in breadth-first order whose text or description matches."""
        target = label.strip()
        for node in breadth_first(root):
            if _trimmed(node.text) == target or _trimmed(node.content_desc) == target:
                return node
        return None

    def resolve_target(self, node: HierarchyNode) -> HierarchyNode:
        """Walk up to the nearest clickable node, falling back to the node itself."""
        current: HierarchyNode | None = node
        while current is not None and not current.clickable:
            current = current.parent
        return current if current is not None else node

    def find_and_click(self, root: HierarchyNode | None, label: str) -> bool:
        """Activate the first match; False when nothing matches or the platform refuses."""
        match = self.find(root, label)
        if match is None:
            logger.info("click_no_match", label=label)
            return False

        target = self.resolve_target(match)
        try:
            ok = bool(target.perform_click())
        except Exception:
            logger.warning("click_failed", label=label, exc_info=True)
            return False
        logger.info("click_performed", label=label, ok=ok, via_ancestor=target is not match)
        return ok


def _trimmed(value: str | None) -> str | None:
    return value.strip() if value is not None else None
