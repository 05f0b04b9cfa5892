"""Tree serializer - flattens a hierarchy into id-numbered node records."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import structlog

from android_ui_bridge.platform.base import HierarchyNode
from android_ui_bridge.ui.store import Snapshot
from android_ui_bridge.ui.traversal import breadth_first

logger = structlog.get_logger()


@dataclass(frozen=True)
class FlatNodeRecord:
    """One node of a /screen response.

    ``id`` is the breadth-first position within a single response and is not
    stable across snapshots.
    """

    id: int
    text: str | None
    desc: str | None
    view_id: str | None
    clickable: bool
    enabled: bool
    bounds: tuple[int, int, int, int]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the public wire schema."""
        return {
            "id": self.id,
            "text": self.text,
            "desc": self.desc,
            "viewId": self.view_id,
            "clickable": self.clickable,
            "enabled": self.enabled,
            "bounds": list(self.bounds),
        }


class TreeSerializer:
    """Read-only projection of a hierarchy into FlatNodeRecords."""

    def serialize(self, root: HierarchyNode | None) -> list[FlatNodeRecord]:
        """Flatten the tree breadth-first, numbering nodes from 0."""
        return [
            FlatNodeRecord(
                id=index,
                text=node.text,
                desc=node.content_desc,
                view_id=node.view_id,
                clickable=bool(node.clickable),
                enabled=bool(node.enabled),
                bounds=_screen_bounds(node),
            )
            for index, node in enumerate(breadth_first(root))
        ]

    def screen_payload(self, snapshot: Snapshot | None, revision: int = 0) -> dict[str, Any]:
        """Build the GET /screen body for a snapshot, or the empty state."""
        start = time.time()
        if snapshot is None:
            return {
                "ts": int(start * 1000),
                "rev": revision,
                "pkg": None,
                "nodes": [],
            }

        records = self.serialize(snapshot.root)
        logger.debug(
            "screen_serialized",
            revision=snapshot.revision,
            node_count=len(records),
            elapsed_ms=round((time.time() - start) * 1000, 2),
        )
        return {
            "ts": snapshot.timestamp_ms,
            "rev": snapshot.revision,
            "pkg": snapshot.package_id,
            "nodes": [record.to_dict() for record in records],
        }


def _screen_bounds(node: HierarchyNode) -> tuple[int, int, int, int]:
    left, top, right, bottom = node.bounds
    return int(left), int(top), int(right), int(bottom)
