"""Breadth-first hierarchy traversal shared by serialization and matching."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from android_ui_bridge.platform.base import HierarchyNode


def breadth_first(root: HierarchyNode | None) -> Iterator[HierarchyNode]:
    """Yield nodes level by level, children in index order.

    Missing children (the platform returned None for an index) are skipped.
    """
    if root is None:
        return
    queue: deque[HierarchyNode] = deque([root])
    while queue:
        node = queue.popleft()
        yield node
        for index in range(node.child_count):
            child = node.get_child(index)
            if child is not None:
                queue.append(child)
