"""Collaborator interfaces consumed by the bridge.

Everything the bridge needs from the device is expressed as a Protocol here:
hierarchy nodes, the privileged command channel, gesture injection and global
actions. Concrete adapters live next to this module.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


@runtime_checkable
class HierarchyNode(Protocol):
    """A node of the live UI hierarchy, owned by the platform."""

    @property
    def text(self) -> str | None: ...

    @property
    def content_desc(self) -> str | None: ...

    @property
    def view_id(self) -> str | None: ...

    @property
    def clickable(self) -> bool: ...

    @property
    def enabled(self) -> bool: ...

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """Bounding rectangle in screen pixels: (left, top, right, bottom)."""
        ...

    @property
    def package_name(self) -> str | None: ...

    @property
    def parent(self) -> HierarchyNode | None: ...

    @property
    def child_count(self) -> int: ...

    def get_child(self, index: int) -> HierarchyNode | None: ...

    def perform_click(self) -> bool:
        """Activate the node; returns whether the platform accepted it."""
        ...

    def recycle(self) -> None:
        """Return the node to the platform once the bridge stops holding it."""
        ...


class PrivilegedChannel(Protocol):
    """Elevated shell access (``su``)."""

    def run(self, command: str) -> int:
        """Run a shell command and return its exit status."""
        ...


@dataclass(frozen=True)
class Stroke:
    """Single-stroke gesture description.

    A tap is a zero-length stroke (start == end).
    """

    start: tuple[int, int]
    end: tuple[int, int]
    duration_ms: int

    @property
    def is_tap(self) -> bool:
        return self.start == self.end


GestureCallback = Callable[[Stroke], None]


class GestureInjector(Protocol):
    """Unprivileged synthetic touch injection with async completion."""

    def dispatch(
        self,
        stroke: Stroke,
        on_completed: GestureCallback,
        on_cancelled: GestureCallback,
    ) -> bool:
        """Submit a stroke; returns False if the platform rejected it outright.

        Exactly one of the callbacks is invoked later, possibly from another thread.
        """
        ...


class GlobalAction(Enum):
    """Platform-level actions that need neither privilege nor coordinates."""

    HOME = "home"
    BACK = "back"
    RECENTS = "recents"


class GlobalActions(Protocol):
    """Global-action primitive."""

    def perform(self, action: GlobalAction) -> bool: ...
