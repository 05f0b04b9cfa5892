"""Pytest configuration and fixtures."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Any

import pytest

from android_ui_bridge.platform.base import GestureCallback, GlobalAction, Stroke


class FakeNode:
    """In-memory HierarchyNode."""

    def __init__(
        self,
        text: str | None = None,
        desc: str | None = None,
        *,
        view_id: str | None = None,
        clickable: bool = False,
        enabled: bool = True,
        bounds: tuple[int, int, int, int] = (0, 0, 0, 0),
        package: str | None = None,
        children: Sequence[FakeNode] = (),
        click_result: bool = True,
    ) -> None:
        self._text = text
        self._desc = desc
        self._view_id = view_id
        self._clickable = clickable
        self._enabled = enabled
        self._bounds = bounds
        self._package = package
        self._parent: FakeNode | None = None
        self.children = list(children)
        for child in self.children:
            child._parent = self
        self.click_result = click_result
        self.clicks = 0
        self.recycled = False

    def __repr__(self) -> str:
        return f"FakeNode(text={self._text!r}, desc={self._desc!r})"

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def content_desc(self) -> str | None:
        return self._desc

    @property
    def view_id(self) -> str | None:
        return self._view_id

    @property
    def clickable(self) -> bool:
        return self._clickable

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return self._bounds

    @property
    def package_name(self) -> str | None:
        return self._package

    @property
    def parent(self) -> FakeNode | None:
        return self._parent

    @property
    def child_count(self) -> int:
        return len(self.children)

    def get_child(self, index: int) -> FakeNode | None:
        return self.children[index]

    def perform_click(self) -> bool:
        self.clicks += 1
        return self.click_result

    def recycle(self) -> None:
        self.recycled = True


class FakeChannel:
    """Privileged channel returning a fixed exit status, or raising."""

    def __init__(self, exit_code: int = 0, error: Exception | None = None) -> None:
        self.exit_code = exit_code
        self.error = error
        self.commands: list[str] = []

    def run(self, command: str) -> int:
        self.commands.append(command)
        if self.error is not None:
            raise self.error
        return self.exit_code


class FakeGestures:
    """Gesture injector with a scripted outcome.

    outcome: "complete", "cancel", "silent" (never calls back) or "reject".
    threaded: invoke the callback from a separate thread.
    """

    def __init__(self, outcome: str = "complete", threaded: bool = False) -> None:
        self.outcome = outcome
        self.threaded = threaded
        self.strokes: list[Stroke] = []

    def dispatch(
        self,
        stroke: Stroke,
        on_completed: GestureCallback,
        on_cancelled: GestureCallback,
    ) -> bool:
        self.strokes.append(stroke)
        if self.outcome == "reject":
            return False
        if self.outcome == "silent":
            return True
        callback = on_completed if self.outcome == "complete" else on_cancelled
        if self.threaded:
            threading.Timer(0.01, callback, args=(stroke,)).start()
        else:
            callback(stroke)
        return True


class FakeGlobalActions:
    """Global actions recording what was performed."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.performed: list[GlobalAction] = []

    def perform(self, action: GlobalAction) -> bool:
        self.performed.append(action)
        return self.result


@pytest.fixture
def fake_node() -> type[FakeNode]:
    """The FakeNode class, for building trees inline."""
    return FakeNode


@pytest.fixture
def fake_channel() -> type[FakeChannel]:
    return FakeChannel


@pytest.fixture
def fake_gestures() -> type[FakeGestures]:
    return FakeGestures


@pytest.fixture
def fake_global_actions() -> type[FakeGlobalActions]:
    return FakeGlobalActions


@pytest.fixture
def sample_tree() -> dict[str, Any]:
    """A small login screen; returns the root plus named nodes.

    BFS order: root, toolbar, form, title, settings, sign_in_row, email,
    sign_in_label.
    """
    title = FakeNode("Welcome", view_id="com.example:id/title", bounds=(100, 150, 980, 200))
    settings = FakeNode(
        None,
        "Settings",
        view_id="com.example:id/settings",
        clickable=True,
        bounds=(980, 40, 1060, 120),
    )
    sign_in_label = FakeNode(" Sign In ", bounds=(300, 420, 780, 480))
    sign_in_row = FakeNode(
        view_id="com.example:id/login_button",
        clickable=True,
        bounds=(200, 400, 880, 500),
        children=[sign_in_label],
    )
    email = FakeNode(
        "",
        "Email address",
        view_id="com.example:id/email_input",
        clickable=True,
        enabled=False,
        bounds=(100, 550, 980, 650),
    )
    toolbar = FakeNode(bounds=(0, 0, 1080, 160), children=[title, settings])
    form = FakeNode(bounds=(0, 160, 1080, 2300), children=[sign_in_row, email])
    root = FakeNode(package="com.example", bounds=(0, 0, 1080, 2400), children=[toolbar, form])
    return {
        "root": root,
        "toolbar": toolbar,
        "form": form,
        "title": title,
        "settings": settings,
        "sign_in_row": sign_in_row,
        "email": email,
        "sign_in_label": sign_in_label,
    }


@pytest.fixture
def sample_hierarchy_xml() -> bytes:
    """Sample uiautomator hierarchy dump."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
    <hierarchy rotation="0">
        <node class="android.widget.FrameLayout"
              package="com.example"
              text=""
              content-desc=""
              resource-id=""
              clickable="false"
              enabled="true"
              bounds="[0,0][1080,2400]">
            <node class="android.widget.LinearLayout"
                  package="com.example"
                  clickable="true"
                  bounds="[0,100][1080,2300]">
                <node class="android.widget.TextView"
                      package="com.example"
                      resource-id="com.example:id/title"
                      text="Welcome"
                      clickable="false"
                      bounds="[100,150][980,200]" />
                <node class="android.widget.Button"
                      package="com.example"
                      resource-id="com.example:id/login_button"
                      text="Sign In"
                      content-desc="Login button"
                      clickable="true"
                      enabled="false"
                      bounds="[200,400][880,500]" />
            </node>
            <node class="android.widget.ImageView"
                  package="com.example"
                  bounds="bogus" />
        </node>
    </hierarchy>
    """
