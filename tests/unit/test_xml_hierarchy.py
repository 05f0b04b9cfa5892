"""Tests for the uiautomator XML hierarchy adapter."""

from __future__ import annotations

from unittest.mock import MagicMock

from android_ui_bridge.platform.base import HierarchyNode
from android_ui_bridge.platform.uiautomator import (
    XmlHierarchyNode,
    make_click_activator,
    parse_bounds,
    parse_hierarchy_xml,
)
from android_ui_bridge.ui.matcher import ElementMatcher
from android_ui_bridge.ui.serializer import TreeSerializer


class TestParseBounds:
    def test_valid(self) -> None:
        assert parse_bounds("[100,200][300,400]") == (100, 200, 300, 400)

    def test_malformed(self) -> None:
        assert parse_bounds("bogus") == (0, 0, 0, 0)
        assert parse_bounds("[1,2]") == (0, 0, 0, 0)


class TestParseHierarchyXml:
    def test_returns_first_top_level_node(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)

        assert isinstance(root, XmlHierarchyNode)
        assert isinstance(root, HierarchyNode)
        assert root.package_name == "com.example"
        assert root.child_count == 2
        assert root.parent is None

    def test_accepts_str(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml.decode())

        assert root is not None
        assert root.bounds == (0, 0, 1080, 2400)

    def test_empty_hierarchy(self) -> None:
        assert parse_hierarchy_xml(b'<hierarchy rotation="0"></hierarchy>') is None


class TestXmlHierarchyNode:
    def test_empty_attributes_are_absent(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)
        assert root is not None

        assert root.text is None
        assert root.content_desc is None
        assert root.view_id is None

    def test_attributes(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)
        assert root is not None
        layout = root.get_child(0)
        assert layout is not None
        button = layout.get_child(1)
        assert button is not None

        assert button.text == "Sign In"
        assert button.content_desc == "Login button"
        assert button.view_id == "com.example:id/login_button"
        assert button.clickable is True
        assert button.enabled is False
        assert button.bounds == (200, 400, 880, 500)

    def test_enabled_defaults_true(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)
        assert root is not None
        image = root.get_child(1)
        assert image is not None

        assert image.enabled is True
        assert image.clickable is False
        assert image.bounds == (0, 0, 0, 0)

    def test_out_of_range_child(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)
        assert root is not None

        assert root.get_child(5) is None
        assert root.get_child(-1) is None

    def test_parent_back_reference(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)
        assert root is not None
        layout = root.get_child(0)
        assert layout is not None
        title = layout.get_child(0)
        assert title is not None

        parent = title.parent
        assert parent is not None
        assert parent.clickable is True
        assert parent.bounds == layout.bounds

    def test_click_without_activator_is_false(self, sample_hierarchy_xml: bytes) -> None:
        root = parse_hierarchy_xml(sample_hierarchy_xml)
        assert root is not None

        assert root.perform_click() is False

    def test_click_uses_bounds_center(self, sample_hierarchy_xml: bytes) -> None:
        clicks: list[tuple[int, int]] = []

        def activator(x: int, y: int) -> bool:
            clicks.append((x, y))
            return True

        root = parse_hierarchy_xml(sample_hierarchy_xml, activator)
        assert root is not None
        layout = root.get_child(0)
        assert layout is not None

        assert layout.perform_click() is True
        assert clicks == [(540, 1200)]


class TestXmlWithCoreComponents:
    def test_serializes_breadth_first(self, sample_hierarchy_xml: bytes) -> None:
        records = TreeSerializer().serialize(parse_hierarchy_xml(sample_hierarchy_xml))

        assert [r.id for r in records] == [0, 1, 2, 3, 4]
        assert records[1].clickable is True
        assert records[2].bounds == (0, 0, 0, 0)
        assert records[3].text == "Welcome"
        assert records[4].desc == "Login button"

    def test_click_text_resolves_clickable_parent(self, sample_hierarchy_xml: bytes) -> None:
        clicks: list[tuple[int, int]] = []

        def activator(x: int, y: int) -> bool:
            clicks.append((x, y))
            return True

        root = parse_hierarchy_xml(sample_hierarchy_xml, activator)

        assert ElementMatcher().find_and_click(root, "Welcome") is True
        assert clicks == [(540, 1200)]


class TestClickActivator:
    def test_clicks_through_device(self) -> None:
        device = MagicMock()

        assert make_click_activator(device)(10, 20) is True
        device.click.assert_called_once_with(10, 20)
