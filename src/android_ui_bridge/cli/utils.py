"""Shared CLI helpers."""

from __future__ import annotations

from typing import Any, cast

import typer

from android_ui_bridge.cli.client import format_json


def _parse_response_json(resp: Any) -> dict[str, Any]:
    try:
        return cast(dict[str, Any], resp.json())
    except Exception as exc:  # pragma: no cover - defensive
        typer.echo("Failed to parse response")
        raise typer.Exit(code=1) from exc


def _maybe_render_error(resp: Any) -> None:
    if resp.status_code == 200:
        return
    typer.echo(f"HTTP {resp.status_code}: {resp.text}")
    raise typer.Exit(code=1)


def handle_action_response(resp: Any, json_output: bool = False) -> None:
    """Render an ``{"ok": bool}`` response; a false result exits with code 1."""
    _maybe_render_error(resp)
    data = _parse_response_json(resp)
    if json_output:
        typer.echo(format_json(data))
    elif data.get("ok"):
        typer.echo("✓ Done")
    else:
        typer.echo("✗ Action not performed")
    if not data.get("ok"):
        raise typer.Exit(code=1)


def format_node(node: dict[str, Any]) -> str:
    """One line per node: id, bounds, label, view id, flags."""
    label = node.get("text") or node.get("desc") or ""
    flags = [name for name in ("clickable", "enabled") if node.get(name)]
    bounds = ",".join(str(v) for v in node.get("bounds", []))
    parts = [f"{node.get('id')}", f"[{bounds}]"]
    if label:
        parts.append(f'"{label}"')
    if node.get("viewId"):
        parts.append(str(node["viewId"]))
    if flags:
        parts.append("(" + " ".join(flags) + ")")
    return "  ".join(parts)


def handle_screen_response(
    resp: Any, json_output: bool = False, labelled_only: bool = False
) -> None:
    """Render a /screen response as JSON or one line per node."""
    _maybe_render_error(resp)
    data = _parse_response_json(resp)
    if json_output:
        typer.echo(format_json(data))
        return

    typer.echo(f"rev {data.get('rev')}  pkg {data.get('pkg') or '-'}  ts {data.get('ts')}")
    for node in data.get("nodes", []):
        if labelled_only and not (node.get("text") or node.get("desc")):
            continue
        typer.echo(format_node(node))
