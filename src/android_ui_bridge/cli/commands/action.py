"""Input CLI commands."""

from __future__ import annotations

import typer

from android_ui_bridge.actions.executor import DEFAULT_SWIPE_MS
from android_ui_bridge.cli.client import DEFAULT_URL, BridgeClient
from android_ui_bridge.cli.utils import handle_action_response

app = typer.Typer(help="Input commands")


@app.command("tap")
def action_tap(
    x: int = typer.Argument(..., help="X coordinate"),
    y: int = typer.Argument(..., help="Y coordinate"),
    url: str = typer.Option(DEFAULT_URL, "--url", help="Bridge base URL"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Tap at screen coordinates."""
    client = BridgeClient(url)
    resp = client.request("POST", "/tap", params={"x": x, "y": y})
    client.close()
    handle_action_response(resp, json_output=json_output)


@app.command("swipe")
def action_swipe(
    x1: int = typer.Argument(..., help="Start X"),
    y1: int = typer.Argument(..., help="Start Y"),
    x2: int = typer.Argument(..., help="End X"),
    y2: int = typer.Argument(..., help="End Y"),
    dur: int = typer.Option(DEFAULT_SWIPE_MS, "--dur", help="Duration in ms (50-10000)"),
    url: str = typer.Option(DEFAULT_URL, "--url", help="Bridge base URL"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Swipe between two points."""
    client = BridgeClient(url)
    resp = client.request(
        "POST",
        "/swipe",
        params={"x1": x1, "y1": y1, "x2": x2, "y2": y2, "dur": dur},
    )
    client.close()
    handle_action_response(resp, json_output=json_output)


@app.command("key")
def action_key(
    name: str = typer.Argument(..., help="home, back, enter or menu"),
    url: str = typer.Option(DEFAULT_URL, "--url", help="Bridge base URL"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Press a key."""
    client = BridgeClient(url)
    resp = client.request("POST", "/key", params={"name": name})
    client.close()
    handle_action_response(resp, json_output=json_output)
