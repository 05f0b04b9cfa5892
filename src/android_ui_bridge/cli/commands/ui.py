"""UI inspection CLI commands."""

from __future__ import annotations

import typer

from android_ui_bridge.cli.client import DEFAULT_URL, BridgeClient
from android_ui_bridge.cli.utils import handle_action_response, handle_screen_response

app = typer.Typer(help="UI inspection commands")


@app.command("screen")
def ui_screen(
    labelled: bool = typer.Option(False, "--labelled", help="Only nodes with text or desc"),
    url: str = typer.Option(DEFAULT_URL, "--url", help="Bridge base URL"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Show the current UI hierarchy."""
    client = BridgeClient(url)
    resp = client.request("GET", "/screen")
    client.close()
    handle_screen_response(resp, json_output=json_output, labelled_only=labelled)


@app.command("click")
def ui_click(
    text: str = typer.Argument(..., help="Exact text or content description"),
    url: str = typer.Option(DEFAULT_URL, "--url", help="Bridge base URL"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Click the first element labelled TEXT."""
    client = BridgeClient(url)
    resp = client.request("POST", "/click", params={"text": text})
    client.close()
    handle_action_response(resp, json_output=json_output)
