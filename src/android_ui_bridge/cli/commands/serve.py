"""Serve command - runs the bridge HTTP server."""

from __future__ import annotations

import os

import typer
import uvicorn

from android_ui_bridge.config import load_config
from android_ui_bridge.errors import BridgeError
from android_ui_bridge.logging_setup import configure_logging


def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default 127.0.0.1)"),
    port: int | None = typer.Option(None, "--port", help="Port (default 7333)"),
    serial: str | None = typer.Option(None, "--serial", "-s", help="adb device serial"),
    privileged: str | None = typer.Option(None, "--privileged", help="adb, local or off"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines"),
) -> None:
    """Run the bridge server in the foreground."""
    overrides = {
        "UI_BRIDGE_HOST": host,
        "UI_BRIDGE_PORT": str(port) if port is not None else None,
        "UI_BRIDGE_SERIAL": serial,
        "UI_BRIDGE_PRIVILEGED": privileged,
        "UI_BRIDGE_LOG_LEVEL": log_level,
    }
    # The app builds its own config in the lifespan hook, so overrides go through env.
    for name, value in overrides.items():
        if value is not None:
            os.environ[name] = value

    try:
        config = load_config()
    except BridgeError as e:
        typer.echo(str(e))
        if e.remediation:
            typer.echo(f"Hint: {e.remediation}")
        raise typer.Exit(code=2) from e

    configure_logging(config.log_level, json_output=json_logs)
    if not config.is_loopback:
        typer.echo(
            f"Warning: binding to {config.host}; the API is unauthenticated. "
            "Add authentication in front of it."
        )
    uvicorn.run(
        "android_ui_bridge.daemon.server:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level,
    )
