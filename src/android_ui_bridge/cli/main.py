"""CLI entry point using Typer."""

from __future__ import annotations

import typer

from android_ui_bridge.cli.commands import action, ui
from android_ui_bridge.cli.commands.serve import serve

app = typer.Typer(
    name="android-ui-bridge",
    help="Live Android UI hierarchy and input over a local HTTP API",
    no_args_is_help=True,
)


@app.command()
def version() -> None:
    """Show version information."""
    from android_ui_bridge import __version__

    typer.echo(f"android-ui-bridge v{__version__}")


app.command("serve")(serve)
app.add_typer(ui.app, name="ui")
app.add_typer(action.app, name="action")


if __name__ == "__main__":
    app()
