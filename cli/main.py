"""Event Swipe CLI: process entry-point for the API server.

Usage:
    python cli/main.py --help

Commands:
    serve   → start the HTTP server (port from $PORT, default 3000)
    routes  → print the registered route table
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from backend.config import configure_port, settings

app = typer.Typer(
    name="eventswipe",
    help="Event Swipe API CLI.",
    no_args_is_help=True,
)


@app.command("serve")
def serve(
    port: Optional[str] = typer.Option(
        None, help="Port to listen on (invalid values fall back to 3000)."
    ),
    host: Optional[str] = typer.Option(None, help="Bind address."),
) -> None:
    """Start the HTTP server and block until it is stopped."""
    from backend.api.app import create_app
    from backend.server import listen

    bound_port = configure_port(port) if port is not None else settings.port
    bound_host = host or settings.host
    typer.echo(f"[serve] Starting on {bound_host}:{bound_port} …")
    listen(create_app(), port=bound_port, host=bound_host)


@app.command("routes")
def routes() -> None:
    """List every (method, path) pair the application serves."""
    from backend.api.app import api_routes

    for route in api_routes():
        for method in sorted(route.methods):
            typer.echo(f"  {method:<7} {route.path}  → {route.name}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
