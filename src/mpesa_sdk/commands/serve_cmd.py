"""CLI command for running the example web server."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console

from mpesa_sdk.config import get_config
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.server.app import create_app
from mpesa_sdk.utils.errors import handle_error

console = Console(stderr=True)
app = typer.Typer(name="serve", help="Run the example HTTP server.")


@app.callback(invoke_without_command=True)
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", envvar="PORT", help="Port to listen on")] = 3000,
    debug: Annotated[bool, typer.Option("--debug", help="Enable Flask debug mode")] = False,
) -> None:
    """Serve the SDK routes and callback endpoints."""
    try:
        config = get_config()
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    mpesa = Mpesa(config)
    server = create_app(mpesa)

    console.print(f"Server running on [bold]http://{host}:{port}[/bold]")
    console.print(f"M-Pesa API endpoints at http://{host}:{port}/api/mpesa")
    console.print(f"Callback endpoints at {config.callback_url('/api/mpesa/callbacks')}")
    console.print(f"Environment: [bold]{config.settings.environment.value}[/bold]")
    try:
        server.run(host=host, port=port, debug=debug, use_reloader=False)
    finally:
        mpesa.close()
