"""CLI commands for access token management."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from mpesa_sdk.auth import AuthManager
from mpesa_sdk.config import get_config
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Manage access tokens.")


@app.command()
def login(
    show_token: Annotated[bool, typer.Option("--show-token", help="Include the raw access token in the output")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Fetch an access token with the configured consumer key and secret."""
    auth = None
    try:
        config = get_config()
        auth = AuthManager(config)
        console.print(
            f"Authenticating against [bold]{config.settings.environment.value}[/bold]...",
            style="yellow",
        )
        token = auth.get_access_token()
        status = auth.get_status()
        result = {
            "status": "authenticated",
            "environment": config.settings.environment.value,
            "expires_in": token.expires_in,
            "expires_at": str(status.expires_at),
        }
        if show_token:
            result["access_token"] = token.access_token
        print_output(result, output, title="Authentication")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if auth is not None:
            auth.close()


@app.command()
def status(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show the current token status for this process."""
    try:
        config = get_config()
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)

    auth = AuthManager(config)
    token_status = auth.get_status()
    result = {
        "has_token": token_status.has_token,
        "is_expired": token_status.is_expired,
        "expires_at": str(token_status.expires_at) if token_status.expires_at else "N/A",
        "seconds_remaining": token_status.seconds_remaining or 0,
    }
    print_output(result, output, title="Token Status")
    auth.close()
