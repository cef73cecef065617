"""CLI commands for account balance queries."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from mpesa_sdk.config import get_config
from mpesa_sdk.models.account import AccountBalanceQueryConfig
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="account", help="Query the short code's account balance.")


@app.command("balance")
def balance(
    initiator: Annotated[str, typer.Option("--initiator", help="API initiator username")] = ...,
    security_credential: Annotated[str, typer.Option("--security-credential", envvar="MPESA_SECURITY_CREDENTIAL", help="Encrypted initiator password")] = ...,
    party_a: Annotated[int | None, typer.Option("--party-a", help="Short code to query (default: MPESA_SHORTCODE)")] = None,
    remarks: Annotated[str, typer.Option("--remarks")] = "Balance query",
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Request the account balance. Figures are delivered to the balance-result callback."""
    mpesa = None
    try:
        config = get_config()
        query = AccountBalanceQueryConfig(
            party_a=party_a if party_a is not None else int(config.settings.short_code),
            remarks=remarks,
            initiator=initiator,
            security_credential=security_credential,
            queue_timeout_url=config.callback_url("/api/mpesa/callbacks/balance-timeout"),
            result_url=config.callback_url("/api/mpesa/callbacks/balance-result"),
        )
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.get_account_balance(query)
        console.print("[dim]The balance will be posted to the result URL.[/dim]")
        print_output(result, output, title="Balance Query Submitted")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
