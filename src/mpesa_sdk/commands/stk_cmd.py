"""CLI commands for Lipa Na M-Pesa Online (STK push)."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from mpesa_sdk.config import get_config
from mpesa_sdk.models.stk import STKPushQuery
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.services.stk import build_push_request
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="stk", help="Prompt customers to pay via STK push.")


@app.command("push")
def push(
    phone: Annotated[str, typer.Option("--phone", "-p", help="Paying MSISDN (2547XXXXXXXX)")] = ...,
    amount: Annotated[int, typer.Option("--amount", "-a", help="Whole-shilling amount")] = ...,
    reference: Annotated[str, typer.Option("--reference", "-r", help="Account reference shown to the customer")] = ...,
    description: Annotated[str, typer.Option("--description", "-d", help="Transaction description")] = "Payment",
    callback_url: Annotated[str, typer.Option("--callback-url", help="Result URL (default: <callback base>/api/mpesa/callbacks/stk)")] = "",
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be sent without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Send an STK push to a customer's phone."""
    mpesa = None
    try:
        config = get_config()
        query = STKPushQuery(
            amount=amount,
            sender=phone.replace(" ", ""),
            reference=reference,
            callback_url=config.callback_url(callback_url or "/api/mpesa/callbacks/stk"),
            description=description,
        )
        if dry_run:
            console.print("[yellow]DRY RUN:[/yellow] Would send STK push:")
            body = build_push_request(config.settings, query).model_dump(by_alias=True)
            body["Password"] = "***"
            print_output(body, output, title="STK Push [DRY RUN]")
            return
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.send_stk_push(query)
        print_output(result, output, title="STK Push Sent")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()


@app.command("query")
def query_status(
    checkout_request_id: Annotated[str, typer.Argument(help="CheckoutRequestID returned by the push")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Check the result of an earlier STK push."""
    mpesa = None
    try:
        mpesa = Mpesa(get_config(), verbose=verbose)
        result = mpesa.query_stk_status(checkout_request_id)
        print_output(result, output, title="STK Push Status")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
