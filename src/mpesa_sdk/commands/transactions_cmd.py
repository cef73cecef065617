"""CLI commands for transaction status lookups and reversals."""

from __future__ import annotations

from typing import Annotated

import typer

from mpesa_sdk.config import get_config
from mpesa_sdk.models.transactions import ReversalQuery, TransactionStatusQuery
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

app = typer.Typer(name="transactions", help="Look up and reverse transactions.")


@app.command("status")
def status(
    transaction_id: Annotated[str, typer.Argument(help="M-Pesa receipt number, e.g. OEI2AK4Q16")],
    initiator: Annotated[str, typer.Option("--initiator", help="API initiator username")] = ...,
    security_credential: Annotated[str, typer.Option("--security-credential", envvar="MPESA_SECURITY_CREDENTIAL", help="Encrypted initiator password")] = ...,
    party_a: Annotated[str | None, typer.Option("--party-a", help="Short code or MSISDN (default: MPESA_SHORTCODE)")] = None,
    identifier_type: Annotated[str, typer.Option("--identifier-type", help="1 MSISDN, 2 till, 4 short code")] = "4",
    remarks: Annotated[str, typer.Option("--remarks")] = "Status check",
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Query a transaction's status. The result goes to the status-result callback."""
    mpesa = None
    try:
        config = get_config()
        query = TransactionStatusQuery(
            initiator=initiator,
            security_credential=security_credential,
            transaction_id=transaction_id,
            party_a=party_a or config.settings.short_code,
            identifier_type=identifier_type,
            remarks=remarks,
            queue_timeout_url=config.callback_url("/api/mpesa/callbacks/status-timeout"),
            result_url=config.callback_url("/api/mpesa/callbacks/status-result"),
        )
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.get_transaction_status(query)
        print_output(result, output, title="Status Query Submitted")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()


@app.command("reverse")
def reverse(
    transaction_id: Annotated[str, typer.Argument(help="M-Pesa receipt number to reverse")],
    amount: Annotated[str, typer.Option("--amount", "-a")] = ...,
    initiator: Annotated[str, typer.Option("--initiator", help="API initiator username")] = ...,
    security_credential: Annotated[str, typer.Option("--security-credential", envvar="MPESA_SECURITY_CREDENTIAL", help="Encrypted initiator password")] = ...,
    receiver_party: Annotated[str | None, typer.Option("--receiver-party", help="Short code that received the payment (default: MPESA_SHORTCODE)")] = None,
    remarks: Annotated[str, typer.Option("--remarks")] = "Reversal",
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Reverse a customer payment."""
    mpesa = None
    try:
        config = get_config()
        query = ReversalQuery(
            initiator=initiator,
            security_credential=security_credential,
            transaction_id=transaction_id,
            amount=amount,
            receiver_party=receiver_party or config.settings.short_code,
            remarks=remarks,
            queue_timeout_url=config.callback_url("/api/mpesa/callbacks/reversal-timeout"),
            result_url=config.callback_url("/api/mpesa/callbacks/reversal-result"),
        )
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.reverse_transaction(query)
        print_output(result, output, title="Reversal Submitted")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
