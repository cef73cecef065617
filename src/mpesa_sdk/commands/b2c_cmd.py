"""CLI commands for business-to-customer payouts."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from mpesa_sdk.config import get_config
from mpesa_sdk.models.b2c import B2CTransactionConfig
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="b2c", help="Pay out to customer wallets.")


@app.command("pay")
def pay(
    phone: Annotated[str, typer.Option("--phone", "-p", help="Receiving MSISDN (2547XXXXXXXX)")] = ...,
    amount: Annotated[str, typer.Option("--amount", "-a")] = ...,
    initiator_name: Annotated[str, typer.Option("--initiator", help="API initiator username")] = ...,
    security_credential: Annotated[str, typer.Option("--security-credential", envvar="MPESA_SECURITY_CREDENTIAL", help="Encrypted initiator password")] = ...,
    command_id: Annotated[str, typer.Option("--command-id", help="SalaryPayment, BusinessPayment or PromotionPayment")] = "BusinessPayment",
    remarks: Annotated[str, typer.Option("--remarks")] = "Payout",
    occasion: Annotated[str, typer.Option("--occasion")] = "",
    originator_conversation_id: Annotated[str | None, typer.Option("--originator-conversation-id", help="Required for --api-version v3")] = None,
    api_version: Annotated[str, typer.Option("--api-version", help="paymentrequest version (v1 or v3)")] = "v1",
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be sent without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Send money from the configured short code to a customer."""
    mpesa = None
    try:
        config = get_config()
        request = B2CTransactionConfig(
            originator_conversation_id=originator_conversation_id,
            initiator_name=initiator_name,
            security_credential=security_credential,
            command_id=command_id,
            amount=amount,
            party_a=config.settings.short_code,
            party_b=phone.replace(" ", ""),
            remarks=remarks,
            queue_timeout_url=config.callback_url("/api/mpesa/callbacks/b2c-timeout"),
            result_url=config.callback_url("/api/mpesa/callbacks/b2c-result"),
            occasion=occasion,
        )
        if dry_run:
            console.print("[yellow]DRY RUN:[/yellow] Would send B2C payment:")
            body = request.model_dump(by_alias=True, exclude_none=True)
            body["SecurityCredential"] = "***"
            print_output(body, output, title="B2C Payment [DRY RUN]")
            return
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.b2c(request, version=api_version)
        print_output(result, output, title="B2C Payment Submitted")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
