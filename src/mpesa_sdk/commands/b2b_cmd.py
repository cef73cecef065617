"""CLI commands for business-to-business payments and tax remittance."""

from __future__ import annotations

from typing import Annotated

import typer

from mpesa_sdk.config import get_config
from mpesa_sdk.models.b2b import B2BPaymentConfig, TaxRemittanceConfig
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

app = typer.Typer(name="b2b", help="Pay other businesses and remit tax.")

Initiator = Annotated[str, typer.Option("--initiator", help="API initiator username")]
SecurityCredential = Annotated[
    str,
    typer.Option("--security-credential", envvar="MPESA_SECURITY_CREDENTIAL", help="Encrypted initiator password"),
]


@app.command("pay")
def pay(
    party_b: Annotated[str, typer.Option("--to", help="Receiving paybill or till number")] = ...,
    amount: Annotated[str, typer.Option("--amount", "-a")] = ...,
    account_reference: Annotated[str, typer.Option("--account-reference", help="Account number at the receiver")] = ...,
    initiator: Initiator = ...,
    security_credential: SecurityCredential = ...,
    buy_goods: Annotated[bool, typer.Option("--buy-goods", help="Pay a till (BusinessBuyGoods) instead of a paybill")] = False,
    requester: Annotated[str | None, typer.Option("--requester", help="Customer MSISDN paying through the business")] = None,
    remarks: Annotated[str, typer.Option("--remarks")] = "B2B payment",
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Pay another business from the configured short code."""
    mpesa = None
    try:
        config = get_config()
        request = B2BPaymentConfig(
            initiator=initiator,
            security_credential=security_credential,
            command_id="BusinessBuyGoods" if buy_goods else "BusinessPayBill",
            amount=amount,
            party_a=config.settings.short_code,
            party_b=party_b,
            account_reference=account_reference,
            requester=requester,
            remarks=remarks,
            queue_timeout_url=config.callback_url("/api/mpesa/callbacks/b2b-timeout"),
            result_url=config.callback_url("/api/mpesa/callbacks/b2b-result"),
        )
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.b2b_payment(request)
        print_output(result, output, title="B2B Payment Submitted")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()


@app.command("remit-tax")
def remit_tax(
    amount: Annotated[str, typer.Option("--amount", "-a")] = ...,
    prn: Annotated[str, typer.Option("--prn", help="KRA payment registration number")] = ...,
    initiator: Initiator = ...,
    security_credential: SecurityCredential = ...,
    remarks: Annotated[str, typer.Option("--remarks")] = "Tax remittance",
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Remit tax to KRA from the configured short code."""
    mpesa = None
    try:
        config = get_config()
        request = TaxRemittanceConfig(
            initiator=initiator,
            security_credential=security_credential,
            amount=amount,
            party_a=config.settings.short_code,
            account_reference=prn,
            remarks=remarks,
            queue_timeout_url=config.callback_url("/api/mpesa/callbacks/b2b-timeout"),
            result_url=config.callback_url("/api/mpesa/callbacks/b2b-result"),
        )
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.remit_tax(request)
        print_output(result, output, title="Tax Remittance Submitted")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
