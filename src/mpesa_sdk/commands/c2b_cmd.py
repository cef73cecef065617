"""CLI commands for customer-to-business URL registration and simulation."""

from __future__ import annotations

from typing import Annotated

import typer

from mpesa_sdk.config import get_config
from mpesa_sdk.models.c2b import C2BSimulateRequest, UrlRegisterConfig
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

app = typer.Typer(name="c2b", help="Register C2B URLs and simulate customer payments.")


@app.command("register-urls")
def register_urls(
    confirmation_url: Annotated[str, typer.Option("--confirmation-url", help="Absolute URL or path under the callback base")] = "/api/mpesa/callbacks/c2b-confirmation",
    validation_url: Annotated[str, typer.Option("--validation-url", help="Absolute URL or path under the callback base")] = "/api/mpesa/callbacks/c2b-validation",
    short_code: Annotated[str | None, typer.Option("--short-code", "-s", help="Defaults to MPESA_SHORTCODE")] = None,
    response_type: Annotated[str, typer.Option("--response-type", help="Completed or Cancelled")] = "Completed",
    api_version: Annotated[str, typer.Option("--api-version", help="registerurl version (v1 or v2)")] = "v2",
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Register the confirmation and validation URLs for a short code."""
    mpesa = None
    try:
        config = get_config()
        request = UrlRegisterConfig(
            short_code=short_code or config.settings.short_code,
            response_type=response_type.capitalize(),
            confirmation_url=config.callback_url(confirmation_url),
            validation_url=config.callback_url(validation_url),
        )
        mpesa = Mpesa(config, verbose=verbose)
        result = mpesa.register_urls(request, version=api_version)
        print_output(result, output, title="URLs Registered")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()


@app.command("simulate")
def simulate(
    phone: Annotated[str, typer.Option("--phone", "-p", help="Paying MSISDN (2547XXXXXXXX)")] = ...,
    amount: Annotated[int, typer.Option("--amount", "-a")] = ...,
    bill_ref: Annotated[str, typer.Option("--bill-ref", help="Account number for paybill payments")] = "",
    buy_goods: Annotated[bool, typer.Option("--buy-goods", help="Simulate a till payment instead of paybill")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Simulate a customer payment (sandbox only)."""
    mpesa = None
    try:
        request = C2BSimulateRequest(
            command_id="CustomerBuyGoodsOnline" if buy_goods else "CustomerPayBillOnline",
            amount=amount,
            msisdn=phone.replace(" ", ""),
            bill_ref_number=bill_ref,
        )
        mpesa = Mpesa(get_config(), verbose=verbose)
        result = mpesa.simulate_c2b(request)
        print_output(result, output, title="C2B Simulation")
    except (RuntimeError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
