"""CLI commands for dynamic QR codes."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from mpesa_sdk.config import get_config
from mpesa_sdk.models.qrcode import DynamicQRCodeQuery, DynamicQRCodeResponse
from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.utils.errors import handle_error
from mpesa_sdk.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="qr", help="Generate dynamic M-Pesa QR codes.")


@app.command("generate")
def generate(
    merchant_name: Annotated[str, typer.Option("--merchant-name", "-m")] = ...,
    ref_no: Annotated[str, typer.Option("--ref", help="Transaction reference")] = ...,
    amount: Annotated[int, typer.Option("--amount", "-a")] = ...,
    trx_code: Annotated[str, typer.Option("--trx-code", help="BG, WA, PB, SM or SB")] = "BG",
    cpi: Annotated[str, typer.Option("--cpi", help="Credit party identifier (till, paybill, agent or MSISDN)")] = ...,
    size: Annotated[str, typer.Option("--size", help="Image size in pixels")] = "300",
    save: Annotated[Path | None, typer.Option("--save", help="Write the QR image to this PNG file")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Generate a QR code customers can scan to pay."""
    mpesa = None
    try:
        query = DynamicQRCodeQuery(
            merchant_name=merchant_name,
            ref_no=ref_no,
            amount=amount,
            trx_code=trx_code.upper(),
            cpi=cpi,
            size=size,
        )
        mpesa = Mpesa(get_config(), verbose=verbose)
        result = mpesa.generate_dynamic_qr_code(query)

        if save is not None:
            qr = DynamicQRCodeResponse.model_validate(result)
            save.write_bytes(qr.image_bytes())
            console.print(f"[green]QR code saved to {save}[/green]")
            result = {k: v for k, v in result.items() if k != "QRCode"}
        print_output(result, output, title="QR Code")
    except (RuntimeError, ValueError, OSError) as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if mpesa is not None:
            mpesa.close()
