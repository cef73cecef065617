"""M-Pesa CLI — entry point.

Scriptable CLI for the Safaricom Daraja API.
"""

from __future__ import annotations

import logging

import typer

from mpesa_sdk.commands.auth_cmd import app as auth_app
from mpesa_sdk.commands.stk_cmd import app as stk_app
from mpesa_sdk.commands.c2b_cmd import app as c2b_app
from mpesa_sdk.commands.b2c_cmd import app as b2c_app
from mpesa_sdk.commands.b2b_cmd import app as b2b_app
from mpesa_sdk.commands.account_cmd import app as account_app
from mpesa_sdk.commands.qr_cmd import app as qr_app
from mpesa_sdk.commands.transactions_cmd import app as transactions_app
from mpesa_sdk.commands.serve_cmd import app as serve_app

app = typer.Typer(
    name="mpesa",
    help="CLI tool for Safaricom's M-Pesa Daraja API.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(stk_app, name="stk")
app.add_typer(c2b_app, name="c2b")
app.add_typer(b2c_app, name="b2c")
app.add_typer(b2b_app, name="b2b")
app.add_typer(account_app, name="account")
app.add_typer(qr_app, name="qr")
app.add_typer(transactions_app, name="transactions")
app.add_typer(serve_app, name="serve")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """M-Pesa CLI — STK push, payouts, balances, QR codes and callbacks."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
