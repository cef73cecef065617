"""CLI tests for stk and c2b command groups."""
import json
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from mpesa_sdk.commands.c2b_cmd import app as c2b_app
from mpesa_sdk.commands.stk_cmd import app as stk_app
from mpesa_sdk.utils.errors import ApiError

runner = CliRunner()


def _mpesa(**results):
    mpesa = MagicMock()
    for name, value in results.items():
        getattr(mpesa, name).return_value = value
    return mpesa


# ── stk push ─────────────────────────────────────────────────────────

def test_push(fake_config):
    mpesa = _mpesa(send_stk_push={"CheckoutRequestID": "ws_CO_1", "ResponseCode": "0"})

    with patch("mpesa_sdk.commands.stk_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.stk_cmd.Mpesa", return_value=mpesa):
        result = runner.invoke(stk_app, [
            "push", "--phone", "254708374149", "--amount", "10", "--reference", "INV-1", "--output", "json",
        ])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["CheckoutRequestID"] == "ws_CO_1"

    query = mpesa.send_stk_push.call_args[0][0]
    assert query.amount == 10
    assert query.sender == "254708374149"
    assert query.callback_url == "https://example.test/api/mpesa/callbacks/stk"
    mpesa.close.assert_called_once()


def test_push_dry_run(fake_config):
    with patch("mpesa_sdk.commands.stk_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.stk_cmd.Mpesa") as mpesa_cls:
        result = runner.invoke(stk_app, [
            "push", "--phone", "254708374149", "--amount", "10", "--reference", "INV-1",
            "--dry-run", "--output", "json",
        ])
    assert result.exit_code == 0
    assert '"AccountReference": "INV-1"' in result.stdout
    assert '"BusinessShortCode": "174379"' in result.stdout
    assert '"PartyB": "174379"' in result.stdout
    assert '"TransactionType": "CustomerPayBillOnline"' in result.stdout
    assert '"Password": "***"' in result.stdout
    assert '"Timestamp"' in result.stdout
    mpesa_cls.assert_not_called()


def test_push_rejects_zero_amount(fake_config):
    with patch("mpesa_sdk.commands.stk_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.stk_cmd.Mpesa") as mpesa_cls:
        result = runner.invoke(stk_app, [
            "push", "--phone", "254708374149", "--amount", "0", "--reference", "INV-1",
        ])
    assert result.exit_code == 1
    mpesa_cls.assert_not_called()


def test_push_api_error(fake_config):
    mpesa = MagicMock()
    mpesa.send_stk_push.side_effect = ApiError("API error (HTTP 500): boom", status_code=500)

    with patch("mpesa_sdk.commands.stk_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.stk_cmd.Mpesa", return_value=mpesa):
        result = runner.invoke(stk_app, [
            "push", "--phone", "254708374149", "--amount", "10", "--reference", "INV-1",
        ])
    assert result.exit_code == 1
    assert '"status": 500' in result.stdout
    mpesa.close.assert_called_once()


def test_query(fake_config):
    mpesa = _mpesa(query_stk_status={"ResultCode": "0", "ResultDesc": "ok"})

    with patch("mpesa_sdk.commands.stk_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.stk_cmd.Mpesa", return_value=mpesa):
        result = runner.invoke(stk_app, ["query", "ws_CO_1", "--output", "json"])
    assert result.exit_code == 0
    mpesa.query_stk_status.assert_called_once_with("ws_CO_1")


# ── c2b ──────────────────────────────────────────────────────────────

def test_register_urls_defaults(fake_config):
    mpesa = _mpesa(register_urls={"ResponseCode": "0"})

    with patch("mpesa_sdk.commands.c2b_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.c2b_cmd.Mpesa", return_value=mpesa):
        result = runner.invoke(c2b_app, ["register-urls", "--output", "json"])
    assert result.exit_code == 0

    request = mpesa.register_urls.call_args[0][0]
    assert request.short_code == "174379"
    assert request.confirmation_url == "https://example.test/api/mpesa/callbacks/c2b-confirmation"
    assert request.validation_url == "https://example.test/api/mpesa/callbacks/c2b-validation"
    assert mpesa.register_urls.call_args[1]["version"] == "v2"


def test_simulate_buy_goods(fake_config):
    mpesa = _mpesa(simulate_c2b={"ResponseCode": "0"})

    with patch("mpesa_sdk.commands.c2b_cmd.get_config", return_value=fake_config), \
         patch("mpesa_sdk.commands.c2b_cmd.Mpesa", return_value=mpesa):
        result = runner.invoke(c2b_app, [
            "simulate", "--phone", "254708374149", "--amount", "5", "--buy-goods", "--output", "json",
        ])
    assert result.exit_code == 0
    assert mpesa.simulate_c2b.call_args[0][0].command_id == "CustomerBuyGoodsOnline"
