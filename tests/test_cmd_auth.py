"""CLI tests for auth command group."""
import json
from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from mpesa_sdk.commands.auth_cmd import app
from mpesa_sdk.models.auth import TokenResponse, TokenStatus
from mpesa_sdk.utils.errors import AuthenticationError

runner = CliRunner()


def _patched(fake_config, auth):
    return (
        patch("mpesa_sdk.commands.auth_cmd.get_config", return_value=fake_config),
        patch("mpesa_sdk.commands.auth_cmd.AuthManager", return_value=auth),
    )


# ── login ────────────────────────────────────────────────────────────

def test_login_success(fake_config):
    auth = MagicMock()
    auth.get_access_token.return_value = TokenResponse(access_token="tok-abc", expires_in=3599)
    auth.get_status.return_value = TokenStatus(
        has_token=True, is_expired=False,
        expires_at=datetime.now() + timedelta(hours=1),
        seconds_remaining=3600,
    )

    p_config, p_auth = _patched(fake_config, auth)
    with p_config, p_auth:
        result = runner.invoke(app, ["login", "--output", "json"])
    assert result.exit_code == 0
    assert '"status": "authenticated"' in result.stdout
    assert '"environment": "sandbox"' in result.stdout
    assert "access_token" not in result.stdout
    auth.get_access_token.assert_called_once()
    auth.close.assert_called_once()


def test_login_show_token(fake_config):
    auth = MagicMock()
    auth.get_access_token.return_value = TokenResponse(access_token="tok-abc")
    auth.get_status.return_value = TokenStatus(has_token=True, is_expired=False)

    p_config, p_auth = _patched(fake_config, auth)
    with p_config, p_auth:
        result = runner.invoke(app, ["login", "--show-token", "--output", "json"])
    assert result.exit_code == 0
    assert '"access_token": "tok-abc"' in result.stdout


def test_login_failure(fake_config):
    auth = MagicMock()
    auth.get_access_token.side_effect = AuthenticationError("Failed to get access token: HTTP 400", status_code=400)

    p_config, p_auth = _patched(fake_config, auth)
    with p_config, p_auth:
        result = runner.invoke(app, ["login", "--output", "json"])
    assert result.exit_code == 1
    assert '"AUTH_ERROR"' in result.stdout
    auth.close.assert_called_once()


def test_login_missing_config():
    with patch(
        "mpesa_sdk.commands.auth_cmd.get_config",
        side_effect=ValueError("Missing required environment variables: MPESA_CONSUMER_KEY"),
    ):
        result = runner.invoke(app, ["login"])
    assert result.exit_code == 1
    assert "CONFIG_ERROR" in result.stdout


# ── status ───────────────────────────────────────────────────────────

def test_status(fake_config):
    auth = MagicMock()
    auth.get_status.return_value = TokenStatus(has_token=False, is_expired=True)

    p_config, p_auth = _patched(fake_config, auth)
    with p_config, p_auth:
        result = runner.invoke(app, ["status", "--output", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["has_token"] is False
    assert data["expires_at"] == "N/A"
